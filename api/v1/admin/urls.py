"""
URL configuration for user administration.
"""

from django.urls import path

from api.v1.admin import views

app_name = "admin_users"

urlpatterns = [
    path("admin/users", views.UserListView.as_view(), name="user-list"),
    path("admin/users/<int:user_id>", views.UserDetailView.as_view(), name="user-detail"),
    path(
        "admin/users/<int:user_id>/password",
        views.UserPasswordView.as_view(),
        name="user-password",
    ),
    path(
        "admin/users/<int:user_id>/toggle-active",
        views.UserToggleActiveView.as_view(),
        name="user-toggle-active",
    ),
]
