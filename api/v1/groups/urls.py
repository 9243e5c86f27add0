"""
URL configuration for license group endpoints.
"""

from django.urls import path

from api.v1.groups import views

app_name = "groups"

urlpatterns = [
    path("groups", views.GroupListView.as_view(), name="group-list"),
    path("groups/<uuid:group_id>", views.GroupDetailView.as_view(), name="group-detail"),
    path(
        "groups/<uuid:group_id>/members",
        views.GroupMembersView.as_view(),
        name="group-members",
    ),
]
