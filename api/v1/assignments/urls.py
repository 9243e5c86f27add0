"""
URL configuration for assignment endpoints.
"""

from django.urls import path

from api.v1.assignments import views

app_name = "assignments"

urlpatterns = [
    path("assignments", views.AssignmentListView.as_view(), name="assignment-list"),
    path(
        "assignments/<uuid:assignment_id>",
        views.AssignmentDetailView.as_view(),
        name="assignment-detail",
    ),
]
