"""
URL configuration for employee endpoints.
"""

from django.urls import path

from api.v1.employees import views

app_name = "employees"

urlpatterns = [
    path("employees", views.EmployeeListView.as_view(), name="employee-list"),
    path(
        "employees/<uuid:employee_id>",
        views.EmployeeDetailView.as_view(),
        name="employee-detail",
    ),
    path(
        "employees/<uuid:employee_id>/assign",
        views.EmployeeAssignView.as_view(),
        name="employee-assign",
    ),
    path(
        "employees/<uuid:employee_id>/unassign",
        views.EmployeeUnassignView.as_view(),
        name="employee-unassign",
    ),
]
