"""
URL configuration for the dashboard endpoint.
"""

from django.urls import path

from api.v1.dashboard import views

app_name = "dashboard"

urlpatterns = [
    path("dashboard", views.DashboardView.as_view(), name="dashboard"),
]
