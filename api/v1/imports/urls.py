"""
URL configuration for CSV imports.
"""

from django.urls import path

from api.v1.imports import views

app_name = "imports"

urlpatterns = [
    path("imports", views.ImportView.as_view(), name="import"),
    path(
        "imports/templates/<str:import_type>",
        views.ImportTemplateView.as_view(),
        name="template",
    ),
]
