"""
URL configuration for the history endpoint.
"""

from django.urls import path

from api.v1.history import views

app_name = "history"

urlpatterns = [
    path("history", views.HistoryView.as_view(), name="history"),
]
