"""
URL configuration for license and seat endpoints.
"""

from django.urls import path

from api.v1.licenses import views

app_name = "licenses"

urlpatterns = [
    path("licenses", views.LicenseListView.as_view(), name="license-list"),
    path("licenses/<uuid:license_id>", views.LicenseDetailView.as_view(), name="license-detail"),
    path("seats/check-key", views.SeatKeyCheckView.as_view(), name="seat-check-key"),
    path("seats/<int:seat_id>", views.SeatDetailView.as_view(), name="seat-detail"),
]
