"""
Dashboard API view.
"""

from asgiref.sync import async_to_sync
from drf_spectacular.utils import extend_schema
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from core.instrumentation import get_tracer
from licenses.application.handlers.license_query_handlers import GetDashboardHandler
from licenses.application.queries.license_queries import GetDashboardQuery
from licenses.infrastructure.repositories.django_license_repository import DjangoLicenseRepository

_license_repo = DjangoLicenseRepository()

tracer = get_tracer(__name__)


class DashboardView(APIView):
    """Inventory summary: totals, expiries, cost trend and type distribution."""

    @extend_schema(
        operation_id="get_dashboard",
        summary="Dashboard Summary",
        tags=["Dashboard"],
        responses={200: {"type": "object"}},
    )
    def get(self, request: Request) -> Response:
        return async_to_sync(self._handle_get)(request)

    async def _handle_get(self, request: Request) -> Response:
        with tracer.start_as_current_span("get_dashboard"):
            summary = await GetDashboardHandler(_license_repo).handle(GetDashboardQuery())
            return Response(summary)
