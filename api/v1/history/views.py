"""
Audit history API view.
"""

from asgiref.sync import async_to_sync
from drf_spectacular.utils import extend_schema
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from api.v1.history.serializers import AuditPageSerializer, HistoryQuerySerializer
from audit.application.handlers.search_history_handler import SearchHistoryHandler
from audit.application.queries.search_history import SearchHistoryQuery
from audit.infrastructure.repositories.django_audit_log_repository import DjangoAuditLogRepository
from core.instrumentation import get_tracer

_audit_repo = DjangoAuditLogRepository()

tracer = get_tracer(__name__)


class HistoryView(APIView):
    """Search the audit trail."""

    @extend_schema(
        operation_id="search_history",
        summary="Search History",
        description=(
            "Audit entries newest first, filtered by entity type, action, entity id, "
            "date range and free text over the actor and the details."
        ),
        tags=["History"],
        parameters=[HistoryQuerySerializer],
        responses={200: AuditPageSerializer},
    )
    def get(self, request: Request) -> Response:
        return async_to_sync(self._handle_search)(request)

    async def _handle_search(self, request: Request) -> Response:
        with tracer.start_as_current_span("search_history") as span:
            serializer = HistoryQuerySerializer(data=request.query_params)
            serializer.is_valid(raise_exception=True)
            query = SearchHistoryQuery(**serializer.validated_data)
            page = await SearchHistoryHandler(_audit_repo).handle(query)
            span.set_attribute("history.total", page.total)
            return Response(AuditPageSerializer(page).data)
