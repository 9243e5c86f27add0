"""
CSV import API views.
"""

from asgiref.sync import async_to_sync
from django.http import HttpResponse
from drf_spectacular.utils import OpenApiResponse, extend_schema
from rest_framework import status
from rest_framework.parsers import FormParser, MultiPartParser
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from api.v1.context import actor
from api.v1.imports.serializers import ImportRequestSerializer, ImportResultSerializer
from assignments.infrastructure.repositories.django_assignment_repository import (
    DjangoAssignmentRepository,
)
from audit.infrastructure.repositories.django_audit_log_repository import DjangoAuditLogRepository
from core.instrumentation import get_tracer
from employees.infrastructure.repositories.django_employee_repository import (
    DjangoEmployeeRepository,
)
from groups.infrastructure.repositories.django_group_repository import DjangoGroupRepository
from imports.application.handlers.import_handlers import (
    GetTemplateHandler,
    ImportCsvCommand,
    ImportCsvHandler,
)
from imports.application.importers.base import ImportContext
from licenses.infrastructure.repositories.django_license_repository import DjangoLicenseRepository
from licenses.infrastructure.repositories.django_seat_repository import DjangoSeatRepository

_context = ImportContext(
    license_repository=DjangoLicenseRepository(),
    seat_repository=DjangoSeatRepository(),
    employee_repository=DjangoEmployeeRepository(),
    group_repository=DjangoGroupRepository(),
    assignment_repository=DjangoAssignmentRepository(),
    audit_repository=DjangoAuditLogRepository(),
)

tracer = get_tracer(__name__)


class ImportView(APIView):
    """Validate and import an uploaded CSV file, all rows or none."""

    parser_classes = [MultiPartParser, FormParser]

    @extend_schema(
        operation_id="import_csv",
        summary="Import CSV",
        description=(
            "Imports licenses, employees, groups, assignments or seats. Every row is "
            "validated first; any error rejects the whole file."
        ),
        tags=["Imports"],
        request={"multipart/form-data": ImportRequestSerializer},
        responses={
            200: ImportResultSerializer,
            400: OpenApiResponse(ImportResultSerializer, description="Rejected or invalid rows"),
        },
    )
    def post(self, request: Request) -> Response:
        return async_to_sync(self._handle_import)(request)

    async def _handle_import(self, request: Request) -> Response:
        with tracer.start_as_current_span("import_csv") as span:
            command = ImportCsvCommand(
                import_type=request.data.get("type"),
                upload=request.FILES.get("file"),
                actor=actor(request),
            )
            span.set_attribute("import.type", command.import_type or "")
            result = await ImportCsvHandler(_context).handle(command)
            span.set_attribute("import.success", result.success)
            return Response(
                result.to_dict(),
                status=status.HTTP_200_OK if result.success else status.HTTP_400_BAD_REQUEST,
            )


class ImportTemplateView(APIView):
    """Download the template CSV of an import type."""

    @extend_schema(
        operation_id="download_import_template",
        summary="Download Template",
        tags=["Imports"],
        responses={(200, "text/csv"): str, 400: {"description": "Unknown import type"}},
    )
    def get(self, request: Request, import_type: str) -> HttpResponse:
        content = async_to_sync(GetTemplateHandler().handle)(import_type)
        response = HttpResponse(content, content_type="text/csv; charset=utf-8")
        response["Content-Disposition"] = f'attachment; filename="{import_type.lower()}_template.csv"'
        return response
