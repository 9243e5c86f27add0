"""
Assignment API views.
"""

import uuid

from asgiref.sync import async_to_sync
from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from api.v1.assignments.serializers import AssignmentSerializer
from api.v1.context import actor
from assignments.application.commands.assignment_commands import (
    DeleteAssignmentCommand,
    ListAssignmentsQuery,
    ReturnAssignmentCommand,
)
from assignments.application.handlers.assignment_handlers import (
    DeleteAssignmentHandler,
    ListAssignmentsHandler,
    ReturnAssignmentHandler,
)
from assignments.infrastructure.repositories.django_assignment_repository import (
    DjangoAssignmentRepository,
)
from audit.infrastructure.repositories.django_audit_log_repository import DjangoAuditLogRepository
from core.domain.exceptions import ValidationError
from core.instrumentation import get_tracer
from licenses.infrastructure.repositories.django_license_repository import DjangoLicenseRepository
from licenses.infrastructure.repositories.django_seat_repository import DjangoSeatRepository

_license_repo = DjangoLicenseRepository()
_seat_repo = DjangoSeatRepository()
_assignment_repo = DjangoAssignmentRepository()
_audit_repo = DjangoAuditLogRepository()

tracer = get_tracer(__name__)


def _uuid_param(request: Request, name: str):
    value = request.query_params.get(name)
    if not value:
        return None
    try:
        return uuid.UUID(value)
    except ValueError as exc:
        raise ValidationError(f"{name} must be a UUID", field=name) from exc


class AssignmentListView(APIView):
    """List assignments."""

    @extend_schema(
        operation_id="list_assignments",
        summary="List Assignments",
        tags=["Assignments"],
        parameters=[
            OpenApiParameter("license_id", uuid.UUID, required=False),
            OpenApiParameter("employee_id", uuid.UUID, required=False),
            OpenApiParameter("active", bool, required=False),
        ],
        responses={200: AssignmentSerializer(many=True)},
    )
    def get(self, request: Request) -> Response:
        return async_to_sync(self._handle_list)(request)

    async def _handle_list(self, request: Request) -> Response:
        with tracer.start_as_current_span("list_assignments") as span:
            query = ListAssignmentsQuery(
                license_id=_uuid_param(request, "license_id"),
                employee_id=_uuid_param(request, "employee_id"),
                active_only=request.query_params.get("active", "").lower() in ("1", "true"),
            )
            result = await ListAssignmentsHandler(_assignment_repo).handle(query)
            span.set_attribute("assignments.count", len(result))
            return Response(AssignmentSerializer(result, many=True).data)


class AssignmentDetailView(APIView):
    """Return or delete one assignment."""

    @extend_schema(
        operation_id="return_assignment",
        summary="Return Assignment",
        description="Mark the assignment returned today and free its seat.",
        tags=["Assignments"],
        request=None,
        responses={
            200: AssignmentSerializer,
            400: {"description": "Already returned"},
            404: {"description": "Assignment not found"},
        },
    )
    def put(self, request: Request, assignment_id: uuid.UUID) -> Response:
        return async_to_sync(self._handle_return)(request, assignment_id)

    async def _handle_return(self, request: Request, assignment_id: uuid.UUID) -> Response:
        with tracer.start_as_current_span("return_assignment") as span:
            span.set_attribute("assignment.id", str(assignment_id))
            handler = ReturnAssignmentHandler(
                _license_repo, _seat_repo, _assignment_repo, _audit_repo
            )
            assignment = await handler.handle(
                ReturnAssignmentCommand(assignment_id, actor=actor(request))
            )
            return Response(AssignmentSerializer(assignment).data)

    @extend_schema(
        operation_id="delete_assignment",
        summary="Delete Assignment",
        tags=["Assignments"],
        responses={204: None, 404: {"description": "Assignment not found"}},
    )
    def delete(self, request: Request, assignment_id: uuid.UUID) -> Response:
        return async_to_sync(self._handle_delete)(request, assignment_id)

    async def _handle_delete(self, request: Request, assignment_id: uuid.UUID) -> Response:
        with tracer.start_as_current_span("delete_assignment") as span:
            span.set_attribute("assignment.id", str(assignment_id))
            handler = DeleteAssignmentHandler(_assignment_repo, _audit_repo)
            await handler.handle(DeleteAssignmentCommand(assignment_id, actor=actor(request)))
            return Response(status=status.HTTP_204_NO_CONTENT)
