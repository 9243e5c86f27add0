"""
License and seat API views.
"""

import uuid

from asgiref.sync import async_to_sync
from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from api.v1.context import actor
from api.v1.licenses.serializers import (
    LicenseDetailSerializer,
    LicenseRequestSerializer,
    LicenseSerializer,
    LicenseSummarySerializer,
    SeatKeyCheckSerializer,
    SeatKeyRequestSerializer,
    SeatSerializer,
)
from assignments.infrastructure.repositories.django_assignment_repository import (
    DjangoAssignmentRepository,
)
from audit.infrastructure.repositories.django_audit_log_repository import DjangoAuditLogRepository
from core.instrumentation import get_tracer
from licenses.application.commands.create_license import CreateLicenseCommand
from licenses.application.commands.delete_license import DeleteLicenseCommand
from licenses.application.commands.update_license import UpdateLicenseCommand
from licenses.application.commands.update_seat_key import UpdateSeatKeyCommand
from licenses.application.handlers.license_handlers import (
    CreateLicenseHandler,
    DeleteLicenseHandler,
    UpdateLicenseHandler,
)
from licenses.application.handlers.license_query_handlers import (
    GetLicenseHandler,
    ListLicensesHandler,
)
from licenses.application.handlers.seat_handlers import CheckSeatKeyHandler, UpdateSeatKeyHandler
from licenses.application.queries.license_queries import (
    CheckSeatKeyQuery,
    GetLicenseQuery,
    ListLicensesQuery,
)
from licenses.infrastructure.repositories.django_license_repository import DjangoLicenseRepository
from licenses.infrastructure.repositories.django_seat_repository import DjangoSeatRepository

_license_repo = DjangoLicenseRepository()
_seat_repo = DjangoSeatRepository()
_assignment_repo = DjangoAssignmentRepository()
_audit_repo = DjangoAuditLogRepository()

tracer = get_tracer(__name__)


class LicenseListView(APIView):
    """List and create licenses."""

    @extend_schema(
        operation_id="list_licenses",
        summary="List Licenses",
        description="Every license with assigned and remaining quantity, newest first.",
        tags=["Licenses"],
        responses={200: LicenseSummarySerializer(many=True)},
    )
    def get(self, request: Request) -> Response:
        return async_to_sync(self._handle_list)(request)

    async def _handle_list(self, request: Request) -> Response:
        with tracer.start_as_current_span("list_licenses") as span:
            result = await ListLicensesHandler(_license_repo).handle(ListLicensesQuery())
            span.set_attribute("licenses.count", len(result))
            return Response(LicenseSummarySerializer(result, many=True).data)

    @extend_schema(
        operation_id="create_license",
        summary="Create License",
        description=(
            "Register a license. Cost totals and the renewal date are derived; "
            "key-based licenses get one empty seat per unit."
        ),
        tags=["Licenses"],
        request=LicenseRequestSerializer,
        responses={201: LicenseSerializer, 400: {"description": "Bad Request"}},
    )
    def post(self, request: Request) -> Response:
        return async_to_sync(self._handle_create)(request)

    async def _handle_create(self, request: Request) -> Response:
        with tracer.start_as_current_span("create_license") as span:
            serializer = LicenseRequestSerializer(data=request.data)
            serializer.is_valid(raise_exception=True)
            fields = serializer.to_fields()
            span.set_attribute("license.total_quantity", fields.total_quantity)

            handler = CreateLicenseHandler(_license_repo, _seat_repo, _audit_repo)
            license = await handler.handle(CreateLicenseCommand(fields, actor=actor(request)))

            span.set_attribute("license.id", str(license.id))
            span.set_attribute("license.type", license.license_type.value)
            return Response(LicenseSerializer(license).data, status=status.HTTP_201_CREATED)


class LicenseDetailView(APIView):
    """Read, update and delete one license."""

    @extend_schema(
        operation_id="get_license",
        summary="Get License",
        description="License with its seats and active assignments.",
        tags=["Licenses"],
        responses={200: LicenseDetailSerializer, 404: {"description": "License not found"}},
    )
    def get(self, request: Request, license_id: uuid.UUID) -> Response:
        return async_to_sync(self._handle_get)(request, license_id)

    async def _handle_get(self, request: Request, license_id: uuid.UUID) -> Response:
        with tracer.start_as_current_span("get_license") as span:
            span.set_attribute("license.id", str(license_id))
            handler = GetLicenseHandler(_license_repo, _seat_repo, _assignment_repo)
            result = await handler.handle(GetLicenseQuery(license_id))
            return Response(LicenseDetailSerializer(result).data)

    @extend_schema(
        operation_id="update_license",
        summary="Update License",
        description=(
            "Replace the license attributes. Changing the type is refused while "
            "assignments are active; seats follow the new quantity."
        ),
        tags=["Licenses"],
        request=LicenseRequestSerializer,
        responses={
            200: LicenseSerializer,
            400: {"description": "Bad Request"},
            404: {"description": "License not found"},
        },
    )
    def put(self, request: Request, license_id: uuid.UUID) -> Response:
        return async_to_sync(self._handle_update)(request, license_id)

    async def _handle_update(self, request: Request, license_id: uuid.UUID) -> Response:
        with tracer.start_as_current_span("update_license") as span:
            span.set_attribute("license.id", str(license_id))
            serializer = LicenseRequestSerializer(data=request.data)
            serializer.is_valid(raise_exception=True)

            handler = UpdateLicenseHandler(_license_repo, _seat_repo, _audit_repo)
            license = await handler.handle(
                UpdateLicenseCommand(license_id, serializer.to_fields(), actor=actor(request))
            )
            return Response(LicenseSerializer(license).data)

    @extend_schema(
        operation_id="delete_license",
        summary="Delete License",
        description="Delete a license with its seats and assignments.",
        tags=["Licenses"],
        responses={204: None, 404: {"description": "License not found"}},
    )
    def delete(self, request: Request, license_id: uuid.UUID) -> Response:
        return async_to_sync(self._handle_delete)(request, license_id)

    async def _handle_delete(self, request: Request, license_id: uuid.UUID) -> Response:
        with tracer.start_as_current_span("delete_license") as span:
            span.set_attribute("license.id", str(license_id))
            handler = DeleteLicenseHandler(_license_repo, _audit_repo)
            await handler.handle(DeleteLicenseCommand(license_id, actor=actor(request)))
            return Response(status=status.HTTP_204_NO_CONTENT)


class SeatDetailView(APIView):
    """Update the key of a seat."""

    @extend_schema(
        operation_id="update_seat_key",
        summary="Update Seat Key",
        description="Set or clear the key of a seat. Keys are unique across all seats.",
        tags=["Seats"],
        request=SeatKeyRequestSerializer,
        responses={
            200: SeatSerializer,
            404: {"description": "Seat not found"},
            409: {"description": "Key already registered"},
        },
    )
    def patch(self, request: Request, seat_id: int) -> Response:
        return async_to_sync(self._handle_update)(request, seat_id)

    async def _handle_update(self, request: Request, seat_id: int) -> Response:
        with tracer.start_as_current_span("update_seat_key") as span:
            span.set_attribute("seat.id", seat_id)
            serializer = SeatKeyRequestSerializer(data=request.data)
            serializer.is_valid(raise_exception=True)

            handler = UpdateSeatKeyHandler(_seat_repo, _audit_repo)
            seat = await handler.handle(
                UpdateSeatKeyCommand(
                    seat_id, serializer.validated_data.get("key"), actor=actor(request)
                )
            )
            return Response(SeatSerializer(seat).data)


class SeatKeyCheckView(APIView):
    """Check whether a seat key is already taken."""

    @extend_schema(
        operation_id="check_seat_key",
        summary="Check Seat Key",
        tags=["Seats"],
        parameters=[
            OpenApiParameter("key", str, required=True),
            OpenApiParameter("exclude_seat_id", int, required=False),
        ],
        responses={200: SeatKeyCheckSerializer},
    )
    def get(self, request: Request) -> Response:
        return async_to_sync(self._handle_check)(request)

    async def _handle_check(self, request: Request) -> Response:
        with tracer.start_as_current_span("check_seat_key"):
            exclude = request.query_params.get("exclude_seat_id")
            query = CheckSeatKeyQuery(
                key=request.query_params.get("key"),
                exclude_seat_id=int(exclude) if exclude and exclude.isdigit() else None,
            )
            result = await CheckSeatKeyHandler(_seat_repo).handle(query)
            return Response(SeatKeyCheckSerializer(result).data)
