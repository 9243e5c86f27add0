"""
Employee API views, including bulk assign and unassign.
"""

import uuid

from asgiref.sync import async_to_sync
from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from api.v1.assignments.serializers import AssignmentResultSerializer
from api.v1.context import actor
from api.v1.employees.serializers import (
    AssignRequestSerializer,
    CreatedEmployeeSerializer,
    EmployeeDetailSerializer,
    EmployeeRequestSerializer,
    EmployeeSerializer,
    UnassignRequestSerializer,
)
from assignments.application.commands.assignment_commands import (
    AssignLicensesCommand,
    UnassignLicensesCommand,
)
from assignments.application.handlers.assignment_handlers import (
    AssignLicensesHandler,
    UnassignLicensesHandler,
)
from assignments.domain.assignment import MANUAL_REASON
from assignments.infrastructure.repositories.django_assignment_repository import (
    DjangoAssignmentRepository,
)
from audit.infrastructure.repositories.django_audit_log_repository import DjangoAuditLogRepository
from core.instrumentation import get_tracer
from employees.application.commands.employee_commands import (
    CreateEmployeeCommand,
    DeleteEmployeeCommand,
    GetEmployeeQuery,
    ListEmployeesQuery,
    UpdateEmployeeCommand,
)
from employees.application.handlers.employee_handlers import (
    CreateEmployeeHandler,
    DeleteEmployeeHandler,
    GetEmployeeHandler,
    ListEmployeesHandler,
    UpdateEmployeeHandler,
)
from employees.infrastructure.repositories.django_employee_repository import (
    DjangoEmployeeRepository,
)
from groups.infrastructure.repositories.django_group_repository import DjangoGroupRepository
from licenses.infrastructure.repositories.django_license_repository import DjangoLicenseRepository
from licenses.infrastructure.repositories.django_seat_repository import DjangoSeatRepository

_employee_repo = DjangoEmployeeRepository()
_group_repo = DjangoGroupRepository()
_license_repo = DjangoLicenseRepository()
_seat_repo = DjangoSeatRepository()
_assignment_repo = DjangoAssignmentRepository()
_audit_repo = DjangoAuditLogRepository()

tracer = get_tracer(__name__)


class EmployeeListView(APIView):
    """List and create employees."""

    @extend_schema(
        operation_id="list_employees",
        summary="List Employees",
        tags=["Employees"],
        responses={200: EmployeeSerializer(many=True)},
    )
    def get(self, request: Request) -> Response:
        return async_to_sync(self._handle_list)(request)

    async def _handle_list(self, request: Request) -> Response:
        with tracer.start_as_current_span("list_employees") as span:
            result = await ListEmployeesHandler(_employee_repo).handle(ListEmployeesQuery())
            span.set_attribute("employees.count", len(result))
            return Response(EmployeeSerializer(result, many=True).data)

    @extend_schema(
        operation_id="create_employee",
        summary="Create Employee",
        description="Register an employee and assign the licenses of every default group.",
        tags=["Employees"],
        request=EmployeeRequestSerializer,
        responses={
            201: CreatedEmployeeSerializer,
            400: {"description": "Bad Request"},
            409: {"description": "Email already in use"},
        },
    )
    def post(self, request: Request) -> Response:
        return async_to_sync(self._handle_create)(request)

    async def _handle_create(self, request: Request) -> Response:
        with tracer.start_as_current_span("create_employee") as span:
            serializer = EmployeeRequestSerializer(data=request.data)
            serializer.is_valid(raise_exception=True)
            handler = CreateEmployeeHandler(
                _employee_repo,
                _group_repo,
                _license_repo,
                _seat_repo,
                _assignment_repo,
                _audit_repo,
            )
            result = await handler.handle(
                CreateEmployeeCommand(**serializer.validated_data, actor=actor(request))
            )
            span.set_attribute("employee.id", str(result.employee.id))
            span.set_attribute("employee.auto_assigned", result.auto_assigned)
            return Response(
                CreatedEmployeeSerializer(result).data, status=status.HTTP_201_CREATED
            )


class EmployeeDetailView(APIView):
    """Read, update and delete one employee."""

    @extend_schema(
        operation_id="get_employee",
        summary="Get Employee",
        description="Employee with active assignments and assignment history.",
        tags=["Employees"],
        responses={200: EmployeeDetailSerializer, 404: {"description": "Employee not found"}},
    )
    def get(self, request: Request, employee_id: uuid.UUID) -> Response:
        return async_to_sync(self._handle_get)(request, employee_id)

    async def _handle_get(self, request: Request, employee_id: uuid.UUID) -> Response:
        with tracer.start_as_current_span("get_employee") as span:
            span.set_attribute("employee.id", str(employee_id))
            handler = GetEmployeeHandler(_employee_repo, _assignment_repo)
            result = await handler.handle(GetEmployeeQuery(employee_id))
            return Response(EmployeeDetailSerializer(result).data)

    @extend_schema(
        operation_id="update_employee",
        summary="Update Employee",
        tags=["Employees"],
        request=EmployeeRequestSerializer,
        responses={
            200: EmployeeSerializer,
            404: {"description": "Employee not found"},
            409: {"description": "Email already in use"},
        },
    )
    def put(self, request: Request, employee_id: uuid.UUID) -> Response:
        return async_to_sync(self._handle_update)(request, employee_id)

    async def _handle_update(self, request: Request, employee_id: uuid.UUID) -> Response:
        with tracer.start_as_current_span("update_employee") as span:
            span.set_attribute("employee.id", str(employee_id))
            serializer = EmployeeRequestSerializer(data=request.data)
            serializer.is_valid(raise_exception=True)
            handler = UpdateEmployeeHandler(_employee_repo, _audit_repo)
            employee = await handler.handle(
                UpdateEmployeeCommand(
                    employee_id=employee_id, **serializer.validated_data, actor=actor(request)
                )
            )
            return Response(EmployeeSerializer(employee).data)

    @extend_schema(
        operation_id="delete_employee",
        summary="Delete Employee",
        tags=["Employees"],
        responses={204: None, 404: {"description": "Employee not found"}},
    )
    def delete(self, request: Request, employee_id: uuid.UUID) -> Response:
        return async_to_sync(self._handle_delete)(request, employee_id)

    async def _handle_delete(self, request: Request, employee_id: uuid.UUID) -> Response:
        with tracer.start_as_current_span("delete_employee") as span:
            span.set_attribute("employee.id", str(employee_id))
            handler = DeleteEmployeeHandler(_employee_repo, _audit_repo)
            await handler.handle(DeleteEmployeeCommand(employee_id, actor=actor(request)))
            return Response(status=status.HTTP_204_NO_CONTENT)


class EmployeeAssignView(APIView):
    """Assign several licenses to an employee."""

    @extend_schema(
        operation_id="assign_licenses",
        summary="Assign Licenses",
        description=(
            "Assign each selected license. Licenses already assigned or without "
            "remaining capacity are skipped; nothing assigned is an error."
        ),
        tags=["Employees"],
        request=AssignRequestSerializer,
        responses={
            200: AssignmentResultSerializer,
            400: {"description": "Nothing assigned"},
            404: {"description": "Employee not found"},
        },
    )
    def post(self, request: Request, employee_id: uuid.UUID) -> Response:
        return async_to_sync(self._handle_assign)(request, employee_id)

    async def _handle_assign(self, request: Request, employee_id: uuid.UUID) -> Response:
        with tracer.start_as_current_span("assign_licenses") as span:
            span.set_attribute("employee.id", str(employee_id))
            serializer = AssignRequestSerializer(data=request.data)
            serializer.is_valid(raise_exception=True)
            handler = AssignLicensesHandler(
                _employee_repo, _license_repo, _seat_repo, _assignment_repo, _audit_repo
            )
            result = await handler.handle(
                AssignLicensesCommand(
                    employee_id=employee_id,
                    license_ids=serializer.validated_data["license_ids"],
                    reason=serializer.validated_data.get("reason") or MANUAL_REASON,
                    actor=actor(request),
                )
            )
            span.set_attribute("assignments.created", result.count)
            return Response(AssignmentResultSerializer(result).data)


class EmployeeUnassignView(APIView):
    """Return several assignments of an employee."""

    @extend_schema(
        operation_id="unassign_licenses",
        summary="Unassign Licenses",
        tags=["Employees"],
        request=UnassignRequestSerializer,
        responses={200: AssignmentResultSerializer, 400: {"description": "Nothing returned"}},
    )
    def post(self, request: Request, employee_id: uuid.UUID) -> Response:
        return async_to_sync(self._handle_unassign)(request, employee_id)

    async def _handle_unassign(self, request: Request, employee_id: uuid.UUID) -> Response:
        with tracer.start_as_current_span("unassign_licenses") as span:
            span.set_attribute("employee.id", str(employee_id))
            serializer = UnassignRequestSerializer(data=request.data)
            serializer.is_valid(raise_exception=True)
            handler = UnassignLicensesHandler(
                _license_repo, _seat_repo, _assignment_repo, _audit_repo
            )
            result = await handler.handle(
                UnassignLicensesCommand(
                    employee_id=employee_id,
                    assignment_ids=serializer.validated_data["assignment_ids"],
                    actor=actor(request),
                )
            )
            return Response(AssignmentResultSerializer(result).data)
