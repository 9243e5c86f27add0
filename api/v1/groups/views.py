"""
License group API views.
"""

import uuid

from asgiref.sync import async_to_sync
from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from api.v1.context import actor
from api.v1.groups.serializers import (
    GroupMembersRequestSerializer,
    GroupRequestSerializer,
    GroupSerializer,
)
from audit.infrastructure.repositories.django_audit_log_repository import DjangoAuditLogRepository
from core.instrumentation import get_tracer
from groups.application.commands.group_commands import (
    ChangeGroupMembersCommand,
    CreateGroupCommand,
    DeleteGroupCommand,
    GetGroupQuery,
    ListGroupsQuery,
    UpdateGroupCommand,
)
from groups.application.handlers.group_handlers import (
    AddGroupMembersHandler,
    CreateGroupHandler,
    DeleteGroupHandler,
    GetGroupHandler,
    ListGroupsHandler,
    RemoveGroupMembersHandler,
    UpdateGroupHandler,
)
from groups.infrastructure.repositories.django_group_repository import DjangoGroupRepository
from licenses.infrastructure.repositories.django_license_repository import DjangoLicenseRepository

_group_repo = DjangoGroupRepository()
_license_repo = DjangoLicenseRepository()
_audit_repo = DjangoAuditLogRepository()

tracer = get_tracer(__name__)


class GroupListView(APIView):
    """List and create license groups."""

    @extend_schema(
        operation_id="list_groups",
        summary="List Groups",
        tags=["Groups"],
        responses={200: GroupSerializer(many=True)},
    )
    def get(self, request: Request) -> Response:
        return async_to_sync(self._handle_list)(request)

    async def _handle_list(self, request: Request) -> Response:
        with tracer.start_as_current_span("list_groups"):
            result = await ListGroupsHandler(_group_repo, _license_repo).handle(ListGroupsQuery())
            return Response(GroupSerializer(result, many=True).data)

    @extend_schema(
        operation_id="create_group",
        summary="Create Group",
        tags=["Groups"],
        request=GroupRequestSerializer,
        responses={
            201: GroupSerializer,
            404: {"description": "License not found"},
            409: {"description": "Group name taken"},
        },
    )
    def post(self, request: Request) -> Response:
        return async_to_sync(self._handle_create)(request)

    async def _handle_create(self, request: Request) -> Response:
        with tracer.start_as_current_span("create_group") as span:
            serializer = GroupRequestSerializer(data=request.data)
            serializer.is_valid(raise_exception=True)
            data = serializer.validated_data
            handler = CreateGroupHandler(_group_repo, _license_repo, _audit_repo)
            result = await handler.handle(
                CreateGroupCommand(
                    name=data["name"],
                    description=data.get("description"),
                    is_default=data["is_default"],
                    license_ids=data.get("license_ids") or [],
                    actor=actor(request),
                )
            )
            span.set_attribute("group.id", str(result.group.id))
            return Response(GroupSerializer(result).data, status=status.HTTP_201_CREATED)


class GroupDetailView(APIView):
    """Read, update and delete one license group."""

    @extend_schema(
        operation_id="get_group",
        summary="Get Group",
        tags=["Groups"],
        responses={200: GroupSerializer, 404: {"description": "Group not found"}},
    )
    def get(self, request: Request, group_id: uuid.UUID) -> Response:
        return async_to_sync(self._handle_get)(request, group_id)

    async def _handle_get(self, request: Request, group_id: uuid.UUID) -> Response:
        with tracer.start_as_current_span("get_group") as span:
            span.set_attribute("group.id", str(group_id))
            result = await GetGroupHandler(_group_repo, _license_repo).handle(
                GetGroupQuery(group_id)
            )
            return Response(GroupSerializer(result).data)

    @extend_schema(
        operation_id="update_group",
        summary="Update Group",
        description="Update a group. ``license_ids`` replaces the members when present.",
        tags=["Groups"],
        request=GroupRequestSerializer,
        responses={
            200: GroupSerializer,
            404: {"description": "Group or license not found"},
            409: {"description": "Group name taken"},
        },
    )
    def put(self, request: Request, group_id: uuid.UUID) -> Response:
        return async_to_sync(self._handle_update)(request, group_id)

    async def _handle_update(self, request: Request, group_id: uuid.UUID) -> Response:
        with tracer.start_as_current_span("update_group") as span:
            span.set_attribute("group.id", str(group_id))
            serializer = GroupRequestSerializer(data=request.data)
            serializer.is_valid(raise_exception=True)
            data = serializer.validated_data
            handler = UpdateGroupHandler(_group_repo, _license_repo, _audit_repo)
            result = await handler.handle(
                UpdateGroupCommand(
                    group_id=group_id,
                    name=data["name"],
                    description=data.get("description"),
                    is_default=data["is_default"],
                    license_ids=data.get("license_ids"),
                    actor=actor(request),
                )
            )
            return Response(GroupSerializer(result).data)

    @extend_schema(
        operation_id="delete_group",
        summary="Delete Group",
        description="Delete a group. Assignments made through it are kept.",
        tags=["Groups"],
        responses={204: None, 404: {"description": "Group not found"}},
    )
    def delete(self, request: Request, group_id: uuid.UUID) -> Response:
        return async_to_sync(self._handle_delete)(request, group_id)

    async def _handle_delete(self, request: Request, group_id: uuid.UUID) -> Response:
        with tracer.start_as_current_span("delete_group") as span:
            span.set_attribute("group.id", str(group_id))
            handler = DeleteGroupHandler(_group_repo, _license_repo, _audit_repo)
            await handler.handle(DeleteGroupCommand(group_id, actor=actor(request)))
            return Response(status=status.HTTP_204_NO_CONTENT)


class GroupMembersView(APIView):
    """Add or remove member licenses of a group."""

    @extend_schema(
        operation_id="add_group_members",
        summary="Add Group Members",
        tags=["Groups"],
        request=GroupMembersRequestSerializer,
        responses={200: GroupSerializer, 404: {"description": "Group or license not found"}},
    )
    def post(self, request: Request, group_id: uuid.UUID) -> Response:
        return async_to_sync(self._handle_change)(request, group_id, AddGroupMembersHandler)

    @extend_schema(
        operation_id="remove_group_members",
        summary="Remove Group Members",
        tags=["Groups"],
        request=GroupMembersRequestSerializer,
        responses={200: GroupSerializer, 404: {"description": "Group not found"}},
    )
    def delete(self, request: Request, group_id: uuid.UUID) -> Response:
        return async_to_sync(self._handle_change)(request, group_id, RemoveGroupMembersHandler)

    async def _handle_change(self, request: Request, group_id: uuid.UUID, handler_cls) -> Response:
        with tracer.start_as_current_span("change_group_members") as span:
            span.set_attribute("group.id", str(group_id))
            span.set_attribute("operation", handler_cls.__name__)
            serializer = GroupMembersRequestSerializer(data=request.data)
            serializer.is_valid(raise_exception=True)
            handler = handler_cls(_group_repo, _license_repo, _audit_repo)
            result = await handler.handle(
                ChangeGroupMembersCommand(
                    group_id=group_id,
                    license_ids=serializer.validated_data["license_ids"],
                    actor=actor(request),
                )
            )
            return Response(GroupSerializer(result).data)
