"""
License group handlers.
"""
import uuid
from typing import Iterable, List

from audit.domain.audit_entry import AuditAction, AuditEntry, EntityType, diff_fields
from audit.ports.audit_log_repository import AuditLogRepository
from core.domain.exceptions import (
    DuplicateGroupNameError,
    GroupNotFoundError,
    LicenseNotFoundError,
    ValidationError,
)
from core.infrastructure.database import run_in_transaction, run_sync
from groups.application.commands.group_commands import (
    ChangeGroupMembersCommand,
    CreateGroupCommand,
    DeleteGroupCommand,
    GetGroupQuery,
    ListGroupsQuery,
    UpdateGroupCommand,
)
from groups.application.dto.group_dto import GroupDTO
from groups.domain.group import LicenseGroup, unique_ids
from groups.ports.group_repository import GroupRepository
from licenses.ports.license_repository import LicenseRepository

AUDITED_FIELDS = ("name", "description", "is_default", "license_ids")


class _GroupHandler:
    """Shared lookups of the group handlers."""

    def __init__(
        self,
        group_repository: GroupRepository,
        license_repository: LicenseRepository,
        audit_repository: AuditLogRepository = None,
    ):
        self.group_repository = group_repository
        self.license_repository = license_repository
        self.audit_repository = audit_repository

    def _get_group(self, group_id: uuid.UUID) -> LicenseGroup:
        group = self.group_repository.find_by_id(group_id)
        if not group:
            raise GroupNotFoundError(f"Group {group_id} not found")
        return group

    def _ensure_name_free(self, name: str, group_id: uuid.UUID = None) -> None:
        holder = self.group_repository.find_by_name((name or "").strip())
        if holder and holder.id != group_id:
            raise DuplicateGroupNameError(name.strip())

    def _ensure_licenses_exist(self, license_ids: Iterable[uuid.UUID]) -> None:
        license_ids = unique_ids(license_ids)
        found = self.license_repository.find_by_ids(license_ids)
        missing = [str(license_id) for license_id in license_ids if license_id not in found]
        if missing:
            raise LicenseNotFoundError(f"License(s) not found: {', '.join(missing)}")

    def _to_dto(self, group: LicenseGroup) -> GroupDTO:
        licenses = self.license_repository.find_by_ids(group.license_ids)
        return GroupDTO(
            group=group,
            licenses=[licenses[lid] for lid in group.license_ids if lid in licenses],
        )

    def _audit(self, group: LicenseGroup, action: AuditAction, actor, details) -> None:
        self.audit_repository.record(
            AuditEntry.create(EntityType.GROUP, group.id, action, actor=actor, details=details)
        )


class CreateGroupHandler(_GroupHandler):
    """Handler for CreateGroupCommand."""

    async def handle(self, command: CreateGroupCommand) -> GroupDTO:
        """
        Handle create group command.

        Raises:
            DuplicateGroupNameError: If the name is taken
            LicenseNotFoundError: If an initial member does not exist
        """
        return await run_in_transaction(self._create, command)

    def _create(self, command: CreateGroupCommand) -> GroupDTO:
        group = LicenseGroup.create(
            name=command.name,
            description=command.description,
            is_default=command.is_default,
            license_ids=command.license_ids,
        )
        self._ensure_name_free(group.name)
        self._ensure_licenses_exist(group.license_ids)
        saved = self.group_repository.save(group)
        self._audit(
            saved,
            AuditAction.CREATED,
            command.actor,
            {
                "summary": f"{saved.name} created",
                "is_default": saved.is_default,
                "license_count": len(saved.license_ids),
            },
        )
        return self._to_dto(saved)


class UpdateGroupHandler(_GroupHandler):
    """Handler for UpdateGroupCommand."""

    async def handle(self, command: UpdateGroupCommand) -> GroupDTO:
        """
        Handle update group command.

        Raises:
            GroupNotFoundError: If group not found
            DuplicateGroupNameError: If the new name is taken
        """
        return await run_in_transaction(self._update, command)

    def _update(self, command: UpdateGroupCommand) -> GroupDTO:
        current = self._get_group(command.group_id)
        if not (command.name or "").strip():
            raise ValidationError("Group name is required", field="name")
        self._ensure_name_free(command.name, current.id)

        changes = {
            "name": command.name.strip(),
            "description": (command.description or "").strip() or None,
            "is_default": command.is_default,
        }
        if command.license_ids is not None:
            self._ensure_licenses_exist(command.license_ids)
            changes["license_ids"] = tuple(command.license_ids)
        saved = self.group_repository.save(current.with_changes(**changes))

        diff = diff_fields(current, saved, AUDITED_FIELDS)
        if diff:
            self._audit(
                saved,
                AuditAction.UPDATED,
                command.actor,
                {"summary": f"{saved.name} updated", "changes": diff},
            )
        return self._to_dto(saved)


class DeleteGroupHandler(_GroupHandler):
    """Handler for DeleteGroupCommand."""

    async def handle(self, command: DeleteGroupCommand) -> None:
        """
        Handle delete group command.

        Raises:
            GroupNotFoundError: If group not found
        """
        await run_in_transaction(self._delete, command)

    def _delete(self, command: DeleteGroupCommand) -> None:
        group = self._get_group(command.group_id)
        self._audit(group, AuditAction.DELETED, command.actor, {"summary": f"{group.name} deleted"})
        self.group_repository.delete(group.id)


class AddGroupMembersHandler(_GroupHandler):
    """Handler for adding licenses to a group."""

    async def handle(self, command: ChangeGroupMembersCommand) -> GroupDTO:
        """
        Handle add members command. Licenses already in the group are skipped.

        Raises:
            GroupNotFoundError: If group not found
            LicenseNotFoundError: If a license does not exist
        """
        return await run_in_transaction(self._add, command)

    def _add(self, command: ChangeGroupMembersCommand) -> GroupDTO:
        group = self._get_group(command.group_id)
        if not command.license_ids:
            raise ValidationError("Select at least one license", field="license_ids")
        self._ensure_licenses_exist(command.license_ids)
        added = self.group_repository.add_members(group.id, command.license_ids)
        if added:
            self._audit(
                group,
                AuditAction.UPDATED,
                command.actor,
                {"summary": f"{group.name}: {added} license(s) added"},
            )
        return self._to_dto(self._get_group(group.id))


class RemoveGroupMembersHandler(_GroupHandler):
    """Handler for removing licenses from a group."""

    async def handle(self, command: ChangeGroupMembersCommand) -> GroupDTO:
        """
        Handle remove members command.

        Raises:
            GroupNotFoundError: If group not found
        """
        return await run_in_transaction(self._remove, command)

    def _remove(self, command: ChangeGroupMembersCommand) -> GroupDTO:
        group = self._get_group(command.group_id)
        removed = self.group_repository.remove_members(group.id, command.license_ids)
        if removed:
            self._audit(
                group,
                AuditAction.UPDATED,
                command.actor,
                {"summary": f"{group.name}: {removed} license(s) removed"},
            )
        return self._to_dto(self._get_group(group.id))


class GetGroupHandler(_GroupHandler):
    """Handler for GetGroupQuery."""

    async def handle(self, query: GetGroupQuery) -> GroupDTO:
        return await run_sync(lambda: self._to_dto(self._get_group(query.group_id)))


class ListGroupsHandler(_GroupHandler):
    """Handler for ListGroupsQuery."""

    async def handle(self, query: ListGroupsQuery) -> List[GroupDTO]:
        return await run_sync(self._list)

    def _list(self) -> List[GroupDTO]:
        groups = self.group_repository.list_all()
        ids = [license_id for group in groups for license_id in group.license_ids]
        licenses = self.license_repository.find_by_ids(ids)
        return [
            GroupDTO(
                group=group,
                licenses=[licenses[lid] for lid in group.license_ids if lid in licenses],
            )
            for group in groups
        ]
