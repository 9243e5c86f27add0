"""
Django implementation of GroupRepository port.
"""
import uuid
from typing import Dict, Iterable, List, Optional

from django.db.models import Prefetch

from groups.domain.group import LicenseGroup
from groups.infrastructure.models import LicenseGroup as LicenseGroupModel
from groups.infrastructure.models import LicenseGroupMember
from groups.ports.group_repository import GroupRepository


def _with_members(queryset):
    return queryset.prefetch_related(
        Prefetch("members", queryset=LicenseGroupMember.objects.order_by("id"))
    )


class DjangoGroupRepository(GroupRepository):
    """Django ORM implementation of GroupRepository."""

    def _to_domain(self, model: LicenseGroupModel) -> LicenseGroup:
        return LicenseGroup(
            id=model.id,
            name=model.name,
            description=model.description,
            is_default=model.is_default,
            license_ids=tuple(member.license_id for member in model.members.all()),
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    def _get(self, group_id) -> Optional[LicenseGroupModel]:
        return _with_members(LicenseGroupModel.objects.filter(id=group_id)).first()

    def save(self, group: LicenseGroup) -> LicenseGroup:
        LicenseGroupModel.objects.update_or_create(
            id=group.id,
            defaults={
                "name": group.name,
                "description": group.description,
                "is_default": group.is_default,
            },
        )
        LicenseGroupMember.objects.filter(group_id=group.id).exclude(
            license_id__in=group.license_ids
        ).delete()
        self.add_members(group.id, group.license_ids)
        return self._to_domain(self._get(group.id))

    def find_by_id(self, group_id: uuid.UUID) -> Optional[LicenseGroup]:
        model = self._get(group_id)
        return self._to_domain(model) if model else None

    def find_by_name(self, name: str) -> Optional[LicenseGroup]:
        model = _with_members(LicenseGroupModel.objects.filter(name=name)).first()
        return self._to_domain(model) if model else None

    def find_by_names(self, names: Iterable[str]) -> Dict[str, LicenseGroup]:
        queryset = _with_members(LicenseGroupModel.objects.filter(name__in=list(names)))
        return {model.name: self._to_domain(model) for model in queryset}

    def list_all(self) -> List[LicenseGroup]:
        return [self._to_domain(model) for model in _with_members(LicenseGroupModel.objects.all())]

    def list_default(self) -> List[LicenseGroup]:
        queryset = _with_members(LicenseGroupModel.objects.filter(is_default=True))
        return [self._to_domain(model) for model in queryset]

    def add_members(self, group_id: uuid.UUID, license_ids: Iterable[uuid.UUID]) -> int:
        existing = set(
            LicenseGroupMember.objects.filter(group_id=group_id).values_list(
                "license_id", flat=True
            )
        )
        added = 0
        for license_id in dict.fromkeys(license_ids):
            if license_id in existing:
                continue
            LicenseGroupMember.objects.create(group_id=group_id, license_id=license_id)
            added += 1
        return added

    def remove_members(self, group_id: uuid.UUID, license_ids: Iterable[uuid.UUID]) -> int:
        deleted, _ = LicenseGroupMember.objects.filter(
            group_id=group_id, license_id__in=list(license_ids)
        ).delete()
        return deleted

    def delete(self, group_id: uuid.UUID) -> None:
        LicenseGroupModel.objects.filter(id=group_id).delete()
