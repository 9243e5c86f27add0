"""
Audit entry domain entity.
"""
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Iterable, Optional


class EntityType(Enum):
    """Kinds of entities the audit trail records."""

    LICENSE = "LICENSE"
    EMPLOYEE = "EMPLOYEE"
    ASSIGNMENT = "ASSIGNMENT"
    SEAT = "SEAT"
    GROUP = "GROUP"
    USER = "USER"
    AUTH = "AUTH"


class AuditAction(Enum):
    """Recorded actions."""

    CREATED = "CREATED"
    UPDATED = "UPDATED"
    DELETED = "DELETED"
    ASSIGNED = "ASSIGNED"
    UNASSIGNED = "UNASSIGNED"
    REVOKED = "REVOKED"
    IMPORTED = "IMPORTED"
    LOGIN = "LOGIN"
    LOGOUT = "LOGOUT"


@dataclass(frozen=True)
class AuditEntry:
    """One append-only audit record."""

    id: uuid.UUID
    entity_type: EntityType
    entity_id: str
    action: AuditAction
    actor: Optional[str]
    details: Dict[str, Any] = field(default_factory=dict)
    created_at: Optional[datetime] = None

    @classmethod
    def create(
        cls,
        entity_type: EntityType,
        entity_id: Any,
        action: AuditAction,
        actor: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> "AuditEntry":
        return cls(
            id=uuid.uuid4(),
            entity_type=entity_type,
            entity_id=str(entity_id),
            action=action,
            actor=actor,
            details=details or {},
            created_at=datetime.now(timezone.utc),
        )


def _comparable(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.value
    return value


def _jsonable(value: Any) -> Any:
    value = _comparable(value)
    if value is None or isinstance(value, (bool, int, float, str)):
        return value
    if isinstance(value, (list, tuple)):
        return [_jsonable(item) for item in value]
    return str(value)


def diff_fields(before: Any, after: Any, fields: Iterable[str]) -> Dict[str, Dict[str, Any]]:
    """
    Field-by-field changes between two objects as ``{field: {from, to}}``.

    Enum members compare by value; values are rendered JSON friendly.
    """
    changes: Dict[str, Dict[str, Any]] = {}
    for name in fields:
        old = _comparable(getattr(before, name, None))
        new = _comparable(getattr(after, name, None))
        if old != new:
            changes[name] = {"from": _jsonable(old), "to": _jsonable(new)}
    return changes
