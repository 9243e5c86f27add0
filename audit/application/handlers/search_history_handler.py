"""
SearchHistoryHandler.

Handles the audit history query.
"""
from django.conf import settings

from audit.application.queries.search_history import SearchHistoryQuery
from audit.domain.audit_entry import AuditAction, EntityType
from audit.ports.audit_log_repository import AuditLogRepository, AuditPage, AuditSearchCriteria
from core.domain.exceptions import ValidationError
from core.infrastructure.database import run_sync


def _parse_enum(enum_cls, value, field):
    if not value:
        return None
    try:
        return enum_cls(value.upper())
    except ValueError as exc:
        raise ValidationError(f"Unknown {field}: {value}", field=field) from exc


class SearchHistoryHandler:
    """Handler for SearchHistoryQuery."""

    def __init__(self, audit_repository: AuditLogRepository):
        self.audit_repository = audit_repository

    async def handle(self, query: SearchHistoryQuery) -> AuditPage:
        """
        Handle search history query.

        Args:
            query: SearchHistoryQuery

        Returns:
            AuditPage with entries ordered newest first

        Raises:
            ValidationError: If the entity type or action is unknown
        """
        criteria = AuditSearchCriteria(
            entity_type=_parse_enum(EntityType, query.entity_type, "entity_type"),
            action=_parse_enum(AuditAction, query.action, "action"),
            entity_id=query.entity_id or None,
            date_from=query.date_from,
            date_to=query.date_to,
            q=(query.q or "").strip() or None,
        )
        page_size = getattr(settings, "HISTORY_PAGE_SIZE", 50)
        return await run_sync(self.audit_repository.search, criteria, query.page, page_size)
