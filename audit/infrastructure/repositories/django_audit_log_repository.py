"""
Django implementation of AuditLogRepository port.
"""
import json
from datetime import datetime, time, timedelta

from django.core.serializers.json import DjangoJSONEncoder
from django.db.models import Q
from django.utils import timezone

from audit.domain.audit_entry import AuditAction, AuditEntry, EntityType
from audit.infrastructure.models import AuditLog
from audit.ports.audit_log_repository import AuditLogRepository, AuditPage, AuditSearchCriteria


class DjangoAuditLogRepository(AuditLogRepository):
    """Django ORM implementation of AuditLogRepository."""

    def _to_domain(self, model: AuditLog) -> AuditEntry:
        return AuditEntry(
            id=model.id,
            entity_type=EntityType(model.entity_type),
            entity_id=model.entity_id,
            action=AuditAction(model.action),
            actor=model.actor,
            details=model.details or {},
            created_at=model.created_at,
        )

    def record(self, entry: AuditEntry) -> AuditEntry:
        model = AuditLog.objects.create(
            id=entry.id,
            entity_type=entry.entity_type.value,
            entity_id=entry.entity_id,
            action=entry.action.value,
            actor=entry.actor,
            details=entry.details,
            search_text=json.dumps(entry.details or {}, ensure_ascii=False, cls=DjangoJSONEncoder),
            created_at=entry.created_at or timezone.now(),
        )
        return self._to_domain(model)

    def search(self, criteria: AuditSearchCriteria, page: int, page_size: int) -> AuditPage:
        queryset = AuditLog.objects.all()
        if criteria.entity_type:
            queryset = queryset.filter(entity_type=criteria.entity_type.value)
        if criteria.action:
            queryset = queryset.filter(action=criteria.action.value)
        if criteria.entity_id:
            queryset = queryset.filter(entity_id=criteria.entity_id)
        if criteria.date_from:
            start = timezone.make_aware(datetime.combine(criteria.date_from, time.min))
            queryset = queryset.filter(created_at__gte=start)
        if criteria.date_to:
            # Inclusive through the end of the day.
            end = timezone.make_aware(datetime.combine(criteria.date_to + timedelta(days=1), time.min))
            queryset = queryset.filter(created_at__lt=end)
        if criteria.q:
            queryset = queryset.filter(
                Q(search_text__icontains=criteria.q) | Q(actor__icontains=criteria.q)
            )

        total = queryset.count()
        page = max(1, page)
        offset = (page - 1) * page_size
        models = queryset.order_by("-created_at")[offset:offset + page_size]
        return AuditPage(
            entries=[self._to_domain(model) for model in models],
            total=total,
            page=page,
            page_size=page_size,
        )
