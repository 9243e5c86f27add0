"""
Audit log repository port (interface).
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import date
from typing import List, Optional

from audit.domain.audit_entry import AuditAction, AuditEntry, EntityType


@dataclass
class AuditSearchCriteria:
    """Filters of the history view. All fields are optional."""

    entity_type: Optional[EntityType] = None
    action: Optional[AuditAction] = None
    entity_id: Optional[str] = None
    date_from: Optional[date] = None
    date_to: Optional[date] = None
    q: Optional[str] = None


@dataclass
class AuditPage:
    """One page of audit entries."""

    entries: List[AuditEntry]
    total: int
    page: int
    page_size: int

    @property
    def total_pages(self) -> int:
        if self.total == 0:
            return 1
        return (self.total + self.page_size - 1) // self.page_size


class AuditLogRepository(ABC):
    """Append-only store of audit entries."""

    @abstractmethod
    def record(self, entry: AuditEntry) -> AuditEntry:
        """Persist an entry within the current transaction."""

    @abstractmethod
    def search(self, criteria: AuditSearchCriteria, page: int, page_size: int) -> AuditPage:
        """Entries matching ``criteria``, newest first."""
