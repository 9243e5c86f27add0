"""
SearchHistoryQuery.

Query for the audit history view.
"""
from dataclasses import dataclass
from datetime import date
from typing import Optional


@dataclass
class SearchHistoryQuery:
    """Query for audit entries."""

    entity_type: Optional[str] = None
    action: Optional[str] = None
    entity_id: Optional[str] = None
    date_from: Optional[date] = None
    date_to: Optional[date] = None
    q: Optional[str] = None
    page: int = 1
