"""
Import domain events.
"""
from datetime import datetime
from typing import Any, Dict, Optional

from core.domain.events import DomainEvent


class CsvImported(DomainEvent):
    """Event raised after a CSV import was committed."""

    def __init__(self, import_type: str, created: int, updated: int,
                 occurred_at: Optional[datetime] = None):
        super().__init__(aggregate_id=f"import:{import_type}", occurred_at=occurred_at)
        self.import_type = import_type
        self.created = created
        self.updated = updated

    def payload(self) -> Dict[str, Any]:
        return {"import_type": self.import_type, "created": self.created, "updated": self.updated}
