"""
Assignment DTOs for API responses.
"""
from dataclasses import dataclass, field
from typing import List


@dataclass
class AssignmentResultDTO:
    """Outcome of a bulk assign or unassign."""

    success: bool
    message: str
    count: int
    skipped: List[str] = field(default_factory=list)
