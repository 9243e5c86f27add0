"""
License read-side queries.
"""
import uuid
from dataclasses import dataclass
from datetime import date
from typing import Optional


@dataclass
class GetLicenseQuery:
    """Query for one license with its seats and active assignments."""

    license_id: uuid.UUID


@dataclass
class ListLicensesQuery:
    """Query for every license, newest first."""


@dataclass
class CheckSeatKeyQuery:
    """Query whether a seat key is already held by another seat."""

    key: Optional[str]
    exclude_seat_id: Optional[int] = None


@dataclass
class GetDashboardQuery:
    """Query for the dashboard summary."""

    today: Optional[date] = None
