"""
License domain services.

Domain services contain business logic that doesn't naturally
fit within a single entity.
"""
import dataclasses
from dataclasses import dataclass, field
from datetime import date
from typing import List, Optional, Sequence

from core.domain.exceptions import SeatsInUseError
from licenses.domain.cost import CostInputs, compute_cost
from licenses.domain.license import License
from licenses.domain.renewal import next_renewal_date
from licenses.domain.seat import Seat


@dataclass(frozen=True)
class SeatSyncPlan:
    """Seats to add and remove so a license matches its quantity."""

    to_create: int = 0
    to_delete: List[Seat] = field(default_factory=list)

    @property
    def deleted_with_key(self) -> int:
        return sum(1 for seat in self.to_delete if seat.has_key)

    @property
    def is_noop(self) -> bool:
        return self.to_create == 0 and not self.to_delete


class SeatReconciler:
    """Domain service deciding how a seat inventory follows its quantity."""

    @staticmethod
    def plan(seats: Sequence[Seat], total_quantity: int) -> SeatSyncPlan:
        """
        Plan the seat changes for a new total quantity.

        Args:
            seats: Current seats of the license, in id order
            total_quantity: Target seat count

        Returns:
            SeatSyncPlan

        Raises:
            SeatsInUseError: If the reduction would remove assigned seats
        """
        current = len(seats)
        if current < total_quantity:
            return SeatSyncPlan(to_create=total_quantity - current)
        if current == total_quantity:
            return SeatSyncPlan()

        excess = current - total_quantity
        free = sorted(
            (seat for seat in seats if not seat.is_assigned),
            key=lambda seat: (seat.has_key, seat.id),
        )
        if len(free) < excess:
            assigned = current - len(free)
            raise SeatsInUseError(
                f"{assigned} seat(s) are assigned, so the quantity cannot go below "
                f"{assigned}. Current seats: {current}, removable: {len(free)}, "
                f"minimum quantity: {assigned}."
            )
        return SeatSyncPlan(to_delete=free[:excess])

    @staticmethod
    def ensure_all_removable(seats: Sequence[Seat]) -> None:
        """
        Check that every seat can be dropped.

        Raises:
            SeatsInUseError: If any seat is assigned
        """
        assigned = sum(1 for seat in seats if seat.is_assigned)
        if assigned:
            raise SeatsInUseError(
                f"{assigned} seat(s) are still assigned. Return all assignments first."
            )


def pick_free_seat(seats: Sequence[Seat]) -> Optional[Seat]:
    """
    Choose the seat for a new assignment.

    Keyed seats are handed out before keyless ones, lowest id first.
    """
    free = [seat for seat in seats if not seat.is_assigned]
    if not free:
        return None
    return min(free, key=lambda seat: (not seat.has_key, seat.id))


class LicenseCapacity:
    """Capacity rules shared by manual assignment, groups and imports."""

    @staticmethod
    def minimum_quantity(license: License, active_assignments: int,
                         assigned_seats: int) -> int:
        """Smallest quantity a license can be set to without stranding assignments."""
        if license.is_key_based:
            return assigned_seats
        return active_assignments

    @staticmethod
    def free_slots(license: License, active_assignments: int,
                   seats: Sequence[Seat] = ()) -> int:
        """Number of further assignments the license can take."""
        if license.is_key_based:
            return sum(1 for seat in seats if not seat.is_assigned)
        return max(0, license.total_quantity - active_assignments)


class LicenseCalculator:
    """Fills the attributes derived from cost and renewal inputs."""

    @staticmethod
    def with_derived_fields(license: License, today: date) -> License:
        """
        Return the license with cost totals and renewal date recomputed.

        Cost totals are cleared when the cost inputs are incomplete.
        """
        total_foreign = None
        total_krw = None
        if license.has_cost_inputs:
            result = compute_cost(
                CostInputs(
                    payment_cycle=license.payment_cycle,
                    quantity=license.total_quantity,
                    unit_price=license.unit_price,
                    currency=license.currency,
                    exchange_rate=license.exchange_rate,
                    is_vat_included=license.is_vat_included,
                )
            )
            total_foreign = result.total_amount_foreign
            total_krw = result.total_amount_krw
        return dataclasses.replace(
            license,
            total_amount_foreign=total_foreign,
            total_amount_krw=total_krw,
            renewal_date=next_renewal_date(license, today),
        )
