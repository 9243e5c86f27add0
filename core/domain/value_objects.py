"""
Value objects for the domain.

Value objects are immutable objects that are defined by their attributes
rather than their identity. They have no identity and are compared by value.
"""
from abc import ABC
from dataclasses import dataclass
from enum import Enum


@dataclass(frozen=True)
class ValueObject(ABC):
    """
    Base class for value objects.

    Value objects are immutable and compared by value.
    """

    def __eq__(self, other):
        """Compare value objects by their attributes."""
        if not isinstance(other, self.__class__):
            return False
        return self.__dict__ == other.__dict__

    def __hash__(self):
        """Make value objects hashable."""
        return hash(tuple(sorted(self.__dict__.items())))


@dataclass(frozen=True)
class Email(ValueObject):
    """Email value object with validation."""

    value: str

    def __post_init__(self):
        """Validate email format."""
        if not self.value or "@" not in self.value:
            raise ValueError(f"Invalid email address: {self.value}")

    def __str__(self) -> str:
        """Return email as string."""
        return self.value


class LicenseType(Enum):
    """How a license carries its key material."""

    KEY_BASED = "KEY_BASED"
    VOLUME = "VOLUME"
    NO_KEY = "NO_KEY"

    def __str__(self) -> str:
        return self.value

    @property
    def label(self) -> str:
        """Human readable label used in assignment reasons."""
        return {
            LicenseType.KEY_BASED: "Individual Key",
            LicenseType.VOLUME: "Volume Key",
            LicenseType.NO_KEY: "No Key",
        }[self]


class RenewalCycle(Enum):
    """License renewal cycle."""

    MANUAL = "MANUAL"
    MONTHLY = "MONTHLY"
    ANNUAL = "ANNUAL"
    CUSTOM = "CUSTOM"

    def __str__(self) -> str:
        return self.value


class PaymentCycle(Enum):
    """Billing period of a license cost."""

    MONTHLY = "MONTHLY"
    YEARLY = "YEARLY"

    def __str__(self) -> str:
        return self.value


class Currency(Enum):
    """Supported billing currencies."""

    KRW = "KRW"
    USD = "USD"
    EUR = "EUR"
    JPY = "JPY"
    GBP = "GBP"
    CNY = "CNY"

    def __str__(self) -> str:
        return self.value
