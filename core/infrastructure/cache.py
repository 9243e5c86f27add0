"""
Cache abstraction (port).
"""
from abc import ABC, abstractmethod
from typing import Any, Optional


class CachePort(ABC):
    """
    Abstract cache port.

    Cache failures never surface to callers: a failed read is a miss and a
    failed write is dropped.
    """

    @abstractmethod
    async def get(self, key: str) -> Optional[Any]:
        """Cached value or None on a miss."""

    @abstractmethod
    async def set(self, key: str, value: Any, timeout: Optional[int] = None) -> None:
        """Store ``value`` for ``timeout`` seconds."""

    @abstractmethod
    async def delete(self, key: str) -> None:
        """Drop a key."""
