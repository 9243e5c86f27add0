"""
License cache service.

Caches the dashboard summary, which is expensive to compute over the whole
inventory. License and assignment events invalidate it.
"""
import logging
from datetime import date
from typing import Any, Dict, Optional

from core.infrastructure.cache_adapters import cache_adapter

logger = logging.getLogger(__name__)

# Cache TTLs (in seconds)
CACHE_TTL_DASHBOARD = 300  # 5 minutes

DASHBOARD_CACHE_KEY = "dashboard:summary"


class LicenseCacheService:
    """Service for caching license-related data."""

    @staticmethod
    async def get_dashboard(today: date) -> Optional[Dict[str, Any]]:
        """
        Get the cached dashboard summary.

        A summary computed for another day counts as a miss.

        Args:
            today: Date the summary must have been computed for

        Returns:
            Summary dict or None
        """
        cached = await cache_adapter.get(DASHBOARD_CACHE_KEY)
        if not cached or cached.get("date") != today.isoformat():
            return None
        return cached.get("summary")

    @staticmethod
    async def set_dashboard(today: date, summary: Dict[str, Any], ttl: int = None) -> None:
        """
        Cache the dashboard summary.

        Args:
            today: Date the summary was computed for
            summary: Summary dict
            ttl: Time to live in seconds
        """
        await cache_adapter.set(
            DASHBOARD_CACHE_KEY,
            {"date": today.isoformat(), "summary": summary},
            timeout=ttl or CACHE_TTL_DASHBOARD,
        )

    @staticmethod
    async def invalidate_dashboard() -> None:
        """Invalidate the cached dashboard summary."""
        await cache_adapter.delete(DASHBOARD_CACHE_KEY)
        logger.debug("Invalidated dashboard cache")
