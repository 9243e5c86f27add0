"""
App configuration for License Inventory.
"""

import logging
import sys

from django.apps import AppConfig

logger = logging.getLogger(__name__)

# Management commands that never serve requests or publish events
SKIPPED_COMMANDS = ("migrate", "makemigrations", "collectstatic", "check")


class LicenseInventoryConfig(AppConfig):
    """App configuration for LicenseInventory."""

    name = "LicenseInventory"
    verbose_name = "License Inventory"

    def ready(self):
        """Called when Django starts."""
        # Registers the cookie security scheme with drf-spectacular
        import core.schema_extensions  # noqa: F401
        from core.infrastructure.event_handlers import register_event_handlers
        from core.instrumentation import setup_opentelemetry

        if len(sys.argv) > 1 and sys.argv[1] in SKIPPED_COMMANDS:
            return
        if getattr(self, "_initialized", False):
            return

        logger.info("Setting up observability...")
        setup_opentelemetry()
        register_event_handlers()
        self._initialized = True
