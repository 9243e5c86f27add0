"""Model registry for the audit app."""
from audit.infrastructure.models import AuditLog  # noqa: F401
