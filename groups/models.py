"""Model registry for the groups app."""
from groups.infrastructure.models import LicenseGroup, LicenseGroupMember  # noqa: F401
