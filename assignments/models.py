"""Model registry for the assignments app."""
from assignments.infrastructure.models import Assignment, AssignmentHistory  # noqa: F401
