"""Model registry for the employees app."""
from employees.infrastructure.models import Employee  # noqa: F401
