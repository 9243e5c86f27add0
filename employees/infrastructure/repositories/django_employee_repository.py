"""
Django implementation of EmployeeRepository port.
"""
import uuid
from typing import Dict, Iterable, List, Optional

from django.db.models import Q

from employees.domain.employee import Employee
from employees.infrastructure.models import Employee as EmployeeModel
from employees.ports.employee_repository import EmployeeRepository


class DjangoEmployeeRepository(EmployeeRepository):
    """Django ORM implementation of EmployeeRepository."""

    def _to_domain(self, model: EmployeeModel) -> Employee:
        return Employee(
            id=model.id,
            name=model.name,
            department=model.department,
            email=model.email,
            title=model.title,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    def save(self, employee: Employee) -> Employee:
        model, _ = EmployeeModel.objects.update_or_create(
            id=employee.id,
            defaults={
                "name": employee.name,
                "department": employee.department,
                "email": employee.email,
                "title": employee.title,
            },
        )
        return self._to_domain(model)

    def find_by_id(self, employee_id: uuid.UUID) -> Optional[Employee]:
        try:
            return self._to_domain(EmployeeModel.objects.get(id=employee_id))
        except EmployeeModel.DoesNotExist:
            return None

    def find_by_email(self, email: str) -> Optional[Employee]:
        model = EmployeeModel.objects.filter(email__iexact=email).first()
        return self._to_domain(model) if model else None

    def find_by_emails(self, emails: Iterable[str]) -> Dict[str, Employee]:
        lookup = Q()
        for email in {email.lower() for email in emails if email}:
            lookup |= Q(email__iexact=email)
        if not lookup:
            return {}
        return {
            model.email.lower(): self._to_domain(model)
            for model in EmployeeModel.objects.filter(lookup)
        }

    def list_all(self) -> List[Employee]:
        return [self._to_domain(model) for model in EmployeeModel.objects.all()]

    def delete(self, employee_id: uuid.UUID) -> None:
        EmployeeModel.objects.filter(id=employee_id).delete()
