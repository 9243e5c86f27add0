"""
Django implementation of LicenseRepository port.

This adapter converts between domain entities and Django ORM models.
"""
import uuid
from decimal import Decimal
from typing import Dict, Iterable, List, Optional

from django.db.models import Count, Q

from core.domain.value_objects import Currency, LicenseType, PaymentCycle, RenewalCycle
from licenses.domain.license import License
from licenses.infrastructure.models import License as LicenseModel
from licenses.ports.license_repository import LicenseRepository

_PERSISTED_FIELDS = (
    "name",
    "key",
    "total_quantity",
    "price",
    "purchase_date",
    "expiry_date",
    "contract_date",
    "notice_period_days",
    "admin_name",
    "description",
    "unit_price",
    "exchange_rate",
    "is_vat_included",
    "total_amount_foreign",
    "total_amount_krw",
    "cycle_months",
    "first_purchased_at",
    "last_renewed_at",
    "renewal_date",
)


class DjangoLicenseRepository(LicenseRepository):
    """
    Django ORM implementation of LicenseRepository.

    This adapter:
    1. Converts Django models to domain entities
    2. Converts domain entities to Django models
    3. Implements repository interface
    """

    def _to_domain(self, model: LicenseModel) -> License:
        """
        Convert Django model to domain entity.

        Args:
            model: Django License model

        Returns:
            License domain entity
        """
        return License(
            id=model.id,
            name=model.name,
            license_type=LicenseType(model.license_type),
            total_quantity=model.total_quantity,
            purchase_date=model.purchase_date,
            key=model.key,
            price=model.price,
            expiry_date=model.expiry_date,
            contract_date=model.contract_date,
            notice_period_days=model.notice_period_days,
            admin_name=model.admin_name,
            description=model.description,
            payment_cycle=PaymentCycle(model.payment_cycle) if model.payment_cycle else None,
            unit_price=model.unit_price,
            currency=Currency(model.currency),
            exchange_rate=model.exchange_rate if model.exchange_rate is not None else Decimal("1"),
            is_vat_included=model.is_vat_included,
            total_amount_foreign=model.total_amount_foreign,
            total_amount_krw=model.total_amount_krw,
            renewal_cycle=RenewalCycle(model.renewal_cycle),
            cycle_months=model.cycle_months,
            first_purchased_at=model.first_purchased_at,
            last_renewed_at=model.last_renewed_at,
            renewal_date=model.renewal_date,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    def _to_model(self, license: License) -> LicenseModel:
        """
        Convert domain entity to Django model.

        Args:
            license: License domain entity

        Returns:
            Django License model (unsaved changes applied)
        """
        model = LicenseModel.objects.filter(id=license.id).first()
        if model is None:
            model = LicenseModel(id=license.id)
        for field_name in _PERSISTED_FIELDS:
            setattr(model, field_name, getattr(license, field_name))
        model.license_type = license.license_type.value
        model.payment_cycle = license.payment_cycle.value if license.payment_cycle else None
        model.currency = license.currency.value
        model.renewal_cycle = license.renewal_cycle.value
        return model

    def save(self, license: License) -> License:
        """
        Save a license entity.

        Args:
            license: License entity to save

        Returns:
            Saved license entity
        """
        model = self._to_model(license)
        model.save()
        return self._to_domain(model)

    def find_by_id(self, license_id: uuid.UUID, for_update: bool = False) -> Optional[License]:
        """
        Find a license by ID.

        Args:
            license_id: License UUID
            for_update: Lock the row until the surrounding transaction ends

        Returns:
            License entity or None if not found
        """
        queryset = LicenseModel.objects.all()
        if for_update:
            queryset = queryset.select_for_update()
        try:
            return self._to_domain(queryset.get(id=license_id))
        except LicenseModel.DoesNotExist:
            return None

    def find_by_name(self, name: str) -> Optional[License]:
        model = LicenseModel.objects.filter(name=name).order_by("created_at").first()
        return self._to_domain(model) if model else None

    def find_by_names(self, names: Iterable[str]) -> Dict[str, License]:
        result: Dict[str, License] = {}
        for model in LicenseModel.objects.filter(name__in=list(names)).order_by("created_at"):
            result.setdefault(model.name, self._to_domain(model))
        return result

    def find_by_ids(self, license_ids: Iterable[uuid.UUID]) -> Dict[uuid.UUID, License]:
        return {
            model.id: self._to_domain(model)
            for model in LicenseModel.objects.filter(id__in=list(license_ids))
        }

    def find_key_owners(self, keys: Iterable[str]) -> Dict[str, str]:
        rows = LicenseModel.objects.filter(key__in=list(keys)).values_list("key", "name")
        return {key: name for key, name in rows}

    def list_all(self) -> List[License]:
        return [self._to_domain(model) for model in LicenseModel.objects.order_by("-created_at")]

    def list_renewable(self) -> List[License]:
        queryset = LicenseModel.objects.exclude(renewal_cycle=RenewalCycle.MANUAL.value)
        return [self._to_domain(model) for model in queryset]

    def count_active_assignments(self, license_id: uuid.UUID) -> int:
        return self.active_assignment_counts([license_id]).get(license_id, 0)

    def active_assignment_counts(self, license_ids: Iterable[uuid.UUID]) -> Dict[uuid.UUID, int]:
        rows = (
            LicenseModel.objects.filter(id__in=list(license_ids))
            .annotate(
                active=Count("assignments", filter=Q(assignments__returned_date__isnull=True))
            )
            .values_list("id", "active")
        )
        return {license_id: active for license_id, active in rows}

    def delete(self, license_id: uuid.UUID) -> None:
        LicenseModel.objects.filter(id=license_id).delete()
