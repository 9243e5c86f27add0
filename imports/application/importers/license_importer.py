"""
License CSV importer.

Upserts licenses by name and reconciles the seats of key-based licenses.
"""
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Dict, List, Optional

from django.utils import timezone

from core.domain.exceptions import ValidationError
from core.domain.value_objects import LicenseType
from imports.application.importers.base import Importer
from imports.domain.parsing import (
    ImportResult,
    ImportType,
    RowError,
    clean,
    duplicate_key_errors,
    first_rows_by_key,
    parse_date,
    parse_integer,
    parse_license_type,
    parse_number,
    require_field,
    row_number,
)
from licenses.domain.license import License
from licenses.domain.services import LicenseCalculator, LicenseCapacity

# Entity fields reported under a different CSV column.
_COLUMNS = {
    "total_quantity": "totalQuantity",
    "purchase_date": "purchaseDate",
    "notice_period_days": "noticePeriodDays",
    "license_type": "licenseType",
}


@dataclass
class LicenseRow:
    row: int
    name: Optional[str]
    total_quantity: Optional[int]
    purchase_date: Optional[date]
    license_type: Optional[LicenseType]
    key: Optional[str]
    price: Optional[Decimal]
    expiry_date: Optional[date]
    contract_date: Optional[date]
    notice_period_days: Optional[int]
    admin_name: Optional[str]
    description: Optional[str]

    def fields(self, license_type: LicenseType) -> dict:
        return {
            "name": self.name,
            "license_type": license_type,
            "total_quantity": self.total_quantity,
            "purchase_date": self.purchase_date,
            "key": self.key,
            "price": self.price,
            "expiry_date": self.expiry_date,
            "contract_date": self.contract_date,
            "notice_period_days": self.notice_period_days,
            "admin_name": self.admin_name,
            "description": self.description,
        }


@dataclass
class LicensePlan:
    rows: List[LicenseRow]
    types: Dict[int, LicenseType]


class LicenseImporter(Importer):
    """Importer for the ``licenses`` CSV."""

    import_type = ImportType.LICENSES

    def _parse(self, raw: Dict[str, str], row: int, errors: List[RowError]) -> LicenseRow:
        return LicenseRow(
            row=row,
            name=require_field(raw.get("name"), row, "name", errors),
            total_quantity=parse_integer(
                raw.get("totalQuantity"), row, "totalQuantity", errors, required=True
            ),
            purchase_date=parse_date(
                raw.get("purchaseDate"), row, "purchaseDate", errors, required=True
            ),
            license_type=parse_license_type(
                raw.get("licenseType"), raw.get("isVolumeLicense"), row, errors
            ),
            key=clean(raw.get("key")),
            price=parse_number(raw.get("price"), row, "price", errors),
            expiry_date=parse_date(raw.get("expiryDate"), row, "expiryDate", errors),
            contract_date=parse_date(raw.get("contractDate"), row, "contractDate", errors),
            notice_period_days=parse_integer(
                raw.get("noticePeriodDays"), row, "noticePeriodDays", errors
            ),
            admin_name=clean(raw.get("adminName")),
            description=clean(raw.get("description")),
        )

    def validate(self, rows, errors) -> Optional[LicensePlan]:
        parsed = [self._parse(raw, row_number(i), errors) for i, raw in enumerate(rows)]
        if errors:
            return None

        repo = self.context.license_repository
        existing = repo.find_by_names({row.name for row in parsed})
        types = {
            row.row: row.license_type
            or (existing[row.name].license_type if row.name in existing else LicenseType.KEY_BASED)
            for row in parsed
        }

        for row in parsed:
            try:
                License.create(**row.fields(types[row.row]))
            except ValidationError as exc:
                errors.append(RowError(row.row, _COLUMNS.get(exc.field, exc.field or ""), exc.message))

        errors.extend(duplicate_key_errors(parsed))

        first_rows = first_rows_by_key(parsed)
        csv_names = {row.name for row in parsed}
        for key, owner in repo.find_key_owners(first_rows).items():
            if owner not in csv_names:
                errors.append(
                    RowError(first_rows[key], "key",
                             f'Key "{key}" is already registered to license "{owner}".')
                )

        self._check_capacity(parsed, existing, types, errors)
        return LicensePlan(rows=parsed, types=types)

    def _check_capacity(self, parsed, existing, types, errors) -> None:
        if not existing:
            return
        ids = [license.id for license in existing.values()]
        active = self.context.license_repository.active_assignment_counts(ids)
        assigned_seats = self.context.seat_repository.assigned_seat_counts(ids)

        for row in parsed:
            current = existing.get(row.name)
            if current is None:
                continue
            active_count = active.get(current.id, 0)
            new_type = types[row.row]
            if new_type is not current.license_type and active_count:
                errors.append(
                    RowError(row.row, "licenseType",
                             f"License has {active_count} active assignment(s); the type "
                             f"cannot change from {current.license_type.value} to {new_type.value}.")
                )
                continue
            minimum = LicenseCapacity.minimum_quantity(
                current.with_changes(license_type=new_type),
                active_count,
                assigned_seats.get(current.id, 0),
            )
            if row.total_quantity < minimum:
                errors.append(
                    RowError(row.row, "totalQuantity",
                             f"{minimum} unit(s) are assigned, so the quantity cannot be below "
                             f"{minimum} (given {row.total_quantity}).")
                )

    def write(self, plan: LicensePlan) -> ImportResult:
        repo = self.context.license_repository
        seat_inventory = self.context.seat_inventory
        today = timezone.localdate()
        created = updated = 0

        for row in plan.rows:
            fields = row.fields(plan.types[row.row])
            current = repo.find_by_name(row.name)
            if current:
                license = current.with_changes(**fields)
                updated += 1
            else:
                license = License.create(**fields)
                created += 1
            saved = repo.save(LicenseCalculator.with_derived_fields(license, today))

            if current and current.is_key_based and not saved.is_key_based:
                seat_inventory.delete_all_seats(saved.id)
            else:
                seat_inventory.sync_seats(saved.id, saved.total_quantity)

        return ImportResult(success=True, created=created, updated=updated)
