"""
Seat key CSV importer.

Fills the keyless seats of key-based licenses with the keys of the file, in
seat id order.
"""
from collections import defaultdict
from dataclasses import dataclass
from typing import Dict, List, Optional

from imports.application.importers.base import Importer
from imports.domain.parsing import (
    ImportResult,
    ImportType,
    RowError,
    duplicate_key_errors,
    first_rows_by_key,
    require_field,
    row_number,
)
from licenses.domain.seat import Seat


@dataclass
class SeatRow:
    row: int
    license_name: Optional[str]
    key: Optional[str]


@dataclass
class SeatFill:
    seat: Seat
    key: str


class SeatImporter(Importer):
    """Importer for the ``seats`` CSV."""

    import_type = ImportType.SEATS

    def validate(self, rows, errors) -> Optional[List[SeatFill]]:
        parsed = [
            SeatRow(
                row=row_number(i),
                license_name=require_field(raw.get("licenseName"), row_number(i), "licenseName",
                                           errors),
                key=require_field(raw.get("key"), row_number(i), "key", errors),
            )
            for i, raw in enumerate(rows)
        ]
        if errors:
            return None

        errors.extend(duplicate_key_errors(parsed))
        first_rows = first_rows_by_key(parsed)
        for key, owner in self.context.seat_repository.find_key_owners(first_rows).items():
            errors.append(
                RowError(first_rows[key], "key",
                         f'Key "{key}" is already registered on a seat of "{owner}".')
            )
        if errors:
            return None

        by_license: Dict[str, List[SeatRow]] = defaultdict(list)
        for row in parsed:
            by_license[row.license_name].append(row)
        licenses = self.context.license_repository.find_by_names(by_license)

        fills: List[SeatFill] = []
        for name, license_rows in by_license.items():
            license = licenses.get(name)
            if license is None:
                errors.extend(
                    RowError(row.row, "licenseName", f'License "{name}" not found.')
                    for row in license_rows
                )
                continue
            if not license.is_key_based:
                errors.extend(
                    RowError(row.row, "licenseName",
                             f'"{name}" is a {license.license_type.label} license; '
                             "seat keys can only be imported for individual key licenses.")
                    for row in license_rows
                )
                continue

            empty = [
                seat for seat in self.context.seat_repository.list_for_license(license.id)
                if not seat.has_key
            ]
            for position, row in enumerate(license_rows):
                if position >= len(empty):
                    errors.append(
                        RowError(row.row, "key",
                                 f'"{name}": no empty seat left for key {position + 1} '
                                 f"({len(license_rows)} requested, {len(empty)} empty).")
                    )
                    continue
                fills.append(SeatFill(seat=empty[position], key=row.key))
        return fills

    def write(self, plan: List[SeatFill]) -> ImportResult:
        for fill in plan:
            self.context.seat_repository.set_key(fill.seat.id, fill.key)
        return ImportResult(success=True, updated=len(plan))
