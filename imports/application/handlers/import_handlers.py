"""
CSV import handlers.
"""
import dataclasses
import logging
from dataclasses import dataclass
from typing import Any, Optional

from core.domain.exceptions import DomainException, ImportRejectedError
from core.infrastructure.database import run_in_transaction
from core.infrastructure.events import event_bus
from core.metrics import csv_imports_total
from imports.application.csv_reader import read_csv_upload
from imports.application.importers.assignment_importer import AssignmentImporter
from imports.application.importers.base import ImportContext
from imports.application.importers.employee_importer import EmployeeImporter
from imports.application.importers.group_importer import GroupImporter
from imports.application.importers.license_importer import LicenseImporter
from imports.application.importers.seat_importer import SeatImporter
from imports.domain.events import CsvImported
from imports.domain.parsing import ImportResult, ImportType
from imports.domain.templates import template_csv

logger = logging.getLogger(__name__)

IMPORTERS = {
    ImportType.LICENSES: LicenseImporter,
    ImportType.EMPLOYEES: EmployeeImporter,
    ImportType.GROUPS: GroupImporter,
    ImportType.ASSIGNMENTS: AssignmentImporter,
    ImportType.SEATS: SeatImporter,
}


def parse_import_type(value: Optional[str]) -> ImportType:
    """
    Raises:
        ImportRejectedError: If the value names no import type
    """
    try:
        return ImportType((value or "").strip().lower())
    except ValueError as exc:
        allowed = ", ".join(import_type.value for import_type in ImportType)
        raise ImportRejectedError(f"Select an import type ({allowed}).") from exc


@dataclass
class ImportCsvCommand:
    """Command to import an uploaded CSV file."""

    import_type: Optional[str]
    upload: Any
    actor: Optional[str] = None


class ImportCsvHandler:
    """Handler for ImportCsvCommand."""

    def __init__(self, context: ImportContext):
        self.context = context

    async def handle(self, command: ImportCsvCommand) -> ImportResult:
        """
        Handle import CSV command.

        Rejections and domain errors come back as an unsuccessful result
        rather than an exception.
        """
        try:
            import_type = parse_import_type(command.import_type)
        except ImportRejectedError as exc:
            csv_imports_total.labels(type="unknown", outcome="rejected").inc()
            return ImportResult.rejected(exc.message)

        try:
            rows = read_csv_upload(command.upload, import_type)
        except ImportRejectedError as exc:
            csv_imports_total.labels(type=import_type.value, outcome="rejected").inc()
            return ImportResult.rejected(exc.message)

        importer = IMPORTERS[import_type](dataclasses.replace(self.context, actor=command.actor))
        try:
            result = await run_in_transaction(importer.run, rows)
        except DomainException as exc:
            logger.warning(
                "%s import rolled back: %s",
                import_type.value,
                exc.message,
                extra={"import_type": import_type.value, "error_code": exc.code},
            )
            result = ImportResult.rejected(exc.message)

        outcome = "success" if result.success else "invalid"
        csv_imports_total.labels(type=import_type.value, outcome=outcome).inc()
        if result.success:
            logger.info(
                "%s import committed",
                import_type.value,
                extra={
                    "import_type": import_type.value,
                    "created": result.created,
                    "updated": result.updated,
                },
            )
            await event_bus.publish(
                CsvImported(import_type.value, created=result.created, updated=result.updated)
            )
        return result


class GetTemplateHandler:
    """Handler returning the template CSV of an import type."""

    async def handle(self, import_type: str) -> str:
        """
        Raises:
            ImportRejectedError: If the import type is unknown
        """
        return template_csv(parse_import_type(import_type))
