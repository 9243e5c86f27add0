"""
CSV upload reader.

Checks an uploaded file and turns it into header-keyed rows. Nothing touches
the database here.
"""
import csv
import io
from typing import Dict, List

from django.conf import settings

from core.domain.exceptions import ImportRejectedError
from imports.domain.parsing import ImportType
from imports.domain.templates import BOM, TEMPLATES

DEFAULT_MAX_UPLOAD_BYTES = 5 * 1024 * 1024


def _clean_header(header: str) -> str:
    return (header or "").replace(BOM, "").strip()


def read_csv_upload(upload, import_type: ImportType) -> List[Dict[str, str]]:
    """
    Validate an upload and parse it into rows.

    Args:
        upload: Uploaded file with ``name``, ``size`` and ``read()``
        import_type: Import type whose required headers are checked

    Returns:
        One dict per non-empty data line, keyed by trimmed header

    Raises:
        ImportRejectedError: If the file is missing, too large, not a CSV,
            empty or lacks required headers
    """
    max_bytes = getattr(settings, "IMPORT_MAX_UPLOAD_BYTES", DEFAULT_MAX_UPLOAD_BYTES)
    if upload is None or not upload.size:
        raise ImportRejectedError("Select a CSV file.")
    if upload.size > max_bytes:
        raise ImportRejectedError(f"File exceeds {max_bytes // (1024 * 1024)}MB.")
    if not (upload.name or "").lower().endswith(".csv"):
        raise ImportRejectedError("Only CSV files can be uploaded.")

    try:
        text = upload.read().decode("utf-8")
    except UnicodeDecodeError as exc:
        raise ImportRejectedError("File is not UTF-8 encoded.") from exc

    reader = csv.DictReader(io.StringIO(text))
    headers = [_clean_header(header) for header in (reader.fieldnames or [])]
    reader.fieldnames = headers

    rows = []
    for raw in reader:
        row = {key: (value or "") for key, value in raw.items() if key is not None}
        if not any(value.strip() for value in row.values()):
            continue
        rows.append(row)

    if not rows:
        raise ImportRejectedError("The CSV file has no data rows.")

    template = TEMPLATES[import_type]
    missing = template.missing_headers(headers)
    if missing:
        raise ImportRejectedError(
            f"Missing required headers: {', '.join(missing)} "
            f"(expected headers: {', '.join(template.headers)})"
        )
    return rows
