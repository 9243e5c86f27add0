"""
Unit tests for import templates.
"""
import csv
import io

import pytest

from imports.domain.parsing import ImportType
from imports.domain.templates import BOM, TEMPLATES, template_csv


@pytest.mark.parametrize("import_type", list(ImportType))
def test_template_parses_back_with_its_headers(import_type):
    content = template_csv(import_type)

    assert content.startswith(BOM)
    rows = list(csv.reader(io.StringIO(content[len(BOM):])))
    template = TEMPLATES[import_type]
    assert tuple(rows[0]) == template.headers
    assert all(len(row) == len(template.headers) for row in rows[1:])
    assert template.missing_headers(rows[0]) == []


def test_missing_headers():
    template = TEMPLATES[ImportType.SEATS]
    assert template.missing_headers(["licenseName"]) == ["key"]
