"""Spreadsheet builders for upload tests."""

import csv
import io
from typing import Any

from app.services.importer.row_mapper import TEMPLATE_COLUMNS


def make_csv(rows: list[dict[str, Any]], columns: tuple[str, ...] = TEMPLATE_COLUMNS) -> bytes:
    """Render rows under the template header."""
    output = io.StringIO()
    writer = csv.DictWriter(output, fieldnames=list(columns), lineterminator="\n")
    writer.writeheader()
    for row in rows:
        writer.writerow(row)
    return output.getvalue().encode("utf-8")


def make_row(**overrides: Any) -> dict[str, Any]:
    row = {
        "text": "Capital of India?",
        "optionA": "Mumbai",
        "optionB": "New Delhi",
        "optionC": "Kolkata",
        "optionD": "Chennai",
        "answer": "B",
        "subject": "GK",
        "exam": "SSC",
        "difficulty": "Easy",
    }
    row.update(overrides)
    return row
