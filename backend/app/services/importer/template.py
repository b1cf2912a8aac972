"""Downloadable bulk-upload template."""

import csv
import io

from app.services.importer.row_mapper import TEMPLATE_COLUMNS

TEMPLATE_FILENAME = "bulk_upload_template.csv"

EXAMPLE_ROW: dict[str, str] = {
    "text": "What is the value of 2 + 3 x 4?",
    "optionA": "20",
    "optionB": "14",
    "optionC": "24",
    "optionD": "10",
    "answer": "B",
    "solution": "Multiplication comes before addition: 3 x 4 = 12, 12 + 2 = 14.",
    "subject": "Mathematics",
    "exam": "SSC CGL",
    "difficulty": "Easy",
    "tags": "arithmetic, bodmas",
    "marks": "4",
    "timeLimit": "60",
    "blooms": "Apply",
    "type": "static",
}


def build_template_csv() -> str:
    """Header row plus one filled-in example row."""
    output = io.StringIO()
    writer = csv.DictWriter(output, fieldnames=list(TEMPLATE_COLUMNS), lineterminator="\n")
    writer.writeheader()
    writer.writerow(EXAMPLE_ROW)
    return output.getvalue()
