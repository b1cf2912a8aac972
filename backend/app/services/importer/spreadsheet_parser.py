"""Spreadsheet parser for the bulk importer (CSV and XLSX)."""

import csv
import io
import zipfile
from pathlib import PurePath
from typing import Any

from openpyxl import load_workbook
from openpyxl.utils.exceptions import InvalidFileException

XLSX_SUFFIXES = {".xlsx", ".xlsm"}
XLSX_CONTENT_TYPES = {
    "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
    "application/vnd.ms-excel.sheet.macroenabled.12",
}


class SpreadsheetParseError(Exception):
    """Uploaded file could not be read as a spreadsheet."""

    pass


class SpreadsheetParser:
    """Parse an uploaded spreadsheet into ``(row_number, row_dict)`` pairs.

    Row 1 is the header; data rows are numbered from 2 as they appear in the
    sheet. Completely blank rows are dropped. The whole file is read eagerly.
    """

    def __init__(self, filename: str | None = None, content_type: str | None = None, encoding: str = "utf-8-sig"):
        self.filename = filename or ""
        self.content_type = (content_type or "").lower()
        self.encoding = encoding

    def is_xlsx(self, file_content: bytes) -> bool:
        if PurePath(self.filename.lower()).suffix in XLSX_SUFFIXES:
            return True
        if self.content_type in XLSX_CONTENT_TYPES:
            return True
        # XLSX files are zip archives
        return file_content[:4] == b"PK\x03\x04"

    def parse(self, file_content: bytes) -> list[tuple[int, dict[str, Any]]]:
        """
        Parse file content.

        Args:
            file_content: Raw file bytes

        Returns:
            List of (row_number, row_dict) in sheet order

        Raises:
            SpreadsheetParseError: If file cannot be parsed
        """
        if not file_content:
            raise SpreadsheetParseError("File is empty")
        if self.is_xlsx(file_content):
            return self._parse_xlsx(file_content)
        return self._parse_csv(file_content)

    def _parse_csv(self, file_content: bytes) -> list[tuple[int, dict[str, Any]]]:
        try:
            text_content = file_content.decode(self.encoding)
        except UnicodeDecodeError as e:
            raise SpreadsheetParseError(f"Failed to decode file with encoding {self.encoding}: {e}")

        try:
            reader = csv.reader(io.StringIO(text_content))
            rows = list(reader)
        except csv.Error as e:
            raise SpreadsheetParseError(f"CSV parsing error: {e}")

        return self._rows_to_dicts(rows)

    def _parse_xlsx(self, file_content: bytes) -> list[tuple[int, dict[str, Any]]]:
        try:
            workbook = load_workbook(io.BytesIO(file_content), read_only=True, data_only=True)
        except (InvalidFileException, zipfile.BadZipFile, KeyError, OSError, ValueError) as e:
            raise SpreadsheetParseError(f"XLSX parsing error: {e}")
        except Exception as e:
            raise SpreadsheetParseError(f"Unexpected error reading workbook: {e}")

        try:
            sheet = workbook.worksheets[0]
            rows = [list(values) for values in sheet.iter_rows(values_only=True)]
        finally:
            workbook.close()

        return self._rows_to_dicts(rows)

    @staticmethod
    def _rows_to_dicts(rows: list[list[Any]]) -> list[tuple[int, dict[str, Any]]]:
        if not rows:
            raise SpreadsheetParseError("Spreadsheet has no header row")

        header = [str(cell).strip() if cell is not None else "" for cell in rows[0]]
        if not any(header):
            raise SpreadsheetParseError("Spreadsheet has no header row")

        parsed: list[tuple[int, dict[str, Any]]] = []
        for row_number, values in enumerate(rows[1:], start=2):  # 1 is header
            if all(v is None or (isinstance(v, str) and not v.strip()) for v in values):
                continue
            row = {
                column: value
                for column, value in zip(header, values)
                if column  # drop cells under blank headers
            }
            parsed.append((row_number, row))
        return parsed
