"""Import engine for bulk question uploads."""

from app.services.importer.row_mapper import TEMPLATE_COLUMNS, RowMapper
from app.services.importer.spreadsheet_parser import SpreadsheetParseError, SpreadsheetParser
from app.services.importer.writer import QuestionWriter

__all__ = [
    "RowMapper",
    "SpreadsheetParseError",
    "SpreadsheetParser",
    "QuestionWriter",
    "TEMPLATE_COLUMNS",
]
