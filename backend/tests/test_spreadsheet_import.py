"""Tests for spreadsheet parsing and row mapping."""

import io

import pytest
from openpyxl import Workbook

from app.services.importer import RowMapper, SpreadsheetParseError, SpreadsheetParser
from app.services.importer.template import build_template_csv
from app.services.normalizer import LetterAnswer


def _xlsx(rows: list[list]) -> bytes:
    workbook = Workbook()
    sheet = workbook.active
    for row in rows:
        sheet.append(row)
    buffer = io.BytesIO()
    workbook.save(buffer)
    return buffer.getvalue()


class TestSpreadsheetParser:
    def test_csv_rows_numbered_from_two(self):
        content = b"text,optionA,answer\nQ1,x,A\nQ2,y,B\n"
        rows = SpreadsheetParser("upload.csv").parse(content)
        assert rows == [
            (2, {"text": "Q1", "optionA": "x", "answer": "A"}),
            (3, {"text": "Q2", "optionA": "y", "answer": "B"}),
        ]

    def test_csv_with_bom_and_blank_rows(self):
        content = "﻿text,answer\nQ1,A\n,\n\nQ2,C\n".encode("utf-8")
        rows = SpreadsheetParser("upload.csv").parse(content)
        assert [number for number, _ in rows] == [2, 5]
        assert rows[0][1]["text"] == "Q1"

    def test_csv_cells_under_blank_headers_dropped(self):
        rows = SpreadsheetParser("upload.csv").parse(b"text,,answer\nQ1,junk,A\n")
        assert rows == [(2, {"text": "Q1", "answer": "A"})]

    def test_xlsx_first_sheet(self):
        content = _xlsx([["text", "optionA", "marks"], ["Q1", 42, 5]])
        rows = SpreadsheetParser("upload.xlsx").parse(content)
        assert rows == [(2, {"text": "Q1", "optionA": 42, "marks": 5})]

    def test_xlsx_detected_without_extension(self):
        content = _xlsx([["text"], ["Q1"]])
        rows = SpreadsheetParser("upload").parse(content)
        assert rows == [(2, {"text": "Q1"})]

    def test_corrupt_xlsx_raises(self):
        with pytest.raises(SpreadsheetParseError):
            SpreadsheetParser("upload.xlsx").parse(b"PK\x03\x04 not really a workbook")

    def test_undecodable_csv_raises(self):
        with pytest.raises(SpreadsheetParseError):
            SpreadsheetParser("upload.csv").parse(b"\xff\xfe\x00bad")

    def test_empty_file_raises(self):
        with pytest.raises(SpreadsheetParseError):
            SpreadsheetParser("upload.csv").parse(b"")


class TestRowMapper:
    def test_maps_columns_and_answer(self):
        fields, answer = RowMapper().map_row(
            {
                "text": "Q",
                "optionA": "a",
                "optionB": "b",
                "optionC": "c",
                "optionD": "d",
                "answer": "c",
                "timeLimit": "45",
                "tags": "x, y",
                "unknown": "ignored",
            }
        )
        assert fields["text"] == "Q"
        assert fields["options"] == ["a", "b", "c", "d"]
        assert fields["timeLimit"] == "45"
        assert fields["tags"] == "x, y"
        assert "unknown" not in fields
        assert answer == LetterAnswer("c")

    def test_header_matching_ignores_case(self):
        fields, answer = RowMapper().map_row({" Text ": "Q", "OPTIONA": "a", "TimeLimit": 30, "Answer": "A"})
        assert fields["text"] == "Q"
        assert fields["options"] == ["a", None, None, None]
        assert fields["timeLimit"] == 30
        assert answer == LetterAnswer("A")

    def test_missing_answer_column(self):
        _, answer = RowMapper().map_row({"text": "Q"})
        assert answer == LetterAnswer(None)


def test_template_round_trips_through_parser():
    rows = SpreadsheetParser("template.csv").parse(build_template_csv().encode("utf-8"))
    assert len(rows) == 1
    _, row = rows[0]
    assert row["answer"] == "B"
    assert set(row) >= {"text", "optionA", "optionD", "marks", "timeLimit", "blooms", "type"}
