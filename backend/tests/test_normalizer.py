"""Tests for the record normalizer."""

import pytest

from app.services.normalizer import (
    BatchOverrides,
    IndexAnswer,
    LetterAnswer,
    TextAnswer,
    coerce_positive_number,
    normalize_question,
    parse_tags,
    resolve_answer,
    resolve_number,
)

OPTIONS = ["alpha", "beta", "gamma", "delta"]


def _fields(**overrides):
    fields = {"text": "Pick one", "options": list(OPTIONS)}
    fields.update(overrides)
    return fields


class TestResolveAnswer:
    @pytest.mark.parametrize(
        "letter,index",
        [("A", 0), ("B", 1), ("C", 2), ("D", 3), ("a", 0), (" d ", 3)],
    )
    def test_valid_letters(self, letter, index):
        resolved = resolve_answer(OPTIONS, LetterAnswer(letter))
        assert resolved.index == index
        assert resolved.letter == "ABCD"[index]
        assert resolved.text == OPTIONS[index]
        assert resolved.reason is None

    @pytest.mark.parametrize("letter", ["E", "", "z", None, "AB", "1"])
    def test_unknown_letters_fail_open(self, letter):
        resolved = resolve_answer(OPTIONS, LetterAnswer(letter))
        assert resolved.index is None
        assert resolved.letter is None
        assert resolved.text == ""
        assert resolved.reason

    def test_unknown_letter_keeps_fallback_text(self):
        resolved = resolve_answer(OPTIONS, LetterAnswer("E"), fallback_text="legacy")
        assert resolved.text == "legacy"

    def test_letter_without_matching_option(self):
        resolved = resolve_answer(["x", "y"], LetterAnswer("D"))
        assert resolved.index is None
        assert "no option" in resolved.reason

    def test_index_form(self):
        resolved = resolve_answer(["a", "b", "c", "d"], IndexAnswer(2))
        assert (resolved.index, resolved.letter, resolved.text) == (2, "C", "c")

    def test_letter_pointing_at_blank_option(self):
        resolved = resolve_answer(["a", "b", "c", "  "], LetterAnswer("D"))
        assert resolved.index is None
        assert "no option" in resolved.reason

    def test_index_pointing_at_blank_option(self):
        resolved = resolve_answer(["a", "", "c", "d"], IndexAnswer(1))
        assert resolved.index is None
        assert resolved.letter is None

    def test_index_out_of_range(self):
        resolved = resolve_answer(["a", "b"], IndexAnswer(3), fallback_text="b")
        assert resolved.index is None
        assert resolved.text == "b"

    def test_text_form_matches_exactly_then_loosely(self):
        assert resolve_answer(OPTIONS, TextAnswer("gamma")).index == 2
        assert resolve_answer(OPTIONS, TextAnswer("  Delta ")).index == 3

    def test_text_form_unmatched_keeps_text(self):
        resolved = resolve_answer(OPTIONS, TextAnswer("omega"))
        assert resolved.index is None
        assert resolved.text == "omega"


class TestFieldHelpers:
    def test_tag_string_is_split_and_trimmed(self):
        assert parse_tags("algebra, math ,ssc") == ["algebra", "math", "ssc"]

    def test_tag_string_drops_empty_tokens(self):
        assert parse_tags(",a,, ,b,") == ["a", "b"]

    def test_tag_sequence_used_as_is(self):
        assert parse_tags(["x ", "y"]) == ["x ", "y"]

    def test_missing_tags(self):
        assert parse_tags(None) == []
        assert parse_tags("") == []

    @pytest.mark.parametrize(
        "value,expected",
        [("5", 5), (5.0, 5), ("2.5", 2.5), (3, 3), ("abc", None), ("", None), (0, None), ("-1", None), (None, None)],
    )
    def test_coerce_positive_number(self, value, expected):
        assert coerce_positive_number(value) == expected

    def test_number_resolution_order(self):
        assert resolve_number("6", "4", 1) == 6
        assert resolve_number(None, "4", 1) == 4
        assert resolve_number("oops", None, 60) == 60
        assert resolve_number(None, "oops", 60) == 60


class TestNormalizeQuestion:
    def test_defaults(self):
        row = normalize_question(_fields(), LetterAnswer("A"))
        record = row.record
        assert not row.degraded
        assert record["marks"] == 4
        assert record["timeLimit"] == 60
        assert record["type"] == "static"
        assert record["tags"] == []
        assert record["solution"] == ""
        assert record["blooms"] == ""
        assert record["answer"] == "alpha"
        assert record["correctOptionIndex"] == 0
        assert record["correctOptionLetter"] == "A"

    def test_row_value_beats_batch_override(self):
        overrides = BatchOverrides(marks="2", time_limit="90", blooms="Apply", type="power")
        record = normalize_question(
            _fields(marks=5, timeLimit="30", blooms="Recall", type="static"),
            LetterAnswer("A"),
            overrides,
        ).record
        assert record["marks"] == 5
        assert record["timeLimit"] == 30
        assert record["blooms"] == "Recall"
        assert record["type"] == "static"

    def test_batch_override_fills_blank_row_values(self):
        overrides = BatchOverrides(marks="2", time_limit="90", blooms="Apply", type="power")
        record = normalize_question(_fields(), LetterAnswer("A"), overrides).record
        assert record["marks"] == 2
        assert record["timeLimit"] == 90
        assert record["blooms"] == "Apply"
        assert record["type"] == "power"

    def test_unknown_type_falls_back_to_static(self):
        record = normalize_question(_fields(type="dynamic"), LetterAnswer("A")).record
        assert record["type"] == "static"

    def test_bad_answer_degrades_instead_of_raising(self):
        row = normalize_question(_fields(), LetterAnswer("E"))
        assert row.degraded
        assert row.record["correctOptionIndex"] is None
        assert row.record["correctOptionLetter"] is None
        assert row.record["answer"] == ""
        assert row.record["text"] == "Pick one"

    def test_empty_text_degrades(self):
        row = normalize_question(_fields(text="   "), LetterAnswer("A"))
        assert row.degraded
        assert "question text is empty" in row.reasons

    def test_index_form_overrides_supplied_answer_text(self):
        record = normalize_question(
            {"text": "q", "options": ["a", "b", "c", "d"], "answer": "a"},
            IndexAnswer(2),
        ).record
        assert record["correctOptionLetter"] == "C"
        assert record["answer"] == "c"

    def test_numeric_cells_become_option_text(self):
        record = normalize_question(_fields(options=[1.0, 2.5, None, "x"]), LetterAnswer("A")).record
        assert record["options"] == ["1", "2.5", "", "x"]
