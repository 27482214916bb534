"""Tests for person attribute validation."""

from __future__ import annotations

import pytest

from familytree.errors import ValidationError
from familytree.tree.validation import clean_person_fields, parse_date, parse_gender


class TestParseDate:
    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("1920", "1920"),
            ("1990-05-01", "1990-05-01"),
            (" 1990-05-01 ", "1990-05-01"),
            ("1990-05-01T10:30", "1990-05-01"),
            ("1990-05-01T10:30:00Z", "1990-05-01"),
            ("1990-05-01 10:30:00.123+02:00", "1990-05-01"),
            ("", None),
            (None, None),
        ],
    )
    def test_accepted_forms(self, raw, expected) -> None:
        assert parse_date("birth_date", raw) == expected

    @pytest.mark.parametrize(
        "raw",
        ["1990-05-01garbage", "1990-13-01", "1990-5-1", "19900501", "920", "soon", "1990-05-01T25:00"],
    )
    def test_rejects_anything_else(self, raw) -> None:
        with pytest.raises(ValidationError, match="Invalid birth_date"):
            parse_date("birth_date", raw)


class TestParseGender:
    @pytest.mark.parametrize("raw, expected", [("m", "M"), ("Female", "F"), (" ", None)])
    def test_aliases(self, raw, expected) -> None:
        assert parse_gender(raw) == expected

    def test_rejects_unknown_marker(self) -> None:
        with pytest.raises(ValidationError):
            parse_gender("X")


class TestCleanPersonFields:
    def test_partial_update_keeps_only_given_keys(self) -> None:
        cleaned = clean_person_fields(
            {"wedding_anniversary": "1975-06-21", "last_name": "  "}, require_first_name=False
        )
        assert cleaned == {"wedding_anniversary": "1975-06-21", "last_name": None}

    def test_unknown_field(self) -> None:
        with pytest.raises(ValidationError, match="Cannot set field"):
            clean_person_fields({"first_name": "A", "nickname": "B"}, require_first_name=True)
