"""Tests for id coercion and value helpers."""

import math

import pytest

from app.bulk.validators import (
    clean_value,
    dedup_key,
    is_blank,
    partition_ids,
    validate_id,
    validate_ids,
)


class TestValidateId:
    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            (5, 5),
            ("7", 7),
            (" 8 ", 8),
            (3.5, 3),
            ("3.5", 3),
            (-2.7, -2),
            ("-2.7", -2),
            ("+4", 4),
            ("12.", 12),
        ],
    )
    def test_accepted(self, raw, expected):
        assert validate_id(raw) == expected

    @pytest.mark.parametrize(
        "raw",
        [
            None,
            True,
            False,
            "abc",
            "",
            math.nan,
            math.inf,
            "NaN",
            "-Infinity",
            "1e2",
            "1_000",
            "0x10",
            ".5",
            [1],
            {"id": 1},
        ],
    )
    def test_rejected(self, raw):
        assert validate_id(raw) is None


def test_validate_ids_filters_and_keeps_order():
    assert validate_ids(["1", 2, "abc", None, 3.5]) == [1, 2, 3]


def test_partition_ids_returns_rejected_values():
    valid, rejected = partition_ids([4, "x", None, "5"])

    assert valid == [4, 5]
    assert rejected == ["x", None]


def test_clean_value():
    assert clean_value(None) == ""
    assert clean_value("  PLA ") == "PLA"
    assert clean_value(1.75) == "1.75"


def test_is_blank():
    assert is_blank(None)
    assert is_blank("   ")
    assert not is_blank(0)


def test_dedup_key_is_case_insensitive_and_composite():
    assert dedup_key("Black", "#000000") == dedup_key(" black ", "#000000")
    assert dedup_key("a b", "c") != dedup_key("a", "b c")


def test_exponent_strings_are_rejected_without_expanding():
    assert validate_id("1e999999999") is None
    assert validate_id("1E5") is None


def test_overlong_digit_string_is_rejected():
    assert validate_id("9" * 100_000) is None
