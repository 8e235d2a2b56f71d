"""
Tests for display number formatting
"""
import pytest

from evaluator import to_canonical
from number_formatter import format_number, is_number, unformat_number


@pytest.mark.parametrize(
    "text, expected",
    [
        ("0", "0"),
        ("999", "999"),
        ("1000", "1,000"),
        ("1234567", "1,234,567"),
        ("-1234", "-1,234"),
        ("1234.5678", "1,234.5678"),
        ("1234567.1234567", "1,234,567.1234567"),
        ("0.00001", "0.00001"),
    ],
)
def test_groups_integer_part(text, expected):
    assert format_number(text) == expected


@pytest.mark.parametrize("text", ["Error", "Infinity", "NaN", "abc", "", "1_000", " 12"])
def test_passes_through_non_numbers(text):
    assert format_number(text) == text


def test_custom_separator():
    assert format_number("1234567", separator=" ") == "1 234 567"


@pytest.mark.parametrize("value", [0.0, 7.0, -1234567.25, 98765.4321, 1234567890.0123456789, 1e20])
def test_round_trip(value):
    text = to_canonical(value)
    assert float(unformat_number(format_number(text))) == float(text)


def test_is_number():
    assert is_number("12.5")
    assert is_number("0.")
    assert is_number("-3")
    assert is_number("1e+21")
    assert not is_number("Error")
    assert not is_number("inf")
    assert not is_number("1e999")
    assert not is_number(None)
