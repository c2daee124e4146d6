"""
Tests for src/config/coercion.py

These tests verify that each coercion either returns a correctly typed value
or raises ValueError, and never falls back to a guess.
"""

import pytest

from src.config.coercion import (
    as_bool,
    as_enum,
    as_float,
    as_int,
    as_list,
    as_port,
    as_positive_int,
    as_string,
    expected_of,
)


def test_as_string_passes_value_through():
    """Strings are returned unchanged, including whitespace."""
    assert as_string("/") == "/"
    assert as_string("  padded  ") == "  padded  "


@pytest.mark.parametrize("raw", ["true", "TRUE", "True", "1"])
def test_as_bool_true_literals(raw):
    assert as_bool(raw) is True


@pytest.mark.parametrize("raw", ["false", "FALSE", "False", "0"])
def test_as_bool_false_literals(raw):
    """
    "false" must become False.

    **Conceptual**: bool("false") is True in Python. This is the bug class a
    typed loader exists to prevent.
    """
    assert as_bool(raw) is False


@pytest.mark.parametrize("raw", ["yes", "no", "on", "off", "t", "2", " true", "true "])
def test_as_bool_rejects_unrecognised_literals(raw):
    with pytest.raises(ValueError, match="unrecognised boolean literal"):
        as_bool(raw)


def test_as_int_parses_signed_integers():
    assert as_int("42") == 42
    assert as_int("-7") == -7
    assert as_int("0") == 0


@pytest.mark.parametrize("raw", ["007", "00", "-0", "-01"])
def test_as_int_rejects_non_canonical_integers(raw):
    """
    The raw string must read back exactly as the parsed value.

    **Conceptual**: "007" parses to 7, but a value like that in an environment
    is more likely a typo or an octal assumption than a deliberate 7.
    """
    with pytest.raises(ValueError, match="not a canonical integer"):
        as_int(raw)


@pytest.mark.parametrize("raw", ["abc", "1.5", "1e3", " 1", "1_000", "0x10", "-", "", "+3"])
def test_as_int_rejects_non_integers(raw):
    with pytest.raises(ValueError, match="not a base-10 integer"):
        as_int(raw)


def test_as_positive_int_accepts_positive_values():
    assert as_positive_int("1") == 1
    assert as_positive_int("65536") == 65536


@pytest.mark.parametrize("raw", ["0", "-1"])
def test_as_positive_int_rejects_non_positive(raw):
    with pytest.raises(ValueError, match="greater than zero"):
        as_positive_int(raw)


@pytest.mark.parametrize("raw", ["abc", "+3"])
def test_as_positive_int_rejects_non_numeric(raw):
    """Only digits: a sign prefix is not purely numeric."""
    with pytest.raises(ValueError, match="not a base-10 integer"):
        as_positive_int(raw)


def test_as_positive_int_rejects_leading_zeros():
    with pytest.raises(ValueError, match="not a canonical integer"):
        as_positive_int("007")


def test_as_float_parses_numbers():
    assert as_float("0.25") == 0.25
    assert as_float("-3") == -3.0
    assert as_float("1e-3") == pytest.approx(0.001)


@pytest.mark.parametrize("raw", ["nan", "inf", "-inf"])
def test_as_float_rejects_non_finite(raw):
    with pytest.raises(ValueError, match="finite"):
        as_float(raw)


def test_as_float_rejects_text():
    with pytest.raises(ValueError, match="not a number"):
        as_float("fast")


def test_as_port_bounds():
    assert as_port("1") == 1
    assert as_port("65535") == 65535
    with pytest.raises(ValueError, match="out of range"):
        as_port("0")
    with pytest.raises(ValueError, match="out of range"):
        as_port("65536")


def test_as_enum_accepts_only_listed_choices():
    level = as_enum("DEBUG", "INFO")

    assert level("INFO") == "INFO"
    with pytest.raises(ValueError, match="not an allowed value"):
        level("info")
    assert expected_of(level) == "one of: DEBUG, INFO"


def test_as_enum_requires_choices():
    with pytest.raises(ValueError):
        as_enum()


def test_as_list_splits_and_drops_empty_items():
    assert as_list()("a,,b,") == ["a", "b"]
    assert as_list(separator=";")("x;y") == ["x", "y"]
    assert as_list()(",") == []


def test_as_list_coerces_each_item():
    counts = as_list(item=as_positive_int)

    assert counts("1,2,3") == [1, 2, 3]
    with pytest.raises(ValueError, match=r"item 1 \('0'\)"):
        counts("1,0,3")


def test_expected_labels():
    """Every coercion carries a human readable label for error messages."""
    assert expected_of(as_bool).startswith("a boolean")
    assert expected_of(as_positive_int) == "a positive integer"
    assert expected_of(lambda raw: raw) == "a valid value"
