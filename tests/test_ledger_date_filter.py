"""Tests for inclusive upper-bound date filter encoding."""

from __future__ import annotations

import pytest

from position_ledger.domain import DateFilterError
from position_ledger.ledger import NO_DATE_FILTER_TOKEN, ledger_encode_date_filter


@pytest.mark.parametrize(
    ("date", "expected_token"),
    [
        ("2019", "2019-12-31T23:59:59.999"),
        ("2019-05", "2019-05-31T23:59:59.999"),
        ("2019-05-14", "2019-05-14T23:59:59.999"),
        ("2019-05-14T11", "2019-05-14T11:59:59.999"),
        ("2019-05-14T11:23", "2019-05-14T11:23:59.999"),
        ("2019-05-14T11:23:15", "2019-05-14T11:23:15.999"),
        ("2019-05-14T11:23:15.456", "2019-05-14T11:23:15.456"),
    ],
)
def test_ledger_encode_date_filter_fills_missing_components_with_maxima(date: str, expected_token: str) -> None:
    """Fill every missing trailing component with its maximum value.

    Args:
        date: Partial or complete ISO-8601 input.
        expected_token: Expected inclusive upper-bound token.

    Returns:
        None: Assertions validate encoding.

    Raises:
        AssertionError: Raised when encoded token differs.
    """

    assert ledger_encode_date_filter(date) == expected_token


@pytest.mark.parametrize("date", ["", None])
def test_ledger_encode_date_filter_returns_sentinel_for_empty_input(date: str | None) -> None:
    """Return the no-filter sentinel for empty input."""

    assert ledger_encode_date_filter(date) == NO_DATE_FILTER_TOKEN == "X"


def test_ledger_encode_date_filter_keeps_components_without_calendar_validation() -> None:
    """Day 31 is filled for every month, including February."""

    assert ledger_encode_date_filter("2019-02") == "2019-02-31T23:59:59.999"


def test_ledger_encode_date_filter_ignores_trailing_zone_designator() -> None:
    """Text after the last matched component is not part of the token."""

    assert ledger_encode_date_filter("2019-05-14T11:23:15.456Z") == "2019-05-14T11:23:15.456"


def test_ledger_encode_date_filter_tokens_bound_every_instant_of_the_period() -> None:
    """Token-length prefixes of every instant in the period sort at or below the token."""

    token = ledger_encode_date_filter("2019")

    assert "2019-01-01T00:00:00.000Z"[: len(token)] <= token
    assert "2019-12-31T23:59:59.999Z"[: len(token)] <= token
    assert "2020-01-01T00:00:00.000Z"[: len(token)] > token


def test_ledger_encode_date_filter_full_instant_bounds_itself() -> None:
    """A fully specified date keeps a record stored at exactly that millisecond."""

    token = ledger_encode_date_filter("2019-05-14T11:23:15.456")

    assert "2019-05-14T11:23:15.456Z"[: len(token)] <= token
    assert "2019-05-14T11:23:15.457Z"[: len(token)] > token


def test_ledger_encode_date_filter_rejects_input_without_digits() -> None:
    """Raise a typed error when no year can be found."""

    with pytest.raises(DateFilterError, match="must contain a year"):
        ledger_encode_date_filter("yesterday")
