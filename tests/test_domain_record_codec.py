"""Tests for delimited transaction line decoding.

These tests validate timestamp priority rules, type-specific field layouts
and deterministic failures for malformed lines.
"""

from __future__ import annotations

from decimal import Decimal

import pytest

from position_ledger.domain import (
    RecordParseError,
    TransactionAsset,
    TransactionBody,
    UnknownTransactionTypeError,
    record_decode,
    record_decode_timestamp,
)


def test_record_decode_deposit_with_epoch_milliseconds() -> None:
    """Decode a deposit line with a millisecond epoch timestamp.

    Returns:
        None: Assertions validate decoded fields.

    Raises:
        AssertionError: Raised when decoded record does not match expected values.
    """

    record = record_decode("1572723958024;a;b;D;200")

    assert record.datetime == "2019-11-02T19:45:58.024Z"
    assert record.party == "a"
    assert record.counterparty == "b"
    assert record.transaction == TransactionBody(type="D", value=Decimal("200"))


def test_record_decode_withdraw_reads_single_value_field() -> None:
    """Decode a withdrawal into a cash-only body."""

    record = record_decode("1572723958024;a;b;W;150.25")

    assert record.transaction.type == "W"
    assert record.transaction.value == Decimal("150.25")
    assert record.transaction.asset is None


@pytest.mark.parametrize("transaction_type", ["B", "S"])
def test_record_decode_asset_transactions_read_amount_name_value(transaction_type: str) -> None:
    """Decode buys and sells with `amount;name;value` trailing fields.

    Args:
        transaction_type: Asset transaction code under test.

    Returns:
        None: Assertions validate asset leg decoding.

    Raises:
        AssertionError: Raised when asset leg does not match expected values.
    """

    record = record_decode(f"1572723958024;a;b;{transaction_type};2;APPL;120")

    assert record.transaction == TransactionBody(
        type=transaction_type,
        asset=TransactionAsset(name="APPL", amount=Decimal("2"), value=Decimal("120")),
    )


def test_record_decode_strips_line_terminator_and_field_whitespace() -> None:
    """Ignore CRLF terminators and whitespace around fields."""

    record = record_decode("1572723958024; alice ;bob;D; 10 \r\n")

    assert record.party == "alice"
    assert record.counterparty == "bob"
    assert record.transaction.value == Decimal("10")


def test_record_decode_timestamp_treats_short_digit_runs_as_epoch_seconds() -> None:
    """Multiply 1-12 digit timestamps by 1000 before formatting."""

    assert record_decode_timestamp("1572723958") == "2019-11-02T19:45:58.000Z"
    assert record_decode_timestamp("0") == "1970-01-01T00:00:00.000Z"


@pytest.mark.parametrize(
    ("token", "expected_instant"),
    [
        ("2019-11-02T19:45:58.024Z", "2019-11-02T19:45:58.024Z"),
        ("2019-11-02T21:45:58+02:00", "2019-11-02T19:45:58.000Z"),
        ("2019-11-02", "2019-11-02T00:00:00.000Z"),
        ("2019/11/02 10:15:00", "2019-11-02T10:15:00.000Z"),
        ("02 November 2019", "2019-11-02T00:00:00.000Z"),
    ],
)
def test_record_decode_timestamp_parses_free_form_dates(token: str, expected_instant: str) -> None:
    """Normalize free-form date strings to UTC millisecond instants.

    Args:
        token: Free-form timestamp input.
        expected_instant: Expected normalized instant.

    Returns:
        None: Assertions validate normalization.

    Raises:
        AssertionError: Raised when normalized instant differs.
    """

    assert record_decode_timestamp(token) == expected_instant


def test_record_decode_timestamp_rejects_unparseable_text() -> None:
    """Raise a parse error for text that is neither epoch nor a supported date."""

    with pytest.raises(RecordParseError, match="unsupported timestamp"):
        record_decode("yesterday;a;b;D;1")


def test_record_decode_rejects_unknown_type_in_strict_mode() -> None:
    """Raise a typed error carrying the rejected type code."""

    with pytest.raises(UnknownTransactionTypeError) as error_info:
        record_decode("1572723958024;a;b;Q;1")

    assert error_info.value.transaction_type == "Q"
    assert error_info.value.line == "1572723958024;a;b;Q;1"


def test_record_decode_degrades_unknown_type_to_empty_body_in_lenient_mode() -> None:
    """Return an empty body that aggregation will ignore."""

    record = record_decode("1572723958024;a;b;Q;1", strict_types=False)

    assert record.transaction == TransactionBody(type="Q")
    assert record.transaction.body_is_empty()


@pytest.mark.parametrize(
    "line",
    [
        "1572723958024;a;b;D;abc",
        "1572723958024;a;b;D;NaN",
        "1572723958024;a;b;B;two;APPL;120",
        "1572723958024;a;b;S;2;APPL;Infinity",
    ],
)
def test_record_decode_rejects_non_numeric_values(line: str) -> None:
    """Raise a parse error instead of storing non-finite numbers."""

    with pytest.raises(RecordParseError):
        record_decode(line)


@pytest.mark.parametrize(
    "line",
    ["1572723958024;a;b;D;1e999999999", "1572723958024;a;b;B;1e-999999999;APPL;1", "1572723958024;a;b;S;1;APPL;-9E+500000"],
)
def test_record_decode_rejects_values_outside_decimal_context_range(line: str) -> None:
    """Reject exponents that would overflow once values are multiplied and summed."""

    with pytest.raises(RecordParseError, match="out of range"):
        record_decode(line)


def test_record_decode_keeps_large_but_representable_values() -> None:
    """Ordinary large amounts still decode."""

    assert record_decode("1572723958024;a;b;D;1e100").transaction.value == Decimal("1e100")


@pytest.mark.parametrize(
    ("line", "message"),
    [
        ("1572723958024;a;b", "expected at least 4 fields"),
        ("1572723958024;;b;D;1", "party must not be blank"),
        ("1572723958024;a; ;D;1", "counterparty must not be blank"),
        ("1572723958024;a;b;D", "requires a value field"),
        ("1572723958024;a;b;B;2;APPL", "requires amount;name;value"),
        ("1572723958024;a;b;S;2; ;5", "asset name must not be blank"),
    ],
)
def test_record_decode_rejects_missing_fields(line: str, message: str) -> None:
    """Raise a parse error naming the missing or blank field."""

    with pytest.raises(RecordParseError, match=message):
        record_decode(line)
