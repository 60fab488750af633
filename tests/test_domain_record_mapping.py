"""Tests for structural record mappings."""

from __future__ import annotations

from decimal import Decimal

import pytest

from position_ledger.domain import (
    PositionSummary,
    RecordParseError,
    TransactionBody,
    record_position_summary_to_mapping,
    record_transaction_from_mapping,
)


def test_record_transaction_from_mapping_accepts_numeric_json_values() -> None:
    """Numbers stored as JSON numbers or strings both become decimals."""

    assert record_transaction_from_mapping({"type": "D", "value": 200}) == TransactionBody(type="D", value=Decimal("200"))
    assert record_transaction_from_mapping({"type": "W", "value": "0.1"}).value == Decimal("0.1")


@pytest.mark.parametrize(
    "payload",
    [
        {"value": "1"},
        {"type": "", "value": "1"},
        {"type": "D", "value": "ten"},
        {"type": "D", "value": "1e999999999"},
        {"type": "B", "asset": {"name": "APPL", "amount": "2", "value": "NaN"}},
    ],
)
def test_record_transaction_from_mapping_rejects_invalid_payloads(payload: dict) -> None:
    """Raise a parse error for untyped or non-numeric payloads."""

    with pytest.raises(RecordParseError):
        record_transaction_from_mapping(payload)


def test_record_position_summary_to_mapping_renders_decimal_strings() -> None:
    """Render balance and holdings without float conversion."""

    summary = PositionSummary(balance=Decimal("-90.10"), assets={"APPL": Decimal("2"), "MSFT": Decimal("0")})

    assert record_position_summary_to_mapping(summary) == {
        "balance": "-90.10",
        "assets": {"APPL": "2", "MSFT": "0"},
    }
