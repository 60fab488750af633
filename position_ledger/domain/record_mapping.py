"""Plain structural mapping conversions for transaction records.

Mappings use JSON-safe values only: numbers are rendered as decimal strings
so persisted payloads round-trip without float drift.
"""

from __future__ import annotations

from decimal import Decimal, InvalidOperation, getcontext
from typing import Any, Mapping

from .errors import RecordParseError
from .models import PositionSummary, TransactionAsset, TransactionBody, TransactionRecord


def record_transaction_to_mapping(body: TransactionBody) -> dict[str, Any]:
    """Render one transaction body as a JSON-safe mapping.

    Args:
        body: Transaction body.

    Returns:
        dict[str, Any]: Mapping with `type` and either `value` or `asset`.
    """

    payload: dict[str, Any] = {"type": body.type}
    if body.value is not None:
        payload["value"] = str(body.value)
    if body.asset is not None:
        payload["asset"] = {
            "name": body.asset.name,
            "amount": str(body.asset.amount),
            "value": str(body.asset.value),
        }
    return payload


def record_transaction_from_mapping(payload: Mapping[str, Any]) -> TransactionBody:
    """Rebuild one transaction body from a structural mapping.

    Args:
        payload: Mapping produced by `record_transaction_to_mapping` or an equivalent source.

    Returns:
        TransactionBody: Typed transaction body.

    Raises:
        RecordParseError: Raised when the mapping misses `type` or carries non-numeric values.
    """

    transaction_type = payload.get("type")
    if not isinstance(transaction_type, str) or not transaction_type:
        raise RecordParseError("transaction mapping requires a non-empty type")

    value = payload.get("value")
    asset_payload = payload.get("asset")
    asset = None
    if asset_payload is not None:
        asset = TransactionAsset(
            name=str(asset_payload["name"]),
            amount=_record_mapping_decimal(asset_payload["amount"], "asset.amount"),
            value=_record_mapping_decimal(asset_payload["value"], "asset.value"),
        )
    return TransactionBody(
        type=transaction_type,
        value=None if value is None else _record_mapping_decimal(value, "value"),
        asset=asset,
    )


def record_to_mapping(record: TransactionRecord) -> dict[str, Any]:
    """Render one transaction record as a JSON-safe mapping."""

    return {
        "datetime": record.datetime,
        "party": record.party,
        "counterparty": record.counterparty,
        "transaction": record_transaction_to_mapping(record.transaction),
    }


def record_position_summary_to_mapping(summary: PositionSummary) -> dict[str, Any]:
    """Render one position summary as a JSON-safe mapping."""

    return {
        "balance": str(summary.balance),
        "assets": {name: str(amount) for name, amount in summary.assets.items()},
    }


def _record_mapping_decimal(value: Any, field_name: str) -> Decimal:
    try:
        parsed_value = Decimal(str(value))
    except InvalidOperation as error:
        raise RecordParseError(f"{field_name} must be numeric, got {value!r}") from error
    if not parsed_value.is_finite():
        raise RecordParseError(f"{field_name} must be a finite number, got {value!r}")
    if abs(parsed_value.adjusted()) > getcontext().Emax // 4:
        raise RecordParseError(f"{field_name} is out of range, got {value!r}")
    return parsed_value


__all__ = [
    "record_position_summary_to_mapping",
    "record_to_mapping",
    "record_transaction_from_mapping",
    "record_transaction_to_mapping",
]
