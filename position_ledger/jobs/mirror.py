"""Relational mirroring of stored transactions from structural change events.

A change event is a plain mapping decoupled from any storage engine's value
tagging:

    {"event_name": "INSERT", "new_image": {"party": ..., "counterparty": ...,
     "datetime": "2019-11-02T19:45:58.024Z", "transaction": {"type": "D", "value": "200"}}}
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Mapping

from position_ledger.db import TransactionMirrorPort, TransactionMirrorRow
from position_ledger.domain import (
    TransactionRecord,
    record_to_mapping,
    record_transaction_from_mapping,
    record_transaction_to_mapping,
)


def job_build_change_event(record: TransactionRecord, event_name: str = "INSERT") -> dict[str, Any]:
    """Build the structural change event emitted after a record is stored."""

    return {"event_name": event_name, "new_image": record_to_mapping(record)}


def job_flatten_change_event(change_event: Mapping[str, Any]) -> TransactionMirrorRow | None:
    """Flatten one change event into a mirror row.

    Args:
        change_event: Structural change event mapping.

    Returns:
        TransactionMirrorRow | None: Flattened row, or None when the event carries no new image.

    Raises:
        ValueError: Raised when the new image misses required fields or holds an invalid datetime.
    """

    new_image = change_event.get("new_image")
    if not new_image:
        return None

    missing_fields = [name for name in ("party", "counterparty", "datetime", "transaction") if name not in new_image]
    if missing_fields:
        raise ValueError(f"change event new_image missing fields: {', '.join(missing_fields)}")

    datetime_text = str(new_image["datetime"])
    try:
        datetime_utc = datetime.fromisoformat(
            f"{datetime_text[:-1]}+00:00" if datetime_text.endswith("Z") else datetime_text
        )
    except ValueError as error:
        raise ValueError(f"change event datetime is not ISO-8601: {datetime_text}") from error

    transaction_body = record_transaction_from_mapping(new_image["transaction"])
    return TransactionMirrorRow(
        party=str(new_image["party"]),
        counterparty=str(new_image["counterparty"]),
        datetime_utc=datetime_utc,
        transaction=record_transaction_to_mapping(transaction_body),
    )


def job_mirror_change_event(change_event: Mapping[str, Any], mirror: TransactionMirrorPort) -> bool:
    """Write one change event into the relational mirror.

    Args:
        change_event: Structural change event mapping.
        mirror: Mirror repository.

    Returns:
        bool: True when a row was written, False when the event had no new image
            or its key was already mirrored.

    Raises:
        ValueError: Raised when the event is malformed.
        RuntimeError: Raised when the mirror write fails.
    """

    mirror_row = job_flatten_change_event(change_event)
    if mirror_row is None:
        return False
    return mirror.db_transaction_mirror_write(mirror_row)


__all__ = ["job_build_change_event", "job_flatten_change_event", "job_mirror_change_event"]
