"""Single transaction line import: decode, persist and mirror."""

from __future__ import annotations

from dataclasses import dataclass

from position_ledger.db import TransactionMirrorPort, TransactionStorePort
from position_ledger.domain import TransactionRecord, record_decode

from .mirror import job_build_change_event, job_mirror_change_event


@dataclass(frozen=True)
class LineImportResult:
    """Outcome of importing one line.

    Attributes:
        record: Decoded record.
        inserted: False when a record with the same `(party, datetime)` was already stored.
    """

    record: TransactionRecord
    inserted: bool


def job_import_transaction_line(
    line: str,
    store: TransactionStorePort,
    strict_types: bool = True,
) -> LineImportResult:
    """Decode one delimited line and persist the resulting record.

    Args:
        line: Raw delimited transaction line.
        store: Transaction store.
        strict_types: Reject unknown transaction types instead of storing no-op records.

    Returns:
        LineImportResult: Decoded record and insert flag.

    Raises:
        RecordParseError: Raised when the line cannot be decoded.
        RuntimeError: Raised when persistence fails.
    """

    record = record_decode(line, strict_types=strict_types)
    inserted = store.db_transaction_put(record)
    return LineImportResult(record=record, inserted=inserted)


def job_mirror_line_result(
    line_result: LineImportResult,
    store: TransactionStorePort,
    mirror: TransactionMirrorPort,
) -> bool:
    """Mirror the stored record behind one line import result.

    A duplicate line mirrors the record already stored under its key, so a
    line replayed after a failed mirror write fills the missing mirror row.
    The mirror ignores keys it already holds.

    Args:
        line_result: Outcome of `job_import_transaction_line`.
        store: Transaction store holding the record.
        mirror: Mirror repository.

    Returns:
        bool: True when a new mirror row was written.

    Raises:
        RuntimeError: Raised when the store read or mirror write fails.
    """

    record = line_result.record
    if not line_result.inserted:
        record = store.db_transaction_get(record.party, record.datetime) or record
    return job_mirror_change_event(job_build_change_event(record), mirror)


__all__ = ["LineImportResult", "job_import_transaction_line", "job_mirror_line_result"]
