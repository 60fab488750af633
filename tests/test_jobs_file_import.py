"""Tests for transaction file import into the line queue."""

from __future__ import annotations

from datetime import datetime, timezone
from uuid import uuid4

import pytest

from position_ledger.adapters import BlobNotFoundError
from position_ledger.db import ImportQueueMessage
from position_ledger.jobs import job_import_transactions_file


class _BlobReaderStub:
    """Blob reader stub serving fixed payloads by key."""

    def __init__(self, blobs: dict[str, bytes]):
        self._blobs = blobs

    def adapter_source_name(self) -> str:
        return "stub"

    def adapter_blob_read(self, key: str) -> bytes:
        """Return payload bytes or raise not-found.

        Args:
            key: Blob key.

        Returns:
            bytes: Stub payload.

        Raises:
            BlobNotFoundError: Raised for unknown keys.
        """

        if key not in self._blobs:
            raise BlobNotFoundError(f"blob not found: {key}", key=key)
        return self._blobs[key]


class _ImportQueueStub:
    """Queue stub capturing sent payloads."""

    def __init__(self):
        self.sent: list[tuple[str, str | None]] = []

    def db_import_queue_send(self, payload: str, source_key: str | None = None) -> ImportQueueMessage:
        self.sent.append((payload, source_key))
        return ImportQueueMessage(
            message_id=uuid4(),
            payload=payload,
            source_key=source_key,
            status="pending",
            enqueued_at_utc=datetime.now(timezone.utc),
        )


def test_job_import_transactions_file_enqueues_each_non_blank_line() -> None:
    """Split on newlines, drop CR terminators and skip blank lines.

    Returns:
        None: Assertions validate enqueued lines and counts.

    Raises:
        AssertionError: Raised when import behavior differs.
    """

    payload = b"1572723958024;a;b;D;200\r\n\r\n1572723958025;a;b;B;2;APPL;120\n   \n1572723958026;b;a;W;5\n"
    queue = _ImportQueueStub()

    import_result = job_import_transactions_file(
        key="2019/11/transactions.csv",
        blob_reader=_BlobReaderStub({"2019/11/transactions.csv": payload}),
        import_queue=queue,
    )

    assert queue.sent == [
        ("1572723958024;a;b;D;200", "2019/11/transactions.csv"),
        ("1572723958025;a;b;B;2;APPL;120", "2019/11/transactions.csv"),
        ("1572723958026;b;a;W;5", "2019/11/transactions.csv"),
    ]
    assert import_result.enqueued_count == 3
    # blank middle lines plus the empty tail after the final newline
    assert import_result.skipped_blank_count == 3
    assert [event["stage"] for event in import_result.timeline] == ["read", "read", "enqueue", "enqueue"]


def test_job_import_transactions_file_strips_utf8_bom() -> None:
    """A byte-order mark does not end up in the first timestamp."""

    queue = _ImportQueueStub()

    job_import_transactions_file(
        key="bom.csv",
        blob_reader=_BlobReaderStub({"bom.csv": b"\xef\xbb\xbf1572723958024;a;b;D;1"}),
        import_queue=queue,
    )

    assert queue.sent == [("1572723958024;a;b;D;1", "bom.csv")]


def test_job_import_transactions_file_rejects_non_utf8_payload() -> None:
    """Raise ValueError before anything is enqueued."""

    queue = _ImportQueueStub()

    with pytest.raises(ValueError, match="not valid UTF-8"):
        job_import_transactions_file(
            key="binary.bin",
            blob_reader=_BlobReaderStub({"binary.bin": b"\xff\xfe\xfa"}),
            import_queue=queue,
        )
    assert queue.sent == []


def test_job_import_transactions_file_propagates_missing_blob() -> None:
    """Missing keys surface as adapter errors."""

    with pytest.raises(BlobNotFoundError):
        job_import_transactions_file(key="missing.csv", blob_reader=_BlobReaderStub({}), import_queue=_ImportQueueStub())
