"""Transaction file import: split one blob into lines and enqueue each line."""

from __future__ import annotations

from dataclasses import dataclass

from position_ledger.adapters import BlobReaderPort
from position_ledger.db import ImportQueuePort
from position_ledger.domain import domain_build_stage_event
from position_ledger.logging_setup import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class FileImportResult:
    """Outcome of one file import.

    Attributes:
        key: Blob key that was imported.
        enqueued_count: Number of lines sent to the import queue.
        skipped_blank_count: Number of blank lines not enqueued.
        timeline: Stage timeline events.
    """

    key: str
    enqueued_count: int
    skipped_blank_count: int
    timeline: list[dict[str, object]]


def job_import_transactions_file(
    key: str,
    blob_reader: BlobReaderPort,
    import_queue: ImportQueuePort,
) -> FileImportResult:
    """Read one transaction file and enqueue every non-blank line.

    Lines are split on `\\n`; a trailing `\\r` is dropped. Lines are enqueued
    raw and decoded later by the queue worker.

    Args:
        key: Blob key of the uploaded file.
        blob_reader: Blob source adapter.
        import_queue: Queue receiving one message per line.

    Returns:
        FileImportResult: Enqueue counts and stage timeline.

    Raises:
        BlobAdapterError: Raised when the blob cannot be read.
        ValueError: Raised when the blob is not valid UTF-8 text.
        RuntimeError: Raised when an enqueue fails.
    """

    timeline: list[dict[str, object]] = [domain_build_stage_event(stage="read", status="started")]
    payload_bytes = blob_reader.adapter_blob_read(key)
    try:
        payload_text = payload_bytes.decode("utf-8-sig")
    except UnicodeDecodeError as error:
        raise ValueError(f"blob is not valid UTF-8 text: {key}") from error
    timeline.append(
        domain_build_stage_event(stage="read", status="completed", details={"byte_count": len(payload_bytes)})
    )

    timeline.append(domain_build_stage_event(stage="enqueue", status="started"))
    enqueued_count = 0
    skipped_blank_count = 0
    for line in payload_text.split("\n"):
        normalized_line = line.rstrip("\r")
        if not normalized_line.strip():
            skipped_blank_count += 1
            continue
        import_queue.db_import_queue_send(normalized_line, source_key=key)
        enqueued_count += 1
    timeline.append(
        domain_build_stage_event(
            stage="enqueue",
            status="completed",
            details={"enqueued_count": enqueued_count, "skipped_blank_count": skipped_blank_count},
        )
    )

    logger.info("enqueued %d lines from key=%s (skipped %d blank)", enqueued_count, key, skipped_blank_count)
    return FileImportResult(
        key=key,
        enqueued_count=enqueued_count,
        skipped_blank_count=skipped_blank_count,
        timeline=timeline,
    )


__all__ = ["FileImportResult", "job_import_transactions_file"]
