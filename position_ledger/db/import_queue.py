"""Database-backed queue of raw transaction lines awaiting import."""

from __future__ import annotations

from typing import Any
from uuid import UUID

from sqlalchemy import Engine, text
from sqlalchemy.exc import SQLAlchemyError

from .interfaces import ImportQueueMessage, ImportQueuePort

_FAILURE_REASON_MAX_LENGTH = 2000


class SQLAlchemyImportQueue(ImportQueuePort):
    """SQLAlchemy implementation of the import queue over `import_queue_message`.

    Claiming moves rows from `pending` to `processing` under
    `FOR UPDATE SKIP LOCKED`, so concurrent workers never receive the same
    message. Rows left in `processing` longer than the claim timeout belong to
    a worker that stopped before marking them and are claimed again.
    """

    _MESSAGE_COLUMNS = "message_id, payload, source_key, status, enqueued_at_utc"

    def __init__(self, engine: Engine, claim_timeout_seconds: int = 300):
        """Initialize queue service.

        Args:
            engine: SQLAlchemy engine used for queue reads and writes.
            claim_timeout_seconds: Age after which a `processing` row may be claimed again.

        Raises:
            ValueError: Raised when engine or timeout is invalid.
        """

        if engine is None:
            raise ValueError("engine must not be None")
        if claim_timeout_seconds < 1:
            raise ValueError("claim_timeout_seconds must be >= 1")
        self._engine = engine
        self._claim_timeout_seconds = claim_timeout_seconds

    def db_import_queue_send(self, payload: str, source_key: str | None = None) -> ImportQueueMessage:
        """Enqueue one raw transaction line.

        Args:
            payload: Raw delimited transaction line.
            source_key: Optional blob key the line came from.

        Returns:
            ImportQueueMessage: Persisted pending message.

        Raises:
            ValueError: Raised when payload is not a string.
            RuntimeError: Raised when the insert fails.
        """

        if not isinstance(payload, str):
            raise ValueError("payload must be a string")

        try:
            with self._engine.begin() as connection:
                row = connection.execute(
                    text(
                        "INSERT INTO import_queue_message (payload, source_key, status) "
                        "VALUES (:payload, :source_key, 'pending') "
                        f"RETURNING {self._MESSAGE_COLUMNS}"
                    ),
                    {"payload": payload, "source_key": source_key},
                ).mappings().one()
        except SQLAlchemyError as error:
            raise RuntimeError("import queue send failed") from error

        return self._db_import_queue_build_message(row)

    def db_import_queue_claim(self, limit: int) -> list[ImportQueueMessage]:
        """Claim up to `limit` pending or stale processing messages in enqueue order.

        Args:
            limit: Maximum number of messages to claim.

        Returns:
            list[ImportQueueMessage]: Claimed messages with status `processing`.

        Raises:
            ValueError: Raised when limit is not positive.
            RuntimeError: Raised when the claim fails.
        """

        if limit < 1:
            raise ValueError("limit must be >= 1")

        try:
            with self._engine.begin() as connection:
                rows = connection.execute(
                    text(
                        "UPDATE import_queue_message SET status = 'processing', claimed_at_utc = now() "
                        "WHERE message_id IN ("
                        "SELECT message_id FROM import_queue_message WHERE status = 'pending' "
                        "OR (status = 'processing' AND claimed_at_utc < "
                        "now() - make_interval(secs => CAST(:claim_timeout_seconds AS double precision))) "
                        "ORDER BY enqueued_at_utc asc, message_id asc LIMIT :limit FOR UPDATE SKIP LOCKED"
                        f") RETURNING {self._MESSAGE_COLUMNS}"
                    ),
                    {"limit": limit, "claim_timeout_seconds": self._claim_timeout_seconds},
                ).mappings().all()
        except SQLAlchemyError as error:
            raise RuntimeError("import queue claim failed") from error

        messages = [self._db_import_queue_build_message(row) for row in rows]
        return sorted(messages, key=lambda message: (message.enqueued_at_utc, str(message.message_id)))

    def db_import_queue_requeue_failed(self, limit: int) -> int:
        """Move up to `limit` failed messages back to `pending`, oldest first.

        Raises:
            ValueError: Raised when limit is not positive.
            RuntimeError: Raised when the update fails.
        """

        if limit < 1:
            raise ValueError("limit must be >= 1")

        try:
            with self._engine.begin() as connection:
                rows = connection.execute(
                    text(
                        "UPDATE import_queue_message SET status = 'pending', failure_reason = NULL, "
                        "claimed_at_utc = NULL, completed_at_utc = NULL "
                        "WHERE message_id IN ("
                        "SELECT message_id FROM import_queue_message WHERE status = 'failed' "
                        "ORDER BY enqueued_at_utc asc, message_id asc LIMIT :limit FOR UPDATE SKIP LOCKED"
                        ") RETURNING message_id"
                    ),
                    {"limit": limit},
                ).mappings().all()
        except SQLAlchemyError as error:
            raise RuntimeError("import queue requeue failed") from error

        return len(rows)

    def db_import_queue_mark_done(self, message_id: UUID) -> None:
        """Mark one message as processed.

        Raises:
            RuntimeError: Raised when the update fails.
        """

        self._db_import_queue_set_status(message_id=message_id, status="done", failure_reason=None)

    def db_import_queue_mark_failed(self, message_id: UUID, reason: str) -> None:
        """Mark one message as failed and keep a truncated failure reason.

        Raises:
            RuntimeError: Raised when the update fails.
        """

        self._db_import_queue_set_status(
            message_id=message_id,
            status="failed",
            failure_reason=(reason or "unknown failure")[:_FAILURE_REASON_MAX_LENGTH],
        )

    def _db_import_queue_set_status(self, message_id: UUID, status: str, failure_reason: str | None) -> None:
        try:
            with self._engine.begin() as connection:
                connection.execute(
                    text(
                        "UPDATE import_queue_message SET status = :status, failure_reason = :failure_reason, "
                        "completed_at_utc = now() WHERE message_id = CAST(:message_id AS uuid)"
                    ),
                    {"message_id": str(message_id), "status": status, "failure_reason": failure_reason},
                )
        except SQLAlchemyError as error:
            raise RuntimeError(f"import queue status update to {status} failed") from error

    def _db_import_queue_build_message(self, row: Any) -> ImportQueueMessage:
        return ImportQueueMessage(
            message_id=row["message_id"],
            payload=row["payload"],
            source_key=row["source_key"],
            status=row["status"],
            enqueued_at_utc=row["enqueued_at_utc"],
        )


__all__ = ["SQLAlchemyImportQueue"]
