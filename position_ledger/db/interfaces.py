"""Typed interfaces for database-layer services.

All SQL access must remain in the db package and its submodules.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Protocol
from uuid import UUID

from position_ledger.domain import HealthStatus, PartyRole, TransactionRecord


class DatabaseHealthPort(Protocol):
    """Port definition for database connectivity verification."""

    def db_connection_label(self) -> str:
        """Return a stable label for the active database connection target.

        Returns:
            str: Database target label for diagnostics.
        """

    def db_check_health(self) -> HealthStatus:
        """Check database connectivity and return deterministic health payload.

        Returns:
            HealthStatus: Database health status payload.

        Raises:
            ConnectionError: Raised when database cannot be reached.
        """


class TransactionStorePort(Protocol):
    """Port definition for the append-only transaction store."""

    def db_transaction_put(self, record: TransactionRecord) -> bool:
        """Persist one transaction record keyed by `(party, datetime)`.

        Args:
            record: Decoded transaction record.

        Returns:
            bool: True when inserted, False when the key already existed.

        Raises:
            RuntimeError: Raised when persistence fails.
        """

    def db_transaction_get(self, party: str, datetime_utc: str) -> TransactionRecord | None:
        """Read the record stored under one `(party, datetime)` key.

        Raises:
            RuntimeError: Raised when the read fails.
        """

    def db_transaction_query(
        self,
        role: PartyRole,
        entity: str,
        upper_bound_token: str,
    ) -> list[TransactionRecord]:
        """Range query records where `entity` played `role` at or before the inclusive token.

        Args:
            role: Index selector; party uses the primary key, counterparty the secondary index.
            entity: Entity identifier matched by equality.
            upper_bound_token: Inclusive filter token, or the no-filter sentinel.

        Returns:
            list[TransactionRecord]: Matching records ordered by datetime ascending.

        Raises:
            RuntimeError: Raised when the query fails.
        """


@dataclass(frozen=True)
class ImportQueueMessage:
    """One queued transaction line awaiting decode and persistence.

    Attributes:
        message_id: Queue message identifier.
        payload: Raw delimited transaction line.
        source_key: Optional blob key the line was read from.
        status: Message status (`pending`, `processing`, `done`, `failed`).
        enqueued_at_utc: Enqueue timestamp in UTC.
    """

    message_id: UUID
    payload: str
    source_key: str | None
    status: str
    enqueued_at_utc: datetime


class ImportQueuePort(Protocol):
    """Port definition for the transaction-line import queue."""

    def db_import_queue_send(self, payload: str, source_key: str | None = None) -> ImportQueueMessage:
        """Enqueue one raw transaction line.

        Raises:
            RuntimeError: Raised when the enqueue fails.
        """

    def db_import_queue_claim(self, limit: int) -> list[ImportQueueMessage]:
        """Claim up to `limit` pending or stale processing messages.

        Raises:
            RuntimeError: Raised when the claim fails.
        """

    def db_import_queue_requeue_failed(self, limit: int) -> int:
        """Move up to `limit` failed messages back to pending and return how many moved.

        Raises:
            RuntimeError: Raised when the update fails.
        """

    def db_import_queue_mark_done(self, message_id: UUID) -> None:
        """Mark one claimed message as processed."""

    def db_import_queue_mark_failed(self, message_id: UUID, reason: str) -> None:
        """Mark one claimed message as failed with a reason."""


@dataclass(frozen=True)
class TransactionMirrorRow:
    """Flattened relational mirror row for one stored transaction.

    Attributes:
        party: Party identifier.
        counterparty: Counterparty identifier.
        datetime_utc: Transaction instant.
        transaction: Structural transaction mapping.
    """

    party: str
    counterparty: str
    datetime_utc: datetime
    transaction: dict[str, Any]


class TransactionMirrorPort(Protocol):
    """Port definition for the relational transaction mirror."""

    def db_transaction_mirror_write(self, row: TransactionMirrorRow) -> bool:
        """Write one flattened mirror row unless its `(party, datetime)` key is already mirrored.

        Returns:
            bool: True when a new row was written.

        Raises:
            RuntimeError: Raised when persistence fails.
        """
