"""Database service for append-only transaction persistence and range queries."""

from __future__ import annotations

import json
from typing import Any

from sqlalchemy import Engine, text
from sqlalchemy.exc import SQLAlchemyError

from position_ledger.domain import (
    NO_DATE_FILTER_TOKEN,
    PartyRole,
    TransactionRecord,
    record_transaction_from_mapping,
    record_transaction_to_mapping,
)
from position_ledger.logging_setup import get_logger

from .interfaces import TransactionStorePort

logger = get_logger(__name__)


class SQLAlchemyTransactionStore(TransactionStorePort):
    """SQLAlchemy implementation of the transaction store.

    Rows live in `ledger_transaction` with primary key `(party, datetime_utc)`
    and a secondary index on `(counterparty, datetime_utc)`. `datetime_utc` is
    text compared under the "C" collation so filter tokens compare byte-wise.
    Bounded queries compare only the leading `length(token)` characters, so an
    instant whose millisecond prefix equals the token (`...999Z` against
    `...999`) is still inside the bound.
    """

    _SELECT_COLUMNS = "SELECT party, counterparty, datetime_utc, transaction FROM ledger_transaction "

    _UPPER_BOUND_CLAUSE = 'AND left(datetime_utc, length(:upper_bound)) COLLATE "C" <= :upper_bound COLLATE "C" '

    _QUERY_BY_ROLE_AND_BOUND = {
        (PartyRole.PARTY, True): _SELECT_COLUMNS
        + "WHERE party = :entity "
        + _UPPER_BOUND_CLAUSE
        + 'ORDER BY datetime_utc COLLATE "C" asc',
        (PartyRole.PARTY, False): _SELECT_COLUMNS
        + "WHERE party = :entity "
        + 'ORDER BY datetime_utc COLLATE "C" asc',
        (PartyRole.COUNTERPARTY, True): _SELECT_COLUMNS
        + "WHERE counterparty = :entity "
        + _UPPER_BOUND_CLAUSE
        + 'ORDER BY datetime_utc COLLATE "C" asc',
        (PartyRole.COUNTERPARTY, False): _SELECT_COLUMNS
        + "WHERE counterparty = :entity "
        + 'ORDER BY datetime_utc COLLATE "C" asc',
    }

    def __init__(self, engine: Engine):
        """Initialize transaction store.

        Args:
            engine: SQLAlchemy engine used for persistence and reads.

        Raises:
            ValueError: Raised when engine is invalid.
        """

        if engine is None:
            raise ValueError("engine must not be None")
        self._engine = engine

    def db_transaction_put(self, record: TransactionRecord) -> bool:
        """Insert one record; an existing `(party, datetime)` key is left untouched.

        Args:
            record: Decoded transaction record.

        Returns:
            bool: True when a new row was inserted.

        Raises:
            ValueError: Raised when record is None.
            RuntimeError: Raised when persistence fails.
        """

        if record is None:
            raise ValueError("record must not be None")

        try:
            with self._engine.begin() as connection:
                result = connection.execute(
                    text(
                        "INSERT INTO ledger_transaction (party, datetime_utc, counterparty, transaction) "
                        "VALUES (:party, :datetime_utc, :counterparty, CAST(:transaction AS jsonb)) "
                        "ON CONFLICT (party, datetime_utc) DO NOTHING"
                    ),
                    {
                        "party": record.party,
                        "datetime_utc": record.datetime,
                        "counterparty": record.counterparty,
                        "transaction": json.dumps(record_transaction_to_mapping(record.transaction)),
                    },
                )
        except SQLAlchemyError as error:
            raise RuntimeError("transaction insert failed") from error

        inserted = result.rowcount == 1
        if not inserted:
            logger.info("transaction already stored party=%s datetime=%s", record.party, record.datetime)
        return inserted

    def db_transaction_get(self, party: str, datetime_utc: str) -> TransactionRecord | None:
        """Read the record stored under one `(party, datetime)` key, or None."""

        try:
            with self._engine.connect() as connection:
                row = connection.execute(
                    text(self._SELECT_COLUMNS + "WHERE party = :party AND datetime_utc = :datetime_utc"),
                    {"party": party, "datetime_utc": datetime_utc},
                ).mappings().first()
        except SQLAlchemyError as error:
            raise RuntimeError("transaction read failed") from error

        return None if row is None else self._db_transaction_build_record(row)

    def db_transaction_query(
        self,
        role: PartyRole,
        entity: str,
        upper_bound_token: str,
    ) -> list[TransactionRecord]:
        """Range query records for one entity and role, inclusive of the filter token.

        Args:
            role: Role selecting the key column.
            entity: Entity identifier.
            upper_bound_token: Inclusive filter token or the no-filter sentinel.

        Returns:
            list[TransactionRecord]: Matching records ordered by datetime ascending.

        Raises:
            ValueError: Raised when entity is blank.
            RuntimeError: Raised when the query fails.
        """

        normalized_entity = entity.strip() if isinstance(entity, str) else ""
        if not normalized_entity:
            raise ValueError("entity must not be blank")

        is_bounded = upper_bound_token != NO_DATE_FILTER_TOKEN
        parameters: dict[str, Any] = {"entity": normalized_entity}
        if is_bounded:
            parameters["upper_bound"] = upper_bound_token

        try:
            with self._engine.connect() as connection:
                rows = connection.execute(
                    text(self._QUERY_BY_ROLE_AND_BOUND[(PartyRole(role), is_bounded)]),
                    parameters,
                ).mappings().all()
        except SQLAlchemyError as error:
            raise RuntimeError(f"transaction query failed for role={PartyRole(role).value}") from error

        return [self._db_transaction_build_record(row) for row in rows]

    def _db_transaction_build_record(self, row: Any) -> TransactionRecord:
        transaction_payload = row["transaction"]
        if isinstance(transaction_payload, str):
            transaction_payload = json.loads(transaction_payload)
        return TransactionRecord(
            datetime=row["datetime_utc"],
            party=row["party"],
            counterparty=row["counterparty"],
            transaction=record_transaction_from_mapping(transaction_payload),
        )


__all__ = ["SQLAlchemyTransactionStore"]
