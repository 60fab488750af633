"""Database service for the relational transaction mirror table."""

from __future__ import annotations

import json

from sqlalchemy import Engine, text
from sqlalchemy.exc import SQLAlchemyError

from .interfaces import TransactionMirrorPort, TransactionMirrorRow


class SQLAlchemyTransactionMirror(TransactionMirrorPort):
    """SQLAlchemy implementation writing flattened rows into `transaction_mirror`."""

    def __init__(self, engine: Engine):
        """Initialize mirror service.

        Args:
            engine: SQLAlchemy engine used for mirror writes.

        Raises:
            ValueError: Raised when engine is invalid.
        """

        if engine is None:
            raise ValueError("engine must not be None")
        self._engine = engine

    def db_transaction_mirror_write(self, row: TransactionMirrorRow) -> bool:
        """Insert one flattened mirror row; an already mirrored key is left untouched.

        Args:
            row: Flattened mirror row.

        Returns:
            bool: True when a new row was written.

        Raises:
            ValueError: Raised when row is None.
            RuntimeError: Raised when persistence fails.
        """

        if row is None:
            raise ValueError("row must not be None")

        try:
            with self._engine.begin() as connection:
                result = connection.execute(
                    text(
                        "INSERT INTO transaction_mirror (party, counterparty, datetime_utc, transaction) "
                        "VALUES (:party, :counterparty, CAST(:datetime_utc AS timestamptz), CAST(:transaction AS jsonb)) "
                        "ON CONFLICT (party, datetime_utc) DO NOTHING"
                    ),
                    {
                        "party": row.party,
                        "counterparty": row.counterparty,
                        "datetime_utc": row.datetime_utc.isoformat(),
                        "transaction": json.dumps(row.transaction),
                    },
                )
        except SQLAlchemyError as error:
            raise RuntimeError("transaction mirror insert failed") from error

        return result.rowcount == 1


__all__ = ["SQLAlchemyTransactionMirror"]
