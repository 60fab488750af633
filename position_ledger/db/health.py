"""Database health service for the `/health` endpoint."""

from sqlalchemy import Engine, text
from sqlalchemy.exc import SQLAlchemyError

from position_ledger.domain import HealthStatus

from .interfaces import DatabaseHealthPort


class SQLAlchemyDatabaseHealthService(DatabaseHealthPort):
    """Health service verifying connectivity and presence of the transaction table."""

    def __init__(self, engine: Engine):
        """Initialize database health service.

        Args:
            engine: SQLAlchemy engine used for connectivity checks.

        Raises:
            ValueError: Raised when engine is None.
        """

        if engine is None:
            raise ValueError("engine must not be None")
        self._engine = engine

    def db_connection_label(self) -> str:
        """Return the target database URL with the password masked."""

        return self._engine.url.render_as_string(hide_password=True)

    def db_check_health(self) -> HealthStatus:
        """Verify connectivity and that migrations created `ledger_transaction`.

        Returns:
            HealthStatus: Health payload with status and diagnostic detail.

        Raises:
            ConnectionError: Raised when the database is unreachable or unmigrated.
        """

        try:
            with self._engine.connect() as connection:
                table_name = connection.execute(text("SELECT to_regclass('ledger_transaction')")).scalar()
        except SQLAlchemyError as error:
            raise ConnectionError("database connectivity check failed") from error

        if table_name is None:
            raise ConnectionError("database reachable but ledger_transaction table is missing; run migrations")
        return HealthStatus(status="ok", detail="database connectivity and schema verified")
