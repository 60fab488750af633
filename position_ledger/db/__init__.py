"""Database layer package for all SQL and persistence boundaries."""

from .health import SQLAlchemyDatabaseHealthService
from .import_queue import SQLAlchemyImportQueue
from .interfaces import (
	DatabaseHealthPort,
	ImportQueueMessage,
	ImportQueuePort,
	TransactionMirrorPort,
	TransactionMirrorRow,
	TransactionStorePort,
)
from .session import db_create_engine
from .transaction_mirror import SQLAlchemyTransactionMirror
from .transaction_store import SQLAlchemyTransactionStore

__all__ = [
	"DatabaseHealthPort",
	"ImportQueueMessage",
	"ImportQueuePort",
	"TransactionMirrorPort",
	"TransactionMirrorRow",
	"TransactionStorePort",
	"SQLAlchemyDatabaseHealthService",
	"SQLAlchemyImportQueue",
	"SQLAlchemyTransactionMirror",
	"SQLAlchemyTransactionStore",
	"db_create_engine",
]
