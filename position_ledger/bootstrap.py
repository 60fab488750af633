"""Application bootstrap wiring for startup validation and dependency assembly."""

from fastapi import FastAPI
from sqlalchemy.engine import Engine

from position_ledger.adapters import FilesystemBlobReader
from position_ledger.api import create_api_application
from position_ledger.config import AppSettings, config_load_settings
from position_ledger.db import (
    SQLAlchemyDatabaseHealthService,
    SQLAlchemyImportQueue,
    SQLAlchemyTransactionMirror,
    SQLAlchemyTransactionStore,
    db_create_engine,
)
from position_ledger.jobs import ImportQueueWorker, ImportQueueWorkerConfig
from position_ledger.ledger import PositionResolver
from position_ledger.logging_setup import configure_logging


def bootstrap_load_runtime() -> tuple[AppSettings, Engine]:
    """Load settings, configure logging and build the shared database engine.

    Returns:
        tuple[AppSettings, Engine]: Validated settings and engine bound to `database_url`.

    Raises:
        SettingsLoadError: Raised when startup configuration validation fails.
    """

    settings = config_load_settings()
    configure_logging(settings.log_level)
    engine = db_create_engine(database_url=settings.database_url)
    return settings, engine


def bootstrap_build_import_queue(settings: AppSettings, engine: Engine) -> SQLAlchemyImportQueue:
    """Build the import queue with the configured stale-claim timeout."""

    return SQLAlchemyImportQueue(engine=engine, claim_timeout_seconds=settings.import_worker_claim_timeout_seconds)


def bootstrap_build_import_worker(settings: AppSettings, engine: Engine) -> ImportQueueWorker:
    """Wire the queue worker with store, queue and mirror repositories."""

    return ImportQueueWorker(
        import_queue=bootstrap_build_import_queue(settings=settings, engine=engine),
        store=SQLAlchemyTransactionStore(engine=engine),
        config=ImportQueueWorkerConfig(
            batch_size=settings.import_worker_batch_size,
            strict_types=settings.codec_strict_types,
        ),
        mirror=SQLAlchemyTransactionMirror(engine=engine),
    )


def bootstrap_create_application() -> FastAPI:
    """Assemble the runtime application after validating startup configuration.

    Returns:
        FastAPI: Fully initialized FastAPI application instance.

    Raises:
        SettingsLoadError: Raised when startup configuration validation fails.
    """

    settings, engine = bootstrap_load_runtime()
    store = SQLAlchemyTransactionStore(engine=engine)
    return create_api_application(
        settings=settings,
        db_health_service=SQLAlchemyDatabaseHealthService(engine=engine),
        position_resolver=PositionResolver(store=store),
        blob_reader=FilesystemBlobReader(root_path=settings.blob_root_path),
        import_queue=bootstrap_build_import_queue(settings=settings, engine=engine),
        store=store,
        import_worker=bootstrap_build_import_worker(settings=settings, engine=engine),
        mirror=SQLAlchemyTransactionMirror(engine=engine),
    )


def bootstrap_create_import_worker() -> ImportQueueWorker:
    """Build the import queue worker for non-HTTP trigger surfaces.

    Raises:
        SettingsLoadError: Raised when startup configuration validation fails.
    """

    settings, engine = bootstrap_load_runtime()
    return bootstrap_build_import_worker(settings=settings, engine=engine)


def bootstrap_create_position_resolver() -> PositionResolver:
    """Build the position resolver for non-HTTP query surfaces."""

    _, engine = bootstrap_load_runtime()
    return PositionResolver(store=SQLAlchemyTransactionStore(engine=engine))


def bootstrap_create_file_import_dependencies() -> tuple[FilesystemBlobReader, SQLAlchemyImportQueue]:
    """Build the blob reader and import queue used by file import commands."""

    settings, engine = bootstrap_load_runtime()
    return (
        FilesystemBlobReader(root_path=settings.blob_root_path),
        bootstrap_build_import_queue(settings=settings, engine=engine),
    )
