"""FastAPI application factory for the position ledger service."""

from fastapi import FastAPI

from position_ledger.adapters import BlobReaderPort
from position_ledger.config import AppSettings
from position_ledger.db import DatabaseHealthPort, ImportQueuePort, TransactionMirrorPort, TransactionStorePort
from position_ledger.domain import AppMetadata
from position_ledger.jobs import JobOrchestratorPort
from position_ledger.ledger import PositionQueryPort

from .routers import api_create_health_router, api_create_imports_router, api_create_position_router

APPLICATION_NAME = "position-ledger"


def create_api_application(
    settings: AppSettings,
    db_health_service: DatabaseHealthPort,
    position_resolver: PositionQueryPort,
    blob_reader: BlobReaderPort,
    import_queue: ImportQueuePort,
    store: TransactionStorePort,
    import_worker: JobOrchestratorPort,
    mirror: TransactionMirrorPort | None = None,
) -> FastAPI:
    """Create the FastAPI application instance for the service.

    Args:
        settings: Validated application settings used for runtime metadata.
        db_health_service: Database health service used by health endpoints.
        position_resolver: Position query service for `/position`.
        blob_reader: Blob adapter used by file imports.
        import_queue: Queue receiving imported file lines.
        store: Transaction store used by direct line imports.
        import_worker: Queue worker orchestrator.
        mirror: Optional relational mirror fed by direct line imports.

    Returns:
        FastAPI: Framework application instance with all routers mounted.
    """
    metadata = AppMetadata(application_name=APPLICATION_NAME, environment_name=settings.environment_name)
    application = FastAPI(title="Position Ledger")

    @application.get("/", tags=["foundation"])
    def foundation_index() -> dict[str, str]:
        """Return service identification for bootstrap verification."""

        return {
            "service": metadata.application_name,
            "status": "ready",
            "environment": metadata.environment_name,
        }

    application.include_router(api_create_health_router(db_health_service=db_health_service, blob_reader=blob_reader))
    application.include_router(api_create_position_router(position_resolver=position_resolver))
    application.include_router(
        api_create_imports_router(
            settings=settings,
            blob_reader=blob_reader,
            import_queue=import_queue,
            store=store,
            import_worker=import_worker,
            mirror=mirror,
        )
    )

    return application
