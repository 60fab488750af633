"""Health endpoint router composition for app, database and blob source checks."""

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from position_ledger.adapters import BlobReaderPort
from position_ledger.db import DatabaseHealthPort
from position_ledger.logging_setup import get_logger

logger = get_logger(__name__)


def api_create_health_router(
    db_health_service: DatabaseHealthPort,
    blob_reader: BlobReaderPort | None = None,
) -> APIRouter:
    """Create health-check router with app and database connectivity status.

    Args:
        db_health_service: DB-layer health service interface.
        blob_reader: Optional blob adapter whose source label is reported.

    Returns:
        APIRouter: Router exposing `/health` endpoint.

    Raises:
        ValueError: Raised when db_health_service is invalid.
    """

    if db_health_service is None:
        raise ValueError("db_health_service must not be None")

    router = APIRouter(tags=["health"])

    @router.get("/health")
    def api_health_status() -> JSONResponse:
        """Return application and database health state."""

        payload: dict[str, str | None] = {
            "app": "up",
            "target": db_health_service.db_connection_label(),
            "blob_source": blob_reader.adapter_source_name() if blob_reader is not None else None,
        }
        try:
            db_health = db_health_service.db_check_health()
        except ConnectionError as error:
            logger.warning("health check degraded: %s", error)
            payload.update({"status": "degraded", "database": "down", "detail": str(error)})
            return JSONResponse(content=payload, status_code=status.HTTP_503_SERVICE_UNAVAILABLE)

        payload.update({"status": "ok", "database": db_health.status, "detail": db_health.detail})
        return JSONResponse(content=payload, status_code=status.HTTP_200_OK)

    return router
