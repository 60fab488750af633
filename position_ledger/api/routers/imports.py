"""Import API router composition for file, line and worker triggers."""
# pylint: disable=duplicate-code

from __future__ import annotations

from fastapi import APIRouter, Query, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from position_ledger.adapters import BlobAdapterError, BlobKeyError, BlobNotFoundError, BlobReaderPort
from position_ledger.config import AppSettings
from position_ledger.db import ImportQueuePort, TransactionMirrorPort, TransactionStorePort
from position_ledger.domain import RecordParseError, record_decode, record_to_mapping
from position_ledger.jobs import (
    JobOrchestratorPort,
    LineImportResult,
    job_import_transactions_file,
    job_mirror_line_result,
)
from position_ledger.logging_setup import get_logger

logger = get_logger(__name__)


class FileImportRequest(BaseModel):
    """Request body for file import triggers."""

    key: str = Field(min_length=1)


class LineImportRequest(BaseModel):
    """Request body for direct line imports."""

    lines: list[str] = Field(min_length=1, max_length=1000)


def api_create_imports_router(
    settings: AppSettings,
    blob_reader: BlobReaderPort,
    import_queue: ImportQueuePort,
    store: TransactionStorePort,
    import_worker: JobOrchestratorPort,
    mirror: TransactionMirrorPort | None = None,
) -> APIRouter:
    """Create imports router.

    Args:
        settings: Runtime settings carrying codec strictness.
        blob_reader: Adapter reading uploaded files.
        import_queue: Queue receiving file lines.
        store: Transaction store for direct line imports.
        import_worker: Queue worker orchestrator.
        mirror: Optional relational mirror fed with every stored line.

    Returns:
        APIRouter: Router exposing `/imports` endpoints.

    Raises:
        ValueError: Raised when dependencies are invalid.
    """

    if settings is None:
        raise ValueError("settings must not be None")
    if blob_reader is None:
        raise ValueError("blob_reader must not be None")
    if import_queue is None:
        raise ValueError("import_queue must not be None")
    if store is None:
        raise ValueError("store must not be None")
    if import_worker is None:
        raise ValueError("import_worker must not be None")

    router = APIRouter(prefix="/imports", tags=["imports"])

    @router.post("/files")
    def api_imports_file_trigger(request: FileImportRequest) -> JSONResponse:
        """Enqueue every line of one uploaded file.

        Returns:
            JSONResponse: Enqueue counts, or an error payload.
        """

        try:
            import_result = job_import_transactions_file(
                key=request.key,
                blob_reader=blob_reader,
                import_queue=import_queue,
            )
        except BlobNotFoundError as error:
            payload = {"status": "error", "code": "BLOB_NOT_FOUND", "message": str(error)}
            return JSONResponse(content=payload, status_code=status.HTTP_404_NOT_FOUND)
        except (BlobKeyError, ValueError) as error:
            payload = {"status": "error", "code": "INVALID_BLOB", "message": str(error)}
            return JSONResponse(content=payload, status_code=status.HTTP_400_BAD_REQUEST)
        except (BlobAdapterError, RuntimeError) as error:
            logger.error("file import failed key=%s: %s", request.key, error)
            payload = {"status": "error", "code": "IMPORT_UNAVAILABLE", "message": str(error)}
            return JSONResponse(content=payload, status_code=status.HTTP_503_SERVICE_UNAVAILABLE)

        payload = {
            "status": "accepted",
            "key": import_result.key,
            "enqueued_count": import_result.enqueued_count,
            "skipped_blank_count": import_result.skipped_blank_count,
        }
        return JSONResponse(content=payload, status_code=status.HTTP_202_ACCEPTED)

    @router.post("/lines")
    def api_imports_lines(request: LineImportRequest) -> JSONResponse:
        """Decode, persist and mirror lines directly; nothing is stored when any line fails to decode.

        Returns:
            JSONResponse: Stored records with insert flags, or decode errors.
        """

        decoded_records = []
        errors = []
        for index, line in enumerate(request.lines):
            try:
                decoded_records.append(record_decode(line, strict_types=settings.codec_strict_types))
            except RecordParseError as error:
                errors.append({"index": index, "message": str(error)})
        if errors:
            payload = {"status": "error", "code": "INVALID_LINES", "errors": errors}
            return JSONResponse(content=payload, status_code=status.HTTP_400_BAD_REQUEST)

        items = []
        try:
            for record in decoded_records:
                line_result = LineImportResult(record=record, inserted=store.db_transaction_put(record))
                if mirror is not None:
                    job_mirror_line_result(line_result, store, mirror)
                items.append({"record": record_to_mapping(record), "inserted": line_result.inserted})
        except RuntimeError as error:
            logger.error("line import failed after %d records: %s", len(items), error)
            payload = {"status": "error", "code": "STORE_UNAVAILABLE", "message": str(error), "items": items}
            return JSONResponse(content=payload, status_code=status.HTTP_503_SERVICE_UNAVAILABLE)

        payload = {"status": "ok", "items": items}
        return JSONResponse(content=payload, status_code=status.HTTP_200_OK)

    @router.post("/worker-runs")
    def api_imports_worker_run(job_name: str = Query(default="import_worker_run")) -> JSONResponse:
        """Drain one batch of queued lines, or requeue failed lines with `import_requeue_failed`.

        Returns:
            JSONResponse: Worker execution payload.
        """

        if job_name not in import_worker.job_supported_names():
            payload = {"status": "error", "code": "UNSUPPORTED_JOB", "message": f"unsupported job_name={job_name}"}
            return JSONResponse(content=payload, status_code=status.HTTP_400_BAD_REQUEST)

        try:
            execution_result = import_worker.job_execute(job_name=job_name)
        except RuntimeError as error:
            logger.error("import worker run failed: %s", error)
            payload = {"status": "error", "code": "QUEUE_UNAVAILABLE", "message": str(error)}
            return JSONResponse(content=payload, status_code=status.HTTP_503_SERVICE_UNAVAILABLE)

        payload = {
            "job_name": execution_result.job_name,
            "status": execution_result.status,
            "diagnostics": execution_result.diagnostics,
        }
        return JSONResponse(content=payload, status_code=status.HTTP_200_OK)

    return router


__all__ = ["FileImportRequest", "LineImportRequest", "api_create_imports_router"]
