"""Job-layer import queue worker with per-message outcome tracking."""
# pylint: disable=duplicate-code

from __future__ import annotations

from dataclasses import dataclass
from uuid import UUID

from position_ledger.db import ImportQueuePort, TransactionMirrorPort, TransactionStorePort
from position_ledger.domain import RecordParseError, UnknownTransactionTypeError, domain_build_stage_event
from position_ledger.logging_setup import get_logger

from .interfaces import JobExecutionResult, JobOrchestratorPort
from .line_import import job_import_transaction_line, job_mirror_line_result

logger = get_logger(__name__)


@dataclass(frozen=True)
class ImportQueueWorkerConfig:
    """Configuration values for queue worker execution.

    Attributes:
        batch_size: Max messages claimed per run.
        strict_types: Reject unknown transaction types.
    """

    batch_size: int = 100
    strict_types: bool = True


class ImportQueueWorker(JobOrchestratorPort):
    """Drain pending import messages: decode, persist, mirror, then mark each message.

    `import_requeue_failed` moves one batch of failed messages back to pending
    so the next worker run retries them.
    """

    _WORKER_JOB_NAME = "import_worker_run"
    _REQUEUE_JOB_NAME = "import_requeue_failed"

    def __init__(
        self,
        import_queue: ImportQueuePort,
        store: TransactionStorePort,
        config: ImportQueueWorkerConfig,
        mirror: TransactionMirrorPort | None = None,
    ):
        """Initialize queue worker dependencies.

        Args:
            import_queue: Queue holding raw transaction lines.
            store: Transaction store receiving decoded records.
            config: Worker execution configuration.
            mirror: Optional relational mirror fed with one change event per stored record.

        Raises:
            ValueError: Raised when dependencies or config values are invalid.
        """

        if import_queue is None:
            raise ValueError("import_queue must not be None")
        if store is None:
            raise ValueError("store must not be None")
        if config.batch_size < 1:
            raise ValueError("config.batch_size must be >= 1")

        self._import_queue = import_queue
        self._store = store
        self._config = config
        self._mirror = mirror

    def job_supported_names(self) -> tuple[str, ...]:
        """Return supported job names."""

        return (self._WORKER_JOB_NAME, self._REQUEUE_JOB_NAME)

    def job_execute(self, job_name: str) -> JobExecutionResult:
        """Claim one batch of messages and import each line, or requeue failed messages.

        Decode failures and store failures are recorded on the message row and
        make the run status `failed`; remaining messages in the batch are
        still processed. A message whose status update fails stays
        `processing` until its claim times out and is claimed again.

        Args:
            job_name: Name of job to execute.

        Returns:
            JobExecutionResult: Final status with stage timeline.

        Raises:
            ValueError: Raised when job name is unsupported.
            RuntimeError: Raised when the queue itself cannot be read or updated.
        """

        normalized_job_name = job_name.strip()
        if normalized_job_name == self._REQUEUE_JOB_NAME:
            return self._job_requeue_failed(normalized_job_name)
        if normalized_job_name != self._WORKER_JOB_NAME:
            raise ValueError(f"unsupported job_name={normalized_job_name}")

        timeline: list[dict[str, object]] = [domain_build_stage_event(stage="claim", status="started")]
        messages = self._import_queue.db_import_queue_claim(limit=self._config.batch_size)
        timeline.append(
            domain_build_stage_event(stage="claim", status="completed", details={"claimed_count": len(messages)})
        )

        inserted_count = 0
        duplicate_count = 0
        failures: list[dict[str, object]] = []
        for message in messages:
            try:
                line_result = job_import_transaction_line(
                    line=message.payload,
                    store=self._store,
                    strict_types=self._config.strict_types,
                )
                if self._mirror is not None:
                    job_mirror_line_result(line_result, self._store, self._mirror)
            except (ValueError, RuntimeError) as error:
                error_code = self._job_error_code_for_exception(error)
                reason = f"{error_code}: {error}"
                failures.append({"message_id": str(message.message_id), "error_code": error_code, "message": str(error)})
                logger.warning("import message %s failed: %s", message.message_id, reason)
                self._job_mark_message(message.message_id, failures, reason)
                continue

            if not self._job_mark_message(message.message_id, failures):
                continue
            if line_result.inserted:
                inserted_count += 1
            else:
                duplicate_count += 1

        status = "failed" if failures else "success"
        timeline.append(
            domain_build_stage_event(
                stage="persist",
                status="completed" if not failures else "failed",
                details={
                    "inserted_count": inserted_count,
                    "duplicate_count": duplicate_count,
                    "failed_count": len(failures),
                    "failures": failures,
                },
            )
        )
        logger.info(
            "import worker run finished status=%s claimed=%d inserted=%d duplicates=%d failed=%d",
            status,
            len(messages),
            inserted_count,
            duplicate_count,
            len(failures),
        )
        return JobExecutionResult(job_name=normalized_job_name, status=status, diagnostics=timeline)

    def _job_mark_message(
        self,
        message_id: UUID,
        failures: list[dict[str, object]],
        failure_reason: str | None = None,
    ) -> bool:
        """Mark one message done, or failed when a reason is given.

        Returns:
            bool: False when the status update failed and was recorded in `failures`.
        """

        try:
            if failure_reason is None:
                self._import_queue.db_import_queue_mark_done(message_id)
            else:
                self._import_queue.db_import_queue_mark_failed(message_id, failure_reason)
        except RuntimeError as error:
            logger.error("import message %s status update failed: %s", message_id, error)
            failures.append({"message_id": str(message_id), "error_code": "IMPORT_QUEUE_UPDATE_ERROR", "message": str(error)})
            return False
        return True

    def _job_requeue_failed(self, job_name: str) -> JobExecutionResult:
        timeline: list[dict[str, object]] = [domain_build_stage_event(stage="requeue", status="started")]
        requeued_count = self._import_queue.db_import_queue_requeue_failed(limit=self._config.batch_size)
        timeline.append(
            domain_build_stage_event(stage="requeue", status="completed", details={"requeued_count": requeued_count})
        )
        logger.info("requeued %d failed import messages", requeued_count)
        return JobExecutionResult(job_name=job_name, status="success", diagnostics=timeline)

    def _job_error_code_for_exception(self, error: Exception) -> str:
        """Map a per-message exception to a deterministic failure code."""

        if isinstance(error, UnknownTransactionTypeError):
            return "IMPORT_UNKNOWN_TRANSACTION_TYPE"
        if isinstance(error, RecordParseError):
            return "IMPORT_PARSE_ERROR"
        if isinstance(error, ValueError):
            return "IMPORT_CONTRACT_ERROR"
        return "IMPORT_PERSISTENCE_ERROR"


__all__ = ["ImportQueueWorker", "ImportQueueWorkerConfig"]
