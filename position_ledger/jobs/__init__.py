"""Job layer package for import workflow orchestration."""

from .interfaces import JobExecutionResult, JobOrchestratorPort
from .file_import import FileImportResult, job_import_transactions_file
from .line_import import LineImportResult, job_import_transaction_line, job_mirror_line_result
from .mirror import job_build_change_event, job_flatten_change_event, job_mirror_change_event
from .queue_worker import ImportQueueWorker, ImportQueueWorkerConfig

__all__ = [
	"JobExecutionResult",
	"JobOrchestratorPort",
	"FileImportResult",
	"job_import_transactions_file",
	"LineImportResult",
	"job_import_transaction_line",
	"job_mirror_line_result",
	"job_build_change_event",
	"job_flatten_change_event",
	"job_mirror_change_event",
	"ImportQueueWorker",
	"ImportQueueWorkerConfig",
]
