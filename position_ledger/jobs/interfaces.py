"""Typed interfaces for job-layer orchestration responsibilities."""

from dataclasses import dataclass, field
from typing import Protocol


@dataclass(frozen=True)
class JobExecutionResult:
    """Result contract for one workflow execution.

    Attributes:
        job_name: Job identifier.
        status: Final execution state (`success`, `failed`).
        diagnostics: Stage timeline events captured during execution.
    """

    job_name: str
    status: str
    diagnostics: list[dict[str, object]] = field(default_factory=list)


class JobOrchestratorPort(Protocol):
    """Port definition for orchestrating import jobs."""

    def job_supported_names(self) -> tuple[str, ...]:
        """Return the set of workflow names this orchestrator can execute.

        Returns:
            tuple[str, ...]: Deterministic list of supported job names.
        """

    def job_execute(self, job_name: str) -> JobExecutionResult:
        """Execute one named workflow in the job layer.

        Args:
            job_name: Workflow name.

        Returns:
            JobExecutionResult: Final execution status payload.

        Raises:
            ValueError: Raised when the job name is unsupported.
        """
