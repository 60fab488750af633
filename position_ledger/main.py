"""Main module entrypoint for local runtime execution.

This module validates startup configuration and launches the FastAPI service
or runs one import/query command.
"""

import argparse
import json
import sys
from typing import NoReturn

import uvicorn

from position_ledger.bootstrap import (
    bootstrap_create_application,
    bootstrap_create_file_import_dependencies,
    bootstrap_create_import_worker,
    bootstrap_create_position_resolver,
)
from position_ledger.adapters import BlobAdapterError
from position_ledger.config import config_load_settings
from position_ledger.domain import record_position_summary_to_mapping
from position_ledger.jobs import job_import_transactions_file


def main() -> None:
    """Run selected runtime command with validated startup configuration.

    Raises:
        SettingsLoadError: Raised when configuration validation fails.
        SystemExit: Raised with code 1 when a command fails or a required argument is missing.
    """

    argument_parser = argparse.ArgumentParser(description="Position ledger runtime entrypoint")
    argument_parser.add_argument(
        "command",
        nargs="?",
        default="api",
        choices=("api", "import-file", "import-worker", "import-requeue", "position"),
        help="Runtime command: `api` starts server, `import-file` enqueues one blob, "
        "`import-worker` drains one queue batch, `import-requeue` moves failed lines back to pending, "
        "`position` prints one entity position",
        type=str,
    )
    argument_parser.add_argument(
        "target",
        nargs="?",
        default=None,
        help="Blob key for `import-file`, entity for `position`",
        type=str,
    )
    argument_parser.add_argument(
        "--date",
        dest="date",
        default="",
        type=str,
        help="Optional inclusive ISO-8601 cutoff for `position`, partial dates allowed",
    )
    parsed_arguments = argument_parser.parse_args()

    if parsed_arguments.command == "import-file":
        if not parsed_arguments.target:
            argument_parser.error("import-file requires a blob key")
        blob_reader, import_queue = bootstrap_create_file_import_dependencies()
        try:
            import_result = job_import_transactions_file(
                key=parsed_arguments.target,
                blob_reader=blob_reader,
                import_queue=import_queue,
            )
        except (BlobAdapterError, ValueError, RuntimeError) as error:
            main_exit_with_error(error)
        main_print_json(
            {
                "key": import_result.key,
                "enqueued_count": import_result.enqueued_count,
                "skipped_blank_count": import_result.skipped_blank_count,
            }
        )
        return

    if parsed_arguments.command in ("import-worker", "import-requeue"):
        job_name = "import_worker_run" if parsed_arguments.command == "import-worker" else "import_requeue_failed"
        import_worker = bootstrap_create_import_worker()
        try:
            execution_result = import_worker.job_execute(job_name=job_name)
        except RuntimeError as error:
            main_exit_with_error(error)
        main_print_json({"status": execution_result.status, "diagnostics": execution_result.diagnostics})
        if execution_result.status != "success":
            raise SystemExit(1)
        return

    if parsed_arguments.command == "position":
        if not parsed_arguments.target:
            argument_parser.error("position requires an entity")
        position_resolver = bootstrap_create_position_resolver()
        try:
            position = position_resolver.ledger_resolve_position(parsed_arguments.target, parsed_arguments.date)
        except (ValueError, RuntimeError, ArithmeticError) as error:
            main_exit_with_error(error)
        main_print_json(record_position_summary_to_mapping(position))
        return

    settings = config_load_settings()
    application = bootstrap_create_application()
    uvicorn.run(
        application,
        host=settings.application_host,
        port=settings.application_port,
    )


def main_print_json(payload: object) -> None:
    """Print one JSON document to stdout."""

    print(json.dumps(payload, indent=2, sort_keys=True))


def main_exit_with_error(error: Exception) -> NoReturn:
    """Print one command failure to stderr and exit with code 1.

    Raises:
        SystemExit: Always raised with code 1.
    """

    print(f"error: {error}", file=sys.stderr)
    raise SystemExit(1) from error


if __name__ == "__main__":
    main()
