"""Stage event helper for import job diagnostics."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from .record_codec import record_format_instant


def domain_build_stage_event(
    stage: str,
    status: str,
    details: dict[str, Any] | None = None,
) -> dict[str, object]:
    """Build one structured import stage event.

    Args:
        stage: Stage name (`read`, `enqueue`, `decode`, `persist`).
        status: Stage status marker.
        details: Optional structured details object.

    Returns:
        dict[str, object]: Stage event stamped with the current UTC instant.
    """

    event_payload: dict[str, object] = {
        "stage": stage,
        "status": status,
        "at_utc": record_format_instant(datetime.now(timezone.utc)),
    }
    if details is not None:
        event_payload["details"] = details
    return event_payload
