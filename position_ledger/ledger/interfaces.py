"""Typed interfaces for ledger-layer computations."""

from typing import Protocol

from position_ledger.domain import PositionSummary


class PositionQueryPort(Protocol):
    """Port definition for net position queries."""

    def ledger_resolve_position(self, entity: str, date: str | None = "") -> PositionSummary:
        """Compute the net position of one entity as of an inclusive cutoff date.

        Args:
            entity: Entity identifier.
            date: Partial or complete ISO-8601 cutoff; empty means no cutoff.

        Returns:
            PositionSummary: Net balance and per-asset holdings.

        Raises:
            ValueError: Raised when inputs are invalid.
            RuntimeError: Raised when underlying queries fail.
        """
