"""Net position resolution across the party and counterparty indexes."""
# pylint: disable=too-few-public-methods

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor

from position_ledger.db.interfaces import TransactionStorePort
from position_ledger.domain import PartyRole, PositionSummary
from position_ledger.logging_setup import get_logger

from .aggregator import ledger_aggregate
from .date_filter import ledger_encode_date_filter
from .interfaces import PositionQueryPort

logger = get_logger(__name__)


class PositionResolver(PositionQueryPort):
    """Resolve one entity's net position as of an inclusive cutoff date."""

    def __init__(self, store: TransactionStorePort):
        """Initialize resolver dependencies.

        Args:
            store: Transaction store serving both role-keyed range queries.

        Raises:
            ValueError: Raised when store is invalid.
        """

        if store is None:
            raise ValueError("store must not be None")
        self._store = store

    def ledger_resolve_position(self, entity: str, date: str | None = "") -> PositionSummary:
        """Compute the net position of `entity` from every record dated at or before `date`.

        The party-side and counterparty-side queries run concurrently. The
        counterparty fold is seeded with the party fold so both partial sums
        combine into one summary.

        Args:
            entity: Entity identifier.
            date: Partial or complete ISO-8601 cutoff; empty means no cutoff.

        Returns:
            PositionSummary: Net balance and per-asset holdings.

        Raises:
            ValueError: Raised when entity is blank.
            DateFilterError: Raised when date holds no date components.
            RuntimeError: Raised when a store query fails.
        """

        normalized_entity = entity.strip() if isinstance(entity, str) else ""
        if not normalized_entity:
            raise ValueError("entity must not be blank")

        filter_token = ledger_encode_date_filter(date)

        with ThreadPoolExecutor(max_workers=2, thread_name_prefix="position-query") as executor:
            party_future = executor.submit(
                self._store.db_transaction_query, PartyRole.PARTY, normalized_entity, filter_token
            )
            counterparty_future = executor.submit(
                self._store.db_transaction_query, PartyRole.COUNTERPARTY, normalized_entity, filter_token
            )
            party_records = party_future.result()
            counterparty_records = counterparty_future.result()

        party_summary = ledger_aggregate(PartyRole.PARTY, party_records)
        position = ledger_aggregate(PartyRole.COUNTERPARTY, counterparty_records, seed=party_summary)

        logger.debug(
            "resolved position entity=%s filter=%s party_records=%d counterparty_records=%d",
            normalized_entity,
            filter_token,
            len(party_records),
            len(counterparty_records),
        )
        return position


__all__ = ["PositionResolver"]
