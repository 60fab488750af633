"""Ledger layer package for date filters, signed aggregation and position queries."""

from .interfaces import PositionQueryPort
from .aggregator import LEDGER_SIGN_TABLE, ledger_aggregate, ledger_transaction_delta
from .date_filter import NO_DATE_FILTER_TOKEN, ledger_encode_date_filter
from .position_resolver import PositionResolver

__all__ = [
	"PositionQueryPort",
	"LEDGER_SIGN_TABLE",
	"ledger_aggregate",
	"ledger_transaction_delta",
	"NO_DATE_FILTER_TOKEN",
	"ledger_encode_date_filter",
	"PositionResolver",
]
