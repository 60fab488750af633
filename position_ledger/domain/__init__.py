"""Domain models, transaction line decoding and structural mappings."""

from .errors import DateFilterError, RecordParseError, UnknownTransactionTypeError
from .models import (
	ASSET_TRANSACTION_TYPES,
	CASH_TRANSACTION_TYPES,
	AppMetadata,
	NO_DATE_FILTER_TOKEN,
	HealthStatus,
	PartyRole,
	PositionSummary,
	TransactionAsset,
	TransactionBody,
	TransactionRecord,
	TransactionType,
)
from .record_codec import RECORD_FIELD_DELIMITER, record_decode, record_decode_timestamp, record_format_instant
from .record_mapping import (
	record_position_summary_to_mapping,
	record_to_mapping,
	record_transaction_from_mapping,
	record_transaction_to_mapping,
)
from .timeline import domain_build_stage_event

__all__ = [
	"ASSET_TRANSACTION_TYPES",
	"CASH_TRANSACTION_TYPES",
	"AppMetadata",
	"HealthStatus",
	"NO_DATE_FILTER_TOKEN",
	"PartyRole",
	"PositionSummary",
	"TransactionAsset",
	"TransactionBody",
	"TransactionRecord",
	"TransactionType",
	"DateFilterError",
	"RecordParseError",
	"UnknownTransactionTypeError",
	"RECORD_FIELD_DELIMITER",
	"record_decode",
	"record_decode_timestamp",
	"record_format_instant",
	"record_position_summary_to_mapping",
	"record_to_mapping",
	"record_transaction_from_mapping",
	"record_transaction_to_mapping",
	"domain_build_stage_event",
]
