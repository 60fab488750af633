"""Delimited transaction line decoding.

One input line carries positional fields separated by `;`:
`timestamp;party;counterparty;type;...` where the trailing fields depend on
the type. Deposits and withdrawals carry one cash value, buys and sells carry
`amount;name;unit_value`.

Timestamps are normalized to millisecond-precision UTC ISO-8601 with a `Z`
suffix so stored values compare byte-wise against date filter tokens.
"""

from __future__ import annotations

import re
from datetime import datetime, timedelta, timezone
from decimal import Decimal, InvalidOperation, getcontext

from .errors import RecordParseError, UnknownTransactionTypeError
from .models import (
    ASSET_TRANSACTION_TYPES,
    CASH_TRANSACTION_TYPES,
    TransactionAsset,
    TransactionBody,
    TransactionRecord,
)

RECORD_FIELD_DELIMITER = ";"

_EPOCH_MILLISECONDS_PATTERN = re.compile(r"\d{13,}")
_EPOCH_SECONDS_PATTERN = re.compile(r"\d{1,12}")
_EPOCH_START_UTC = datetime(1970, 1, 1, tzinfo=timezone.utc)
_FREE_FORM_TIMESTAMP_FORMATS = (
    "%Y/%m/%d",
    "%Y/%m/%d %H:%M:%S",
    "%d %B %Y",
    "%d %B %Y %H:%M:%S",
    "%B %d, %Y",
    "%B %d, %Y %H:%M:%S",
)


def record_decode(line: str, strict_types: bool = True) -> TransactionRecord:
    """Decode one delimited line into a transaction record.

    Args:
        line: Source line, optionally with a trailing line terminator.
        strict_types: Raise for unknown type codes instead of returning an empty-body record.

    Returns:
        TransactionRecord: Decoded immutable record.

    Raises:
        RecordParseError: Raised when fields are missing, numeric fields are not
            finite numbers, or the timestamp cannot be decoded.
        UnknownTransactionTypeError: Raised for unknown type codes when `strict_types` is True.
    """

    if not isinstance(line, str):
        raise RecordParseError("line must be a string")

    source_line = line.rstrip("\r\n")
    fields = [field.strip() for field in source_line.split(RECORD_FIELD_DELIMITER)]
    if len(fields) < 4:
        raise RecordParseError(
            f"expected at least 4 fields (timestamp;party;counterparty;type), got {len(fields)}",
            line=source_line,
        )

    timestamp_token, party, counterparty, transaction_type = fields[:4]
    if not party:
        raise RecordParseError("party must not be blank", line=source_line)
    if not counterparty:
        raise RecordParseError("counterparty must not be blank", line=source_line)

    return TransactionRecord(
        datetime=record_decode_timestamp(timestamp_token, line=source_line),
        party=party,
        counterparty=counterparty,
        transaction=_record_decode_body(
            transaction_type=transaction_type,
            type_fields=fields[4:],
            strict_types=strict_types,
            source_line=source_line,
        ),
    )


def record_decode_timestamp(token: str, line: str | None = None) -> str:
    """Decode one timestamp token into a millisecond-precision UTC ISO-8601 instant.

    Priority order: 13+ digits are epoch milliseconds, 1-12 digits are epoch
    seconds, anything else is parsed as a free-form date string.

    Args:
        token: Raw timestamp field.
        line: Optional source line used for error context.

    Returns:
        str: Instant formatted as `YYYY-MM-DDTHH:MM:SS.mmmZ`.

    Raises:
        RecordParseError: Raised when the token is blank or cannot be decoded.
    """

    normalized_token = token.strip()
    if not normalized_token:
        raise RecordParseError("timestamp must not be blank", line=line)

    if _EPOCH_MILLISECONDS_PATTERN.fullmatch(normalized_token):
        return _record_format_epoch_milliseconds(int(normalized_token), line=line)
    if _EPOCH_SECONDS_PATTERN.fullmatch(normalized_token):
        return _record_format_epoch_milliseconds(int(normalized_token) * 1000, line=line)

    parsed_value = _record_parse_free_form_timestamp(normalized_token)
    if parsed_value is None:
        raise RecordParseError(f"unsupported timestamp={normalized_token!r}", line=line)
    return record_format_instant(parsed_value)


def record_format_instant(value: datetime) -> str:
    """Format a datetime as a millisecond-precision UTC instant with `Z` suffix.

    Naive values are treated as UTC.
    """

    if value.tzinfo is None:
        utc_value = value.replace(tzinfo=timezone.utc)
    else:
        utc_value = value.astimezone(timezone.utc)
    return f"{utc_value.strftime('%Y-%m-%dT%H:%M:%S')}.{utc_value.microsecond // 1000:03d}Z"


def _record_format_epoch_milliseconds(epoch_milliseconds: int, line: str | None) -> str:
    try:
        instant = _EPOCH_START_UTC + timedelta(milliseconds=epoch_milliseconds)
    except OverflowError as error:
        raise RecordParseError(f"epoch timestamp out of range: {epoch_milliseconds}", line=line) from error
    return record_format_instant(instant)


def _record_parse_free_form_timestamp(normalized_token: str) -> datetime | None:
    """Parse supported free-form date strings, returning None when unsupported."""

    candidates = [normalized_token]
    if normalized_token.endswith("Z"):
        candidates.append(f"{normalized_token[:-1]}+00:00")

    for candidate in candidates:
        try:
            return datetime.fromisoformat(candidate)
        except ValueError:
            continue

    for supported_format in _FREE_FORM_TIMESTAMP_FORMATS:
        try:
            return datetime.strptime(normalized_token, supported_format)
        except ValueError:
            continue
    return None


def _record_decode_body(
    transaction_type: str,
    type_fields: list[str],
    strict_types: bool,
    source_line: str,
) -> TransactionBody:
    if transaction_type in CASH_TRANSACTION_TYPES:
        if len(type_fields) < 1:
            raise RecordParseError(f"type {transaction_type} requires a value field", line=source_line)
        return TransactionBody(
            type=transaction_type,
            value=_record_parse_number(type_fields[0], field_name="value", line=source_line),
        )

    if transaction_type in ASSET_TRANSACTION_TYPES:
        if len(type_fields) < 3:
            raise RecordParseError(
                f"type {transaction_type} requires amount;name;value fields",
                line=source_line,
            )
        amount_text, asset_name, unit_value_text = type_fields[:3]
        if not asset_name:
            raise RecordParseError("asset name must not be blank", line=source_line)
        return TransactionBody(
            type=transaction_type,
            asset=TransactionAsset(
                name=asset_name,
                amount=_record_parse_number(amount_text, field_name="amount", line=source_line),
                value=_record_parse_number(unit_value_text, field_name="value", line=source_line),
            ),
        )

    if strict_types:
        raise UnknownTransactionTypeError(transaction_type, line=source_line)
    # lenient mode: empty body, ignored by aggregation
    return TransactionBody(type=transaction_type)


def _record_parse_number(value: str, field_name: str, line: str) -> Decimal:
    try:
        parsed_value = Decimal(value)
    except InvalidOperation as error:
        raise RecordParseError(f"{field_name} must be numeric, got {value!r}", line=line) from error
    if not parsed_value.is_finite():
        raise RecordParseError(f"{field_name} must be a finite number, got {value!r}", line=line)
    # amount * value and running sums must stay inside the context exponent range
    if abs(parsed_value.adjusted()) > getcontext().Emax // 4:
        raise RecordParseError(f"{field_name} is out of range, got {value!r}", line=line)
    return parsed_value


__all__ = [
    "RECORD_FIELD_DELIMITER",
    "record_decode",
    "record_decode_timestamp",
    "record_format_instant",
]
