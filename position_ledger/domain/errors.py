"""Project-native typed exceptions for transaction decoding and date filters."""

from __future__ import annotations


class RecordParseError(ValueError):
    """Raised when one delimited line cannot be decoded into a transaction record.

    Attributes:
        line: Source line that failed decoding.
    """

    def __init__(self, message: str, line: str | None = None):
        super().__init__(message)
        self.line = line


class UnknownTransactionTypeError(RecordParseError):
    """Raised in strict mode when the transaction type code is not `D`, `W`, `B` or `S`.

    Attributes:
        transaction_type: Rejected type code.
    """

    def __init__(self, transaction_type: str, line: str | None = None):
        super().__init__(f"unknown transaction type={transaction_type!r}", line=line)
        self.transaction_type = transaction_type


class DateFilterError(ValueError):
    """Raised when a date filter input contains no date components at all."""
