"""Inclusive upper-bound filter tokens for string-keyed datetime ranges.

Stored datetimes are full-precision ISO-8601 strings, so a store can only
compare them byte-wise. A partial date such as `2019` sorts before
`2019-05-...`, which would exclude most of the year from `datetime <= "2019"`.
The encoder fills every missing trailing component with its maximum so the
token sorts at or after the token-length prefix of every instant inside the
requested period. Stores compare that prefix, which keeps `...999Z` inside a
`...999` token.
"""

from __future__ import annotations

import re

from position_ledger.domain import NO_DATE_FILTER_TOKEN, DateFilterError

_DATE_FILTER_PATTERN = re.compile(r"(\d+)(-\d+)?(-\d+)?(T\d+)?(:\d+)?(:\d+)?(\.\d+)?")
_DATE_FILTER_COMPONENT_MAXIMA = ("", "-12", "-31", "T23", ":59", ":59", ".999")


def ledger_encode_date_filter(date: str | None) -> str:
    """Encode a possibly partial ISO-8601 date as an inclusive upper-bound token.

    Components present in the input are kept verbatim without calendar
    validation. Missing components are filled with month 12, day 31, hour 23,
    minute 59, second 59 and millisecond 999.

    Args:
        date: Partial or complete ISO-8601 date, or empty for no filter.

    Returns:
        str: Filter token, or `NO_DATE_FILTER_TOKEN` when `date` is empty.

    Raises:
        DateFilterError: Raised when a non-empty input contains no digit run.

    Example:
        >>> ledger_encode_date_filter("2019-05")
        '2019-05-31T23:59:59.999'
    """

    if not date:
        return NO_DATE_FILTER_TOKEN

    match = _DATE_FILTER_PATTERN.search(date)
    if match is None:
        raise DateFilterError(f"date filter must contain a year, got {date!r}")

    return "".join(
        component or default_component
        for component, default_component in zip(match.groups(), _DATE_FILTER_COMPONENT_MAXIMA)
    )


__all__ = ["NO_DATE_FILTER_TOKEN", "ledger_encode_date_filter"]
