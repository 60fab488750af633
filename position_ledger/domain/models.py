"""Typed domain models shared across runtime layers.

Transaction records are immutable once decoded. Position summaries are
transient values recomputed on every query.
"""

from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum


class TransactionType(str, Enum):
    """Supported transaction type codes."""

    DEPOSIT = "D"
    WITHDRAW = "W"
    BUY = "B"
    SELL = "S"


CASH_TRANSACTION_TYPES = frozenset({TransactionType.DEPOSIT.value, TransactionType.WITHDRAW.value})
ASSET_TRANSACTION_TYPES = frozenset({TransactionType.BUY.value, TransactionType.SELL.value})

# date filter token meaning "no upper bound"
NO_DATE_FILTER_TOKEN = "X"


class PartyRole(str, Enum):
    """Role an entity played in a transaction."""

    PARTY = "party"
    COUNTERPARTY = "counterparty"

    def role_sign(self) -> int:
        """Return +1 for the party side and -1 for the counterparty side."""

        return 1 if self is PartyRole.PARTY else -1


@dataclass(frozen=True)
class TransactionAsset:
    """Asset leg of a buy or sell transaction.

    Attributes:
        name: Opaque asset name.
        amount: Number of units.
        value: Price of one unit.
    """

    name: str
    amount: Decimal
    value: Decimal


@dataclass(frozen=True)
class TransactionBody:
    """Type-tagged transaction payload.

    Exactly one of `value` or `asset` is set for known types. Both are None
    for a record decoded leniently from an unknown type.

    Attributes:
        type: Transaction type code (`D`, `W`, `B`, `S`).
        value: Cash value for deposits and withdrawals.
        asset: Asset leg for buys and sells.
    """

    type: str
    value: Decimal | None = None
    asset: TransactionAsset | None = None

    def body_is_empty(self) -> bool:
        """Return True when the body carries neither a value nor an asset."""

        return self.value is None and self.asset is None


@dataclass(frozen=True)
class TransactionRecord:
    """One ledger transaction between two named entities.

    Attributes:
        datetime: Millisecond-precision UTC ISO-8601 instant with `Z` suffix.
        party: Party identifier.
        counterparty: Counterparty identifier.
        transaction: Type-tagged payload.
    """

    datetime: str
    party: str
    counterparty: str
    transaction: TransactionBody


@dataclass
class PositionSummary:
    """Signed net cash balance and per-asset holdings for one entity.

    Attributes:
        balance: Signed net cash balance.
        assets: Signed net amount keyed by asset name; absent keys mean zero.
    """

    balance: Decimal = Decimal("0")
    assets: dict[str, Decimal] = field(default_factory=dict)

    def summary_copy(self) -> "PositionSummary":
        """Return an independent copy safe to mutate."""

        return PositionSummary(balance=self.balance, assets=dict(self.assets))


@dataclass(frozen=True)
class AppMetadata:
    """Static application metadata for runtime identification.

    Attributes:
        application_name: Human-readable app name.
        environment_name: Runtime environment label.
    """

    application_name: str
    environment_name: str


@dataclass(frozen=True)
class HealthStatus:
    """Health response contract used by health-check surfaces.

    Attributes:
        status: Overall status text for service health.
        detail: Additional message suitable for operational diagnostics.
    """

    status: str
    detail: str
