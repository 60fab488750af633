"""Signed aggregation of transaction records into a position summary.

Every transaction is a zero-sum transfer between party and counterparty. The
sign table below states each type's effect from the party side; the
counterparty side is the same delta multiplied by -1.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Callable, Iterable

from position_ledger.domain import PartyRole, PositionSummary, TransactionBody, TransactionRecord

_AssetDelta = tuple[str, Decimal] | None
_SignRule = Callable[[TransactionBody], tuple[Decimal, _AssetDelta]]


def _deposit_delta(body: TransactionBody) -> tuple[Decimal, _AssetDelta]:
    return body.value, None


def _withdraw_delta(body: TransactionBody) -> tuple[Decimal, _AssetDelta]:
    return -body.value, None


def _buy_delta(body: TransactionBody) -> tuple[Decimal, _AssetDelta]:
    asset = body.asset
    return -(asset.amount * asset.value), (asset.name, asset.amount)


def _sell_delta(body: TransactionBody) -> tuple[Decimal, _AssetDelta]:
    asset = body.asset
    return asset.amount * asset.value, (asset.name, -asset.amount)


# party-side (balance_delta, asset_delta) per type code
LEDGER_SIGN_TABLE: dict[str, _SignRule] = {
    "D": _deposit_delta,
    "W": _withdraw_delta,
    "B": _buy_delta,
    "S": _sell_delta,
}


def ledger_transaction_delta(role: PartyRole, body: TransactionBody) -> tuple[Decimal, _AssetDelta]:
    """Return the signed balance and asset deltas of one transaction for one role.

    Args:
        role: Role the aggregated entity played.
        body: Transaction body.

    Returns:
        tuple[Decimal, tuple[str, Decimal] | None]: Balance delta and optional
            `(asset_name, amount_delta)`. Unknown or empty bodies yield a zero delta.
    """

    sign_rule = LEDGER_SIGN_TABLE.get(body.type)
    if sign_rule is None or body.body_is_empty():
        return Decimal("0"), None

    role_sign = role.role_sign()
    balance_delta, asset_delta = sign_rule(body)
    if asset_delta is None:
        return balance_delta * role_sign, None
    asset_name, amount_delta = asset_delta
    return balance_delta * role_sign, (asset_name, amount_delta * role_sign)


def ledger_aggregate(
    role: PartyRole,
    records: Iterable[TransactionRecord],
    seed: PositionSummary | None = None,
) -> PositionSummary:
    """Fold transaction records into a position summary starting from `seed`.

    The seed is copied, never mutated. With no records the result equals the
    seed. Asset keys are created on first touch only.

    Args:
        role: Role the aggregated entity played in every record.
        records: Records to fold, in any order.
        seed: Optional starting summary; zero balance and no assets when omitted.

    Returns:
        PositionSummary: Accumulated summary.
    """

    summary = PositionSummary() if seed is None else seed.summary_copy()
    for record in records:
        balance_delta, asset_delta = ledger_transaction_delta(role, record.transaction)
        summary.balance += balance_delta
        if asset_delta is not None:
            asset_name, amount_delta = asset_delta
            summary.assets[asset_name] = summary.assets.get(asset_name, Decimal("0")) + amount_delta
    return summary


__all__ = ["LEDGER_SIGN_TABLE", "ledger_aggregate", "ledger_transaction_delta"]
