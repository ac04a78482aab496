"""Derivation engine — per-trade analytics.

Turns each ``TradeRecord`` into a ``DerivedTrade``.  The map is pure,
one-to-one and order-preserving: output index *i* always corresponds to
input index *i*.

Usage::

    derived = derive_trades(records)
    print(derived[0].pl, derived[0].r_multiple)
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import date, datetime

from ..core.enums import DAY_NAMES, TradeResult
from .record import DerivedTrade, TradeRecord

# Re-deriving an already derived trade must not collide with its
# computed fields.
_RECORD_FIELDS = set(TradeRecord.model_fields)


def weekday_name(iso_date: str) -> str:
    """Short weekday name (``"Mon"`` .. ``"Sun"``) for a ``YYYY-MM-DD`` date."""
    return DAY_NAMES[date.fromisoformat(iso_date).isoweekday() % 7]


def duration_minutes(iso_date: str, entry_time: str, exit_time: str) -> int:
    """Minutes between entry and exit on the same date, never negative.

    An exit earlier than the entry (e.g. an overnight trade logged on a
    single date) clamps to 0 rather than rolling into the next day.
    """
    entry = datetime.fromisoformat(f"{iso_date}T{entry_time}:00")
    exit_ = datetime.fromisoformat(f"{iso_date}T{exit_time}:00")
    minutes = round((exit_ - entry).total_seconds() / 60)
    return max(0, minutes)


def classify(pl: float) -> TradeResult:
    """Strict sign classification; exactly zero is break-even."""
    if pl > 0:
        return TradeResult.WIN
    if pl < 0:
        return TradeResult.LOSS
    return TradeResult.BREAKEVEN


def derive_trade(trade: TradeRecord) -> DerivedTrade:
    """Compute the derived analytics for a single trade."""
    qty = trade.size_qty
    pl = (trade.exit_price - trade.entry_price) * qty * trade.direction.multiplier
    risk = abs(trade.entry_price - trade.stop_loss) * qty
    reward = abs(trade.target_price - trade.entry_price) * qty

    return DerivedTrade(
        **trade.model_dump(include=_RECORD_FIELDS),
        day=weekday_name(trade.date),
        risk=risk,
        reward=reward,
        risk_reward=reward / risk if risk > 0 else None,
        pl=pl,
        win_loss=classify(pl),
        trade_duration=duration_minutes(trade.date, trade.entry_time, trade.exit_time),
        total_investment=trade.entry_price * qty,
        r_multiple=pl / risk if risk > 0 else None,
    )


def derive_trades(trades: Iterable[TradeRecord]) -> list[DerivedTrade]:
    """Derive every trade, preserving input order."""
    return [derive_trade(t) for t in trades]
