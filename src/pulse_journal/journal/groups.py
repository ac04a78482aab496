"""Group statistics — per-strategy / per-instrument performance.

Partitions derived trades by an arbitrary key function and runs the
summary aggregator on each partition independently.  ``group_stats``
itself is unordered (first-seen order); callers rank the result by
whatever dimension they need.

Usage::

    ranked = strategy_stats(derived)
    best, worst = ranked[0], ranked[-1]
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import asdict, dataclass
from typing import Any

from .record import DerivedTrade
from .summary import compute_summary

UNSPECIFIED = "Unspecified"


@dataclass(frozen=True)
class GroupStat:
    """Summary statistics for one named group of trades."""

    name: str
    trades: int
    win_rate: float
    total_pl: float
    avg_pl: float
    avg_rr: float | None
    expectancy_r: float | None
    profit_factor: float | None

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def group_stats(
    trades: Sequence[DerivedTrade],
    key_fn: Callable[[DerivedTrade], str | None],
    *,
    unspecified_label: str = UNSPECIFIED,
) -> list[GroupStat]:
    """Compute a ``GroupStat`` per distinct key.

    Empty or falsy keys are collected under ``unspecified_label``.
    """
    groups: dict[str, list[DerivedTrade]] = {}
    for trade in trades:
        key = key_fn(trade) or unspecified_label
        groups.setdefault(key, []).append(trade)

    stats = []
    for name, group in groups.items():
        summary = compute_summary(group)
        stats.append(GroupStat(
            name=name,
            trades=summary.total_trades,
            win_rate=summary.win_rate,
            total_pl=summary.total_pl,
            avg_pl=summary.avg_pl,
            avg_rr=summary.avg_rr,
            expectancy_r=summary.expectancy_r,
            profit_factor=summary.profit_factor,
        ))
    return stats


def rank_by_pl(stats: Sequence[GroupStat]) -> list[GroupStat]:
    """Sort groups by descending total P&L (stable for ties)."""
    return sorted(stats, key=lambda s: s.total_pl, reverse=True)


def strategy_stats(
    trades: Sequence[DerivedTrade],
    *,
    unspecified_label: str = UNSPECIFIED,
) -> list[GroupStat]:
    """Per-strategy stats, best total P&L first."""
    return rank_by_pl(
        group_stats(trades, lambda t: t.strategy, unspecified_label=unspecified_label)
    )


def instrument_stats(
    trades: Sequence[DerivedTrade],
    *,
    unspecified_label: str = UNSPECIFIED,
) -> list[GroupStat]:
    """Per-instrument stats, best total P&L first."""
    return rank_by_pl(
        group_stats(trades, lambda t: t.instrument, unspecified_label=unspecified_label)
    )
