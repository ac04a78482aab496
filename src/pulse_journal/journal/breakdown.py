"""Time-bucket breakdowns — P&L and win rate per day, week, month, weekday.

Buckets are keyed by fixed-width ISO strings so a plain string sort is
also a chronological sort:

* day   — ``YYYY-MM-DD``
* week  — ``YYYY-Www`` (ISO-8601, Thursday-anchored)
* month — ``YYYY-MM``

Weekday statistics are the exception: they carry a full ``Summary`` per
weekday and are ordered Mon → Sun rather than alphabetically.

Usage::

    rows = breakdown_by_week(derived)
    for row in rows:
        print(row.label, row.value)
"""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from datetime import date
from typing import Any

from ..core.enums import WEEK_ORDER
from .record import DerivedTrade
from .summary import Summary, compute_summary


@dataclass(frozen=True)
class BreakdownRow:
    """One bucket: its label and aggregated value."""

    label: str
    value: float

    def to_dict(self) -> dict[str, Any]:
        return {"label": self.label, "value": self.value}


@dataclass(frozen=True)
class DayOfWeekStat:
    """Full summary for the trades taken on one weekday."""

    day: str
    summary: Summary

    @property
    def trades(self) -> int:
        return self.summary.total_trades

    @property
    def win_rate(self) -> float:
        return self.summary.win_rate

    @property
    def total_pl(self) -> float:
        return self.summary.total_pl

    def to_dict(self) -> dict[str, Any]:
        return {
            "day": self.day,
            "trades": self.trades,
            "win_rate": self.win_rate,
            "total_pl": self.total_pl,
            "avg_pl": self.summary.avg_pl,
            "profit_factor": self.summary.profit_factor,
            "expectancy_r": self.summary.expectancy_r,
        }


# ---------------------------------------------------------------------- #
# Bucket keys                                                              #
# ---------------------------------------------------------------------- #

def iso_week_key(iso_date: str) -> str:
    """ISO-8601 week label, e.g. ``"2021-W53"`` for 2021-01-01.

    The year is the ISO year (the year holding that week's Thursday),
    which differs from the calendar year around 1 January.
    """
    iso_year, week, _ = date.fromisoformat(iso_date).isocalendar()
    return f"{iso_year}-W{week:02d}"


def month_key(iso_date: str) -> str:
    return iso_date[:7]


# ---------------------------------------------------------------------- #
# P&L breakdowns                                                           #
# ---------------------------------------------------------------------- #

def breakdown(
    trades: Sequence[DerivedTrade],
    key_fn: Callable[[DerivedTrade], str],
) -> list[BreakdownRow]:
    """Sum of P&L per bucket, sorted ascending by label."""
    totals: dict[str, float] = defaultdict(float)
    for trade in trades:
        totals[key_fn(trade)] += trade.pl
    return [BreakdownRow(label=k, value=totals[k]) for k in sorted(totals)]


def breakdown_by_day(trades: Sequence[DerivedTrade]) -> list[BreakdownRow]:
    return breakdown(trades, lambda t: t.date)


def breakdown_by_week(trades: Sequence[DerivedTrade]) -> list[BreakdownRow]:
    return breakdown(trades, lambda t: iso_week_key(t.date))


def breakdown_by_month(trades: Sequence[DerivedTrade]) -> list[BreakdownRow]:
    return breakdown(trades, lambda t: month_key(t.date))


# ---------------------------------------------------------------------- #
# Win-rate and weekday statistics                                          #
# ---------------------------------------------------------------------- #

def win_rate_by_month(trades: Sequence[DerivedTrade]) -> list[BreakdownRow]:
    """Fraction of winning trades per month, sorted by month."""
    wins: dict[str, int] = defaultdict(int)
    totals: dict[str, int] = defaultdict(int)
    for trade in trades:
        key = month_key(trade.date)
        totals[key] += 1
        if trade.pl > 0:
            wins[key] += 1
    return [
        BreakdownRow(label=k, value=wins[k] / totals[k])
        for k in sorted(totals)
    ]


def day_of_week_stats(trades: Sequence[DerivedTrade]) -> list[DayOfWeekStat]:
    """Summary per weekday, Mon → Sun.  Weekdays without trades are omitted."""
    groups: dict[str, list[DerivedTrade]] = defaultdict(list)
    for trade in trades:
        groups[trade.day].append(trade)

    return [
        DayOfWeekStat(day=day, summary=compute_summary(groups[day]))
        for day in sorted(groups, key=WEEK_ORDER.index)
    ]
