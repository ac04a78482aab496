"""Behavioural signal heuristics — risk flags from free-text exit reasons.

Simple scans over derived trades that surface common behavioural
problems:

* trades planned with a reward-to-risk below 1,
* early exits, stop hits and target hits (substring match on the
  free-text ``exit_reason``, case-insensitive),
* overtrading days (three or more trades on one date).

The exit-reason classification is deliberately heuristic: ``"Stopped
out early"`` counts as both an early exit and a stop hit.  Callers that
need stricter classification should normalise ``exit_reason`` before
the trades reach the journal.

Usage::

    signals = extract_behavior_signals(derived)
    for day, count in signals.overtrading_days:
        print(f"OVERTRADING: {day} ({count} trades)")
"""

from __future__ import annotations

import logging
from collections import Counter
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

from ..core.config import AnalyticsConfig
from .record import DerivedTrade

logger = logging.getLogger(__name__)

EARLY_EXIT = "early"
STOP_HIT = "stop"
TARGET_HIT = "target"


@dataclass(frozen=True)
class BehaviorSignals:
    """Counts of behavioural risk flags over a set of trades."""

    low_rr_count: int
    early_exit_count: int
    stop_hits: int
    target_hits: int
    overtrading_days: tuple[tuple[str, int], ...]

    def to_dict(self) -> dict[str, Any]:
        return {
            "low_rr_count": self.low_rr_count,
            "early_exit_count": self.early_exit_count,
            "stop_hits": self.stop_hits,
            "target_hits": self.target_hits,
            "overtrading_days": [
                {"date": d, "trades": n} for d, n in self.overtrading_days
            ],
        }


def count_low_risk_reward(
    trades: Sequence[DerivedTrade],
    threshold: float = 1.0,
) -> int:
    """Trades with a defined planned R:R below ``threshold``."""
    return sum(1 for t in trades if t.rr is not None and t.rr < threshold)


def count_exit_reason(trades: Sequence[DerivedTrade], needle: str) -> int:
    """Trades whose exit reason contains ``needle`` (case-insensitive)."""
    needle = needle.lower()
    return sum(1 for t in trades if needle in t.exit_reason.lower())


def overtrading_days(
    trades: Sequence[DerivedTrade],
    min_trades: int = 3,
) -> list[tuple[str, int]]:
    """Dates with at least ``min_trades`` trades, busiest first."""
    per_day = Counter(t.date for t in trades)
    flagged = [(d, n) for d, n in per_day.items() if n >= min_trades]
    return sorted(flagged, key=lambda item: item[1], reverse=True)


def exit_reason_breakdown(
    trades: Sequence[DerivedTrade],
    *,
    unspecified_label: str = "Unspecified",
) -> list[tuple[str, int]]:
    """Trade count per exit reason, in first-seen order."""
    counts = Counter(t.exit_reason or unspecified_label for t in trades)
    return list(counts.items())


def extract_behavior_signals(
    trades: Sequence[DerivedTrade],
    config: AnalyticsConfig | None = None,
) -> BehaviorSignals:
    """Run every heuristic over ``trades``."""
    cfg = config or AnalyticsConfig()
    days = overtrading_days(trades, cfg.overtrading_min_trades)

    if days:
        logger.debug(
            "Overtrading on %d day(s), worst %s with %d trades",
            len(days),
            days[0][0],
            days[0][1],
        )

    return BehaviorSignals(
        low_rr_count=count_low_risk_reward(trades, cfg.low_rr_threshold),
        early_exit_count=count_exit_reason(trades, EARLY_EXIT),
        stop_hits=count_exit_reason(trades, STOP_HIT),
        target_hits=count_exit_reason(trades, TARGET_HIT),
        overtrading_days=tuple(days),
    )
