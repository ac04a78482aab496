"""Journal report — the full dashboard view model in one pass.

Filters the trade list, derives every trade once and runs each analytics
reduction over the same derived set.  ``JournalReport.kpis()`` produces
display strings; undefined ratios render as the ``"—"`` placeholder,
never as 0, NaN or infinity.

Usage::

    report = build_report(trades, trade_filter=TradeFilter(strategy="ORB 30"))
    for label, value in report.kpis():
        print(f"{label:15s} {value}")
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

from ..core.config import AnalyticsConfig
from .breakdown import (
    BreakdownRow,
    DayOfWeekStat,
    breakdown_by_day,
    breakdown_by_month,
    breakdown_by_week,
    day_of_week_stats,
    win_rate_by_month,
)
from .derive import derive_trades
from .filters import TradeFilter, date_range_label
from .groups import GroupStat, instrument_stats, strategy_stats
from .heuristics import BehaviorSignals, exit_reason_breakdown, extract_behavior_signals
from .record import DerivedTrade, TradeRecord
from .summary import Summary, compute_summary

PLACEHOLDER = "—"

# Display symbol and digit grouping per supported currency.  INR groups
# the Indian way (12,34,567.00); USD in thousands (1,234,567.00).
_CURRENCIES = {
    "INR": {"symbol": "₹", "indian_grouping": True},
    "USD": {"symbol": "$", "indian_grouping": False},
}


def _group_indian(digits: str) -> str:
    head, tail = digits[:-3], digits[-3:]
    groups = []
    while len(head) > 2:
        groups.insert(0, head[-2:])
        head = head[:-2]
    if head:
        groups.insert(0, head)
    return ",".join([*groups, tail])


def format_money(
    value: float,
    currency: str | None = None,
    *,
    decimals: int = 2,
    signed: bool = False,
) -> str:
    """Money display string, optionally with a currency symbol.

    ``signed`` always shows the sign, ``+`` included.  Without a currency
    the number is printed bare with thousands separators.
    """
    if currency is None:
        return f"{value:{'+' if signed else ''},.{decimals}f}"
    try:
        spec = _CURRENCIES[currency]
    except KeyError:
        raise ValueError(f"Unsupported display currency {currency!r}") from None

    text = f"{abs(value):.{decimals}f}"
    digits, _, fraction = text.partition(".")
    if spec["indian_grouping"] and len(digits) > 3:
        digits = _group_indian(digits)
    else:
        digits = f"{int(digits):,}"
    amount = f"{spec['symbol']}{digits}" + (f".{fraction}" if fraction else "")

    if value < 0:
        return f"-{amount}"
    return f"+{amount}" if signed else amount


def format_optional(value: float | None, fmt: str = "{:.2f}") -> str:
    """Format ``value`` or return the placeholder for ``None``."""
    if value is None:
        return PLACEHOLDER
    return fmt.format(value)


def format_percent(value: float) -> str:
    return f"{value * 100:.1f}%"


@dataclass(frozen=True)
class JournalReport:
    """Everything the dashboard shows for one filtered trade set."""

    date_range: str
    trades: tuple[DerivedTrade, ...]
    summary: Summary
    by_day: tuple[BreakdownRow, ...]
    by_week: tuple[BreakdownRow, ...]
    by_month: tuple[BreakdownRow, ...]
    win_rate_by_month: tuple[BreakdownRow, ...]
    by_weekday: tuple[DayOfWeekStat, ...]
    strategies: tuple[GroupStat, ...]
    instruments: tuple[GroupStat, ...]
    behavior: BehaviorSignals
    exit_reasons: tuple[tuple[str, int], ...]

    # ------------------------------------------------------------------ #
    # Rankings                                                             #
    # ------------------------------------------------------------------ #

    @property
    def best_strategy(self) -> GroupStat | None:
        return self.strategies[0] if self.strategies else None

    @property
    def worst_strategy(self) -> GroupStat | None:
        return self.strategies[-1] if self.strategies else None

    @property
    def best_day(self) -> DayOfWeekStat | None:
        if not self.by_weekday:
            return None
        return max(self.by_weekday, key=lambda d: d.total_pl)

    @property
    def worst_day(self) -> DayOfWeekStat | None:
        if not self.by_weekday:
            return None
        return min(self.by_weekday, key=lambda d: d.total_pl)

    # ------------------------------------------------------------------ #
    # Presentation                                                         #
    # ------------------------------------------------------------------ #

    def kpis(self, currency: str | None = None) -> list[tuple[str, str]]:
        """Headline KPI table as ``(label, display value)`` pairs.

        ``currency`` (``"INR"`` or ``"USD"``) formats the money KPIs with
        that currency's symbol and digit grouping.  It is display only:
        no amount is converted.
        """
        s = self.summary
        return [
            ("Overall P/L", format_money(s.total_pl, currency, decimals=0, signed=True)),
            ("Total trades", str(s.total_trades)),
            ("Win %", format_percent(s.win_rate)),
            ("Avg profit", format_money(s.avg_win, currency)),
            ("Avg loss", format_money(-s.avg_loss if s.avg_loss else 0.0, currency)),
            ("Max profit", format_money(s.max_profit_trade, currency, signed=True)),
            ("Max loss", format_money(s.max_loss_trade, currency, signed=True)),
            ("Expectancy", format_optional(s.expectancy_r, "{:.2f}R")),
            ("Profit factor", format_optional(s.profit_factor)),
            ("Avg R:R", format_optional(s.avg_rr)),
            ("Max drawdown", format_money(s.max_drawdown, currency, signed=True)),
            ("Max drawdown %", format_optional(s.max_drawdown_pct, "{:.1%}")),
        ]

    def to_dict(self, currency: str | None = None) -> dict[str, Any]:
        """JSON-ready representation (derived trades excluded)."""
        return {
            "date_range": self.date_range,
            "summary": self.summary.to_dict(),
            "kpis": dict(self.kpis(currency)),
            "by_day": [r.to_dict() for r in self.by_day],
            "by_week": [r.to_dict() for r in self.by_week],
            "by_month": [r.to_dict() for r in self.by_month],
            "win_rate_by_month": [r.to_dict() for r in self.win_rate_by_month],
            "by_weekday": [d.to_dict() for d in self.by_weekday],
            "strategies": [g.to_dict() for g in self.strategies],
            "instruments": [g.to_dict() for g in self.instruments],
            "best_strategy": self.best_strategy.name if self.best_strategy else None,
            "worst_strategy": self.worst_strategy.name if self.worst_strategy else None,
            "best_day": self.best_day.day if self.best_day else None,
            "worst_day": self.worst_day.day if self.worst_day else None,
            "behavior": self.behavior.to_dict(),
            "exit_reasons": [
                {"label": label, "value": n} for label, n in self.exit_reasons
            ],
        }


def build_report(
    trades: Sequence[TradeRecord],
    *,
    config: AnalyticsConfig | None = None,
    trade_filter: TradeFilter | None = None,
) -> JournalReport:
    """Filter, derive and analyse ``trades``."""
    cfg = config or AnalyticsConfig()
    selected = trade_filter.apply(trades) if trade_filter else list(trades)
    derived = derive_trades(selected)
    label = cfg.unspecified_label

    return JournalReport(
        date_range=date_range_label(selected),
        trades=tuple(derived),
        summary=compute_summary(derived),
        by_day=tuple(breakdown_by_day(derived)),
        by_week=tuple(breakdown_by_week(derived)),
        by_month=tuple(breakdown_by_month(derived)),
        win_rate_by_month=tuple(win_rate_by_month(derived)),
        by_weekday=tuple(day_of_week_stats(derived)),
        strategies=tuple(strategy_stats(derived, unspecified_label=label)),
        instruments=tuple(instrument_stats(derived, unspecified_label=label)),
        behavior=extract_behavior_signals(derived, cfg),
        exit_reasons=tuple(exit_reason_breakdown(derived, unspecified_label=label)),
    )
