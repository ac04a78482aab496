"""Summary aggregator — portfolio-level statistics.

Reduces a collection of derived trades to one ``Summary``: counts and
rates, average win/loss, profit factor, expectancy (currency and R),
the equity curve and its drawdown series.

Undefined ratios are ``None`` rather than zero or infinity:

* ``profit_factor`` when there are no losing trades,
* ``expectancy_r`` / ``avg_rr`` when no trade has a defined risk,
* ``max_drawdown_pct`` when the peak at the worst point was 0.

An empty input is a normal case and yields a zeroed summary.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import asdict, dataclass
from typing import Any

from .record import DerivedTrade


@dataclass(frozen=True)
class EquityPoint:
    """Cumulative P&L after one trade."""

    date: str
    equity: float


@dataclass(frozen=True)
class Drawdown:
    """Drawdown series for an equity curve."""

    series: tuple[float, ...]
    max_drawdown: float
    max_drawdown_pct: float | None


@dataclass(frozen=True)
class Summary:
    """Aggregate statistics over a set of derived trades."""

    total_trades: int
    wins: int
    losses: int
    breakeven: int
    win_rate: float
    total_pl: float
    avg_pl: float
    avg_win: float
    avg_loss: float
    profit_factor: float | None
    expectancy: float
    expectancy_r: float | None
    avg_rr: float | None
    equity_curve: tuple[EquityPoint, ...]
    drawdown_series: tuple[float, ...]
    max_drawdown: float
    max_drawdown_pct: float | None
    max_profit_trade: float
    max_loss_trade: float

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["equity_curve"] = [asdict(p) for p in self.equity_curve]
        data["drawdown_series"] = list(self.drawdown_series)
        return data


def _mean(values: list[float]) -> float | None:
    if not values:
        return None
    return sum(values) / len(values)


def equity_sort_key(trade: DerivedTrade) -> str:
    """Chronological key: date, then exit time, as fixed-width strings."""
    return f"{trade.date} {trade.exit_time}"


def compute_equity_curve(trades: Sequence[DerivedTrade]) -> list[EquityPoint]:
    """Running cumulative P&L, one point per trade, starting from 0.

    Trades are ordered by ``(date, exit_time)``; exact ties keep their
    input order.
    """
    equity = 0.0
    curve: list[EquityPoint] = []
    for trade in sorted(trades, key=equity_sort_key):
        equity += trade.pl
        curve.append(EquityPoint(date=trade.date, equity=equity))
    return curve


def compute_drawdown(curve: Sequence[EquityPoint]) -> Drawdown:
    """Drawdown of each equity point from the running peak.

    The peak starts at 0 (flat account), so a losing first trade is
    already in drawdown.  Every value in the series is <= 0.
    """
    peak = 0.0
    max_dd = 0.0
    max_dd_pct: float | None = None
    series: list[float] = []

    for point in curve:
        if point.equity > peak:
            peak = point.equity
        dd = point.equity - peak
        series.append(dd)
        if dd < max_dd:
            max_dd = dd
            max_dd_pct = None if peak == 0 else dd / peak

    return Drawdown(series=tuple(series), max_drawdown=max_dd, max_drawdown_pct=max_dd_pct)


def compute_summary(trades: Sequence[DerivedTrade]) -> Summary:
    """Reduce derived trades to a ``Summary``."""
    total = len(trades)
    win_pl = [t.pl for t in trades if t.pl > 0]
    loss_pl = [t.pl for t in trades if t.pl < 0]
    wins = len(win_pl)
    losses = len(loss_pl)

    gross_wins = sum(win_pl, 0.0)
    gross_losses = sum(loss_pl, 0.0)

    avg_win = gross_wins / wins if wins else 0.0
    avg_loss = abs(gross_losses / losses) if losses else 0.0
    win_rate = wins / total if total else 0.0

    curve = compute_equity_curve(trades)
    drawdown = compute_drawdown(curve)
    # Summed in chronological order so the curve ends exactly on it
    total_pl = curve[-1].equity if curve else 0.0

    return Summary(
        total_trades=total,
        wins=wins,
        losses=losses,
        breakeven=total - wins - losses,
        win_rate=win_rate,
        total_pl=total_pl,
        avg_pl=total_pl / total if total else 0.0,
        avg_win=avg_win,
        avg_loss=avg_loss,
        profit_factor=gross_wins / abs(gross_losses) if losses else None,
        expectancy=win_rate * avg_win - (1 - win_rate) * avg_loss,
        expectancy_r=_mean([t.r_multiple for t in trades if t.r_multiple is not None]),
        avg_rr=_mean([t.risk_reward for t in trades if t.risk_reward is not None]),
        equity_curve=tuple(curve),
        drawdown_series=drawdown.series,
        max_drawdown=drawdown.max_drawdown,
        max_drawdown_pct=drawdown.max_drawdown_pct,
        max_profit_trade=max((t.pl for t in trades), default=0.0),
        max_loss_trade=min((t.pl for t in trades), default=0.0),
    )
