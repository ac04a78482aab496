"""Journal filters — narrow the trade list before analysis.

Mirrors the dashboard's global filters: market, instrument and strategy
(exact match, ``None`` meaning "all") plus an inclusive date range.  The
journal view adds direction and result (Win / Loss / BE).  Dates are
fixed-width ISO strings, so range checks are plain string comparisons.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import TypeVar

from pydantic import BaseModel

from ..core.enums import Direction, TradeResult
from .derive import derive_trade
from .record import DerivedTrade, TradeRecord

T = TypeVar("T", bound=TradeRecord)


def _result_of(trade: TradeRecord) -> TradeResult:
    if isinstance(trade, DerivedTrade):
        return trade.win_loss
    return derive_trade(trade).win_loss


class TradeFilter(BaseModel):
    """Filter criteria.  Unset fields do not constrain.

    ``result`` works on plain records too: their outcome is classified
    by deriving them on the fly.
    """

    market: str | None = None
    instrument: str | None = None
    strategy: str | None = None
    start_date: str | None = None  # YYYY-MM-DD, inclusive
    end_date: str | None = None  # YYYY-MM-DD, inclusive
    direction: Direction | None = None
    result: TradeResult | None = None

    model_config = {"frozen": True}

    def matches(self, trade: TradeRecord) -> bool:
        if self.market is not None and trade.market != self.market:
            return False
        if self.instrument is not None and trade.instrument != self.instrument:
            return False
        if self.strategy is not None and trade.strategy != self.strategy:
            return False
        if self.direction is not None and trade.direction is not self.direction:
            return False
        if self.result is not None and _result_of(trade) is not self.result:
            return False
        if self.start_date and trade.date < self.start_date:
            return False
        if self.end_date and trade.date > self.end_date:
            return False
        return True

    def apply(self, trades: Iterable[T]) -> list[T]:
        """Matching trades, in input order."""
        return [t for t in trades if self.matches(t)]


def filter_options(trades: Sequence[TradeRecord]) -> dict[str, list[str]]:
    """Sorted distinct values for each filterable label."""
    return {
        "markets": sorted({t.market for t in trades}),
        "instruments": sorted({t.instrument for t in trades}),
        "strategies": sorted({t.strategy for t in trades}),
    }


def date_range_label(trades: Sequence[TradeRecord]) -> str:
    """``"first - last"`` date span, or a placeholder when empty."""
    if not trades:
        return "No trades yet"
    dates = sorted(t.date for t in trades)
    return f"{dates[0]} - {dates[-1]}"
