"""Trade export — CSV/JSON output of derived trades.

The CSV layout is a fixed contract shared with the import side: the
column order below is also the blank template handed to users.

Usage::

    exporter = TradeExporter()
    csv_str = exporter.to_csv(derived)
    template = exporter.template()
"""

from __future__ import annotations

import csv
import io
import json
import logging
from collections.abc import Sequence
from typing import Any

from ..core.errors import ExportError
from .record import DerivedTrade

logger = logging.getLogger(__name__)

CSV_HEADERS = [
    "Trade ID",
    "Date",
    "Day",
    "Instrument",
    "Market",
    "Entry Time",
    "Exit Time",
    "Strategy",
    "Direction",
    "Size (Qty.)",
    "Entry Price",
    "Exit Price",
    "Stop Loss",
    "Target Price",
    "Risk",
    "Reward",
    "Risk-Reward",
    "P/L",
    "Win/Loss",
    "Exit Reason",
    "Platform",
    "R:R",
    "Trade Duration",
    "Total Investment",
]

EXPORT_FORMATS = ("csv", "json")


def format_number(value: float) -> str:
    """Shortest round-trip text for a raw input number.

    Integral values drop the trailing ``.0`` (``16220.0`` -> ``"16220"``).
    """
    if value.is_integer() and abs(value) < 1e16:
        return str(int(value))
    return repr(value)


class TradeExporter:
    """Export derived trades to CSV or JSON.

    Parameters
    ----------
    decimal_places : int
        Precision for the computed money columns (risk, reward, P/L,
        investment) and the R:R ratios.  Default 2.
    """

    def __init__(self, *, decimal_places: int = 2) -> None:
        self._dp = decimal_places

    # ------------------------------------------------------------------ #
    # CSV Export                                                           #
    # ------------------------------------------------------------------ #

    def to_csv(self, trades: Sequence[DerivedTrade]) -> str:
        """Export trades as a CSV string with header row.

        Fields containing a comma, quote or newline are quoted, with
        embedded quotes doubled.  Rows are separated by ``\\n``.
        """
        buf = io.StringIO()
        writer = csv.writer(buf, lineterminator="\n")
        writer.writerow(CSV_HEADERS)
        for trade in trades:
            writer.writerow(self._trade_to_row(trade))
        logger.debug("Exported %d trades to CSV", len(trades))
        return buf.getvalue().rstrip("\n")

    def template(self) -> str:
        """Header-only CSV for users filling in a journal by hand."""
        return ",".join(CSV_HEADERS)

    # ------------------------------------------------------------------ #
    # JSON Export                                                          #
    # ------------------------------------------------------------------ #

    def to_json(self, trades: Sequence[DerivedTrade], *, indent: int = 2) -> str:
        """Export trades as a JSON list of flat trade objects."""
        return json.dumps([t.to_dict() for t in trades], indent=indent)

    def export(self, trades: Sequence[DerivedTrade], fmt: str = "csv") -> str:
        """Dispatch on ``fmt`` (``"csv"`` or ``"json"``)."""
        if fmt == "csv":
            return self.to_csv(trades)
        if fmt == "json":
            return self.to_json(trades)
        raise ExportError(
            f"Unsupported export format {fmt!r}; expected one of {EXPORT_FORMATS}"
        )

    # ------------------------------------------------------------------ #
    # Private helpers                                                      #
    # ------------------------------------------------------------------ #

    def _money(self, value: float) -> str:
        return f"{value:.{self._dp}f}"

    def _ratio(self, value: float | None) -> str:
        return "" if value is None else f"{value:.{self._dp}f}"

    def _trade_to_row(self, trade: DerivedTrade) -> list[Any]:
        """Convert a DerivedTrade to a row in ``CSV_HEADERS`` order."""
        return [
            trade.trade_id,
            trade.date,
            trade.day,
            trade.instrument,
            trade.market,
            trade.entry_time,
            trade.exit_time,
            trade.strategy,
            trade.direction.value,
            format_number(trade.size_qty),
            format_number(trade.entry_price),
            format_number(trade.exit_price),
            format_number(trade.stop_loss),
            format_number(trade.target_price),
            self._money(trade.risk),
            self._money(trade.reward),
            self._ratio(trade.risk_reward),
            self._money(trade.pl),
            trade.win_loss.value,
            trade.exit_reason,
            trade.platform,
            self._ratio(trade.rr),
            trade.trade_duration,
            self._money(trade.total_investment),
        ]
