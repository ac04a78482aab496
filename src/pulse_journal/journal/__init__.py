"""Trade Journal Analytics — per-trade derivation and portfolio statistics.

Turns manually logged trades into derived metrics, summaries, breakdowns
and behavioural flags.  Every function here is pure: it reads the trade
list it is given and returns new values, with no hidden state.

Key components
--------------
**Core analytics**

TradeRecord        One logged trade (validated, immutable)
DerivedTrade       Trade plus risk, reward, P&L, R-multiple, duration
derive_trades      One-to-one derivation of a trade list
compute_summary    Win rate, profit factor, expectancy, equity, drawdown
breakdown_by_*     P&L per day / ISO week / month
day_of_week_stats  Full summary per weekday, Mon → Sun
group_stats        Summary per strategy, instrument or any key
extract_behavior_signals  Heuristic risk flags from exit reasons

**Dashboard & I/O**

TradeFilter        Market / instrument / strategy / date-range filter
build_report       Complete dashboard view model
TradeExporter      CSV/JSON export and the blank CSV template
TradeImporter      CSV import with header checks and row skipping
"""

from .record import DerivedTrade, TradeRecord
from .derive import derive_trade, derive_trades
from .summary import EquityPoint, Summary, compute_drawdown, compute_equity_curve, compute_summary
from .breakdown import (
    BreakdownRow,
    DayOfWeekStat,
    breakdown,
    breakdown_by_day,
    breakdown_by_month,
    breakdown_by_week,
    day_of_week_stats,
    iso_week_key,
    win_rate_by_month,
)
from .groups import GroupStat, group_stats, instrument_stats, strategy_stats
from .heuristics import BehaviorSignals, extract_behavior_signals
from .filters import TradeFilter, date_range_label, filter_options
from .report import JournalReport, build_report, format_money, format_optional
from .export import CSV_HEADERS, TradeExporter
from .csv_import import REQUIRED_HEADERS, ImportResult, TradeImporter

__all__ = [
    "TradeRecord",
    "DerivedTrade",
    "derive_trade",
    "derive_trades",
    "EquityPoint",
    "Summary",
    "compute_summary",
    "compute_equity_curve",
    "compute_drawdown",
    "BreakdownRow",
    "DayOfWeekStat",
    "breakdown",
    "breakdown_by_day",
    "breakdown_by_week",
    "breakdown_by_month",
    "win_rate_by_month",
    "day_of_week_stats",
    "iso_week_key",
    "GroupStat",
    "group_stats",
    "strategy_stats",
    "instrument_stats",
    "BehaviorSignals",
    "extract_behavior_signals",
    "TradeFilter",
    "filter_options",
    "date_range_label",
    "JournalReport",
    "build_report",
    "format_optional",
    "format_money",
    "CSV_HEADERS",
    "TradeExporter",
    "REQUIRED_HEADERS",
    "ImportResult",
    "TradeImporter",
]
