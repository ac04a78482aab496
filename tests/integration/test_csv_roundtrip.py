"""Integration test: hand-kept CSV journal through the whole pipeline.

End-to-end: messy CSV -> TradeImporter -> build_report -> TradeExporter ->
TradeImporter again.  The re-imported journal must derive to the same
trades as the first import.
"""

import csv
import io

import pytest

from pulse_journal.journal.csv_import import TradeImporter
from pulse_journal.journal.derive import derive_trades
from pulse_journal.journal.export import TradeExporter
from pulse_journal.journal.report import build_report

JOURNAL = """\
trade id,date,instrument,market,entry time,exit time,strategy,direction,size qty,entry price,exit price,stop loss,target price,exit reason,platform
ORB-1,01/08/2024,NIFTY,F&O,9:20,9:50,ORB 30,Long,50,21500,21540,21480,21580,Target Hit,Zerodha
,2024-01-08,BANKNIFTY,F&O,10:00,10:40,VWAP,short,15,47000,47100,47050,46800,Stop Hit,Zerodha
ORB-3,"Jan 9, 2024",RELIANCE,,09:15,11:15,,Long,"1,000",2900,2905,2890,2930,Early Exit,

ORB-4,2024-01-10,TCS,Equity,09:30,10:00,Breakout,Long,10,,3800,3700,3900,Manual,Web
"""


@pytest.fixture
def imported():
    return TradeImporter().parse(JOURNAL, id_stamp=42)


def test_import_normalises_and_skips(imported):
    assert imported.skipped == 1
    assert [t.trade_id for t in imported.trades] == ["ORB-1", "CSV-42-2", "ORB-3"]

    first, second, third = imported.trades
    assert first.date == "2024-01-08"
    assert first.entry_time == "09:20"
    assert second.direction.value == "Short"
    assert third.date == "2024-01-09"
    assert third.size_qty == 1000.0
    assert third.market == "Equity"
    assert third.strategy == "Unspecified"
    assert third.platform == "Web"


def test_report_over_imported_journal(imported):
    report = build_report(imported.trades)
    s = report.summary

    assert s.total_trades == 3
    assert s.total_pl == 5500.0
    assert s.win_rate == pytest.approx(2 / 3)
    assert [p.equity for p in s.equity_curve] == [2000.0, 500.0, 5500.0]
    assert s.drawdown_series == (0.0, -1500.0, 0.0)
    assert s.max_drawdown == -1500.0
    assert s.max_drawdown_pct == pytest.approx(-0.75)
    assert s.expectancy_r == pytest.approx((2.0 - 2.0 + 0.5) / 3)

    assert [(d.day, d.total_pl) for d in report.by_weekday] == [("Mon", 500.0), ("Tue", 5000.0)]
    assert report.best_strategy.name == "Unspecified"
    assert report.worst_strategy.name == "VWAP"
    assert report.behavior.early_exit_count == 1
    assert report.behavior.stop_hits == 1


def test_export_then_reimport_is_stable(imported):
    derived = derive_trades(imported.trades)
    text = TradeExporter().to_csv(derived)

    rows = list(csv.DictReader(io.StringIO(text)))
    assert [r["Trade Duration"] for r in rows] == ["30", "40", "120"]
    assert [r["P/L"] for r in rows] == ["2000.00", "-1500.00", "5000.00"]
    assert rows[2]["Size (Qty.)"] == "1000"

    again = TradeImporter().parse(text)
    assert again.skipped == 0
    assert derive_trades(again.trades) == derived
