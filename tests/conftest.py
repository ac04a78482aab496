"""Shared fixtures for the pulse-journal test suite."""

from __future__ import annotations

import pytest

from pulse_journal.core.config import AnalyticsConfig, CsvConfig
from pulse_journal.journal.record import TradeRecord


def make_trade(
    trade_id: str = "T-1",
    date: str = "2024-01-02",
    *,
    entry_time: str = "09:30",
    exit_time: str = "10:30",
    direction: str = "Long",
    size_qty: float = 10.0,
    entry_price: float = 100.0,
    exit_price: float = 110.0,
    stop_loss: float = 95.0,
    target_price: float = 120.0,
    instrument: str = "AAPL",
    market: str = "Equity",
    strategy: str = "Breakout",
    exit_reason: str = "Target Hit",
    platform: str = "Web",
    **extra,
) -> TradeRecord:
    """Helper to create a TradeRecord (defaults: +100 Long winner on a Tuesday)."""
    return TradeRecord(
        trade_id=trade_id,
        date=date,
        instrument=instrument,
        market=market,
        entry_time=entry_time,
        exit_time=exit_time,
        strategy=strategy,
        direction=direction,
        size_qty=size_qty,
        entry_price=entry_price,
        exit_price=exit_price,
        stop_loss=stop_loss,
        target_price=target_price,
        exit_reason=exit_reason,
        platform=platform,
        **extra,
    )


def make_pl_trade(pl: float, trade_id: str = "T-1", date: str = "2024-01-02", **kwargs) -> TradeRecord:
    """Long trade of qty 1 from 100 whose P&L is exactly ``pl``."""
    kwargs.setdefault("size_qty", 1.0)
    return make_trade(
        trade_id,
        date,
        entry_price=100.0,
        exit_price=100.0 + pl,
        **kwargs,
    )


@pytest.fixture
def analytics_config():
    return AnalyticsConfig()


@pytest.fixture
def csv_config():
    return CsvConfig()


@pytest.fixture
def sample_trades() -> list[TradeRecord]:
    """A small mixed journal across two months."""
    return [
        # Tue, +100, R:R 4.0
        make_trade("T-1", "2024-01-02", strategy="Breakout", instrument="AAPL"),
        # Wed, short winner +50
        make_trade(
            "T-2", "2024-01-03",
            direction="Short", size_qty=5, entry_price=100, exit_price=90,
            stop_loss=104, target_price=88, strategy="VWAP Fade",
            instrument="TSLA",
        ),
        # Wed, -60 stop hit
        make_trade(
            "T-3", "2024-01-03",
            entry_time="11:00", exit_time="11:45",
            size_qty=20, entry_price=50, exit_price=47, stop_loss=47,
            target_price=53, strategy="Breakout", instrument="NIFTY",
            market="F&O", exit_reason="Stop Hit",
        ),
        # Mon (February), +20 early exit, R:R 0.5
        make_trade(
            "T-4", "2024-02-05",
            size_qty=2, entry_price=200, exit_price=210, stop_loss=180,
            target_price=210, strategy="Gap Fade", instrument="AAPL",
            exit_reason="Early Exit",
        ),
    ]
