"""Tests for the derivation engine — per-trade analytics."""

import pytest

from pulse_journal.core.enums import TradeResult
from pulse_journal.journal.derive import (
    classify,
    derive_trade,
    derive_trades,
    duration_minutes,
    weekday_name,
)

from tests.conftest import make_pl_trade, make_trade


class TestScenarios:
    def test_long_winner(self):
        """Entry 100, exit 110, qty 10, stop 95, target 120."""
        d = derive_trade(make_trade())
        assert d.pl == 100.0
        assert d.risk == 50.0
        assert d.reward == 200.0
        assert d.risk_reward == 4.0
        assert d.r_multiple == 2.0
        assert d.win_loss is TradeResult.WIN
        assert d.total_investment == 1000.0

    def test_short_profits_when_price_falls(self):
        d = derive_trade(make_trade(
            direction="Short", size_qty=5, entry_price=100, exit_price=90,
            stop_loss=105, target_price=80,
        ))
        assert d.pl == 50.0
        assert d.win_loss is TradeResult.WIN

    def test_direction_flips_sign(self):
        long_ = derive_trade(make_trade(exit_price=93.5))
        short = derive_trade(make_trade(exit_price=93.5, direction="Short"))
        assert long_.pl == -short.pl
        assert long_.risk == short.risk
        assert long_.reward == short.reward


class TestUndefinedRatios:
    def test_zero_risk_gives_none(self):
        d = derive_trade(make_trade(stop_loss=100.0))
        assert d.risk == 0.0
        assert d.risk_reward is None
        assert d.rr is None
        assert d.r_multiple is None

    def test_zero_reward_is_zero_not_none(self):
        d = derive_trade(make_trade(target_price=100.0))
        assert d.reward == 0.0
        assert d.risk_reward == 0.0

    def test_risk_is_absolute(self):
        # Stop above entry on a long (mis-logged) still gives positive risk
        d = derive_trade(make_trade(stop_loss=103.0, target_price=90.0))
        assert d.risk == 30.0
        assert d.reward == 100.0


class TestClassification:
    def test_breakeven_is_exact(self):
        assert derive_trade(make_pl_trade(0.0)).win_loss is TradeResult.BREAKEVEN

    def test_tiny_loss_is_loss(self):
        assert classify(-1e-12) is TradeResult.LOSS

    def test_tiny_win_is_win(self):
        assert classify(1e-12) is TradeResult.WIN


class TestDuration:
    def test_same_day_minutes(self):
        assert duration_minutes("2024-01-02", "09:35", "11:10") == 95

    def test_exit_before_entry_clamps_to_zero(self):
        assert duration_minutes("2024-01-02", "15:00", "09:30") == 0

    def test_derived_duration(self):
        d = derive_trade(make_trade(entry_time="10:20", exit_time="12:40"))
        assert d.trade_duration == 140


class TestWeekday:
    @pytest.mark.parametrize(
        "date,expected",
        [
            ("2024-01-07", "Sun"),
            ("2024-01-08", "Mon"),
            ("2024-01-13", "Sat"),
            ("2026-01-06", "Tue"),
        ],
    )
    def test_weekday_name(self, date, expected):
        assert weekday_name(date) == expected


class TestDeriveTrades:
    def test_empty(self):
        assert derive_trades([]) == []

    def test_order_preserved(self, sample_trades):
        derived = derive_trades(sample_trades)
        assert [d.trade_id for d in derived] == [t.trade_id for t in sample_trades]

    def test_input_not_mutated(self, sample_trades):
        before = [t.model_dump() for t in sample_trades]
        derive_trades(sample_trades)
        assert [t.model_dump() for t in sample_trades] == before

    def test_rederive_is_stable(self):
        d = derive_trade(make_trade())
        assert derive_trade(d) == d

    def test_accepts_generator(self, sample_trades):
        derived = derive_trades(t for t in sample_trades)
        assert len(derived) == len(sample_trades)
