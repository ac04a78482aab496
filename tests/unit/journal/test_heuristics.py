"""Tests for behavioural signal heuristics."""

import logging

from pulse_journal.core.config import AnalyticsConfig
from pulse_journal.journal.derive import derive_trades
from pulse_journal.journal.heuristics import (
    count_exit_reason,
    count_low_risk_reward,
    exit_reason_breakdown,
    extract_behavior_signals,
    overtrading_days,
)

from tests.conftest import make_pl_trade, make_trade


class TestLowRiskReward:
    def test_sample(self, derived):
        # T-3 has exactly 1.0 and is not flagged; T-4 has 0.5
        assert count_low_risk_reward(derived) == 1

    def test_undefined_rr_not_flagged(self):
        trades = derive_trades([make_trade(stop_loss=100.0)])
        assert count_low_risk_reward(trades) == 0

    def test_custom_threshold(self, derived):
        assert count_low_risk_reward(derived, threshold=3.5) == 3


class TestExitReasons:
    def test_case_insensitive_substring(self):
        trades = derive_trades([
            make_trade("A", exit_reason="EARLY exit"),
            make_trade("B", exit_reason="Exited early (news)"),
            make_trade("C", exit_reason="Stopped out early"),
            make_trade("D", exit_reason="Target Hit"),
        ])
        assert count_exit_reason(trades, "early") == 3
        assert count_exit_reason(trades, "stop") == 1
        assert count_exit_reason(trades, "Target") == 1

    def test_breakdown_first_seen_order(self):
        trades = derive_trades([
            make_trade("A", exit_reason="Stop Hit"),
            make_trade("B", exit_reason=""),
            make_trade("C", exit_reason="Stop Hit"),
        ])
        assert exit_reason_breakdown(trades) == [("Stop Hit", 2), ("Unspecified", 1)]


class TestOvertrading:
    def test_flags_days_with_three_or_more(self):
        trades = derive_trades(
            [make_pl_trade(1, f"a{i}", "2024-01-02") for i in range(3)]
            + [make_pl_trade(1, f"b{i}", "2024-01-03") for i in range(2)]
            + [make_pl_trade(1, f"c{i}", "2024-01-04") for i in range(5)]
        )
        assert overtrading_days(trades) == [("2024-01-04", 5), ("2024-01-02", 3)]

    def test_ties_keep_first_seen_order(self):
        trades = derive_trades(
            [make_pl_trade(1, f"x{i}", "2024-01-09") for i in range(3)]
            + [make_pl_trade(1, f"y{i}", "2024-01-02") for i in range(3)]
        )
        assert overtrading_days(trades) == [("2024-01-09", 3), ("2024-01-02", 3)]

    def test_custom_threshold(self, derived):
        assert overtrading_days(derived, min_trades=2) == [("2024-01-03", 2)]


class TestExtractSignals:
    def test_sample(self, derived):
        signals = extract_behavior_signals(derived)
        assert signals.low_rr_count == 1
        assert signals.early_exit_count == 1
        assert signals.stop_hits == 1
        assert signals.target_hits == 2
        assert signals.overtrading_days == ()

    def test_config_thresholds(self, derived):
        cfg = AnalyticsConfig(overtrading_min_trades=2, low_rr_threshold=2.0)
        signals = extract_behavior_signals(derived, cfg)
        assert signals.overtrading_days == (("2024-01-03", 2),)
        assert signals.low_rr_count == 2

    def test_empty(self):
        signals = extract_behavior_signals([])
        assert signals.to_dict() == {
            "low_rr_count": 0,
            "early_exit_count": 0,
            "stop_hits": 0,
            "target_hits": 0,
            "overtrading_days": [],
        }

    def test_logs_overtrading(self, caplog):
        trades = derive_trades([make_pl_trade(1, f"a{i}") for i in range(4)])
        with caplog.at_level(logging.DEBUG, logger="pulse_journal.journal.heuristics"):
            extract_behavior_signals(trades)
        assert "Overtrading" in caplog.text
