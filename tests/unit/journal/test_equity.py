"""Tests for the equity curve builder."""

import datetime as dt

from trading_journal.core.enums import TradeStatus
from trading_journal.journal.equity import (
    START_LABEL,
    EquityPoint,
    build_equity_curve,
    max_drawdown,
)


class TestBuildEquityCurve:
    def test_empty_has_only_start_point(self):
        curve = build_equity_curve([], 10_000)
        assert curve == [EquityPoint(label=START_LABEL, balance=10_000, pnl=0.0)]

    def test_running_balance(self, make_trade):
        trades = [make_trade(pnl=500), make_trade(pnl=-200), make_trade(pnl=50)]
        curve = build_equity_curve(trades, 10_000)
        assert [p.label for p in curve] == ["Start", "T1", "T2", "T3"]
        assert [p.balance for p in curve] == [10_000, 10_500, 10_300, 10_350]
        assert [p.pnl for p in curve] == [0.0, 500, -200, 50]

    def test_sorted_by_date_not_log_order(self, make_trade):
        late = make_trade(pnl=100, date=dt.date(2024, 3, 5))
        early = make_trade(pnl=-40, date=dt.date(2024, 1, 5))
        curve = build_equity_curve([late, early], 1_000)
        assert [p.pnl for p in curve[1:]] == [-40, 100]
        assert curve[-1].balance == 1_060

    def test_same_date_keeps_log_order(self, make_trade):
        day = dt.date(2024, 2, 1)
        trades = [make_trade(pnl=p, date=day) for p in (3, 1, 2)]
        curve = build_equity_curve(trades, 0)
        assert [p.pnl for p in curve[1:]] == [3, 1, 2]

    def test_open_trades_skipped(self, make_trade):
        trades = [make_trade(pnl=10), make_trade(status=TradeStatus.OPEN), make_trade(pnl=5)]
        curve = build_equity_curve(trades, 0)
        assert [p.label for p in curve] == ["Start", "T1", "T2"]
        assert curve[-1].balance == 15


class TestMaxDrawdown:
    def test_monotone_curve_has_none(self, make_trade):
        curve = build_equity_curve([make_trade(pnl=1), make_trade(pnl=2)], 100)
        assert max_drawdown(curve) == 0.0

    def test_peak_to_trough(self, make_trade):
        pnls = [100, -30, -50, 40, -90, 200]
        curve = build_equity_curve([make_trade(pnl=p) for p in pnls], 1_000)
        # peak 1100, trough 970 after the -90
        assert max_drawdown(curve) == 130

    def test_empty(self):
        assert max_drawdown([]) == 0.0
