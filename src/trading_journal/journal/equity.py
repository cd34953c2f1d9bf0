"""Equity curve — running account balance over closed trades.

Closed trades are re-sorted by trade date (ties keep log order), unlike
the ledger which preserves log order.  Points are labelled by ordinal
position (``T1``, ``T2`` ...) after a synthetic ``Start`` point, so the
x-axis is a sequence index rather than a timestamp.

Usage::

    curve = build_equity_curve(ledger.trades, ledger.initial_balance)
    [(p.label, p.balance) for p in curve]
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from .record import Trade

START_LABEL = "Start"


@dataclass(frozen=True)
class EquityPoint:
    """One point of the equity curve."""

    label: str
    balance: float
    pnl: float


def build_equity_curve(
    trades: Iterable[Trade],
    initial_balance: float,
) -> list[EquityPoint]:
    """Build the running-balance sequence for closed trades."""
    # sorted() is stable, so same-date trades keep insertion order
    ordered = sorted((t for t in trades if t.is_closed), key=lambda t: t.date)

    running = initial_balance
    curve = [EquityPoint(label=START_LABEL, balance=running, pnl=0.0)]
    for index, trade in enumerate(ordered, start=1):
        running += trade.pnl
        curve.append(EquityPoint(label=f"T{index}", balance=running, pnl=trade.pnl))
    return curve


def max_drawdown(curve: Iterable[EquityPoint]) -> float:
    """Largest peak-to-trough balance decline along *curve* (>= 0)."""
    peak: float | None = None
    max_dd = 0.0
    for point in curve:
        if peak is None or point.balance > peak:
            peak = point.balance
        dd = peak - point.balance
        if dd > max_dd:
            max_dd = dd
    return max_dd
