"""Performance statistics over the closed trades of a journal.

Metrics are recomputed from scratch on every call; there is no
incremental state.  Only trades with ``status == Closed`` take part.

Two policies worth knowing about:

* A closed trade with ``pnl == 0`` counts as a **loss**; there is no
  separate break-even bucket.
* Profit factor, in the default ``legacy`` mode, equals the *number* of
  winning trades when there are no losses.  ``ratio`` mode reports the
  true ``gross_profit / gross_loss`` instead (``inf`` without losses).
"""

from __future__ import annotations

import math
from collections.abc import Iterable

from pydantic import BaseModel

from trading_journal.core.enums import ProfitFactorMode

from .record import Trade


class PerformanceStats(BaseModel):
    """Aggregate performance of closed trades."""

    total_trades: int = 0
    wins: int = 0
    losses: int = 0
    win_rate: float = 0.0  # percentage, 0..100
    total_pnl: float = 0.0
    profit_factor: float = 0.0

    open_trades: int = 0
    gross_profit: float = 0.0
    gross_loss: float = 0.0  # sum of negative pnl (<= 0)
    average_win: float = 0.0
    average_loss: float = 0.0
    largest_win: float = 0.0
    largest_loss: float = 0.0
    expectancy: float = 0.0

    @property
    def profit_factor_is_finite(self) -> bool:
        return math.isfinite(self.profit_factor)


def compute_stats(
    trades: Iterable[Trade],
    *,
    profit_factor_mode: ProfitFactorMode = ProfitFactorMode.LEGACY,
) -> PerformanceStats:
    """Compute performance statistics for the closed subset of *trades*."""
    all_trades = list(trades)
    closed = [t for t in all_trades if t.is_closed]
    open_count = len(all_trades) - len(closed)

    total = len(closed)
    if total == 0:
        return PerformanceStats(open_trades=open_count)

    winners = [t.pnl for t in closed if t.pnl > 0]
    negatives = [t.pnl for t in closed if t.pnl < 0]
    wins = len(winners)
    losses = total - wins  # breakevens counted as losses

    gross_profit = sum(winners)
    gross_loss = sum(negatives)
    total_pnl = sum(t.pnl for t in closed)

    return PerformanceStats(
        total_trades=total,
        wins=wins,
        losses=losses,
        win_rate=wins / total * 100,
        total_pnl=total_pnl,
        profit_factor=_profit_factor(
            wins, losses, gross_profit, gross_loss, profit_factor_mode,
        ),
        open_trades=open_count,
        gross_profit=gross_profit,
        gross_loss=gross_loss,
        average_win=gross_profit / wins if wins else 0.0,
        average_loss=gross_loss / len(negatives) if negatives else 0.0,
        largest_win=max(winners) if winners else 0.0,
        largest_loss=min(negatives) if negatives else 0.0,
        expectancy=total_pnl / total,
    )


def _profit_factor(
    wins: int,
    losses: int,
    gross_profit: float,
    gross_loss: float,
    mode: ProfitFactorMode,
) -> float:
    if mode == ProfitFactorMode.LEGACY and losses == 0:
        return float(wins)
    if gross_loss == 0:
        # Only break-even losers (legacy) or no losers at all (ratio)
        return math.inf if gross_profit > 0 else math.nan
    return gross_profit / abs(gross_loss)


# ---------------------------------------------------------------------------
# Display helpers
# ---------------------------------------------------------------------------

def format_profit_factor(value: float) -> str:
    if math.isnan(value):
        return "—"
    if math.isinf(value):
        return "∞"
    return f"{value:.2f}"


def format_money(value: float, *, signed: bool = False) -> str:
    sign = "+" if signed and value >= 0 else ""
    return f"{sign}{value:,.2f}"


def format_percent(value: float) -> str:
    return f"{value:.1f}%"
