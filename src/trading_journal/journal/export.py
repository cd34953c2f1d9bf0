"""Trade export — CSV/JSON output and periodic P&L reports.

Exports journal trades in the journal's own field names for external
analysis and archival, and groups closed trades into daily, weekly or
monthly buckets.

Usage::

    exporter = TradeExporter()
    csv_str = exporter.to_csv(trades)
    json_str = exporter.to_json(trades)
    report = exporter.periodic_report(trades, period="monthly")
"""

from __future__ import annotations

import csv
import io
import json
import logging
from collections import defaultdict
from collections.abc import Sequence
from typing import Any

from trading_journal.core.enums import ProfitFactorMode

from .record import Trade
from .stats import compute_stats, format_profit_factor

logger = logging.getLogger(__name__)

# Default CSV columns
_CSV_COLUMNS = [
    "id",
    "date",
    "assetClass",
    "symbol",
    "direction",
    "status",
    "entryPrice",
    "exitPrice",
    "quantity",
    "pnl",
    "fees",
    "notes",
]

_PERIODS = ("daily", "weekly", "monthly")


class TradeExporter:
    """Export trades to CSV/JSON and generate periodic reports.

    Parameters
    ----------
    decimal_places : int
        Rounding precision for numeric fields.  Default 4.
    profit_factor_mode : ProfitFactorMode
        Passed through to :func:`compute_stats` for report buckets.
    """

    def __init__(
        self,
        *,
        decimal_places: int = 4,
        profit_factor_mode: ProfitFactorMode = ProfitFactorMode.LEGACY,
    ) -> None:
        self._dp = decimal_places
        self._pf_mode = profit_factor_mode

    # ------------------------------------------------------------------ #
    # CSV Export                                                           #
    # ------------------------------------------------------------------ #

    def to_csv(
        self,
        trades: Sequence[Trade],
        *,
        columns: list[str] | None = None,
    ) -> str:
        """Export trades as a CSV string with a header row."""
        cols = columns or _CSV_COLUMNS
        buf = io.StringIO()
        writer = csv.DictWriter(buf, fieldnames=cols, extrasaction="ignore")
        writer.writeheader()

        for trade in trades:
            row = self._trade_to_row(trade)
            writer.writerow({c: row.get(c, "") for c in cols})

        return buf.getvalue()

    # ------------------------------------------------------------------ #
    # JSON Export                                                          #
    # ------------------------------------------------------------------ #

    def to_json(
        self,
        trades: Sequence[Trade],
        *,
        indent: int = 2,
    ) -> str:
        """Export trades as a JSON list of trade objects."""
        rows = [self._trade_to_row(t) for t in trades]
        return json.dumps(rows, indent=indent, ensure_ascii=False, allow_nan=False)

    # ------------------------------------------------------------------ #
    # Periodic Report                                                      #
    # ------------------------------------------------------------------ #

    def periodic_report(
        self,
        trades: Sequence[Trade],
        *,
        period: str = "monthly",
    ) -> dict[str, Any]:
        """Group closed trades by trade date and summarise each bucket.

        Returns
        -------
        dict
            ``period`` : str
            ``buckets`` : list of dicts with per-period stats, oldest first
            (``profit_factor`` is ``None`` when it is infinite or undefined)
            ``totals`` : overall summary across all periods
        """
        if period not in _PERIODS:
            raise ValueError(f"period must be one of {', '.join(_PERIODS)}")

        closed = [t for t in trades if t.is_closed]
        buckets: dict[str, list[Trade]] = defaultdict(list)
        for trade in closed:
            buckets[self._period_key(trade, period)].append(trade)

        bucket_summaries = [
            self._group_stats(key, buckets[key]) for key in sorted(buckets)
        ]
        totals = self._group_stats("all", closed)
        totals.pop("period_key", None)

        logger.debug(
            "Built %s report: %d buckets, %d closed trades",
            period, len(bucket_summaries), len(closed),
        )
        return {
            "period": period,
            "buckets": bucket_summaries,
            "totals": totals,
        }

    # ------------------------------------------------------------------ #
    # Private helpers                                                      #
    # ------------------------------------------------------------------ #

    def _trade_to_row(self, trade: Trade) -> dict[str, Any]:
        """Convert a Trade to a flat dict for export."""
        dp = self._dp
        row = trade.to_record()
        for key in ("entryPrice", "exitPrice", "quantity", "pnl", "fees"):
            if key in row:
                row[key] = round(row[key], dp)
        return row

    @staticmethod
    def _period_key(trade: Trade, period: str) -> str:
        if period == "weekly":
            year, week, _ = trade.date.isocalendar()
            return f"{year}-W{week:02d}"
        if period == "monthly":
            return trade.date.strftime("%Y-%m")
        return trade.date.isoformat()

    def _group_stats(self, key: str, group: list[Trade]) -> dict[str, Any]:
        """Compute aggregate statistics for a group of closed trades."""
        dp = self._dp
        stats = compute_stats(group, profit_factor_mode=self._pf_mode)
        return {
            "period_key": key,
            "trades": stats.total_trades,
            "wins": stats.wins,
            "losses": stats.losses,
            "win_rate": round(stats.win_rate, dp),
            "total_pnl": round(stats.total_pnl, dp),
            # JSON has no inf/nan; the display string keeps the distinction
            "profit_factor": (
                round(stats.profit_factor, dp)
                if stats.profit_factor_is_finite else None
            ),
            "profit_factor_display": format_profit_factor(stats.profit_factor),
            "best_trade": round(max((t.pnl for t in group), default=0.0), dp),
            "worst_trade": round(min((t.pnl for t in group), default=0.0), dp),
        }
