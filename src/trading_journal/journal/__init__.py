"""Trade journal — accounting and performance analytics.

Key components
--------------
Trade              One logged trade with its frozen PnL
TradeLedger        Ordered trades + account balance
normalize_trade    Raw form input → validated TradeDraft
compute_pnl        Per-asset-class PnL formula
compute_stats      Win rate, profit factor and friends over closed trades
build_equity_curve Running balance over closed trades by date
TradeExporter      CSV/JSON export and periodic reports
"""

from .record import AccountState, LedgerSnapshot, Trade, TradeDraft
from .pnl import compute_pnl
from .validation import normalize_trade
from .ledger import TradeLedger
from .stats import PerformanceStats, compute_stats
from .equity import EquityPoint, build_equity_curve, max_drawdown
from .export import TradeExporter

__all__ = [
    "AccountState",
    "LedgerSnapshot",
    "Trade",
    "TradeDraft",
    "compute_pnl",
    "normalize_trade",
    "TradeLedger",
    "PerformanceStats",
    "compute_stats",
    "EquityPoint",
    "build_equity_curve",
    "max_drawdown",
    "TradeExporter",
]
