"""Shared fixtures for the trading-journal test suite."""

from __future__ import annotations

import datetime as dt
import logging
from collections.abc import Callable
from typing import Any

import pytest
import structlog

from trading_journal.core.enums import AssetClass, TradeDirection, TradeStatus
from trading_journal.journal.ledger import TradeLedger
from trading_journal.journal.record import Trade, TradeDraft
from trading_journal.storage.store import MemoryJournalStore


# ---------------------------------------------------------------------------
# Trades
# ---------------------------------------------------------------------------

@pytest.fixture
def make_trade() -> Callable[..., Trade]:
    """Factory for closed Stocks trades with an explicit PnL-driving move.

    Stocks use a multiplier of 1, so ``pnl == (exit - entry) * quantity``
    for a long trade.
    """
    counter = iter(range(1, 1_000_000))

    def _make(
        *,
        pnl: float | None = None,
        date: dt.date = dt.date(2024, 1, 2),
        asset_class: AssetClass = AssetClass.STOCKS,
        symbol: str = "AAPL",
        direction: TradeDirection = TradeDirection.LONG,
        entry_price: float = 100.0,
        exit_price: float | None = None,
        quantity: float = 1.0,
        status: TradeStatus = TradeStatus.CLOSED,
        trade_id: str | None = None,
        **extra: Any,
    ) -> Trade:
        if exit_price is None:
            exit_price = entry_price + (pnl if pnl is not None else 0.0)
        draft = TradeDraft(
            date=date,
            asset_class=asset_class,
            symbol=symbol,
            direction=direction,
            entry_price=entry_price,
            exit_price=exit_price,
            quantity=quantity,
            status=status,
            **extra,
        )
        return Trade.from_draft(draft, trade_id=trade_id or f"t{next(counter)}")

    return _make


@pytest.fixture
def forex_form() -> dict[str, Any]:
    """Raw form input for a winning EURUSD long (pnl 500)."""
    return {
        "date": "2024-03-01",
        "assetClass": "Forex",
        "symbol": "eurusd",
        "direction": "Long",
        "entryPrice": "1.1000",
        "exitPrice": "1.1050",
        "quantity": "1",
        "status": "Closed",
    }


# ---------------------------------------------------------------------------
# Ledger / store
# ---------------------------------------------------------------------------

@pytest.fixture
def ledger() -> TradeLedger:
    return TradeLedger(initial_balance=10_000)


@pytest.fixture
def memory_store() -> MemoryJournalStore:
    return MemoryJournalStore()


# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------

@pytest.fixture
def restore_logging():
    """Undo ``setup_logging`` side effects on the root logger."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    root.handlers = handlers
    root.setLevel(level)
    structlog.reset_defaults()
