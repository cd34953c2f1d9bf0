"""Journal service — wires validator, ledger, store and mentor together.

This is the application facade used by the CLI.  The store is loaded
once on open and saved after every successful ledger mutation; reads
(stats, equity curve) are computed from a fresh ledger snapshot.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from .core.config import Settings
from .journal.equity import EquityPoint, build_equity_curve
from .journal.ledger import TradeLedger
from .journal.record import AccountState, LedgerSnapshot, Trade
from .journal.stats import PerformanceStats, compute_stats
from .journal.validation import normalize_trade
from .mentor.client import IMentorClient, MentorClient
from .mentor.session import MentorResult, MentorSession
from .storage.store import IJournalStore, JsonFileJournalStore

logger = logging.getLogger(__name__)


class JournalService:
    """High-level journal operations over a persistent ledger.

    Parameters
    ----------
    store : IJournalStore
        Where the ledger is loaded from and saved to.
    settings : Settings | None
        Application settings; defaults are used when omitted.
    mentor_client : IMentorClient | None
        Override for the mentor client (tests inject fakes here).
    """

    def __init__(
        self,
        store: IJournalStore,
        settings: Settings | None = None,
        *,
        mentor_client: IMentorClient | None = None,
    ) -> None:
        self._settings = settings or Settings()
        self._store = store
        self._ledger = TradeLedger.from_snapshot(
            store.load(), on_change=self._store.save,
        )
        client = mentor_client or MentorClient(self._settings.mentor)
        self._mentor = MentorSession(
            client, min_trades=self._settings.mentor.min_trades,
        )

    @classmethod
    def open(cls, settings: Settings, **kwargs: Any) -> JournalService:
        """Open the file-backed journal described by *settings*."""
        storage = settings.storage
        store = JsonFileJournalStore(
            storage.data_dir,
            trades_key=storage.trades_key,
            account_key=storage.account_key,
            initial_balance=storage.default_initial_balance,
        )
        return cls(store, settings, **kwargs)

    # ------------------------------------------------------------------ #
    # Mutations (each one is persisted)                                    #
    # ------------------------------------------------------------------ #

    def log_trade(self, raw: Mapping[str, Any]) -> Trade:
        """Validate *raw* form input, freeze its PnL and append it.

        Raises
        ------
        TradeValidationError
            If the input is incomplete or malformed; nothing is stored.
        """
        draft = normalize_trade(raw)
        trade = Trade.from_draft(draft)
        self._ledger.append(trade)
        return trade

    def delete_trade(self, trade_id: str) -> bool:
        return self._ledger.remove(trade_id)

    def set_initial_balance(self, value: float) -> None:
        self._ledger.set_initial_balance(value)

    # ------------------------------------------------------------------ #
    # Reads                                                                #
    # ------------------------------------------------------------------ #

    @property
    def settings(self) -> Settings:
        return self._settings

    @property
    def ledger(self) -> TradeLedger:
        return self._ledger

    @property
    def mentor(self) -> MentorSession:
        return self._mentor

    @property
    def trades(self) -> tuple[Trade, ...]:
        return self._ledger.trades

    @property
    def account(self) -> AccountState:
        return self._ledger.account

    def snapshot(self) -> LedgerSnapshot:
        return self._ledger.snapshot()

    def stats(self) -> PerformanceStats:
        return compute_stats(
            self._ledger.trades,
            profit_factor_mode=self._settings.stats.profit_factor_mode,
        )

    def equity_curve(self) -> list[EquityPoint]:
        snapshot = self._ledger.snapshot()
        return build_equity_curve(snapshot.trades, snapshot.initial_balance)

    async def analyze(self) -> MentorResult | None:
        """Ask the mentor about the latest trades.

        Works on a snapshot taken before the call, so ledger mutations
        are never blocked by the network round trip.
        """
        snapshot = self._ledger.snapshot()
        return await self._mentor.request(snapshot.trades, snapshot.current_balance)
