"""Account ledger — the ordered trade collection plus account balance.

The ledger is the single owner of the trade list and the initial
balance.  ``current_balance`` is never stored: it is re-derived from
``initial_balance + sum(pnl)`` on every read, so it cannot drift from
the trade collection.

All mutation and snapshot reads go through one re-entrant lock.  A
mutation is committed only after ``on_change`` (the store save) accepts
the new snapshot, so a failed save leaves the ledger unchanged.  Readers
(statistics, equity curve, persistence) always receive an immutable
:class:`LedgerSnapshot`, never a partially-updated list.
"""

from __future__ import annotations

import logging
import math
import threading
from collections.abc import Callable, Iterable, Iterator

from trading_journal.core.errors import DuplicateTradeError, InvalidNumericFieldError

from .record import AccountState, LedgerSnapshot, Trade

logger = logging.getLogger(__name__)

DEFAULT_INITIAL_BALANCE = 10_000.0


class TradeLedger:
    """Ordered collection of trades and the account's starting balance.

    Usage::

        ledger = TradeLedger(initial_balance=10_000)
        ledger.append(trade)
        ledger.current_balance()   # 10_000 + trade.pnl
        ledger.remove(trade.id)

    Parameters
    ----------
    initial_balance : float
        Account baseline.  Default 10 000.
    trades : Iterable[Trade]
        Trades to preload, in log order (e.g. from the store).
    on_change : callable | None
        Optional callback ``fn(snapshot: LedgerSnapshot)`` given the
        post-mutation snapshot before it is committed.  If it raises,
        the mutation is discarded and the error propagates.
    """

    def __init__(
        self,
        *,
        initial_balance: float = DEFAULT_INITIAL_BALANCE,
        trades: Iterable[Trade] = (),
        on_change: Callable[[LedgerSnapshot], None] | None = None,
    ) -> None:
        self._lock = threading.RLock()
        self._initial_balance = _check_balance(initial_balance)
        self._trades: list[Trade] = []
        self._ids: set[str] = set()
        self._on_change = on_change
        for trade in trades:
            self._insert(trade)

    @classmethod
    def from_snapshot(
        cls,
        snapshot: LedgerSnapshot,
        *,
        on_change: Callable[[LedgerSnapshot], None] | None = None,
    ) -> TradeLedger:
        return cls(
            initial_balance=snapshot.initial_balance,
            trades=snapshot.trades,
            on_change=on_change,
        )

    # ------------------------------------------------------------------ #
    # Mutation                                                             #
    # ------------------------------------------------------------------ #

    def append(self, trade: Trade) -> None:
        """Add a trade at the end of the log.

        Raises
        ------
        DuplicateTradeError
            If a trade with the same id is already present.
        """
        with self._lock:
            if trade.id in self._ids:
                raise DuplicateTradeError(trade.id)
            self._commit(LedgerSnapshot(
                trades=(*self._trades, trade),
                initial_balance=self._initial_balance,
            ))
        logger.info(
            "Trade logged: %s %s %s pnl=%.2f id=%s",
            trade.status.value, trade.direction.value, trade.symbol,
            trade.pnl, trade.id,
        )

    def remove(self, trade_id: str) -> bool:
        """Delete the trade with *trade_id*.

        Returns ``False`` (and changes nothing) if no such trade exists.
        """
        with self._lock:
            if trade_id not in self._ids:
                logger.debug("Remove ignored, unknown trade id=%s", trade_id)
                return False
            self._commit(LedgerSnapshot(
                trades=tuple(t for t in self._trades if t.id != trade_id),
                initial_balance=self._initial_balance,
            ))
        logger.info("Trade deleted: id=%s", trade_id)
        return True

    def set_initial_balance(self, value: float) -> None:
        """Replace the account baseline; current balance follows."""
        with self._lock:
            self._commit(LedgerSnapshot(
                trades=tuple(self._trades),
                initial_balance=_check_balance(value),
            ))
        logger.info("Initial balance set to %.2f", self._initial_balance)

    # ------------------------------------------------------------------ #
    # Queries                                                              #
    # ------------------------------------------------------------------ #

    @property
    def initial_balance(self) -> float:
        with self._lock:
            return self._initial_balance

    def current_balance(self) -> float:
        """``initial_balance + sum(pnl)`` over all trades, open included."""
        return self.snapshot().current_balance

    @property
    def account(self) -> AccountState:
        return self.snapshot().account

    @property
    def trades(self) -> tuple[Trade, ...]:
        return self.snapshot().trades

    def get(self, trade_id: str) -> Trade | None:
        with self._lock:
            for trade in self._trades:
                if trade.id == trade_id:
                    return trade
        return None

    def snapshot(self) -> LedgerSnapshot:
        with self._lock:
            return self._snapshot()

    def __len__(self) -> int:
        with self._lock:
            return len(self._trades)

    def __iter__(self) -> Iterator[Trade]:
        return iter(self.trades)

    # ------------------------------------------------------------------ #
    # Internals                                                            #
    # ------------------------------------------------------------------ #

    def _insert(self, trade: Trade) -> None:
        if trade.id in self._ids:
            raise DuplicateTradeError(trade.id)
        self._trades.append(trade)
        self._ids.add(trade.id)

    def _snapshot(self) -> LedgerSnapshot:
        return LedgerSnapshot(
            trades=tuple(self._trades),
            initial_balance=self._initial_balance,
        )

    def _commit(self, candidate: LedgerSnapshot) -> None:
        # Caller holds the lock; state only changes once on_change succeeds
        if self._on_change is not None:
            self._on_change(candidate)
        self._trades = list(candidate.trades)
        self._ids = {t.id for t in candidate.trades}
        self._initial_balance = candidate.initial_balance


def _check_balance(value: float) -> float:
    balance = float(value)
    if not math.isfinite(balance):
        raise InvalidNumericFieldError("initialBalance", value, "is not a finite number")
    return balance
