"""Trade record and account state — the core data model.

A :class:`Trade` is one logged market position.  Its ``pnl`` is computed
exactly once, when a validated :class:`TradeDraft` is turned into a
trade, and is frozen from then on: the model is immutable and the
ledger never recomputes it.

Field names serialize in the journal's storage shape (``assetClass``,
``entryPrice`` ...) while Python code uses snake_case attributes.
"""

from __future__ import annotations

import datetime as dt
import math
from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from trading_journal.core.enums import AssetClass, TradeDirection, TradeStatus
from trading_journal.core.ids import new_id

from .pnl import compute_pnl


class TradeDraft(BaseModel):
    """A validated trade that has not been assigned an id or PnL yet."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    date: dt.date
    asset_class: AssetClass = Field(alias="assetClass")
    symbol: str
    direction: TradeDirection
    entry_price: float = Field(alias="entryPrice")
    exit_price: float = Field(alias="exitPrice")
    quantity: float
    status: TradeStatus = TradeStatus.CLOSED
    notes: str | None = None
    fees: float | None = None


class Trade(BaseModel):
    """One logged trade, open or closed.

    ``fees`` is stored but not netted into ``pnl``.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str
    date: dt.date
    asset_class: AssetClass = Field(alias="assetClass")
    symbol: str
    direction: TradeDirection
    entry_price: float = Field(alias="entryPrice")
    exit_price: float = Field(alias="exitPrice")
    quantity: float
    pnl: float = 0.0
    status: TradeStatus
    notes: str | None = None
    fees: float | None = None

    @classmethod
    def from_draft(cls, draft: TradeDraft, *, trade_id: str | None = None) -> Trade:
        """Create a trade, computing and freezing its PnL.

        Open trades always carry ``pnl == 0``.
        """
        if draft.status == TradeStatus.CLOSED:
            pnl = compute_pnl(
                draft.entry_price,
                draft.exit_price,
                draft.quantity,
                draft.direction,
                draft.asset_class,
            )
        else:
            pnl = 0.0
        return cls(
            id=trade_id or new_id(),
            pnl=pnl,
            **draft.model_dump(),
        )

    @property
    def is_closed(self) -> bool:
        return self.status == TradeStatus.CLOSED

    def to_record(self, *, include_id: bool = True) -> dict[str, Any]:
        """Export in the storage shape (camelCase keys, JSON-safe values)."""
        exclude = None if include_id else {"id"}
        return self.model_dump(
            mode="json", by_alias=True, exclude_none=True, exclude=exclude,
        )


class AccountState(BaseModel):
    """Financial envelope around the trade collection.

    ``current_balance`` is always derived by the ledger; it is stored
    only so the persisted blob matches the journal's shape.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    initial_balance: float = Field(alias="initialBalance")
    current_balance: float = Field(alias="currentBalance")

    def to_record(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)


@dataclass(frozen=True)
class LedgerSnapshot:
    """Consistent, immutable view of the ledger at one instant."""

    trades: tuple[Trade, ...] = ()
    initial_balance: float = 10_000.0

    @property
    def current_balance(self) -> float:
        return self.initial_balance + math.fsum(t.pnl for t in self.trades)

    @property
    def account(self) -> AccountState:
        return AccountState(
            initial_balance=self.initial_balance,
            current_balance=self.current_balance,
        )

    @property
    def closed_trades(self) -> list[Trade]:
        return [t for t in self.trades if t.is_closed]
