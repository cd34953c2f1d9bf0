"""Profit-and-loss calculation for a single logged trade.

PnL is derived from the price difference in the trade's favour and a
quantity whose meaning depends on the asset class:

* Forex — quantity is in standard lots; one lot is 100,000 units of
  the base currency.
* Index / Futures — quantity is the dollar value of one point, already
  folded into the user's input.
* Everything else — quantity is a plain unit count.

No rounding is applied; rounding is a presentation concern.
"""

from __future__ import annotations

from trading_journal.core.enums import AssetClass, TradeDirection

FOREX_LOT_SIZE = 100_000

# Multiplier applied on top of ``price_diff * quantity``
_CONTRACT_MULTIPLIER: dict[AssetClass, float] = {
    AssetClass.FOREX: FOREX_LOT_SIZE,
    AssetClass.INDEX: 1,
    AssetClass.FUTURES: 1,
}


def price_difference(entry: float, exit: float, direction: TradeDirection) -> float:
    """Signed price move in the position's favour."""
    if direction == TradeDirection.LONG:
        return exit - entry
    return entry - exit


def compute_pnl(
    entry: float,
    exit: float,
    quantity: float,
    direction: TradeDirection,
    asset_class: AssetClass,
) -> float:
    """Return the signed monetary PnL of a closed trade."""
    raw_diff = price_difference(entry, exit, direction)
    multiplier = _CONTRACT_MULTIPLIER.get(asset_class, 1)
    return raw_diff * quantity * multiplier
