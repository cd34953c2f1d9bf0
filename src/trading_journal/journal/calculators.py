"""Quick trading calculators: forex pips and option premium P&L.

Both are rough approximations meant for a back-of-envelope check while
journaling, not for broker-accurate valuation.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

OPTION_CONTRACT_SIZE = 100


class OptionType(str, Enum):
    CALL = "Call"
    PUT = "Put"


@dataclass(frozen=True)
class PipResult:
    pips: float
    profit: float


def pip_multiplier(pair: str) -> int:
    """Pips per unit of price: JPY pairs quote two decimals, others four."""
    return 100 if "JPY" in pair.upper() else 10_000


def pip_value_per_lot(pair: str) -> float:
    """Approximate USD value of one pip on one standard lot."""
    return 9.0 if "JPY" in pair.upper() else 10.0


def calculate_pips(
    pair: str,
    entry: float | None,
    exit: float | None,
    lot_size: float = 1.0,
) -> PipResult:
    """Pip distance and approximate profit of a forex move.

    A missing entry or exit price yields zeros.
    """
    if entry is None or exit is None:
        return PipResult(pips=0.0, profit=0.0)
    pips = (exit - entry) * pip_multiplier(pair)
    profit = pips * lot_size * pip_value_per_lot(pair)
    return PipResult(pips=pips, profit=profit)


def calculate_option_pnl(
    premium_buy: float | None,
    premium_sell: float | None,
    contracts: int = 1,
) -> float:
    """Profit of buying and later selling an option.

    Calls and puts share the same arithmetic on a premium round-trip:
    ``(sell - buy) * 100 * contracts``.  A missing premium yields 0.
    """
    if premium_buy is None or premium_sell is None:
        return 0.0
    return (premium_sell - premium_buy) * OPTION_CONTRACT_SIZE * contracts
