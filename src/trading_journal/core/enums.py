"""Enumerations used across the trading journal."""

from enum import Enum


class AssetClass(str, Enum):
    """Asset class of a logged trade.

    Determines how ``quantity`` is interpreted when computing PnL.
    """

    FOREX = "Forex"  # quantity in standard lots (100,000 units)
    CRYPTO = "Crypto"
    INDEX = "Index"  # quantity is $ per point
    COMMODITY = "Commodity"
    FUTURES = "Futures"  # quantity is $ per point
    METALS = "Metals"
    STOCKS = "Stocks"


class TradeDirection(str, Enum):
    LONG = "Long"
    SHORT = "Short"


class TradeStatus(str, Enum):
    OPEN = "Open"
    CLOSED = "Closed"


class ProfitFactorMode(str, Enum):
    """How profit factor is reported when there are no losing trades."""

    LEGACY = "legacy"  # losses == 0 -> number of winning trades
    RATIO = "ratio"    # always gross profit / gross loss (may be inf)


class MentorOutcome(str, Enum):
    """Classification of a mentor session result."""

    ANALYSIS = "analysis"
    ADVISORY = "advisory"                # precondition not met, no call made
    CONFIGURATION_ERROR = "configuration_error"
    SERVICE_ERROR = "service_error"
