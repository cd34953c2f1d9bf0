"""Trade entry validation — raw form values to a :class:`TradeDraft`.

Form and CLI input arrives as loosely-typed strings.  This module parses
and normalizes it, raising a :class:`TradeValidationError` subclass
instead of letting not-a-number values reach the ledger.

Accepted keys are the storage names (``assetClass``, ``entryPrice`` ...)
or their snake_case equivalents.
"""

from __future__ import annotations

import datetime as dt
import logging
import math
from collections.abc import Mapping
from enum import Enum
from typing import Any, TypeVar

from trading_journal.core.enums import AssetClass, TradeDirection, TradeStatus
from trading_journal.core.errors import (
    InvalidChoiceError,
    InvalidDateError,
    InvalidNumericFieldError,
    MissingFieldError,
)

from .record import TradeDraft

logger = logging.getLogger(__name__)

E = TypeVar("E", bound=Enum)

_FIELD_ALIASES: dict[str, str] = {
    "asset_class": "assetClass",
    "entry_price": "entryPrice",
    "exit_price": "exitPrice",
}

_DIRECTION_SYNONYMS = {
    "buy": TradeDirection.LONG,
    "sell": TradeDirection.SHORT,
}


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _canonical(raw: Mapping[str, Any]) -> dict[str, Any]:
    return {_FIELD_ALIASES.get(k, k): v for k, v in raw.items()}


def parse_number(field: str, value: Any) -> float:
    """Parse a finite float from form input.

    Tolerates surrounding whitespace, a leading ``$`` and ``,`` thousand
    separators.  Booleans are rejected even though they are ints.
    """
    if isinstance(value, bool):
        raise InvalidNumericFieldError(field, value)
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        text = value.strip().replace(",", "")
        if text.startswith("$"):
            text = text[1:]
        try:
            number = float(text)
        except ValueError:
            raise InvalidNumericFieldError(field, value) from None
    else:
        raise InvalidNumericFieldError(field, value)

    if not math.isfinite(number):
        raise InvalidNumericFieldError(field, value, "is not a finite number")
    return number


def parse_choice(field: str, value: Any, enum_cls: type[E]) -> E:
    """Match *value* case-insensitively against an enum's values and names."""
    if isinstance(value, enum_cls):
        return value
    text = str(value).strip().lower()
    for member in enum_cls:
        if text in (str(member.value).lower(), member.name.lower()):
            return member
    if enum_cls is TradeDirection and text in _DIRECTION_SYNONYMS:
        return _DIRECTION_SYNONYMS[text]  # type: ignore[return-value]
    raise InvalidChoiceError(field, value, [str(m.value) for m in enum_cls])


def parse_date(field: str, value: Any) -> dt.date:
    """Accept a ``date``, a ``datetime`` or an ISO ``YYYY-MM-DD[...]`` string."""
    if isinstance(value, dt.datetime):
        return value.date()
    if isinstance(value, dt.date):
        return value
    text = str(value).strip()
    try:
        return dt.date.fromisoformat(text[:10])
    except ValueError:
        raise InvalidDateError(field, value) from None


def _require(data: Mapping[str, Any], field: str) -> Any:
    value = data.get(field)
    if _is_blank(value):
        raise MissingFieldError(field)
    return value


def normalize_trade(raw: Mapping[str, Any]) -> TradeDraft:
    """Validate and normalize raw trade input.

    Raises
    ------
    TradeValidationError
        ``MissingFieldError``, ``InvalidNumericFieldError``,
        ``InvalidChoiceError`` or ``InvalidDateError``.
    """
    data = _canonical(raw)

    date = parse_date("date", _require(data, "date"))
    asset_class = parse_choice("assetClass", _require(data, "assetClass"), AssetClass)
    symbol = str(_require(data, "symbol")).strip().upper()
    direction = parse_choice("direction", _require(data, "direction"), TradeDirection)

    quantity = parse_number("quantity", _require(data, "quantity"))
    if quantity <= 0:
        raise InvalidNumericFieldError("quantity", data.get("quantity"), "must be positive")

    entry_price = parse_number("entryPrice", _require(data, "entryPrice"))
    exit_raw = data.get("exitPrice")
    exit_price = entry_price if _is_blank(exit_raw) else parse_number("exitPrice", exit_raw)

    status_raw = data.get("status")
    status = (
        TradeStatus.CLOSED
        if _is_blank(status_raw)
        else parse_choice("status", status_raw, TradeStatus)
    )

    fees_raw = data.get("fees")
    fees = None if _is_blank(fees_raw) else parse_number("fees", fees_raw)
    if fees is not None and fees < 0:
        raise InvalidNumericFieldError("fees", fees_raw, "must not be negative")

    notes_raw = data.get("notes")
    notes = None if _is_blank(notes_raw) else str(notes_raw).strip()

    draft = TradeDraft(
        date=date,
        asset_class=asset_class,
        symbol=symbol,
        direction=direction,
        entry_price=entry_price,
        exit_price=exit_price,
        quantity=quantity,
        status=status,
        notes=notes,
        fees=fees,
    )
    logger.debug(
        "Normalized trade input: %s %s %s x%s",
        draft.asset_class.value, draft.direction.value, draft.symbol, draft.quantity,
    )
    return draft
