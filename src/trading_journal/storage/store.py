"""Journal persistence.

``IJournalStore`` is the protocol: an explicit ``load()`` at startup and
``save(snapshot)`` after every ledger mutation.  Two implementations ship:

* ``MemoryJournalStore`` -- for unit tests and throwaway sessions.
* ``JsonFileJournalStore`` -- two JSON blobs in a data directory, one
  per logical key (trades, account).
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Protocol, runtime_checkable

from pydantic import ValidationError

from trading_journal.core.errors import StorageError
from trading_journal.core.file_io import read_text_or_none, safe_write_text
from trading_journal.journal.ledger import DEFAULT_INITIAL_BALANCE
from trading_journal.journal.record import AccountState, LedgerSnapshot, Trade

logger = logging.getLogger(__name__)

TRADES_KEY = "decoders_trades"
ACCOUNT_KEY = "decoders_account"


# ---------------------------------------------------------------------------
# Protocol
# ---------------------------------------------------------------------------


@runtime_checkable
class IJournalStore(Protocol):
    """Load/save pair for the journal's trades and account state."""

    def load(self) -> LedgerSnapshot:
        """Return the persisted snapshot, or defaults if nothing is stored."""
        ...

    def save(self, snapshot: LedgerSnapshot) -> None:
        """Persist *snapshot*, replacing whatever was stored."""
        ...


# ---------------------------------------------------------------------------
# Serialization
# ---------------------------------------------------------------------------


def dump_trades(snapshot: LedgerSnapshot) -> str:
    return json.dumps([t.to_record() for t in snapshot.trades], ensure_ascii=False)


def dump_account(snapshot: LedgerSnapshot) -> str:
    return json.dumps(snapshot.account.to_record())


def parse_trades(text: str) -> list[Trade]:
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise StorageError(f"Trade blob is not valid JSON: {exc}") from exc
    if not isinstance(data, list):
        raise StorageError("Trade blob must be a JSON list")
    try:
        trades = [Trade.model_validate(item) for item in data]
    except ValidationError as exc:
        raise StorageError(f"Trade blob has an invalid record: {exc}") from exc

    seen: set[str] = set()
    for trade in trades:
        if trade.id in seen:
            raise StorageError(f"Trade blob has duplicate id {trade.id}")
        seen.add(trade.id)
    return trades


def parse_account(text: str) -> AccountState:
    try:
        data: Any = json.loads(text)
    except json.JSONDecodeError as exc:
        raise StorageError(f"Account blob is not valid JSON: {exc}") from exc
    if isinstance(data, dict) and "currentBalance" not in data:
        data = {**data, "currentBalance": data.get("initialBalance")}
    try:
        return AccountState.model_validate(data)
    except ValidationError as exc:
        raise StorageError(f"Account blob is invalid: {exc}") from exc


# ---------------------------------------------------------------------------
# MemoryJournalStore  (tests)
# ---------------------------------------------------------------------------


class MemoryJournalStore:
    """In-memory implementation -- no persistence.

    Keeps the serialized blobs so that tests exercise the same encoding
    as the file store.
    """

    def __init__(self, *, initial_balance: float = DEFAULT_INITIAL_BALANCE) -> None:
        self._default_balance = initial_balance
        self._blobs: dict[str, str] = {}
        self.save_count = 0

    def load(self) -> LedgerSnapshot:
        trades_blob = self._blobs.get(TRADES_KEY)
        account_blob = self._blobs.get(ACCOUNT_KEY)
        trades = parse_trades(trades_blob) if trades_blob is not None else []
        balance = (
            parse_account(account_blob).initial_balance
            if account_blob is not None else self._default_balance
        )
        return LedgerSnapshot(trades=tuple(trades), initial_balance=balance)

    def save(self, snapshot: LedgerSnapshot) -> None:
        self._blobs[TRADES_KEY] = dump_trades(snapshot)
        self._blobs[ACCOUNT_KEY] = dump_account(snapshot)
        self.save_count += 1

    # -- helpers for tests --------------------------------------------------

    @property
    def blobs(self) -> dict[str, str]:
        return self._blobs

    def clear(self) -> None:
        self._blobs.clear()


# ---------------------------------------------------------------------------
# JsonFileJournalStore
# ---------------------------------------------------------------------------


class JsonFileJournalStore:
    """Two-file JSON implementation.

    ``<data_dir>/<trades_key>.json`` holds the trade list and
    ``<data_dir>/<account_key>.json`` the account state.  Each file is
    replaced atomically on save.  ``currentBalance`` in the account file
    is informational; it is re-derived from the trades on load.
    """

    def __init__(
        self,
        data_dir: str | Path = "data",
        *,
        trades_key: str = TRADES_KEY,
        account_key: str = ACCOUNT_KEY,
        initial_balance: float = DEFAULT_INITIAL_BALANCE,
    ) -> None:
        self._dir = Path(data_dir)
        self._trades_path = self._dir / f"{trades_key}.json"
        self._account_path = self._dir / f"{account_key}.json"
        self._default_balance = initial_balance

    @property
    def trades_path(self) -> Path:
        return self._trades_path

    @property
    def account_path(self) -> Path:
        return self._account_path

    # -- public API ---------------------------------------------------------

    def load(self) -> LedgerSnapshot:
        """Load both blobs; missing files fall back to defaults.

        Raises
        ------
        StorageError
            If a file cannot be read or does not hold the expected shape.
        """
        trades_text = self._read(self._trades_path)
        account_text = self._read(self._account_path)

        trades = parse_trades(trades_text) if trades_text is not None else []
        if account_text is not None:
            balance = parse_account(account_text).initial_balance
        else:
            balance = self._default_balance

        snapshot = LedgerSnapshot(trades=tuple(trades), initial_balance=balance)
        logger.info(
            "Loaded %d trades from %s (initial balance %.2f)",
            len(trades), self._dir, balance,
        )
        return snapshot

    def save(self, snapshot: LedgerSnapshot) -> None:
        """Write both blobs.

        Raises
        ------
        StorageError
            If either file cannot be written.
        """
        try:
            safe_write_text(self._trades_path, dump_trades(snapshot))
            safe_write_text(self._account_path, dump_account(snapshot))
        except OSError as exc:
            raise StorageError(f"Failed to save journal to {self._dir}: {exc}") from exc
        logger.debug("Saved %d trades to %s", len(snapshot.trades), self._dir)

    # -- internals ----------------------------------------------------------

    @staticmethod
    def _read(path: Path) -> str | None:
        try:
            return read_text_or_none(path)
        except OSError as exc:
            raise StorageError(f"Failed to read {path}: {exc}") from exc
