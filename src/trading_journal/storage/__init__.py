"""Journal persistence — explicit load/save over a two-key blob store."""

from trading_journal.storage.store import (
    ACCOUNT_KEY,
    TRADES_KEY,
    IJournalStore,
    JsonFileJournalStore,
    MemoryJournalStore,
)

__all__ = [
    "ACCOUNT_KEY",
    "TRADES_KEY",
    "IJournalStore",
    "JsonFileJournalStore",
    "MemoryJournalStore",
]
