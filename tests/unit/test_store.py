"""Tests for the journal stores (memory and two-file JSON)."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from trading_journal.core.enums import TradeStatus
from trading_journal.core.errors import StorageError
from trading_journal.journal.record import LedgerSnapshot
from trading_journal.storage.store import (
    ACCOUNT_KEY,
    TRADES_KEY,
    IJournalStore,
    JsonFileJournalStore,
    MemoryJournalStore,
    parse_account,
    parse_trades,
)


@pytest.fixture
def snapshot(make_trade) -> LedgerSnapshot:
    return LedgerSnapshot(
        trades=(
            make_trade(pnl=500, trade_id="a"),
            make_trade(status=TradeStatus.OPEN, trade_id="b", notes="still running"),
            make_trade(pnl=-200, trade_id="c", fees=1.25),
        ),
        initial_balance=7_500,
    )


class TestProtocol:
    def test_both_stores_satisfy_protocol(self, tmp_path):
        assert isinstance(MemoryJournalStore(), IJournalStore)
        assert isinstance(JsonFileJournalStore(tmp_path), IJournalStore)


class TestMemoryStore:
    def test_empty_load_uses_defaults(self):
        snap = MemoryJournalStore(initial_balance=123).load()
        assert snap.trades == ()
        assert snap.initial_balance == 123

    def test_round_trip(self, memory_store, snapshot):
        memory_store.save(snapshot)
        loaded = memory_store.load()
        assert loaded.initial_balance == snapshot.initial_balance
        assert [t.model_dump() for t in loaded.trades] == [t.model_dump() for t in snapshot.trades]
        assert memory_store.save_count == 1

    def test_blobs_use_logical_keys(self, memory_store, snapshot):
        memory_store.save(snapshot)
        assert set(memory_store.blobs) == {TRADES_KEY, ACCOUNT_KEY}
        account = json.loads(memory_store.blobs[ACCOUNT_KEY])
        assert account == {"initialBalance": 7500.0, "currentBalance": 7800.0}

    def test_clear(self, memory_store, snapshot):
        memory_store.save(snapshot)
        memory_store.clear()
        assert memory_store.load().trades == ()


class TestJsonFileStore:
    def test_missing_files_fall_back_to_defaults(self, tmp_path: Path):
        snap = JsonFileJournalStore(tmp_path / "fresh").load()
        assert snap.trades == ()
        assert snap.initial_balance == 10_000

    def test_file_names(self, tmp_path: Path):
        store = JsonFileJournalStore(tmp_path)
        assert store.trades_path == tmp_path / "decoders_trades.json"
        assert store.account_path == tmp_path / "decoders_account.json"

    def test_round_trip_preserves_order_ids_and_pnl(self, tmp_path: Path, snapshot):
        JsonFileJournalStore(tmp_path).save(snapshot)
        loaded = JsonFileJournalStore(tmp_path).load()
        assert [t.id for t in loaded.trades] == ["a", "b", "c"]
        assert [t.pnl for t in loaded.trades] == [500, 0, -200]
        assert loaded.trades[1].notes == "still running"
        assert loaded.trades[2].fees == 1.25
        assert [t.model_dump() for t in loaded.trades] == [t.model_dump() for t in snapshot.trades]
        assert loaded.initial_balance == 7_500

    def test_trade_file_shape(self, tmp_path: Path, snapshot):
        store = JsonFileJournalStore(tmp_path)
        store.save(snapshot)
        records = json.loads(store.trades_path.read_text())
        assert records[0]["id"] == "a"
        assert records[0]["assetClass"] == "Stocks"
        assert records[0]["entryPrice"] == 100.0
        assert "notes" not in records[0]

    def test_current_balance_is_rederived(self, tmp_path: Path, snapshot):
        store = JsonFileJournalStore(tmp_path)
        store.save(snapshot)
        store.account_path.write_text(
            json.dumps({"initialBalance": 7500, "currentBalance": 999_999}),
        )
        loaded = store.load()
        assert loaded.current_balance == 7_800

    def test_custom_keys(self, tmp_path: Path, snapshot):
        store = JsonFileJournalStore(tmp_path, trades_key="t", account_key="acc")
        store.save(snapshot)
        assert (tmp_path / "t.json").exists()
        assert (tmp_path / "acc.json").exists()

    def test_malformed_trade_file(self, tmp_path: Path):
        store = JsonFileJournalStore(tmp_path)
        store.trades_path.write_text("{not json")
        with pytest.raises(StorageError, match="not valid JSON"):
            store.load()

    def test_duplicated_records_in_file(self, tmp_path: Path, snapshot):
        store = JsonFileJournalStore(tmp_path)
        store.save(snapshot)
        records = json.loads(store.trades_path.read_text())
        store.trades_path.write_text(json.dumps(records + records[:1]))
        with pytest.raises(StorageError, match="duplicate id a"):
            store.load()

    def test_unwritable_directory(self, tmp_path: Path, snapshot):
        blocker = tmp_path / "blocker"
        blocker.write_text("I am a file")
        with pytest.raises(StorageError, match="Failed to save"):
            JsonFileJournalStore(blocker / "data").save(snapshot)


class TestParsing:
    def test_trades_must_be_a_list(self):
        with pytest.raises(StorageError, match="list"):
            parse_trades('{"id": "x"}')

    def test_trade_schema_mismatch(self):
        with pytest.raises(StorageError, match="invalid record"):
            parse_trades('[{"id": "x", "symbol": "EURUSD"}]')

    def test_duplicate_ids_rejected(self):
        record = {
            "id": "dup", "date": "2024-01-02", "assetClass": "Stocks", "symbol": "AAPL",
            "direction": "Long", "entryPrice": 100, "exitPrice": 110, "quantity": 1,
            "pnl": 10, "status": "Closed",
        }
        with pytest.raises(StorageError, match="duplicate id dup"):
            parse_trades(json.dumps([record, record]))

    def test_account_without_current_balance(self):
        account = parse_account('{"initialBalance": 2500}')
        assert account.initial_balance == 2500
        assert account.current_balance == 2500

    def test_account_schema_mismatch(self):
        with pytest.raises(StorageError):
            parse_account('{"initialBalance": "lots"}')

    def test_account_not_json(self):
        with pytest.raises(StorageError):
            parse_account("")
