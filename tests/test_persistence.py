"""Mini README: Tests for loading and persisting the ledger.

These tests confirm that stored ledgers reload exactly, that missing or
corrupt payloads fall back to an empty ledger instead of failing, and that
the JSON file store survives across instances.
"""

from __future__ import annotations

import json

import pytest

from tallybook.finance import Ledger, Transaction, TransactionType
from tallybook.storage import JsonFileBlobStore, MemoryBlobStore


def test_load_round_trips_persisted_sequence() -> None:
    """Reloading reproduces ids, names, amounts, and order."""

    store = MemoryBlobStore()
    ledger = Ledger.load(store)
    ledger.add("Salary", 1000, TransactionType.INCOME)
    ledger.add("Rent", 400.25, TransactionType.EXPENSE)
    ledger.add("Tip", 0.1, TransactionType.INCOME)

    reloaded = Ledger.load(store)

    assert reloaded.transactions == ledger.transactions


def test_load_accepts_payload_written_by_browser_store() -> None:
    store = MemoryBlobStore(
        {
            "transactions": json.dumps(
                [
                    {"id": 1718000000000, "name": "Salary", "amount": 1000},
                    {"id": 1718000000001, "name": "Rent", "amount": -400},
                ]
            )
        }
    )

    ledger = Ledger.load(store)

    assert ledger.transactions == (
        Transaction(transaction_id=1718000000000, name="Salary", amount=1000.0),
        Transaction(transaction_id=1718000000001, name="Rent", amount=-400.0),
    )
    assert ledger.totals().balance == 600.0


@pytest.mark.parametrize(
    "blob",
    [
        None,
        "",
        "not json",
        "{}",
        "null",
        json.dumps([{"id": 1, "name": "Missing amount"}]),
        json.dumps([{"id": "1", "name": "Bad id", "amount": 1}]),
        json.dumps([{"id": 1, "name": 5, "amount": 1}]),
        json.dumps([{"id": 1, "name": "A", "amount": 1}, {"id": 1, "name": "B", "amount": 2}]),
        json.dumps([{"id": 1, "name": "A", "amount": 10**400}]),
        "[" * 100_000 + "]" * 100_000,
    ],
)
def test_load_treats_unusable_payload_as_empty(blob) -> None:
    """Corrupt or absent data degrades to an empty ledger."""

    store = MemoryBlobStore() if blob is None else MemoryBlobStore({"transactions": blob})

    ledger = Ledger.load(store)

    assert len(ledger) == 0


def test_load_uses_custom_key() -> None:
    store = MemoryBlobStore({"other": json.dumps([{"id": 1, "name": "A", "amount": 2}])})

    assert len(Ledger.load(store, key="other")) == 1
    assert len(Ledger.load(store)) == 0


def test_json_file_store_persists_between_instances(tmp_path) -> None:
    path = tmp_path / "nested" / "ledger.json"
    ledger = Ledger.load(JsonFileBlobStore(path))
    ledger.add("Salary", 1000, TransactionType.INCOME)
    ledger.add("Rent", 400, TransactionType.EXPENSE)

    reloaded = Ledger.load(JsonFileBlobStore(path))

    assert reloaded.transactions == ledger.transactions
    assert list(tmp_path.joinpath("nested").iterdir()) == [path]


def test_json_file_store_keeps_other_keys(tmp_path) -> None:
    store = JsonFileBlobStore(tmp_path / "store.json")
    store.set("theme", "dark")
    store.set("transactions", "[]")

    assert store.get("theme") == "dark"
    assert store.get("transactions") == "[]"
    assert store.get("missing") is None


def test_json_file_store_tolerates_corrupt_file(tmp_path) -> None:
    path = tmp_path / "ledger.json"
    path.write_text("{broken", encoding="utf-8")
    store = JsonFileBlobStore(path)

    assert store.get("transactions") is None
    assert len(Ledger.load(store)) == 0

    store.set("transactions", "[]")
    assert json.loads(path.read_text(encoding="utf-8")) == {"transactions": "[]"}


@pytest.mark.parametrize(
    "content",
    [
        b'{"transactions": "\xff\xfe[]"}',
        b"[" * 100_000 + b"]" * 100_000,
    ],
)
def test_json_file_store_tolerates_undecodable_file(tmp_path, content: bytes) -> None:
    """Invalid UTF-8 and pathologically nested files read as an empty store."""

    path = tmp_path / "ledger.json"
    path.write_bytes(content)
    store = JsonFileBlobStore(path)

    assert store.get("transactions") is None
    assert len(Ledger.load(store)) == 0


class ExplodingStore(MemoryBlobStore):
    def get(self, key: str):
        raise OSError("permission denied")


def test_load_tolerates_store_read_errors() -> None:
    assert len(Ledger.load(ExplodingStore())) == 0
