"""Mini README: Tests for the display helpers shared by web and CLI."""

from __future__ import annotations

from tallybook.finance import (
    EMPTY_HISTORY_MESSAGE,
    Ledger,
    Totals,
    Transaction,
    build_rows,
    format_totals,
    snapshot,
)
from tallybook.storage import MemoryBlobStore


def test_build_rows_derives_sign_and_colour() -> None:
    rows = build_rows(
        [
            Transaction(transaction_id=1, name="Salary", amount=1000.0),
            Transaction(transaction_id=2, name="Rent", amount=-400.5),
            Transaction(transaction_id=3, name="Zero", amount=0.0),
        ]
    )

    assert [(row.index, row.sign, row.display_amount, row.color_class) for row in rows] == [
        (0, "+", "1000.00", "income-color"),
        (1, "-", "400.50", "expense-color"),
        (2, "-", "0.00", "expense-color"),
    ]


def test_format_totals_uses_two_decimals() -> None:
    assert format_totals(Totals(balance=-500.0, income=0.0, expense=500.0)) == {
        "balance": "-500.00",
        "income": "0.00",
        "expense": "500.00",
    }


def test_snapshot_reports_placeholder_only_when_empty() -> None:
    ledger = Ledger(MemoryBlobStore())
    empty = snapshot(ledger)
    assert empty["transactions"] == []
    assert empty["empty_message"] == EMPTY_HISTORY_MESSAGE

    ledger.add("Salary", 1000, "income")
    filled = snapshot(ledger)
    assert filled["empty_message"] is None
    assert filled["transactions"][0]["name"] == "Salary"
    assert filled["totals"]["balance"] == "1000.00"
