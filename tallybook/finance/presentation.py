"""Mini README: Display derivation for ledger state.

Structure:
    * TransactionRow - one history line with sign, amount text, and colour class.
    * build_rows / format_totals - convert ledger data into display strings.
    * snapshot - JSON-ready view of the whole ledger for the web page.

Both the web interface and the CLI render from these helpers so the two
surfaces agree on signs, two-decimal formatting, and the empty placeholder.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Dict, Iterable, List

from .ledger import Ledger, Totals, Transaction

EMPTY_HISTORY_MESSAGE = "No transactions yet"
INVALID_INPUT_MESSAGE = "Please enter valid name and amount"


@dataclass(frozen=True, slots=True)
class TransactionRow:
    """Display fields for one entry of the history list."""

    index: int
    transaction_id: int
    name: str
    sign: str
    display_amount: str
    color_class: str

    @classmethod
    def from_transaction(cls, index: int, transaction: Transaction) -> "TransactionRow":
        is_income = transaction.amount > 0
        return cls(
            index=index,
            transaction_id=transaction.transaction_id,
            name=transaction.name,
            sign="+" if is_income else "-",
            display_amount=f"{abs(transaction.amount):.2f}",
            color_class="income-color" if is_income else "expense-color",
        )


def build_rows(transactions: Iterable[Transaction]) -> List[TransactionRow]:
    """Number transactions by position and derive their display fields."""

    return [
        TransactionRow.from_transaction(index, transaction)
        for index, transaction in enumerate(transactions)
    ]


def format_totals(totals: Totals) -> Dict[str, str]:
    """Render each total with exactly two decimals."""

    return {label: f"{value:.2f}" for label, value in totals.as_dict().items()}


def snapshot(ledger: Ledger) -> Dict[str, object]:
    """Export rows, totals, and the placeholder message for JSON responses."""

    rows = build_rows(ledger.transactions)
    return {
        "transactions": [asdict(row) for row in rows],
        "totals": format_totals(ledger.totals()),
        "empty_message": None if rows else EMPTY_HISTORY_MESSAGE,
    }
