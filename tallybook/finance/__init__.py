"""Mini README: Ledger and display helpers for Tallybook.

This package holds the transaction ledger (the only component allowed to
mutate the transaction list) and the presentation helpers that turn ledger
state into rows and formatted totals for the web page and the CLI.
"""

from .ledger import (
    Ledger,
    LedgerError,
    OutOfRange,
    Totals,
    Transaction,
    TransactionType,
    ValidationError,
)
from .presentation import (
    EMPTY_HISTORY_MESSAGE,
    INVALID_INPUT_MESSAGE,
    TransactionRow,
    build_rows,
    format_totals,
    snapshot,
)

__all__ = [
    "EMPTY_HISTORY_MESSAGE",
    "INVALID_INPUT_MESSAGE",
    "Ledger",
    "LedgerError",
    "OutOfRange",
    "Totals",
    "Transaction",
    "TransactionRow",
    "TransactionType",
    "ValidationError",
    "build_rows",
    "format_totals",
    "snapshot",
]
