"""Mini README: Persistent income/expense ledger for Tallybook.

Structure:
    * TransactionType - enum representing income versus expense entries.
    * Transaction - dataclass storing one signed entry plus (de)serialisers.
    * Totals - derived balance, income, and expense figures.
    * LedgerError / ValidationError / OutOfRange - recoverable failures.
    * Ledger - owns the ordered transaction list and its blob store.

Amounts are signed: income is positive, expense negative. Entries are
addressed by position (the order the history is displayed in) or by their
stable id. Every mutation validates first, then rewrites the full list to the
store, so a rejected call never leaves a partial change behind.
"""

from __future__ import annotations

import json
import math
import time
from dataclasses import dataclass, replace
from enum import Enum
from typing import Dict, Iterable, List, Optional, Tuple

from ..logging_utils import get_logger
from ..storage import BlobStore

LOGGER = get_logger(__name__)

DEFAULT_STORAGE_KEY = "transactions"


class LedgerError(Exception):
    """Base class for recoverable ledger failures."""


class ValidationError(LedgerError, ValueError):
    """Raised when a name is blank or an amount is not a finite number."""


class OutOfRange(LedgerError, IndexError):
    """Raised when a position or id does not address a held transaction."""


class TransactionType(str, Enum):
    """Enumerate the supported transaction kinds."""

    INCOME = "income"
    EXPENSE = "expense"

    @classmethod
    def from_str(cls, value: str) -> "TransactionType":
        """Coerce arbitrary casing into a valid transaction type."""

        try:
            normalised = value.strip().lower()
            return cls(normalised)
        except (ValueError, AttributeError) as error:
            raise ValueError(f"Unsupported transaction type: {value}") from error


@dataclass(frozen=True, slots=True)
class Transaction:
    """A single signed ledger entry."""

    transaction_id: int
    name: str
    amount: float

    @property
    def transaction_type(self) -> TransactionType:
        """Kind of entry; zero counts as income."""

        return TransactionType.EXPENSE if self.amount < 0 else TransactionType.INCOME

    def as_dict(self) -> Dict[str, object]:
        """Export the transaction using the persisted field names."""

        return {"id": self.transaction_id, "name": self.name, "amount": self.amount}

    @classmethod
    def from_dict(cls, payload: object) -> "Transaction":
        """Rebuild a transaction from its persisted form."""

        if not isinstance(payload, dict):
            raise ValueError("Transaction payload must be an object")
        transaction_id = payload.get("id")
        name = payload.get("name")
        amount = payload.get("amount")
        if isinstance(transaction_id, float) and transaction_id.is_integer():
            transaction_id = int(transaction_id)
        if not isinstance(transaction_id, int) or isinstance(transaction_id, bool):
            raise ValueError(f"Transaction id must be an integer, got {transaction_id!r}")
        if not isinstance(name, str):
            raise ValueError(f"Transaction name must be a string, got {name!r}")
        if not _is_number(amount):
            raise ValueError(f"Transaction amount must be a number, got {amount!r}")
        try:
            amount = float(amount)
        except OverflowError as error:
            raise ValueError("Transaction amount is too large") from error
        if not math.isfinite(amount):
            raise ValueError(f"Transaction amount must be finite, got {amount!r}")
        return cls(transaction_id=transaction_id, name=name, amount=amount)


@dataclass(frozen=True, slots=True)
class Totals:
    """Balance, income, and expense rounded to two decimals."""

    balance: float
    income: float
    expense: float

    def as_dict(self) -> Dict[str, float]:
        return {"balance": self.balance, "income": self.income, "expense": self.expense}


def _is_number(value: object) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _round_money(value: float) -> float:
    # Adding 0.0 folds -0.0 into 0.0.
    return round(value, 2) + 0.0


def _validate_name(name: object) -> str:
    """Return the stripped name or raise when nothing is left."""

    if not isinstance(name, str) or not name.strip():
        raise ValidationError("Transaction name must not be empty")
    return name.strip()


def _validate_amount(raw_amount: object) -> float:
    """Parse form-style numeric input into a finite float."""

    if isinstance(raw_amount, str):
        try:
            amount = float(raw_amount.strip())
        except ValueError as error:
            raise ValidationError(f"Amount {raw_amount!r} is not a number") from error
    elif _is_number(raw_amount):
        try:
            amount = float(raw_amount)
        except OverflowError as error:
            raise ValidationError("Amount is too large") from error
    else:
        raise ValidationError(f"Amount {raw_amount!r} is not a number")
    if not math.isfinite(amount):
        raise ValidationError(f"Amount {raw_amount!r} is not finite")
    return amount


def _parse_payload(blob: Optional[str]) -> List[Transaction]:
    """Decode a stored blob, treating anything unusable as no data."""

    if blob is None:
        return []
    try:
        payload = json.loads(blob)
        if not isinstance(payload, list):
            raise ValueError("Stored ledger is not a list")
        return [Transaction.from_dict(entry) for entry in payload]
    except (ValueError, RecursionError, OverflowError) as error:
        LOGGER.warning("Discarding unreadable ledger payload: %s", error)
        return []


class Ledger:
    """Own the ordered transaction list and persist it after every change."""

    def __init__(
        self,
        store: BlobStore,
        transactions: Optional[Iterable[Transaction]] = None,
        *,
        key: str = DEFAULT_STORAGE_KEY,
    ) -> None:
        self._store = store
        self._key = key
        self._transactions: List[Transaction] = []
        self._last_id = 0
        for transaction in transactions or ():
            self._register(transaction)
        LOGGER.debug("Ledger initialised with %s transactions", len(self._transactions))

    @classmethod
    def load(cls, store: BlobStore, key: str = DEFAULT_STORAGE_KEY) -> "Ledger":
        """Build a ledger from whatever the store holds under ``key``."""

        try:
            blob = store.get(key)
        except (OSError, ValueError, RecursionError) as error:
            LOGGER.warning("Could not read ledger under key '%s': %s", key, error)
            blob = None
        transactions = _parse_payload(blob)
        try:
            return cls(store, transactions, key=key)
        except ValueError as error:
            LOGGER.warning("Discarding ledger payload with clashing ids: %s", error)
            return cls(store, key=key)

    def _register(self, transaction: Transaction) -> None:
        """Append a transaction ensuring identifiers remain unique."""

        if any(held.transaction_id == transaction.transaction_id for held in self._transactions):
            raise ValueError(f"Transaction {transaction.transaction_id} already exists.")
        self._transactions.append(transaction)
        self._last_id = max(self._last_id, transaction.transaction_id)

    def _next_id(self) -> int:
        """Millisecond timestamp, bumped past every id already handed out."""

        self._last_id = max(int(time.time() * 1000), self._last_id + 1)
        return self._last_id

    def _commit(self, transactions: List[Transaction]) -> None:
        """Write ``transactions`` to the store, then adopt them as current state."""

        blob = json.dumps([transaction.as_dict() for transaction in transactions])
        self._store.set(self._key, blob)
        self._transactions = transactions

    def _check_index(self, index: int) -> None:
        if (
            not isinstance(index, int)
            or isinstance(index, bool)
            or not 0 <= index < len(self._transactions)
        ):
            raise OutOfRange(f"No transaction at position {index!r}")

    @property
    def transactions(self) -> Tuple[Transaction, ...]:
        """Snapshot of the held transactions in display order."""

        return tuple(self._transactions)

    def __len__(self) -> int:
        return len(self._transactions)

    def get(self, index: int) -> Transaction:
        """Return the transaction at ``index``."""

        self._check_index(index)
        return self._transactions[index]

    def index_of(self, transaction_id: int) -> int:
        """Return the current position of the transaction with ``transaction_id``."""

        for index, transaction in enumerate(self._transactions):
            if transaction.transaction_id == transaction_id:
                return index
        raise OutOfRange(f"No transaction with id {transaction_id!r}")

    def add(self, name: str, raw_amount: object, kind: TransactionType | str) -> Transaction:
        """Append a new entry signed according to ``kind``."""

        clean_name = _validate_name(name)
        magnitude = abs(_validate_amount(raw_amount))
        try:
            kind = TransactionType.from_str(kind) if isinstance(kind, str) else TransactionType(kind)
        except ValueError as error:
            raise ValidationError(str(error)) from error
        amount = -magnitude if kind is TransactionType.EXPENSE else magnitude

        transaction = Transaction(transaction_id=self._next_id(), name=clean_name, amount=amount)
        self._commit([*self._transactions, transaction])
        LOGGER.info("Added %s %s (%s)", kind.value, transaction.transaction_id, amount)
        return transaction

    def update(self, index: int, new_name: str, new_raw_amount: object) -> Transaction:
        """Replace name and magnitude at ``index`` while keeping its sign."""

        self._check_index(index)
        clean_name = _validate_name(new_name)
        magnitude = abs(_validate_amount(new_raw_amount))

        existing = self._transactions[index]
        sign = -1.0 if existing.amount < 0 else 1.0
        updated = replace(existing, name=clean_name, amount=sign * magnitude)
        transactions = list(self._transactions)
        transactions[index] = updated
        self._commit(transactions)
        LOGGER.info("Updated transaction %s at position %s", updated.transaction_id, index)
        return updated

    def update_by_id(self, transaction_id: int, new_name: str, new_raw_amount: object) -> Transaction:
        """Same as ``update`` but addressed by the stable id."""

        return self.update(self.index_of(transaction_id), new_name, new_raw_amount)

    def remove(self, index: int) -> None:
        """Delete the entry at ``index``; later entries shift down by one."""

        self._check_index(index)
        transactions = list(self._transactions)
        removed = transactions.pop(index)
        self._commit(transactions)
        LOGGER.info("Removed transaction %s from position %s", removed.transaction_id, index)

    def remove_by_id(self, transaction_id: int) -> None:
        """Same as ``remove`` but addressed by the stable id."""

        self.remove(self.index_of(transaction_id))

    def clear(self) -> None:
        """Drop every transaction."""

        count = len(self._transactions)
        self._commit([])
        LOGGER.info("Cleared ledger (%s transactions removed)", count)

    def totals(self) -> Totals:
        """Compute balance, income, and expense over the current entries."""

        amounts = [transaction.amount for transaction in self._transactions]
        income = sum(amount for amount in amounts if amount > 0)
        expense = sum(amount for amount in amounts if amount < 0)
        return Totals(
            balance=_round_money(sum(amounts)),
            income=_round_money(income),
            expense=_round_money(abs(expense)),
        )
