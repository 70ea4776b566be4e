# backend/app/storage/transaction_store.py
"""Transaction storage backends.

``SqlTransactionStore`` persists rows in the ``transactions`` table through a
SQLAlchemy session. ``InMemoryTransactionStore`` keeps the same contract in a
plain list and is what the router tests run against.
"""
import logging
from datetime import date, datetime
from decimal import Decimal
from typing import Dict, List, Optional, Protocol

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from backend.app.errors import StorageError
from backend.app.models.transaction_model import Transaction, utcnow
from backend.app.schemas import TransactionCreate, TransactionOut, TransactionType

logger = logging.getLogger(__name__)

EXPENSE = TransactionType.EXPENSE.value


class TransactionStore(Protocol):
    def insert(self, new: TransactionCreate, created_at: Optional[datetime] = None) -> TransactionOut:
        """Persist ``new`` and return it with its assigned id."""

    def exists_by_id(self, transaction_id: int) -> bool:
        ...

    def delete_by_id(self, transaction_id: int) -> None:
        ...

    def find_by_date_range(self, start: date, end: date) -> List[TransactionOut]:
        """Return records with ``start <= date <= end``."""

    def sum_expenses_by_category(self, start: date, end: date) -> Dict[str, Decimal]:
        """Return EXPENSE totals for every category seen in the range."""

    def sum_by_type(self, start: date, end: date) -> Dict[str, Decimal]:
        ...


def _fold_expenses(rows) -> Dict[str, Decimal]:
    # every category in range gets a key; only EXPENSE rows add to it
    totals: Dict[str, Decimal] = {}
    for category, tx_type, amount in rows:
        totals.setdefault(category, Decimal("0"))
        if tx_type == EXPENSE:
            totals[category] += amount
    return totals


def _fold_types(rows) -> Dict[str, Decimal]:
    totals = {t.value: Decimal("0") for t in TransactionType}
    for tx_type, amount in rows:
        totals[tx_type] = totals.get(tx_type, Decimal("0")) + amount
    return totals


class SqlTransactionStore:
    """Store backed by the ``transactions`` table."""

    def __init__(self, db: Session):
        self.db = db

    def insert(self, new: TransactionCreate, created_at: Optional[datetime] = None) -> TransactionOut:
        db_tx = Transaction(
            category=new.category,
            note=new.note,
            amount=new.amount,
            date=new.date,
            type=new.type.value,
            created_at=created_at or utcnow(),
        )
        try:
            self.db.add(db_tx)
            self.db.commit()
            self.db.refresh(db_tx)
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.exception("Failed to insert transaction")
            raise StorageError(f"Could not save transaction: {e}") from e
        return TransactionOut.model_validate(db_tx)

    def exists_by_id(self, transaction_id: int) -> bool:
        try:
            found = self.db.query(Transaction.id).filter(Transaction.id == transaction_id).first()
        except SQLAlchemyError as e:
            logger.exception("Failed to look up transaction %s", transaction_id)
            raise StorageError(f"Could not look up transaction {transaction_id}: {e}") from e
        return found is not None

    def delete_by_id(self, transaction_id: int) -> None:
        try:
            self.db.query(Transaction).filter(Transaction.id == transaction_id).delete()
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.exception("Failed to delete transaction %s", transaction_id)
            raise StorageError(f"Could not delete transaction {transaction_id}: {e}") from e

    def find_by_date_range(self, start: date, end: date) -> List[TransactionOut]:
        try:
            rows = (
                self.db.query(Transaction)
                .filter(Transaction.date.between(start, end))
                .order_by(Transaction.date, Transaction.id)
                .all()
            )
        except SQLAlchemyError as e:
            logger.exception("Failed to list transactions between %s and %s", start, end)
            raise StorageError(f"Could not list transactions: {e}") from e
        return [TransactionOut.model_validate(row) for row in rows]

    def sum_expenses_by_category(self, start: date, end: date) -> Dict[str, Decimal]:
        # Amounts are stored as text, so the sum happens here in Decimal
        # rather than in SQL where it would go through a float.
        try:
            rows = (
                self.db.query(Transaction.category, Transaction.type, Transaction.amount)
                .filter(Transaction.date.between(start, end))
                .order_by(Transaction.date, Transaction.id)
                .all()
            )
        except SQLAlchemyError as e:
            logger.exception("Failed to summarise expenses between %s and %s", start, end)
            raise StorageError(f"Could not summarise expenses: {e}") from e
        return _fold_expenses(rows)

    def sum_by_type(self, start: date, end: date) -> Dict[str, Decimal]:
        try:
            rows = (
                self.db.query(Transaction.type, Transaction.amount)
                .filter(Transaction.date.between(start, end))
                .all()
            )
        except SQLAlchemyError as e:
            logger.exception("Failed to total transactions between %s and %s", start, end)
            raise StorageError(f"Could not total transactions: {e}") from e
        return _fold_types(rows)


class InMemoryTransactionStore:
    """In-memory store with the same contract, for tests and local runs."""

    def __init__(self) -> None:
        self._rows: List[TransactionOut] = []
        self._next_id = 1

    def insert(self, new: TransactionCreate, created_at: Optional[datetime] = None) -> TransactionOut:
        row = TransactionOut(
            id=self._next_id,
            category=new.category,
            note=new.note,
            amount=new.amount,
            date=new.date,
            type=new.type.value,
            created_at=created_at or utcnow(),
        )
        self._next_id += 1
        self._rows.append(row)
        return row

    def exists_by_id(self, transaction_id: int) -> bool:
        return any(row.id == transaction_id for row in self._rows)

    def delete_by_id(self, transaction_id: int) -> None:
        self._rows = [row for row in self._rows if row.id != transaction_id]

    def find_by_date_range(self, start: date, end: date) -> List[TransactionOut]:
        rows = [row for row in self._rows if start <= row.date <= end]
        return sorted(rows, key=lambda row: (row.date, row.id))

    def sum_expenses_by_category(self, start: date, end: date) -> Dict[str, Decimal]:
        rows = self.find_by_date_range(start, end)
        return _fold_expenses((row.category, row.type, row.amount) for row in rows)

    def sum_by_type(self, start: date, end: date) -> Dict[str, Decimal]:
        rows = self.find_by_date_range(start, end)
        return _fold_types((row.type, row.amount) for row in rows)
