# backend/app/repositories/transaction_repository.py
"""Typed query surface over a transaction store."""
from datetime import date
from decimal import Decimal
from typing import Dict, List

from backend.app.schemas import TransactionCreate, TransactionOut
from backend.app.storage.transaction_store import TransactionStore


class TransactionRepository:
    def __init__(self, store: TransactionStore) -> None:
        self._store = store

    def create(self, new: TransactionCreate) -> TransactionOut:
        return self._store.insert(new)

    def exists(self, transaction_id: int) -> bool:
        return self._store.exists_by_id(transaction_id)

    def delete(self, transaction_id: int) -> None:
        self._store.delete_by_id(transaction_id)

    def list_between(self, start: date, end: date) -> List[TransactionOut]:
        return self._store.find_by_date_range(start, end)

    def expenses_by_category(self, start: date, end: date) -> Dict[str, Decimal]:
        return self._store.sum_expenses_by_category(start, end)

    def totals_between(self, start: date, end: date) -> Dict[str, Decimal]:
        return self._store.sum_by_type(start, end)
