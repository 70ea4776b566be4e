# backend/app/models/transaction_model.py
from datetime import datetime, timezone
from decimal import Decimal

from sqlalchemy import Column, Integer, String, Date, DateTime
from sqlalchemy.types import TypeDecorator

from backend.app.db import Base


def utcnow():
    # SQLite drops tzinfo, so timestamps are kept as naive UTC
    return datetime.now(timezone.utc).replace(tzinfo=None)


class ExactDecimal(TypeDecorator):
    """Decimal persisted as text so no backend rounds it through a float."""

    impl = String
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is None:
            return None
        return str(Decimal(value))

    def process_result_value(self, value, dialect):
        if value is None:
            return None
        return Decimal(value)


class Transaction(Base):
    __tablename__ = "transactions"
    # AUTOINCREMENT stops SQLite from handing out a deleted id again
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    category = Column(String, nullable=False, index=True)
    note = Column(String, nullable=True)
    amount = Column(ExactDecimal, nullable=False)
    date = Column(Date, nullable=False, index=True)
    type = Column(String, nullable=False)
    created_at = Column(DateTime, nullable=False, default=utcnow)
