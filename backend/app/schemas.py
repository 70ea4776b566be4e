# backend/app/schemas.py
from datetime import date as Date, datetime, timezone
from decimal import Decimal
from enum import Enum
from typing import Annotated, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, PlainSerializer, field_serializer, field_validator


class TransactionType(str, Enum):
    INCOME = "INCOME"
    EXPENSE = "EXPENSE"


# Pydantic schema for incoming transaction objects (used for validation)
class TransactionCreate(BaseModel):
    category: str = Field(..., description="Spending or income category, e.g. Food")
    note: Optional[str] = None
    amount: Decimal = Field(..., description="Exact amount; the sign is stored as given")
    date: Date
    type: TransactionType

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "category": "Food",
                "note": "Lunch",
                "amount": "12.50",
                "date": "2024-03-05",
                "type": "EXPENSE",
            }
        }
    )

    @field_validator("category")
    @classmethod
    def category_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("category must not be blank")
        return value

    @field_validator("type", mode="before")
    @classmethod
    def type_not_blank(cls, value):
        if isinstance(value, str) and not value.strip():
            raise ValueError("type must not be blank")
        return value


# Pydantic schema for output
class TransactionOut(BaseModel):
    id: int
    category: str
    note: Optional[str] = None
    amount: Decimal
    date: Date
    type: str
    created_at: datetime = Field(
        ..., validation_alias=AliasChoices("created_at", "createdAt"), serialization_alias="createdAt"
    )

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    @field_serializer("amount")
    def serialize_amount(self, amount: Decimal) -> str:
        return str(amount)

    @field_serializer("created_at")
    def serialize_created_at(self, created_at: datetime) -> str:
        if created_at.tzinfo is None:
            created_at = created_at.replace(tzinfo=timezone.utc)
        return created_at.isoformat()


class MonthTotals(BaseModel):
    income: Decimal
    expense: Decimal
    balance: Decimal

    @field_serializer("income", "expense", "balance")
    def serialize_amount(self, amount: Decimal) -> str:
        return str(amount)


# Summary totals go out as JSON numbers; Decimal is kept until serialization
SummaryAmount = Annotated[Decimal, PlainSerializer(float, return_type=float, when_used="json")]


class MonthTrendPoint(MonthTotals):
    month: str
