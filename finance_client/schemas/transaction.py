"""Transaction schemas for request payloads, cached entities and filters."""

from datetime import date, timedelta
from decimal import Decimal
from typing import Literal

from pydantic import BaseModel, field_validator

TransactionType = Literal["income", "expense"]


class TransactionCreate(BaseModel):
    date: date
    amount: Decimal
    category: str
    description: str = ""
    type: TransactionType = "expense"

    @field_validator("category")
    @classmethod
    def category_not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("category must not be blank")
        return v


class TransactionUpdate(TransactionCreate):
    pass


class Transaction(BaseModel):
    id: int | str
    date: date
    amount: Decimal
    category: str
    description: str | None = None
    type: TransactionType = "expense"

    model_config = {"extra": "allow"}


class TransactionFilter(BaseModel):
    start: date | None = None
    end: date | None = None
    category: str | None = None
    # Applied client-side only; the API has no type parameter.
    type: TransactionType | None = None

    @classmethod
    def last_days(cls, days: int = 30, today: date | None = None) -> "TransactionFilter":
        """Window of ``days`` calendar days ending today (inclusive)."""
        end = today or date.today()
        return cls(start=end - timedelta(days=days - 1), end=end)

    def to_params(self) -> dict:
        return self.model_dump(exclude={"type"}, exclude_none=True)
