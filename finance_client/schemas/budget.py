"""Budget schemas."""

from datetime import date
from decimal import Decimal

from pydantic import BaseModel, Field, field_validator

MONTH_PATTERN = r"^\d{4}-(0[1-9]|1[0-2])$"


def current_month(today: date | None = None) -> str:
    """Return the ``YYYY-MM`` label of the current month."""
    d = today or date.today()
    return f"{d.year}-{d.month:02d}"


class BudgetUpsert(BaseModel):
    """Create or replace the budget of one (month, category) pair."""

    month: str = Field(pattern=MONTH_PATTERN)
    category: str
    amount: Decimal

    @field_validator("category")
    @classmethod
    def category_not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("category must not be blank")
        return v


class Budget(BaseModel):
    month: str
    category: str
    amount: Decimal

    model_config = {"extra": "allow"}


class BudgetSummaryItem(BaseModel):
    category: str
    spent: Decimal = Decimal(0)
    budget: Decimal = Decimal(0)
    utilization_pct: float | None = None

    model_config = {"extra": "allow"}

    @field_validator("spent", "budget", mode="before")
    @classmethod
    def missing_amount_is_zero(cls, v):
        return 0 if v is None else v


class BudgetFilter(BaseModel):
    period: str = "month"
    start: str = Field(default_factory=current_month)

    def to_params(self) -> dict:
        return self.model_dump()
