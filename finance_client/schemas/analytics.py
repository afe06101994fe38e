"""Analytics, alert and advice schemas (read-only, computed server-side)."""

from datetime import date
from decimal import Decimal
from typing import Literal

from pydantic import BaseModel, Field


class Totals(BaseModel):
    income: Decimal = Decimal(0)
    expenses: Decimal = Decimal(0)
    net_cash_flow: Decimal = Decimal(0)


class AnalyticsSummary(BaseModel):
    totals: Totals = Field(default_factory=Totals)
    category_breakdown: dict[str, Decimal] = Field(default_factory=dict)
    savings_rate: float | None = None
    avg_daily_spend: Decimal | None = None

    model_config = {"extra": "allow"}


class CategoryAmount(BaseModel):
    category: str
    amount: Decimal


class ExpensiveDay(BaseModel):
    date: date
    total_spent: Decimal


class BehaviorsReport(BaseModel):
    top_spending_categories: list[CategoryAmount] = Field(default_factory=list)
    most_expensive_day: ExpensiveDay | None = None
    income_days_count: int | None = None

    model_config = {"extra": "allow"}


class OverspendingAlert(BaseModel):
    category: str
    month: str
    budget: Decimal
    spent: Decimal
    utilization_pct: float
    severity: Literal["normal", "warning", "critical"] | str

    model_config = {"extra": "allow"}


class CategoryReduction(BaseModel):
    category: str
    current: Decimal
    suggested_reduction_pct: float
    reduced_amount: Decimal


class SavingsTargets(BaseModel):
    daily: Decimal | None = None
    weekly: Decimal | None = None
    monthly: Decimal | None = None


class SavingsAdvice(BaseModel):
    category_reductions: list[CategoryReduction] = Field(default_factory=list)
    targets: SavingsTargets = Field(default_factory=SavingsTargets)

    model_config = {"extra": "allow"}
