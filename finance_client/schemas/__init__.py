"""Pydantic schemas for finance API payloads."""

from finance_client.schemas.analytics import (
    AnalyticsSummary,
    BehaviorsReport,
    OverspendingAlert,
    SavingsAdvice,
)
from finance_client.schemas.budget import Budget, BudgetFilter, BudgetSummaryItem, BudgetUpsert
from finance_client.schemas.goal import Goal, GoalCreate, GoalPlanItem, GoalUpdate
from finance_client.schemas.seed import SeedDemoRequest
from finance_client.schemas.transaction import (
    Transaction,
    TransactionCreate,
    TransactionFilter,
    TransactionUpdate,
)

__all__ = [
    "AnalyticsSummary",
    "BehaviorsReport",
    "OverspendingAlert",
    "SavingsAdvice",
    "Budget",
    "BudgetFilter",
    "BudgetSummaryItem",
    "BudgetUpsert",
    "Goal",
    "GoalCreate",
    "GoalPlanItem",
    "GoalUpdate",
    "SeedDemoRequest",
    "Transaction",
    "TransactionCreate",
    "TransactionFilter",
    "TransactionUpdate",
]
