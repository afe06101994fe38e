"""Derived metrics computed from cached store data.

Everything here is pure: no I/O, same input gives the same output.
"""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any

from finance_client.schemas.analytics import OverspendingAlert, SavingsAdvice
from finance_client.schemas.budget import BudgetSummaryItem
from finance_client.schemas.goal import Goal, GoalPlanItem
from finance_client.services.formatting import PLACEHOLDER

STATUS_LABELS = {
    "ahead": "Ahead",
    "on_track": "On track",
    "behind": "Behind",
    "no_net": "No net savings",
}

STATUS_TONES = {
    "ahead": "success",
    "on_track": "",
    "behind": "warn",
    "no_net": "danger",
}

SEVERITY_RANK = {"critical": 0, "warning": 1, "normal": 2}


def _clamp(value: float, low: float = 0.0, high: float = 100.0) -> float:
    return max(low, min(high, value))


# ── Budgets ───────────────────────────────────────────
def utilization_tier(pct: float) -> str:
    """Map a utilization percentage to ``danger``, ``warn`` or ``success``."""
    if pct > 90:
        return "danger"
    if pct >= 70:
        return "warn"
    return "success"


@dataclass(frozen=True)
class UtilizationRow:
    category: str
    spent: float
    budget: float
    utilization_pct: float
    tier: str
    bar_width: float


def utilization_rows(summary: Any) -> list[UtilizationRow]:
    """Budget summary rows, most utilized first, with tier and bar width.

    ``summary`` is the budget-summary payload (``{"items": [...]}``) or its
    list. Bar widths share one scale: the largest of spent/budget (at
    least 1) across all rows of the table.
    """
    if isinstance(summary, Mapping):
        summary = summary.get("items")
    parsed = [BudgetSummaryItem.model_validate(item) for item in summary or []]
    if not parsed:
        return []
    scale = max(max(float(i.spent), float(i.budget), 1.0) for i in parsed)

    rows = []
    for item in sorted(parsed, key=lambda i: i.utilization_pct or 0, reverse=True):
        pct = item.utilization_pct or 0.0
        rows.append(
            UtilizationRow(
                category=item.category,
                spent=float(item.spent),
                budget=float(item.budget),
                utilization_pct=pct,
                tier=utilization_tier(pct),
                bar_width=_clamp(float(item.spent) / scale * 100),
            )
        )
    return rows


def budgets_for_month(budgets: Iterable[Mapping], month: str) -> list[Mapping]:
    """Budgets of one month, ordered by category."""
    return sorted(
        (b for b in budgets if b.get("month") == month),
        key=lambda b: b.get("category", ""),
    )


# ── Goals ─────────────────────────────────────────────
def goal_progress(current: Any = 0, target: Any = 0) -> float:
    """Saved share of a goal target, in percent with one decimal."""
    current = float(current or 0)
    target = float(target or 0)
    if target <= 0:
        return 0.0
    pct = round(_clamp(current / target * 100), 1)
    if pct == 100 and current < target:
        return 99.9
    return pct


@dataclass(frozen=True)
class GoalView:
    goal: Goal
    progress_pct: float
    plan: GoalPlanItem | None


def _plan_items(plan: Any) -> list[GoalPlanItem]:
    if isinstance(plan, Mapping):
        plan = plan.get("goals")
    return [GoalPlanItem.model_validate(p) for p in plan or []]


def join_goals_with_plan(goals: Iterable[Mapping | Goal], plan: Any) -> list[GoalView]:
    """Attach each goal's projection by exact id match, sorted by goal name.

    ``plan`` is the goals-plan payload (``{"goals": [...]}``) or its list.
    Goals without a projection get ``plan=None``.
    """
    plan_by_id = {p.id: p for p in _plan_items(plan)}
    views = []
    for raw in goals or []:
        goal = Goal.model_validate(raw)
        views.append(
            GoalView(
                goal=goal,
                progress_pct=goal_progress(goal.current_amount, goal.target_amount),
                plan=plan_by_id.get(goal.id),
            )
        )
    return sorted(views, key=lambda v: v.goal.name)


def status_label(status: str | None) -> str | None:
    return STATUS_LABELS.get(status, status)


def status_tone(status: str | None) -> str:
    return STATUS_TONES.get(status, "")


def months_label(months: float | None) -> str:
    if months is None:
        return PLACEHOLDER
    return f"{months} mo"


# ── Analytics ─────────────────────────────────────────
@dataclass(frozen=True)
class CategoryBar:
    category: str
    value: float
    width: float


def rank_categories(breakdown: Mapping[str, Any] | None) -> list[CategoryBar]:
    """Categories by descending amount, bar widths relative to the largest."""
    entries = sorted(
        ((category, float(value or 0)) for category, value in (breakdown or {}).items()),
        key=lambda e: e[1],
        reverse=True,
    )
    top = max((value for _, value in entries), default=0.0)
    return [
        CategoryBar(
            category=category,
            value=value,
            width=round(value / top * 100, 1) if top > 0 else 0.0,
        )
        for category, value in entries
    ]


def rank_alerts(alerts: Iterable[Mapping | OverspendingAlert] | None) -> list[OverspendingAlert]:
    """Overspending alerts, most severe first then by utilization."""
    parsed = [OverspendingAlert.model_validate(a) for a in alerts or []]
    return sorted(
        parsed,
        key=lambda a: (SEVERITY_RANK.get(a.severity, len(SEVERITY_RANK)), -a.utilization_pct),
    )


def savings_reductions(advice: Mapping | SavingsAdvice | None) -> SavingsAdvice:
    """Savings advice with reductions ordered by the amount they free up."""
    parsed = SavingsAdvice.model_validate(advice or {})
    reductions = sorted(parsed.category_reductions, key=lambda r: r.reduced_amount, reverse=True)
    return parsed.model_copy(update={"category_reductions": reductions})


# ── Transactions ──────────────────────────────────────
def filter_by_type(transactions: Iterable[Mapping], tx_type: str | None) -> list[Mapping]:
    """Client-side type filter; transactions without a type count as expenses."""
    transactions = list(transactions or [])
    if not tx_type:
        return transactions
    return [t for t in transactions if (t.get("type") or "expense") == tx_type]


def newest_first(transactions: Iterable[Mapping]) -> list[Mapping]:
    """Order transactions by date, most recent first; same-day rows keep their order."""
    return sorted(transactions or [], key=lambda t: str(t.get("date") or ""), reverse=True)


def category_options(transactions: Iterable[Mapping]) -> list[str]:
    return sorted({t["category"] for t in transactions or [] if t.get("category")})
