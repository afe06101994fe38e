"""Narrative sentences summarizing spending behaviors."""

from collections.abc import Mapping

from finance_client.schemas.analytics import BehaviorsReport
from finance_client.services.formatting import format_currency


def behavior_narrative(
    report: Mapping | BehaviorsReport | None,
    locale: str | None = None,
) -> list[str]:
    """Build at most one sentence per available signal, in a fixed order.

    Order: leading spending category, most expensive day, income-day count.
    Signals missing from the report produce no sentence.
    """
    if report is None:
        return []
    report = BehaviorsReport.model_validate(report)
    sentences = []

    if report.top_spending_categories:
        top = report.top_spending_categories[0]
        sentences.append(
            f"Your top spending category was {top.category} "
            f"at {format_currency(top.amount, locale=locale)}."
        )

    day = report.most_expensive_day
    if day is not None:
        sentences.append(
            f"Your most expensive day was {day.date.isoformat()} "
            f"with {format_currency(day.total_spent, locale=locale)} spent."
        )

    if report.income_days_count is not None:
        count = report.income_days_count
        noun = "day" if count == 1 else "days"
        sentences.append(f"You received income on {count} {noun}.")

    return sentences
