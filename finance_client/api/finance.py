"""Finance API endpoints."""

import asyncio
from typing import Any

from finance_client.api.client import ApiClient

Cancel = asyncio.Event | None


class FinanceApi:
    """One coroutine per REST endpoint exposed by the finance service."""

    def __init__(self, client: ApiClient):
        self.client = client

    async def health(self, cancel_event: Cancel = None) -> Any:
        return await self.client.request("/", cancel_event=cancel_event)

    # ── Transactions ──────────────────────────────────
    async def list_transactions(self, params: dict | None = None, cancel_event: Cancel = None):
        return await self.client.request("/transactions", params=params, cancel_event=cancel_event)

    async def get_transaction(self, tx_id, cancel_event: Cancel = None):
        return await self.client.request(f"/transactions/{tx_id}", cancel_event=cancel_event)

    async def create_transaction(self, payload, cancel_event: Cancel = None):
        return await self.client.request(
            "/transactions", method="POST", body=payload, cancel_event=cancel_event
        )

    async def update_transaction(self, tx_id, payload, cancel_event: Cancel = None):
        return await self.client.request(
            f"/transactions/{tx_id}", method="PUT", body=payload, cancel_event=cancel_event
        )

    async def delete_transaction(self, tx_id, cancel_event: Cancel = None):
        return await self.client.request(
            f"/transactions/{tx_id}", method="DELETE", cancel_event=cancel_event
        )

    # ── Budgets ───────────────────────────────────────
    async def list_budgets(self, params: dict | None = None, cancel_event: Cancel = None):
        return await self.client.request("/budgets", params=params, cancel_event=cancel_event)

    async def upsert_budget(self, payload, cancel_event: Cancel = None):
        return await self.client.request(
            "/budgets", method="POST", body=payload, cancel_event=cancel_event
        )

    async def budget_summary(self, month: str | None, cancel_event: Cancel = None):
        return await self.client.request(
            "/budgets/summary", params={"month": month}, cancel_event=cancel_event
        )

    # ── Goals ─────────────────────────────────────────
    async def list_goals(self, cancel_event: Cancel = None):
        return await self.client.request("/goals", cancel_event=cancel_event)

    async def create_goal(self, payload, cancel_event: Cancel = None):
        return await self.client.request(
            "/goals", method="POST", body=payload, cancel_event=cancel_event
        )

    async def update_goal(self, goal_id, payload, cancel_event: Cancel = None):
        return await self.client.request(
            f"/goals/{goal_id}", method="PUT", body=payload, cancel_event=cancel_event
        )

    async def delete_goal(self, goal_id, cancel_event: Cancel = None):
        return await self.client.request(
            f"/goals/{goal_id}", method="DELETE", cancel_event=cancel_event
        )

    # ── Analytics ─────────────────────────────────────
    async def analytics_summary(self, params: dict | None = None, cancel_event: Cancel = None):
        return await self.client.request(
            "/analytics/summary", params=params, cancel_event=cancel_event
        )

    async def analytics_behaviors(self, params: dict | None = None, cancel_event: Cancel = None):
        return await self.client.request(
            "/analytics/behaviors", params=params, cancel_event=cancel_event
        )

    # ── Alerts & advice ───────────────────────────────
    async def overspending_alerts(self, month: str | None, cancel_event: Cancel = None):
        return await self.client.request(
            "/alerts/overspending", params={"month": month}, cancel_event=cancel_event
        )

    async def savings_advice(self, period: str = "month", cancel_event: Cancel = None):
        return await self.client.request(
            "/advice/savings", params={"period": period}, cancel_event=cancel_event
        )

    async def goals_plan(self, cancel_event: Cancel = None):
        return await self.client.request("/advice/goals-plan", cancel_event=cancel_event)

    # ── Demo seeding ──────────────────────────────────
    async def seed_demo_load(self, payload, cancel_event: Cancel = None):
        return await self.client.request(
            "/seed/demo/load", method="POST", body=payload, cancel_event=cancel_event
        )

    async def seed_demo_clear(self, cancel_event: Cancel = None):
        return await self.client.request(
            "/seed/demo/clear", method="DELETE", cancel_event=cancel_event
        )
