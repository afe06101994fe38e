"""Domain store: cached server state plus per-domain loading/error status.

Every fetch goes through the same state machine (idle, loading, then
success or error). Writes never patch the cache: they call the server and
re-fetch the owning collection with the last query used for it, so the
cache always holds a server-confirmed snapshot.

Each fetch is tagged with a per-domain sequence number. Only the response
of the most recently issued fetch is applied; older ones are discarded.
"""

import asyncio
from collections.abc import Awaitable, Callable
from typing import Any

import structlog
from pydantic import BaseModel

from finance_client.api.finance import FinanceApi
from finance_client.core.exceptions import TransportError
from finance_client.schemas.budget import BudgetFilter, BudgetUpsert
from finance_client.schemas.goal import GoalCreate, GoalUpdate
from finance_client.schemas.seed import SeedDemoRequest
from finance_client.schemas.transaction import (
    TransactionCreate,
    TransactionFilter,
    TransactionUpdate,
)

logger = structlog.get_logger()

DOMAINS = (
    "transactions",
    "budgets",
    "budget_summary",
    "goals",
    "goals_plan",
    "summary",
    "behaviors",
    "alerts",
    "savings_advice",
    "seed",
)

# Slices that hold an ordered collection and default to [] when the payload is empty
COLLECTIONS = frozenset({"transactions", "budgets", "goals"})


def _as_params(query: BaseModel | dict | None) -> dict | None:
    if isinstance(query, BaseModel):
        return query.to_params()
    return dict(query) if query else None


class FinanceStore:
    """Cached finance state for one API connection.

    Built once by the application context and passed to whatever needs it.
    """

    def __init__(self, api: FinanceApi):
        self.api = api

        self.loading: dict[str, bool] = {domain: False for domain in DOMAINS}
        self.errors: dict[str, TransportError | None] = {domain: None for domain in DOMAINS}

        # Data slices
        self.transactions: list[dict] = []
        self.budgets: list[dict] = []
        self.budget_summary: Any = None
        self.goals: list[dict] = []
        self.goals_plan: Any = None
        self.summary: Any = None
        self.behaviors: Any = None
        self.alerts: Any = None
        self.savings_advice: Any = None

        self._issued: dict[str, int] = {domain: 0 for domain in DOMAINS}
        self._last_query: dict[str, Any] = {}

    # ── State machine ─────────────────────────────────
    def _begin(self, domain: str) -> int:
        self._issued[domain] += 1
        self.loading[domain] = True
        self.errors[domain] = None
        return self._issued[domain]

    def _is_latest(self, domain: str, seq: int) -> bool:
        return self._issued[domain] == seq

    def _invalidate(self, domain: str) -> None:
        """Drop whatever fetch of ``domain`` is still in flight."""
        self._issued[domain] += 1
        self.loading[domain] = False

    async def _run(
        self,
        domain: str,
        call: Callable[[], Awaitable[Any]],
        apply: bool = True,
    ) -> Any:
        seq = self._begin(domain)
        try:
            data = await call()
        except TransportError as e:
            if self._is_latest(domain, seq):
                self.errors[domain] = e
                logger.warning(
                    "store_fetch_failed",
                    domain=domain,
                    status=e.status,
                    error=e.message,
                )
            else:
                logger.debug("stale_response_discarded", domain=domain, seq=seq, failed=True)
            raise
        else:
            if not self._is_latest(domain, seq):
                logger.debug("stale_response_discarded", domain=domain, seq=seq)
            elif apply:
                if domain in COLLECTIONS:
                    data = data or []
                setattr(self, domain, data)
                self.errors[domain] = None
            return data
        finally:
            if self._is_latest(domain, seq):
                self.loading[domain] = False

    async def _mutate(self, domain: str, call: Callable[[], Awaitable[Any]]) -> Any:
        try:
            return await call()
        except TransportError as e:
            # An in-flight fetch of the same domain would clear this error on landing
            self._invalidate(domain)
            self.errors[domain] = e
            logger.warning("store_write_failed", domain=domain, status=e.status, error=e.message)
            raise

    async def _refresh_quietly(self, domain: str, call: Callable[[], Awaitable[Any]]) -> None:
        """Best-effort secondary refresh: failures are logged, never raised."""
        try:
            await call()
        except TransportError as e:
            logger.warning(
                "secondary_refresh_failed",
                domain=domain,
                status=e.status,
                error=e.message,
            )

    # ── Analytics ─────────────────────────────────────
    async def fetch_summary(self, params: dict | None = None):
        params = _as_params(params)
        self._last_query["summary"] = params
        return await self._run("summary", lambda: self.api.analytics_summary(params))

    async def fetch_behaviors(self, params: dict | None = None):
        params = _as_params(params)
        self._last_query["behaviors"] = params
        return await self._run("behaviors", lambda: self.api.analytics_behaviors(params))

    # ── Alerts & advice ───────────────────────────────
    async def fetch_overspending_alerts(self, month: str | None = None):
        self._last_query["alerts"] = month
        return await self._run("alerts", lambda: self.api.overspending_alerts(month))

    async def fetch_savings_advice(self, period: str = "month"):
        self._last_query["savings_advice"] = period
        return await self._run("savings_advice", lambda: self.api.savings_advice(period))

    async def fetch_goals_plan(self):
        return await self._run("goals_plan", self.api.goals_plan)

    # ── Transactions ──────────────────────────────────
    async def fetch_transactions(self, params: TransactionFilter | dict | None = None):
        params = _as_params(params)
        self._last_query["transactions"] = params
        return await self._run("transactions", lambda: self.api.list_transactions(params))

    async def _refetch_transactions(self):
        return await self.fetch_transactions(self._last_query.get("transactions"))

    def get_transaction_by_id(self, tx_id) -> dict | None:
        return next((t for t in self.transactions if t.get("id") == tx_id), None)

    async def create_tx(self, payload: TransactionCreate | dict):
        payload = TransactionCreate.model_validate(payload)
        res = await self._mutate(
            "transactions", lambda: self.api.create_transaction(payload)
        )
        await self._refetch_transactions()
        return res

    async def update_tx(self, tx_id, payload: TransactionUpdate | dict):
        payload = TransactionUpdate.model_validate(payload)
        res = await self._mutate(
            "transactions", lambda: self.api.update_transaction(tx_id, payload)
        )
        await self._refetch_transactions()
        return res

    async def delete_tx(self, tx_id) -> bool:
        await self._mutate("transactions", lambda: self.api.delete_transaction(tx_id))
        await self._refetch_transactions()
        return True

    # ── Budgets ───────────────────────────────────────
    async def fetch_budgets(self, params: BudgetFilter | dict | None = None):
        params = _as_params(params)
        self._last_query["budgets"] = params
        return await self._run("budgets", lambda: self.api.list_budgets(params))

    async def fetch_budget_summary(self, month: str | None = None):
        self._last_query["budget_summary"] = month
        return await self._run("budget_summary", lambda: self.api.budget_summary(month))

    async def upsert_budget(self, payload: BudgetUpsert | dict):
        payload = BudgetUpsert.model_validate(payload)
        res = await self._mutate("budgets", lambda: self.api.upsert_budget(payload))
        await self.fetch_budgets(self._last_query.get("budgets"))
        await self._refresh_quietly(
            "budget_summary", lambda: self.fetch_budget_summary(payload.month)
        )
        return res

    # ── Goals ─────────────────────────────────────────
    async def fetch_goals(self):
        return await self._run("goals", self.api.list_goals)

    async def _refetch_goals(self):
        await self.fetch_goals()
        # Projections are recomputed server-side on every goal change
        await self._refresh_quietly("goals_plan", self.fetch_goals_plan)

    async def create_goal(self, payload: GoalCreate | dict):
        payload = GoalCreate.model_validate(payload)
        res = await self._mutate("goals", lambda: self.api.create_goal(payload))
        await self._refetch_goals()
        return res

    async def update_goal(self, goal_id, payload: GoalUpdate | dict):
        payload = GoalUpdate.model_validate(payload)
        res = await self._mutate("goals", lambda: self.api.update_goal(goal_id, payload))
        await self._refetch_goals()
        return res

    async def delete_goal(self, goal_id) -> bool:
        await self._mutate("goals", lambda: self.api.delete_goal(goal_id))
        await self._refetch_goals()
        return True

    # ── Demo seeding ──────────────────────────────────
    async def seed_demo_load(self, payload: SeedDemoRequest | dict | None = None):
        payload = SeedDemoRequest.model_validate(payload or {})

        async def load():
            res = await self.api.seed_demo_load(payload)
            await asyncio.gather(
                self._refresh_quietly("transactions", self._refetch_transactions),
                self._refresh_quietly("goals", self.fetch_goals),
            )
            return res

        return await self._run("seed", load, apply=False)

    async def seed_demo_clear(self):
        res = await self._run("seed", self.api.seed_demo_clear, apply=False)
        self._invalidate("transactions")
        self.transactions = []
        return res
