"""Shared test fixtures."""

import asyncio
import json
import re
from collections import defaultdict

import httpx
import pytest

from finance_client.api.client import ApiClient
from finance_client.api.finance import FinanceApi
from finance_client.services.store import FinanceStore

BASE_URL = "http://finance.test"


class FakeFinanceServer:
    """In-memory stand-in for the finance REST API."""

    def __init__(self):
        self.transactions: dict[int, dict] = {}
        self.budgets: dict[tuple[str, str], dict] = {}
        self.goals: dict[int, dict] = {}
        self.plan_goal_ids: set | None = None  # None = plan covers every goal
        self.requests: list[httpx.Request] = []
        self._canned: dict[tuple[str, str], list[tuple[int, object]]] = defaultdict(list)
        self._holds: list[tuple[str, str, dict, asyncio.Event]] = []
        self._next_id = 1

    # ── Test controls ─────────────────────────────────
    def respond(self, method: str, path: str, status: int = 500, body=None, times: int = 1):
        """Answer the next ``times`` matching requests with a canned response."""
        self._canned[(method, path)].extend([(status, body)] * times)

    def hold(self, method: str, path: str, **params) -> asyncio.Event:
        """Block the next matching request until the returned event is set."""
        event = asyncio.Event()
        self._holds.append((method, path, {k: str(v) for k, v in params.items()}, event))
        return event

    def calls(self, method: str, path: str) -> list[httpx.Request]:
        return [r for r in self.requests if r.method == method and r.url.path == path]

    def add_transaction(self, **fields) -> dict:
        tx = {"description": "", "type": "expense", **fields, "id": self._new_id()}
        self.transactions[tx["id"]] = tx
        return tx

    def add_goal(self, **fields) -> dict:
        goal = {"current_amount": 0, "target_date": None, **fields, "id": self._new_id()}
        self.goals[goal["id"]] = goal
        return goal

    def _new_id(self) -> int:
        new_id = self._next_id
        self._next_id += 1
        return new_id

    # ── Transport entry point ─────────────────────────
    async def handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        key = (request.method, request.url.path)
        params = dict(request.url.params)

        for hold in list(self._holds):
            method, path, wanted, event = hold
            if (method, path) == key and wanted.items() <= params.items():
                self._holds.remove(hold)
                await event.wait()
                break

        if self._canned.get(key):
            status, body = self._canned[key].pop(0)
            if isinstance(body, str):
                return httpx.Response(status, text=body)
            return httpx.Response(status, json=body)

        body = json.loads(request.content) if request.content else None
        return self._route(request.method, request.url.path, params, body)

    def _route(self, method, path, params, body) -> httpx.Response:
        if path == "/":
            return httpx.Response(200, json={"status": "ok"})

        if path == "/transactions":
            if method == "GET":
                return httpx.Response(200, json=self._list_transactions(params))
            tx = {"description": "", "type": "expense", **body, "id": self._new_id()}
            self.transactions[tx["id"]] = tx
            return httpx.Response(201, json=tx)

        match = re.fullmatch(r"/transactions/(\d+)", path)
        if match:
            tx_id = int(match.group(1))
            if tx_id not in self.transactions:
                return httpx.Response(404, json={"detail": "Transaction not found"})
            if method == "PUT":
                self.transactions[tx_id] = {**self.transactions[tx_id], **body}
            elif method == "DELETE":
                del self.transactions[tx_id]
                return httpx.Response(204)
            return httpx.Response(200, json=self.transactions[tx_id])

        if path == "/budgets":
            if method == "GET":
                month = params.get("start")
                items = [b for b in self.budgets.values() if month is None or b["month"] == month]
                return httpx.Response(200, json=items)
            self.budgets[(body["month"], body["category"])] = body
            return httpx.Response(200, json=body)

        if path == "/budgets/summary":
            return httpx.Response(200, json=self._budget_summary(params.get("month")))

        if path == "/goals":
            if method == "GET":
                return httpx.Response(200, json=list(self.goals.values()))
            goal = {"current_amount": 0, "target_date": None, **body, "id": self._new_id()}
            self.goals[goal["id"]] = goal
            return httpx.Response(201, json=goal)

        match = re.fullmatch(r"/goals/(\d+)", path)
        if match:
            goal_id = int(match.group(1))
            if goal_id not in self.goals:
                return httpx.Response(404, json={"detail": "Goal not found"})
            if method == "PUT":
                self.goals[goal_id] = {**self.goals[goal_id], **body}
            elif method == "DELETE":
                del self.goals[goal_id]
                return httpx.Response(204)
            return httpx.Response(200, json=self.goals[goal_id])

        if path == "/advice/goals-plan":
            return httpx.Response(200, json={"goals": self._goals_plan()})

        if path == "/analytics/summary":
            return httpx.Response(200, json=self._summary())

        if path == "/analytics/behaviors":
            return httpx.Response(
                200,
                json={
                    "top_spending_categories": [{"category": "Rent", "amount": 1200}],
                    "most_expensive_day": None,
                    "income_days_count": 1,
                },
            )

        if path == "/alerts/overspending":
            return httpx.Response(200, json=[])

        if path == "/advice/savings":
            return httpx.Response(
                200,
                json={
                    "period": params.get("period"),
                    "category_reductions": [],
                    "targets": {"daily": 5, "weekly": 35, "monthly": 150},
                },
            )

        if path == "/seed/demo/load":
            for i in range(body.get("months_back", 1)):
                self.add_transaction(
                    date=f"2026-0{i + 1}-15", amount=100, category="Groceries"
                )
            self.add_goal(name="Demo fund", target_amount=1000)
            return httpx.Response(200, json={"inserted": body.get("months_back", 1)})

        if path == "/seed/demo/clear":
            deleted = len(self.transactions)
            self.transactions.clear()
            return httpx.Response(200, json={"deleted": deleted})

        return httpx.Response(404, json={"detail": "Not Found"})

    def _list_transactions(self, params: dict) -> list[dict]:
        items = list(self.transactions.values())
        if params.get("start"):
            items = [t for t in items if t["date"] >= params["start"]]
        if params.get("end"):
            items = [t for t in items if t["date"] <= params["end"]]
        if params.get("category"):
            items = [t for t in items if t["category"] == params["category"]]
        return items

    def _budget_summary(self, month: str | None) -> dict:
        items = []
        for budget in self.budgets.values():
            if budget["month"] != month:
                continue
            spent = sum(
                t["amount"]
                for t in self.transactions.values()
                if t["category"] == budget["category"]
                and t["date"].startswith(month)
                and t.get("type", "expense") == "expense"
            )
            items.append({
                "category": budget["category"],
                "spent": spent,
                "budget": budget["amount"],
                "utilization_pct": round(spent / budget["amount"] * 100, 1) if budget["amount"] else 0,
            })
        return {"month": month, "items": items}

    def _goals_plan(self) -> list[dict]:
        plan = []
        for goal in self.goals.values():
            if self.plan_goal_ids is not None and goal["id"] not in self.plan_goal_ids:
                continue
            plan.append({
                "id": goal["id"],
                "name": goal["name"],
                "remaining": goal["target_amount"] - (goal.get("current_amount") or 0),
                "months_to_target": 4,
                "projected_completion": "2027-02-01",
                "status": "on_track",
            })
        return plan

    def _summary(self) -> dict:
        income = sum(t["amount"] for t in self.transactions.values() if t.get("type") == "income")
        expenses = sum(t["amount"] for t in self.transactions.values() if t.get("type") != "income")
        breakdown = defaultdict(float)
        for t in self.transactions.values():
            if t.get("type") != "income":
                breakdown[t["category"]] += t["amount"]
        return {
            "totals": {"income": income, "expenses": expenses, "net_cash_flow": income - expenses},
            "category_breakdown": dict(breakdown),
            "savings_rate": 0.0,
            "avg_daily_spend": 0.0,
        }


@pytest.fixture
def server():
    return FakeFinanceServer()


@pytest.fixture
async def client(server):
    """API client wired to the fake server."""
    async with ApiClient(
        base_url=BASE_URL,
        transport=httpx.MockTransport(server.handle),
    ) as ac:
        yield ac


@pytest.fixture
def api(client):
    return FinanceApi(client)


@pytest.fixture
def store(api):
    return FinanceStore(api)
