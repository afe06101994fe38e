"""Finance client entry point: builds the application context."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import dataclass

import httpx
import structlog

from finance_client.api.client import ApiClient
from finance_client.api.finance import FinanceApi
from finance_client.config import Settings, settings as default_settings
from finance_client.core.logging import configure_logging
from finance_client.services.store import FinanceStore

logger = structlog.get_logger()


@dataclass
class FinanceContext:
    """Everything a screen needs: settings, API endpoints and the store."""

    settings: Settings
    api: FinanceApi
    store: FinanceStore


@asynccontextmanager
async def create_context(
    settings: Settings | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> AsyncIterator[FinanceContext]:
    """Open the API connection and yield a fresh context.

    Each call builds an independent store; nothing is shared between contexts.
    """
    settings = settings or default_settings
    configure_logging(settings.log_level, settings.log_json)

    logger.info("Starting finance client", base_url=settings.base_url)
    async with ApiClient(base_url=settings.base_url, transport=transport) as client:
        api = FinanceApi(client)
        yield FinanceContext(settings=settings, api=api, store=FinanceStore(api))
    logger.info("Finance client closed")
