"""Async HTTP transport for the finance API.

All failures leave this module as :class:`TransportError`, whatever their
origin (connection problems, aborted requests or non-2xx responses).
"""

import asyncio
import json
import time
from datetime import date, datetime
from decimal import Decimal
from typing import Any

import httpx
import structlog
from pydantic import BaseModel

from finance_client.config import get_base_url
from finance_client.core.exceptions import TransportError

logger = structlog.get_logger()

JSON_HEADERS = {"Content-Type": "application/json"}


def build_query(params: dict | None) -> dict[str, str]:
    """Drop empty values and stringify the rest."""
    query = {}
    for key, value in (params or {}).items():
        if value is None or value == "":
            continue
        if isinstance(value, bool):
            query[key] = "true" if value else "false"
        elif isinstance(value, (date, datetime)):
            query[key] = value.isoformat()
        else:
            query[key] = str(value)
    return query


def _json_default(value: Any):
    if isinstance(value, Decimal):
        return float(value)
    if isinstance(value, (date, datetime)):
        return value.isoformat()
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def encode_body(body: Any) -> str:
    """Serialize a request body; strings are sent untouched."""
    if isinstance(body, str):
        return body
    if isinstance(body, BaseModel):
        body = body.model_dump(exclude_none=True)
    return json.dumps(body, default=_json_default)


def parse_payload(response: httpx.Response) -> Any:
    """Decode JSON responses, read everything else as text.

    Undecodable bodies give ``None``.
    """
    content_type = response.headers.get("content-type", "")
    try:
        if "application/json" in content_type:
            return response.json()
        return response.text
    except ValueError as e:
        logger.debug(
            "response_parse_failed",
            url=str(response.request.url),
            status=response.status_code,
            error=str(e),
        )
        return None


class ApiClient:
    """Thin wrapper around one ``httpx.AsyncClient`` bound to the API base URL."""

    def __init__(
        self,
        base_url: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        timeout: float | None = None,
    ) -> None:
        self.base_url = (base_url or get_base_url()).rstrip("/")
        self._http = httpx.AsyncClient(transport=transport, timeout=timeout)

    async def __aenter__(self) -> "ApiClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._http.aclose()

    async def request(
        self,
        path: str,
        method: str = "GET",
        params: dict | None = None,
        body: Any = None,
        cancel_event: asyncio.Event | None = None,
    ) -> Any:
        """Send a request and return the decoded payload.

        Raises:
            TransportError: on network failure, abort or a non-2xx status.
        """
        url = f"{self.base_url}{path}"
        content = encode_body(body) if body is not None else None
        start_time = time.perf_counter()

        try:
            response = await self._send(
                method,
                url,
                params=build_query(params),
                content=content,
                cancel_event=cancel_event,
            )
        except httpx.RequestError as e:
            logger.warning("api_request_failed", method=method, path=path, error=str(e))
            raise TransportError.network(e) from e

        duration_ms = (time.perf_counter() - start_time) * 1000
        logger.info(
            "api_request",
            method=method,
            path=path,
            status=response.status_code,
            duration_ms=round(duration_ms, 2),
        )

        data = parse_payload(response)
        if not response.is_success:
            raise TransportError.from_response(response.status_code, data)
        return data

    async def _send(
        self,
        method: str,
        url: str,
        params: dict[str, str],
        content: str | None,
        cancel_event: asyncio.Event | None,
    ) -> httpx.Response:
        call = self._http.request(
            method, url, params=params, content=content, headers=JSON_HEADERS
        )
        if cancel_event is None:
            return await call
        if cancel_event.is_set():
            call.close()
            logger.info("api_request_aborted", method=method, url=url)
            raise TransportError.aborted()

        send = asyncio.ensure_future(call)
        abort = asyncio.ensure_future(cancel_event.wait())
        try:
            done, _ = await asyncio.wait(
                {send, abort}, return_when=asyncio.FIRST_COMPLETED
            )
        finally:
            abort.cancel()
            if not send.done():
                send.cancel()
                # Let the connection teardown finish before reporting the abort
                await asyncio.wait({send})

        if send in done:
            return send.result()
        logger.info("api_request_aborted", method=method, url=url)
        raise TransportError.aborted()
