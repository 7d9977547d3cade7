from __future__ import annotations

import asyncio
from typing import Any

import httpx

from .config import AppConfig, FetchConfig
from .errors import FetchError

DEFAULT_TIMEOUT_MS = 4500


def build_client(config: AppConfig) -> httpx.AsyncClient:
    headers = {"User-Agent": config.fetch.user_agent}
    return httpx.AsyncClient(
        timeout=config.fetch.timeout_ms / 1000,
        headers=headers,
        follow_redirects=True,
    )


async def fetch_text(
    client: httpx.AsyncClient,
    url: str,
    timeout_ms: int = DEFAULT_TIMEOUT_MS,
    params: dict[str, Any] | None = None,
    headers: dict[str, str] | None = None,
) -> str:
    resp = await _get(client, url, timeout_ms, params, headers)
    return resp.text


async def fetch_json(
    client: httpx.AsyncClient,
    url: str,
    timeout_ms: int = DEFAULT_TIMEOUT_MS,
    params: dict[str, Any] | None = None,
    headers: dict[str, str] | None = None,
) -> Any:
    resp = await _get(client, url, timeout_ms, params, headers)
    try:
        return resp.json()
    except ValueError as exc:
        raise FetchError(url, status=resp.status_code, reason=f"invalid JSON: {exc}") from exc


def timeout_for(config: FetchConfig) -> int:
    return config.timeout_ms or DEFAULT_TIMEOUT_MS


async def _get(
    client: httpx.AsyncClient,
    url: str,
    timeout_ms: int,
    params: dict[str, Any] | None,
    headers: dict[str, str] | None,
) -> httpx.Response:
    seconds = timeout_ms / 1000
    try:
        async with asyncio.timeout(seconds):
            resp = await client.get(url, params=params, headers=headers, timeout=seconds)
    except (TimeoutError, httpx.TimeoutException) as exc:
        raise FetchError(url, timed_out=True) from exc
    except httpx.HTTPError as exc:
        raise FetchError(url, reason=str(exc) or type(exc).__name__) from exc

    if not resp.is_success:
        raise FetchError(url, status=resp.status_code)
    return resp
