from __future__ import annotations

import logging
from typing import Any

import httpx

from .config import AppConfig
from .errors import FetchError
from .feeds import normalize_date
from .fetcher import fetch_json, timeout_for
from .matcher import parse_timestamp
from .models import Candidate, SourceQuery

logger = logging.getLogger(__name__)

TITLE_MAX_LENGTH = 120


def is_configured(config: AppConfig) -> bool:
    fb = config.facebook
    return fb.enabled and bool(fb.page_token) and bool(fb.page_ids)


async def fetch_facebook(
    client: httpx.AsyncClient, query: SourceQuery, config: AppConfig
) -> list[Candidate]:
    if not is_configured(config):
        return []

    candidates: list[Candidate] = []
    for page_id in config.facebook.page_ids:
        try:
            data = await fetch_json(
                client,
                f"{config.facebook.graph_url.rstrip('/')}/{page_id}/posts",
                timeout_ms=timeout_for(config.fetch),
                params=_build_params(query, config),
            )
        except FetchError as exc:
            logger.warning("Facebook page %s skipped: %s", page_id, exc)
            continue
        for record in _extract_records(data):
            candidate = _to_candidate(record)
            if candidate:
                candidates.append(candidate)
    return candidates


def _build_params(query: SourceQuery, config: AppConfig) -> dict[str, Any]:
    params: dict[str, Any] = {
        "fields": "message,permalink_url,created_time",
        "access_token": config.facebook.page_token,
        "limit": config.facebook.limit,
    }
    if since := parse_timestamp(query.since):
        params["since"] = int(since.timestamp())
    return params


def _extract_records(data: Any) -> list[dict]:
    if isinstance(data, dict) and isinstance(data.get("data"), list):
        return [item for item in data["data"] if isinstance(item, dict)]
    return []


def _to_candidate(record: dict[str, Any]) -> Candidate | None:
    message = (record.get("message") or "").strip()
    if not message:
        return None
    candidate = Candidate(
        source="facebook",
        title=headline(message),
        summary=message,
        url=record.get("permalink_url") or None,
        published_at=normalize_date(record.get("created_time")),
        location=None,
    )
    return candidate if candidate.is_identifiable() else None


def headline(message: str) -> str:
    first_line = message.splitlines()[0].strip()
    if len(first_line) <= TITLE_MAX_LENGTH:
        return first_line
    return first_line[: TITLE_MAX_LENGTH - 3].rstrip() + "..."
