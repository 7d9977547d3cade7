from __future__ import annotations

from typing import Any

import httpx

from .config import AppConfig
from .feeds import clean_description, normalize_date
from .fetcher import fetch_json, timeout_for
from .matcher import parse_timestamp
from .models import Candidate, SourceQuery
from .query import plain_query


def is_configured(config: AppConfig) -> bool:
    return config.eventbrite.enabled and bool(config.eventbrite.token)


async def fetch_eventbrite(
    client: httpx.AsyncClient, query: SourceQuery, config: AppConfig
) -> list[Candidate]:
    if not is_configured(config):
        return []

    data = await fetch_json(
        client,
        config.eventbrite.base_url,
        timeout_ms=timeout_for(config.fetch),
        params=_build_params(query),
        headers={"Authorization": f"Bearer {config.eventbrite.token}"},
    )
    candidates: list[Candidate] = []
    for record in _extract_records(data):
        candidate = _to_candidate(record, query.location)
        if candidate:
            candidates.append(candidate)
    return candidates


def _build_params(query: SourceQuery) -> dict[str, Any]:
    params: dict[str, Any] = {
        "q": plain_query(query.keywords, None),
        "start_date.range_start": _range_start(query.since),
        "expand": "venue",
    }
    if query.location:
        params["location.address"] = query.location
    return params


def _range_start(since: str) -> str:
    moment = parse_timestamp(since)
    return moment.strftime("%Y-%m-%dT%H:%M:%SZ") if moment else since


def _extract_records(data: Any) -> list[dict]:
    if isinstance(data, dict):
        for key in ("events", "data", "items"):
            value = data.get(key)
            if isinstance(value, list):
                return [item for item in value if isinstance(item, dict)]
    return []


def _to_candidate(record: dict[str, Any], location: str | None) -> Candidate | None:
    title = _text(record.get("name"))
    url = _to_str(record.get("url"))
    published_at = normalize_date(_to_str(record.get("published") or record.get("created")))
    candidate = Candidate(
        source="eventbrite",
        title=title or "",
        summary=clean_description(_text(record.get("description")) or _to_str(record.get("summary"))),
        url=url,
        published_at=published_at,
        location=location,
    )
    return candidate if candidate.is_identifiable() else None


def _text(value: Any) -> str | None:
    if isinstance(value, dict):
        return _to_str(value.get("text"))
    return _to_str(value)


def _to_str(value: Any) -> str | None:
    if value is None:
        return None
    if isinstance(value, str):
        return value.strip() or None
    return str(value).strip() or None
