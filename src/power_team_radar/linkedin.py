from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any

import httpx

from .config import AppConfig
from .errors import FetchError
from .facebook import headline
from .feeds import to_iso
from .fetcher import fetch_json, timeout_for
from .models import Candidate, SourceQuery

logger = logging.getLogger(__name__)

POST_URL = "https://www.linkedin.com/feed/update/{urn}"


def is_configured(config: AppConfig) -> bool:
    li = config.linkedin
    return li.enabled and bool(li.token) and bool(li.organization_ids)


async def fetch_linkedin(
    client: httpx.AsyncClient, query: SourceQuery, config: AppConfig
) -> list[Candidate]:
    # The posts finder has no date filter; recency is left to the pipeline.
    if not is_configured(config):
        return []

    headers = {
        "Authorization": f"Bearer {config.linkedin.token}",
        "LinkedIn-Version": config.linkedin.api_version,
        "X-Restli-Protocol-Version": "2.0.0",
    }
    candidates: list[Candidate] = []
    for org_id in config.linkedin.organization_ids:
        params = {
            "q": "author",
            "author": f"urn:li:organization:{org_id}",
            "count": config.linkedin.count,
        }
        try:
            data = await fetch_json(
                client,
                config.linkedin.base_url,
                timeout_ms=timeout_for(config.fetch),
                params=params,
                headers=headers,
            )
        except FetchError as exc:
            logger.warning("LinkedIn organization %s skipped: %s", org_id, exc)
            continue
        for record in _extract_records(data):
            candidate = _to_candidate(record)
            if candidate:
                candidates.append(candidate)
    return candidates


def _extract_records(data: Any) -> list[dict]:
    if isinstance(data, dict) and isinstance(data.get("elements"), list):
        return [item for item in data["elements"] if isinstance(item, dict)]
    return []


def _to_candidate(record: dict[str, Any]) -> Candidate | None:
    commentary = (record.get("commentary") or "").strip()
    urn = record.get("id")
    if not commentary:
        return None
    candidate = Candidate(
        source="linkedin",
        title=headline(commentary),
        summary=commentary,
        url=POST_URL.format(urn=urn) if urn else None,
        published_at=_epoch_ms(record.get("publishedAt") or record.get("createdAt")),
        location=None,
    )
    return candidate if candidate.is_identifiable() else None


def _epoch_ms(value: Any) -> str | None:
    if not isinstance(value, (int, float)):
        return None
    return to_iso(datetime.fromtimestamp(value / 1000, tz=timezone.utc))
