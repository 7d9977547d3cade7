from __future__ import annotations

from typing import Any

import httpx

from .config import AppConfig
from .feeds import FeedItem, parse_feed
from .fetcher import fetch_text, timeout_for
from .models import Candidate


async def fetch_rss_candidates(
    client: httpx.AsyncClient,
    url: str,
    config: AppConfig,
    source: str,
    location: str | None,
    params: dict[str, Any] | None = None,
) -> list[Candidate]:
    text = await fetch_text(client, url, timeout_ms=timeout_for(config.fetch), params=params)
    candidates: list[Candidate] = []
    for item in parse_feed(text):
        candidate = to_candidate(item, source, location)
        if candidate:
            candidates.append(candidate)
    return candidates


def to_candidate(item: FeedItem, source: str, location: str | None) -> Candidate | None:
    candidate = Candidate(
        source=source,
        title=item.title,
        summary=item.description,
        url=item.link or None,
        published_at=item.published_at,
        location=location,
    )
    return candidate if candidate.is_identifiable() else None
