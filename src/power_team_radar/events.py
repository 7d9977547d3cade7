from __future__ import annotations

from urllib.parse import quote

import httpx

from .config import AppConfig
from .models import Candidate, SourceQuery
from .query import slugify
from .rss import fetch_rss_candidates


async def fetch_allevents(
    client: httpx.AsyncClient, query: SourceQuery, config: AppConfig
) -> list[Candidate]:
    if not config.allevents.enabled or not query.location:
        return []
    url = config.allevents.url_template.format(
        city=slugify(query.location),
        topic=slugify(config.allevents.topic),
    )
    return await fetch_rss_candidates(
        client, url, config, source="allevents", location=query.location
    )


async def fetch_community_events(
    client: httpx.AsyncClient, query: SourceQuery, config: AppConfig
) -> list[Candidate]:
    if not config.community_events.enabled or not query.location:
        return []
    url = config.community_events.url_template.format(
        city=quote(query.location),
        topic=quote(community_topic(query.industries, config.community_events.default_topic)),
    )
    return await fetch_rss_candidates(
        client, url, config, source="community_events", location=query.location
    )


def community_topic(industries: list[str], default: str) -> str:
    for industry in industries:
        if industry.strip():
            return industry.strip()
    return default
