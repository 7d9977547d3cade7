from __future__ import annotations

import httpx

from .config import AppConfig
from .models import Candidate, SourceQuery
from .query import plain_query
from .rss import fetch_rss_candidates


async def fetch_bing_news(
    client: httpx.AsyncClient, query: SourceQuery, config: AppConfig
) -> list[Candidate]:
    if not config.bing_news.enabled:
        return []
    params = {
        "q": plain_query(query.keywords, query.location),
        "format": "rss",
        "cc": config.search.country,
        "setlang": "zh-hans" if query.language == "zh" else "en",
    }
    return await fetch_rss_candidates(
        client,
        config.bing_news.base_url,
        config,
        source="bing_news",
        location=query.location,
        params=params,
    )
