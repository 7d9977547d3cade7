from __future__ import annotations

import httpx

from .config import AppConfig
from .models import Candidate, SourceQuery
from .query import structured_query
from .rss import fetch_rss_candidates


async def fetch_google_news(
    client: httpx.AsyncClient, query: SourceQuery, config: AppConfig
) -> list[Candidate]:
    if not config.google_news.enabled:
        return []
    params = build_params(query, config.search.country)
    return await fetch_rss_candidates(
        client,
        config.google_news.base_url,
        config,
        source="google_news",
        location=query.location,
        params=params,
    )


def build_params(query: SourceQuery, country: str) -> dict[str, str]:
    lang = "zh" if query.language == "zh" else "en"
    return {
        "q": structured_query(query.keywords, query.location),
        "hl": f"{lang}-{country}",
        "gl": country,
        "ceid": f"{country}:{lang}",
    }
