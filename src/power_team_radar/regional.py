from __future__ import annotations

import httpx

from .config import AppConfig
from .models import Candidate, SourceQuery
from .rss import fetch_rss_candidates


async def fetch_the_star(
    client: httpx.AsyncClient, query: SourceQuery, config: AppConfig
) -> list[Candidate]:
    if not config.regional.enabled:
        return []
    return await fetch_rss_candidates(
        client, config.regional.the_star_url, config, source="the_star", location=None
    )


async def fetch_malay_mail(
    client: httpx.AsyncClient, query: SourceQuery, config: AppConfig
) -> list[Candidate]:
    if not config.regional.enabled:
        return []
    return await fetch_rss_candidates(
        client, config.regional.malay_mail_url, config, source="malay_mail", location=None
    )
