from __future__ import annotations

import re
from datetime import datetime, timedelta, timezone

from .feeds import to_iso
from .taxonomy import HEALTH_KEYWORDS

QUERY_TERM_LIMIT = 6


def keyword_terms(industries: list[str], limit: int = QUERY_TERM_LIMIT) -> list[str]:
    terms = list(dict.fromkeys([*HEALTH_KEYWORDS, *(i.strip() for i in industries if i.strip())]))
    return terms[:limit]


def keyword_clause(industries: list[str], limit: int = QUERY_TERM_LIMIT) -> str:
    return " OR ".join(keyword_terms(industries, limit))


def structured_query(keywords: str, location: str | None) -> str:
    if not location:
        return f"({keywords})"
    return f"({keywords}) AND ({location})"


def plain_query(keywords: str, location: str | None) -> str:
    return f"{keywords} {location}" if location else keywords


def since_cutoff(days: int, now: datetime | None = None) -> str:
    now = now or datetime.now(timezone.utc)
    try:
        cutoff = now - timedelta(days=days)
    except OverflowError:
        cutoff = datetime.min.replace(tzinfo=timezone.utc)
    return to_iso(cutoff)


def slugify(value: str) -> str:
    return re.sub(r"[^a-z0-9]+", "-", value.lower()).strip("-")
