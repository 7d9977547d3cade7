from __future__ import annotations

import hashlib
import logging
from dataclasses import dataclass
from datetime import datetime, timezone

import httpx

from .config import AppConfig
from .fallback import fallback_candidates
from .fetcher import build_client
from .matcher import Evaluation, days_since, evaluate, parse_timestamp
from .models import (
    Candidate,
    ScoredOpportunity,
    SearchRequest,
    SourceQuery,
    SourceReport,
    SuggestedMember,
)
from .query import keyword_clause, since_cutoff
from .sources import SourceSpec, active_sources, collect_candidates
from .taxonomy import DEFAULT_INDUSTRY, opening_line, roles_for

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class SearchResult:
    items: list[ScoredOpportunity]
    reports: list[SourceReport]
    used_fallback: bool = False

    @property
    def errors(self) -> list[str]:
        return [f"{report.label}: {report.error}" for report in self.reports if report.error]


async def search_opportunities(
    request: SearchRequest,
    config: AppConfig,
    client: httpx.AsyncClient | None = None,
    sources: list[SourceSpec] | None = None,
    now: datetime | None = None,
) -> SearchResult:
    now = now or datetime.now(timezone.utc)
    home_region = config.search.home_region
    locations = request.locations or [home_region]
    keywords = keyword_clause(request.industries, config.search.query_terms)
    since = since_cutoff(request.time_range_days, now)

    def query_for(location: str | None) -> SourceQuery:
        return SourceQuery(
            keywords=keywords,
            location=location,
            language=request.language,
            industries=list(request.industries),
            since=since,
        )

    if sources is None:
        sources = active_sources(config)

    if client is None:
        async with build_client(config) as owned:
            candidates, reports = await collect_candidates(
                owned, config, sources, locations, query_for
            )
    else:
        candidates, reports = await collect_candidates(
            client, config, sources, locations, query_for
        )

    items = rank_candidates(candidates, request, home_region, now)
    used_fallback = False
    if not items and config.search.fallback_enabled:
        items = enrich(fallback_candidates(request.limit, now), request, home_region, now)
        used_fallback = bool(items)

    logger.info(
        "Search complete: candidates=%d items=%d fallback=%s failed_sources=%d",
        len(candidates),
        len(items),
        used_fallback,
        sum(1 for report in reports if report.error),
    )
    return SearchResult(items=items, reports=reports, used_fallback=used_fallback)


def rank_candidates(
    candidates: list[Candidate],
    request: SearchRequest,
    home_region: str,
    now: datetime | None = None,
) -> list[ScoredOpportunity]:
    now = now or datetime.now(timezone.utc)
    unique = dedupe(sorted(candidates, key=_merge_key))
    recent = filter_recent(unique, request.time_range_days, now)
    return enrich(recent, request, home_region, now)


def dedupe(candidates: list[Candidate]) -> list[Candidate]:
    seen: dict[str, Candidate] = {}
    for candidate in candidates:
        seen.setdefault(candidate.dedup_key, candidate)
    return list(seen.values())


def filter_recent(candidates: list[Candidate], days: int, now: datetime) -> list[Candidate]:
    # Undated items count as infinitely old and never pass.
    return [
        candidate
        for candidate in candidates
        if candidate.published_at and days_since(candidate.published_at, now) <= days
    ]


def enrich(
    candidates: list[Candidate],
    request: SearchRequest,
    home_region: str,
    now: datetime,
) -> list[ScoredOpportunity]:
    evaluations = [evaluate(candidate, request.locations, now) for candidate in candidates]
    evaluations.sort(key=_rank_key)
    selected = evaluations[: max(0, request.limit)]

    industries = list(request.industries) or [DEFAULT_INDUSTRY]
    members = [
        SuggestedMember(name=role, specialty=role, chapter_role=role)
        for role in roles_for(industries[0])[:2]
    ]
    line = opening_line(request.language)

    items: list[ScoredOpportunity] = []
    for evaluation, item_id in zip(selected, assign_ids(selected), strict=True):
        candidate = evaluation.candidate
        items.append(
            ScoredOpportunity(
                id=item_id,
                source=candidate.source,
                title=candidate.title,
                summary=candidate.summary,
                url=candidate.url,
                published_at=candidate.published_at,
                location=candidate.location or home_region,
                score=evaluation.score,
                matched_industries=list(industries),
                signals=list(evaluation.signals),
                suggested_members=list(members),
                opening_line=line,
            )
        )
    return items


def assign_ids(evaluations: list[Evaluation]) -> list[str]:
    ids: list[str] = []
    used: set[str] = set()
    for evaluation in evaluations:
        candidate = evaluation.candidate
        digest = hashlib.sha1(
            f"{candidate.url or ''}|{candidate.title}".encode("utf-8")
        ).hexdigest()[:12]
        base = f"opp_{digest}"
        item_id = base
        suffix = 1
        while item_id in used:
            item_id = f"{base}_{suffix}"
            suffix += 1
        used.add(item_id)
        ids.append(item_id)
    return ids


def _merge_key(candidate: Candidate) -> tuple[str, str, str, str]:
    return (
        candidate.source,
        candidate.url or "",
        candidate.title,
        candidate.published_at or "",
    )


def _rank_key(evaluation: Evaluation) -> tuple[float, float]:
    moment = parse_timestamp(evaluation.candidate.published_at)
    timestamp = moment.timestamp() if moment else float("-inf")
    return (-evaluation.score, -timestamp)
