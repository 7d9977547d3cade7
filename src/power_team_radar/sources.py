from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Awaitable, Callable
from dataclasses import dataclass

import httpx

from . import eventbrite, facebook, linkedin
from .bing_news import fetch_bing_news
from .config import AppConfig
from .events import fetch_allevents, fetch_community_events
from .google_news import fetch_google_news
from .models import Candidate, SourceQuery, SourceReport
from .regional import fetch_malay_mail, fetch_the_star

logger = logging.getLogger(__name__)

Fetch = Callable[[httpx.AsyncClient, SourceQuery, AppConfig], Awaitable[list[Candidate]]]


@dataclass(slots=True, frozen=True)
class SourceSpec:
    name: str
    fetch: Fetch
    per_location: bool
    available: Callable[[AppConfig], bool]


SOURCES: tuple[SourceSpec, ...] = (
    SourceSpec("google_news", fetch_google_news, True, lambda c: c.google_news.enabled),
    SourceSpec("bing_news", fetch_bing_news, True, lambda c: c.bing_news.enabled),
    SourceSpec("allevents", fetch_allevents, True, lambda c: c.allevents.enabled),
    SourceSpec("the_star", fetch_the_star, False, lambda c: c.regional.enabled),
    SourceSpec("malay_mail", fetch_malay_mail, False, lambda c: c.regional.enabled),
    SourceSpec(
        "community_events", fetch_community_events, True, lambda c: c.community_events.enabled
    ),
    SourceSpec("eventbrite", eventbrite.fetch_eventbrite, True, eventbrite.is_configured),
    SourceSpec("facebook", facebook.fetch_facebook, False, facebook.is_configured),
    SourceSpec("linkedin", linkedin.fetch_linkedin, False, linkedin.is_configured),
)


def active_sources(config: AppConfig) -> list[SourceSpec]:
    return [spec for spec in SOURCES if spec.available(config)]


@dataclass(slots=True)
class _Task:
    spec: SourceSpec
    query: SourceQuery


def plan_tasks(
    sources: list[SourceSpec],
    locations: list[str],
    query_for: Callable[[str | None], SourceQuery],
) -> list[_Task]:
    tasks: list[_Task] = []
    for spec in sources:
        if spec.per_location:
            tasks.extend(_Task(spec, query_for(location)) for location in locations)
        else:
            tasks.append(_Task(spec, query_for(None)))
    return tasks


async def collect_candidates(
    client: httpx.AsyncClient,
    config: AppConfig,
    sources: list[SourceSpec],
    locations: list[str],
    query_for: Callable[[str | None], SourceQuery],
) -> tuple[list[Candidate], list[SourceReport]]:
    tasks = plan_tasks(sources, locations, query_for)
    results = await asyncio.gather(*(_run(client, config, task) for task in tasks))

    candidates: list[Candidate] = []
    reports: list[SourceReport] = []
    for found, report in results:
        candidates.extend(found)
        reports.append(report)
    return candidates, reports


async def _run(
    client: httpx.AsyncClient, config: AppConfig, task: _Task
) -> tuple[list[Candidate], SourceReport]:
    started = time.perf_counter()
    location = task.query.location
    try:
        found = await task.spec.fetch(client, task.query, config)
    except Exception as exc:
        elapsed = int((time.perf_counter() - started) * 1000)
        logger.warning("Source %s failed for %s: %s", task.spec.name, location or "-", exc)
        return [], SourceReport(task.spec.name, location, 0, error=str(exc), elapsed_ms=elapsed)

    elapsed = int((time.perf_counter() - started) * 1000)
    logger.debug("Source %s returned %d candidates in %dms", task.spec.name, len(found), elapsed)
    return found, SourceReport(task.spec.name, location, len(found), elapsed_ms=elapsed)
