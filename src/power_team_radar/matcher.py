from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import datetime, timezone

from dateutil import parser as date_parser

from .models import Candidate
from .taxonomy import HEALTH_KEYWORDS, SIGNAL_KEYWORDS

UNKNOWN_AGE_DAYS = 999
_SECONDS_PER_DAY = 86400


@dataclass(slots=True)
class Evaluation:
    candidate: Candidate
    score: float
    matched_keywords: list[str]
    signals: list[str]
    days_age: int
    location_match: bool


def evaluate(
    candidate: Candidate,
    locations: list[str],
    now: datetime | None = None,
) -> Evaluation:
    text = build_text(candidate)
    matched_keywords = match_keywords(text, HEALTH_KEYWORDS)
    signals = match_keywords(text, SIGNAL_KEYWORDS)
    days_age = days_since(candidate.published_at, now)
    location_match = location_matches(candidate.location, locations)
    score = score_item(
        location_match=location_match,
        signals_count=len(signals),
        days_age=days_age,
        keyword_hits=len(matched_keywords),
    )
    return Evaluation(
        candidate=candidate,
        score=score,
        matched_keywords=matched_keywords,
        signals=signals,
        days_age=days_age,
        location_match=location_match,
    )


def score_item(
    location_match: bool,
    signals_count: int,
    days_age: int,
    keyword_hits: int,
) -> float:
    keyword_score = min(1.0, keyword_hits / 3)
    location_score = 1.0 if location_match else 0.6
    signal_score = min(1.0, signals_count / 2)
    if days_age <= 7:
        recency_score = 1.0
    elif days_age <= 14:
        recency_score = 0.7
    else:
        recency_score = 0.4
    score = 0.5 * keyword_score + 0.2 * location_score + 0.2 * signal_score + 0.1 * recency_score
    return round(min(1.0, max(0.0, score)), 2)


def build_text(candidate: Candidate) -> str:
    return f"{candidate.title} {candidate.summary}".lower()


def match_keywords(text: str, keywords: tuple[str, ...] | list[str]) -> list[str]:
    """Keywords found in ``text``, in vocabulary order, each counted once."""
    lowered = text.lower()
    return [kw for kw in keywords if kw.lower() in lowered]


def days_since(published_at: str | None, now: datetime | None = None) -> int:
    moment = parse_timestamp(published_at)
    if moment is None:
        return UNKNOWN_AGE_DAYS
    now = now or datetime.now(timezone.utc)
    return math.floor((now - moment).total_seconds() / _SECONDS_PER_DAY)


def parse_timestamp(value: str | None) -> datetime | None:
    if not value:
        return None
    try:
        moment = date_parser.isoparse(value)
    except (ValueError, OverflowError):
        return None
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return moment


def location_matches(location: str | None, requested: list[str]) -> bool:
    if not requested:
        return True
    if not location:
        return False
    wanted = {loc.strip().lower() for loc in requested}
    return location.strip().lower() in wanted
