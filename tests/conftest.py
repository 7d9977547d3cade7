"""Shared fixtures for the power-team-radar test suite."""

from datetime import datetime, timedelta, timezone

import httpx
import pytest

from power_team_radar.config import AppConfig
from power_team_radar.feeds import to_iso
from power_team_radar.models import Candidate, SourceQuery
from power_team_radar.sources import SourceSpec

NOW = datetime(2026, 10, 19, 12, 0, 0, tzinfo=timezone.utc)

_ENV_VARS = (
    "EVENTBRITE_TOKEN",
    "FACEBOOK_PAGE_TOKEN",
    "FACEBOOK_PAGE_IDS",
    "LINKEDIN_TOKEN",
    "LINKEDIN_ORG_IDS",
    "LOG_LEVEL",
    "PORT",
    "POWER_TEAM_RADAR_CONFIG",
    "POWER_TEAM_RADAR_SUBSCRIPTIONS",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def config():
    return AppConfig()


def days_ago(days: float) -> str:
    return to_iso(NOW - timedelta(days=days))


def make_candidate(
    title="Clinic news",
    summary="",
    url="https://news.example.my/a",
    published_at=None,
    location="Kuala Lumpur",
    source="google_news",
):
    return Candidate(
        source=source,
        title=title,
        summary=summary,
        url=url,
        published_at=published_at if published_at is not None else days_ago(1),
        location=location,
    )


def make_query(location="Kuala Lumpur", language="en", industries=None, since=None):
    return SourceQuery(
        keywords="health screening OR wellness program",
        location=location,
        language=language,
        industries=industries or [],
        since=since or days_ago(7),
    )


def static_source(name, candidates, per_location=True):
    """A source that returns a fixed candidate list for every task."""

    async def fetch(client, query, config):
        return list(candidates)

    return SourceSpec(name, fetch, per_location, lambda c: True)


def failing_source(name, exc=None, per_location=True):
    async def fetch(client, query, config):
        raise exc or RuntimeError(f"{name} is down")

    return SourceSpec(name, fetch, per_location, lambda c: True)


def mock_client(handler):
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


RSS_SAMPLE = """<?xml version="1.0" encoding="UTF-8"?>
<rss version="2.0">
  <channel>
    <title>Health news</title>
    <item>
      <title>KL clinic announces grand opening &amp; free health screening</title>
      <link>https://news.example.my/kl-clinic</link>
      <pubDate>Sat, 17 Oct 2026 08:00:00 GMT</pubDate>
      <description><p>A <b>new clinic</b> in Bangsar &amp; Mont Kiara</p></description>
    </item>
    <item>
      <title><![CDATA[Corporate wellness program tender]]></title>
      <link>https://news.example.my/tender</link>
      <published>2026-10-18T10:30:00+08:00</published>
      <description><![CDATA[<div>Invitation to bid for <i>employee wellness</i></div>]]></description>
    </item>
    <item>
      <title>Undated dental clinic feature</title>
      <link>https://news.example.my/dental</link>
      <pubDate>not a date</pubDate>
    </item>
  </channel>
</rss>
"""
