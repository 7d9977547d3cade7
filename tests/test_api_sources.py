"""Tests for credential-gated JSON API adapters."""

from datetime import timezone

import httpx
import pytest

from power_team_radar.eventbrite import fetch_eventbrite
from power_team_radar.facebook import fetch_facebook, headline
from power_team_radar.linkedin import fetch_linkedin

from conftest import NOW, days_ago, make_query, mock_client


def _unreachable(request):
    raise AssertionError(f"unexpected request to {request.url}")


class TestEventbrite:
    @pytest.mark.asyncio
    async def test_no_token_is_noop(self, config):
        async with mock_client(_unreachable) as client:
            assert await fetch_eventbrite(client, make_query(), config) == []

    @pytest.mark.asyncio
    async def test_maps_events(self, config):
        config.eventbrite.token = "secret"
        seen = []
        payload = {
            "events": [
                {
                    "name": {"text": "Corporate Wellness Expo"},
                    "description": {"text": "<p>Health screening booths</p>"},
                    "url": "https://www.eventbrite.com/e/1",
                    "published": "2026-10-17T01:00:00Z",
                },
                {"name": {"text": "No url or date"}},
                "garbage",
            ]
        }

        def handler(request):
            seen.append(request)
            return httpx.Response(200, json=payload)

        async with mock_client(handler) as client:
            found = await fetch_eventbrite(client, make_query(location="Penang", since=days_ago(7)), config)

        assert len(found) == 1
        assert found[0].title == "Corporate Wellness Expo"
        assert found[0].summary == "Health screening booths"
        assert found[0].published_at == "2026-10-17T01:00:00Z"
        assert found[0].location == "Penang"
        request = seen[0]
        assert request.headers["Authorization"] == "Bearer secret"
        assert request.url.params["location.address"] == "Penang"
        assert request.url.params["start_date.range_start"] == "2026-10-12T12:00:00Z"


class TestFacebook:
    @pytest.mark.asyncio
    async def test_missing_pages_is_noop(self, config):
        config.facebook.page_token = "token"

        async with mock_client(_unreachable) as client:
            assert await fetch_facebook(client, make_query(), config) == []

    @pytest.mark.asyncio
    async def test_maps_posts_and_passes_since(self, config):
        config.facebook.page_token = "token"
        config.facebook.page_ids = ["111", "222"]
        seen = []

        def handler(request):
            seen.append(request)
            if "/222/" in request.url.path:
                return httpx.Response(500)
            return httpx.Response(
                200,
                json={
                    "data": [
                        {
                            "message": "Grand opening of our new branch!\nJoin us for a health talk.",
                            "permalink_url": "https://facebook.com/111/posts/1",
                            "created_time": "2026-10-18T03:00:00+0000",
                        },
                        {"message": "", "permalink_url": "https://facebook.com/111/posts/2"},
                    ]
                },
            )

        async with mock_client(handler) as client:
            found = await fetch_facebook(client, make_query(since=days_ago(7)), config)

        assert len(seen) == 2
        assert len(found) == 1
        assert found[0].title == "Grand opening of our new branch!"
        assert found[0].location is None
        assert found[0].published_at == "2026-10-18T03:00:00Z"
        since = int(NOW.astimezone(timezone.utc).timestamp()) - 7 * 86400
        assert seen[0].url.params["since"] == str(since)

    def test_headline_truncates(self):
        assert len(headline("x" * 500)) == 120
        assert headline("short\nsecond line") == "short"


class TestLinkedin:
    @pytest.mark.asyncio
    async def test_no_token_is_noop(self, config):
        config.linkedin.organization_ids = ["42"]

        async with mock_client(_unreachable) as client:
            assert await fetch_linkedin(client, make_query(), config) == []

    @pytest.mark.asyncio
    async def test_maps_posts(self, config):
        config.linkedin.token = "li"
        config.linkedin.organization_ids = ["42"]
        seen = []

        def handler(request):
            seen.append(request)
            return httpx.Response(
                200,
                json={
                    "elements": [
                        {
                            "id": "urn:li:share:7",
                            "commentary": "We are hiring a corporate wellness partner (RFP)",
                            "publishedAt": 1792029600000,
                        }
                    ]
                },
            )

        async with mock_client(handler) as client:
            found = await fetch_linkedin(client, make_query(), config)

        assert found[0].url == "https://www.linkedin.com/feed/update/urn:li:share:7"
        assert found[0].published_at == "2026-10-15T02:00:00Z"
        assert seen[0].url.params["author"] == "urn:li:organization:42"
        assert seen[0].headers["LinkedIn-Version"] == "202405"
