"""Best-effort RSS item extraction.

Feeds in the wild are frequently invalid XML (bare ampersands, unclosed
tags, stray control bytes), so items are pulled out with tag patterns rather
than an XML parser. A feed without ``<item>`` blocks is handed to
feedparser, which covers Atom ``<entry>`` documents.
"""

from __future__ import annotations

import calendar
import html
import logging
import re
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any

import feedparser
from dateutil import parser as date_parser

logger = logging.getLogger(__name__)

_ITEM_RE = re.compile(r"<item\b[^>]*>([\s\S]*?)</item>", re.IGNORECASE)
_TAG_RE = re.compile(r"<[^>]+>")
_CDATA_RE = re.compile(r"^<!\[CDATA\[([\s\S]*?)\]\]>$")
_TAG_PATTERNS: dict[str, re.Pattern[str]] = {}


@dataclass(slots=True)
class FeedItem:
    title: str
    link: str
    published_at: str | None
    description: str


def parse_feed(text: str | None) -> list[FeedItem]:
    if not text:
        return []

    blocks = _ITEM_RE.findall(text)
    if not blocks:
        return _parse_with_feedparser(text)

    items: list[FeedItem] = []
    for block in blocks:
        item = _parse_block(block)
        if item is not None:
            items.append(item)
    return items


def _parse_block(block: str) -> FeedItem | None:
    title = get_tag(block, "title")
    link = get_tag(block, "link")
    pub_date = get_tag(block, "pubDate") or get_tag(block, "published") or get_tag(block, "dc:date")
    description = get_tag(block, "description")
    if title is None and link is None:
        return None
    return FeedItem(
        title=decode_entities(title or ""),
        link=decode_entities(link or ""),
        published_at=normalize_date(pub_date),
        description=clean_description(description),
    )


def get_tag(block: str, tag: str) -> str | None:
    pattern = _TAG_PATTERNS.get(tag)
    if pattern is None:
        escaped = re.escape(tag)
        pattern = re.compile(rf"<{escaped}(?:\s[^>]*)?>([\s\S]*?)</{escaped}>", re.IGNORECASE)
        _TAG_PATTERNS[tag] = pattern
    match = pattern.search(block)
    if not match:
        return None
    return _unwrap_cdata(match.group(1).strip())


def strip_html(value: str) -> str:
    return _TAG_RE.sub("", _unwrap_cdata(value)).strip()


def decode_entities(value: str) -> str:
    return html.unescape(value)


def clean_description(value: str | None) -> str:
    # Decoding comes last so escaped angle brackets survive as text.
    return decode_entities(strip_html(value or ""))


def normalize_date(value: str | None) -> str | None:
    if not value:
        return None
    try:
        parsed = date_parser.parse(value)
    except (ValueError, OverflowError) as exc:
        logger.debug("Unparseable feed date %r: %s", value, exc)
        return None
    return to_iso(parsed)


def to_iso(moment: datetime) -> str:
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc).isoformat().replace("+00:00", "Z")


def _unwrap_cdata(value: str) -> str:
    match = _CDATA_RE.match(value)
    return match.group(1).strip() if match else value


def _parse_with_feedparser(text: str) -> list[FeedItem]:
    try:
        feed = feedparser.parse(text)
    except Exception as exc:  # pragma: no cover - feedparser rarely raises
        logger.debug("feedparser failed: %s", exc)
        return []

    items: list[FeedItem] = []
    for entry in feed.entries:
        title = _to_str(entry.get("title"))
        link = _to_str(entry.get("link"))
        if not title and not link:
            continue
        summary = _to_str(entry.get("summary") or entry.get("description")) or ""
        items.append(
            FeedItem(
                title=title or "",
                link=link or "",
                published_at=_entry_date(entry),
                description=clean_description(summary),
            )
        )
    return items


def _entry_date(entry: feedparser.FeedParserDict) -> str | None:
    parsed = entry.get("published_parsed") or entry.get("updated_parsed")
    if parsed:
        return to_iso(datetime.fromtimestamp(calendar.timegm(parsed), tz=timezone.utc))
    return normalize_date(_to_str(entry.get("published") or entry.get("updated")))


def _to_str(value: Any) -> str | None:
    if value is None:
        return None
    if isinstance(value, str):
        return value.strip() or None
    return str(value).strip() or None
