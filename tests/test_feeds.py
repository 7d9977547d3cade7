"""Tests for best-effort feed parsing."""

from power_team_radar.feeds import (
    clean_description,
    decode_entities,
    get_tag,
    normalize_date,
    parse_feed,
    strip_html,
)

from conftest import RSS_SAMPLE


class TestParseFeed:
    def test_extracts_items(self):
        items = parse_feed(RSS_SAMPLE)

        assert len(items) == 3
        first = items[0]
        assert first.title == "KL clinic announces grand opening & free health screening"
        assert first.link == "https://news.example.my/kl-clinic"
        assert first.published_at == "2026-10-17T08:00:00Z"
        assert first.description == "A new clinic in Bangsar & Mont Kiara"

    def test_published_fallback_and_cdata(self):
        item = parse_feed(RSS_SAMPLE)[1]

        assert item.title == "Corporate wellness program tender"
        assert item.published_at == "2026-10-18T02:30:00Z"
        assert item.description == "Invitation to bid for employee wellness"

    def test_unparseable_date_becomes_none(self):
        item = parse_feed(RSS_SAMPLE)[2]

        assert item.published_at is None
        assert item.description == ""

    def test_empty_and_garbage_input(self):
        assert parse_feed("") == []
        assert parse_feed(None) == []
        assert parse_feed("<<<not xml at all &&&") == []

    def test_truncated_feed_keeps_complete_items(self):
        truncated = RSS_SAMPLE.split("<item>\n      <title>Undated")[0] + "<item><title>Cut off"

        items = parse_feed(truncated)

        assert [item.link for item in items] == [
            "https://news.example.my/kl-clinic",
            "https://news.example.my/tender",
        ]

    def test_item_tags_are_case_insensitive(self):
        text = "<ITEM><TITLE>Upper</TITLE><LINK>https://x.example/u</LINK></ITEM>"

        items = parse_feed(text)

        assert items[0].title == "Upper"
        assert items[0].link == "https://x.example/u"

    def test_atom_feed_uses_feedparser(self):
        atom = """<?xml version="1.0" encoding="utf-8"?>
<feed xmlns="http://www.w3.org/2005/Atom">
  <title>Events</title>
  <entry>
    <title>Wellness fair in Penang</title>
    <link href="https://events.example.my/fair"/>
    <id>urn:uuid:1</id>
    <updated>2026-10-16T09:00:00Z</updated>
    <summary>Health talk and blood test booths</summary>
  </entry>
</feed>"""

        items = parse_feed(atom)

        assert len(items) == 1
        assert items[0].title == "Wellness fair in Penang"
        assert items[0].link == "https://events.example.my/fair"
        assert items[0].published_at == "2026-10-16T09:00:00Z"
        assert items[0].description == "Health talk and blood test booths"


class TestHelpers:
    def test_get_tag_first_match_only(self):
        block = "<title>One</title><title>Two</title>"

        assert get_tag(block, "title") == "One"
        assert get_tag(block, "link") is None

    def test_strip_html(self):
        assert strip_html("<p>Hello <b>there</b></p>") == "Hello there"

    def test_decode_entities(self):
        assert decode_entities("&amp; &lt; &gt; &quot; &#39;") == "& < > \" '"

    def test_clean_description_strips_then_decodes(self):
        assert clean_description("<p>Tom &amp; Jerry <i>clinic</i></p>") == "Tom & Jerry clinic"

    def test_clean_description_keeps_escaped_comparisons(self):
        assert clean_description("<p>a &lt; b and c &gt; d</p>") == "a < b and c > d"
        assert clean_description("BMI &lt; 25 and age &gt; 40 qualify") == (
            "BMI < 25 and age > 40 qualify"
        )

    def test_parsed_description_keeps_escaped_comparisons(self):
        feed = (
            "<rss><channel><item><title>Screening</title>"
            "<link>https://news.example.my/bmi</link>"
            "<description>BMI &lt; 25 and age &gt; 40 qualify</description>"
            "</item></channel></rss>"
        )

        assert parse_feed(feed)[0].description == "BMI < 25 and age > 40 qualify"

    def test_normalize_date_naive_is_utc(self):
        assert normalize_date("2026-10-18 09:15:00") == "2026-10-18T09:15:00Z"
        assert normalize_date(None) is None
        assert normalize_date("") is None
