"""RSS / Atom via feedparser, JSON Feed via json."""

import io
import json

import feedparser

from ..core.dates import parse_iso_datetime
from .base import BaseParser, FeedParseError, ParsedFeed

# The body has already been decoded and is handed back as UTF-8, so the
# transport charset must win over any XML declaration.
XML_HEADERS = {"content-type": "application/xml; charset=utf-8"}

# bozo reasons that leave the document itself intact
TOLERATED_BOZO = (feedparser.CharacterEncodingOverride, feedparser.NonXMLContentType)

JSON_FEED_VERSION_PREFIX = "https://jsonfeed.org/version/"


def _looks_like_json(text: str) -> bool:
    return text.lstrip().startswith("{")


def _text(data: dict, key: str):
    value = data.get(key)
    return value if isinstance(value, str) and value else None


def _json_entry(item: dict) -> dict:
    """Map one JSON Feed item onto the keys feedparser uses for entries."""
    entry = {}
    if _text(item, "title"):
        entry["title"] = item["title"]
    if _text(item, "summary"):
        entry["summary"] = item["summary"]
    if _text(item, "url"):
        entry["links"] = [{"rel": "alternate", "href": item["url"]}]

    published = parse_iso_datetime(_text(item, "date_published"))
    if published is not None:
        entry["published_parsed"] = published.timetuple()
    return entry


class FeedparserParser(BaseParser):
    """
    Parser for RSS, Atom and JSON Feed.

    XML goes through feedparser, which recovers from broken markup and
    reports it through ``bozo``. A recovered document is still rejected so a
    damaged feed never contributes a partial entry list. feedparser has no
    JSON Feed support, so JSON bodies are decoded with the json module.
    """

    def parse(self, text: str) -> ParsedFeed:
        if not text or not text.strip():
            raise FeedParseError("empty body")

        if _looks_like_json(text):
            return self._parse_json(text)
        return self._parse_xml(text)

    def _parse_xml(self, text: str) -> ParsedFeed:
        # Wrapped in a stream so feedparser never treats the body as a URL or path
        result = feedparser.parse(io.BytesIO(text.encode("utf-8")), response_headers=XML_HEADERS)

        if result.get("bozo") and not isinstance(result.get("bozo_exception"), TOLERATED_BOZO):
            raise FeedParseError(f"malformed feed: {result.get('bozo_exception')!r}")

        version = result.get("version") or ""
        entries = list(result.get("entries") or [])
        if not version and not entries:
            raise FeedParseError("not a feed: no format version or entries")

        meta = result.get("feed") or {}
        return ParsedFeed(title=meta.get("title"), entries=entries, version=version)

    def _parse_json(self, text: str) -> ParsedFeed:
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise FeedParseError(f"malformed JSON: {e}") from e

        if not isinstance(data, dict):
            raise FeedParseError("not a feed: JSON document is not an object")

        version_url = data.get("version")
        if not isinstance(version_url, str) or not version_url.startswith(JSON_FEED_VERSION_PREFIX):
            raise FeedParseError(f"not a feed: unknown JSON Feed version {version_url!r}")

        items = data.get("items")
        if not isinstance(items, list) or not all(isinstance(item, dict) for item in items):
            raise FeedParseError("malformed JSON Feed: items must be a list of objects")

        version = "json" + version_url[len(JSON_FEED_VERSION_PREFIX):].replace(".", "")
        return ParsedFeed(
            title=_text(data, "title"),
            entries=[_json_entry(item) for item in items],
            version=version,
        )
