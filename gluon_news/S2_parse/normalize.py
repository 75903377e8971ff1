"""Flatten parsed feeds into NormalizedEntry values."""

import logging
from dataclasses import dataclass
from typing import Optional

from pydantic import ValidationError

from ..core.dates import EPOCH, from_struct_time
from ..models import MAX_SOURCE_TITLE_LENGTH, NOT_AVAILABLE, FetchedBody, NormalizedEntry
from .base import BaseParser, FeedParseError, ParsedFeed
from .feedparser_parser import FeedparserParser

logger = logging.getLogger(__name__)


@dataclass
class ParseStats:
    """Parsing statistics for one batch of bodies."""
    total: int
    parsed: int
    failed: int
    entries: int


def get_parser() -> BaseParser:
    """Default parser for all sources."""
    return FeedparserParser()


def sanitize_summary(text: str) -> str:
    """Remove every literal "href" substring (not a structural HTML sanitizer)."""
    return text.replace("href", "")


def feed_title(feed: ParsedFeed) -> str:
    """Display name of a feed, at most MAX_SOURCE_TITLE_LENGTH characters."""
    title = feed.title or NOT_AVAILABLE
    return title[:MAX_SOURCE_TITLE_LENGTH]


def _first_link(entry: dict) -> str:
    # enclosures (media attachments) are not links to the entry
    for link in entry.get("links") or []:
        if link.get("rel") == "enclosure":
            continue
        href = link.get("href")
        if href:
            return href
        break
    # feedparser copies an id/guid into "link" when no link element exists
    if entry.get("guidislink"):
        return NOT_AVAILABLE
    return entry.get("link") or NOT_AVAILABLE


def _summary(entry: dict) -> Optional[str]:
    summary = entry.get("summary")
    if not summary:
        return None
    # feedparser fills "summary" from <content> / content:encoded when the entry has
    # no summary of its own; only a real summary element carries summary_detail
    if "summary_detail" not in entry:
        for content in entry.get("content") or []:
            if content.get("value") == summary:
                return None
    return summary


def normalize_entry(entry: dict, source_title: str) -> NormalizedEntry:
    """
    Build one NormalizedEntry from a raw feed entry.

    Args:
        entry: feedparser entry (any mapping with the same keys works)
        source_title: Already-truncated title of the owning feed

    Returns:
        NormalizedEntry with "N/A" / epoch substituted for missing fields
    """
    summary = _summary(entry)

    return NormalizedEntry(
        source_title=source_title,
        title=entry.get("title") or NOT_AVAILABLE,
        summary=sanitize_summary(summary) if summary else NOT_AVAILABLE,
        link=_first_link(entry),
        published=from_struct_time(entry.get("published_parsed"), EPOCH),
    )


def normalize_feed(text: str, parser: Optional[BaseParser] = None) -> list[NormalizedEntry]:
    """
    Parse one body and normalize all of its entries.

    Raises:
        FeedParseError: body is not a usable feed, or one of its entries
            could not be normalized (the whole feed is rejected)
    """
    parser = parser or get_parser()
    feed = parser.parse(text)
    source_title = feed_title(feed)
    try:
        return [normalize_entry(entry, source_title) for entry in feed.entries]
    except ValidationError as e:
        raise FeedParseError(f"malformed entry: {e.error_count()} error(s)") from e


def normalize_all(
    bodies: list[FetchedBody],
    parser: Optional[BaseParser] = None,
) -> tuple[list[NormalizedEntry], ParseStats]:
    """
    Normalize every body, dropping the ones that fail to parse.

    A feed either contributes all of its entries or none of them.

    Returns:
        (entries of all usable feeds in body order, stats)
    """
    parser = parser or get_parser()
    entries: list[NormalizedEntry] = []
    failed = 0

    for body in bodies:
        try:
            feed_entries = normalize_feed(body.text, parser)
        except FeedParseError as e:
            failed += 1
            logger.warning(f"[{body.url}] Parse error (HTTP {body.status_code}): {e}")
            continue
        logger.debug(f"[{body.url}] {len(feed_entries)} entries")
        entries.extend(feed_entries)

    stats = ParseStats(
        total=len(bodies),
        parsed=len(bodies) - failed,
        failed=failed,
        entries=len(entries),
    )
    logger.info(f"Parsed {stats.parsed}/{stats.total} feeds, {stats.entries} entries")
    return entries, stats
