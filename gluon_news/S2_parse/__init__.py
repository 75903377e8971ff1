"""Step 2: Parse feed bodies and normalize their entries."""

from .base import BaseParser, FeedParseError, ParsedFeed
from .feedparser_parser import FeedparserParser
from .normalize import (
    ParseStats,
    feed_title,
    get_parser,
    normalize_all,
    normalize_entry,
    normalize_feed,
    sanitize_summary,
)

__all__ = [
    "BaseParser",
    "FeedParseError",
    "FeedparserParser",
    "ParsedFeed",
    "ParseStats",
    "feed_title",
    "get_parser",
    "normalize_all",
    "normalize_entry",
    "normalize_feed",
    "sanitize_summary",
]
