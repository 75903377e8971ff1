"""Base parser class."""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Optional


class FeedParseError(ValueError):
    """Raised when a body is not a usable syndication document."""


@dataclass
class ParsedFeed:
    """Format-independent view of one parsed document."""

    title: Optional[str] = None
    entries: list = field(default_factory=list)
    version: str = ""


class BaseParser(ABC):
    """Turns one response body into a ParsedFeed or raises FeedParseError."""

    @abstractmethod
    def parse(self, text: str) -> ParsedFeed:
        """Parse a decoded body."""
        pass
