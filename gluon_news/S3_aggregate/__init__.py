"""Step 3: Merge entries from all feeds into one newest-first list."""

import logging
from typing import Optional

from ..models import NormalizedEntry

__all__ = ["aggregate", "sort_entries"]

logger = logging.getLogger(__name__)


def sort_entries(entries: list[NormalizedEntry]) -> list[NormalizedEntry]:
    """
    Sort by publication time, newest first.

    sorted() is stable and reverse=True keeps equal keys in input order, so
    entries sharing a timestamp (e.g. several without one) never swap.
    """
    return sorted(entries, key=lambda entry: entry.published, reverse=True)


def aggregate(entries: list[NormalizedEntry]) -> Optional[list[NormalizedEntry]]:
    """
    Merge all normalized entries of a cycle.

    Returns:
        Non-empty newest-first list, or None when there is nothing to show
    """
    if not entries:
        logger.info("No entries to aggregate")
        return None

    merged = sort_entries(entries)
    logger.info(f"Aggregated {len(merged)} entries")
    return merged
