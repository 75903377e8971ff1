"""Shared fixtures."""

import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent))
sys.path.insert(0, str(Path(__file__).parent))

from feed_samples import ATOM_FEED, ATOM_URL, HTML_PAGE, HTML_URL, RSS_FEED, RSS_URL


@pytest.fixture
def routes() -> dict:
    return {
        RSS_URL: RSS_FEED,
        ATOM_URL: ATOM_FEED,
        HTML_URL: (404, HTML_PAGE),
    }
