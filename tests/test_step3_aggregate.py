#!/usr/bin/env python
"""Step 3: Aggregate - unit tests"""

from datetime import datetime, timezone

from gluon_news.core import EPOCH
from gluon_news.models import NormalizedEntry
from gluon_news.S3_aggregate import aggregate, sort_entries


def make_entry(title: str, day: int | None = None, source: str = "Source") -> NormalizedEntry:
    published = datetime(2024, 1, day, tzinfo=timezone.utc) if day else EPOCH
    return NormalizedEntry(source_title=source, title=title, published=published)


class TestSortEntries:
    """Newest-first ordering"""

    def test_newest_first(self):
        """Entries are ordered by descending publication time"""
        entries = [make_entry("a", 1), make_entry("c", 3), make_entry("b", 2)]
        assert [e.title for e in sort_entries(entries)] == ["c", "b", "a"]

    def test_undated_sink_to_bottom(self):
        """Entries without a publication time come last"""
        entries = [make_entry("undated"), make_entry("dated", 2)]
        assert [e.title for e in sort_entries(entries)] == ["dated", "undated"]

    def test_ties_keep_input_order(self):
        """Equal timestamps preserve their relative order"""
        entries = [
            make_entry("first", 2, source="A"),
            make_entry("newest", 5),
            make_entry("second", 2, source="B"),
            make_entry("third", 2, source="A"),
        ]
        result = sort_entries(entries)
        assert [e.title for e in result] == ["newest", "first", "second", "third"]

    def test_undated_ties_keep_input_order(self):
        """Several undated entries never swap"""
        entries = [make_entry(f"n{i}") for i in range(5)]
        assert [e.title for e in sort_entries(entries)] == ["n0", "n1", "n2", "n3", "n4"]

    def test_input_not_modified(self):
        """A new list is returned"""
        entries = [make_entry("a", 1), make_entry("b", 2)]
        sort_entries(entries)
        assert [e.title for e in entries] == ["a", "b"]


class TestAggregate:
    """Merging a cycle"""

    def test_empty_is_unavailable(self):
        """No entries means nothing to show"""
        assert aggregate([]) is None

    def test_returns_sorted_entries(self):
        """Non-empty input comes back sorted and complete"""
        entries = [make_entry("a", 1), make_entry("b", 2)]
        result = aggregate(entries)

        assert result is not None
        assert len(result) == 2
        assert result[0].title == "b"

    def test_single_undated_entry_is_available(self):
        """An entry without a date still counts"""
        result = aggregate([make_entry("only")])
        assert result is not None
        assert result[0].published == EPOCH
