"""Console and JSON output."""

from datetime import datetime
from typing import Optional

from ..core import format_datetime, save_json
from ..models import NormalizedEntry

UNAVAILABLE_MESSAGE = "Could not fetch any news. Make sure you have a valid settings.json file."


def to_console(entries: Optional[list[NormalizedEntry]], stats: dict | None = None) -> None:
    """
    Print entries to console, newest first.

    Args:
        entries: Aggregated entries, or None when nothing could be fetched
        stats: Optional stats dict with counts
    """
    now = datetime.now().strftime("%Y-%m-%d %H:%M")

    print()
    print("=" * 66)
    print(f"  Gluon News | {now}")
    print("=" * 66)
    print()

    if entries is None:
        print(UNAVAILABLE_MESSAGE)
        print()
        return

    for entry in entries:
        print("-" * 66)
        print(entry.title)
        print(f"{entry.source_title} | {format_datetime(entry.published)}")
        print()
        print(entry.summary)
        print()
        print(f"Link: {entry.link}")
        print("-" * 66)
        print()

    if stats:
        print("=" * 66)
        print(f" {stats.get('fetched', 0)}/{stats.get('requested', 0)} feeds fetched | "
              f"{stats.get('parsed', 0)} parsed | "
              f"{len(entries)} entries")
        print("=" * 66)


def to_json(entries: Optional[list[NormalizedEntry]], path: str) -> None:
    """
    Export entries to a JSON file.

    None is written as JSON null so consumers can tell "unavailable" apart
    from a file that was never written.
    """
    data = None if entries is None else [entry.model_dump(mode="json") for entry in entries]
    if not save_json(data, path):
        raise OSError(f"Could not write {path}")
