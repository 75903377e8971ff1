"""HTML rendering of a cycle result."""

from html import escape
from pathlib import Path
from typing import Optional

from ..core import format_datetime
from ..models import NormalizedEntry
from .console import UNAVAILABLE_MESSAGE

LOADING_MESSAGE = "Loading..."


def _get_css(maximized: bool = True) -> str:
    width = "100%" if maximized else "1000px"
    return f"""
    body {{ font-family: sans-serif; margin: 0; background: #f4f4f4; color: #222; }}
    .container {{ max-width: {width}; margin: 0 auto; padding: 16px; box-sizing: border-box; }}
    ul.entries {{ list-style: none; padding: 0; margin: 0; }}
    .card {{ background: #fff; border-radius: 6px; padding: 12px 16px; margin-bottom: 12px; }}
    .card a.title {{ font-size: 1.1em; font-weight: bold; text-decoration: none; color: #1a0dab; }}
    .card .summary {{ margin: 8px 0; overflow-wrap: anywhere; }}
    .card .source, .card .published {{ font-size: 0.85em; color: #666; }}
    .stats {{ font-size: 0.85em; color: #666; margin-bottom: 12px; }}
    .message {{ padding: 24px; text-align: center; }}
    """


def _render_card(entry: NormalizedEntry) -> str:
    """Render one entry. The summary is inserted as raw markup."""
    return f"""
      <li class="card">
        <div><a class="title" href="{escape(entry.link)}" target="_blank" rel="noopener">{escape(entry.title)}</a></div>
        <hr>
        <div class="summary">{entry.summary}</div>
        <hr>
        <div class="source">{escape(entry.source_title)}</div>
        <div class="published">{escape(format_datetime(entry.published))}</div>
      </li>"""


def _render_stats(stats: dict) -> str:
    return (
        f'<div class="stats">{stats.get("fetched", 0)}/{stats.get("requested", 0)} feeds fetched, '
        f'{stats.get("parsed", 0)} parsed</div>'
    )


def _render_refresh(refresh_url: str) -> str:
    return (
        f'<li><form method="post" action="{escape(refresh_url)}">'
        f'<button type="submit">Refresh</button></form></li>'
    )


def to_html(
    entries: Optional[list[NormalizedEntry]],
    stats: dict | None = None,
    *,
    loading: bool = False,
    refresh_url: Optional[str] = None,
    maximized: bool = True,
) -> str:
    """
    Render a full HTML page.

    Args:
        entries: Aggregated entries, or None when nothing could be fetched
        stats: Optional cycle counts shown above the list
        loading: Render only the loading indicator
        refresh_url: Form target of the Refresh button; omitted when None
        maximized: Full-width layout instead of a fixed-width column

    Returns:
        HTML document
    """
    reload_meta = '\n  <meta http-equiv="refresh" content="2">' if loading else ""

    if loading:
        body = f'<div class="message">{LOADING_MESSAGE}</div>'
    elif entries is None:
        body = f'<ul class="entries"><li><div class="message">{escape(UNAVAILABLE_MESSAGE)}</div></li></ul>'
    else:
        parts = []
        if refresh_url:
            parts.append(_render_refresh(refresh_url))
        parts.extend(_render_card(entry) for entry in entries)
        stats_html = _render_stats(stats) if stats else ""
        body = f'{stats_html}<ul class="entries">{"".join(parts)}\n    </ul>'

    return f"""<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="utf-8">{reload_meta}
  <title>Gluon News</title>
  <style>{_get_css(maximized)}</style>
</head>
<body>
  <div class="container">
    {body}
  </div>
</body>
</html>
"""


def to_html_file(
    entries: Optional[list[NormalizedEntry]],
    path: str,
    stats: dict | None = None,
    *,
    maximized: bool = True,
) -> None:
    """Write the HTML page to a file, creating parent directories."""
    content = to_html(entries, stats, maximized=maximized)
    out = Path(path)
    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_text(content, encoding="utf-8")
