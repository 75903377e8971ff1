"""Step 4: Output delivery."""

from .console import UNAVAILABLE_MESSAGE, to_console, to_json
from .html import LOADING_MESSAGE, to_html, to_html_file

__all__ = [
    "to_console",
    "to_json",
    "to_html",
    "to_html_file",
    "UNAVAILABLE_MESSAGE",
    "LOADING_MESSAGE",
]
