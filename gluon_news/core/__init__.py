"""Core utilities for Gluon News."""

from .dates import (
    DATETIME_FORMAT,
    EPOCH,
    format_datetime,
    from_struct_time,
    now_utc,
    parse_iso_datetime,
)
from .io import load_json, save_json

__all__ = [
    # I/O
    "load_json",
    "save_json",
    # Dates
    "EPOCH",
    "DATETIME_FORMAT",
    "format_datetime",
    "from_struct_time",
    "now_utc",
    "parse_iso_datetime",
]
