"""Gluon News - concurrent feed reader."""

__version__ = "0.1.0"
