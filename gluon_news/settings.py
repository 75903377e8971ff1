"""Settings loading: feed list and display preferences."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional, Union

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field, ValidationError

from .core import load_json

load_dotenv()

logger = logging.getLogger(__name__)

SETTINGS_PATH = Path("settings.json")
SETTINGS_ENV = "GLUON_NEWS_SETTINGS"
YAML_SUFFIXES = (".yaml", ".yml")

DEFAULT_FEEDS = ["https://github.com/vascocosta/gluon_news/commits.atom"]
DEFAULT_USER_AGENT = "gluon_news"
DEFAULT_TIMEOUT_S = 30.0


class Settings(BaseModel):
    """Runtime configuration handed to the pipeline at startup."""

    feeds: list[str] = Field(
        default_factory=lambda: list(DEFAULT_FEEDS),
        description="Feed URLs fetched on every cycle, in order",
    )
    maximized: bool = Field(
        default=True,
        description="Display preference passed through to the renderer",
    )
    user_agent: str = Field(
        default=DEFAULT_USER_AGENT,
        description="User-Agent header sent with every request",
    )
    timeout_s: float = Field(
        default=DEFAULT_TIMEOUT_S,
        gt=0,
        description="Transport timeout applied to each request",
    )


def settings_path() -> Path:
    """Resolve the settings file location (env override, then ./settings.json)."""
    override = os.getenv(SETTINGS_ENV)
    return Path(override) if override else SETTINGS_PATH


def _load_yaml(path: Path):
    if not path.exists():
        return None
    try:
        return yaml.safe_load(path.read_text(encoding="utf-8"))
    except (yaml.YAMLError, UnicodeDecodeError, OSError) as e:
        logger.warning(f"Failed to load {path}: {e}")
        return None


def load_settings(path: Optional[Union[str, Path]] = None) -> Settings:
    """
    Load settings from a JSON (or .yaml/.yml) file.

    Any problem with the file (missing, unreadable, malformed, wrong shape)
    yields the built-in defaults instead of an error.

    Args:
        path: Settings file; defaults to settings_path()

    Returns:
        Settings
    """
    path = Path(path) if path is not None else settings_path()

    if path.suffix.lower() in YAML_SUFFIXES:
        data = _load_yaml(path)
    else:
        data = load_json(path, default=None)
    if data is None:
        logger.warning(f"No usable settings at {path}, using defaults")
        return Settings()

    if not isinstance(data, dict):
        logger.warning(f"Settings in {path} must be a JSON object, using defaults")
        return Settings()

    try:
        settings = Settings(**data)
    except ValidationError as e:
        logger.warning(f"Invalid settings in {path}, using defaults: {e.error_count()} error(s)")
        return Settings()

    logger.info(f"Loaded {len(settings.feeds)} feeds from {path}")
    return settings
