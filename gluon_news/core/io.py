"""JSON file helpers that log instead of raising."""

import json
import logging
from pathlib import Path
from typing import Any, Union

logger = logging.getLogger(__name__)


def load_json(path: Union[str, Path], default: Any = None) -> Any:
    """
    Read a JSON file.

    Returns:
        Parsed data, or default when the file is missing, empty or unreadable
    """
    path = Path(path)
    if not path.exists():
        return default

    try:
        content = path.read_text(encoding="utf-8").strip()
    except (UnicodeDecodeError, OSError) as e:
        logger.warning(f"Failed to read {path}: {e}")
        return default
    if not content:
        return default

    try:
        return json.loads(content)
    except json.JSONDecodeError as e:
        logger.warning(f"Invalid JSON in {path}: {e}")
        return default


def save_json(data: Any, path: Union[str, Path]) -> bool:
    """Write data as indented UTF-8 JSON, creating parent directories."""
    path = Path(path)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(data, ensure_ascii=False, indent=2), encoding="utf-8")
    except (OSError, TypeError, ValueError) as e:
        logger.error(f"Failed to save {path}: {e}")
        return False
    return True
