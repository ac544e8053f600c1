"""Persistent user settings for Lingoreview.

Settings live in a JSON file under the user's config directory. The file
is read once and cached; saving merges with keys already on disk so that
settings written by another version are not dropped.
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "config.json"


@dataclass
class Config:
    """User settings."""

    api_url: str | None = None
    token_file: str | None = None
    request_timeout: float = 10.0
    show_phonetic: bool = True


_cached_config: Config | None = None


def _get_config_dir() -> Path:
    """Return the directory holding the settings file."""
    base = os.environ.get("XDG_CONFIG_HOME")
    if base:
        return Path(base) / "lingoreview"
    return Path.home() / ".config" / "lingoreview"


def _config_path() -> Path:
    return _get_config_dir() / CONFIG_FILENAME


def _read_raw() -> dict[str, Any]:
    path = _config_path()
    if not path.exists():
        return {}
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as exc:
        logger.warning("Ignoring unreadable config %s: %s", path, exc)
        return {}
    if not isinstance(data, dict):
        logger.warning("Ignoring config %s: expected a JSON object", path)
        return {}
    return data


def _from_raw(data: dict[str, Any]) -> Config:
    config = Config()
    known = {f.name for f in fields(Config)}
    for key, value in data.items():
        if key in known:
            setattr(config, key, value)

    try:
        config.request_timeout = float(config.request_timeout)
    except (TypeError, ValueError):
        logger.warning("Invalid request_timeout %r, using default", config.request_timeout)
        config.request_timeout = Config.request_timeout
    config.show_phonetic = bool(config.show_phonetic)
    return config


def load_config() -> Config:
    """Load settings, using the cached copy after the first read."""
    global _cached_config
    if _cached_config is None:
        _cached_config = _from_raw(_read_raw())
    return _cached_config


def save_config(config: Config) -> None:
    """Write settings to disk and update the cache."""
    global _cached_config
    path = _config_path()
    path.parent.mkdir(parents=True, exist_ok=True)

    data = _read_raw()
    data.update(asdict(config))

    tmp_path = path.with_suffix(".tmp")
    tmp_path.write_text(json.dumps(data, indent=2, sort_keys=True), encoding="utf-8")
    tmp_path.replace(path)
    _cached_config = config


def clear_config_cache() -> None:
    """Forget the cached settings so the next load re-reads the file."""
    global _cached_config
    _cached_config = None
