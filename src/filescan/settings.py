"""Scan defaults stored as JSON under ``$XDG_CONFIG_HOME/filescan``.

Keys are ``section.name`` pairs (``scan.max_depth``), kept on disk as one
object per section.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any

from filescan.utils import xdg_config_home

log = logging.getLogger(__name__)

# Keys accepted by ``filescan config set``, with their value parsers.
KNOWN_KEYS = {
    "scan.max_depth": "int_or_none",
    "scan.follow_symlinks": "bool",
}


def _read(path: Path) -> dict[str, dict[str, Any]]:
    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except FileNotFoundError:
        return {}
    except (json.JSONDecodeError, OSError) as e:
        log.warning("Ignoring unreadable settings %s: %s", path, e)
        return {}
    if not isinstance(data, dict):
        log.warning("Ignoring settings %s: top level is not an object", path)
        return {}
    return {section: values for section, values in data.items() if isinstance(values, dict)}


def _split(key: str) -> tuple[str, str]:
    section, _, name = key.partition(".")
    return section, name


class Settings:
    """Sectioned settings file; ``set`` writes through to disk."""

    _instance: Settings | None = None

    def __init__(self, path: Path | None = None) -> None:
        self._path = path or (xdg_config_home() / "filescan" / "settings.json")
        self._sections = _read(self._path)

    @classmethod
    def instance(cls) -> Settings:
        if cls._instance is None:
            cls._instance = cls()
        return cls._instance

    @property
    def path(self) -> Path:
        return self._path

    def as_dict(self) -> dict[str, dict[str, Any]]:
        return {section: dict(values) for section, values in self._sections.items()}

    def get(self, key: str, default: Any = None) -> Any:
        section, name = _split(key)
        return self._sections.get(section, {}).get(name, default)

    def set(self, key: str, value: Any) -> None:
        section, name = _split(key)
        self._sections.setdefault(section, {})[name] = value
        self._write()

    def _write(self) -> None:
        # written atomically via a sibling temp file
        tmp = self._path.with_suffix(".tmp")
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            tmp.write_text(json.dumps(self._sections, indent=2) + "\n", encoding="utf-8")
            os.replace(tmp, self._path)
        except OSError as e:
            log.warning("Could not save settings to %s: %s", self._path, e)


def parse_value(key: str, raw: str) -> Any:
    """Convert a command-line string into the typed value for *key*.

    Raises:
        ValueError: If the key is unknown or the value does not parse.
    """
    kind = KNOWN_KEYS.get(key)
    if kind is None:
        raise ValueError(f"Unknown setting '{key}'")

    lowered = raw.lower()
    if kind == "int_or_none":
        if lowered in ("none", "null", ""):
            return None
        value = int(raw)
        if value < 0:
            raise ValueError(f"'{key}' must not be negative")
        return value
    if lowered in ("1", "true", "yes", "on"):
        return True
    if lowered in ("0", "false", "no", "off"):
        return False
    raise ValueError(f"'{key}' expects a boolean, got '{raw}'")
