# settings.py - rule parameters and the small persisted settings file
from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass
from typing import Optional

from klondike.stock import DEFAULT_DRAW_COUNT

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Rules:
    draw_count: int = DEFAULT_DRAW_COUNT
    # None means the waste may be turned over any number of times.
    max_recycles: Optional[int] = None

    def __post_init__(self):
        if not isinstance(self.draw_count, int) or self.draw_count < 1:
            raise ValueError(f"draw_count must be a positive integer, got {self.draw_count!r}")
        if self.max_recycles is not None and (not isinstance(self.max_recycles, int) or self.max_recycles < 0):
            raise ValueError(f"max_recycles must be None or >= 0, got {self.max_recycles!r}")


# Defaults (may be overridden by persisted settings)
_DEFAULT_SETTINGS = {
    "draw_count": DEFAULT_DRAW_COUNT,   # 1 | 3
    "max_recycles": None,               # None = unlimited
}

_CURRENT_SETTINGS = dict(_DEFAULT_SETTINGS)


def _settings_dir() -> str:
    override = os.environ.get("KLONDIKE_SETTINGS_DIR")
    if override:
        return override
    # Prefer %APPDATA% on Windows, else ~/.klondike_engine
    base = os.environ.get("APPDATA")
    if base:
        return os.path.join(base, "KlondikeEngine")
    return os.path.join(os.path.expanduser("~"), ".klondike_engine")


def _settings_path() -> str:
    return os.path.join(_settings_dir(), "settings.json")


def get_current_settings() -> dict:
    return dict(_CURRENT_SETTINGS)


def _coerce(data: dict) -> dict:
    out = {}
    if "draw_count" in data:
        out["draw_count"] = int(data["draw_count"])
    if "max_recycles" in data:
        mr = data["max_recycles"]
        out["max_recycles"] = None if mr is None else int(mr)
    # Reject combinations Rules would not accept.
    Rules(**{**_CURRENT_SETTINGS, **out})
    return out


def load_settings() -> dict:
    """Merge the settings file over the defaults; a missing or bad file leaves them alone."""
    global _CURRENT_SETTINGS
    path = _settings_path()
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except FileNotFoundError:
        return get_current_settings()
    except (OSError, ValueError) as exc:
        logger.warning("ignoring unreadable settings file %s: %s", path, exc)
        return get_current_settings()
    if not isinstance(data, dict):
        logger.warning("ignoring settings file %s: expected an object", path)
        return get_current_settings()
    try:
        _CURRENT_SETTINGS.update(_coerce(data))
    except (TypeError, ValueError) as exc:
        logger.warning("ignoring invalid settings in %s: %s", path, exc)
    return get_current_settings()


def save_settings(new_values: dict) -> None:
    # Merge and write to disk
    global _CURRENT_SETTINGS
    _CURRENT_SETTINGS.update(_coerce({k: new_values[k] for k in _DEFAULT_SETTINGS if k in new_values}))
    path = _settings_path()
    try:
        os.makedirs(_settings_dir(), exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            json.dump(_CURRENT_SETTINGS, f, indent=2)
    except OSError as exc:
        logger.warning("could not write settings to %s: %s", path, exc)


def reset_settings() -> None:
    global _CURRENT_SETTINGS
    _CURRENT_SETTINGS = dict(_DEFAULT_SETTINGS)


def current_rules() -> Rules:
    return Rules(**_CURRENT_SETTINGS)
