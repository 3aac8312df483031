"""User preferences stored as JSON beside the client."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional

from battle_city.core.settings import SessionSettings

logger = logging.getLogger(__name__)

_SETTINGS_PATH = Path(__file__).resolve().parent / "user_settings.json"


def load_user_settings() -> Dict[str, Any]:
    """Return the saved preferences, or an empty dict when none are usable."""
    if not _SETTINGS_PATH.is_file():
        return {}
    try:
        data = json.loads(_SETTINGS_PATH.read_text(encoding="utf-8"))
    except json.JSONDecodeError:
        logger.warning("Ignoring malformed settings file %s", _SETTINGS_PATH)
        return {}
    except OSError as exc:
        logger.warning("Could not read settings from %s: %s", _SETTINGS_PATH, exc)
        return {}
    return data if isinstance(data, dict) else {}


def save_user_settings(settings: Dict[str, Any]) -> None:
    try:
        _SETTINGS_PATH.parent.mkdir(parents=True, exist_ok=True)
        _SETTINGS_PATH.write_text(json.dumps(settings, indent=2, sort_keys=True), encoding="utf-8")
    except OSError as exc:
        logger.warning("Could not save settings to %s: %s", _SETTINGS_PATH, exc)


def session_settings_from(
    user_settings: Dict[str, Any], base: Optional[SessionSettings] = None
) -> SessionSettings:
    """Layer the ``session`` section of the preferences over ``base``."""
    base = base or SessionSettings()
    overrides = user_settings.get("session")
    return base.with_overrides(overrides) if isinstance(overrides, dict) else base


__all__ = ["load_user_settings", "save_user_settings", "session_settings_from"]
