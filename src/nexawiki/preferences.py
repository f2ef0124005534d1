"""
Display preference persistence.

Stores the dark/light display-mode flag in a small JSON file so it survives
across sessions.
"""

import json
import logging
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)

THEME_KEY = "nexawiki-theme"


class DisplayMode:
    DARK = "dark"
    LIGHT = "light"


class PreferenceStore:
    """File-backed key/value store for the display-mode flag."""

    def __init__(self, path: str | Path = ".nexawiki/preferences.json"):
        """
        Initialize the preference store

        Args:
            path: JSON file holding the preferences
        """
        self.path = Path(path)

    def _load(self) -> dict[str, Any]:
        try:
            with Path.open(self.path, encoding="utf-8") as f:
                data = json.load(f)
        except FileNotFoundError:
            return {}
        except (OSError, json.JSONDecodeError) as e:
            logger.warning(f"Ignoring unreadable preferences file {self.path}: {e}")
            return {}
        return data if isinstance(data, dict) else {}

    def _save(self, data: dict[str, Any]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with Path.open(self.path, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2, ensure_ascii=False)

    def is_dark_mode(self) -> bool:
        """Read the saved display mode. Dark unless light was saved."""
        return self._load().get(THEME_KEY) != DisplayMode.LIGHT

    def set_dark_mode(self, dark: bool) -> None:
        data = self._load()
        data[THEME_KEY] = DisplayMode.DARK if dark else DisplayMode.LIGHT
        self._save(data)

    def toggle(self) -> bool:
        """Flip the display mode, persist it, and return the new dark flag."""
        dark = not self.is_dark_mode()
        self.set_dark_mode(dark)
        return dark
