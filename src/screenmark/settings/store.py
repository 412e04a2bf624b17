"""Settings persistence helpers.

Settings live in ``settings.json`` under ``~/.screenmark`` (or the directory
named by ``SCREENMARK_HOME``). Reading never fails: a missing, unparsable
or invalid file yields the packaged defaults.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path

from pydantic import ValidationError

from .schema import Settings

logger = logging.getLogger(__name__)

_FILENAME = "settings.json"


class SettingsStore:
    """Load and save :class:`Settings` to disk."""

    @staticmethod
    def settings_path() -> Path:
        home = os.environ.get("SCREENMARK_HOME")
        base = Path(home).expanduser() if home else Path.home() / ".screenmark"
        return base / _FILENAME

    @classmethod
    def ensure_home(cls) -> Path:
        """Create the settings directory if needed and return it."""
        path = cls.settings_path().parent
        path.mkdir(parents=True, exist_ok=True)
        return path

    @classmethod
    def load(cls) -> Settings:
        path = cls.settings_path()
        if not path.is_file():
            return Settings()
        try:
            return Settings.model_validate(json.loads(path.read_text()))
        except (OSError, ValueError, ValidationError) as e:
            logger.warning("ignoring unreadable settings file %s: %s", path, e)
            return Settings()

    @classmethod
    def save(cls, settings: Settings) -> Path:
        """Write *settings* atomically and return the file written."""
        path = cls.settings_path()
        cls.ensure_home()
        tmp = path.with_suffix(".tmp")
        tmp.write_text(settings.model_dump_json(indent=2))
        os.replace(tmp, path)
        logger.info("settings saved to %s", path)
        return path
