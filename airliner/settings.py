"""Persistent settings for the editing commands.

Settings are stored as JSON in an OS-appropriate config directory and
survive application restarts.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional

import platformdirs

from .constants import AirlinerConstants

logger = logging.getLogger(__name__)

DEFAULT_SETTINGS: Dict[str, Any] = {
    "accrue_window_ms": AirlinerConstants.ACCRUE_WINDOW_MS,
    "use_system_clipboard": True,
}


class SettingsPersistence:
    """Manages the settings file.

    Missing, unreadable or invalid entries fall back to
    ``DEFAULT_SETTINGS``; problems are logged, never raised.
    """

    def __init__(self, config_dir: Optional[Path] = None):
        if config_dir is None:
            config_dir = Path(platformdirs.user_config_dir(AirlinerConstants.SETTINGS_APP_NAME))
        self._config_dir = Path(config_dir)
        self._settings_file = self._config_dir / AirlinerConstants.SETTINGS_FILENAME
        self._settings_cache: Optional[Dict[str, Any]] = None

    @property
    def settings_file(self) -> Path:
        return self._settings_file

    def _ensure_config_dir(self) -> None:
        try:
            self._config_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            logger.warning(f"Could not create config directory {self._config_dir}: {e}")

    def _load_file(self) -> Dict[str, Any]:
        """Read the raw stored dict, cached after the first read."""
        if self._settings_cache is not None:
            return self._settings_cache

        if not self._settings_file.exists():
            self._settings_cache = {}
            return self._settings_cache

        try:
            with open(self._settings_file, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (json.JSONDecodeError, OSError) as e:
            logger.warning(f"Could not load settings from {self._settings_file}: {e}")
            self._settings_cache = {}
            return self._settings_cache

        if not isinstance(data, dict):
            logger.warning("Settings file has invalid format (not a dict), ignoring")
            data = {}
        self._settings_cache = data
        return self._settings_cache

    def load_settings(self) -> Dict[str, Any]:
        """Return the effective settings: defaults overlaid with valid stored values."""
        settings = dict(DEFAULT_SETTINGS)
        for key, value in self._load_file().items():
            if key in DEFAULT_SETTINGS and not self.validate_setting(key, value):
                logger.warning(f"Ignoring invalid setting {key}={value!r}")
                continue
            settings[key] = value
        return settings

    def get(self, key: str) -> Any:
        """Get one effective setting.

        Args:
            key: Setting name, e.g. ``"accrue_window_ms"``.

        Returns:
            The stored value if valid, else the default; None for unknown keys.
        """
        return self.load_settings().get(key)

    def save_settings(self, settings: Dict[str, Any]) -> bool:
        """Validate and save ``settings`` atomically (temp file + rename).

        Returns:
            True if the file was written, False otherwise.
        """
        for key, value in settings.items():
            if not self.validate_setting(key, value):
                logger.warning(f"Refusing to save invalid setting {key}={value!r}")
                return False

        self._ensure_config_dir()
        temp_file = self._settings_file.with_suffix('.tmp')
        try:
            with open(temp_file, 'w', encoding='utf-8') as f:
                json.dump(settings, f, indent=2)
            temp_file.replace(self._settings_file)
        except OSError as e:
            logger.warning(f"Could not save settings to {self._settings_file}: {e}")
            try:
                if temp_file.exists():
                    temp_file.unlink()
            except OSError:
                pass
            return False

        self._settings_cache = dict(settings)
        return True

    def validate_setting(self, key: str, value: Any) -> bool:
        """Check a value against the rules for its setting.

        Args:
            key: Setting name.
            value: Candidate value.

        Returns:
            True if the value is acceptable. Unknown keys are always accepted.
        """
        if key == "accrue_window_ms":
            # bool is an int subclass
            if not isinstance(value, int) or isinstance(value, bool):
                return False
            return (AirlinerConstants.MIN_ACCRUE_WINDOW_MS
                    <= value <= AirlinerConstants.MAX_ACCRUE_WINDOW_MS)
        if key == "use_system_clipboard":
            return isinstance(value, bool)
        # Unknown settings are kept (forward compatibility)
        return True

    def clear_cache(self) -> None:
        """Forget the cached file contents so the next read hits disk."""
        self._settings_cache = None


_persistence: Optional[SettingsPersistence] = None


def get_persistence() -> SettingsPersistence:
    """Return the shared SettingsPersistence for the user config directory."""
    global _persistence
    if _persistence is None:
        _persistence = SettingsPersistence()
    return _persistence
