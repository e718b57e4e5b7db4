"""
Persistent settings for qlthemes.
Stored in ~/.qlthemes/config.json
"""

from __future__ import annotations
import json
import logging
from dataclasses import dataclass, asdict
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)

# Default config location
DEFAULT_CONFIG_DIR = Path.home() / ".qlthemes"
DEFAULT_CONFIG_FILE = DEFAULT_CONFIG_DIR / "config.json"


@dataclass
class AppSettings:
    """
    Settings that persist across runs.
    """
    # Where user themes are read from and new themes are saved to
    themes_folder: Optional[str] = str(DEFAULT_CONFIG_DIR / "themes")

    # Selected themes, by name
    light_theme: str = ""
    dark_theme: str = ""

    # Thumbnails
    thumbnail_size: int = 100
    thumbnail_font_family: str = ""
    thumbnail_font_size: int = 8

    def to_dict(self) -> dict:
        """Serialize to dict."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict) -> AppSettings:
        """Deserialize from dict, ignoring unknown keys."""
        valid_fields = {f.name for f in cls.__dataclass_fields__.values()}
        filtered = {k: v for k, v in data.items() if k in valid_fields}
        return cls(**filtered)

    @property
    def themes_path(self) -> Optional[Path]:
        """Themes folder as a Path, None when not configured."""
        return Path(self.themes_folder).expanduser() if self.themes_folder else None


class SettingsManager:
    """
    Manages loading and saving settings.

    Usage:
        manager = SettingsManager()
        settings = manager.settings

        settings.dark_theme = "Solarized Dark"
        manager.save()
    """

    def __init__(self, config_path: Path = None):
        self._config_path = config_path or DEFAULT_CONFIG_FILE
        self._settings: Optional[AppSettings] = None

    @property
    def settings(self) -> AppSettings:
        """Get current settings, loading from disk if needed."""
        if self._settings is None:
            self._settings = self.load()
        return self._settings

    @property
    def config_dir(self) -> Path:
        """Get the config directory path."""
        return self._config_path.parent

    def load(self) -> AppSettings:
        """Read settings from the config file; defaults when absent or unreadable."""
        if not self._config_path.is_file():
            logger.debug(f"No settings at {self._config_path}, using defaults")
            return AppSettings()

        try:
            data = json.loads(self._config_path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            logger.warning(f"Unreadable settings {self._config_path}: {e}")
            return AppSettings()

        if not isinstance(data, dict):
            logger.warning(f"Settings in {self._config_path} are not an object, ignoring")
            return AppSettings()

        try:
            settings = AppSettings.from_dict(data)
        except TypeError as e:
            logger.warning(f"Invalid settings in {self._config_path}: {e}")
            return AppSettings()
        logger.debug(f"Loaded settings from {self._config_path}")
        return settings

    def save(self) -> None:
        """Write the current settings, creating the config directory."""
        if self._settings is None:
            return

        self.config_dir.mkdir(parents=True, exist_ok=True)
        payload = json.dumps(self._settings.to_dict(), indent=2)
        try:
            self._config_path.write_text(payload, encoding="utf-8")
        except OSError as e:
            logger.error(f"Failed to save settings to {self._config_path}: {e}")
            return
        logger.debug(f"Saved settings to {self._config_path}")

    def reset(self) -> AppSettings:
        """Reset to default settings (does not save automatically)."""
        self._settings = AppSettings()
        return self._settings


# Global instance for convenience
_manager: Optional[SettingsManager] = None


def get_settings_manager() -> SettingsManager:
    """Get the global settings manager instance."""
    global _manager
    if _manager is None:
        _manager = SettingsManager()
    return _manager


def get_settings() -> AppSettings:
    """Convenience function to get current settings."""
    return get_settings_manager().settings


def save_settings() -> None:
    """Convenience function to save current settings."""
    get_settings_manager().save()
