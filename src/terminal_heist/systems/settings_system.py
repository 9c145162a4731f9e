"""Higher-level SettingsSystem that persists GameConfig via the settings helpers.

Provides the methods the rest of the game calls at startup (load) and from the
options screen (save/reset).
"""
from __future__ import annotations

from pathlib import Path
import logging

from terminal_heist.config import ConfigError, GameConfig
from terminal_heist.systems import settings as settings_helpers

_logger = logging.getLogger("terminal_heist.settings_system")


class SettingsSystem:
    def __init__(self, data_dir: Path, name: str = settings_helpers.DEFAULT_SETTINGS_NAME):
        self.data_dir = Path(data_dir)
        self.name = name

    @property
    def path(self) -> Path:
        return settings_helpers.settings_path(self.data_dir, self.name)

    def exists(self) -> bool:
        return self.path.exists()

    def save(self, config: GameConfig) -> Path:
        _logger.info("Saving settings name=%s", self.name)
        path = settings_helpers.save_settings(self.data_dir, config.to_dict(), name=self.name)
        _logger.info("Saved to %s", path)
        return path

    def load(self) -> GameConfig:
        """Load persisted settings overlaid on the defaults.

        Raises SettingsLoadError when the file can't be read and ConfigError
        when it holds values of the wrong type.
        """
        _logger.info("Loading settings name=%s", self.name)
        envelope = settings_helpers.load_settings(self.data_dir, name=self.name)
        version = envelope["metadata"].get("version")
        if version != settings_helpers.SETTINGS_VERSION:
            _logger.warning("Settings version %s differs from %s; loading known keys only",
                            version, settings_helpers.SETTINGS_VERSION)
        return GameConfig.from_mapping(envelope["payload"])

    def load_or_default(self) -> GameConfig:
        """Like load(), but fall back to defaults when the file is missing or bad."""
        try:
            return self.load()
        except (settings_helpers.SettingsLoadError, ConfigError) as e:
            _logger.warning("Using default settings: %s", e)
            return GameConfig()

    def reset(self) -> None:
        _logger.info("Resetting settings name=%s", self.name)
        settings_helpers.delete_settings(self.data_dir, name=self.name)
