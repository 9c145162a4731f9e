"""Terminal Heist - tunable settings for a turn-based stealth game."""

__version__ = "0.1.0"

from terminal_heist.config import ConfigError, GameConfig

__all__ = ["ConfigError", "GameConfig"]
