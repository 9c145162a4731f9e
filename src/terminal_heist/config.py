"""Tunable settings for Terminal Heist.

Keep this file light: module constants for the defaults and a single
GameConfig dataclass that the turn engine, guard AI and renderer read from.
"""
from __future__ import annotations

from dataclasses import dataclass, fields
import logging
import re
from typing import Any, Dict, Mapping, Tuple

import pygame


_logger = logging.getLogger("terminal_heist.config")


DEFAULT_GRID_WIDTH: int = 20
DEFAULT_GRID_HEIGHT: int = 12
DEFAULT_FLOOR_COUNT: int = 3

DEFAULT_GUARD_MAX_CHASE_TURNS: int = 5
DEFAULT_GUARD_LOS_RANGE: int = 8
DEFAULT_GUARDS_PER_FLOOR_BASE: int = 2

DEFAULT_KEYCARDS_REQUIRED_TO_WIN: int = 1
DEFAULT_SHARD_SCORE_BONUS: int = 500
DEFAULT_FLOOR_COMPLETION_BONUS: int = 100
DEFAULT_TURN_PENALTY: int = 1

COLOR_PREFIX = "color_"

_INT_PATTERN = re.compile(r"[+-]?[0-9]+")


class ConfigError(ValueError):
    pass


@dataclass
class GameConfig:
    # Grid & level
    grid_width: int = DEFAULT_GRID_WIDTH
    grid_height: int = DEFAULT_GRID_HEIGHT
    floor_count: int = DEFAULT_FLOOR_COUNT

    # Guard AI
    guard_max_chase_turns: int = DEFAULT_GUARD_MAX_CHASE_TURNS
    guard_los_range: int = DEFAULT_GUARD_LOS_RANGE
    guards_per_floor_base: int = DEFAULT_GUARDS_PER_FLOOR_BASE

    # Balance
    keycards_required_to_win: int = DEFAULT_KEYCARDS_REQUIRED_TO_WIN
    shard_score_bonus: int = DEFAULT_SHARD_SCORE_BONUS
    floor_completion_bonus: int = DEFAULT_FLOOR_COMPLETION_BONUS
    turn_penalty: int = DEFAULT_TURN_PENALTY

    # Presentation (pygame colour names)
    color_player: str = "aqua"
    color_guard: str = "red"
    color_wall: str = "gray"
    color_floor: str = "white"
    color_door_open: str = "green"
    color_door_closed: str = "yellow"
    color_keycard: str = "blue"
    color_shard: str = "gold"
    color_exit: str = "lime"

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "GameConfig":
        """Build a config from defaults overlaid with `data`."""
        config = cls()
        config.from_dict(data)
        return config

    def to_dict(self) -> Dict[str, Any]:
        """Return a fresh mapping of every setting, in declaration order."""
        return {name: getattr(self, name) for name in field_names()}

    def from_dict(self, data: Mapping[str, Any]) -> None:
        """Overlay recognised keys from `data` onto this config.

        Missing keys keep their current value and unknown keys are ignored.
        Values are coerced to the field's type where that is lossless; if any
        value can't be converted, ConfigError is raised and nothing is changed.
        """
        if not isinstance(data, Mapping):
            raise ConfigError(f"Expected a mapping, got {type(data).__name__}")

        updates: Dict[str, Any] = {}
        for name, kind in _FIELD_TYPES:
            if name in data:
                updates[name] = _coerce(name, kind, data[name])

        unknown = [k for k in data if k not in _FIELD_INDEX]
        if unknown:
            _logger.debug("Ignoring unknown config keys: %s", sorted(map(str, unknown)))

        for name, value in updates.items():
            setattr(self, name, value)
        if updates:
            _logger.debug("Applied %d config value(s): %s", len(updates), list(updates))

    def guards_for_floor(self, floor_number: int) -> int:
        """Guard count for a floor (1-based); one extra guard per floor descended."""
        if not 1 <= floor_number <= self.floor_count:
            raise ConfigError(f"Floor {floor_number} is outside the run (1..{self.floor_count})")
        return self.guards_per_floor_base + (floor_number - 1)

    def palette(self) -> Dict[str, Tuple[int, int, int]]:
        """Resolve the colour names to RGB, keyed by role ('player', 'wall', ...)."""
        colors: Dict[str, Tuple[int, int, int]] = {}
        for name in field_names():
            if not name.startswith(COLOR_PREFIX):
                continue
            value = getattr(self, name)
            try:
                c = pygame.Color(value)
            except (ValueError, TypeError) as e:
                raise ConfigError(f"{name}: unknown colour {value!r}") from e
            colors[name[len(COLOR_PREFIX):]] = (c.r, c.g, c.b)
        return colors


_FIELD_TYPES: Tuple[Tuple[str, type], ...] = tuple(
    (f.name, int if f.type in (int, "int") else str) for f in fields(GameConfig)
)
_FIELD_INDEX = {name for name, _ in _FIELD_TYPES}


def field_names() -> Tuple[str, ...]:
    """Recognised setting keys in wire order."""
    return tuple(name for name, _ in _FIELD_TYPES)


def _coerce(name: str, kind: type, value: Any) -> Any:
    if kind is str:
        if isinstance(value, str):
            return value
        raise ConfigError(f"{name}: expected a colour name, got {value!r}")

    # bool is an int subclass but never a sensible tuning value
    if isinstance(value, bool):
        raise ConfigError(f"{name}: expected an integer, got {value!r}")
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str) and _INT_PATTERN.fullmatch(value.strip()):
        return int(value.strip(), 10)
    raise ConfigError(f"{name}: expected an integer, got {value!r}")
