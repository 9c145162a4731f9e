"""Pytest configuration and shared fixtures."""
import os
import sys
import tempfile
from pathlib import Path

import pytest

# Add src to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

os.environ.setdefault('PYGAME_HIDE_SUPPORT_PROMPT', '1')

from terminal_heist.config import GameConfig  # noqa: E402


@pytest.fixture
def config():
    """A fresh config holding the defaults."""
    return GameConfig()


@pytest.fixture
def tuned_values():
    """A full settings mapping where every value differs from the default."""
    return {
        'grid_width': 32,
        'grid_height': 18,
        'floor_count': 5,
        'guard_max_chase_turns': 7,
        'guard_los_range': 6,
        'guards_per_floor_base': 3,
        'keycards_required_to_win': 2,
        'shard_score_bonus': 750,
        'floor_completion_bonus': 150,
        'turn_penalty': 2,
        'color_player': 'cyan',
        'color_guard': 'orange',
        'color_wall': 'darkgray',
        'color_floor': 'black',
        'color_door_open': 'darkgreen',
        'color_door_closed': 'brown',
        'color_keycard': 'purple',
        'color_shard': 'magenta',
        'color_exit': 'olivedrab',
    }


@pytest.fixture
def data_dir():
    """Temporary data directory for settings files."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir) / 'data'
