"""Command line tool for inspecting and editing Terminal Heist settings.

Delegates persistence to `terminal_heist.systems.settings_system`.
"""
import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Dict, List, Optional

from terminal_heist.config import ConfigError, GameConfig, field_names
from terminal_heist.logger import configure_logging
from terminal_heist.systems.settings import DEFAULT_SETTINGS_NAME, SettingsLoadError, SettingsSaveError
from terminal_heist.systems.settings_system import SettingsSystem

_logger = logging.getLogger("terminal_heist.cli")

EXIT_OK = 0
EXIT_ERROR = 2


def parse_overrides(pairs: List[str]) -> Dict[str, str]:
    """Turn ['grid_width=30', ...] into a mapping; values stay strings."""
    overrides: Dict[str, str] = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        key = key.strip()
        if not sep or not key:
            raise ConfigError(f"Expected KEY=VALUE, got {pair!r}")
        if key not in field_names():
            raise ConfigError(f"Unknown setting {key!r}")
        overrides[key] = value.strip()
    return overrides


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Terminal Heist settings tool")
    parser.add_argument("--data-dir", type=Path, default=Path.cwd() / "data")
    parser.add_argument("--name", default=DEFAULT_SETTINGS_NAME)
    parser.add_argument("--set", dest="overrides", action="append", default=[], metavar="KEY=VALUE")
    parser.add_argument("--save", action="store_true", help="persist the resulting settings")
    parser.add_argument("--reset", action="store_true", help="delete persisted settings first")
    parser.add_argument("--palette", action="store_true", help="print RGB colours instead of settings")
    parser.add_argument("--debug", action="store_true")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.debug)

    system = SettingsSystem(args.data_dir, name=args.name)
    try:
        if args.reset:
            system.reset()
        if system.exists():
            config = system.load()
        else:
            _logger.debug("No settings at %s; using defaults", system.path)
            config = GameConfig()
        if args.overrides:
            config.from_dict(parse_overrides(args.overrides))
        if args.save:
            system.save(config)
        output = config.palette() if args.palette else config.to_dict()
    except (ConfigError, SettingsLoadError, SettingsSaveError) as e:
        _logger.error("%s", e)
        return EXIT_ERROR

    json.dump(output, sys.stdout, indent=2)
    sys.stdout.write("\n")
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
