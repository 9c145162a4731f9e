"""Transactional settings file helpers.

Features:
- Settings files live under `<data_dir>/settings/<name>.json`.
- Atomic writes using a temporary file + fsync + os.replace.
- Keep a .bak of the previous file on successful replace.
- Safe load with fallback to .bak if the main file is corrupted.

The payload is whatever mapping the caller hands in; GameConfig knowledge
lives in settings_system.
"""
from __future__ import annotations

from pathlib import Path
import json
import logging
import os
import shutil
import tempfile
import time
from typing import Any, Dict

SETTINGS_VERSION = 1
DEFAULT_SETTINGS_NAME = "game_config"

_logger = logging.getLogger("terminal_heist.settings")


class SettingsSaveError(Exception):
    pass


class SettingsLoadError(Exception):
    pass


def ensure_settings_dir(data_dir: Path) -> Path:
    """Create `<data_dir>/settings` if needed and return it."""
    settings_dir = Path(data_dir) / "settings"
    settings_dir.mkdir(parents=True, exist_ok=True)
    return settings_dir


def settings_path(data_dir: Path, name: str = DEFAULT_SETTINGS_NAME) -> Path:
    return Path(data_dir) / "settings" / f"{name}.json"


def backup_path(path: Path) -> Path:
    return path.with_suffix(path.suffix + ".bak")


def _write_atomic(target_path: Path, data_bytes: bytes) -> None:
    """Write bytes to target_path atomically.

    Steps:
    - Write to a temp file in the same directory.
    - Flush and fsync.
    - Copy any existing file to .bak, then replace the target.
    """
    target_dir = target_path.parent
    target_dir.mkdir(parents=True, exist_ok=True)

    fd = None
    tmp_path = None
    try:
        fd, tmp_path = tempfile.mkstemp(prefix=target_path.name, dir=str(target_dir))
        with os.fdopen(fd, "wb") as f:
            fd = None
            f.write(data_bytes)
            f.flush()
            os.fsync(f.fileno())
        if target_path.exists():
            shutil.copy2(target_path, backup_path(target_path))
        os.replace(tmp_path, target_path)
        tmp_path = None
    except OSError as e:
        raise SettingsSaveError(f"Atomic write to {target_path} failed: {e}") from e
    finally:
        if fd is not None:
            os.close(fd)
        if tmp_path is not None and os.path.exists(tmp_path):
            os.remove(tmp_path)


def _serialize(payload: Dict[str, Any], version: int = SETTINGS_VERSION) -> bytes:
    envelope = {
        "metadata": {
            "version": version,
            "timestamp": int(time.time()),
        },
        "payload": payload,
    }
    return json.dumps(envelope, indent=2, ensure_ascii=False).encode("utf-8")


def save_settings(data_dir: Path, payload: Dict[str, Any], name: str = DEFAULT_SETTINGS_NAME) -> Path:
    """Save `payload` to `<data_dir>/settings/<name>.json` and return the path."""
    ensure_settings_dir(data_dir)
    target = settings_path(data_dir, name)
    try:
        data = _serialize(payload)
    except (TypeError, ValueError) as e:
        raise SettingsSaveError(f"Settings are not JSON-serializable: {e}") from e
    _write_atomic(target, data)
    _logger.debug("Wrote %d bytes to %s", len(data), target)
    return target


def _read(path: Path) -> Dict[str, Any]:
    try:
        with path.open("r", encoding="utf-8") as f:
            obj = json.load(f)
    except (OSError, ValueError) as e:
        raise SettingsLoadError(f"Failed to read settings '{path}': {e}") from e
    if not isinstance(obj, dict) or not isinstance(obj.get("metadata"), dict) \
            or not isinstance(obj.get("payload"), dict):
        raise SettingsLoadError(f"Invalid settings file structure: {path}")
    return obj


def load_settings(data_dir: Path, name: str = DEFAULT_SETTINGS_NAME) -> Dict[str, Any]:
    """Load the settings envelope for `name`.

    If the primary file is corrupted and a .bak exists, the .bak is loaded.
    Raises SettingsLoadError if the file is missing or both attempts fail.
    """
    target = settings_path(data_dir, name)
    bak = backup_path(target)

    if not target.exists():
        raise SettingsLoadError(f"Settings not found: {target}")
    try:
        return _read(target)
    except SettingsLoadError:
        if not bak.exists():
            raise
        _logger.warning("Settings file %s is unreadable; falling back to %s", target, bak)
        try:
            return _read(bak)
        except SettingsLoadError as e:
            raise SettingsLoadError(f"Both settings and backup are invalid: {e}") from e


def delete_settings(data_dir: Path, name: str = DEFAULT_SETTINGS_NAME) -> None:
    target = settings_path(data_dir, name)
    for p in (target, backup_path(target)):
        try:
            if p.exists():
                p.unlink()
        except OSError as e:
            raise SettingsSaveError(f"Failed to delete {p}: {e}") from e
