"""Locations of runtime data (logs, local env files) for Battleships."""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True, slots=True)
class AppDataPaths:
    root: Path
    logs: Path


def resolve_game_root() -> Path:
    """Directory of the frozen executable, else the source checkout root."""
    if getattr(sys, "frozen", False) and getattr(sys, "executable", ""):
        return Path(sys.executable).resolve().parent
    return Path(__file__).resolve().parents[3]


def resolve_app_data_root() -> Path:
    """BATTLESHIPS_APP_DATA_DIR, relative to the game root when not absolute."""
    return _configured_dir("BATTLESHIPS_APP_DATA_DIR", base=resolve_game_root()) or (
        resolve_game_root() / "appdata"
    )


def resolve_logs_dir() -> Path:
    """BATTLESHIPS_LOG_DIR, relative to the app-data root when not absolute."""
    root = resolve_app_data_root()
    return _configured_dir("BATTLESHIPS_LOG_DIR", base=root) or root / "logs"


def ensure_app_data_dirs() -> AppDataPaths:
    paths = AppDataPaths(root=resolve_app_data_root(), logs=resolve_logs_dir())
    for directory in (paths.root, paths.logs):
        directory.mkdir(parents=True, exist_ok=True)
    return paths


def _configured_dir(name: str, *, base: Path) -> Path | None:
    value = os.getenv(name, "").strip()
    if not value:
        return None
    path = Path(value)
    return path if path.is_absolute() else base / path
