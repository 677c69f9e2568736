"""Game settings from BATTLESHIPS_* variables and optional env files."""

from __future__ import annotations

import os
import sys
from collections.abc import Iterator, Sequence
from dataclasses import dataclass
from pathlib import Path

from battleships.game.ai.factory import resolve_difficulty
from battleships.game.core.models import BOARD_SIZE, Difficulty

MIN_BOARD_SIZE = 5
DEFAULT_SIMULATION_GAMES = 200

# Later files override earlier ones.
DEFAULT_ENV_FILES: tuple[str, ...] = (
    "appdata/config/.env.app",
    "appdata/config/.env.app.local",
    ".env.app",
    ".env.app.local",
)


@dataclass(frozen=True, slots=True)
class GameConfig:
    """Immutable game settings."""

    difficulty: Difficulty = Difficulty.HARD
    seed: int | None = None
    board_size: int = BOARD_SIZE
    simulation_games: int = DEFAULT_SIMULATION_GAMES


def load_game_config() -> GameConfig:
    """Build settings from the environment; malformed numbers fall back to defaults."""
    board_size = _env_int("BATTLESHIPS_BOARD_SIZE")
    games = _env_int("BATTLESHIPS_SIM_GAMES")
    return GameConfig(
        difficulty=resolve_difficulty(os.getenv("BATTLESHIPS_DIFFICULTY")),
        seed=_env_int("BATTLESHIPS_SEED"),
        board_size=BOARD_SIZE if board_size is None else max(MIN_BOARD_SIZE, board_size),
        simulation_games=DEFAULT_SIMULATION_GAMES if games is None else max(1, games),
    )


def load_env_file(path: str = ".env", *, override_existing: bool = True) -> None:
    """Copy KEY=VALUE lines of an env file into os.environ.

    Blank lines, comments and lines without ``=`` are skipped and one pair of matching
    quotes around a value is removed. A missing file is not an error.
    """
    env_path = _locate(path)
    if env_path is None:
        return
    for key, value in _parse_env_lines(env_path.read_text(encoding="utf-8")):
        if override_existing or key not in os.environ:
            os.environ[key] = value


def load_default_env_files(
    *, override_existing: bool = True, paths: Sequence[str] | None = None
) -> None:
    for path in DEFAULT_ENV_FILES if paths is None else paths:
        load_env_file(path, override_existing=override_existing)


def _parse_env_lines(text: str) -> Iterator[tuple[str, str]]:
    for raw in text.splitlines():
        line = raw.strip()
        if line.startswith("#"):
            continue
        key, sep, value = line.partition("=")
        key, value = key.strip(), value.strip()
        if not sep or not key:
            continue
        if len(value) >= 2 and value[0] == value[-1] and value[0] in "'\"":
            value = value[1:-1]
        yield key, value


def _env_int(name: str) -> int | None:
    raw = os.getenv(name, "").strip()
    if not raw:
        return None
    try:
        return int(raw)
    except ValueError:
        return None


def _locate(path: str) -> Path | None:
    """Find an env file relative to cwd, a frozen executable, then the project root."""
    relative = Path(path)
    candidates = [relative]
    executable = getattr(sys, "executable", "") if getattr(sys, "frozen", False) else ""
    if executable:
        candidates.append(Path(executable).resolve().parent / relative)
    candidates.append(Path(__file__).resolve().parents[3] / relative)
    return next((candidate for candidate in candidates if candidate.is_file()), None)
