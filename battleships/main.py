"""Application entry point: headless difficulty benchmark."""

from __future__ import annotations

import argparse
import logging
import random
from collections.abc import Sequence

from battleships.game.app.simulation import SimulationStats, simulate_games
from battleships.game.core.models import Difficulty, ShipPlacement
from battleships.game.core.player import Player
from battleships.game.infra.app_data import ensure_app_data_dirs
from battleships.game.infra.config import load_default_env_files, load_game_config
from battleships.game.infra.logging import setup_logging, shutdown_logging

logger = logging.getLogger(__name__)


def run_benchmark(games: int, seed: int | None, board_size: int) -> list[SimulationStats]:
    """Simulate every difficulty against one random but fixed fleet layout."""
    rng = random.Random(seed)
    layout = Player("Layout", board_size)
    layout.randomize_deployment(rng)
    placements: list[ShipPlacement] = [ship.placement for ship in layout.ships]
    return [
        simulate_games(difficulty, games, random.Random(rng.getrandbits(32)), placements, board_size)
        for difficulty in Difficulty
    ]


def main(argv: Sequence[str] | None = None) -> None:
    """Run the Battleships difficulty benchmark."""
    load_default_env_files()
    paths = ensure_app_data_dirs()
    setup_logging()
    config = load_game_config()
    logger.info("app_data_paths root=%s logs=%s", paths.root, paths.logs)

    parser = argparse.ArgumentParser(description="Compare AI difficulty hit rates over simulated games")
    parser.add_argument("--games", type=int, default=config.simulation_games, help="Games per difficulty")
    parser.add_argument("--seed", type=int, default=config.seed, help="Seed for layout and AI choices")
    args = parser.parse_args(argv)

    try:
        for stats in run_benchmark(max(1, args.games), args.seed, config.board_size):
            print(
                f"{stats.difficulty.value:<6} games={stats.games} "
                f"hit_rate={stats.hit_rate:.3f} average_shots={stats.average_shots:.1f}"
            )
    finally:
        shutdown_logging()


if __name__ == "__main__":
    main()
