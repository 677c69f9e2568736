"""Headless AI-versus-fleet games for comparing difficulty hit rates."""

from __future__ import annotations

import logging
import random
from collections.abc import Sequence
from dataclasses import dataclass

from battleships.game.ai.factory import build_ai_strategy
from battleships.game.core.errors import TargetingExhausted
from battleships.game.core.models import BOARD_SIZE, AttackOutcome, Difficulty, ShipPlacement, Side
from battleships.game.core.player import Player
from battleships.game.core.resolver import resolve_attack

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class SimulationStats:
    """Aggregate hit statistics of one difficulty over many games."""

    difficulty: Difficulty
    games: int
    shots: int
    hits: int

    @property
    def hit_rate(self) -> float:
        return self.hits / self.shots if self.shots else 0.0

    @property
    def average_shots(self) -> float:
        return self.shots / self.games if self.games else 0.0


def build_fleet(placements: Sequence[ShipPlacement], size: int = BOARD_SIZE) -> Player:
    """Deploy a target fleet from fixed placements."""
    player = Player("Target", size)
    for placement in placements:
        player.place_ship(placement.name, placement.start, placement.orientation)
    if not player.is_deployed:
        missing = ", ".join(name.value for name in player.missing_ships)
        raise ValueError(f"Missing ships: {missing}.")
    return player


def play_game(difficulty: Difficulty, rng: random.Random, target: Player) -> tuple[int, int]:
    """Let one AI attack a deployed fleet until it is destroyed. Returns (shots, hits)."""
    strategy = build_ai_strategy(difficulty, rng, target.grid.size)
    shots = 0
    hits = 0
    for _ in range(target.grid.size * target.grid.size):
        coord = strategy.next_target()
        result = resolve_attack(target, coord.row, coord.col, attacker=Side.AI)
        if result.outcome is AttackOutcome.SHOT_ALREADY:
            raise TargetingExhausted(f"{difficulty.value} AI repeated ({coord.row}, {coord.col})")
        strategy.notify_result(result)
        shots += 1
        hits += int(result.outcome.is_hit)
        if result.outcome is AttackOutcome.GAME_OVER:
            return shots, hits
    raise TargetingExhausted(f"{difficulty.value} AI ran out of cells before the fleet was destroyed")


def simulate_games(
    difficulty: Difficulty,
    games: int,
    rng: random.Random,
    placements: Sequence[ShipPlacement],
    size: int = BOARD_SIZE,
) -> SimulationStats:
    """Play `games` games against the same fleet layout and aggregate the results."""
    total_shots = 0
    total_hits = 0
    for _ in range(games):
        shots, hits = play_game(difficulty, rng, build_fleet(placements, size))
        total_shots += shots
        total_hits += hits
    stats = SimulationStats(difficulty=difficulty, games=games, shots=total_shots, hits=total_hits)
    logger.info(
        "simulation difficulty=%s games=%d hit_rate=%.3f average_shots=%.1f",
        difficulty.value,
        games,
        stats.hit_rate,
        stats.average_shots,
    )
    return stats
