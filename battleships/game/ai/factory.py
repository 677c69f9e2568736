"""Strategy selection from the configured difficulty."""

from __future__ import annotations

import logging
import random

from battleships.game.ai.hunt_target import HuntTargetAI
from battleships.game.ai.pattern_hard import PatternHardAI
from battleships.game.ai.random_shot import RandomShotAI
from battleships.game.ai.strategy import AIStrategy
from battleships.game.core.models import BOARD_SIZE, Difficulty

logger = logging.getLogger(__name__)

_STRATEGIES: dict[Difficulty, type[AIStrategy]] = {
    Difficulty.EASY: RandomShotAI,
    Difficulty.MEDIUM: HuntTargetAI,
    Difficulty.HARD: PatternHardAI,
}


def resolve_difficulty(value: Difficulty | str | None) -> Difficulty:
    """Map a difficulty name to a level; anything unset or unknown plays as Hard."""
    if isinstance(value, Difficulty):
        return value
    if value:
        normalized = value.strip().lower()
        for level in Difficulty:
            if level.value.lower() == normalized or level.name.lower() == normalized:
                return level
        logger.warning("unknown_difficulty value=%s fallback=%s", value, Difficulty.HARD.value)
    return Difficulty.HARD


def build_ai_strategy(
    difficulty: Difficulty | str | None, rng: random.Random, size: int = BOARD_SIZE
) -> AIStrategy:
    """Construct AI strategy from selected difficulty."""
    selected = resolve_difficulty(difficulty)
    return _STRATEGIES[selected](rng, size)
