"""Attack outcome evaluation (hit/miss/destroyed/game over/shot already)."""

from __future__ import annotations

import logging

from battleships.game.core.models import AttackOutcome, AttackResult, CellState, Side
from battleships.game.core.player import Player

logger = logging.getLogger(__name__)


def resolve_attack(defender: Player, row: int, col: int, attacker: Side = Side.HUMAN) -> AttackResult:
    """Resolve one attack against the defender's grid."""
    grid = defender.grid
    if not grid.in_bounds(row, col):
        logger.debug("attack_out_of_bounds attacker=%s row=%d col=%d", attacker.value, row, col)
        return AttackResult(AttackOutcome.SHOT_ALREADY, row, col, attacker=attacker)

    state = grid.cell_state(row, col)
    if state in (CellState.HIT, CellState.MISS):
        result = AttackResult(AttackOutcome.SHOT_ALREADY, row, col, attacker=attacker)
    elif state is CellState.EMPTY:
        grid.mark_miss(row, col)
        result = AttackResult(AttackOutcome.MISS, row, col, attacker=attacker)
    else:
        ship = grid.mark_hit(row, col)
        if not ship.is_destroyed:
            outcome = AttackOutcome.HIT
        elif defender.is_destroyed:
            outcome = AttackOutcome.GAME_OVER
        else:
            outcome = AttackOutcome.DESTROYED
        result = AttackResult(outcome, row, col, ship=ship.name, attacker=attacker)

    logger.debug(
        "attack_resolved attacker=%s row=%d col=%d outcome=%s",
        attacker.value,
        row,
        col,
        result.outcome.value,
    )
    return result
