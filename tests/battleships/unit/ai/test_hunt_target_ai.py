import random

from battleships.game.ai.hunt_target import HuntTargetAI
from battleships.game.core.models import AttackOutcome, AttackResult, Coord, ShipName


def test_hunt_target_ai_probes_neighbours_after_hit() -> None:
    ai = HuntTargetAI(random.Random(1))
    ai.notify_result(AttackResult(AttackOutcome.HIT, 5, 5, ship=ShipName.DESTROYER))
    assert ai.is_targeting
    probes = set()
    for _ in range(4):
        shot = ai.next_target()
        probes.add(shot)
        ai.notify_result(AttackResult(AttackOutcome.MISS, shot.row, shot.col))
    assert probes == {Coord(4, 5), Coord(6, 5), Coord(5, 4), Coord(5, 6)}
    assert not ai.is_targeting


def test_hunt_target_ai_follows_latest_hit_first() -> None:
    ai = HuntTargetAI(random.Random(2))
    ai.notify_result(AttackResult(AttackOutcome.HIT, 0, 0, ship=ShipName.BATTLESHIP))
    ai.notify_result(AttackResult(AttackOutcome.HIT, 7, 7, ship=ShipName.SUBMARINE))
    shot = ai.next_target()
    assert abs(shot.row - 7) + abs(shot.col - 7) == 1


def test_hunt_target_ai_skips_corner_neighbours_outside_grid() -> None:
    ai = HuntTargetAI(random.Random(3))
    ai.notify_result(AttackResult(AttackOutcome.HIT, 0, 0, ship=ShipName.DESTROYER))
    first = ai.next_target()
    ai.notify_result(AttackResult(AttackOutcome.MISS, first.row, first.col))
    second = ai.next_target()
    assert {first, second} == {Coord(1, 0), Coord(0, 1)}


def test_hunt_target_ai_destroyed_does_not_queue_neighbours() -> None:
    ai = HuntTargetAI(random.Random(4))
    ai.notify_result(AttackResult(AttackOutcome.DESTROYED, 3, 3, ship=ShipName.TUG))
    assert not ai.is_targeting
    assert not ai.is_untried(3, 3)
