"""Outcome delivery contract between the session and presentation."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Protocol

from battleships.game.core.models import AttackResult, Side


class OutcomeSink(Protocol):
    """Receives attack outcomes for drawing, sound cues and animation."""

    def on_attack(self, result: AttackResult) -> None:
        """Called once per resolved attack."""

    def on_grid_changed(self, owner: Side) -> None:
        """Called once per grid mutation with the owner of the changed grid."""


@dataclass(slots=True)
class RecordingSink:
    """Sink that keeps everything it receives, in order."""

    results: list[AttackResult] = field(default_factory=list)
    changed_grids: list[Side] = field(default_factory=list)

    def on_attack(self, result: AttackResult) -> None:
        self.results.append(result)

    def on_grid_changed(self, owner: Side) -> None:
        self.changed_grids.append(owner)

    def clear(self) -> None:
        self.results.clear()
        self.changed_grids.clear()
