"""Error taxonomy for deployment, flow and targeting failures."""

from __future__ import annotations

from enum import StrEnum

from battleships.game.core.models import ShipName


class PlacementFailure(StrEnum):
    """Reason a ship placement was rejected."""

    OUT_OF_BOUNDS = "OUT_OF_BOUNDS"
    OVERLAP = "OVERLAP"


class PlacementError(ValueError):
    """Ship placement rejected during deployment; caller should re-prompt."""

    def __init__(self, kind: PlacementFailure, ship: ShipName) -> None:
        self.kind = kind
        self.ship = ship
        if kind is PlacementFailure.OUT_OF_BOUNDS:
            message = f"{ship.label} does not fit on the grid there."
        else:
            message = f"{ship.label} overlaps another ship."
        super().__init__(message)


class InvalidTransition(RuntimeError):
    """Operation not legal in the current phase, turn or screen state."""


class TargetingExhausted(RuntimeError):
    """AI strategy has no untried cell left or proposed a repeated shot."""
