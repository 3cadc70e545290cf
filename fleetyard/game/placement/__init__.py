"""Placement phase state machine."""

from fleetyard.game.placement.auto_place import DEFAULT_AUTO_PLACE_ATTEMPTS, auto_place_remaining
from fleetyard.game.placement.state_machine import (
    PlacementResult,
    PlacementStateChanged,
    PlacementStateMachine,
)

__all__ = [
    "DEFAULT_AUTO_PLACE_ATTEMPTS",
    "PlacementResult",
    "PlacementStateChanged",
    "PlacementStateMachine",
    "auto_place_remaining",
]
