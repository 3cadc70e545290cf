"""Randomized bounded-retry auto placement."""

from __future__ import annotations

import logging
import random
from dataclasses import replace

from fleetyard.game.core.errors import PlacementError, PlacementErrorCode
from fleetyard.game.core.models import Cell, Orientation, PlacedShip, ShipKind
from fleetyard.game.core.state import PlacementState
from fleetyard.game.core.validation import is_legal_placement

DEFAULT_AUTO_PLACE_ATTEMPTS = 100

logger = logging.getLogger(__name__)


def auto_place_remaining(
    state: PlacementState,
    rng: random.Random,
    max_attempts: int = DEFAULT_AUTO_PLACE_ATTEMPTS,
) -> tuple[PlacementState, PlacementError | None]:
    """Place every remaining ship at random legal positions.

    The attempt budget applies per ship. When one ship exhausts its budget the
    ships placed before it stay in the returned state alongside the error.
    Mode and selection are left for the caller to settle.
    """
    if max_attempts <= 0:
        raise ValueError("max_attempts must be > 0")
    working = state
    for kind, count in state.inventory.counts:
        for _ in range(count):
            ship = _sample_legal_ship(working, kind, rng, max_attempts)
            if ship is None:
                logger.info(
                    "auto_place_exhausted kind=%s attempts=%d placed=%d",
                    kind.value,
                    max_attempts,
                    len(working.placed_ships),
                )
                return working, PlacementError(
                    PlacementErrorCode.AUTO_PLACE_FAILED,
                    f"Could not find a legal position for {kind.value} in {max_attempts} attempts.",
                )
            working = replace(
                working,
                placed_ships=working.placed_ships + (ship,),
                inventory=working.inventory.adjusted(kind, -1),
            )
    return working, None


def _sample_legal_ship(
    state: PlacementState,
    kind: ShipKind,
    rng: random.Random,
    max_attempts: int,
) -> PlacedShip | None:
    size = state.grid_size
    span = size - kind.length + 1
    for _ in range(max_attempts):
        orientation = rng.choice((Orientation.HORIZONTAL, Orientation.VERTICAL))
        if orientation is Orientation.HORIZONTAL:
            origin = Cell(rng.randrange(span), rng.randrange(size))
        else:
            origin = Cell(rng.randrange(size), rng.randrange(span))
        if is_legal_placement(state, kind, origin, orientation):
            return PlacedShip.create(kind, origin, orientation)
    return None
