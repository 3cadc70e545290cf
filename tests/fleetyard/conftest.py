from __future__ import annotations

import random

import pytest

from fleetyard.game.core.models import Cell, Orientation, ShipKind
from fleetyard.game.interaction.controller import InteractionController
from fleetyard.game.placement.state_machine import PlacementResult, PlacementStateMachine


class FakeClock:
    """Manually advanced millisecond clock."""

    def __init__(self, start_ms: float = 1_000.0) -> None:
        self.now_ms = start_ms

    def __call__(self) -> float:
        return self.now_ms

    def advance(self, ms: float) -> None:
        self.now_ms += ms


def _place_ship(
    machine: PlacementStateMachine,
    kind: ShipKind,
    origin: Cell,
    orientation: Orientation = Orientation.HORIZONTAL,
) -> PlacementResult:
    selected = machine.select_ship(kind)
    assert selected.accepted, selected.error
    if orientation is not Orientation.HORIZONTAL:
        machine.set_orientation(orientation)
    return machine.place(origin)


@pytest.fixture
def seeded_rng() -> random.Random:
    return random.Random(1337)


@pytest.fixture
def machine(seeded_rng: random.Random) -> PlacementStateMachine:
    return PlacementStateMachine(rng=seeded_rng)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def controller(clock: FakeClock) -> InteractionController:
    return InteractionController(time_source=clock)


@pytest.fixture
def place_ship():
    return _place_ship
