import random

import pytest

from fleetyard.game.core.models import FLEET_ORDER, Cell, Orientation, ShipKind
from fleetyard.game.core.state import PlacementState
from fleetyard.game.core.validation import is_legal_placement
from fleetyard.game.placement.state_machine import PlacementStateMachine


def _assert_invariants(state: PlacementState) -> None:
    for kind, allowed in state.composition:
        remaining = state.inventory.remaining(kind)
        assert 0 <= remaining <= allowed
        assert remaining + len(state.ships_of(kind)) == allowed
    ships = state.placed_ships
    for i, first in enumerate(ships):
        for second in ships[i + 1 :]:
            assert not set(first.cells) & set(second.cells)
    for ship in ships:
        assert all(0 <= cell.x < state.grid_size and 0 <= cell.y < state.grid_size for cell in ship.cells)


@pytest.mark.parametrize("seed", [1, 7, 42, 1337])
def test_random_operation_sequences_preserve_invariants(seed: int) -> None:
    rng = random.Random(seed)
    machine = PlacementStateMachine(rng=random.Random(seed))

    def random_cell() -> Cell:
        return Cell(rng.randrange(-1, 11), rng.randrange(-1, 11))

    operations = [
        lambda: machine.select_ship(rng.choice(FLEET_ORDER)),
        machine.rotate,
        lambda: machine.preview_at(random_cell()),
        lambda: machine.place(random_cell()),
        machine.place,
        lambda: machine.remove(rng.choice(FLEET_ORDER)),
        lambda: machine.remove_at(random_cell()),
        lambda: machine.rotate_placed_at(random_cell()),
        machine.cancel,
    ]
    for _ in range(400):
        before = machine.state
        result = rng.choice(operations)()
        if not result.accepted:
            assert machine.state == before
        _assert_invariants(machine.state)


@pytest.mark.parametrize("seed", range(8))
def test_auto_place_yields_legal_complete_fleet(seed: int) -> None:
    machine = PlacementStateMachine(rng=random.Random(seed))
    result = machine.auto_place()
    assert result.accepted
    assert machine.is_fleet_complete()
    assert machine.validate_layout() == []
    _assert_invariants(result.state)


def test_auto_place_is_reproducible_with_seed() -> None:
    first = PlacementStateMachine(rng=random.Random(99)).auto_place().state
    second = PlacementStateMachine(rng=random.Random(99)).auto_place().state
    assert first.placed_ships == second.placed_ships


def test_auto_place_keeps_manual_ships(machine: PlacementStateMachine, place_ship) -> None:
    place_ship(machine, ShipKind.CARRIER, Cell(0, 0), Orientation.VERTICAL)
    result = machine.auto_place()
    assert result.accepted
    assert machine.ship_at(Cell(0, 4)).kind is ShipKind.CARRIER
    assert machine.total_ships_placed() == 5


def test_place_then_remove_round_trip(machine: PlacementStateMachine, place_ship) -> None:
    inventory_before = machine.state.inventory
    place_ship(machine, ShipKind.CRUISER, Cell(4, 4), Orientation.VERTICAL)
    assert machine.state.inventory != inventory_before
    machine.remove(ShipKind.CRUISER)
    assert machine.state.inventory == inventory_before
    assert machine.state.placed_ships == ()


def test_illegal_place_is_deep_equal_before_and_after(machine: PlacementStateMachine, place_ship) -> None:
    place_ship(machine, ShipKind.BATTLESHIP, Cell(5, 5))
    machine.select_ship(ShipKind.DESTROYER)
    machine.preview_at(Cell(6, 5))
    before = machine.state
    for cell in (Cell(5, 5), Cell(9, 0), Cell(-1, 3)):
        machine.place(cell)
        assert machine.state == before
    assert not is_legal_placement(before, ShipKind.DESTROYER, Cell(9, 0), Orientation.HORIZONTAL)
