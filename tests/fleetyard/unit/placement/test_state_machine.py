import pytest

from fleetyard.game.core.errors import PlacementErrorCode
from fleetyard.game.core.models import Cell, Orientation, ShipKind
from fleetyard.game.core.state import PlacementMode, PlacementState
from fleetyard.game.placement.state_machine import PlacementStateMachine


def test_initial_state_is_idle_with_full_inventory(machine: PlacementStateMachine) -> None:
    state = machine.state
    assert state.mode is PlacementMode.IDLE
    assert state.placed_ships == ()
    assert machine.total_ships_remaining() == 5
    assert machine.total_ships_placed() == 0
    assert not machine.is_fleet_complete()


def test_constructor_rejects_bad_configuration() -> None:
    with pytest.raises(ValueError):
        PlacementStateMachine(grid_size=4)
    with pytest.raises(ValueError):
        PlacementStateMachine(auto_place_attempts=0)


def test_select_ship_enters_ship_selected_horizontal(machine: PlacementStateMachine) -> None:
    result = machine.select_ship(ShipKind.CRUISER)
    assert result.accepted
    assert result.state.mode is PlacementMode.SHIP_SELECTED
    assert result.state.selected_ship is ShipKind.CRUISER
    assert result.state.selected_orientation is Orientation.HORIZONTAL
    assert machine.state is result.state


def test_select_ship_can_switch_kind_while_aiming(machine: PlacementStateMachine) -> None:
    machine.select_ship(ShipKind.CRUISER)
    machine.preview_at(Cell(0, 0))
    result = machine.select_ship(ShipKind.DESTROYER)
    assert result.accepted
    assert result.state.selected_ship is ShipKind.DESTROYER
    assert result.state.preview is None


def test_select_exhausted_kind_is_rejected(machine: PlacementStateMachine, place_ship) -> None:
    place_ship(machine, ShipKind.DESTROYER, Cell(0, 0))
    before = machine.state
    result = machine.select_ship(ShipKind.DESTROYER)
    assert not result.accepted
    assert result.error.code is PlacementErrorCode.INVENTORY_EXHAUSTED
    assert machine.state == before


def test_preview_tracks_legality(machine: PlacementStateMachine) -> None:
    machine.select_ship(ShipKind.CARRIER)
    legal = machine.preview_at(Cell(0, 0))
    assert legal.accepted
    assert legal.state.mode is PlacementMode.PREVIEWING
    assert legal.state.preview.legal
    assert len(legal.state.preview.cells) == 5

    illegal = machine.preview_at(Cell(8, 0))
    assert illegal.accepted
    assert not illegal.state.preview.legal
    assert illegal.state.preview.error.code is PlacementErrorCode.OUT_OF_BOUNDS


def test_preview_without_selection_is_rejected(machine: PlacementStateMachine) -> None:
    result = machine.preview_at(Cell(0, 0))
    assert not result.accepted
    assert result.error.code is PlacementErrorCode.NO_SELECTION


def test_rotate_recomputes_preview(machine: PlacementStateMachine) -> None:
    machine.select_ship(ShipKind.CARRIER)
    machine.preview_at(Cell(8, 0))
    result = machine.rotate()
    assert result.accepted
    preview = result.state.preview
    assert result.state.selected_orientation is Orientation.VERTICAL
    assert preview.orientation is Orientation.VERTICAL
    assert preview.legal
    assert preview.cells[-1] == Cell(8, 4)


def test_rotate_without_selection_is_rejected(machine: PlacementStateMachine) -> None:
    result = machine.rotate()
    assert not result.accepted
    assert result.error.code is PlacementErrorCode.NO_SELECTION


def test_clear_preview_returns_to_ship_selected(machine: PlacementStateMachine) -> None:
    machine.select_ship(ShipKind.CRUISER)
    assert not machine.clear_preview().accepted
    machine.preview_at(Cell(2, 2))
    result = machine.clear_preview()
    assert result.accepted
    assert result.state.mode is PlacementMode.SHIP_SELECTED
    assert result.state.preview is None


def test_place_commits_ship_and_decrements_inventory(machine: PlacementStateMachine) -> None:
    machine.select_ship(ShipKind.BATTLESHIP)
    machine.rotate()
    result = machine.place(Cell(3, 3))
    assert result.accepted
    state = result.state
    assert state.mode is PlacementMode.PLACED
    assert state.selected_ship is None
    assert state.inventory.remaining(ShipKind.BATTLESHIP) == 0
    (ship,) = state.placed_ships
    assert ship.orientation is Orientation.VERTICAL
    assert ship.cells == (Cell(3, 3), Cell(3, 4), Cell(3, 5), Cell(3, 6))


def test_place_without_cell_uses_preview_origin(machine: PlacementStateMachine) -> None:
    machine.select_ship(ShipKind.DESTROYER)
    assert machine.place().error.code is PlacementErrorCode.INVALID_TRANSITION
    machine.preview_at(Cell(4, 7))
    result = machine.place()
    assert result.accepted
    assert machine.ship_at(Cell(5, 7)).kind is ShipKind.DESTROYER


def test_place_without_selection_is_rejected(machine: PlacementStateMachine) -> None:
    result = machine.place(Cell(0, 0))
    assert not result.accepted
    assert result.error.code is PlacementErrorCode.NO_SELECTION


def test_rejected_place_leaves_state_unchanged(machine: PlacementStateMachine, place_ship) -> None:
    place_ship(machine, ShipKind.CARRIER, Cell(0, 0))
    machine.select_ship(ShipKind.CRUISER)
    machine.rotate()
    before = machine.state
    result = machine.place(Cell(2, 0))
    assert not result.accepted
    assert result.error.code is PlacementErrorCode.OVERLAP
    assert result.error.problem_cells == (Cell(2, 0),)
    assert result.state is before
    assert machine.state == before


def test_place_out_of_bounds_is_rejected(machine: PlacementStateMachine) -> None:
    machine.select_ship(ShipKind.CARRIER)
    result = machine.place(Cell(6, 0))
    assert result.error.code is PlacementErrorCode.OUT_OF_BOUNDS
    assert machine.state.selected_ship is ShipKind.CARRIER


def test_remove_restores_inventory_and_reselects(machine: PlacementStateMachine, place_ship) -> None:
    place_ship(machine, ShipKind.SUBMARINE, Cell(1, 1), Orientation.VERTICAL)
    result = machine.remove(ShipKind.SUBMARINE)
    assert result.accepted
    state = result.state
    assert state.placed_ships == ()
    assert state.inventory.remaining(ShipKind.SUBMARINE) == 1
    assert state.mode is PlacementMode.SHIP_SELECTED
    assert state.selected_ship is ShipKind.SUBMARINE
    assert state.selected_orientation is Orientation.VERTICAL


def test_remove_missing_kind_is_not_found(machine: PlacementStateMachine) -> None:
    result = machine.remove(ShipKind.CARRIER)
    assert result.error.code is PlacementErrorCode.NOT_FOUND


def test_remove_kind_with_several_ships_is_ambiguous(place_ship) -> None:
    machine = PlacementStateMachine(composition={ShipKind.DESTROYER: 2})
    place_ship(machine, ShipKind.DESTROYER, Cell(0, 0))
    place_ship(machine, ShipKind.DESTROYER, Cell(0, 5))
    result = machine.remove(ShipKind.DESTROYER)
    assert result.error.code is PlacementErrorCode.AMBIGUOUS_KIND
    assert machine.remove_at(Cell(1, 5)).accepted
    assert machine.total_ships_placed() == 1


def test_remove_at_empty_cell_is_not_found(machine: PlacementStateMachine) -> None:
    result = machine.remove_at(Cell(4, 4))
    assert result.error.code is PlacementErrorCode.NOT_FOUND
    assert result.error.problem_cells == (Cell(4, 4),)


def test_rotate_placed_ship_about_origin(machine: PlacementStateMachine, place_ship) -> None:
    place_ship(machine, ShipKind.DESTROYER, Cell(0, 0))
    result = machine.rotate_placed_at(Cell(1, 0))
    assert result.accepted
    (ship,) = result.state.placed_ships
    assert ship.orientation is Orientation.VERTICAL
    assert ship.cells == (Cell(0, 0), Cell(0, 1))


def test_rotate_placed_ship_rejects_overlap_and_bounds(machine: PlacementStateMachine, place_ship) -> None:
    place_ship(machine, ShipKind.DESTROYER, Cell(0, 0))
    place_ship(machine, ShipKind.CRUISER, Cell(0, 1))
    place_ship(machine, ShipKind.SUBMARINE, Cell(0, 9))
    blocked = machine.rotate_placed_at(Cell(0, 0))
    assert blocked.error.code is PlacementErrorCode.OVERLAP
    outside = machine.rotate_placed_at(Cell(2, 9))
    assert outside.error.code is PlacementErrorCode.OUT_OF_BOUNDS


def test_confirm_requires_complete_fleet(machine: PlacementStateMachine) -> None:
    result = machine.confirm_fleet()
    assert result.error.code is PlacementErrorCode.FLEET_INCOMPLETE
    assert "carrier" in result.error.message


def test_fleet_complete_is_terminal_until_reset(machine: PlacementStateMachine) -> None:
    assert machine.auto_place().accepted
    confirmed = machine.confirm_fleet()
    assert confirmed.accepted
    assert confirmed.state.mode is PlacementMode.FLEET_COMPLETE
    assert machine.is_fleet_complete()

    for attempt in (
        lambda: machine.select_ship(ShipKind.CARRIER),
        machine.clear_all,
        machine.confirm_fleet,
        lambda: machine.remove(ShipKind.CARRIER),
        machine.auto_place,
    ):
        result = attempt()
        assert not result.accepted
        assert result.error.code is PlacementErrorCode.INVALID_TRANSITION

    reset = machine.reset()
    assert reset.accepted
    assert reset.state == PlacementState.initial(10, machine.state.composition)


def test_cancel_drops_selection(machine: PlacementStateMachine) -> None:
    assert machine.cancel().error.code is PlacementErrorCode.NO_SELECTION
    machine.select_ship(ShipKind.CRUISER)
    machine.preview_at(Cell(1, 1))
    result = machine.cancel()
    assert result.accepted
    assert result.state.mode is PlacementMode.IDLE
    assert result.state.preview is None


def test_clear_all_removes_every_ship(machine: PlacementStateMachine) -> None:
    machine.auto_place()
    result = machine.clear_all()
    assert result.accepted
    assert result.state.placed_ships == ()
    assert machine.total_ships_remaining() == 5


def test_subscribers_receive_snapshots_in_order(machine: PlacementStateMachine) -> None:
    seen: list[tuple[str, PlacementMode]] = []
    first = machine.subscribe(lambda state: seen.append(("first", state.mode)))
    machine.subscribe(lambda state: seen.append(("second", state.mode)))

    machine.select_ship(ShipKind.CRUISER)
    machine.place(Cell(20, 20))
    machine.unsubscribe(first)
    machine.cancel()

    assert seen == [
        ("first", PlacementMode.SHIP_SELECTED),
        ("second", PlacementMode.SHIP_SELECTED),
        ("second", PlacementMode.IDLE),
    ]


def test_reentrant_transition_raises(machine: PlacementStateMachine) -> None:
    machine.subscribe(lambda state: machine.rotate())
    with pytest.raises(RuntimeError):
        machine.select_ship(ShipKind.CRUISER)


def test_transition_guard_releases_after_each_call(machine: PlacementStateMachine) -> None:
    assert PlacementStateMachine.place.__name__ == "place"
    assert machine.select_ship(ShipKind.CRUISER).accepted
    assert machine.rotate().accepted
    assert machine.place(Cell(0, 0)).accepted


def test_quality_queries_on_empty_board(machine: PlacementStateMachine) -> None:
    assert machine.placement_score() == 0
    assert machine.placement_grade() == "D"
    assert machine.validate_layout() == []
    assert machine.can_place_ship(ShipKind.CARRIER)
