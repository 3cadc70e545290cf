"""Placement phase state machine.

Modes run ``idle -> ship_selected -> previewing -> placed``; ``placed`` loops
back to ``ship_selected`` through another selection, and ``fleet_complete``
is terminal until :meth:`PlacementStateMachine.reset`.

Expected user mistakes are returned as rejected :class:`PlacementResult`
values and never change state. Each accepted transition publishes the new
snapshot to subscribers, synchronously and in subscription order.
"""

from __future__ import annotations

import functools
import logging
import random
from collections.abc import Callable
from dataclasses import dataclass, replace
from typing import Concatenate, ParamSpec

from fleetyard.engine.api.events import EventBus, Subscription, create_event_bus
from fleetyard.game.core.errors import PlacementError, PlacementErrorCode
from fleetyard.game.core.fleet import STANDARD_FLEET, FleetComposition, normalize_composition
from fleetyard.game.core.models import (
    DEFAULT_GRID_SIZE,
    Cell,
    Orientation,
    PlacedShip,
    ShipKind,
    cells_for_ship,
)
from fleetyard.game.core.scoring import PlacementQuality, score_placement
from fleetyard.game.core.state import PlacementMode, PlacementPreview, PlacementState
from fleetyard.game.core.validation import audit_layout, check_footprint, check_placement
from fleetyard.game.placement.auto_place import DEFAULT_AUTO_PLACE_ATTEMPTS, auto_place_remaining

logger = logging.getLogger(__name__)

P = ParamSpec("P")

_SELECTABLE_MODES = frozenset(
    {
        PlacementMode.IDLE,
        PlacementMode.SHIP_SELECTED,
        PlacementMode.PREVIEWING,
        PlacementMode.PLACED,
    }
)


@dataclass(frozen=True, slots=True)
class PlacementResult:
    """Outcome of one transition attempt."""

    accepted: bool
    state: PlacementState
    error: PlacementError | None = None


@dataclass(frozen=True, slots=True)
class PlacementStateChanged:
    """Published after every committed transition."""

    state: PlacementState


def _exclusive(
    method: Callable[Concatenate[PlacementStateMachine, P], PlacementResult],
) -> Callable[Concatenate[PlacementStateMachine, P], PlacementResult]:
    """Run a transition to completion before another may start."""

    @functools.wraps(method)
    def wrapper(machine: PlacementStateMachine, *args: P.args, **kwargs: P.kwargs) -> PlacementResult:
        if machine._in_transition:
            raise RuntimeError(f"Re-entrant placement transition: {method.__name__}.")
        machine._in_transition = True
        try:
            return method(machine, *args, **kwargs)
        finally:
            machine._in_transition = False

    return wrapper


class PlacementStateMachine:
    """Owns one player's placement phase."""

    def __init__(
        self,
        *,
        grid_size: int = DEFAULT_GRID_SIZE,
        composition: FleetComposition = STANDARD_FLEET,
        rng: random.Random | None = None,
        auto_place_attempts: int = DEFAULT_AUTO_PLACE_ATTEMPTS,
        event_bus: EventBus | None = None,
    ) -> None:
        if auto_place_attempts <= 0:
            raise ValueError("auto_place_attempts must be > 0")
        self._composition = normalize_composition(composition, grid_size)
        self._grid_size = grid_size
        self._rng = rng if rng is not None else random.Random()
        self._auto_place_attempts = auto_place_attempts
        self._bus = event_bus if event_bus is not None else create_event_bus()
        self._state = PlacementState.initial(grid_size, self._composition)
        self._in_transition = False

    @property
    def state(self) -> PlacementState:
        return self._state

    @property
    def grid_size(self) -> int:
        return self._grid_size

    def subscribe(self, callback: Callable[[PlacementState], None]) -> Subscription:
        """Register a snapshot callback and return its unsubscribe token."""
        return self._bus.subscribe(PlacementStateChanged, lambda event: callback(event.state))

    def unsubscribe(self, subscription: Subscription) -> None:
        self._bus.unsubscribe(subscription)

    # Transitions

    @_exclusive
    def select_ship(self, kind: ShipKind) -> PlacementResult:
        state = self._state
        if state.mode not in _SELECTABLE_MODES:
            return self._reject("select_ship", PlacementErrorCode.INVALID_TRANSITION, "Fleet is already confirmed.")
        if state.inventory.remaining(kind) <= 0:
            return self._reject(
                "select_ship",
                PlacementErrorCode.INVENTORY_EXHAUSTED,
                f"No {kind.value} left to place.",
            )
        return self._commit(
            replace(
                state,
                mode=PlacementMode.SHIP_SELECTED,
                selected_ship=kind,
                selected_orientation=Orientation.HORIZONTAL,
                preview=None,
            )
        )

    @_exclusive
    def rotate(self) -> PlacementResult:
        return self._orient("rotate", self._state.selected_orientation.toggled())

    @_exclusive
    def set_orientation(self, orientation: Orientation) -> PlacementResult:
        return self._orient("set_orientation", orientation)

    @_exclusive
    def preview_at(self, cell: Cell) -> PlacementResult:
        state = self._state
        if state.selected_ship is None or state.mode not in (
            PlacementMode.SHIP_SELECTED,
            PlacementMode.PREVIEWING,
        ):
            return self._reject("preview_at", PlacementErrorCode.NO_SELECTION, "Select a ship first.")
        preview = self._build_preview(state, state.selected_ship, cell, state.selected_orientation)
        return self._commit(replace(state, mode=PlacementMode.PREVIEWING, preview=preview))

    @_exclusive
    def clear_preview(self) -> PlacementResult:
        state = self._state
        if state.mode is not PlacementMode.PREVIEWING:
            return self._reject("clear_preview", PlacementErrorCode.INVALID_TRANSITION, "Nothing is being previewed.")
        return self._commit(replace(state, mode=PlacementMode.SHIP_SELECTED, preview=None))

    @_exclusive
    def place(self, cell: Cell | None = None) -> PlacementResult:
        """Commit the selected ship at ``cell`` or at the current preview origin."""
        state = self._state
        if state.mode is PlacementMode.FLEET_COMPLETE:
            return self._reject("place", PlacementErrorCode.INVALID_TRANSITION, "Fleet is already confirmed.")
        kind = state.selected_ship
        if kind is None:
            return self._reject("place", PlacementErrorCode.NO_SELECTION, "Select a ship first.")
        origin = cell if cell is not None else (state.preview.origin if state.preview else None)
        if origin is None:
            return self._reject("place", PlacementErrorCode.INVALID_TRANSITION, "No target cell to place at.")
        orientation = state.selected_orientation
        error = check_placement(state, kind, origin, orientation)
        if error is not None:
            return self._reject("place", error.code, error.message, error.problem_cells)
        ship = PlacedShip.create(kind, origin, orientation)
        logger.debug("ship_placed kind=%s x=%d y=%d orientation=%s", kind.value, origin.x, origin.y, orientation.value)
        return self._commit(
            replace(
                state,
                mode=PlacementMode.PLACED,
                selected_ship=None,
                preview=None,
                placed_ships=state.placed_ships + (ship,),
                inventory=state.inventory.adjusted(kind, -1),
            )
        )

    @_exclusive
    def remove(self, kind: ShipKind) -> PlacementResult:
        """Remove the only placed ship of ``kind`` and re-select it."""
        state = self._state
        if state.mode is PlacementMode.FLEET_COMPLETE:
            return self._reject("remove", PlacementErrorCode.INVALID_TRANSITION, "Fleet is already confirmed.")
        ships = state.ships_of(kind)
        if not ships:
            return self._reject("remove", PlacementErrorCode.NOT_FOUND, f"No {kind.value} is placed.")
        if len(ships) > 1:
            return self._reject(
                "remove",
                PlacementErrorCode.AMBIGUOUS_KIND,
                f"{len(ships)} ships of kind {kind.value} are placed; remove one by cell.",
            )
        return self._commit(self._without(state, ships[0]))

    @_exclusive
    def remove_at(self, cell: Cell) -> PlacementResult:
        state = self._state
        if state.mode is PlacementMode.FLEET_COMPLETE:
            return self._reject("remove_at", PlacementErrorCode.INVALID_TRANSITION, "Fleet is already confirmed.")
        ship = state.ship_at(cell)
        if ship is None:
            return self._reject(
                "remove_at",
                PlacementErrorCode.NOT_FOUND,
                f"No ship at grid {cell.x}, {cell.y}.",
                (cell,),
            )
        return self._commit(self._without(state, ship))

    @_exclusive
    def rotate_placed_at(self, cell: Cell) -> PlacementResult:
        """Rotate a placed ship about its origin if the new footprint is legal."""
        state = self._state
        if state.mode is PlacementMode.FLEET_COMPLETE:
            return self._reject("rotate_placed_at", PlacementErrorCode.INVALID_TRANSITION, "Fleet is already confirmed.")
        ship = state.ship_at(cell)
        if ship is None:
            return self._reject(
                "rotate_placed_at",
                PlacementErrorCode.NOT_FOUND,
                f"No ship at grid {cell.x}, {cell.y}.",
                (cell,),
            )
        others = tuple(other for other in state.placed_ships if other != ship)
        orientation = ship.orientation.toggled()
        cells = cells_for_ship(ship.origin, orientation, ship.length)
        error = check_footprint(cells, others, state.grid_size)
        if error is not None:
            return self._reject("rotate_placed_at", error.code, error.message, error.problem_cells)
        rotated = PlacedShip(ship.kind, ship.origin, orientation, cells)
        placed = tuple(rotated if other == ship else other for other in state.placed_ships)
        next_state = replace(state, placed_ships=placed)
        if next_state.preview is not None and next_state.selected_ship is not None:
            next_state = replace(
                next_state,
                preview=self._build_preview(
                    next_state,
                    next_state.selected_ship,
                    next_state.preview.origin,
                    next_state.selected_orientation,
                ),
            )
        return self._commit(next_state)

    @_exclusive
    def auto_place(
        self,
        *,
        rng: random.Random | None = None,
        max_attempts: int | None = None,
    ) -> PlacementResult:
        """Randomly place every remaining ship.

        On exhaustion the result is rejected but ``result.state`` keeps the
        ships placed before the failing one, and that state is committed.
        """
        state = self._state
        if state.mode is PlacementMode.FLEET_COMPLETE:
            return self._reject("auto_place", PlacementErrorCode.INVALID_TRANSITION, "Fleet is already confirmed.")
        placed_state, error = auto_place_remaining(
            state,
            rng if rng is not None else self._rng,
            max_attempts if max_attempts is not None else self._auto_place_attempts,
        )
        settled = replace(
            placed_state,
            mode=PlacementMode.PLACED if placed_state.placed_ships else PlacementMode.IDLE,
            selected_ship=None,
            selected_orientation=Orientation.HORIZONTAL,
            preview=None,
        )
        if error is None:
            return self._commit(settled)
        if placed_state.placed_ships == state.placed_ships:
            return self._reject("auto_place", error.code, error.message)
        committed = self._commit(settled)
        return PlacementResult(accepted=False, state=committed.state, error=error)

    @_exclusive
    def clear_all(self) -> PlacementResult:
        if self._state.mode is PlacementMode.FLEET_COMPLETE:
            return self._reject("clear_all", PlacementErrorCode.INVALID_TRANSITION, "Fleet is already confirmed.")
        return self._commit(PlacementState.initial(self._grid_size, self._composition))

    @_exclusive
    def cancel(self) -> PlacementResult:
        """Drop the current selection and preview."""
        state = self._state
        if state.selected_ship is None:
            return self._reject("cancel", PlacementErrorCode.NO_SELECTION, "Nothing is selected.")
        return self._commit(replace(state, mode=PlacementMode.IDLE, selected_ship=None, preview=None))

    @_exclusive
    def confirm_fleet(self) -> PlacementResult:
        state = self._state
        if state.mode is PlacementMode.FLEET_COMPLETE:
            return self._reject("confirm_fleet", PlacementErrorCode.INVALID_TRANSITION, "Fleet is already confirmed.")
        if not state.inventory.is_empty():
            missing = ", ".join(
                f"{count} {kind.value}" for kind, count in state.inventory.counts if count > 0
            )
            return self._reject(
                "confirm_fleet",
                PlacementErrorCode.FLEET_INCOMPLETE,
                f"Ships still to place: {missing}.",
            )
        logger.info("fleet_confirmed ships=%d", len(state.placed_ships))
        return self._commit(
            replace(state, mode=PlacementMode.FLEET_COMPLETE, selected_ship=None, preview=None)
        )

    @_exclusive
    def reset(self) -> PlacementResult:
        """Start a new placement phase with the same grid and fleet."""
        return self._commit(PlacementState.initial(self._grid_size, self._composition))

    # Queries

    def can_place_ship(self, kind: ShipKind) -> bool:
        return self._state.inventory.remaining(kind) > 0

    def ship_at(self, cell: Cell) -> PlacedShip | None:
        return self._state.ship_at(cell)

    def is_fleet_complete(self) -> bool:
        return self._state.fleet_complete

    def total_ships_placed(self) -> int:
        return len(self._state.placed_ships)

    def total_ships_remaining(self) -> int:
        return self._state.inventory.total()

    def validate_layout(self) -> list[str]:
        return audit_layout(self._state.placed_ships, self._grid_size)

    def quality(self) -> PlacementQuality:
        return score_placement(self._state.placed_ships, self._grid_size)

    def placement_score(self) -> int:
        return self.quality().score

    def placement_grade(self) -> str:
        return self.quality().grade

    # Internals

    def _orient(self, op: str, orientation: Orientation) -> PlacementResult:
        state = self._state
        if state.selected_ship is None:
            return self._reject(op, PlacementErrorCode.NO_SELECTION, "Select a ship first.")
        next_state = replace(state, selected_orientation=orientation)
        if state.preview is not None:
            next_state = replace(
                next_state,
                preview=self._build_preview(state, state.selected_ship, state.preview.origin, orientation),
            )
        return self._commit(next_state)

    @staticmethod
    def _build_preview(
        state: PlacementState,
        kind: ShipKind,
        origin: Cell,
        orientation: Orientation,
    ) -> PlacementPreview:
        error = check_placement(state, kind, origin, orientation)
        return PlacementPreview(
            origin=origin,
            orientation=orientation,
            cells=cells_for_ship(origin, orientation, kind.length),
            legal=error is None,
            error=error,
        )

    @staticmethod
    def _without(state: PlacementState, ship: PlacedShip) -> PlacementState:
        return replace(
            state,
            mode=PlacementMode.SHIP_SELECTED,
            selected_ship=ship.kind,
            selected_orientation=ship.orientation,
            preview=None,
            placed_ships=tuple(other for other in state.placed_ships if other != ship),
            inventory=state.inventory.adjusted(ship.kind, 1),
        )

    def _commit(self, state: PlacementState) -> PlacementResult:
        self._state = state
        self._bus.publish(PlacementStateChanged(state))
        return PlacementResult(accepted=True, state=state)

    def _reject(
        self,
        op: str,
        code: PlacementErrorCode,
        message: str,
        problem_cells: tuple[Cell, ...] = (),
    ) -> PlacementResult:
        logger.debug("placement_rejected op=%s code=%s mode=%s", op, code.value, self._state.mode.value)
        return PlacementResult(
            accepted=False,
            state=self._state,
            error=PlacementError(code, message, problem_cells),
        )
