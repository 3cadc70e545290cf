"""Placement session wiring input interpretation to the state machine."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from fleetyard.engine.api.input_events import KeyEvent, PointerEvent, TouchEvent
from fleetyard.game.app.placement_math import grab_index_from_cell, origin_from_grab_index
from fleetyard.game.core.models import FLEET_ORDER, Cell, Orientation, PlacedShip
from fleetyard.game.core.state import PlacementMode, PlacementState
from fleetyard.game.interaction.controller import TOUCH_CANCEL_TYPES, InteractionController
from fleetyard.game.interaction.events import (
    InteractionEvent,
    KeyboardInteractionEvent,
    MouseEventKind,
    MouseInteractionEvent,
    TouchEventKind,
    TouchInteractionEvent,
)
from fleetyard.game.interaction.gestures import SwipeDirection
from fleetyard.game.interaction.keyboard import MOVE_ACTIONS
from fleetyard.game.interaction.shortcuts import SELECT_SHIP_ACTIONS, ShortcutAction
from fleetyard.game.placement.state_machine import PlacementResult, PlacementStateMachine

logger = logging.getLogger(__name__)

_AIMING_MODES = frozenset({PlacementMode.SHIP_SELECTED, PlacementMode.PREVIEWING})


@dataclass(frozen=True, slots=True)
class HeldShip:
    """A placed ship lifted by a drag, restored unless the drop succeeds."""

    previous: PlacedShip
    grab_index: int


class PlacementSession:
    """One player's placement phase: a state machine plus its input controller.

    ``handle_*`` methods take raw input, classify it through the controller and
    apply the semantic event. They return the transition result, or ``None``
    when the event maps to no transition.
    """

    def __init__(
        self,
        machine: PlacementStateMachine | None = None,
        controller: InteractionController | None = None,
    ) -> None:
        self._machine = machine if machine is not None else PlacementStateMachine()
        self._controller = controller if controller is not None else InteractionController()
        if self._controller.config.grid_size != self._machine.grid_size:
            raise ValueError(
                f"Controller grid size {self._controller.config.grid_size} does not match "
                f"placement grid size {self._machine.grid_size}."
            )
        self._held: HeldShip | None = None

    @property
    def machine(self) -> PlacementStateMachine:
        return self._machine

    @property
    def controller(self) -> InteractionController:
        return self._controller

    @property
    def state(self) -> PlacementState:
        return self._machine.state

    @property
    def held(self) -> HeldShip | None:
        return self._held

    def handle_mouse(
        self, kind: str, cell: Cell, raw_event: PointerEvent | None = None
    ) -> PlacementResult | None:
        event = self._controller.process_mouse_event(kind, cell, raw_event, self.state)
        return self.apply(event) if event is not None else None

    def handle_touch(self, raw_event: TouchEvent, cell: Cell) -> PlacementResult | None:
        event = self._controller.process_touch_event(raw_event, cell, self.state)
        if event is not None:
            return self.apply(event)
        if raw_event.event_type.strip().lower() in TOUCH_CANCEL_TYPES:
            return self._restore_held()
        return None

    def handle_key(self, raw_event: KeyEvent | str) -> PlacementResult | None:
        event = self._controller.process_keyboard_event(raw_event, self.state)
        return self.apply(event) if event is not None else None

    def apply(self, event: InteractionEvent) -> PlacementResult | None:
        """Apply one semantic event and announce its outcome."""
        if isinstance(event, MouseInteractionEvent):
            return self._apply_mouse(event)
        if isinstance(event, TouchInteractionEvent):
            return self._apply_touch(event)
        return self._apply_key(event)

    def auto_place(self) -> PlacementResult:
        self._restore_held()
        result = self._machine.auto_place()
        if not result.accepted and result.error is not None:
            self._controller.announce_invalid_placement(result.error.message)
        return result

    def confirm(self) -> PlacementResult:
        """Confirm the fleet and announce its grade."""
        self._restore_held()
        result = self._machine.confirm_fleet()
        if result.accepted:
            quality = self._machine.quality()
            self._controller.announce_fleet_complete(quality.score, quality.grade)
        else:
            self._announce_rejection(result)
        return result

    # Event mapping

    def _apply_mouse(self, event: MouseInteractionEvent) -> PlacementResult | None:
        if event.kind is MouseEventKind.HOVER:
            return self._preview(event.cell)
        if event.kind is MouseEventKind.LEAVE:
            if self.state.mode is PlacementMode.PREVIEWING:
                return self._machine.clear_preview()
            return None
        if event.kind is MouseEventKind.CLICK:
            return self._place(event.cell)
        if event.kind is MouseEventKind.DOUBLE_CLICK:
            return self._rotate_placed(event.cell)
        return self._cancel_or_remove(event.cell)

    def _apply_touch(self, event: TouchInteractionEvent) -> PlacementResult | None:
        kind = event.kind
        if kind is TouchEventKind.TAP:
            return self._place(event.cell)
        if kind is TouchEventKind.DOUBLE_TAP:
            return self._rotate_placed(event.cell)
        if kind is TouchEventKind.LONG_PRESS:
            return self._remove_at(event.cell)
        if kind is TouchEventKind.DRAG_START:
            return self._pick_up(event.start_cell)
        if kind is TouchEventKind.DRAG_MOVE:
            return self._preview(self._drop_origin(event.cell))
        if kind is TouchEventKind.DRAG_END:
            return self._drop(event.cell)
        return self._orient(event.direction)

    def _apply_key(self, event: KeyboardInteractionEvent) -> PlacementResult | None:
        action = event.action
        if action is None:
            logger.debug("key_ignored key=%r", event.key)
            return None
        if action in SELECT_SHIP_ACTIONS:
            self._restore_held()
            kind = FLEET_ORDER[SELECT_SHIP_ACTIONS.index(action)]
            result = self._machine.select_ship(kind)
            if result.accepted:
                self._controller.announce_ship_selection(kind)
            else:
                self._announce_rejection(result)
            return result
        if action in MOVE_ACTIONS:
            focus = self._controller.move_focus(MOVE_ACTIONS[action])
            return self._preview(focus)
        if action is ShortcutAction.ROTATE:
            return self._machine.rotate()
        if action is ShortcutAction.CANCEL:
            if self._held is not None:
                return self._restore_held()
            return self._machine.cancel()
        if action is ShortcutAction.REMOVE:
            return self._remove_at(event.focused_cell)
        if self.state.selected_ship is None and self.state.inventory.is_empty():
            return self.confirm()
        return self._place(event.focused_cell)

    # Transitions with announcements

    def _preview(self, cell: Cell) -> PlacementResult | None:
        if self.state.mode not in _AIMING_MODES:
            return None
        return self._machine.preview_at(cell)

    def _place(self, cell: Cell) -> PlacementResult | None:
        state = self.state
        kind = state.selected_ship
        if kind is None:
            return None
        orientation = state.selected_orientation
        result = self._machine.place(cell)
        if result.accepted:
            self._held = None
            self._controller.announce_ship_placement(kind, cell, orientation)
        else:
            self._announce_rejection(result)
        return result

    def _remove_at(self, cell: Cell) -> PlacementResult | None:
        ship = self._machine.ship_at(cell)
        if ship is None:
            return None
        result = self._machine.remove_at(cell)
        if result.accepted:
            self._controller.announce_ship_removal(ship.kind)
        else:
            self._announce_rejection(result)
        return result

    def _pick_up(self, cell: Cell) -> PlacementResult | None:
        """Lift a placed ship for dragging, or start aiming the selected one."""
        ship = self._machine.ship_at(cell)
        if ship is None:
            return self._preview(cell)
        self._restore_held()
        lifted = self._machine.remove_at(cell)
        if not lifted.accepted:
            self._announce_rejection(lifted)
            return lifted
        self._held = HeldShip(previous=ship, grab_index=grab_index_from_cell(ship, cell))
        logger.debug("ship_lifted kind=%s grab_index=%d", ship.kind.value, self._held.grab_index)
        return self._machine.preview_at(ship.origin)

    def _drop(self, cell: Cell) -> PlacementResult | None:
        """Place the dragged ship; a held ship goes back home if the drop fails.

        A rejected drop returns the rejection even though the held ship has
        already been restored.
        """
        if self._held is None:
            return self._place(cell)
        result = self._place(self._drop_origin(cell))
        if result is not None and result.accepted:
            return result
        self._restore_held()
        return result

    def _drop_origin(self, cell: Cell) -> Cell:
        if self._held is None:
            return cell
        return origin_from_grab_index(cell, self.state.selected_orientation, self._held.grab_index)

    def _restore_held(self) -> PlacementResult | None:
        """Put the held ship back where it was lifted from."""
        held = self._held
        if held is None:
            return None
        self._held = None
        ship = held.previous
        if self.state.selected_ship is not ship.kind:
            selected = self._machine.select_ship(ship.kind)
            if not selected.accepted:
                return selected
        self._machine.set_orientation(ship.orientation)
        result = self._machine.place(ship.origin)
        logger.debug("held_ship_restored kind=%s accepted=%s", ship.kind.value, result.accepted)
        return result

    def _rotate_placed(self, cell: Cell) -> PlacementResult | None:
        if self._machine.ship_at(cell) is None:
            return None
        result = self._machine.rotate_placed_at(cell)
        if not result.accepted:
            self._announce_rejection(result)
        return result

    def _cancel_or_remove(self, cell: Cell) -> PlacementResult | None:
        if self._held is not None:
            return self._restore_held()
        if self.state.selected_ship is not None:
            return self._machine.cancel()
        return self._remove_at(cell)

    def _orient(self, direction: SwipeDirection | None) -> PlacementResult | None:
        if direction is None or self.state.selected_ship is None:
            return None
        if direction in (SwipeDirection.LEFT, SwipeDirection.RIGHT):
            return self._machine.set_orientation(Orientation.HORIZONTAL)
        return self._machine.set_orientation(Orientation.VERTICAL)

    def _announce_rejection(self, result: PlacementResult) -> None:
        if result.error is not None:
            self._controller.announce_invalid_placement(result.error.message)
