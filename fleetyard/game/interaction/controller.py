"""Single entry point routing raw input to the device managers."""

from __future__ import annotations

import logging
import math
from collections.abc import Callable
from dataclasses import replace

from fleetyard.engine.api.input_events import KeyEvent, PointerEvent, TouchEvent, TouchPoint
from fleetyard.engine.runtime.debug_config import load_debug_config
from fleetyard.engine.runtime.time import TimeSource
from fleetyard.game.core.errors import InvalidCellError
from fleetyard.game.core.models import Cell, Orientation, ShipKind, in_grid
from fleetyard.game.core.state import PlacementState
from fleetyard.game.interaction.accessibility import AccessibilityAnnouncer
from fleetyard.game.interaction.config import InteractionConfig
from fleetyard.game.interaction.events import (
    FocusDirection,
    KeyboardInteractionEvent,
    MouseInteractionEvent,
    TouchInteractionEvent,
)
from fleetyard.game.interaction.gestures import DEFAULT_THRESHOLDS, GestureThresholds
from fleetyard.game.interaction.keyboard import KeyboardInteractionManager
from fleetyard.game.interaction.mouse import MouseInteractionManager
from fleetyard.game.interaction.touch import TouchInteractionManager

logger = logging.getLogger(__name__)

_TOUCH_START = frozenset({"touchstart", "touch_start"})
_TOUCH_MOVE = frozenset({"touchmove", "touch_move"})
_TOUCH_END = frozenset({"touchend", "touch_end"})
TOUCH_CANCEL_TYPES = frozenset({"touchcancel", "touch_cancel"})


class InteractionController:
    """Validate cells and route input to the owning device manager.

    Returned semantic events are passed through unmodified. One controller
    serves one game session.
    """

    def __init__(
        self,
        config: InteractionConfig | None = None,
        *,
        time_source: TimeSource | None = None,
        thresholds: GestureThresholds = DEFAULT_THRESHOLDS,
        announcer: AccessibilityAnnouncer | None = None,
    ) -> None:
        self._config = config if config is not None else InteractionConfig()
        self._mouse = MouseInteractionManager(time_source=time_source)
        self._touch = TouchInteractionManager(time_source=time_source, thresholds=thresholds)
        self._keyboard = KeyboardInteractionManager(lambda: self._config.grid_size)
        self._announcer = announcer if announcer is not None else AccessibilityAnnouncer()
        self._trace = load_debug_config().input_trace_enabled

    @property
    def config(self) -> InteractionConfig:
        return self._config

    @property
    def announcer(self) -> AccessibilityAnnouncer:
        return self._announcer

    @property
    def touch(self) -> TouchInteractionManager:
        return self._touch

    def update_config(self, **changes: object) -> InteractionConfig:
        """Merge ``changes`` into the config; open gestures are kept."""
        self._config = replace(self._config, **changes)
        logger.info("interaction_config_updated changes=%s", sorted(changes))
        return self._config

    def is_valid_cell(self, cell: Cell) -> bool:
        return in_grid(cell, self._config.grid_size)

    def cell_at_pixel(self, x: float, y: float) -> Cell | None:
        """Map canvas pixels to a grid cell, or ``None`` outside the grid."""
        size = self._config.cell_size
        cell = Cell(math.floor(x / size), math.floor(y / size))
        return cell if self.is_valid_cell(cell) else None

    def process_mouse_event(
        self,
        kind: str,
        cell: Cell,
        raw_event: PointerEvent | None = None,
        placement_state: PlacementState | None = None,
    ) -> MouseInteractionEvent | None:
        del placement_state
        self._require_cell(cell)
        self._trace_input("mouse", kind, cell)
        return self._mouse.handle_event(kind, cell, raw_event)

    def process_touch_event(
        self,
        raw_event: TouchEvent,
        cell: Cell,
        placement_state: PlacementState | None = None,
    ) -> TouchInteractionEvent | None:
        """Route a raw touch event; returns ``None`` while touch is disabled."""
        del placement_state
        if not self._config.enable_touch:
            return None
        self._require_cell(cell)
        self._trace_input("touch", raw_event.event_type, cell)
        kind = raw_event.event_type.strip().lower()
        if kind in TOUCH_CANCEL_TYPES:
            self._touch.cancel()
            return None
        if kind in _TOUCH_END and raw_event.changed_touches:
            point: TouchPoint | None = raw_event.changed_touches[0]
        else:
            point = raw_event.primary_point()
        if point is None:
            point = self._cell_centre(cell)
        if kind in _TOUCH_START:
            self._touch.handle_touch_start(cell, point)
            return None
        if kind in _TOUCH_MOVE:
            return self._touch.handle_touch_move(cell, point)
        if kind in _TOUCH_END:
            return self._touch.handle_touch_end(cell, point)
        logger.debug("touch_event_ignored kind=%s", raw_event.event_type)
        return None

    def process_keyboard_event(
        self,
        raw_event: KeyEvent | str,
        placement_state: PlacementState | None = None,
    ) -> KeyboardInteractionEvent | None:
        """Route a key press; returns ``None`` while the keyboard is disabled."""
        if not self._config.enable_keyboard:
            return None
        if self._trace:
            logger.debug("input_trace device=keyboard key=%r", raw_event)
        return self._keyboard.handle_key_down(raw_event, placement_state)

    def move_focus(self, direction: FocusDirection) -> Cell:
        before = self._keyboard.get_focus()
        focus = self._keyboard.move_focus(direction)
        if focus != before:
            self._announce(self._announcer.announce_focus_moved, focus)
        return focus

    def set_focus(self, cell: Cell) -> Cell:
        focus = self._keyboard.set_focus(cell)
        self._announce(self._announcer.announce_focus_set, focus)
        return focus

    def get_focus(self) -> Cell:
        return self._keyboard.get_focus()

    def announce_ship_selection(self, kind: ShipKind) -> None:
        self._announce(self._announcer.announce_ship_selection, kind)

    def announce_ship_placement(self, kind: ShipKind, cell: Cell, orientation: Orientation) -> None:
        self._announce(self._announcer.announce_ship_placement, kind, cell, orientation)

    def announce_ship_removal(self, kind: ShipKind) -> None:
        self._announce(self._announcer.announce_ship_removal, kind)

    def announce_invalid_placement(self, reason: str) -> None:
        self._announce(self._announcer.announce_invalid_placement, reason)

    def announce_fleet_complete(self, score: int, grade: str) -> None:
        self._announce(self._announcer.announce_fleet_complete, score, grade)

    def announce_action(self, text: str) -> None:
        self._announce(self._announcer.announce_action, text)

    def get_recent_announcements(self) -> list[str]:
        return self._announcer.get_recent_announcements()

    def _announce(self, announce: Callable[..., None], *args: object) -> None:
        if self._config.enable_accessibility:
            announce(*args)

    def _require_cell(self, cell: Cell) -> None:
        if not self.is_valid_cell(cell):
            raise InvalidCellError(cell, self._config.grid_size)

    def _cell_centre(self, cell: Cell) -> TouchPoint:
        size = self._config.cell_size
        return TouchPoint((cell.x + 0.5) * size, (cell.y + 0.5) * size)

    def _trace_input(self, device: str, kind: str, cell: Cell) -> None:
        if self._trace:
            logger.debug("input_trace device=%s kind=%s x=%d y=%d", device, kind, cell.x, cell.y)
