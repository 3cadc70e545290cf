"""Mouse click, hover and context-menu classification."""

from __future__ import annotations

import logging

from fleetyard.engine.api.input_events import PointerEvent
from fleetyard.engine.runtime.time import TimeSource, monotonic_ms
from fleetyard.game.core.models import Cell
from fleetyard.game.interaction.events import MouseEventKind, MouseInteractionEvent

DOUBLE_CLICK_MS = 300.0

logger = logging.getLogger(__name__)

_RAW_KINDS = {
    "click": MouseEventKind.CLICK,
    "hover": MouseEventKind.HOVER,
    "mousemove": MouseEventKind.HOVER,
    "leave": MouseEventKind.LEAVE,
    "mouseleave": MouseEventKind.LEAVE,
    "rightclick": MouseEventKind.RIGHT_CLICK,
    "contextmenu": MouseEventKind.RIGHT_CLICK,
}


class MouseInteractionManager:
    """Turn raw mouse input on grid cells into semantic mouse events."""

    def __init__(
        self,
        *,
        time_source: TimeSource | None = None,
        double_click_ms: float = DOUBLE_CLICK_MS,
    ) -> None:
        if double_click_ms <= 0.0:
            raise ValueError("double_click_ms must be > 0")
        self._time_source = time_source or monotonic_ms
        self._double_click_ms = double_click_ms
        self._last_click: tuple[Cell, float] | None = None

    def handle_event(
        self,
        kind: str,
        cell: Cell,
        raw_event: PointerEvent | None = None,
    ) -> MouseInteractionEvent | None:
        """Dispatch by raw event name; unknown names emit nothing."""
        semantic = _RAW_KINDS.get(kind.strip().lower())
        if semantic is None:
            logger.debug("mouse_event_ignored kind=%s", kind)
            return None
        if semantic is MouseEventKind.CLICK:
            return self.handle_click(cell)
        if semantic is MouseEventKind.RIGHT_CLICK:
            return self.handle_right_click(cell, raw_event)
        if semantic is MouseEventKind.LEAVE:
            return self.handle_leave(cell)
        return self.handle_hover(cell)

    def handle_click(self, cell: Cell) -> MouseInteractionEvent:
        """Emit ``click``, or ``doubleclick`` for a second click on the same cell in time."""
        now = self._time_source()
        last = self._last_click
        if last is not None and last[0] == cell and now - last[1] < self._double_click_ms:
            self._last_click = None
            return MouseInteractionEvent(MouseEventKind.DOUBLE_CLICK, cell, now)
        self._last_click = (cell, now)
        return MouseInteractionEvent(MouseEventKind.CLICK, cell, now)

    def handle_hover(self, cell: Cell) -> MouseInteractionEvent:
        return MouseInteractionEvent(MouseEventKind.HOVER, cell, self._time_source())

    def handle_leave(self, cell: Cell) -> MouseInteractionEvent:
        return MouseInteractionEvent(MouseEventKind.LEAVE, cell, self._time_source())

    def handle_right_click(
        self, cell: Cell, raw_event: PointerEvent | None = None
    ) -> MouseInteractionEvent:
        """Emit ``rightclick`` and suppress the host context menu."""
        if raw_event is not None:
            raw_event.prevent_default()
        return MouseInteractionEvent(MouseEventKind.RIGHT_CLICK, cell, self._time_source())

    def reset(self) -> None:
        self._last_click = None
