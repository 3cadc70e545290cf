"""Touch sequence tracking and classification."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from fleetyard.engine.api.input_events import TouchPoint
from fleetyard.engine.runtime.time import TimeSource, monotonic_ms
from fleetyard.game.core.models import Cell
from fleetyard.game.interaction.events import TouchEventKind, TouchInteractionEvent
from fleetyard.game.interaction.gestures import (
    DEFAULT_THRESHOLDS,
    GestureKind,
    GestureThresholds,
    calculate_swipe_direction,
    distance,
    recognize_gesture,
)

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class Gesture:
    """Open touch sequence, consumed on touch end."""

    start_cell: Cell
    start_point: TouchPoint
    start_time_ms: float
    dragging: bool = False


class TouchInteractionManager:
    """Classify touch start/move/end sequences into semantic touch events."""

    def __init__(
        self,
        *,
        time_source: TimeSource | None = None,
        thresholds: GestureThresholds = DEFAULT_THRESHOLDS,
    ) -> None:
        self._time_source = time_source or monotonic_ms
        self._thresholds = thresholds
        self._gesture: Gesture | None = None
        self._last_tap: tuple[Cell, float] | None = None

    @property
    def active_gesture(self) -> Gesture | None:
        return self._gesture

    def handle_touch_start(self, cell: Cell, point: TouchPoint) -> None:
        """Open a gesture; a still-open one is superseded."""
        if self._gesture is not None:
            logger.debug("touch_gesture_superseded start_cell=%s", self._gesture.start_cell)
        self._gesture = Gesture(start_cell=cell, start_point=point, start_time_ms=self._time_source())

    def handle_touch_move(self, cell: Cell, point: TouchPoint) -> TouchInteractionEvent | None:
        """Emit ``dragstart`` once movement leaves tap range, then ``dragmove``."""
        gesture = self._gesture
        if gesture is None:
            return None
        now = self._time_source()
        if not gesture.dragging:
            if distance(gesture.start_point, point) < self._thresholds.tap_max_distance:
                return None
            gesture.dragging = True
            return TouchInteractionEvent(TouchEventKind.DRAG_START, gesture.start_cell, now, gesture.start_cell)
        return TouchInteractionEvent(TouchEventKind.DRAG_MOVE, cell, now, gesture.start_cell)

    def handle_touch_end(self, cell: Cell, point: TouchPoint) -> TouchInteractionEvent | None:
        """Resolve and consume the open gesture.

        A started drag always ends with ``dragend``, even back on its start
        cell. Otherwise ending on the start cell yields ``longpress``,
        ``doubletap`` or ``tap``; ending elsewhere yields ``swipe`` or
        ``dragend``. Without an open gesture nothing is emitted.
        """
        gesture = self._gesture
        self._gesture = None
        if gesture is None:
            logger.debug("touch_end_without_start cell=%s", cell)
            return None
        now = self._time_source()
        duration = now - gesture.start_time_ms
        if gesture.dragging:
            self._last_tap = None
            return TouchInteractionEvent(TouchEventKind.DRAG_END, cell, now, gesture.start_cell)
        if cell == gesture.start_cell:
            return self._resolve_tap(cell, now, duration)
        self._last_tap = None
        kind = recognize_gesture(gesture.start_point, point, duration, self._thresholds)
        if kind is GestureKind.SWIPE:
            return TouchInteractionEvent(
                TouchEventKind.SWIPE,
                cell,
                now,
                gesture.start_cell,
                direction=calculate_swipe_direction(gesture.start_point, point),
            )
        return TouchInteractionEvent(TouchEventKind.DRAG_END, cell, now, gesture.start_cell)

    def cancel(self) -> None:
        """Drop the open gesture without emitting anything."""
        self._gesture = None

    def _resolve_tap(self, cell: Cell, now: float, duration: float) -> TouchInteractionEvent:
        if duration >= self._thresholds.long_press_ms:
            self._last_tap = None
            return TouchInteractionEvent(TouchEventKind.LONG_PRESS, cell, now, cell)
        last = self._last_tap
        if last is not None and last[0] == cell and now - last[1] < self._thresholds.double_tap_ms:
            self._last_tap = None
            return TouchInteractionEvent(TouchEventKind.DOUBLE_TAP, cell, now, cell)
        self._last_tap = (cell, now)
        return TouchInteractionEvent(TouchEventKind.TAP, cell, now, cell)
