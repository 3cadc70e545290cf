"""Pure touch gesture classification."""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import StrEnum

from fleetyard.engine.api.input_events import TouchPoint


class GestureKind(StrEnum):
    TAP = "tap"
    SWIPE = "swipe"
    DRAG = "drag"


class SwipeDirection(StrEnum):
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"


@dataclass(frozen=True, slots=True)
class GestureThresholds:
    """Pixel and millisecond limits for gesture classification."""

    tap_max_distance: float = 10.0
    swipe_min_distance: float = 50.0
    swipe_max_duration_ms: float = 300.0
    double_tap_ms: float = 300.0
    long_press_ms: float = 500.0

    def __post_init__(self) -> None:
        if self.tap_max_distance <= 0.0:
            raise ValueError("tap_max_distance must be > 0")
        if self.swipe_min_distance < self.tap_max_distance:
            raise ValueError("swipe_min_distance must be >= tap_max_distance")
        if self.swipe_max_duration_ms <= 0.0:
            raise ValueError("swipe_max_duration_ms must be > 0")


DEFAULT_THRESHOLDS = GestureThresholds()


def distance(start: TouchPoint, end: TouchPoint) -> float:
    return math.hypot(end.x - start.x, end.y - start.y)


def recognize_gesture(
    start: TouchPoint,
    end: TouchPoint,
    duration_ms: float,
    thresholds: GestureThresholds = DEFAULT_THRESHOLDS,
) -> GestureKind:
    """Classify one touch sequence as tap, swipe or drag.

    Checks run in order (tap, swipe, drag) so every input maps to exactly
    one gesture.
    """
    displacement = distance(start, end)
    if displacement < thresholds.tap_max_distance:
        return GestureKind.TAP
    if displacement > thresholds.swipe_min_distance and duration_ms < thresholds.swipe_max_duration_ms:
        return GestureKind.SWIPE
    return GestureKind.DRAG


def calculate_swipe_direction(start: TouchPoint, end: TouchPoint) -> SwipeDirection:
    """Return the sign of the dominant axis; ties resolve vertically."""
    dx = end.x - start.x
    dy = end.y - start.y
    if abs(dx) > abs(dy):
        return SwipeDirection.RIGHT if dx > 0 else SwipeDirection.LEFT
    return SwipeDirection.DOWN if dy >= 0 else SwipeDirection.UP
