"""Semantic interaction events emitted by the device managers."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

from fleetyard.game.core.models import Cell
from fleetyard.game.interaction.gestures import SwipeDirection
from fleetyard.game.interaction.shortcuts import ShortcutAction


class MouseEventKind(StrEnum):
    CLICK = "click"
    DOUBLE_CLICK = "doubleclick"
    HOVER = "hover"
    LEAVE = "leave"
    RIGHT_CLICK = "rightclick"


class TouchEventKind(StrEnum):
    TAP = "tap"
    DOUBLE_TAP = "doubletap"
    LONG_PRESS = "longpress"
    DRAG_START = "dragstart"
    DRAG_MOVE = "dragmove"
    DRAG_END = "dragend"
    SWIPE = "swipe"


class FocusDirection(StrEnum):
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"

    @property
    def delta(self) -> tuple[int, int]:
        return _FOCUS_DELTAS[self]


_FOCUS_DELTAS = {
    FocusDirection.UP: (0, -1),
    FocusDirection.DOWN: (0, 1),
    FocusDirection.LEFT: (-1, 0),
    FocusDirection.RIGHT: (1, 0),
}


@dataclass(frozen=True, slots=True)
class MouseInteractionEvent:
    kind: MouseEventKind
    cell: Cell
    timestamp_ms: float


@dataclass(frozen=True, slots=True)
class TouchInteractionEvent:
    """Classified touch event.

    ``start_cell`` is where the sequence began; ``direction`` is set only
    for swipes.
    """

    kind: TouchEventKind
    cell: Cell
    timestamp_ms: float
    start_cell: Cell
    direction: SwipeDirection | None = None


@dataclass(frozen=True, slots=True)
class KeyboardInteractionEvent:
    """Key press with the normalized key, current focus and matched action."""

    key: str
    focused_cell: Cell
    action: ShortcutAction | None = None


InteractionEvent = MouseInteractionEvent | TouchInteractionEvent | KeyboardInteractionEvent
