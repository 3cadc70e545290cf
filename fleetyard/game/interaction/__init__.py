"""Multi-modal input interpretation for the placement screen."""

from fleetyard.game.interaction.accessibility import ANNOUNCEMENT_CAPACITY, AccessibilityAnnouncer
from fleetyard.game.interaction.config import InteractionConfig
from fleetyard.game.interaction.controller import InteractionController
from fleetyard.game.interaction.events import (
    FocusDirection,
    KeyboardInteractionEvent,
    MouseEventKind,
    MouseInteractionEvent,
    TouchEventKind,
    TouchInteractionEvent,
)
from fleetyard.game.interaction.gestures import (
    GestureKind,
    GestureThresholds,
    SwipeDirection,
    calculate_swipe_direction,
    recognize_gesture,
)
from fleetyard.game.interaction.keyboard import KeyboardInteractionManager
from fleetyard.game.interaction.mouse import MouseInteractionManager
from fleetyard.game.interaction.shortcuts import (
    KEYBOARD_SHORTCUTS,
    ShortcutAction,
    match_shortcut,
    matches_shortcut,
    shortcut_description,
)
from fleetyard.game.interaction.touch import TouchInteractionManager

__all__ = [
    "ANNOUNCEMENT_CAPACITY",
    "AccessibilityAnnouncer",
    "FocusDirection",
    "GestureKind",
    "GestureThresholds",
    "InteractionConfig",
    "InteractionController",
    "KEYBOARD_SHORTCUTS",
    "KeyboardInteractionEvent",
    "KeyboardInteractionManager",
    "MouseEventKind",
    "MouseInteractionEvent",
    "MouseInteractionManager",
    "ShortcutAction",
    "SwipeDirection",
    "TouchEventKind",
    "TouchInteractionEvent",
    "TouchInteractionManager",
    "calculate_swipe_direction",
    "match_shortcut",
    "matches_shortcut",
    "recognize_gesture",
    "shortcut_description",
]
