"""Keyboard shortcut table for the placement screen."""

from __future__ import annotations

from collections.abc import Mapping
from enum import StrEnum
from types import MappingProxyType

from fleetyard.engine.ui_runtime.keymap import map_key_name


class ShortcutAction(StrEnum):
    ROTATE = "rotate"
    CANCEL = "cancel"
    CONFIRM = "confirm"
    REMOVE = "remove"
    MOVE_UP = "move_up"
    MOVE_DOWN = "move_down"
    MOVE_LEFT = "move_left"
    MOVE_RIGHT = "move_right"
    SELECT_SHIP_1 = "select_ship_1"
    SELECT_SHIP_2 = "select_ship_2"
    SELECT_SHIP_3 = "select_ship_3"
    SELECT_SHIP_4 = "select_ship_4"
    SELECT_SHIP_5 = "select_ship_5"


# Display labels per action; matching runs on their normalized form.
KEYBOARD_SHORTCUTS: Mapping[ShortcutAction, tuple[str, ...]] = MappingProxyType(
    {
        ShortcutAction.ROTATE: ("r", "R"),
        ShortcutAction.CANCEL: ("Escape", "Esc"),
        ShortcutAction.CONFIRM: ("Enter", "Space"),
        ShortcutAction.REMOVE: ("Delete", "Backspace"),
        ShortcutAction.MOVE_UP: ("ArrowUp", "w", "W"),
        ShortcutAction.MOVE_DOWN: ("ArrowDown", "s", "S"),
        ShortcutAction.MOVE_LEFT: ("ArrowLeft", "a", "A"),
        ShortcutAction.MOVE_RIGHT: ("ArrowRight", "d", "D"),
        ShortcutAction.SELECT_SHIP_1: ("1",),
        ShortcutAction.SELECT_SHIP_2: ("2",),
        ShortcutAction.SELECT_SHIP_3: ("3",),
        ShortcutAction.SELECT_SHIP_4: ("4",),
        ShortcutAction.SELECT_SHIP_5: ("5",),
    }
)

SELECT_SHIP_ACTIONS: tuple[ShortcutAction, ...] = (
    ShortcutAction.SELECT_SHIP_1,
    ShortcutAction.SELECT_SHIP_2,
    ShortcutAction.SELECT_SHIP_3,
    ShortcutAction.SELECT_SHIP_4,
    ShortcutAction.SELECT_SHIP_5,
)


def _build_key_index() -> dict[str, ShortcutAction]:
    index: dict[str, ShortcutAction] = {}
    for action, labels in KEYBOARD_SHORTCUTS.items():
        for label in labels:
            key = map_key_name(label)
            if key is None:
                continue
            existing = index.get(key)
            if existing is not None and existing is not action:
                raise ValueError(f"Key {label!r} is bound to both {existing} and {action}.")
            index[key] = action
    return index


_KEY_INDEX = _build_key_index()


def match_shortcut(key_name: str) -> ShortcutAction | None:
    """Resolve a raw key name to its action, case-insensitively."""
    key = map_key_name(key_name)
    if key is None:
        return None
    return _KEY_INDEX.get(key)


def matches_shortcut(key_name: str, action: ShortcutAction) -> bool:
    return match_shortcut(key_name) is action


def shortcut_description(action: ShortcutAction) -> str:
    """Return help text such as ``"r or R"``."""
    return " or ".join(KEYBOARD_SHORTCUTS[action])
