"""Keyboard focus cursor and key-down classification."""

from __future__ import annotations

from collections.abc import Callable

from fleetyard.engine.api.input_events import KeyEvent
from fleetyard.engine.ui_runtime.keymap import map_key_name
from fleetyard.game.core.models import Cell
from fleetyard.game.core.state import PlacementState
from fleetyard.game.interaction.events import FocusDirection, KeyboardInteractionEvent
from fleetyard.game.interaction.shortcuts import ShortcutAction, match_shortcut

MOVE_ACTIONS = {
    ShortcutAction.MOVE_UP: FocusDirection.UP,
    ShortcutAction.MOVE_DOWN: FocusDirection.DOWN,
    ShortcutAction.MOVE_LEFT: FocusDirection.LEFT,
    ShortcutAction.MOVE_RIGHT: FocusDirection.RIGHT,
}


class KeyboardInteractionManager:
    """Own the keyboard focus cell and classify key presses.

    The grid size is read on every call so a config change takes effect on
    the next key press.
    """

    def __init__(self, grid_size: Callable[[], int], *, initial_focus: Cell = Cell(0, 0)) -> None:
        self._grid_size = grid_size
        self._focus = self._clamp(initial_focus)

    def get_focus(self) -> Cell:
        self._focus = self._clamp(self._focus)
        return self._focus

    def set_focus(self, cell: Cell) -> Cell:
        """Move focus to ``cell``, clamped to the grid."""
        self._focus = self._clamp(cell)
        return self._focus

    def move_focus(self, direction: FocusDirection) -> Cell:
        """Step focus one cell; moves past an edge leave it unchanged."""
        dx, dy = direction.delta
        self._focus = self._clamp(self.get_focus().offset(dx, dy))
        return self._focus

    def handle_key_down(
        self,
        event: KeyEvent | str,
        placement_state: PlacementState | None = None,
    ) -> KeyboardInteractionEvent | None:
        """Emit a key event with the normalized key, focus and matched action.

        Unrecognized keys are still emitted with ``action=None``; only an
        empty key emits nothing. Focus is not moved here.
        """
        del placement_state
        raw = event.value if isinstance(event, KeyEvent) else event
        key = map_key_name(raw)
        if key is None:
            return None
        return KeyboardInteractionEvent(key=key, focused_cell=self.get_focus(), action=match_shortcut(raw))

    def _clamp(self, cell: Cell) -> Cell:
        last = self._grid_size() - 1
        return Cell(min(max(cell.x, 0), last), min(max(cell.y, 0), last))
