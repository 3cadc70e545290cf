"""Screen-reader announcement log."""

from __future__ import annotations

import logging
from collections import deque
from collections.abc import Callable

from fleetyard.game.core.models import Cell, Orientation, ShipKind

ANNOUNCEMENT_CAPACITY = 10

logger = logging.getLogger(__name__)


class AccessibilityAnnouncer:
    """Bounded FIFO of announcements, most recent last.

    ``sink`` receives every message as it is announced, for example to feed
    a live region.
    """

    def __init__(
        self,
        *,
        capacity: int = ANNOUNCEMENT_CAPACITY,
        sink: Callable[[str], None] | None = None,
    ) -> None:
        if capacity <= 0:
            raise ValueError("capacity must be > 0")
        self._log: deque[str] = deque(maxlen=capacity)
        self._sink = sink

    def announce_action(self, text: str) -> None:
        self._log.append(text)
        logger.debug("announcement text=%s", text)
        if self._sink is not None:
            self._sink(text)

    # Selection and placement capitalize the kind; removal keeps it lower-case.
    def announce_ship_selection(self, kind: ShipKind) -> None:
        self.announce_action(f"{kind.value.capitalize()} selected for placement")

    def announce_ship_placement(self, kind: ShipKind, cell: Cell, orientation: Orientation) -> None:
        self.announce_action(
            f"{kind.value.capitalize()} placed at grid {cell.x}, {cell.y} in {orientation.value} orientation"
        )

    def announce_ship_removal(self, kind: ShipKind) -> None:
        self.announce_action(f"{kind.value} removed from grid")

    def announce_invalid_placement(self, reason: str) -> None:
        self.announce_action(f"Invalid placement: {reason}")

    def announce_fleet_complete(self, score: int, grade: str) -> None:
        self.announce_action(f"Fleet deployment complete. Strategy grade {grade} with score {score}")

    def announce_focus_moved(self, cell: Cell) -> None:
        self.announce_action(f"Focus moved to grid {cell.x}, {cell.y}")

    def announce_focus_set(self, cell: Cell) -> None:
        self.announce_action(f"Focus set to grid {cell.x}, {cell.y}")

    def get_recent_announcements(self) -> list[str]:
        return list(self._log)

    def clear(self) -> None:
        self._log.clear()
