"""Pure placement legality checks.

Ships may touch each other; only exact cell overlap is forbidden.
"""

from __future__ import annotations

from collections.abc import Iterable

from fleetyard.game.core.board import cells_hit, occupancy_grid
from fleetyard.game.core.errors import OutOfBoundsError, PlacementError, PlacementErrorCode
from fleetyard.game.core.models import (
    DEFAULT_GRID_SIZE,
    Cell,
    Orientation,
    PlacedShip,
    ShipKind,
    cells_for_ship,
    in_grid,
)
from fleetyard.game.core.state import PlacementState


def compute_occupied_cells(
    origin: Cell,
    orientation: Orientation,
    length: int,
    grid_size: int = DEFAULT_GRID_SIZE,
) -> tuple[Cell, ...]:
    """Return the ordered footprint of a ship, raising if it leaves the grid."""
    cells = cells_for_ship(origin, orientation, length)
    outside = tuple(cell for cell in cells if not in_grid(cell, grid_size))
    if outside:
        raise OutOfBoundsError(outside, grid_size)
    return cells


def check_footprint(
    cells: tuple[Cell, ...],
    placed_ships: Iterable[PlacedShip],
    grid_size: int,
) -> PlacementError | None:
    """Check bounds and overlap for an arbitrary footprint."""
    outside = tuple(cell for cell in cells if not in_grid(cell, grid_size))
    if outside:
        return PlacementError(
            PlacementErrorCode.OUT_OF_BOUNDS,
            "Ship extends outside board boundaries.",
            outside,
        )
    conflicts = cells_hit(occupancy_grid(placed_ships, grid_size), cells)
    if conflicts:
        return PlacementError(
            PlacementErrorCode.OVERLAP,
            "Ship would overlap an existing ship.",
            conflicts,
        )
    return None


def check_placement(
    state: PlacementState,
    kind: ShipKind,
    origin: Cell,
    orientation: Orientation,
) -> PlacementError | None:
    """Return why placing ``kind`` at ``origin`` is illegal, or ``None``."""
    if state.inventory.remaining(kind) <= 0:
        return PlacementError(
            PlacementErrorCode.INVENTORY_EXHAUSTED,
            f"No {kind.value} left to place.",
        )
    cells = cells_for_ship(origin, orientation, kind.length)
    return check_footprint(cells, state.placed_ships, state.grid_size)


def is_legal_placement(
    state: PlacementState,
    kind: ShipKind,
    origin: Cell,
    orientation: Orientation,
) -> bool:
    return check_placement(state, kind, origin, orientation) is None


def legal_placements(state: PlacementState, kind: ShipKind) -> list[tuple[Cell, Orientation]]:
    """Enumerate every legal ``(origin, orientation)`` for ``kind``."""
    if state.inventory.remaining(kind) <= 0:
        return []
    grid = occupancy_grid(state.placed_ships, state.grid_size)
    size = state.grid_size
    result: list[tuple[Cell, Orientation]] = []
    for y in range(size):
        for x in range(size):
            origin = Cell(x, y)
            for orientation in (Orientation.HORIZONTAL, Orientation.VERTICAL):
                cells = cells_for_ship(origin, orientation, kind.length)
                if all(in_grid(cell, size) for cell in cells) and not cells_hit(grid, cells):
                    result.append((origin, orientation))
    return result


def audit_layout(placed_ships: tuple[PlacedShip, ...], grid_size: int) -> list[str]:
    """Exhaustively check pairwise overlap and bounds of a committed layout."""
    problems: list[str] = []
    for i, first in enumerate(placed_ships):
        for second in placed_ships[i + 1 :]:
            if set(first.cells) & set(second.cells):
                problems.append(
                    f"{first.kind.value} at ({first.origin.x}, {first.origin.y}) overlaps "
                    f"{second.kind.value} at ({second.origin.x}, {second.origin.y})"
                )
    for ship in placed_ships:
        if any(not in_grid(cell, grid_size) for cell in ship.cells):
            problems.append(f"{ship.kind.value} extends outside board boundaries")
    return problems
