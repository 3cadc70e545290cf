"""Placement rejection reasons and contract-violation exceptions."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

from fleetyard.game.core.models import Cell


class PlacementErrorCode(StrEnum):
    """Closed set of reasons a placement transition can be rejected."""

    OUT_OF_BOUNDS = "out_of_bounds"
    OVERLAP = "overlap"
    INVENTORY_EXHAUSTED = "inventory_exhausted"
    NOT_FOUND = "not_found"
    AMBIGUOUS_KIND = "ambiguous_kind"
    NO_SELECTION = "no_selection"
    FLEET_INCOMPLETE = "fleet_incomplete"
    AUTO_PLACE_FAILED = "auto_place_failed"
    INVALID_TRANSITION = "invalid_transition"


@dataclass(frozen=True, slots=True)
class PlacementError:
    """Rejection value returned by validation and state transitions."""

    code: PlacementErrorCode
    message: str
    problem_cells: tuple[Cell, ...] = ()


class OutOfBoundsError(ValueError):
    """Raised when a footprint is requested that leaves the grid."""

    def __init__(self, cells: tuple[Cell, ...], grid_size: int) -> None:
        self.cells = cells
        self.grid_size = grid_size
        coords = ", ".join(f"({cell.x}, {cell.y})" for cell in cells)
        super().__init__(f"Cells outside {grid_size}x{grid_size} grid: {coords}.")


class InvalidCellError(ValueError):
    """Raised when input is routed for a cell outside the configured grid."""

    def __init__(self, cell: Cell, grid_size: int) -> None:
        self.cell = cell
        self.grid_size = grid_size
        super().__init__(f"Cell ({cell.x}, {cell.y}) is outside the {grid_size}x{grid_size} grid.")
