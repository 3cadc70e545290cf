"""Numpy-backed occupancy grids built from placed ships."""

from __future__ import annotations

from collections.abc import Iterable

import numpy as np

from fleetyard.game.core.models import Cell, PlacedShip, in_grid

EMPTY = 0


def occupancy_grid(ships: Iterable[PlacedShip], grid_size: int) -> np.ndarray:
    """Return a ``(grid_size, grid_size)`` array indexed ``[y, x]``.

    Each occupied cell holds the 1-based index of its ship; empty cells are 0.
    Cells outside the grid are ignored.
    """
    grid = np.zeros((grid_size, grid_size), dtype=np.int16)
    for ship_id, ship in enumerate(ships, start=1):
        for cell in ship.cells:
            if in_grid(cell, grid_size):
                grid[cell.y, cell.x] = ship_id
    return grid


def occupied_mask(ships: Iterable[PlacedShip], grid_size: int) -> np.ndarray:
    """Return a boolean occupancy mask indexed ``[y, x]``."""
    return occupancy_grid(ships, grid_size) != EMPTY


def cells_hit(grid: np.ndarray, cells: Iterable[Cell]) -> tuple[Cell, ...]:
    """Return the cells from ``cells`` that are already occupied in ``grid``."""
    size = grid.shape[0]
    return tuple(
        cell for cell in cells if in_grid(cell, size) and grid[cell.y, cell.x] != EMPTY
    )


def neighbour_counts(mask: np.ndarray) -> np.ndarray:
    """Count occupied 8-neighbours of every cell in a boolean mask."""
    padded = np.pad(mask.astype(np.int16), 1)
    size_y, size_x = mask.shape
    total = np.zeros(mask.shape, dtype=np.int16)
    for dy in (-1, 0, 1):
        for dx in (-1, 0, 1):
            if dx == 0 and dy == 0:
                continue
            total += padded[1 + dy : 1 + dy + size_y, 1 + dx : 1 + dx + size_x]
    return total
