"""Geometry helpers for dragging placed ships."""

from __future__ import annotations

from fleetyard.game.core.models import Cell, Orientation, PlacedShip


def grab_index_from_cell(ship: PlacedShip, cell: Cell) -> int:
    """Compute relative grab index inside a ship from a touched cell."""
    if ship.orientation is Orientation.HORIZONTAL:
        return max(0, cell.x - ship.origin.x)
    return max(0, cell.y - ship.origin.y)


def origin_from_grab_index(cell: Cell, orientation: Orientation, grab_index: int) -> Cell:
    """Resolve the ship origin from the cell under the finger and the grab index."""
    if orientation is Orientation.HORIZONTAL:
        return Cell(cell.x - grab_index, cell.y)
    return Cell(cell.x, cell.y - grab_index)
