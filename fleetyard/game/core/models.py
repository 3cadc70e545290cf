"""Core domain models used by placement logic."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from enum import StrEnum
from types import MappingProxyType

DEFAULT_GRID_SIZE = 10


class Orientation(StrEnum):
    """Ship orientation."""

    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"

    def toggled(self) -> Orientation:
        if self is Orientation.HORIZONTAL:
            return Orientation.VERTICAL
        return Orientation.HORIZONTAL


class ShipKind(StrEnum):
    """Classic fleet ship kinds."""

    CARRIER = "carrier"
    BATTLESHIP = "battleship"
    CRUISER = "cruiser"
    SUBMARINE = "submarine"
    DESTROYER = "destroyer"

    @property
    def spec(self) -> ShipSpec:
        return SHIP_SPECS[self]

    @property
    def length(self) -> int:
        return SHIP_SPECS[self].length


@dataclass(frozen=True, slots=True)
class ShipSpec:
    """Static description of one ship kind."""

    kind: ShipKind
    name: str
    length: int
    count_allowed: int


SHIP_SPECS: Mapping[ShipKind, ShipSpec] = MappingProxyType(
    {
        ShipKind.CARRIER: ShipSpec(ShipKind.CARRIER, "Aircraft Carrier", 5, 1),
        ShipKind.BATTLESHIP: ShipSpec(ShipKind.BATTLESHIP, "Battleship", 4, 1),
        ShipKind.CRUISER: ShipSpec(ShipKind.CRUISER, "Cruiser", 3, 1),
        ShipKind.SUBMARINE: ShipSpec(ShipKind.SUBMARINE, "Submarine", 3, 1),
        ShipKind.DESTROYER: ShipSpec(ShipKind.DESTROYER, "Destroyer", 2, 1),
    }
)

# Shortcut keys 1-5 select kinds in this order.
FLEET_ORDER: tuple[ShipKind, ...] = (
    ShipKind.CARRIER,
    ShipKind.BATTLESHIP,
    ShipKind.CRUISER,
    ShipKind.SUBMARINE,
    ShipKind.DESTROYER,
)


@dataclass(frozen=True, slots=True)
class Cell:
    """Board coordinate; ``x`` is the column and ``y`` the row."""

    x: int
    y: int

    def offset(self, dx: int, dy: int) -> Cell:
        return Cell(self.x + dx, self.y + dy)


def cells_for_ship(origin: Cell, orientation: Orientation, length: int) -> tuple[Cell, ...]:
    """Compute the ordered footprint of a ship without any bounds check."""
    if orientation is Orientation.HORIZONTAL:
        return tuple(Cell(origin.x + i, origin.y) for i in range(length))
    return tuple(Cell(origin.x, origin.y + i) for i in range(length))


def in_grid(cell: Cell, grid_size: int) -> bool:
    """Return whether the cell lies inside a square grid."""
    return 0 <= cell.x < grid_size and 0 <= cell.y < grid_size


@dataclass(frozen=True, slots=True)
class PlacedShip:
    """A committed ship; ``cells`` is derived from origin, orientation and kind."""

    kind: ShipKind
    origin: Cell
    orientation: Orientation
    cells: tuple[Cell, ...]

    @classmethod
    def create(cls, kind: ShipKind, origin: Cell, orientation: Orientation) -> PlacedShip:
        return cls(kind, origin, orientation, cells_for_ship(origin, orientation, kind.length))

    @property
    def length(self) -> int:
        return len(self.cells)

    def occupies(self, cell: Cell) -> bool:
        return cell in self.cells
