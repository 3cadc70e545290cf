"""Immutable placement-phase snapshots."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

from fleetyard.game.core.errors import PlacementError
from fleetyard.game.core.fleet import FleetInventory
from fleetyard.game.core.models import Cell, Orientation, PlacedShip, ShipKind


class PlacementMode(StrEnum):
    """Placement phase states."""

    IDLE = "idle"
    SHIP_SELECTED = "ship_selected"
    PREVIEWING = "previewing"
    PLACED = "placed"
    FLEET_COMPLETE = "fleet_complete"


@dataclass(frozen=True, slots=True)
class PlacementPreview:
    """Tentative footprint shown while the player aims a selected ship."""

    origin: Cell
    orientation: Orientation
    cells: tuple[Cell, ...]
    legal: bool
    error: PlacementError | None = None


@dataclass(frozen=True, slots=True)
class PlacementState:
    """Read-only snapshot of the placement phase."""

    grid_size: int
    composition: tuple[tuple[ShipKind, int], ...]
    mode: PlacementMode = PlacementMode.IDLE
    selected_ship: ShipKind | None = None
    selected_orientation: Orientation = Orientation.HORIZONTAL
    preview: PlacementPreview | None = None
    placed_ships: tuple[PlacedShip, ...] = ()
    inventory: FleetInventory = FleetInventory(counts=())

    @classmethod
    def initial(cls, grid_size: int, composition: tuple[tuple[ShipKind, int], ...]) -> PlacementState:
        return cls(grid_size=grid_size, composition=composition, inventory=FleetInventory.full(composition))

    @property
    def fleet_complete(self) -> bool:
        return self.inventory.is_empty()

    def count_allowed(self, kind: ShipKind) -> int:
        for entry_kind, count in self.composition:
            if entry_kind is kind:
                return count
        return 0

    def ships_of(self, kind: ShipKind) -> tuple[PlacedShip, ...]:
        return tuple(ship for ship in self.placed_ships if ship.kind is kind)

    def ship_at(self, cell: Cell) -> PlacedShip | None:
        for ship in self.placed_ships:
            if ship.occupies(cell):
                return ship
        return None
