"""Fleet composition rules and remaining-inventory bookkeeping."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType

from fleetyard.game.core.models import FLEET_ORDER, SHIP_SPECS, ShipKind

FleetComposition = Mapping[ShipKind, int]

STANDARD_FLEET: FleetComposition = MappingProxyType(
    {kind: SHIP_SPECS[kind].count_allowed for kind in FLEET_ORDER}
)


def normalize_composition(
    composition: FleetComposition, grid_size: int
) -> tuple[tuple[ShipKind, int], ...]:
    """Validate a fleet composition and return it in fleet order.

    Kinds missing from ``composition`` get a count of zero.
    """
    if grid_size <= 0:
        raise ValueError("grid_size must be > 0")
    unknown = [kind for kind in composition if not isinstance(kind, ShipKind)]
    if unknown:
        raise ValueError(f"Unknown ship kinds in fleet composition: {unknown!r}.")
    ordered: list[tuple[ShipKind, int]] = []
    total_cells = 0
    for kind in FLEET_ORDER:
        count = int(composition.get(kind, 0))
        if count < 0:
            raise ValueError(f"Fleet count for {kind.value} must be >= 0.")
        if count and kind.length > grid_size:
            raise ValueError(f"{kind.value} does not fit on a {grid_size}x{grid_size} grid.")
        total_cells += count * kind.length
        ordered.append((kind, count))
    if total_cells > grid_size * grid_size:
        raise ValueError(f"Fleet needs {total_cells} cells but the grid only has {grid_size * grid_size}.")
    return tuple(ordered)


@dataclass(frozen=True, slots=True)
class FleetInventory:
    """Remaining ships per kind, in fleet order."""

    counts: tuple[tuple[ShipKind, int], ...]

    @classmethod
    def full(cls, composition: tuple[tuple[ShipKind, int], ...]) -> FleetInventory:
        return cls(counts=composition)

    def remaining(self, kind: ShipKind) -> int:
        for entry_kind, count in self.counts:
            if entry_kind is kind:
                return count
        return 0

    def adjusted(self, kind: ShipKind, delta: int) -> FleetInventory:
        """Return a copy with ``kind`` changed by ``delta``."""
        return FleetInventory(
            counts=tuple(
                (entry_kind, count + delta if entry_kind is kind else count)
                for entry_kind, count in self.counts
            )
        )

    def total(self) -> int:
        return sum(count for _, count in self.counts)

    def is_empty(self) -> bool:
        return all(count == 0 for _, count in self.counts)

    def kinds_remaining(self) -> tuple[ShipKind, ...]:
        return tuple(kind for kind, count in self.counts if count > 0)

    def as_dict(self) -> dict[ShipKind, int]:
        return dict(self.counts)
