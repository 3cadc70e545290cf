"""Interaction layer configuration."""

from __future__ import annotations

from dataclasses import dataclass

from fleetyard.game.core.models import DEFAULT_GRID_SIZE

DEFAULT_CELL_SIZE = 40


@dataclass(frozen=True, slots=True)
class InteractionConfig:
    """Immutable interaction settings, replaced wholesale on update."""

    grid_size: int = DEFAULT_GRID_SIZE
    cell_size: int = DEFAULT_CELL_SIZE
    enable_touch: bool = True
    enable_keyboard: bool = True
    enable_accessibility: bool = True

    def __post_init__(self) -> None:
        if self.grid_size <= 0:
            raise ValueError("grid_size must be > 0")
        if self.cell_size <= 0:
            raise ValueError("cell_size must be > 0")
