"""Derived layout quality score.

Scores are recomputed from the committed layout on demand and never stored
as authoritative state.
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Literal

import numpy as np

from fleetyard.game.core.board import neighbour_counts, occupied_mask
from fleetyard.game.core.models import DEFAULT_GRID_SIZE, Cell, PlacedShip

Grade = Literal["A", "B", "C", "D"]

WEIGHTS = {
    "distribution": 0.30,
    "unpredictability": 0.25,
    "defense": 0.25,
    "efficiency": 0.20,
}


@dataclass(frozen=True, slots=True)
class PlacementMetrics:
    distribution: int
    unpredictability: int
    defense: int
    efficiency: int


@dataclass(frozen=True, slots=True)
class PlacementQuality:
    """Overall score (0-100), letter grade and per-metric breakdown."""

    score: int
    grade: Grade
    metrics: PlacementMetrics


def score_placement(
    ships: Sequence[PlacedShip], grid_size: int = DEFAULT_GRID_SIZE
) -> PlacementQuality:
    """Score a layout; an empty layout scores 0 with grade D."""
    if not ships:
        return PlacementQuality(0, "D", PlacementMetrics(0, 0, 0, 0))
    metrics = PlacementMetrics(
        distribution=distribution_score(ships, grid_size),
        unpredictability=unpredictability_score(ships, grid_size),
        defense=defense_score(ships, grid_size),
        efficiency=efficiency_score(ships, grid_size),
    )
    score = _round_half_up(
        metrics.distribution * WEIGHTS["distribution"]
        + metrics.unpredictability * WEIGHTS["unpredictability"]
        + metrics.defense * WEIGHTS["defense"]
        + metrics.efficiency * WEIGHTS["efficiency"]
    )
    return PlacementQuality(score, placement_grade(score), metrics)


def placement_score(ships: Sequence[PlacedShip], grid_size: int = DEFAULT_GRID_SIZE) -> int:
    return score_placement(ships, grid_size).score


def placement_grade(score: int) -> Grade:
    if score >= 90:
        return "A"
    if score >= 80:
        return "B"
    if score >= 70:
        return "C"
    return "D"


def distribution_score(ships: Sequence[PlacedShip], grid_size: int) -> int:
    """Reward an even spread of ship centres across the four quadrants."""
    if not ships:
        return 0
    half = grid_size / 2
    quadrants = np.zeros(4)
    for ship in ships:
        cx, cy = _centre(ship.cells)
        quadrants[(1 if cy >= half else 0) * 2 + (1 if cx >= half else 0)] += 1
    total = len(ships)
    variance = float(np.mean((quadrants - total / 4) ** 2))
    max_variance = total**2 / 4
    return max(0, _round_half_up(100 - variance / max_variance * 100))


def unpredictability_score(ships: Sequence[PlacedShip], grid_size: int) -> int:
    """Penalise lines, edge bias, mirrored pairs and clusters."""
    if len(ships) < 2:
        return 50
    score = 100.0
    score -= _linear_patterns(ships) * 20
    score -= _edge_bias(ships, grid_size) * 15
    score -= _symmetry(ships, grid_size) * 10
    score -= _clustering(ships) * 15
    return max(0, _round_half_up(score))


def defense_score(ships: Sequence[PlacedShip], grid_size: int) -> int:
    """Favour large ships near edges, small ships nearer the centre, and corners."""
    if not ships:
        return 0
    total = 0.0
    for ship in ships:
        if ship.length >= 4:
            total += max(0, 30 - _min_edge_distance(ship.cells, grid_size) * 10)
        if ship.length <= 2:
            total += max(0.0, 20 - _mean_centre_distance(ship.cells, grid_size) * 5)
        total += _concealment_bonus(ship, grid_size)
    return max(0, min(100, _round_half_up(total / len(ships))))


def efficiency_score(ships: Sequence[PlacedShip], grid_size: int) -> int:
    """Board coverage minus a penalty for empty cells hugging ships."""
    if not ships:
        return 0
    total_cells = grid_size * grid_size
    mask = occupied_mask(ships, grid_size)
    used = sum(ship.length for ship in ships)
    # Each occupied cell contributes its empty in-bounds neighbours.
    wasted = int(neighbour_counts(~mask)[mask].sum())
    penalty = min(50.0, wasted / total_cells * 100)
    return max(0, _round_half_up(used / total_cells * 100 - penalty))


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def _centre(cells: Sequence[Cell]) -> tuple[float, float]:
    return (
        sum(cell.x for cell in cells) / len(cells),
        sum(cell.y for cell in cells) / len(cells),
    )


def _linear_patterns(ships: Sequence[PlacedShip]) -> float:
    patterns = 0
    for i, first in enumerate(ships):
        for second in ships[i + 1 :]:
            rows = {cell.y for cell in second.cells}
            cols = {cell.x for cell in second.cells}
            same_row = all(cell.y in rows for cell in first.cells)
            same_col = all(cell.x in cols for cell in first.cells)
            if same_row or same_col:
                patterns += 1
    return min(1.0, patterns / len(ships))


def _edge_bias(ships: Sequence[PlacedShip], grid_size: int) -> float:
    last = grid_size - 1
    edge_ships = sum(
        1
        for ship in ships
        if any(cell.x in (0, last) or cell.y in (0, last) for cell in ship.cells)
    )
    # Up to 40% of ships on the edge is not penalised.
    return max(0.0, edge_ships / len(ships) - 0.4) * 2


def _symmetry(ships: Sequence[PlacedShip], grid_size: int) -> float:
    centre = (grid_size - 1) / 2
    centres = [_centre(ship.cells) for ship in ships]
    mirrored = 0
    for i, (sx, sy) in enumerate(centres):
        for j, (ox, oy) in enumerate(centres):
            if i == j:
                continue
            horizontal = abs(sx - centre) == abs(ox - centre) and abs(sy - oy) < 1
            vertical = abs(sy - centre) == abs(oy - centre) and abs(sx - ox) < 1
            if horizontal or vertical:
                mirrored += 1
                break
    return min(1.0, mirrored / len(ships))


def _clustering(ships: Sequence[PlacedShip]) -> float:
    clusters = 0
    for i, ship in enumerate(ships):
        nearby = 0
        for j, other in enumerate(ships):
            if i == j:
                continue
            if any(
                abs(cell.x - other_cell.x) <= 2 and abs(cell.y - other_cell.y) <= 2
                for cell in ship.cells
                for other_cell in other.cells
            ):
                nearby += 1
        if nearby > 1:
            clusters += 1
    return min(1.0, clusters / len(ships))


def _min_edge_distance(cells: Sequence[Cell], grid_size: int) -> int:
    last = grid_size - 1
    return min(min(cell.x, last - cell.x, cell.y, last - cell.y) for cell in cells)


def _mean_centre_distance(cells: Sequence[Cell], grid_size: int) -> float:
    centre = (grid_size - 1) / 2
    return sum(math.hypot(cell.x - centre, cell.y - centre) for cell in cells) / len(cells)


def _concealment_bonus(ship: PlacedShip, grid_size: int) -> int:
    last = grid_size - 1
    bonus = 0
    for corner_x, corner_y in ((0, 0), (last, 0), (0, last), (last, last)):
        if any(abs(cell.x - corner_x) <= 1 and abs(cell.y - corner_y) <= 1 for cell in ship.cells):
            bonus += 5
    centre = last / 2
    if any(abs(cell.x - centre) <= 1 and abs(cell.y - centre) <= 1 for cell in ship.cells):
        bonus -= 10
    return bonus
