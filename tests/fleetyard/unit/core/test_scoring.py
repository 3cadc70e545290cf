import random

import pytest

from fleetyard.game.core.fleet import STANDARD_FLEET, normalize_composition
from fleetyard.game.core.models import Cell, Orientation, PlacedShip, ShipKind
from fleetyard.game.core.scoring import placement_grade, placement_score, score_placement
from fleetyard.game.core.state import PlacementState
from fleetyard.game.placement.auto_place import auto_place_remaining


def test_empty_layout_scores_zero_grade_d() -> None:
    quality = score_placement(())
    assert quality.score == 0
    assert quality.grade == "D"


@pytest.mark.parametrize(
    ("score", "grade"),
    [(100, "A"), (90, "A"), (89, "B"), (80, "B"), (79, "C"), (70, "C"), (69, "D"), (0, "D")],
)
def test_grade_thresholds(score: int, grade: str) -> None:
    assert placement_grade(score) == grade


def test_scores_are_bounded_and_deterministic() -> None:
    state = PlacementState.initial(10, normalize_composition(STANDARD_FLEET, 10))
    for seed in range(5):
        placed, error = auto_place_remaining(state, random.Random(seed))
        assert error is None
        first = score_placement(placed.placed_ships)
        second = score_placement(placed.placed_ships)
        assert first == second
        assert 0 <= first.score <= 100
        assert first.grade == placement_grade(first.score)
        for metric in (
            first.metrics.distribution,
            first.metrics.unpredictability,
            first.metrics.defense,
            first.metrics.efficiency,
        ):
            assert 0 <= metric <= 100


def test_placement_score_matches_quality_score() -> None:
    ships = [
        PlacedShip.create(ShipKind.CARRIER, Cell(0, 0), Orientation.HORIZONTAL),
        PlacedShip.create(ShipKind.DESTROYER, Cell(8, 8), Orientation.VERTICAL),
    ]
    assert placement_score(ships) == score_placement(ships).score
