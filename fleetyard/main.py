"""Text entry point: auto-place a fleet and print the board."""

from __future__ import annotations

import argparse
import random
from collections.abc import Sequence

from fleetyard.engine.api.logging import get_logger
from fleetyard.engine.runtime.debug_config import load_debug_config
from fleetyard.engine.runtime.logging import stop_engine_logging
from fleetyard.game.core.board import occupancy_grid
from fleetyard.game.core.models import PlacedShip
from fleetyard.game.infra.config import load_default_env_files, load_placement_settings
from fleetyard.game.infra.logging import setup_logging
from fleetyard.game.placement.state_machine import PlacementStateMachine

logger = get_logger(__name__)

_SHIP_GLYPHS = {
    "carrier": "C",
    "battleship": "B",
    "cruiser": "R",
    "submarine": "S",
    "destroyer": "D",
}


def render_board(ships: Sequence[PlacedShip], grid_size: int) -> str:
    """Render a layout as rows of glyphs, ``.`` for water."""
    grid = occupancy_grid(ships, grid_size)
    header = "   " + " ".join(f"{x % 10}" for x in range(grid_size))
    lines = [header]
    for y in range(grid_size):
        row = []
        for x in range(grid_size):
            ship_id = int(grid[y, x])
            row.append(_SHIP_GLYPHS[ships[ship_id - 1].kind.value] if ship_id else ".")
        lines.append(f"{y:>2} " + " ".join(row))
    return "\n".join(lines)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="fleetyard", description="Auto-place a fleet and score it.")
    parser.add_argument("--seed", type=int, default=None, help="seed for reproducible placement")
    parser.add_argument("--grid-size", type=int, default=None, help="board edge length")
    parser.add_argument("--attempts", type=int, default=None, help="auto-place attempts per ship")
    parser.add_argument("--no-log-file", action="store_true", help="log to the console only")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run one auto-placement and print the board with its grade."""
    args = build_parser().parse_args(argv)
    load_default_env_files()
    setup_logging(to_file=not args.no_log_file)
    try:
        settings = load_placement_settings()
        if load_debug_config().input_trace_enabled:
            logger.info("Debug flags enabled", extra={"fleetyard_debug_input": "1"})
        seed = args.seed if args.seed is not None else settings.seed
        grid_size = args.grid_size if args.grid_size is not None else settings.grid_size
        attempts = args.attempts if args.attempts is not None else settings.auto_place_attempts
        machine = PlacementStateMachine(
            grid_size=grid_size,
            rng=random.Random(seed),
            auto_place_attempts=attempts,
        )
        result = machine.auto_place()
        print(render_board(machine.state.placed_ships, grid_size))
        if not result.accepted:
            message = result.error.message if result.error is not None else "auto placement failed"
            print(f"Auto placement incomplete: {message}")
            return 1
        quality = machine.quality()
        logger.info("auto_place_complete seed=%s score=%d grade=%s", seed, quality.score, quality.grade)
        print(f"Score {quality.score} grade {quality.grade}")
        return 0
    finally:
        stop_engine_logging()


if __name__ == "__main__":
    raise SystemExit(main())
