"""Application configuration and env loading."""

from __future__ import annotations

import os
import sys
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

from fleetyard.engine.runtime.debug_config import env_flag, env_int
from fleetyard.game.core.models import DEFAULT_GRID_SIZE
from fleetyard.game.interaction.config import DEFAULT_CELL_SIZE, InteractionConfig
from fleetyard.game.placement.auto_place import DEFAULT_AUTO_PLACE_ATTEMPTS

DEFAULT_ENV_FILES = (
    "appdata/config/.env.app",
    "appdata/config/.env.app.local",
    ".env.app",
    ".env.app.local",
)


def load_env_file(path: str = ".env", *, override_existing: bool = True) -> None:
    """Load KEY=VALUE pairs from an env file into process environment.

    By default, values from the env file overwrite existing environment variables.
    """
    env_path = _resolve_env_path(path)
    if not env_path.exists():
        return

    for raw_line in env_path.read_text(encoding="utf-8").splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        if line.startswith("export "):
            line = line[len("export ") :].lstrip()
        if "=" not in line:
            continue

        key, value = line.split("=", 1)
        key = key.strip()
        value = value.strip()
        if not key:
            continue

        if len(value) >= 2 and value[0] == value[-1] and value[0] in {"'", '"'}:
            value = value[1:-1]

        if override_existing or key not in os.environ:
            os.environ[key] = value


def load_default_env_files(
    *, override_existing: bool = True, paths: Sequence[str] | None = None
) -> None:
    """Load split env files with optional local overrides.

    Later files overwrite earlier ones; see ``DEFAULT_ENV_FILES`` for the order.
    """
    for path in tuple(paths) if paths is not None else DEFAULT_ENV_FILES:
        load_env_file(path, override_existing=override_existing)


@dataclass(frozen=True, slots=True)
class PlacementSettings:
    """Session-start placement parameters."""

    grid_size: int
    auto_place_attempts: int
    seed: int | None


def load_placement_settings() -> PlacementSettings:
    """Read placement settings from env; raises ``ValueError`` on bad values."""
    grid_size = env_int("FLEETYARD_GRID_SIZE", DEFAULT_GRID_SIZE)
    attempts = env_int("FLEETYARD_AUTO_PLACE_ATTEMPTS", DEFAULT_AUTO_PLACE_ATTEMPTS)
    if grid_size <= 0:
        raise ValueError("FLEETYARD_GRID_SIZE must be > 0")
    if attempts <= 0:
        raise ValueError("FLEETYARD_AUTO_PLACE_ATTEMPTS must be > 0")
    raw_seed = os.getenv("FLEETYARD_SEED", "").strip()
    seed = int(raw_seed) if raw_seed else None
    return PlacementSettings(grid_size=grid_size, auto_place_attempts=attempts, seed=seed)


def load_interaction_config() -> InteractionConfig:
    return InteractionConfig(
        grid_size=env_int("FLEETYARD_GRID_SIZE", DEFAULT_GRID_SIZE),
        cell_size=env_int("FLEETYARD_CELL_SIZE", DEFAULT_CELL_SIZE),
        enable_touch=env_flag("FLEETYARD_ENABLE_TOUCH", True),
        enable_keyboard=env_flag("FLEETYARD_ENABLE_KEYBOARD", True),
        enable_accessibility=env_flag("FLEETYARD_ENABLE_ACCESSIBILITY", True),
    )


def _resolve_env_path(path: str) -> Path:
    """Resolve env path from cwd, frozen exe dir, then project root."""
    candidate = Path(path)
    if candidate.exists():
        return candidate

    if getattr(sys, "frozen", False):
        executable = getattr(sys, "executable", "")
        if executable:
            frozen_dir_candidate = Path(executable).resolve().parent / path
            if frozen_dir_candidate.exists():
                return frozen_dir_candidate

    # Fallback for IDE run configs with different working directory.
    project_root = Path(__file__).resolve().parents[3]
    return project_root / path
