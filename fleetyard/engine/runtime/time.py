"""Engine runtime timing primitives."""

from __future__ import annotations

from collections.abc import Callable
from time import monotonic

TimeSource = Callable[[], float]


def monotonic_ms() -> float:
    """Return a monotonic timestamp in milliseconds."""
    return monotonic() * 1000.0
