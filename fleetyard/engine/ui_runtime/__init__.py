"""Backend-agnostic UI runtime helpers."""

from fleetyard.engine.ui_runtime.keymap import map_key_name, normalize_key

__all__ = ["map_key_name", "normalize_key"]
