"""Backend-agnostic key normalization helpers."""

from __future__ import annotations

_KEY_ALIASES = {
    "return": "enter",
    "esc": "escape",
    "spacebar": " ",
    "space": " ",
    "del": "delete",
    "up": "arrowup",
    "down": "arrowdown",
    "left": "arrowleft",
    "right": "arrowright",
}


def normalize_key(key_name: str) -> str:
    """Lower-case a backend key name, keeping a bare space intact."""
    if key_name == " ":
        return key_name
    return key_name.strip().lower()


def map_key_name(key_name: str) -> str | None:
    """Normalize backend key names to canonical identifiers.

    Returns ``None`` for empty input. Unknown keys map to their lower-cased
    form so callers can still log or ignore them.
    """
    normalized = normalize_key(key_name)
    if not normalized:
        return None
    return _KEY_ALIASES.get(normalized, normalized)
