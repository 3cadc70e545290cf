"""Public raw input event types."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(slots=True)
class PointerEvent:
    """Raw pointer event in canvas coordinates.

    Mutable only in ``default_prevented`` so handlers can veto the host's
    default action (for example the context menu on right click).
    """

    event_type: str
    x: float
    y: float
    button: int
    default_prevented: bool = False

    def prevent_default(self) -> None:
        self.default_prevented = True


@dataclass(frozen=True, slots=True)
class KeyEvent:
    """Raw key/char event."""

    event_type: str
    value: str


@dataclass(frozen=True, slots=True)
class TouchPoint:
    """One active contact point in canvas coordinates."""

    x: float
    y: float


@dataclass(frozen=True, slots=True)
class TouchEvent:
    """Raw touch event.

    ``touches`` holds the contacts still on the surface, ``changed_touches``
    the contacts that triggered the event (the lifted finger on touch end).
    """

    event_type: str
    touches: tuple[TouchPoint, ...] = ()
    changed_touches: tuple[TouchPoint, ...] = field(default_factory=tuple)

    def primary_point(self) -> TouchPoint | None:
        """Return the contact that best describes this event, if any."""
        if self.touches:
            return self.touches[0]
        if self.changed_touches:
            return self.changed_touches[0]
        return None


__all__ = ["KeyEvent", "PointerEvent", "TouchEvent", "TouchPoint"]
