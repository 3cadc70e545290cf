"""Public engine API contracts."""

from fleetyard.engine.api.events import EventBus, Subscription, create_event_bus
from fleetyard.engine.api.input_events import KeyEvent, PointerEvent, TouchEvent, TouchPoint
from fleetyard.engine.api.logging import EngineLoggingConfig, JsonFormatter

__all__ = [
    "EngineLoggingConfig",
    "EventBus",
    "JsonFormatter",
    "KeyEvent",
    "PointerEvent",
    "Subscription",
    "TouchEvent",
    "TouchPoint",
    "create_event_bus",
]
