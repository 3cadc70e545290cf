"""Engine runtime modules."""

from fleetyard.engine.api.events import Subscription
from fleetyard.engine.runtime.debug_config import DebugConfig, load_debug_config
from fleetyard.engine.runtime.events import EventBus
from fleetyard.engine.runtime.logging import configure_engine_logging, setup_engine_logging

__all__ = [
    "DebugConfig",
    "EventBus",
    "Subscription",
    "configure_engine_logging",
    "load_debug_config",
    "setup_engine_logging",
]
