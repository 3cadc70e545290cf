"""App-level logging policy over the engine logging pipeline."""

from __future__ import annotations

import logging
import os
from datetime import UTC, datetime
from pathlib import Path

from fleetyard.engine.api.logging import EngineLoggingConfig, JsonFormatter
from fleetyard.engine.runtime.debug_config import resolve_log_level_name
from fleetyard.engine.runtime.logging import configure_engine_logging
from fleetyard.game.infra.app_data import resolve_logs_dir

__all__ = ["JsonFormatter", "build_logging_config", "setup_logging"]


def build_logging_config(*, to_file: bool = True) -> EngineLoggingConfig:
    """Resolve level, console format and per-run log file from env."""
    console_format = os.getenv("LOG_FORMAT", "text").strip().lower()
    if console_format not in {"text", "json"}:
        console_format = "text"
    return EngineLoggingConfig(
        level_name=resolve_log_level_name(default="INFO"),
        console_format=console_format,
        file_path=_resolve_run_log_file_path() if to_file else None,
        file_format="json",
    )


def setup_logging(*, to_file: bool = True) -> EngineLoggingConfig:
    """Configure application logging via the engine logging pipeline."""
    config = build_logging_config(to_file=to_file)
    configure_engine_logging(config)
    if config.file_path:
        logging.getLogger(__name__).info("logging_file=%s", config.file_path)
    return config


def _resolve_run_log_file_path() -> str:
    configured = os.getenv("FLEETYARD_LOG_DIR", "").strip()
    base_dir = Path(configured) if configured else resolve_logs_dir()
    base_dir.mkdir(parents=True, exist_ok=True)
    stamp = datetime.now(UTC).strftime("%Y%m%dT%H%M%S")
    return str(base_dir / f"fleetyard_run_{stamp}.jsonl")
