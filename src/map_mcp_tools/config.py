"""Dispatcher configuration."""

from __future__ import annotations

import logging
from dataclasses import dataclass, fields
from pathlib import Path

import yaml

LOGGER = logging.getLogger(__name__)


@dataclass
class DispatcherConfig:
    """Settings for MapToolDispatcher and the headless surface.

    wait_for_completion: Block each call until the render context has applied
        it, reporting surface failures as EXECUTION_ERROR. When False, calls
        return once the work is queued and surface failures are only logged.
    completion_timeout: Seconds to wait per call when wait_for_completion is set.
    queue_size: Maximum pending render jobs.
    reset_layers_on_style_change: Delete every layer before loading a new style.
    """

    wait_for_completion: bool = False
    completion_timeout: float = 5.0
    queue_size: int = 256
    reset_layers_on_style_change: bool = True
    viewport_width: int = 1024
    viewport_height: int = 768

    def __post_init__(self) -> None:
        if self.completion_timeout <= 0:
            raise ValueError("completion_timeout must be positive")
        if self.queue_size < 1:
            raise ValueError("queue_size must be at least 1")
        if self.viewport_width < 1 or self.viewport_height < 1:
            raise ValueError("viewport dimensions must be at least 1 pixel")


def load_config(path: Path | str) -> DispatcherConfig:
    """
    Load a DispatcherConfig from a YAML mapping.

    Missing keys take their defaults; an empty file gives the default config.

    Raises: ValueError on a non-mapping document or unknown keys.
    """
    with open(path, encoding="utf-8") as f:
        data = yaml.safe_load(f)
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ValueError(f"Config {path} must be a mapping, got {type(data).__name__}")

    known = {f.name for f in fields(DispatcherConfig)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise ValueError(f"Unknown config keys in {path}: {', '.join(unknown)}")

    LOGGER.debug("Loaded config from %s: %s", path, data)
    return DispatcherConfig(**data)
