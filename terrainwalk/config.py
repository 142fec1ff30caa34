"""Window and graphics configuration stored as JSON."""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass
from typing import Any

__all__ = [
    "AntialiasingSettings",
    "default_config",
    "create_default_config",
    "load_config",
    "validate_antialiasing_settings",
]

log = logging.getLogger(__name__)

DEFAULT_PATH = "config.json"
_MIN_SAMPLES = 4
_MAX_SAMPLES = 8


@dataclass(frozen=True)
class AntialiasingSettings:
    """Multisampling settings; ``valid`` is False when they had to be corrected."""

    enabled: bool
    samples: int
    valid: bool


def default_config() -> dict[str, Any]:
    """Return a fresh copy of the built-in configuration."""
    return {
        "window": {"width": 800, "height": 600, "title": "OpenGL Maze Demo"},
        "graphics": {"antialiasing": {"enabled": False, "samples": 4}},
    }


def create_default_config(path: str | os.PathLike[str] = DEFAULT_PATH) -> None:
    """Write the default configuration to ``path``; failures are logged."""
    try:
        with open(path, "w", encoding="utf-8") as handle:
            json.dump(default_config(), handle, indent=4)
    except OSError:
        log.error("Failed to create config file!")


def load_config(path: str | os.PathLike[str] = DEFAULT_PATH) -> dict[str, Any]:
    """Read the configuration, creating it if absent; fall back to defaults on error."""
    try:
        if not os.path.exists(path):
            log.info("Config file does not exist, creating default.")
            create_default_config(path)
        with open(path, encoding="utf-8") as handle:
            return json.load(handle)
    except (OSError, ValueError) as exc:
        log.error("Error loading config: %s", exc)
        return default_config()


def validate_antialiasing_settings(config: dict[str, Any]) -> AntialiasingSettings:
    """Extract antialiasing settings, clamping samples to 4..8 when enabled."""
    graphics = config.get("graphics")
    if not isinstance(graphics, dict) or "antialiasing" not in graphics:
        log.warning("Antialiasing settings missing in config.")
        return AntialiasingSettings(enabled=False, samples=0, valid=False)

    aa = graphics["antialiasing"]
    if not isinstance(aa, dict):
        raise TypeError("graphics.antialiasing must be an object")
    enabled = bool(aa.get("enabled", False))
    samples = int(aa.get("samples", 0))
    valid = True
    if enabled:
        if samples <= 1:
            log.warning("Antialiasing enabled but samples <= 1. Setting to 4.")
            samples = _MIN_SAMPLES
            valid = False
        elif samples > _MAX_SAMPLES:
            log.warning("Too many antialiasing samples (> 8). Setting to 8.")
            samples = _MAX_SAMPLES
            valid = False
    return AntialiasingSettings(enabled=enabled, samples=samples, valid=valid)