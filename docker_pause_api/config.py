from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional

from flask import current_app

from .errors import ConfigurationError

SETTINGS_EXTENSION = "docker_pause_api.settings"

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


def _to_bool(name: str, value: Any, default: bool) -> bool:
    if value is None:
        return default
    if isinstance(value, bool):
        return value
    lowered = str(value).strip().lower()
    if not lowered:
        return default
    if lowered in _TRUE_VALUES:
        return True
    if lowered in _FALSE_VALUES:
        return False
    raise ConfigurationError(f"{name} must be a boolean, got {value!r}")


def _to_positive_float(name: str, value: Any, default: float) -> float:
    if value is None or (isinstance(value, str) and not value.strip()):
        return default
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise ConfigurationError(f"{name} must be a number, got {value!r}") from None
    if number <= 0:
        raise ConfigurationError(f"{name} must be greater than zero, got {value!r}")
    return number


def config_from_env(environ: Optional[Mapping[str, str]] = None) -> Dict[str, Any]:
    """Collect the raw settings from the process environment."""

    env = os.environ if environ is None else environ
    return {
        # Target container
        "CONTAINER_NAME": env.get("CONTAINER_NAME"),

        # Docker daemon; DOCKER_HOST and TLS settings are read by the SDK itself
        "DOCKER_TIMEOUT": env.get("DOCKER_TIMEOUT"),

        # Optional wait for pause/unpause to settle before responding
        "WAIT_FOR_TRANSITION": env.get("WAIT_FOR_TRANSITION"),
        "TRANSITION_TIMEOUT": env.get("TRANSITION_TIMEOUT"),
        "TRANSITION_POLL_INTERVAL": env.get("TRANSITION_POLL_INTERVAL"),

        "LOG_LEVEL": env.get("LOG_LEVEL"),
    }


@dataclass(frozen=True)
class Settings:
    container_name: str
    docker_timeout: float = 10.0
    wait_for_transition: bool = False
    transition_timeout: float = 5.0
    transition_poll_interval: float = 0.25
    log_level: str = "INFO"

    @classmethod
    def from_mapping(cls, config: Mapping[str, Any]) -> "Settings":
        container_name = str(config.get("CONTAINER_NAME") or "").strip()
        if not container_name:
            raise ConfigurationError("CONTAINER_NAME is required")

        log_level = str(config.get("LOG_LEVEL") or "INFO").strip().upper()

        return cls(
            container_name=container_name,
            docker_timeout=_to_positive_float(
                "DOCKER_TIMEOUT", config.get("DOCKER_TIMEOUT"), cls.docker_timeout
            ),
            wait_for_transition=_to_bool(
                "WAIT_FOR_TRANSITION", config.get("WAIT_FOR_TRANSITION"), cls.wait_for_transition
            ),
            transition_timeout=_to_positive_float(
                "TRANSITION_TIMEOUT", config.get("TRANSITION_TIMEOUT"), cls.transition_timeout
            ),
            transition_poll_interval=_to_positive_float(
                "TRANSITION_POLL_INTERVAL",
                config.get("TRANSITION_POLL_INTERVAL"),
                cls.transition_poll_interval,
            ),
            log_level=log_level,
        )


def current_settings() -> Settings:
    """Return the settings bound to the active Flask application."""

    return current_app.extensions[SETTINGS_EXTENSION]
