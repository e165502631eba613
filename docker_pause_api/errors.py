from __future__ import annotations


class PauseApiError(RuntimeError):
    """Base class for errors raised while serving the control API."""


class ConfigurationError(PauseApiError):
    """Raised when a required setting is missing or a value cannot be parsed."""


class RuntimeUnavailable(PauseApiError):
    """Raised when the Docker daemon cannot be reached or rejects a listing."""


class ContainerNotFound(PauseApiError):
    """Raised when no container carries the configured name."""

    def __init__(self, name: str) -> None:
        super().__init__(f"container with name {name} not found")
        self.name = name


class ActionFailed(PauseApiError):
    """Raised when a pause or unpause call fails on the daemon."""

    def __init__(self, action: str, container_id: str, message: str) -> None:
        super().__init__(message)
        self.action = action
        self.container_id = container_id
