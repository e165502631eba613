from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Dict

logger = logging.getLogger(__name__)


class ContainerState(str, Enum):
    """Container states as reported to callers.

    Values are the literal strings Docker uses for ``State``, plus the two
    transitional values this service reports after issuing a pause or
    unpause, and ``unknown`` for anything Docker reports that is not listed.
    """

    CREATED = "created"
    RUNNING = "running"
    PAUSED = "paused"
    RESTARTING = "restarting"
    REMOVING = "removing"
    EXITED = "exited"
    DEAD = "dead"
    PAUSING = "pausing"
    UNPAUSING = "unpausing"
    UNKNOWN = "unknown"

    @classmethod
    def from_runtime(cls, raw: object) -> "ContainerState":
        """Translate a raw Docker state string into a member."""

        value = str(raw or "").strip().lower()
        if value in _RUNTIME_STATES:
            return cls(value)
        logger.warning("unrecognised container state", extra={"state": raw})
        return cls.UNKNOWN

    @property
    def is_stopped(self) -> bool:
        return self in (ContainerState.CREATED, ContainerState.EXITED, ContainerState.DEAD)

    def __str__(self) -> str:
        return self.value


# States the daemon itself can report; the transitional ones are ours.
_RUNTIME_STATES = frozenset(
    state.value
    for state in ContainerState
    if state not in (ContainerState.PAUSING, ContainerState.UNPAUSING, ContainerState.UNKNOWN)
)


@dataclass(frozen=True)
class ContainerRef:
    """Snapshot of one container taken while serving a single request."""

    id: str
    name: str
    state: ContainerState


@dataclass(frozen=True)
class StatusResponse:
    state: ContainerState

    def to_dict(self) -> Dict[str, str]:
        return {"state": self.state.value}
