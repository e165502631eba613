from __future__ import annotations

import logging
import time
from dataclasses import dataclass

import docker

from ..config import Settings
from ..errors import ActionFailed, PauseApiError
from .resolver import resolve_container
from .runtime import RUNTIME_ERRORS
from .state import ContainerRef, ContainerState, StatusResponse

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Transition:
    """A pause or unpause, with the state it applies to and the states it reports."""

    action: str
    api_method: str
    required: ContainerState
    transitional: ContainerState
    settled: ContainerState


START = Transition(
    action="start",
    api_method="unpause",
    required=ContainerState.PAUSED,
    transitional=ContainerState.UNPAUSING,
    settled=ContainerState.RUNNING,
)

STOP = Transition(
    action="stop",
    api_method="pause",
    required=ContainerState.RUNNING,
    transitional=ContainerState.PAUSING,
    settled=ContainerState.PAUSED,
)


def report_status(client: docker.DockerClient, container: ContainerRef, settings: Settings) -> StatusResponse:
    return StatusResponse(container.state)


def start_container(client: docker.DockerClient, container: ContainerRef, settings: Settings) -> StatusResponse:
    """Unpause a paused container; anything else is left alone."""

    return apply_transition(client, container, START, settings)


def stop_container(client: docker.DockerClient, container: ContainerRef, settings: Settings) -> StatusResponse:
    """Pause a running container; anything else is left alone."""

    return apply_transition(client, container, STOP, settings)


def apply_transition(
    client: docker.DockerClient,
    container: ContainerRef,
    transition: Transition,
    settings: Settings,
) -> StatusResponse:
    """Issue ``transition`` if the container is in its required state.

    The decision is taken against the snapshot in ``container`` only. Two
    concurrent requests may both see the same snapshot and both issue a call;
    whichever call the daemon handles last decides the final state.

    By default the transitional state is reported as soon as the daemon
    accepts the call. With ``wait_for_transition`` enabled the container is
    re-resolved until it settles or the wait times out.
    """

    extra = {
        "container": container.name,
        "container_id": container.id,
        "action": transition.action,
        "state": container.state.value,
    }

    if container.state is not transition.required:
        reason = "container is stopped" if container.state.is_stopped else "nothing to do"
        logger.info("%s skipped: %s", transition.action, reason, extra=extra)
        return StatusResponse(container.state)

    try:
        getattr(client.api, transition.api_method)(container.id)
    except RUNTIME_ERRORS as exc:
        logger.error("%s failed", transition.api_method, extra=extra, exc_info=True)
        raise ActionFailed(transition.action, container.id, str(exc)) from exc

    logger.info("%s issued", transition.api_method, extra=extra)

    if not settings.wait_for_transition:
        return StatusResponse(transition.transitional)
    return StatusResponse(wait_for_settled(client, container, transition, settings))


def wait_for_settled(
    client: docker.DockerClient,
    container: ContainerRef,
    transition: Transition,
    settings: Settings,
) -> ContainerState:
    """Poll until the container reaches the transition's settled state.

    Returns the settled state on success and the transitional state when the
    deadline passes or the container can no longer be resolved.
    """

    deadline = time.monotonic() + settings.transition_timeout
    extra = {"container": container.name, "action": transition.action}

    while True:
        try:
            current = resolve_container(client, container.name)
        except PauseApiError as exc:
            logger.warning("could not confirm %s: %s", transition.api_method, exc, extra=extra)
            return transition.transitional

        if current.state is transition.settled:
            logger.info("%s confirmed", transition.api_method, extra={**extra, "state": current.state.value})
            return current.state

        remaining = deadline - time.monotonic()
        if remaining <= 0:
            logger.warning(
                "%s not confirmed before timeout",
                transition.api_method,
                extra={**extra, "state": current.state.value},
            )
            return transition.transitional
        time.sleep(min(settings.transition_poll_interval, remaining))
