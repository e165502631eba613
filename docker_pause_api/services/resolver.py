from __future__ import annotations

import logging
from typing import Iterable, Optional

import docker

from ..errors import ContainerNotFound, RuntimeUnavailable
from .runtime import RUNTIME_ERRORS
from .state import ContainerRef, ContainerState

logger = logging.getLogger(__name__)


def canonical_name(names: Optional[Iterable[str]]) -> Optional[str]:
    """Return a container's primary name without Docker's leading slash."""

    names = list(names or ())
    if not names:
        return None
    primary = names[0]
    return primary[1:] if primary.startswith("/") else primary


def resolve_container(client: docker.DockerClient, name: str) -> ContainerRef:
    """Look up the container called ``name`` and snapshot its current state.

    Stopped containers are included. Only the primary name is compared and
    the comparison is exact. Should the daemon ever list two containers with
    the same name, the first one in listing order is used.
    """

    try:
        containers = client.containers.list(all=True, sparse=True)
    except RUNTIME_ERRORS as exc:
        raise RuntimeUnavailable(f"could not list containers: {exc}") from exc

    for container in containers:
        if canonical_name(container.attrs.get("Names")) != name:
            continue
        ref = ContainerRef(
            id=container.id,
            name=name,
            state=ContainerState.from_runtime(container.status),
        )
        logger.debug(
            "resolved container",
            extra={"container": name, "container_id": ref.id, "state": ref.state.value},
        )
        return ref

    raise ContainerNotFound(name)
