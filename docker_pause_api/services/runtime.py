from __future__ import annotations

import logging
from typing import List

import docker
import requests
from docker.errors import DockerException
from flask import current_app

from ..config import Settings
from ..errors import RuntimeUnavailable

RUNTIME_EXTENSION = "docker_pause_api.docker_client"

# Errors the SDK lets through when the daemon is unreachable or rejects a call.
RUNTIME_ERRORS = (DockerException, requests.exceptions.RequestException)

logger = logging.getLogger(__name__)


def connect(settings: Settings) -> docker.DockerClient:
    """Build the shared Docker client and negotiate the API version.

    Connection parameters come from the standard ``DOCKER_HOST``,
    ``DOCKER_TLS_VERIFY`` and ``DOCKER_CERT_PATH`` variables.
    """

    try:
        client = docker.from_env(version="auto", timeout=settings.docker_timeout)
    except RUNTIME_ERRORS as exc:
        raise RuntimeUnavailable(f"could not connect to Docker: {exc}") from exc

    logger.info("connected to Docker", extra={"container": settings.container_name})
    return client


def log_visible_containers(client: docker.DockerClient) -> List[str]:
    """Log every container the daemon reports and return their ids."""

    try:
        containers = client.containers.list(all=True, sparse=True)
    except RUNTIME_ERRORS as exc:
        raise RuntimeUnavailable(f"could not list containers: {exc}") from exc

    logger.info("currently found containers: %d", len(containers))
    ids = []
    for container in containers:
        names = container.attrs.get("Names") or []
        logger.info("ID: %s, Names: %s", container.id, names, extra={"container_id": container.id})
        ids.append(container.id)
    return ids


def current_runtime() -> docker.DockerClient:
    """Return the Docker client bound to the active Flask application."""

    return current_app.extensions[RUNTIME_EXTENSION]
