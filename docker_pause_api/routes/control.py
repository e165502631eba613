from __future__ import annotations

from typing import Callable

import docker
from flask import Blueprint, abort, current_app, jsonify, request

from docker_pause_api.config import Settings, current_settings
from docker_pause_api.services.resolver import resolve_container
from docker_pause_api.services.runtime import current_runtime
from docker_pause_api.services.state import ContainerRef, StatusResponse
from docker_pause_api.services.transitions import report_status, start_container, stop_container

ContainerAction = Callable[[docker.DockerClient, ContainerRef, Settings], StatusResponse]

control_api = Blueprint('control_api', __name__)


def _dispatch(method: str, action: ContainerAction):
    # Flask answers HEAD for GET routes on its own; only the exact method is served.
    if request.method != method:
        abort(404)

    client = current_runtime()
    settings: Settings = current_settings()
    container: ContainerRef = resolve_container(client, settings.container_name)

    current_app.logger.info(
        "%s %s",
        request.method,
        request.path,
        extra={"container": container.name, "state": container.state.value},
    )
    return jsonify(action(client, container, settings).to_dict())


@control_api.route('/status', methods=['GET'], provide_automatic_options=False)
def api_status():
    return _dispatch('GET', report_status)


@control_api.route('/start', methods=['POST'], provide_automatic_options=False)
def api_start():
    return _dispatch('POST', start_container)


@control_api.route('/stop', methods=['POST'], provide_automatic_options=False)
def api_stop():
    return _dispatch('POST', stop_container)
