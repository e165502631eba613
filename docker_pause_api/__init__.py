from __future__ import annotations

from typing import Mapping, Optional

import docker
from flask import Flask, Response, request

from .config import SETTINGS_EXTENSION, Settings, config_from_env
from .errors import ActionFailed, ContainerNotFound, RuntimeUnavailable
from .logging import init_logging
from .routes.control import control_api
from .services.runtime import RUNTIME_EXTENSION, connect

NOT_FOUND_BODY = "404 page not found\n"


def create_app(
    config_object: object | Mapping[str, object] | None = None,
    docker_client: Optional[docker.DockerClient] = None,
) -> Flask:
    """Build the control API.

    Settings are read from the environment and may be overridden by
    ``config_object``. When no ``docker_client`` is given a new one is
    connected from the standard Docker environment variables.
    """

    app = Flask(__name__)

    app.config.from_mapping(config_from_env())
    if config_object:
        if isinstance(config_object, Mapping):
            app.config.from_mapping(config_object)
        else:
            app.config.from_object(config_object)

    settings = Settings.from_mapping(app.config)
    init_logging(app, settings.log_level)

    _initialise_extensions(app, settings, docker_client)
    _register_blueprints(app)
    _register_error_handlers(app)

    return app


def _initialise_extensions(app: Flask, settings: Settings, docker_client: Optional[docker.DockerClient]) -> None:
    app.extensions[SETTINGS_EXTENSION] = settings
    app.extensions[RUNTIME_EXTENSION] = docker_client if docker_client is not None else connect(settings)


def _register_blueprints(app: Flask) -> None:
    app.register_blueprint(control_api)


def _plain_text(body: str, status: int) -> Response:
    if not body.endswith("\n"):
        body += "\n"
    return Response(body, status=status, mimetype="text/plain")


def _register_error_handlers(app: Flask) -> None:
    @app.errorhandler(404)
    @app.errorhandler(405)
    def handle_not_found(error):
        return _plain_text(NOT_FOUND_BODY, 404)

    @app.errorhandler(ContainerNotFound)
    def handle_container_not_found(error: ContainerNotFound):
        app.logger.warning(
            "container not found",
            extra={"container": error.name, "method": request.method, "path": request.path},
        )
        return _plain_text(NOT_FOUND_BODY, 404)

    @app.errorhandler(RuntimeUnavailable)
    def handle_runtime_unavailable(error: RuntimeUnavailable):
        app.logger.error(
            "docker unavailable",
            exc_info=(type(error), error, error.__traceback__),
            extra={"method": request.method, "path": request.path},
        )
        return _plain_text(NOT_FOUND_BODY, 404)

    @app.errorhandler(ActionFailed)
    def handle_action_failed(error: ActionFailed):
        app.logger.error(
            "container action failed",
            extra={
                "action": error.action,
                "container_id": error.container_id,
                "method": request.method,
                "path": request.path,
            },
        )
        return _plain_text(str(error), 500)


__all__ = ["create_app"]
