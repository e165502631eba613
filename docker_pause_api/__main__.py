from __future__ import annotations

import logging
import sys

from dotenv import load_dotenv

from . import create_app
from .config import Settings, config_from_env
from .errors import ConfigurationError, RuntimeUnavailable
from .logging import configure_root_logging
from .services.runtime import connect, log_visible_containers

HOST = "0.0.0.0"
PORT = 8080

logger = logging.getLogger("docker_pause_api")


def main() -> int:
    load_dotenv()
    configure_root_logging(config_from_env().get("LOG_LEVEL") or "INFO")

    logger.info("Starting docker-pause-api...")
    try:
        settings = Settings.from_mapping(config_from_env())
    except ConfigurationError as exc:
        logger.error("invalid configuration: %s", exc)
        return 1

    logger.info("Configured target container name: %s", settings.container_name)

    try:
        client = connect(settings)
        log_visible_containers(client)
    except RuntimeUnavailable as exc:
        logger.error("%s", exc)
        return 1

    app = create_app(docker_client=client)
    app.run(host=HOST, port=PORT, threaded=True)
    return 0


if __name__ == "__main__":
    sys.exit(main())
