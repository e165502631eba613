from __future__ import annotations

import pytest

from docker_pause_api import create_app
from fakes import FakeContainer, FakeDockerClient

ENV_VARS = (
    "CONTAINER_NAME",
    "DOCKER_TIMEOUT",
    "WAIT_FOR_TRANSITION",
    "TRANSITION_TIMEOUT",
    "TRANSITION_POLL_INTERVAL",
    "LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep the developer's shell settings out of the tests."""
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def fake_docker():
    return FakeDockerClient(
        [
            FakeContainer("aaa111", ["/web"], "running"),
            FakeContainer("bbb222", ["/db"], "exited"),
        ]
    )


@pytest.fixture
def app(fake_docker):
    app = create_app({"CONTAINER_NAME": "web", "TESTING": True}, docker_client=fake_docker)
    return app


@pytest.fixture
def client(app):
    with app.test_client() as client:
        yield client
