from __future__ import annotations

from unittest.mock import MagicMock

import pytest

from docker_pause_api import __main__ as entrypoint
from docker_pause_api.errors import RuntimeUnavailable


@pytest.fixture
def startup(monkeypatch):
    monkeypatch.setattr(entrypoint, "load_dotenv", MagicMock())
    client = MagicMock(name="docker_client")
    app = MagicMock(name="app")
    mocks = {
        "connect": MagicMock(return_value=client),
        "log_visible_containers": MagicMock(return_value=["aaa111"]),
        "create_app": MagicMock(return_value=app),
    }
    for name, mock in mocks.items():
        monkeypatch.setattr(entrypoint, name, mock)
    mocks["client"] = client
    mocks["app"] = app
    return mocks


def test_missing_container_name_exits_non_zero(startup):
    assert entrypoint.main() == 1
    startup["connect"].assert_not_called()
    startup["app"].run.assert_not_called()


def test_connection_failure_exits_non_zero(startup, monkeypatch):
    monkeypatch.setenv("CONTAINER_NAME", "web")
    startup["connect"].side_effect = RuntimeUnavailable("could not connect to Docker")

    assert entrypoint.main() == 1
    startup["app"].run.assert_not_called()


def test_listing_failure_exits_non_zero(startup, monkeypatch):
    monkeypatch.setenv("CONTAINER_NAME", "web")
    startup["log_visible_containers"].side_effect = RuntimeUnavailable("could not list containers")

    assert entrypoint.main() == 1
    startup["create_app"].assert_not_called()


def test_serves_after_startup_checks(startup, monkeypatch):
    monkeypatch.setenv("CONTAINER_NAME", "web")

    assert entrypoint.main() == 0

    startup["log_visible_containers"].assert_called_once_with(startup["client"])
    startup["create_app"].assert_called_once_with(docker_client=startup["client"])
    startup["app"].run.assert_called_once_with(host="0.0.0.0", port=8080, threaded=True)
