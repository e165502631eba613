from __future__ import annotations

import pytest

from docker_pause_api.config import Settings, config_from_env
from docker_pause_api.errors import ConfigurationError


def test_defaults():
    settings = Settings.from_mapping({"CONTAINER_NAME": "web"})

    assert settings == Settings(
        container_name="web",
        docker_timeout=10.0,
        wait_for_transition=False,
        transition_timeout=5.0,
        transition_poll_interval=0.25,
        log_level="INFO",
    )


def test_reads_environment():
    env = {
        "CONTAINER_NAME": " minecraft ",
        "DOCKER_TIMEOUT": "3.5",
        "WAIT_FOR_TRANSITION": "yes",
        "TRANSITION_TIMEOUT": "20",
        "TRANSITION_POLL_INTERVAL": "1",
        "LOG_LEVEL": "debug",
    }

    settings = Settings.from_mapping(config_from_env(env))

    assert settings.container_name == "minecraft"
    assert settings.docker_timeout == 3.5
    assert settings.wait_for_transition is True
    assert settings.transition_timeout == 20.0
    assert settings.transition_poll_interval == 1.0
    assert settings.log_level == "DEBUG"


def test_reads_process_environment(monkeypatch):
    monkeypatch.setenv("CONTAINER_NAME", "web")
    assert config_from_env()["CONTAINER_NAME"] == "web"


@pytest.mark.parametrize("value", [None, "", "   "])
def test_container_name_required(value):
    with pytest.raises(ConfigurationError, match="CONTAINER_NAME"):
        Settings.from_mapping({"CONTAINER_NAME": value})


@pytest.mark.parametrize(
    "key, value",
    [
        ("DOCKER_TIMEOUT", "soon"),
        ("DOCKER_TIMEOUT", "0"),
        ("TRANSITION_TIMEOUT", "-1"),
        ("TRANSITION_POLL_INTERVAL", "fast"),
        ("WAIT_FOR_TRANSITION", "maybe"),
    ],
)
def test_invalid_values_rejected(key, value):
    with pytest.raises(ConfigurationError, match=key):
        Settings.from_mapping({"CONTAINER_NAME": "web", key: value})


@pytest.mark.parametrize("value, expected", [("0", False), ("off", False), ("TRUE", True), ("", False)])
def test_wait_for_transition_parsing(value, expected):
    settings = Settings.from_mapping({"CONTAINER_NAME": "web", "WAIT_FOR_TRANSITION": value})
    assert settings.wait_for_transition is expected


def test_create_app_rejects_missing_name(fake_docker):
    from docker_pause_api import create_app

    with pytest.raises(ConfigurationError):
        create_app({"TESTING": True}, docker_client=fake_docker)


def test_create_app_overrides_environment(monkeypatch, fake_docker):
    from docker_pause_api import create_app
    from docker_pause_api.config import SETTINGS_EXTENSION

    monkeypatch.setenv("CONTAINER_NAME", "from-env")
    app = create_app({"CONTAINER_NAME": "override"}, docker_client=fake_docker)

    assert app.extensions[SETTINGS_EXTENSION].container_name == "override"
