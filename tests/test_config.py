"""Tests for channel configuration loading."""

import pytest
from pydantic import ValidationError

from wschannel.config import DEFAULT_URL, ChannelConfig, load_channel_config


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for key in (
        "WSCHANNEL_URL",
        "WSCHANNEL_RECONNECT_DELAY",
        "WSCHANNEL_RETRY_ON_CONSTRUCTION_FAILURE",
        "WSCHANNEL_OPEN_TIMEOUT",
        "WSCHANNEL_PING_INTERVAL",
    ):
        monkeypatch.delenv(key, raising=False)
    monkeypatch.setattr("wschannel.config.load_dotenv", lambda: False)


def test_defaults():
    config = load_channel_config()

    assert config.url == DEFAULT_URL == "ws://localhost:8080/ws"
    assert config.reconnect_delay == 3.0
    assert config.retry_on_construction_failure is False


def test_environment_values(monkeypatch):
    monkeypatch.setenv("WSCHANNEL_URL", "wss://chat.example.com/ws")
    monkeypatch.setenv("WSCHANNEL_RECONNECT_DELAY", "1.5")
    monkeypatch.setenv("WSCHANNEL_RETRY_ON_CONSTRUCTION_FAILURE", "true")
    monkeypatch.setenv("WSCHANNEL_PING_INTERVAL", "none")

    config = load_channel_config()

    assert config.url == "wss://chat.example.com/ws"
    assert config.reconnect_delay == 1.5
    assert config.retry_on_construction_failure is True
    assert config.ping_interval is None


def test_overrides_beat_environment(monkeypatch):
    monkeypatch.setenv("WSCHANNEL_URL", "ws://from-env/ws")

    config = load_channel_config(url="ws://override/ws", reconnect_delay=None)

    assert config.url == "ws://override/ws"
    assert config.reconnect_delay == 3.0


def test_invalid_delay_is_rejected(monkeypatch):
    monkeypatch.setenv("WSCHANNEL_RECONNECT_DELAY", "0")

    with pytest.raises(ValidationError):
        load_channel_config()


def test_config_is_frozen():
    config = ChannelConfig()

    with pytest.raises(ValidationError):
        config.url = "ws://elsewhere/ws"
