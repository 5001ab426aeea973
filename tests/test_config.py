"""Unit tests for settings loading."""

import pytest
from pydantic import ValidationError

from dispatcher import config
from dispatcher.config import DEFAULT_HISTORY_SIZE, DispatcherSettings, load_settings


def test_defaults_from_empty_env():
    settings = load_settings({})

    assert settings == DispatcherSettings()
    assert settings.silent is False
    assert settings.history_size == DEFAULT_HISTORY_SIZE
    assert settings.raise_delivery_errors is True
    assert settings.log_level == "INFO"


def test_values_read_from_mapping():
    settings = load_settings(
        {
            "DISPATCHER_SILENT": "yes",
            "FEED_HISTORY_SIZE": "5",
            "DISPATCHER_RAISE_DELIVERY_ERRORS": "off",
            "DISPATCHER_LOG_LEVEL": "debug",
        }
    )

    assert settings.silent is True
    assert settings.history_size == 5
    assert settings.raise_delivery_errors is False
    assert settings.log_level == "DEBUG"


@pytest.mark.parametrize("raw", ["lots", "-3", ""])
def test_bad_history_size_falls_back(raw):
    assert load_settings({"FEED_HISTORY_SIZE": raw}).history_size == DEFAULT_HISTORY_SIZE


def test_bad_bool_and_level_fall_back():
    settings = load_settings({"DISPATCHER_SILENT": "maybe", "DISPATCHER_LOG_LEVEL": "LOUD"})
    assert settings.silent is False
    assert settings.log_level == "INFO"


def test_process_environment_used_when_no_mapping(monkeypatch):
    monkeypatch.setattr(config, "load_dotenv", lambda *args, **kwargs: False)
    monkeypatch.setenv("DISPATCHER_SILENT", "1")
    monkeypatch.setenv("FEED_HISTORY_SIZE", "0")

    settings = load_settings()

    assert settings.silent is True
    assert settings.history_size == 0


def test_negative_history_rejected_by_model():
    with pytest.raises(ValidationError):
        DispatcherSettings(history_size=-1)


def test_unknown_log_level_rejected_by_model():
    with pytest.raises(ValidationError):
        DispatcherSettings(log_level="LOUD")


def test_log_level_normalised_by_model():
    assert DispatcherSettings(log_level=" warning ").log_level == "WARNING"
