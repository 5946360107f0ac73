import logging

import pytest

from core.settings import DEFAULT_SETTINGS_PATH, load_settings


def test_defaults_from_yaml():
    settings = load_settings(DEFAULT_SETTINGS_PATH, environ={})
    assert settings.app.name == "School Management System"
    assert settings.app.environment == "development"
    assert settings.debug is False
    env = settings.api_environment()
    assert env.base_url == "http://localhost:8000"
    assert env.timeout_seconds == 30.0
    assert set(settings.environment_names()) == {"development", "staging", "production", "test"}


def test_environment_overrides():
    settings = load_settings(
        DEFAULT_SETTINGS_PATH,
        environ={
            "SCHOOL_PORTAL_ENV": "staging",
            "SCHOOL_PORTAL_API_URL": "https://api.example.org/",
            "SCHOOL_PORTAL_API_TIMEOUT": "12000",
            "SCHOOL_PORTAL_DEBUG": "yes",
        },
    )
    assert settings.app.environment == "staging"
    assert settings.debug is True
    env = settings.api_environment()
    assert env.name == "Staging Server"
    assert env.base_url == "https://api.example.org"
    assert env.timeout_ms == 12000


def test_unknown_environment_falls_back_to_configured_default():
    settings = load_settings(DEFAULT_SETTINGS_PATH, environ={})
    assert settings.api_environment("nowhere").name == "Local Development"
    assert settings.api_environment("production").base_url == "https://schoolmgmt-api.herokuapp.com"


def test_bad_timeout_override_is_ignored_with_warning(caplog):
    with caplog.at_level(logging.WARNING, logger="core.settings"):
        settings = load_settings(DEFAULT_SETTINGS_PATH, environ={"SCHOOL_PORTAL_API_TIMEOUT": "soon"})
    assert settings.api_environment().timeout_ms == 30000
    assert "SCHOOL_PORTAL_API_TIMEOUT" in caplog.text
    assert "'soon'" in caplog.text


def test_missing_environment_table_raises(tmp_path):
    path = tmp_path / "settings.yaml"
    path.write_text(
        "app:\n  name: X\n  environment: nowhere\napi:\n  environments:\n    qa:\n      name: QA\n      base_url: http://qa\n",
        encoding="utf-8",
    )
    settings = load_settings(path, environ={})
    with pytest.raises(KeyError):
        settings.api_environment()
