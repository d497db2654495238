import logging

import pytest

from math_api.config import DEFAULT_JWT_SECRET, ConfigError, Settings


def test_defaults_fall_back_to_insecure_secret(caplog):
    with caplog.at_level(logging.WARNING, logger="config"):
        settings = Settings.from_env({})
    assert settings.jwt_secret == DEFAULT_JWT_SECRET
    assert settings.uses_default_secret
    assert settings.port == 3000
    assert settings.environment == "development"
    assert any(r.getMessage() == "config.insecure_secret" for r in caplog.records)


def test_reads_environment():
    settings = Settings.from_env(
        {"JWT_SECRET": "s", "PORT": "8080", "HOST": "127.0.0.1", "APP_VERSION": "2.0.0"}
    )
    assert settings.jwt_secret == "s"
    assert settings.port == 8080
    assert settings.host == "127.0.0.1"
    assert settings.version == "2.0.0"
    assert not settings.uses_default_secret


@pytest.mark.parametrize("env", [{"APP_ENV": "production"}, {"APP_ENV": "Production", "JWT_SECRET": ""}])
def test_production_without_secret_fails_closed(env):
    with pytest.raises(ConfigError):
        Settings.from_env(env)


def test_production_with_secret():
    settings = Settings.from_env({"APP_ENV": "production", "JWT_SECRET": "real"})
    assert settings.is_production
    assert settings.jwt_secret == "real"


@pytest.mark.parametrize("port", ["abc", "0", "70000", ""])
def test_bad_port(port):
    with pytest.raises(ConfigError):
        Settings.from_env({"JWT_SECRET": "s", "PORT": port})


def test_settings_are_immutable():
    settings = Settings()
    with pytest.raises(AttributeError):
        settings.jwt_secret = "changed"


def test_body_limit_from_env():
    assert Settings.from_env({"JWT_SECRET": "s"}).max_body_bytes == 10 * 1024 * 1024
    assert Settings.from_env({"JWT_SECRET": "s", "MAX_BODY_BYTES": "1024"}).max_body_bytes == 1024


@pytest.mark.parametrize("limit", ["ten", "0", "-5"])
def test_bad_body_limit(limit):
    with pytest.raises(ConfigError):
        Settings.from_env({"JWT_SECRET": "s", "MAX_BODY_BYTES": limit})
