"""Process-wide configuration, resolved once at startup.

`Settings.from_env()` is the only place the environment is read; the result is
frozen and handed to the app factory, which passes it on to the credential
verifier and the access guard.
"""
from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import timedelta

from .logging_conf import get_logger

__all__ = [
    "ConfigError",
    "DEFAULT_JWT_SECRET",
    "DEFAULT_PORT",
    "DEFAULT_MAX_BODY_BYTES",
    "JWT_ALGORITHM",
    "TOKEN_TTL",
    "TOKEN_TTL_LABEL",
    "Settings",
]

logger = get_logger("config")

# Insecure: only acceptable outside production. See Settings.from_env().
DEFAULT_JWT_SECRET = "fallback_secret_key"
DEFAULT_PORT = 3000
# Same cap as a 10mb JSON body limit.
DEFAULT_MAX_BODY_BYTES = 10 * 1024 * 1024
JWT_ALGORITHM = "HS256"

TOKEN_TTL = timedelta(hours=24)
TOKEN_TTL_LABEL = "24h"


class ConfigError(ValueError):
    """Raised when the environment cannot produce a usable configuration."""


@dataclass(frozen=True)
class Settings:
    jwt_secret: str = DEFAULT_JWT_SECRET
    port: int = DEFAULT_PORT
    host: str = "0.0.0.0"
    environment: str = "development"
    version: str = "1.0.0"
    max_body_bytes: int = DEFAULT_MAX_BODY_BYTES
    jwt_algorithm: str = JWT_ALGORITHM
    token_ttl: timedelta = TOKEN_TTL

    @property
    def is_production(self) -> bool:
        return self.environment.lower() == "production"

    @property
    def uses_default_secret(self) -> bool:
        return self.jwt_secret == DEFAULT_JWT_SECRET

    @classmethod
    def from_env(cls, env: Mapping[str, str] | None = None) -> "Settings":
        """Build settings from environment variables.

        Raises:
            ConfigError: if PORT is not a valid port number, MAX_BODY_BYTES is
                not a positive integer, or APP_ENV is production and JWT_SECRET
                is missing.
        """
        env = os.environ if env is None else env
        environment = env.get("APP_ENV", "development")

        secret = env.get("JWT_SECRET") or ""
        if not secret:
            if environment.lower() == "production":
                raise ConfigError("JWT_SECRET must be set when APP_ENV=production")
            logger.warning(
                "config.insecure_secret",
                extra={"event": "insecure_secret", "environment": environment},
            )
            secret = DEFAULT_JWT_SECRET

        raw_port = env.get("PORT", str(DEFAULT_PORT))
        try:
            port = int(raw_port, 10)
        except ValueError as e:
            raise ConfigError(f"PORT must be an integer, got {raw_port!r}") from e
        if not (0 < port < 65536):
            raise ConfigError(f"PORT out of range: {port}")

        raw_limit = env.get("MAX_BODY_BYTES", str(DEFAULT_MAX_BODY_BYTES))
        try:
            max_body_bytes = int(raw_limit, 10)
        except ValueError as e:
            raise ConfigError(f"MAX_BODY_BYTES must be an integer, got {raw_limit!r}") from e
        if max_body_bytes <= 0:
            raise ConfigError(f"MAX_BODY_BYTES must be positive: {max_body_bytes}")

        return cls(
            jwt_secret=secret,
            port=port,
            host=env.get("HOST", "0.0.0.0"),
            environment=environment,
            version=env.get("APP_VERSION", "1.0.0"),
            max_body_bytes=max_body_bytes,
        )
