from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from ..config import TOKEN_TTL_LABEL, Settings
from ..domain.credentials import DUMMY_HASH, CredentialStore, check_password
from ..domain.errors import InvalidCredentials, MissingCredentials, TokenInvalid, TokenRequired
from ..domain.tokens import decode_token, issue_token
from ..logging_conf import get_logger

logger = get_logger("service.auth")


@dataclass(frozen=True)
class Identity:
    """Caller identity for the duration of one request."""

    id: int
    username: str
    expires_at: datetime


class CredentialVerifier:
    """Checks a username/password pair and issues an access token."""

    def __init__(self, settings: Settings, store: CredentialStore) -> None:
        self._settings = settings
        self._store = store

    def authenticate(self, username: str | None, password: str | None) -> dict:
        """Return the login payload for valid credentials.

        Raises:
            MissingCredentials: if either field is absent or empty.
            InvalidCredentials: for an unknown username or a wrong password.
        """
        if not username or not password:
            logger.info(
                "auth.missing_credentials",
                extra={
                    "event": "login_missing_credentials",
                    "has_username": bool(username),
                    "has_password": bool(password),
                },
            )
            raise MissingCredentials()

        record = self._store.find_by_identifier(username)
        password_ok = check_password(
            password, record.password_hash if record else DUMMY_HASH
        )
        if record is None or not password_ok:
            logger.info(
                "auth.login_failed",
                extra={
                    "event": "login_failed",
                    "reason": "unknown_user" if record is None else "bad_password",
                },
            )
            raise InvalidCredentials()

        token = issue_token(
            subject_id=record.id,
            username=record.username,
            secret=self._settings.jwt_secret,
            algorithm=self._settings.jwt_algorithm,
            ttl=self._settings.token_ttl,
        )
        logger.info(
            "auth.login_ok",
            extra={"event": "login_ok", "subject": record.username},
        )
        return {
            "message": "Login successful",
            "token": token,
            "expiresIn": TOKEN_TTL_LABEL,
        }


class AccessGuard:
    """Turns an Authorization header into an Identity or rejects the request."""

    def __init__(self, settings: Settings) -> None:
        self._settings = settings

    @staticmethod
    def extract_bearer(raw_header: str | None) -> str:
        """Return the token from `Bearer <token>`.

        Raises TokenRequired when the header, the scheme or the token is missing.
        """
        if not raw_header:
            raise TokenRequired()
        scheme, _, token = raw_header.strip().partition(" ")
        token = token.strip()
        if scheme.lower() != "bearer" or not token:
            raise TokenRequired()
        return token

    def authorize(self, raw_header: str | None) -> Identity:
        token = self.extract_bearer(raw_header)
        try:
            claims = decode_token(
                token,
                secret=self._settings.jwt_secret,
                algorithm=self._settings.jwt_algorithm,
            )
        except TokenInvalid as e:
            logger.info(
                "auth.token_rejected",
                extra={"event": "token_rejected", "reason": type(e.__cause__).__name__},
            )
            raise
        return Identity(id=claims.id, username=claims.username, expires_at=claims.expires_at)
