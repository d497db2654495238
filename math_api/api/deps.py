"""FastAPI dependencies wiring request handlers to the auth services."""
from __future__ import annotations

from fastapi import Header, Request

from ..service.auth_service import AccessGuard, CredentialVerifier, Identity


def get_verifier(request: Request) -> CredentialVerifier:
    return request.app.state.verifier


def get_guard(request: Request) -> AccessGuard:
    return request.app.state.guard


def require_identity(
    request: Request,
    authorization: str | None = Header(default=None),
) -> Identity:
    """Gate for protected routes: resolve the caller or raise TokenRequired/TokenInvalid."""
    identity = get_guard(request).authorize(authorization)
    # Request-scoped only; read back by the request logger.
    request.state.identity = identity
    return identity
