from __future__ import annotations

from datetime import UTC, datetime, timedelta

import jwt
from pydantic import BaseModel, ValidationError

from ..config import JWT_ALGORITHM, TOKEN_TTL
from .errors import TokenInvalid

__all__ = [
    "TokenClaims",
    "issue_token",
    "decode_token",
]


# ------------------------
# Schema
# ------------------------
class TokenClaims(BaseModel):
    """Claims carried by an access token.

    `iat` and `exp` are epoch seconds, as PyJWT writes them.
    """

    id: int  # subject id
    username: str  # subject identifier
    iat: int
    exp: int

    @property
    def issued_at(self) -> datetime:
        return datetime.fromtimestamp(self.iat, UTC)

    @property
    def expires_at(self) -> datetime:
        return datetime.fromtimestamp(self.exp, UTC)


# ------------------------
# Public encode/decode
# ------------------------

def issue_token(
    *,
    subject_id: int,
    username: str,
    secret: str,
    algorithm: str = JWT_ALGORITHM,
    ttl: timedelta = TOKEN_TTL,
    issued_at: datetime | None = None,
) -> str:
    """Sign a token for `username` valid for `ttl` from `issued_at` (default now)."""
    iat = issued_at or datetime.now(UTC)
    claims = {
        "id": subject_id,
        "username": username,
        "iat": int(iat.timestamp()),
        "exp": int((iat + ttl).timestamp()),
    }
    return jwt.encode(claims, secret, algorithm=algorithm)


def decode_token(token: str, *, secret: str, algorithm: str = JWT_ALGORITHM) -> TokenClaims:
    """Verify signature and expiry, then return the validated claims.

    Raises TokenInvalid for a bad signature, a tampered or malformed token, an
    expired token, or claims that do not match `TokenClaims`.
    """
    try:
        data = jwt.decode(
            token,
            secret,
            algorithms=[algorithm],
            options={"require": ["exp", "iat"]},
        )
    except jwt.InvalidTokenError as e:
        raise TokenInvalid() from e

    try:
        return TokenClaims(**data)
    except ValidationError as e:
        raise TokenInvalid() from e
