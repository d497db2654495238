"""Credential records, the lookup seam, and bcrypt helpers."""
from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Protocol

import bcrypt

__all__ = [
    "MIN_ROUNDS",
    "MAX_PASSWORD_BYTES",
    "CredentialRecord",
    "CredentialStore",
    "InMemoryCredentialStore",
    "DEFAULT_RECORDS",
    "DUMMY_HASH",
    "hash_password",
    "check_password",
]

MIN_ROUNDS = 10
# bcrypt ignores (newer releases reject) anything past 72 bytes.
MAX_PASSWORD_BYTES = 72

# bcrypt("password", rounds=10)
_ADMIN_HASH = "$2a$10$92IXUNpkjO0rOQ5byMi.Ye4oKoEa3Ro9llC/.og/at2.uheWG/igi"

# Checked when a username is unknown so both login failures cost one bcrypt round.
DUMMY_HASH = _ADMIN_HASH


@dataclass(frozen=True)
class CredentialRecord:
    id: int
    username: str
    password_hash: str


class CredentialStore(Protocol):
    def find_by_identifier(self, identifier: str) -> CredentialRecord | None:
        ...


class InMemoryCredentialStore:
    """Read-only store provisioned once at startup. Lookups are case-sensitive."""

    def __init__(self, records: Iterable[CredentialRecord]) -> None:
        self._by_username: dict[str, CredentialRecord] = {}
        for record in records:
            if record.username in self._by_username:
                raise ValueError(f"duplicate username: {record.username}")
            self._by_username[record.username] = record

    def __len__(self) -> int:
        return len(self._by_username)

    def find_by_identifier(self, identifier: str) -> CredentialRecord | None:
        return self._by_username.get(identifier)


DEFAULT_RECORDS: tuple[CredentialRecord, ...] = (
    CredentialRecord(id=1, username="admin", password_hash=_ADMIN_HASH),
)


def hash_password(secret: str, rounds: int = MIN_ROUNDS) -> str:
    """Return a salted bcrypt hash of `secret` for provisioning a record.

    Raises:
        ValueError: if rounds is below MIN_ROUNDS or the secret is too long.
    """
    if rounds < MIN_ROUNDS:
        raise ValueError(f"bcrypt rounds must be >= {MIN_ROUNDS}")
    raw = secret.encode("utf-8")
    if len(raw) > MAX_PASSWORD_BYTES:
        raise ValueError(f"password longer than {MAX_PASSWORD_BYTES} bytes")
    return bcrypt.hashpw(raw, bcrypt.gensalt(rounds=rounds)).decode("ascii")


def check_password(secret: str, password_hash: str) -> bool:
    """Compare `secret` against a stored bcrypt hash.

    Oversized secrets can never match a hash made by hash_password(); they are
    still run through bcrypt (truncated) so the call costs the same.
    """
    raw = secret.encode("utf-8")
    oversized = len(raw) > MAX_PASSWORD_BYTES
    matched = bcrypt.checkpw(raw[:MAX_PASSWORD_BYTES], password_hash.encode("ascii"))
    return matched and not oversized
