from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class Check:
    """One request the smoke run sends, and what it expects back."""

    name: str
    method: str
    path: str
    params: dict[str, Any] | None = None
    json: Any = None
    expected_status: int = 200
    expected_result: float | int | None = None
    authenticated: bool = True


@dataclass
class CheckResult:
    """Outcome of a single check."""

    name: str
    passed: bool
    status_code: int | None
    expected_status: int
    elapsed_ms: float
    detail: dict[str, Any] = field(default_factory=dict)


class SmokeError(RuntimeError):
    """Raised when the smoke flow cannot proceed (e.g., health never ready)."""


class LoginError(SmokeError):
    """Raised when logging in fails after retries."""
