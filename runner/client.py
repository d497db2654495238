from __future__ import annotations

import asyncio
import math
import time
from collections.abc import Iterable

import httpx

from math_api.logging_conf import get_logger
from runner.types import Check, CheckResult, LoginError, SmokeError

logger = get_logger("runner.client")


async def wait_for_health(client: httpx.AsyncClient, timeout_s: float = 20.0) -> None:
    """Ping /health until it returns ok or raise after a timeout."""
    deadline = time.monotonic() + timeout_s
    while time.monotonic() < deadline:
        try:
            r = await client.get("/health")
            if r.status_code == 200 and r.json().get("ok") is True:
                logger.info("health.ok", extra={"event": "health_ok"})
                return
        except httpx.HTTPError as e:
            logger.debug("health.wait", extra={"event": "health_wait", "error": str(e)})
        await asyncio.sleep(0.25)
    raise SmokeError("Health check did not pass within timeout")


async def login(
    client: httpx.AsyncClient, username: str, password: str, *, retries: int = 3
) -> str:
    """Log in and return the bearer token, retrying transport failures.

    A 4xx answer is final: retrying bad credentials cannot succeed.
    """
    last_err: Exception | None = None
    for attempt in range(retries):
        try:
            r = await client.post(
                "/auth/login", json={"username": username, "password": password}
            )
        except httpx.HTTPError as e:  # pragma: no cover - network flakiness
            last_err = e
            logger.warning(
                "login.retry",
                extra={"event": "login_retry", "attempt": attempt + 1, "error": str(e)},
            )
            continue
        if r.status_code != 200:
            try:
                reason = r.json().get("error")
            except ValueError:
                reason = r.text[:200]
            raise LoginError(f"login rejected ({r.status_code}): {reason}")
        logger.info("login.ok", extra={"event": "login_ok", "attempt": attempt + 1})
        return r.json()["token"]
    raise LoginError(str(last_err) if last_err else "login failed")


def _result_matches(expected: float | int | None, body: dict) -> bool:
    if expected is None:
        return True
    actual = body.get("result")
    return isinstance(actual, (int, float)) and math.isclose(actual, expected)


async def run_check(client: httpx.AsyncClient, check: Check, token: str) -> CheckResult:
    """Send one check and compare status code and result."""
    headers = {"Authorization": f"Bearer {token}"} if check.authenticated else {}
    start = time.perf_counter()
    try:
        r = await client.request(
            check.method, check.path, params=check.params, json=check.json, headers=headers
        )
    except httpx.HTTPError as e:
        return CheckResult(
            name=check.name,
            passed=False,
            status_code=None,
            expected_status=check.expected_status,
            elapsed_ms=(time.perf_counter() - start) * 1000.0,
            detail={"error": str(e)},
        )
    elapsed_ms = (time.perf_counter() - start) * 1000.0
    try:
        body = r.json()
    except ValueError:
        body = {"raw": r.text}
    passed = r.status_code == check.expected_status and (
        r.status_code != 200 or _result_matches(check.expected_result, body)
    )
    return CheckResult(
        name=check.name,
        passed=passed,
        status_code=r.status_code,
        expected_status=check.expected_status,
        elapsed_ms=elapsed_ms,
        detail=body if not passed else {},
    )


async def run_checks(
    client: httpx.AsyncClient, checks: Iterable[Check], token: str
) -> list[CheckResult]:
    """Run checks concurrently and return their results in table order."""
    checks = list(checks)
    results = await asyncio.gather(*(run_check(client, c, token) for c in checks))
    logger.info(
        "checks.done",
        extra={
            "event": "checks_done",
            "requested": len(checks),
            "passed": sum(1 for res in results if res.passed),
        },
    )
    return list(results)
