#!/usr/bin/env python3
"""High-level smoke runner orchestrating the end-to-end flow.

Steps:
- wait for server health
- log in and obtain a bearer token
- run the check table concurrently (happy paths, rejections, missing token)
- emit a compact summary and exit code
"""
from __future__ import annotations

import asyncio
import sys
from collections.abc import Iterable

import httpx

from runner.checks import DEFAULT_CHECKS
from runner.cli import parse_args
from runner.client import login, run_checks, wait_for_health
from math_api.logging_conf import get_logger, setup_logging
from runner.types import Check
from runner.utils import summarize

setup_logging(service="math-api-smoke")
logger = get_logger("runner")


async def run_smoke(
    *,
    base_url: str,
    username: str,
    password: str,
    timeout_s: float = 20.0,
    checks: Iterable[Check] = DEFAULT_CHECKS,
    transport: httpx.AsyncBaseTransport | None = None,
) -> int:
    async with httpx.AsyncClient(base_url=base_url, timeout=10.0, transport=transport) as client:
        await wait_for_health(client, timeout_s=timeout_s)
        token = await login(client, username, password)
        results = await run_checks(client, checks, token)
    summary, exit_code = summarize(results)
    logger.info("runner.summary", extra=summary)
    return exit_code


def main(argv: list[str] | None = None) -> None:
    args = parse_args(argv if argv is not None else sys.argv[1:])
    code = asyncio.run(
        run_smoke(
            base_url=args.base_url,
            username=args.username,
            password=args.password,
            timeout_s=args.timeout,
        )
    )
    raise SystemExit(code)


if __name__ == "__main__":
    main()
