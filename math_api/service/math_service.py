from __future__ import annotations

from datetime import UTC, datetime
from typing import Any

from ..domain import operations
from ..domain.errors import MathApiError
from ..logging_conf import get_logger

logger = get_logger("service.math")


def now_iso() -> str:
    """Return the current UTC time as ISO-8601 with milliseconds and a Z suffix."""
    return datetime.now(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def _rejected(family: str, err: MathApiError, subject: str | None) -> None:
    logger.info(
        "math.rejected",
        extra={
            "event": "math_rejected",
            "family": family,
            "kind": err.kind.value,
            "subject": subject,
        },
    )


# ------------------------
# Use-cases
# ------------------------

def calculate(
    *, operation: str | None, a: Any, b: Any, subject: str | None = None
) -> dict:
    """Apply a binary operation to two operands."""
    try:
        num_a, num_b, result = operations.binary(operation, a, b)
    except MathApiError as e:
        _rejected("binary", e, subject)
        raise
    logger.info(
        "math.binary",
        extra={"event": "math_binary", "operation": operation, "subject": subject},
    )
    return {
        "operation": operation,
        "operands": {"a": num_a, "b": num_b},
        "result": result,
        "timestamp": now_iso(),
    }


def calculate_list(
    *, operation: str | None, numbers: Any, subject: str | None = None
) -> dict:
    """Aggregate a list of numbers."""
    try:
        values, result = operations.aggregate(operation, numbers)
    except MathApiError as e:
        _rejected("list", e, subject)
        raise
    logger.info(
        "math.list",
        extra={
            "event": "math_list",
            "operation": operation,
            "count": len(values),
            "subject": subject,
        },
    )
    return {
        "operation": operation,
        "numbers": values,
        "result": result,
        "count": len(values),
        "timestamp": now_iso(),
    }


def power(*, base: Any, exponent: Any, subject: str | None = None) -> dict:
    """Raise base to exponent."""
    try:
        num_base, num_exponent, result = operations.power(base, exponent)
    except MathApiError as e:
        _rejected("power", e, subject)
        raise
    logger.info("math.power", extra={"event": "math_power", "subject": subject})
    return {
        "operation": "power",
        "base": num_base,
        "exponent": num_exponent,
        "result": result,
        "expression": (
            f"{operations.format_number(num_base)}^{operations.format_number(num_exponent)}"
        ),
        "timestamp": now_iso(),
    }


def factorial(*, n: Any, subject: str | None = None) -> dict:
    """Compute n!."""
    try:
        value, result = operations.factorial(n)
    except MathApiError as e:
        _rejected("factorial", e, subject)
        raise
    logger.info(
        "math.factorial",
        extra={"event": "math_factorial", "n": value, "subject": subject},
    )
    return {
        "operation": "factorial",
        "input": value,
        "result": result,
        "expression": f"{value}!",
        "timestamp": now_iso(),
    }
