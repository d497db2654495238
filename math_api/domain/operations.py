"""Validation and computation for the four operation families.

Every public function here either returns a finite result or raises a
`MathApiError` subclass before anything is computed for the caller. Inputs are
taken as they arrive from the HTTP layer (query strings or decoded JSON), so
parsing lives here too.
"""
from __future__ import annotations

import math
import operator
import re
from collections.abc import Callable, Sequence
from enum import Enum
from functools import reduce
from typing import Any

from .errors import (
    DivisionByZero,
    EmptySequence,
    InvalidNumeric,
    InvalidRange,
    MissingParameters,
    NonFiniteResult,
    UnsupportedOperation,
)

__all__ = [
    "FACTORIAL_MAX",
    "BinaryOp",
    "ListOp",
    "parse_number",
    "ensure_finite",
    "format_number",
    "binary",
    "aggregate",
    "power",
    "factorial",
]

# Largest n whose factorial still fits in a double.
FACTORIAL_MAX = 170

# ASCII decimal grammar only: no digit-group underscores, no other scripts' digits.
_DECIMAL_RE = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?", re.ASCII)
_INTEGER_RE = re.compile(r"[+-]?\d+", re.ASCII)

Number = int | float


class BinaryOp(str, Enum):
    add = "add"
    subtract = "subtract"
    multiply = "multiply"
    divide = "divide"


class ListOp(str, Enum):
    sum = "sum"
    product = "product"
    average = "average"
    max = "max"
    min = "min"


_BINARY: dict[BinaryOp, Callable[[float, float], float]] = {
    BinaryOp.add: operator.add,
    BinaryOp.subtract: operator.sub,
    BinaryOp.multiply: operator.mul,
    BinaryOp.divide: operator.truediv,
}


def _average(values: Sequence[Number]) -> Number:
    return reduce(operator.add, values, 0) / len(values)


_AGGREGATE: dict[ListOp, Callable[[Sequence[Number]], Number]] = {
    ListOp.sum: lambda values: reduce(operator.add, values, 0),
    ListOp.product: lambda values: reduce(operator.mul, values, 1),
    ListOp.average: _average,
    ListOp.max: max,
    ListOp.min: min,
}


def _is_json_number(value: Any) -> bool:
    # bool is an int subclass but never a number on the wire
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _is_finite_number(value: Any) -> bool:
    if not _is_json_number(value):
        return False
    try:
        return math.isfinite(value)
    except OverflowError:  # int too large for a double
        return False


def _lookup(enum_cls: type[Enum], name: str, message: str) -> Any:
    try:
        return enum_cls(name.lower())
    except ValueError:
        raise UnsupportedOperation(message) from None


def ensure_finite(value: Number) -> Number:
    """Return `value` unchanged if it is representable as a finite double."""
    try:
        as_float = float(value)
    except OverflowError:
        raise NonFiniteResult() from None
    if not math.isfinite(as_float):
        raise NonFiniteResult()
    return value


def parse_number(value: Any, *, message: str) -> float:
    """Parse a query-string or JSON value as a finite float.

    Accepts JSON numbers and numeric strings. None, booleans, blank strings,
    `nan`/`inf` and anything else raise InvalidNumeric with `message`.
    """
    if _is_json_number(value):
        if not _is_finite_number(value):
            raise InvalidNumeric(message)
        parsed = float(value)
    elif isinstance(value, str) and _DECIMAL_RE.fullmatch(value.strip()):
        parsed = float(value.strip())
    else:
        raise InvalidNumeric(message)
    if not math.isfinite(parsed):
        raise InvalidNumeric(message)
    return parsed


def format_number(value: Number) -> str:
    """Render a number the way clients expect in expressions: `2`, not `2.0`."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


# ------------------------
# Operation families
# ------------------------

def binary(operation: str | None, a: Any, b: Any) -> tuple[float, float, float]:
    """Apply add/subtract/multiply/divide to two operands.

    Returns the parsed operands and the result.
    """
    if not operation:
        raise MissingParameters(
            "Missing parameters. Required: operation, a, b",
            example="/math/calculate?operation=add&a=5&b=3",
        )
    message = "Parameters a and b must be valid numbers"
    num_a = parse_number(a, message=message)
    num_b = parse_number(b, message=message)

    op = _lookup(
        BinaryOp, operation, "Invalid operation. Supported: add, subtract, multiply, divide"
    )
    if op is BinaryOp.divide and num_b == 0:
        raise DivisionByZero()

    result = ensure_finite(_BINARY[op](num_a, num_b))
    return num_a, num_b, result


def aggregate(operation: str | None, numbers: Any) -> tuple[list[Number], Number]:
    """Fold a non-empty list of numbers with sum/product/average/max/min.

    Returns the validated list and the result. A single bad element rejects the
    whole request.
    """
    if not operation or not isinstance(numbers, list):
        raise MissingParameters(
            "Missing or invalid parameters. Required: operation (string), numbers (array)",
            example={"operation": "sum", "numbers": [1, 2, 3, 4]},
        )
    if not numbers:
        raise EmptySequence()
    if not all(_is_finite_number(n) for n in numbers):
        raise InvalidNumeric("All elements in numbers array must be valid numbers")

    op = _lookup(ListOp, operation, "Invalid operation. Supported: sum, product, average, max, min")
    result = ensure_finite(_AGGREGATE[op](numbers))
    return list(numbers), result


def power(base: Any, exponent: Any) -> tuple[float, float, float]:
    """Raise `base` to `exponent`, rejecting overflow and undefined results."""
    if base is None or exponent is None:
        raise MissingParameters(
            "Missing parameters. Required: base, exponent",
            example={"base": 2, "exponent": 3},
        )
    message = "Base and exponent must be valid numbers"
    num_base = parse_number(base, message=message)
    num_exponent = parse_number(exponent, message=message)

    try:
        # math.pow raises instead of returning inf/nan/complex
        result = math.pow(num_base, num_exponent)
    except (OverflowError, ValueError, ZeroDivisionError):
        raise NonFiniteResult() from None
    return num_base, num_exponent, ensure_finite(result)


def _parse_factorial_input(n: Any) -> int:
    range_message = (
        f"n must be a non-negative integer less than or equal to {FACTORIAL_MAX}"
    )
    if isinstance(n, bool):
        raise InvalidRange(range_message)
    if isinstance(n, int):
        value = n
    elif isinstance(n, str) and _INTEGER_RE.fullmatch(n.strip()):
        value = int(n.strip(), 10)
    else:
        raise InvalidRange(range_message)
    if not (0 <= value <= FACTORIAL_MAX):
        raise InvalidRange(range_message)
    return value


def factorial(n: Any) -> tuple[int, float]:
    """Compute n! as a double for 0 <= n <= FACTORIAL_MAX. Returns (n, n!)."""
    if n is None or (isinstance(n, str) and not n.strip()):
        raise InvalidRange("Missing parameter n", example="/math/factorial?n=5")
    value = _parse_factorial_input(n)

    result = 1.0
    for i in range(2, value + 1):
        result *= i
    return value, result
