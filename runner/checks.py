"""The fixed table of requests a smoke run exercises."""
from __future__ import annotations

from runner.types import Check

DEFAULT_CHECKS: tuple[Check, ...] = (
    Check(
        name="calculate.add",
        method="GET",
        path="/math/calculate",
        params={"operation": "add", "a": "5", "b": "3"},
        expected_result=8,
    ),
    Check(
        name="calculate.divide_by_zero",
        method="GET",
        path="/math/calculate",
        params={"operation": "divide", "a": "1", "b": "0"},
        expected_status=400,
    ),
    Check(
        name="list.sum",
        method="POST",
        path="/math/calculate",
        json={"operation": "sum", "numbers": [1, 2, 3, 4, 5]},
        expected_result=15,
    ),
    Check(
        name="list.empty",
        method="POST",
        path="/math/calculate",
        json={"operation": "product", "numbers": []},
        expected_status=400,
    ),
    Check(
        name="power.basic",
        method="PUT",
        path="/math/power",
        json={"base": 2, "exponent": 3},
        expected_result=8,
    ),
    Check(
        name="power.non_finite",
        method="PUT",
        path="/math/power",
        json={"base": 0, "exponent": -1},
        expected_status=400,
    ),
    Check(
        name="factorial.five",
        method="GET",
        path="/math/factorial",
        params={"n": "5"},
        expected_result=120,
    ),
    Check(
        name="factorial.out_of_range",
        method="GET",
        path="/math/factorial",
        params={"n": "171"},
        expected_status=400,
    ),
    Check(
        name="guard.no_token",
        method="GET",
        path="/math/calculate",
        params={"operation": "add", "a": "1", "b": "1"},
        expected_status=401,
        authenticated=False,
    ),
)
