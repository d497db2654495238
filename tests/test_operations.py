"""Unit tests for the pure operation families."""
import math

import pytest

from math_api.domain import operations
from math_api.domain.errors import (
    DivisionByZero,
    EmptySequence,
    InvalidNumeric,
    InvalidRange,
    MissingParameters,
    NonFiniteResult,
    UnsupportedOperation,
)


class TestParseNumber:
    @pytest.mark.parametrize(
        "raw, expected",
        [("5", 5.0), (" -2.5 ", -2.5), ("1e3", 1000.0), (7, 7.0), (0.25, 0.25)],
    )
    def test_accepts_numbers_and_numeric_strings(self, raw, expected):
        assert operations.parse_number(raw, message="bad") == expected

    @pytest.mark.parametrize(
        "raw",
        [None, "", "   ", "abc", "5abc", "nan", "inf", "1e400", True, [1], 10**400]
        # digit-group underscores and non-ASCII digits are not wire numbers
        + ["1_000", "1_0.5", "\u0665", "\uff15"],
    )
    def test_rejects_everything_else(self, raw):
        with pytest.raises(InvalidNumeric) as exc:
            operations.parse_number(raw, message="bad input")
        assert exc.value.message == "bad input"


class TestBinary:
    @pytest.mark.parametrize(
        "operation, a, b, expected",
        [
            ("add", "5", "3", 8.0),
            ("subtract", "5", "3", 2.0),
            ("multiply", "5", "3", 15.0),
            ("divide", "9", "3", 3.0),
            ("add", "0.1", "0.2", 0.3),
            ("multiply", "-1.5", "4", -6.0),
        ],
    )
    def test_arithmetic(self, operation, a, b, expected):
        num_a, num_b, result = operations.binary(operation, a, b)
        assert num_a == float(a)
        assert num_b == float(b)
        assert math.isclose(result, expected)

    def test_operation_name_is_case_insensitive(self):
        assert operations.binary("MuLtIpLy", "2", "4")[2] == 8.0

    @pytest.mark.parametrize("b", ["0", "0.0", "-0"])
    def test_divide_by_zero_is_rejected(self, b):
        with pytest.raises(DivisionByZero):
            operations.binary("divide", "1", b)

    def test_unknown_operation(self):
        with pytest.raises(UnsupportedOperation) as exc:
            operations.binary("modulo", "1", "2")
        assert "add, subtract, multiply, divide" in exc.value.message

    @pytest.mark.parametrize("a, b", [(None, "1"), ("1", None), ("x", "1"), ("1", "")])
    def test_bad_operands(self, a, b):
        with pytest.raises(InvalidNumeric):
            operations.binary("add", a, b)

    def test_missing_operation_has_example(self):
        with pytest.raises(MissingParameters) as exc:
            operations.binary(None, "1", "2")
        assert exc.value.example == "/math/calculate?operation=add&a=5&b=3"

    def test_overflow_is_rejected(self):
        with pytest.raises(NonFiniteResult):
            operations.binary("multiply", "1e308", "10")


class TestAggregate:
    @pytest.mark.parametrize(
        "operation, expected",
        [("sum", 15), ("product", 120), ("average", 3), ("max", 5), ("min", 1)],
    )
    def test_folds(self, operation, expected):
        values, result = operations.aggregate(operation, [1, 2, 3, 4, 5])
        assert values == [1, 2, 3, 4, 5]
        assert result == expected

    def test_mixed_ints_and_floats(self):
        _, result = operations.aggregate("average", [1, 2.5, -0.5])
        assert math.isclose(result, 1.0)

    def test_case_insensitive(self):
        assert operations.aggregate("SUM", [2, 2])[1] == 4

    def test_empty_sequence(self):
        with pytest.raises(EmptySequence):
            operations.aggregate("product", [])

    @pytest.mark.parametrize("bad", ["2", None, True, float("nan"), float("inf"), 10**400])
    def test_one_bad_element_rejects_all(self, bad):
        with pytest.raises(InvalidNumeric):
            operations.aggregate("sum", [1, bad, 3])

    @pytest.mark.parametrize(
        "operation, numbers", [(None, [1]), ("sum", None), ("sum", "1,2"), ("sum", {"a": 1})]
    )
    def test_missing_or_non_list(self, operation, numbers):
        with pytest.raises(MissingParameters) as exc:
            operations.aggregate(operation, numbers)
        assert exc.value.example == {"operation": "sum", "numbers": [1, 2, 3, 4]}

    def test_unknown_operation(self):
        with pytest.raises(UnsupportedOperation):
            operations.aggregate("median", [1, 2])

    def test_overflowing_product(self):
        with pytest.raises(NonFiniteResult):
            operations.aggregate("product", [1e200, 1e200])


class TestPower:
    def test_basic(self):
        assert operations.power(2, 3) == (2.0, 3.0, 8.0)

    def test_string_inputs(self):
        _, _, result = operations.power("2", "0.5")
        assert math.isclose(result, math.sqrt(2))

    @pytest.mark.parametrize(
        "base, exponent", [(0, -1), (10, 400), (-8, 1 / 3), (0.0, -0.5)]
    )
    def test_non_finite(self, base, exponent):
        with pytest.raises(NonFiniteResult):
            operations.power(base, exponent)

    @pytest.mark.parametrize("base, exponent", [(None, 2), (2, None), (None, None)])
    def test_missing(self, base, exponent):
        with pytest.raises(MissingParameters):
            operations.power(base, exponent)

    @pytest.mark.parametrize("base, exponent", [("x", 2), (2, "y"), (True, 2), ([2], 3)])
    def test_not_numeric(self, base, exponent):
        with pytest.raises(InvalidNumeric):
            operations.power(base, exponent)


class TestFactorial:
    @pytest.mark.parametrize("n, expected", [(0, 1), (1, 1), (5, 120), ("10", 3628800)])
    def test_values(self, n, expected):
        assert operations.factorial(n) == (int(n), expected)

    def test_upper_bound_is_inclusive(self):
        value, result = operations.factorial(170)
        assert value == 170
        assert isinstance(result, float)
        assert result == pytest.approx(float(math.factorial(170)))
        assert math.isfinite(result)

    @pytest.mark.parametrize("n", [171, -1, "171", "-1", "5.5", "abc", "1_0", "\u0665", True, 2.0])
    def test_out_of_range(self, n):
        with pytest.raises(InvalidRange) as exc:
            operations.factorial(n)
        assert "less than or equal to 170" in exc.value.message

    @pytest.mark.parametrize("n", [None, "", "  "])
    def test_missing(self, n):
        with pytest.raises(InvalidRange) as exc:
            operations.factorial(n)
        assert exc.value.message == "Missing parameter n"


@pytest.mark.parametrize(
    "value, expected", [(2.0, "2"), (2.5, "2.5"), (-1.0, "-1"), (3, "3"), (0.1, "0.1")]
)
def test_format_number(value, expected):
    assert operations.format_number(value) == expected


@pytest.mark.parametrize("raw", ["1.", ".5", "+3", "-2e-3", "4E+2"])
def test_ascii_decimal_forms_still_parse(raw):
    assert operations.parse_number(raw, message="bad") == float(raw)
