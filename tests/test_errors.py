import pytest

from math_api.domain import errors
from math_api.domain.errors import ErrorKind, status_for


@pytest.mark.parametrize(
    "kind, status",
    [
        (ErrorKind.missing_parameters, 400),
        (ErrorKind.invalid_numeric, 400),
        (ErrorKind.invalid_range, 400),
        (ErrorKind.division_by_zero, 400),
        (ErrorKind.non_finite_result, 400),
        (ErrorKind.empty_sequence, 400),
        (ErrorKind.unsupported_operation, 400),
        (ErrorKind.invalid_json, 400),
        (ErrorKind.token_required, 401),
        (ErrorKind.invalid_credentials, 401),
        (ErrorKind.token_invalid, 403),
        (ErrorKind.internal_fault, 500),
    ],
)
def test_status_for(kind, status):
    assert status_for(kind) == status


def test_every_kind_has_an_exception_class():
    kinds = {
        cls.kind
        for cls in vars(errors).values()
        if isinstance(cls, type) and issubclass(cls, errors.MathApiError)
        and cls is not errors.MathApiError
    }
    assert kinds == set(ErrorKind)


def test_to_body_includes_only_given_hints():
    assert errors.DivisionByZero().to_body() == {"error": "Division by zero is not allowed"}
    body = errors.MissingParameters("Missing x", example={"x": 1}).to_body()
    assert body == {"error": "Missing x", "example": {"x": 1}}


def test_login_failures_share_one_message():
    assert errors.InvalidCredentials().message == "Invalid credentials"
    assert errors.InvalidCredentials().status_code == 401
