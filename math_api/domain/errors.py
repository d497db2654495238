from __future__ import annotations

from enum import Enum
from typing import Any

__all__ = [
    "ErrorKind",
    "status_for",
    "MathApiError",
    "MissingParameters",
    "MissingCredentials",
    "InvalidNumeric",
    "InvalidRange",
    "DivisionByZero",
    "NonFiniteResult",
    "EmptySequence",
    "UnsupportedOperation",
    "InvalidJson",
    "InvalidRequest",
    "TokenRequired",
    "TokenInvalid",
    "InvalidCredentials",
    "InternalFault",
]


class ErrorKind(str, Enum):
    missing_parameters = "missing_parameters"
    missing_credentials = "missing_credentials"
    invalid_numeric = "invalid_numeric"
    invalid_range = "invalid_range"
    division_by_zero = "division_by_zero"
    non_finite_result = "non_finite_result"
    empty_sequence = "empty_sequence"
    unsupported_operation = "unsupported_operation"
    invalid_json = "invalid_json"
    invalid_request = "invalid_request"
    token_required = "token_required"
    token_invalid = "token_invalid"
    invalid_credentials = "invalid_credentials"
    internal_fault = "internal_fault"


_STATUS: dict[ErrorKind, int] = {
    ErrorKind.token_required: 401,
    ErrorKind.invalid_credentials: 401,
    ErrorKind.token_invalid: 403,
    ErrorKind.internal_fault: 500,
}


def status_for(kind: ErrorKind) -> int:
    """Map an error kind to its HTTP status. Everything unlisted is a 400."""
    return _STATUS.get(kind, 400)


class MathApiError(Exception):
    """Base class for every rejection the service reports to a caller.

    `kind` is the stable machine code; `example` and `details` are optional
    hints copied into the response body.
    """

    kind: ErrorKind = ErrorKind.internal_fault
    default_message: str = "Something went wrong!"

    def __init__(
        self,
        message: str | None = None,
        *,
        example: Any = None,
        details: Any = None,
    ) -> None:
        super().__init__(message or self.default_message)
        self.example = example
        self.details = details

    @property
    def message(self) -> str:
        return str(self)

    @property
    def status_code(self) -> int:
        return status_for(self.kind)

    def to_body(self) -> dict[str, Any]:
        body: dict[str, Any] = {"error": self.message}
        if self.example is not None:
            body["example"] = self.example
        if self.details is not None:
            body["details"] = self.details
        return body


class MissingParameters(MathApiError):
    kind = ErrorKind.missing_parameters
    default_message = "Missing parameters"


class MissingCredentials(MathApiError):
    kind = ErrorKind.missing_credentials
    default_message = "Username and password required"


class InvalidNumeric(MathApiError):
    kind = ErrorKind.invalid_numeric
    default_message = "Parameters must be valid numbers"


class InvalidRange(MathApiError):
    kind = ErrorKind.invalid_range
    default_message = "Parameter out of range"


class DivisionByZero(MathApiError):
    kind = ErrorKind.division_by_zero
    default_message = "Division by zero is not allowed"


class NonFiniteResult(MathApiError):
    kind = ErrorKind.non_finite_result
    default_message = "Result is not finite"


class EmptySequence(MathApiError):
    kind = ErrorKind.empty_sequence
    default_message = "Numbers array cannot be empty"


class UnsupportedOperation(MathApiError):
    kind = ErrorKind.unsupported_operation
    default_message = "Invalid operation"


class InvalidJson(MathApiError):
    kind = ErrorKind.invalid_json
    default_message = "Invalid JSON format in request body"


class InvalidRequest(MathApiError):
    kind = ErrorKind.invalid_request
    default_message = "Invalid request body"


class TokenRequired(MathApiError):
    kind = ErrorKind.token_required
    default_message = "Access token required"


class TokenInvalid(MathApiError):
    kind = ErrorKind.token_invalid
    default_message = "Invalid or expired token"


class InvalidCredentials(MathApiError):
    # Same message for unknown user and wrong password.
    kind = ErrorKind.invalid_credentials
    default_message = "Invalid credentials"


class InternalFault(MathApiError):
    kind = ErrorKind.internal_fault
    default_message = "Something went wrong!"
