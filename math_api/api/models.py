from __future__ import annotations

from typing import Any, Literal, Optional

from pydantic import BaseModel


class LoginRequest(BaseModel):
    """Credentials for POST /auth/login. Presence is checked by the verifier."""
    username: Optional[str] = None
    password: Optional[str] = None


class LoginResponse(BaseModel):
    message: str
    token: str
    expiresIn: str


class Operands(BaseModel):
    a: float
    b: float


class CalculateResponse(BaseModel):
    """Result of a binary operation."""
    operation: str
    operands: Operands
    result: float
    timestamp: str


class ListCalculateRequest(BaseModel):
    """List operation input. `numbers` is validated element by element."""
    operation: Optional[str] = None
    numbers: Any = None


class ListCalculateResponse(BaseModel):
    operation: str
    numbers: list[int | float]
    result: int | float
    count: int
    timestamp: str


class PowerRequest(BaseModel):
    base: Any = None
    exponent: Any = None


class PowerResponse(BaseModel):
    operation: Literal["power"]
    base: float
    exponent: float
    result: float
    expression: str
    timestamp: str


class FactorialResponse(BaseModel):
    operation: Literal["factorial"]
    input: int
    result: float
    expression: str
    timestamp: str


class ErrorResponse(BaseModel):
    """Body of every non-2xx response."""
    error: str
    example: Optional[Any] = None
    details: Optional[Any] = None
