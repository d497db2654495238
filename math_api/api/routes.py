from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from ..logging_conf import get_logger
from ..service import math_service
from ..service.auth_service import CredentialVerifier, Identity
from .deps import get_verifier, require_identity
from .models import (
    CalculateResponse,
    ErrorResponse,
    FactorialResponse,
    ListCalculateRequest,
    ListCalculateResponse,
    LoginRequest,
    LoginResponse,
    PowerRequest,
    PowerResponse,
)

router = APIRouter()
logger = get_logger("api")

_AUTH_ERRORS = {
    400: {"model": ErrorResponse, "description": "Missing or invalid parameters"},
    401: {"model": ErrorResponse, "description": "Access token required"},
    403: {"model": ErrorResponse, "description": "Invalid or expired token"},
}


@router.post(
    "/auth/login",
    response_model=LoginResponse,
    summary="Authenticate and receive an access token",
    tags=["auth"],
    responses={
        400: {"model": ErrorResponse, "description": "Missing username or password"},
        401: {"model": ErrorResponse, "description": "Invalid credentials"},
    },
)
async def login(
    req: LoginRequest | None = None,
    verifier: CredentialVerifier = Depends(get_verifier),
) -> LoginResponse:
    """Exchange a username/password pair for a 24h bearer token."""
    req = req or LoginRequest()
    out = verifier.authenticate(req.username, req.password)
    return LoginResponse(**out)


@router.get(
    "/math/calculate",
    response_model=CalculateResponse,
    summary="Binary operation on two query operands",
    tags=["math"],
    responses=_AUTH_ERRORS,
)
async def calculate(
    operation: str | None = Query(None, description="add, subtract, multiply or divide"),
    a: str | None = Query(None),
    b: str | None = Query(None),
    identity: Identity = Depends(require_identity),
) -> CalculateResponse:
    out = math_service.calculate(operation=operation, a=a, b=b, subject=identity.username)
    return CalculateResponse(**out)


@router.post(
    "/math/calculate",
    response_model=ListCalculateResponse,
    summary="Aggregate a list of numbers",
    tags=["math"],
    responses=_AUTH_ERRORS,
)
async def calculate_list(
    req: ListCalculateRequest | None = None,
    identity: Identity = Depends(require_identity),
) -> ListCalculateResponse:
    """Apply sum, product, average, max or min to `numbers`."""
    req = req or ListCalculateRequest()
    out = math_service.calculate_list(
        operation=req.operation, numbers=req.numbers, subject=identity.username
    )
    return ListCalculateResponse(**out)


@router.put(
    "/math/power",
    response_model=PowerResponse,
    summary="Raise base to exponent",
    tags=["math"],
    responses=_AUTH_ERRORS,
)
async def power(
    req: PowerRequest | None = None,
    identity: Identity = Depends(require_identity),
) -> PowerResponse:
    req = req or PowerRequest()
    out = math_service.power(base=req.base, exponent=req.exponent, subject=identity.username)
    return PowerResponse(**out)


@router.get(
    "/math/factorial",
    response_model=FactorialResponse,
    summary="Factorial of 0 <= n <= 170",
    tags=["math"],
    responses=_AUTH_ERRORS,
)
async def factorial(
    n: str | None = Query(None),
    identity: Identity = Depends(require_identity),
) -> FactorialResponse:
    out = math_service.factorial(n=n, subject=identity.username)
    return FactorialResponse(**out)
