"""FastAPI app factory: middleware, error handlers, root/health and API routes."""
from __future__ import annotations

import time
from collections.abc import Callable
from uuid import uuid4

from fastapi import FastAPI, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from math_api.api import router as api_router
from math_api.api.limits import BodySizeLimitMiddleware
from math_api.config import Settings
from math_api.domain.credentials import DEFAULT_RECORDS, CredentialStore, InMemoryCredentialStore
from math_api.domain.errors import InternalFault, InvalidJson, InvalidRequest, MathApiError
from math_api.logging_conf import get_logger, setup_logging
from math_api.service.auth_service import AccessGuard, CredentialVerifier

# Configure logging before anything else.
setup_logging()
logger = get_logger("app")


def _error_response(err: MathApiError) -> JSONResponse:
    return JSONResponse(status_code=err.status_code, content=err.to_body())


def _validation_details(exc: RequestValidationError) -> list[dict]:
    return [
        {
            "field": ".".join(str(p) for p in err.get("loc", ())[1:]),
            "message": err.get("msg", ""),
        }
        for err in exc.errors()
    ]


def create_app(
    settings: Settings | None = None, store: CredentialStore | None = None
) -> FastAPI:
    settings = settings or Settings.from_env()
    store = store if store is not None else InMemoryCredentialStore(DEFAULT_RECORDS)

    app = FastAPI(title="Math API", version=settings.version)
    app.state.settings = settings
    app.state.verifier = CredentialVerifier(settings, store)
    app.state.guard = AccessGuard(settings)
    # Added first so the request logger below wraps it and logs its 413s.
    app.add_middleware(BodySizeLimitMiddleware, max_body_bytes=settings.max_body_bytes)

    @app.on_event("startup")
    async def _on_startup() -> None:
        logger.info(
            "startup",
            extra={
                "event": "startup",
                "environment": settings.environment,
                "port": settings.port,
                "insecure_secret": settings.uses_default_secret,
            },
        )

    @app.on_event("shutdown")
    async def _on_shutdown() -> None:
        logger.info("shutdown", extra={"event": "shutdown"})

    @app.middleware("http")
    async def request_logger(request: Request, call_next: Callable[[Request], Response]):
        """JSON request logging with a correlation id.

        Reuses an incoming X-Request-ID or mints one, logs start/end with the
        authenticated subject when there is one, and echoes the id back.
        """
        request_id = request.headers.get("X-Request-ID", str(uuid4()))
        request.state.request_id = request_id

        start = time.perf_counter()
        logger.info(
            "request.start",
            extra={
                "event": "request_start",
                "method": request.method,
                "path": request.url.path,
                "request_id": request_id,
            },
        )
        try:
            response = await call_next(request)
        except Exception:
            # The fault barrier below turns this into a 500 and logs the traceback.
            logger.error(
                "request.error",
                extra={
                    "event": "request_error",
                    "path": request.url.path,
                    "method": request.method,
                    "request_id": request_id,
                },
            )
            raise
        finally:
            elapsed_ms = (time.perf_counter() - start) * 1000.0

        identity = getattr(request.state, "identity", None)
        response.headers["X-Request-ID"] = request_id
        logger.info(
            "request.end",
            extra={
                "event": "request_end",
                "status_code": response.status_code,
                "elapsed_ms": round(elapsed_ms, 2),
                "request_id": request_id,
                "subject": identity.username if identity else None,
            },
        )
        return response

    # ------------------------
    # Error handlers
    # ------------------------

    @app.exception_handler(MathApiError)
    async def _on_math_api_error(request: Request, exc: MathApiError) -> JSONResponse:
        return _error_response(exc)

    @app.exception_handler(RequestValidationError)
    async def _on_validation_error(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        if any(err.get("type") == "json_invalid" for err in exc.errors()):
            return _error_response(InvalidJson(details="Please check your JSON syntax"))
        return _error_response(InvalidRequest(details=_validation_details(exc)))

    @app.exception_handler(StarletteHTTPException)
    async def _on_http_error(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        # Unknown path or known path with the wrong method.
        if exc.status_code in (404, 405):
            return JSONResponse(status_code=404, content={"error": "Endpoint not found"})
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": str(exc.detail)},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def _fault_barrier(request: Request, exc: Exception) -> JSONResponse:
        logger.error(
            "app.fault",
            exc_info=exc,
            extra={
                "event": "fault",
                "path": request.url.path,
                "request_id": getattr(request.state, "request_id", None),
            },
        )
        return _error_response(InternalFault())

    # ------------------------
    # Unguarded routes
    # ------------------------

    @app.get("/", summary="Service index")
    async def root() -> JSONResponse:
        return JSONResponse(
            content={
                "message": "Math API Server",
                "version": settings.version,
                "endpoints": {
                    "auth": "POST /auth/login",
                    "calculate_get": "GET /math/calculate",
                    "calculate_post": "POST /math/calculate",
                    "power": "PUT /math/power",
                    "factorial": "GET /math/factorial",
                },
                "documentation": {
                    "swagger": "/docs",
                    "openapi": "/openapi.json",
                },
            }
        )

    @app.get("/health", summary="Liveness/readiness check")
    async def health() -> JSONResponse:
        return JSONResponse(content={"ok": True})

    app.include_router(api_router)

    return app


def run() -> None:
    """Console entrypoint: serve the module-level app on HOST:PORT."""
    import uvicorn

    settings = app.state.settings
    uvicorn.run(app, host=settings.host, port=settings.port, log_config=None)


# ASGI entrypoint for uvicorn: `uvicorn math_api.main:app --port 3000`
app = create_app()
