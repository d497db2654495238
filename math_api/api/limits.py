"""Request body size cap, enforced before the body reaches FastAPI."""
from __future__ import annotations

from fastapi import HTTPException
from fastapi.responses import JSONResponse
from starlette.types import ASGIApp, Message, Receive, Scope, Send

BODY_TOO_LARGE = "Request body too large"


class BodyTooLarge(HTTPException):
    """Raised from the wrapped receive once a streamed body passes the cap.

    It is an HTTPException so FastAPI's body reader re-raises it untouched and
    the app's HTTP error handler renders the 413.
    """

    def __init__(self) -> None:
        super().__init__(status_code=413, detail=BODY_TOO_LARGE)


def _too_large() -> JSONResponse:
    return JSONResponse(status_code=413, content={"error": BODY_TOO_LARGE})


class BodySizeLimitMiddleware:
    """Reject requests whose body exceeds `max_body_bytes` with a 413.

    A declared Content-Length is checked up front; bodies without one
    (chunked) are counted as they stream in.
    """

    def __init__(self, app: ASGIApp, max_body_bytes: int) -> None:
        self.app = app
        self.max_body_bytes = max_body_bytes

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        for header, value in scope.get("headers", []):
            if header == b"content-length":
                try:
                    size = int(value)
                except ValueError:
                    size = self.max_body_bytes + 1
                if size > self.max_body_bytes:
                    await _too_large()(scope, receive, send)
                    return

        received = 0

        async def counting_receive() -> Message:
            nonlocal received
            message = await receive()
            if message["type"] == "http.request":
                received += len(message.get("body", b""))
                if received > self.max_body_bytes:
                    raise BodyTooLarge()
            return message

        try:
            await self.app(scope, counting_receive, send)
        except BodyTooLarge:
            await _too_large()(scope, receive, send)
