# =============================================================================
# app/middleware.py - ASGI Middleware
# =============================================================================
# - BodySizeLimitMiddleware: rejects JSON / form bodies over their limit
#   before any route logic runs
# - RequestLoggingMiddleware: logs timestamp, method and path of every request
# - UnhandledErrorMiddleware: turns uncaught handler errors into the 500 JSON
#
# All are plain ASGI callables so they see the request outside FastAPI's
# routing and never buffer the response.
# =============================================================================

import logging

from fastapi import Request
from fastapi.responses import JSONResponse
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from app.exceptions import PayloadTooLargeError
from app.parsers import URLENCODED_CONTENT_TYPE, is_json_media_type, media_type
from lib.utils import iso_timestamp

logger = logging.getLogger(__name__)


def _header(scope: Scope, name: bytes) -> str | None:
    for key, value in scope.get("headers", []):
        if key.lower() == name:
            return value.decode("latin-1")
    return None


class BodySizeLimitMiddleware:
    """
    Enforce per-content-type body limits.

    A declared Content-Length over the limit is answered with 413 right away.
    Chunked bodies are counted as they stream in; crossing the limit raises
    PayloadTooLargeError inside the handler that is reading the body, which
    the exception handlers turn into the same 413 response.
    """

    def __init__(self, app: ASGIApp, json_limit: int, urlencoded_limit: int):
        self.app = app
        self.json_limit = json_limit
        self.urlencoded_limit = urlencoded_limit

    def limit_for(self, content_type: str | None) -> int | None:
        kind = media_type(content_type)
        if is_json_media_type(kind):
            return self.json_limit
        if kind == URLENCODED_CONTENT_TYPE:
            return self.urlencoded_limit
        return None

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        limit = self.limit_for(_header(scope, b"content-type"))
        if limit is None:
            await self.app(scope, receive, send)
            return

        declared = _header(scope, b"content-length")
        if declared is not None and declared.isdigit() and int(declared) > limit:
            logger.warning(f"Rejected {scope['method']} {scope['path']}: body of {declared} bytes exceeds {limit}")
            response = JSONResponse(status_code=413, content=PayloadTooLargeError(limit).to_dict())
            await response(scope, receive, send)
            return

        received = 0

        async def limited_receive() -> Message:
            nonlocal received
            message = await receive()
            if message["type"] == "http.request":
                received += len(message.get("body", b""))
                if received > limit:
                    raise PayloadTooLargeError(limit)
            return message

        await self.app(scope, limited_receive, send)


class RequestLoggingMiddleware:
    """Log every inbound request, then pass it on unconditionally."""

    def __init__(self, app: ASGIApp):
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] == "http":
            logger.info(f"{iso_timestamp()} - {scope['method']} {scope['path']}")
        await self.app(scope, receive, send)


class UnhandledErrorMiddleware:
    """
    Render errors no exception handler claimed as the 500 JSON.

    Installed innermost, inside CORS, so a 500 carries the same CORS headers
    as every other response. An error raised after the response has started
    cannot be rendered and is re-raised.
    """

    def __init__(self, app: ASGIApp, handler):
        self.app = app
        self.handler = handler

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        response_started = False

        async def tracking_send(message: Message) -> None:
            nonlocal response_started
            if message["type"] == "http.response.start":
                response_started = True
            await send(message)

        try:
            await self.app(scope, receive, tracking_send)
        except Exception as exc:
            if response_started:
                raise
            response = await self.handler(Request(scope), exc)
            await response(scope, receive, send)
