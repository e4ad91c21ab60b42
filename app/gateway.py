# =============================================================================
# app/gateway.py - HTTP Gateway Pipeline
# =============================================================================
# Builds the request pipeline in a fixed stage order:
#
#   1. configure()              CORS -> body parsers -> request logger
#   2. mount(prefix, router)    route collections (repeatable)
#   3. register_diagnostics()   GET /, GET /health, GET /api/auth/test
#   4. register_fallback()      catch-all 404
#   5. register_error_handler() catch-all 500
#
# The fallback and error handler must come last to act as catch-alls, so
# registering a stage after a later one raises PipelineOrderError.
#
# Usage:
#   gateway = Gateway(app, settings, database)
#   gateway.configure()
#   gateway.mount("/api/topics", topics.router)
#   app = gateway.build()
# =============================================================================

import logging
from enum import IntEnum

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, RedirectResponse, Response
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware import Middleware
from starlette.routing import Match

from app.config import Settings
from app.exceptions import (
    CodeBuddyException,
    build_unhandled_exception_handler,
    codebuddy_exception_handler,
    http_exception_handler,
    validation_exception_handler,
)
from app.middleware import BodySizeLimitMiddleware, RequestLoggingMiddleware, UnhandledErrorMiddleware
from app.routers import health
from lib.supabase_client import Database

logger = logging.getLogger(__name__)

CORS_METHODS = ["GET", "POST", "PUT", "DELETE", "OPTIONS"]
CORS_HEADERS = ["Content-Type", "Authorization", "X-Requested-With"]

FALLBACK_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]
FALLBACK_PATH = "/{full_path:path}"


def _without_trailing_slash(request: Request) -> str | None:
    """The request URL minus one trailing slash, if a real route matches it."""
    path = request.url.path
    if path == "/" or not path.endswith("/"):
        return None

    scope = {**request.scope, "path": path[:-1]}
    for route in request.app.router.routes:
        if getattr(route, "path", None) == FALLBACK_PATH:
            continue
        match, _ = route.matches(scope)
        if match == Match.FULL:
            return str(request.url.replace(path=path[:-1]))
    return None


class Stage(IntEnum):
    """Pipeline stages, in the only order they may be registered."""
    NEW = 0
    CONFIGURED = 1
    MOUNTED = 2
    DIAGNOSTICS = 3
    FALLBACK = 4
    ERROR_HANDLER = 5


class PipelineOrderError(RuntimeError):
    """Raised when a pipeline stage is registered out of order."""

    def __init__(self, requested: Stage, current: Stage):
        super().__init__(
            f"Cannot register {requested.name.lower()} after {current.name.lower()}; "
            f"stages must follow {' -> '.join(s.name.lower() for s in Stage if s)}"
        )
        self.requested = requested
        self.current = current


class Gateway:
    """
    Owns the FastAPI app's middleware chain, routes and fallbacks.

    The settings and database handle are published on app.state so handlers
    and diagnostics read them through the request instead of module globals.
    """

    def __init__(self, app: FastAPI, settings: Settings, database: Database):
        self.app = app
        self.settings = settings
        self.database = database
        self.stage = Stage.NEW
        self.mounted_prefixes: list[str] = []

        app.state.settings = settings
        app.state.database = database
        app.state.route_names = []

    def _advance(self, stage: Stage, repeatable: bool = False) -> None:
        if stage < self.stage or (stage == self.stage and not repeatable):
            raise PipelineOrderError(stage, self.stage)
        self.stage = stage

    # -------------------------------------------------------------------------
    # Stage 1: middleware chain
    # -------------------------------------------------------------------------

    def configure(self) -> None:
        """
        Register CORS, body parsers and the request logger, in that order.

        Starlette wraps middleware so the last one added runs first; the
        chain is declared outermost-first and added in reverse.
        """
        self._advance(Stage.CONFIGURED)

        chain = [
            (CORSMiddleware, {
                "allow_origins": [self.settings.CORS_ORIGIN],
                "allow_credentials": True,
                "allow_methods": CORS_METHODS,
                "allow_headers": CORS_HEADERS,
            }),
            (BodySizeLimitMiddleware, {
                "json_limit": self.settings.max_json_body_bytes,
                "urlencoded_limit": self.settings.max_urlencoded_body_bytes,
            }),
            (RequestLoggingMiddleware, {}),
        ]
        for middleware_class, options in reversed(chain):
            self.app.add_middleware(middleware_class, **options)

        # Client errors raised by the parsers and by route handlers
        self.app.add_exception_handler(CodeBuddyException, codebuddy_exception_handler)
        self.app.add_exception_handler(StarletteHTTPException, http_exception_handler)
        self.app.add_exception_handler(RequestValidationError, validation_exception_handler)

        logger.info(f"CORS origin: {self.settings.CORS_ORIGIN}")

    # -------------------------------------------------------------------------
    # Stage 2: route collections
    # -------------------------------------------------------------------------

    def mount(self, prefix: str, route_collection) -> None:
        """
        Bind an APIRouter under a path prefix.

        Args:
            prefix: e.g. "/api/topics"; must start with "/" and not end with one
            route_collection: The APIRouter to mount
        """
        if not prefix.startswith("/") or prefix.endswith("/"):
            raise ValueError(f"Invalid route prefix: {prefix!r}")
        if prefix in self.mounted_prefixes:
            raise ValueError(f"Route prefix already mounted: {prefix}")

        self._advance(Stage.MOUNTED, repeatable=True)
        self.app.include_router(route_collection, prefix=prefix)
        self.mounted_prefixes.append(prefix)
        self.app.state.route_names.append(prefix.rsplit("/", 1)[-1])
        logger.debug(f"Mounted route collection at {prefix}")

    # -------------------------------------------------------------------------
    # Stage 3: diagnostics
    # -------------------------------------------------------------------------

    def register_diagnostics(self) -> None:
        self._advance(Stage.DIAGNOSTICS)
        self.app.include_router(health.router)

    # -------------------------------------------------------------------------
    # Stage 4: 404 fallback
    # -------------------------------------------------------------------------

    def register_fallback(self) -> None:
        """
        Answer every request no earlier route matched with a 404.

        A path that only misses because of one trailing slash is redirected
        to the route it would have matched without it.
        """
        self._advance(Stage.FALLBACK)

        async def route_not_found(request: Request, full_path: str) -> Response:
            redirect = _without_trailing_slash(request)
            if redirect is not None:
                return RedirectResponse(url=redirect, status_code=307)

            path = request.url.path
            if request.url.query:
                path = f"{path}?{request.url.query}"
            logger.warning(f"Route not found: {request.method} {path}")
            return JSONResponse(
                status_code=404,
                content={
                    "message": "Route not found",
                    "path": path,
                    "method": request.method,
                },
            )

        self.app.add_api_route(
            FALLBACK_PATH,
            route_not_found,
            methods=FALLBACK_METHODS,
            include_in_schema=False,
        )

    # -------------------------------------------------------------------------
    # Stage 5: 500 error handler
    # -------------------------------------------------------------------------

    def register_error_handler(self) -> None:
        """
        Turn errors nothing else claimed into the 500 JSON.

        The renderer is appended as the innermost middleware so it runs inside
        CORS. The same handler on Exception covers errors raised by the outer
        middleware themselves.
        """
        self._advance(Stage.ERROR_HANDLER)
        handler = build_unhandled_exception_handler(expose_details=not self.settings.is_production)
        self.app.user_middleware.append(Middleware(UnhandledErrorMiddleware, handler=handler))
        self.app.add_exception_handler(Exception, handler)

    # -------------------------------------------------------------------------
    # Build
    # -------------------------------------------------------------------------

    def build(self) -> FastAPI:
        """Register every stage not registered yet, in order, and return the app."""
        if self.stage < Stage.CONFIGURED:
            self.configure()
        if self.stage < Stage.DIAGNOSTICS:
            self.register_diagnostics()
        if self.stage < Stage.FALLBACK:
            self.register_fallback()
        if self.stage < Stage.ERROR_HANDLER:
            self.register_error_handler()
        return self.app
