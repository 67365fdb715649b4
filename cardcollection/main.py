import logging
from collections.abc import AsyncGenerator, Awaitable, Callable
from contextlib import asynccontextmanager
from http import HTTPStatus
from importlib.metadata import version as pkg_version

import uvicorn
from fastapi import FastAPI, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.datastructures import Headers
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from cardcollection.api import cards_router, health_router
from cardcollection.config import Settings, settings
from cardcollection.db.store import CardStore
from cardcollection.logging_config import setup_logging
from cardcollection.models.failure import (
    ERROR_TITLES,
    GENERIC_INTERNAL_MESSAGE,
    ApiError,
    ErrorKind,
    ErrorResponse,
    PayloadTooLargeError,
    ValidationError,
)
from cardcollection.services.card_service import CardService
from cardcollection.services.validators import parse_int

logger = logging.getLogger(__name__)

INVALID_JSON_MESSAGE = "Request body must be valid JSON"


def _error_json(status_code: int, body: ErrorResponse) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=body.model_dump(mode="json", exclude_none=True),
    )


def _api_error_response(exc: ApiError, app_settings: Settings) -> JSONResponse:
    body = exc.to_response(include_detail=not app_settings.is_production)
    return _error_json(exc.status_code, body)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler for startup/shutdown."""
    app_settings: Settings = app.state.settings
    logger.info("Server started successfully")
    logger.info("Environment: %s", app_settings.environment)
    logger.info("Listening on http://%s:%d", app_settings.host, app_settings.port)
    yield
    logger.info("HTTP server closed")


class BodySizeLimitMiddleware:
    """
    Reject request bodies larger than ``max_body_bytes`` with a 413.

    A declared Content-Length over the limit is refused before reading.
    Otherwise the body is read and counted as it arrives, which also covers
    chunked uploads, then replayed to the app once it fits.
    """

    def __init__(self, app: ASGIApp, app_settings: Settings) -> None:
        self.app = app
        self.app_settings = app_settings
        self.max_body_bytes = app_settings.max_body_bytes

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        declared = parse_int(Headers(scope=scope).get("content-length"))
        if declared is not None and declared > self.max_body_bytes:
            await self._reject(scope, receive, send, declared)
            return

        buffered: list[Message] = []
        received = 0
        more_body = True
        while more_body:
            message = await receive()
            buffered.append(message)
            if message["type"] != "http.request":
                break
            received += len(message.get("body", b""))
            if received > self.max_body_bytes:
                await self._reject(scope, receive, send, received)
                return
            more_body = message.get("more_body", False)

        async def replay() -> Message:
            if buffered:
                return buffered.pop(0)
            return await receive()

        await self.app(scope, replay, send)

    async def _reject(self, scope: Scope, receive: Receive, send: Send, size: int) -> None:
        logger.warning(
            "Request body too large: at least %d bytes",
            size,
            extra={"path": scope.get("path"), "limit": self.max_body_bytes},
        )
        error = PayloadTooLargeError(self.max_body_bytes)
        response = _api_error_response(error, self.app_settings)
        await response(scope, receive, send)


def _register_middleware(app: FastAPI, app_settings: Settings) -> None:
    @app.middleware("http")
    async def log_requests(
        request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        logger.debug(
            "%s %s",
            request.method,
            request.url.path,
            extra={"query": dict(request.query_params)},
        )
        return await call_next(request)

    app.add_middleware(BodySizeLimitMiddleware, app_settings=app_settings)

    # Outermost of ours, so 4xx error bodies carry CORS headers. Responses from
    # the unhandled-exception handler are produced by Starlette's
    # ServerErrorMiddleware, which sits outside this one, and carry none.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[app_settings.cors_origin],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )


def _register_exception_handlers(app: FastAPI, app_settings: Settings) -> None:
    @app.exception_handler(ApiError)
    async def handle_api_error(_request: Request, exc: ApiError) -> JSONResponse:
        return _api_error_response(exc, app_settings)

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(
        _request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        errors = exc.errors()
        if any(error.get("type") == "json_invalid" for error in errors):
            messages = [INVALID_JSON_MESSAGE]
        else:
            messages = [
                f"{'.'.join(str(part) for part in error.get('loc', ()))}: {error.get('msg')}"
                for error in errors
            ]
        logger.warning("Malformed request", extra={"errors": messages})
        return _api_error_response(ValidationError(messages), app_settings)

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_error(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        # Unknown paths and unsupported methods are both "no such endpoint"
        if exc.status_code in (HTTPStatus.NOT_FOUND, HTTPStatus.METHOD_NOT_ALLOWED):
            logger.warning("Route not found: %s %s", request.method, request.url.path)
            body = ErrorResponse(
                error=ERROR_TITLES[ErrorKind.NOT_FOUND],
                message=(
                    f"The requested endpoint {request.method} {request.url.path} does not exist"
                ),
            )
            return _error_json(HTTPStatus.NOT_FOUND, body)

        body = ErrorResponse(error=HTTPStatus(exc.status_code).phrase, message=str(exc.detail))
        return _error_json(exc.status_code, body)

    @app.exception_handler(Exception)
    async def handle_unexpected(request: Request, exc: Exception) -> JSONResponse:
        logger.error(
            "Unhandled error on %s %s",
            request.method,
            request.url.path,
            exc_info=exc,
        )
        message = GENERIC_INTERNAL_MESSAGE if app_settings.is_production else str(exc)
        body = ErrorResponse(
            error=HTTPStatus.INTERNAL_SERVER_ERROR.phrase,
            message=message or GENERIC_INTERNAL_MESSAGE,
        )
        return _error_json(HTTPStatus.INTERNAL_SERVER_ERROR, body)


def create_app(app_settings: Settings | None = None, store: CardStore | None = None) -> FastAPI:
    """
    Build a configured application.

    Each call gets its own store and service, so separate apps never share
    cards. Logging is configured from the settings before anything else.
    """
    app_settings = app_settings or settings
    setup_logging(app_settings.log_level)

    app = FastAPI(
        title=app_settings.app_name,
        version=pkg_version("cardcollection"),
        lifespan=lifespan,
    )

    app.state.settings = app_settings
    app.state.store = store if store is not None else CardStore()
    app.state.card_service = CardService(app.state.store)

    app.include_router(health_router)
    app.include_router(cards_router)

    _register_middleware(app, app_settings)
    _register_exception_handlers(app, app_settings)

    return app


app = create_app()


def run() -> None:
    """Serve the application with uvicorn."""
    uvicorn.run(app, host=settings.host, port=settings.port, log_config=None)
