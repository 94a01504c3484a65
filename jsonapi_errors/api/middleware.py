"""
Request-scoped error helpers for FastAPI/Starlette applications.

`JsonApiErrorsMiddleware` installs an ErrorResponder at `request.state.errors`
for every HTTP request. Each of its methods builds an error of the matching
kind and returns the JSON:API response for it:

    @router.get("/tenants/{tenant_id}")
    def read_tenant(tenant_id: str, request: Request):
        tenant = find_tenant(tenant_id)
        if tenant is None:
            return request.state.errors.not_found("Tenant does not exist")
        return tenant

`register_error_handlers` renders raised HTTPErrors (and unexpected
exceptions, as 500s) the same way. No stack traces or internal messages are
sent to clients; server errors are logged instead.
"""
from __future__ import annotations
from typing import Any, Callable, Optional
from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from starlette.datastructures import State
from starlette.types import ASGIApp, Receive, Scope, Send
from jsonapi_errors.core.config import settings
from jsonapi_errors.core.errors import HTTPError
from jsonapi_errors.core.logger import log_error_event, logger
from jsonapi_errors.services.dispatch import ErrorKind, JsonApiErrors, errors as default_errors

STATE_ATTRIBUTE = "errors"


def error_response(error: HTTPError) -> JSONResponse:
    """Build the HTTP response for an error: its status, payload and headers."""
    if error.is_server:
        log_error_event(
            kind="response",
            status_code=error.output.status_code,
            code=error.output.payload.get("code"),
            error_id=error.output.payload.get("id"),
            level="error",
            message=f"Server error sent: {error.message}",
        )
    return JSONResponse(
        content=jsonable_encoder(error.output.payload),
        status_code=error.output.status_code,
        headers=dict(error.output.headers),
        media_type=settings.JSONAPI_MEDIA_TYPE,
    )


class ErrorResponder:
    """Per-request namespace with one bound method per ErrorKind."""

    def __init__(self, factory: JsonApiErrors) -> None:
        self.factory = factory
        for kind in ErrorKind:
            setattr(self, kind.value, self._bind(kind))

    def _bind(self, kind: ErrorKind) -> Callable[..., JSONResponse]:
        def send(*args: Any, **kwargs: Any) -> JSONResponse:
            return error_response(self.factory.build(kind, *args, **kwargs))

        send.__name__ = send.__qualname__ = kind.value
        return send


def bind_response(
    target: Any,
    factory: Optional[JsonApiErrors] = None,
    attribute: str = STATE_ATTRIBUTE,
) -> ErrorResponder:
    """
    Attach an ErrorResponder to `target`.

    Raises:
        RuntimeError: if `target` already carries one (installed twice)
    """
    if getattr(target, attribute, None) is not None:
        raise RuntimeError(f"{attribute} helper already exists on response object")
    responder = ErrorResponder(factory or default_errors)
    setattr(target, attribute, responder)
    return responder


class JsonApiErrorsMiddleware:
    """ASGI middleware installing `request.state.errors` on every HTTP request."""

    def __init__(self, app: ASGIApp, factory: Optional[JsonApiErrors] = None) -> None:
        self.app = app
        self.factory = factory

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] == "http":
            bind_response(State(scope.setdefault("state", {})), self.factory)
        await self.app(scope, receive, send)


def register_error_handlers(app: FastAPI, factory: Optional[JsonApiErrors] = None) -> None:
    """
    Register JSON:API error handlers on the FastAPI application.

    Args:
        app: The FastAPI application instance.
        factory: Constructor facade (defaults to the process-wide one)
    """
    factory = factory or default_errors

    @app.exception_handler(HTTPError)
    async def handle_http_error(_request: Request, exc: HTTPError) -> JSONResponse:
        """Send raised errors; plain factory errors get their fields derived first."""
        if "status" not in exc.output.payload:
            exc = factory.wrap(exc)
        return error_response(exc)

    @app.exception_handler(Exception)
    async def handle_unexpected(_request: Request, exc: Exception) -> JSONResponse:
        """Catch-all for unexpected errors. Never exposes internals."""
        logger.exception("Unexpected error: %s", type(exc).__name__)
        return error_response(factory.wrap(exc))
