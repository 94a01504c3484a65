# jsonapi_errors/main.py
from typing import Optional
from fastapi import FastAPI
from jsonapi_errors.api.middleware import JsonApiErrorsMiddleware, register_error_handlers
from jsonapi_errors.services.dispatch import JsonApiErrors


def create_app(factory: Optional[JsonApiErrors] = None, **kwargs) -> FastAPI:
    """
    Build a FastAPI application with JSON:API errors wired in.

    Installs the per-request `request.state.errors` helpers and the handlers
    that render raised errors.
    """
    app = FastAPI(**kwargs)
    app.add_middleware(JsonApiErrorsMiddleware, factory=factory)
    register_error_handlers(app, factory)

    @app.get("/health")
    def health(): return {"ok": True}

    return app
