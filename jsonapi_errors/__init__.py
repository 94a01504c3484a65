"""JSON:API error objects for FastAPI applications."""
from jsonapi_errors.core.config import DocsConfig, docs, settings
from jsonapi_errors.core.errors import HTTPError, InvalidStatusCodeError, is_http_error
from jsonapi_errors.schemas.errors import ErrorDocument, ErrorObject, InvocationOptions
from jsonapi_errors.services.dispatch import ErrorKind, JsonApiErrors, errors
from jsonapi_errors.services.fields import derive_fields
from jsonapi_errors.services.serializer import serialize, serialize_document
from jsonapi_errors.api.middleware import JsonApiErrorsMiddleware, bind_response, register_error_handlers

__version__ = "1.0.0"

__all__ = [
    "DocsConfig",
    "ErrorDocument",
    "ErrorKind",
    "ErrorObject",
    "HTTPError",
    "InvalidStatusCodeError",
    "InvocationOptions",
    "JsonApiErrors",
    "JsonApiErrorsMiddleware",
    "bind_response",
    "derive_fields",
    "docs",
    "errors",
    "is_http_error",
    "register_error_handlers",
    "serialize",
    "serialize_document",
    "settings",
]
