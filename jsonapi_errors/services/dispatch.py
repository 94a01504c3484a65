"""
Error constructors producing JSON:API ready HTTPErrors.

Each ErrorKind maps, through a static table, to a factory in core.errors and
the argument shape it accepts. A constructor call classifies its arguments,
builds the base error through the factory and derives the JSON:API fields.

Usage:
    from jsonapi_errors import errors

    raise errors.bad_request({"err": exc, "code": "y-5678", "source": {"parameter": "include"}})
    raise errors.not_found("Tenant does not exist")
    raise errors.unauthorized(None, "Bearer", {"realm": "api"})
"""
from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, Optional
from jsonapi_errors.core import errors as factory
from jsonapi_errors.core.config import DocsConfig, docs as default_docs
from jsonapi_errors.core.errors import HTTPError
from jsonapi_errors.core.logger import log_error_event
from jsonapi_errors.schemas.errors import InvocationOptions
from jsonapi_errors.services.conventions import (
    AuthChallenge,
    CallingConvention,
    Generic,
    Positional,
    Shape,
    Structured,
    classify,
)
from jsonapi_errors.services.fields import derive_fields
from jsonapi_errors.services.serializer import serialize


class ErrorKind(str, Enum):
    BAD_REQUEST = "bad_request"                          # 400
    UNAUTHORIZED = "unauthorized"                        # 401
    FORBIDDEN = "forbidden"                              # 403
    NOT_FOUND = "not_found"                              # 404
    METHOD_NOT_ALLOWED = "method_not_allowed"            # 405
    NOT_ACCEPTABLE = "not_acceptable"                    # 406
    PROXY_AUTH_REQUIRED = "proxy_auth_required"          # 407
    CLIENT_TIMEOUT = "client_timeout"                    # 408
    CONFLICT = "conflict"                                # 409
    RESOURCE_GONE = "resource_gone"                      # 410
    LENGTH_REQUIRED = "length_required"                  # 411
    PRECONDITION_FAILED = "precondition_failed"          # 412
    ENTITY_TOO_LARGE = "entity_too_large"                # 413
    URI_TOO_LONG = "uri_too_long"                        # 414
    UNSUPPORTED_MEDIA_TYPE = "unsupported_media_type"    # 415
    RANGE_NOT_SATISFIABLE = "range_not_satisfiable"      # 416
    EXPECTATION_FAILED = "expectation_failed"            # 417
    BAD_DATA = "bad_data"                                # 422
    LOCKED = "locked"                                    # 423
    PRECONDITION_REQUIRED = "precondition_required"      # 428
    TOO_MANY_REQUESTS = "too_many_requests"              # 429
    ILLEGAL = "illegal"                                  # 451
    INTERNAL = "internal"                                # 500
    NOT_IMPLEMENTED = "not_implemented"                  # 501
    BAD_GATEWAY = "bad_gateway"                          # 502
    SERVER_UNAVAILABLE = "server_unavailable"            # 503
    GATEWAY_TIMEOUT = "gateway_timeout"                  # 504
    BAD_IMPLEMENTATION = "bad_implementation"            # 500
    WRAP = "wrap"
    CREATE = "create"


@dataclass(frozen=True)
class KindEntry:
    factory: Callable[..., HTTPError]
    shape: Shape = Shape.STANDARD
    # unauthorized takes a scheme, not data, as its second argument
    accepts_data: bool = True


DISPATCH_TABLE: Dict[ErrorKind, KindEntry] = {
    ErrorKind.BAD_REQUEST: KindEntry(factory.bad_request),
    ErrorKind.UNAUTHORIZED: KindEntry(factory.unauthorized, Shape.CHALLENGE, accepts_data=False),
    ErrorKind.FORBIDDEN: KindEntry(factory.forbidden),
    ErrorKind.NOT_FOUND: KindEntry(factory.not_found),
    ErrorKind.METHOD_NOT_ALLOWED: KindEntry(factory.method_not_allowed),
    ErrorKind.NOT_ACCEPTABLE: KindEntry(factory.not_acceptable),
    ErrorKind.PROXY_AUTH_REQUIRED: KindEntry(factory.proxy_auth_required),
    ErrorKind.CLIENT_TIMEOUT: KindEntry(factory.client_timeout),
    ErrorKind.CONFLICT: KindEntry(factory.conflict),
    ErrorKind.RESOURCE_GONE: KindEntry(factory.resource_gone),
    ErrorKind.LENGTH_REQUIRED: KindEntry(factory.length_required),
    ErrorKind.PRECONDITION_FAILED: KindEntry(factory.precondition_failed),
    ErrorKind.ENTITY_TOO_LARGE: KindEntry(factory.entity_too_large),
    ErrorKind.URI_TOO_LONG: KindEntry(factory.uri_too_long),
    ErrorKind.UNSUPPORTED_MEDIA_TYPE: KindEntry(factory.unsupported_media_type),
    ErrorKind.RANGE_NOT_SATISFIABLE: KindEntry(factory.range_not_satisfiable),
    ErrorKind.EXPECTATION_FAILED: KindEntry(factory.expectation_failed),
    ErrorKind.BAD_DATA: KindEntry(factory.bad_data),
    ErrorKind.LOCKED: KindEntry(factory.locked),
    ErrorKind.PRECONDITION_REQUIRED: KindEntry(factory.precondition_required),
    ErrorKind.TOO_MANY_REQUESTS: KindEntry(factory.too_many_requests),
    ErrorKind.ILLEGAL: KindEntry(factory.illegal),
    ErrorKind.INTERNAL: KindEntry(factory.internal),
    ErrorKind.NOT_IMPLEMENTED: KindEntry(factory.not_implemented),
    ErrorKind.BAD_GATEWAY: KindEntry(factory.bad_gateway),
    ErrorKind.SERVER_UNAVAILABLE: KindEntry(factory.server_unavailable),
    ErrorKind.GATEWAY_TIMEOUT: KindEntry(factory.gateway_timeout),
    ErrorKind.BAD_IMPLEMENTATION: KindEntry(factory.bad_implementation),
    ErrorKind.WRAP: KindEntry(factory.wrap, Shape.GENERIC),
    ErrorKind.CREATE: KindEntry(factory.create, Shape.GENERIC),
}


def _invoke(entry: KindEntry, convention: CallingConvention) -> HTTPError:
    if isinstance(convention, Generic):
        return entry.factory(*convention.args, **convention.kwargs)
    if isinstance(convention, AuthChallenge):
        return entry.factory(convention.message, convention.scheme, convention.attributes)
    if isinstance(convention, Structured):
        if not entry.accepts_data:
            return entry.factory(convention.message)
        return entry.factory(convention.message, convention.error)
    if not entry.accepts_data:
        return entry.factory(convention.message)
    return entry.factory(convention.message, convention.data)


class JsonApiErrors:
    """
    Constructor facade bound to one documentation URL holder.

    Every ErrorKind is available as a method of the same name
    (`errors.bad_request(...)`), or through `build(kind, ...)`.

    Args:
        docs: Holder of the documentation base URL, read on every construction
    """

    def __init__(self, docs: Optional[DocsConfig] = None) -> None:
        self.docs = docs if docs is not None else default_docs

    def build(self, kind: ErrorKind | str, *args: Any, **kwargs: Any) -> HTTPError:
        """
        Build one JSON:API ready error.

        Factory validation errors (bad status codes, non-exception wrap) are
        not caught.
        """
        kind = ErrorKind(kind)
        entry = DISPATCH_TABLE[kind]
        convention = classify(entry.shape, args, kwargs)
        error = _invoke(entry, convention)

        options = convention.options if isinstance(convention, Structured) else InvocationOptions()
        derive_fields(error, options, self.docs)

        log_error_event(
            kind=kind.value,
            status_code=error.output.status_code,
            code=error.output.payload["code"],
            error_id=error.output.payload["id"],
            convention=convention.name,
        )
        return error

    def constructor(self, kind: ErrorKind | str) -> Callable[..., HTTPError]:
        """Return `build` bound to one kind."""
        kind = ErrorKind(kind)

        def construct(*args: Any, **kwargs: Any) -> HTTPError:
            return self.build(kind, *args, **kwargs)

        construct.__name__ = construct.__qualname__ = kind.value
        return construct

    def serialize(self, error: HTTPError) -> Dict[str, Any]:
        """Serialize an error into its single-element JSON:API document."""
        return serialize(error)

    def __getattr__(self, name: str) -> Callable[..., HTTPError]:
        try:
            kind = ErrorKind(name)
        except ValueError:
            raise AttributeError(f"{type(self).__name__!r} object has no attribute {name!r}") from None
        return self.constructor(kind)


errors = JsonApiErrors()
