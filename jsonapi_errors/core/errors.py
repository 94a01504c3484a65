# jsonapi_errors/core/errors.py
"""
HTTP error factory.

Builds HTTPError instances: an HTTPException carrying a numeric status code,
the canonical reason phrase, a human message, optional headers and an
arbitrary `data` payload. Exposes one factory per supported status family
plus the generic `create` and `wrap`.

The JSON:API fields are derived later by services.fields; this module only
knows about `statusCode`, `error` and `message` in the payload.
"""
from __future__ import annotations
import math
import re
from dataclasses import dataclass, field
from http import HTTPStatus
from typing import Any, Dict, Mapping, Optional, Sequence, Union
from fastapi import HTTPException

INTERNAL_MESSAGE = "An internal server error occurred"

_LEADING_INT = re.compile(r"^\s*[+-]?\d+")
_HEADER_ATTRIBUTE = re.compile(r"[ \w!#$%&'()*+,\-./:;<=>?@\[\]^`{|}~\"\\]*", re.ASCII)


class InvalidStatusCodeError(ValueError):
    """Raised when a status code is not a finite number of at least 400."""

    def __init__(self, status_code: Any) -> None:
        super().__init__(f"First argument must be a number (400+): {status_code}")
        self.status_code = status_code


@dataclass
class ErrorOutput:
    """Response-facing part of an HTTPError."""
    status_code: int
    payload: Dict[str, Any] = field(default_factory=dict)
    headers: Dict[str, str] = field(default_factory=dict)


def reason_phrase(status_code: int) -> str:
    """Return the HTTP reason phrase for a status code, or 'Unknown'."""
    try:
        return HTTPStatus(status_code).phrase
    except ValueError:
        return "Unknown"


def parse_status_code(status_code: Any) -> int:
    """
    Coerce a status code to an int, truncating numeric strings and floats.

    Raises:
        InvalidStatusCodeError: if the value is not numeric, not finite or below 400
    """
    if isinstance(status_code, bool):
        raise InvalidStatusCodeError(status_code)
    if isinstance(status_code, int):
        code = status_code
    elif isinstance(status_code, float):
        if not math.isfinite(status_code):
            raise InvalidStatusCodeError(status_code)
        code = int(status_code)
    elif isinstance(status_code, str):
        match = _LEADING_INT.match(status_code)
        if not match:
            raise InvalidStatusCodeError(status_code)
        code = int(match.group())
    else:
        raise InvalidStatusCodeError(status_code)

    if code < 400:
        raise InvalidStatusCodeError(status_code)
    return code


class HTTPError(HTTPException):
    """
    HTTPException with a structured output record.

    `output.payload` is the response body; it starts with `statusCode`,
    `error` (reason phrase) and, when known, `message`. For 500 the payload
    message is always the generic INTERNAL_MESSAGE.

    Args:
        message: Message of the error (may be empty)
        status_code: HTTP status code (int, numeric string or float)
        data: Arbitrary payload attached by the caller
        prefix: Text placed in front of `message` ("prefix: message")

    Raises:
        InvalidStatusCodeError: if the status code is invalid
    """

    def __init__(
        self,
        message: Optional[str] = None,
        *,
        status_code: Any = 500,
        data: Any = None,
        prefix: Optional[str] = None,
    ) -> None:
        code = parse_status_code(status_code)
        self.message = str(message) if message else ""
        self.data = data
        self.is_server = code >= 500
        self.is_missing = False
        self.is_developer_error = False
        self.output = ErrorOutput(status_code=code)
        self.reformat()

        if not prefix and not self.message:
            prefix = self.output.payload["error"]
        if prefix:
            self.message = prefix + (": " + self.message if self.message else "")

        super().__init__(status_code=code, detail=self.output.payload, headers=self.output.headers)

    def reformat(self) -> None:
        """Rebuild the base payload from the status code and message."""
        payload = self.output.payload
        payload["statusCode"] = self.output.status_code
        payload["error"] = reason_phrase(self.output.status_code)
        if self.output.status_code == 500:
            payload["message"] = INTERNAL_MESSAGE
        elif self.message:
            payload["message"] = self.message

    def __str__(self) -> str:
        return self.message


def is_http_error(obj: Any) -> bool:
    """True when `obj` was produced by this factory."""
    return isinstance(obj, HTTPError)


def create(status_code: Any, message: Optional[str] = None, data: Any = None) -> HTTPError:
    """
    Build an HTTPError for an arbitrary status code.

    Unknown codes of 400 and above are accepted with the title 'Unknown'.
    """
    return HTTPError(message, status_code=status_code, data=data)


def wrap(error: BaseException, status_code: Any = None, message: Optional[str] = None) -> HTTPError:
    """
    Turn an exception into an HTTPError.

    An HTTPError is returned unchanged. Any other exception becomes the
    `__cause__` of a new HTTPError that keeps its message and `data`.

    Args:
        error: Exception to wrap
        status_code: Status code for the new error (default 500)
        message: Text prefixed to the original message

    Raises:
        TypeError: if `error` is not an exception
    """
    if not isinstance(error, BaseException):
        raise TypeError("Cannot wrap non-Error object")
    if isinstance(error, HTTPError):
        return error

    wrapped = HTTPError(
        str(error),
        status_code=status_code or 500,
        data=getattr(error, "data", None),
        prefix=message,
    )
    wrapped.__cause__ = error
    return wrapped


def escape_header_attribute(value: str) -> str:
    """
    Escape a WWW-Authenticate attribute value.

    Raises:
        ValueError: if the value holds characters not allowed in a header
    """
    if not _HEADER_ATTRIBUTE.fullmatch(value):
        raise ValueError(f"Bad attribute value ({value})")
    return value.replace("\\", "\\\\").replace('"', '\\"')


def _header_text(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


# --- 4xx ---

def bad_request(message: Optional[str] = None, data: Any = None) -> HTTPError:
    return create(400, message, data)


def unauthorized(
    message: Optional[str] = None,
    scheme: Union[str, Sequence[str], None] = None,
    attributes: Optional[Mapping[str, Any]] = None,
) -> HTTPError:
    """
    401 error, optionally with a WWW-Authenticate challenge.

    A single scheme renders `Scheme a="1", error="message"`; without a message
    the error is flagged `is_missing` (credentials were not supplied at all).
    A list of schemes is joined as-is with ", ".
    """
    error = create(401, message)
    if not scheme:
        return error

    if isinstance(scheme, str):
        www_authenticate = scheme
        if attributes or message:
            error.output.payload["attributes"] = {}

        if attributes:
            rendered = []
            for name, value in attributes.items():
                if value is None:
                    value = ""
                rendered.append(f' {name}="{escape_header_attribute(_header_text(value))}"')
                error.output.payload["attributes"][name] = value
            www_authenticate += ",".join(rendered)

        if message:
            if attributes:
                www_authenticate += ","
            www_authenticate += f' error="{escape_header_attribute(message)}"'
            error.output.payload["attributes"]["error"] = message
        else:
            error.is_missing = True
    else:
        www_authenticate = ", ".join(scheme)

    error.output.headers["WWW-Authenticate"] = www_authenticate
    return error


def forbidden(message: Optional[str] = None, data: Any = None) -> HTTPError:
    return create(403, message, data)


def not_found(message: Optional[str] = None, data: Any = None) -> HTTPError:
    return create(404, message, data)


def method_not_allowed(message: Optional[str] = None, data: Any = None) -> HTTPError:
    return create(405, message, data)


def not_acceptable(message: Optional[str] = None, data: Any = None) -> HTTPError:
    return create(406, message, data)


def proxy_auth_required(message: Optional[str] = None, data: Any = None) -> HTTPError:
    return create(407, message, data)


def client_timeout(message: Optional[str] = None, data: Any = None) -> HTTPError:
    return create(408, message, data)


def conflict(message: Optional[str] = None, data: Any = None) -> HTTPError:
    return create(409, message, data)


def resource_gone(message: Optional[str] = None, data: Any = None) -> HTTPError:
    return create(410, message, data)


def length_required(message: Optional[str] = None, data: Any = None) -> HTTPError:
    return create(411, message, data)


def precondition_failed(message: Optional[str] = None, data: Any = None) -> HTTPError:
    return create(412, message, data)


def entity_too_large(message: Optional[str] = None, data: Any = None) -> HTTPError:
    return create(413, message, data)


def uri_too_long(message: Optional[str] = None, data: Any = None) -> HTTPError:
    return create(414, message, data)


def unsupported_media_type(message: Optional[str] = None, data: Any = None) -> HTTPError:
    return create(415, message, data)


def range_not_satisfiable(message: Optional[str] = None, data: Any = None) -> HTTPError:
    return create(416, message, data)


def expectation_failed(message: Optional[str] = None, data: Any = None) -> HTTPError:
    return create(417, message, data)


def bad_data(message: Optional[str] = None, data: Any = None) -> HTTPError:
    return create(422, message, data)


def locked(message: Optional[str] = None, data: Any = None) -> HTTPError:
    return create(423, message, data)


def precondition_required(message: Optional[str] = None, data: Any = None) -> HTTPError:
    return create(428, message, data)


def too_many_requests(message: Optional[str] = None, data: Any = None) -> HTTPError:
    return create(429, message, data)


def illegal(message: Optional[str] = None, data: Any = None) -> HTTPError:
    return create(451, message, data)


# --- 5xx ---

def _server_error(message: Optional[str], data: Any, status_code: int) -> HTTPError:
    # A plain exception given as data becomes the wrapped cause; an HTTPError stays data.
    if isinstance(data, BaseException) and not isinstance(data, HTTPError):
        return wrap(data, status_code, message)
    error = create(status_code, message)
    error.data = data
    return error


def internal(message: Optional[str] = None, data: Any = None, status_code: int = 500) -> HTTPError:
    return _server_error(message, data, status_code)


def not_implemented(message: Optional[str] = None, data: Any = None) -> HTTPError:
    return _server_error(message, data, 501)


def bad_gateway(message: Optional[str] = None, data: Any = None) -> HTTPError:
    return _server_error(message, data, 502)


def server_unavailable(message: Optional[str] = None, data: Any = None) -> HTTPError:
    return _server_error(message, data, 503)


def gateway_timeout(message: Optional[str] = None, data: Any = None) -> HTTPError:
    return _server_error(message, data, 504)


def bad_implementation(message: Optional[str] = None, data: Any = None) -> HTTPError:
    error = _server_error(message, data, 500)
    error.is_developer_error = True
    return error
