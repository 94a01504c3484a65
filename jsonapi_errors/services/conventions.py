"""
Calling conventions of the error constructors.

Every constructor takes a loose argument list. `classify` decides, in a fixed
order, which of four conventions the caller used:

1. Generic       - `wrap(error, status_code, message)` / `create(status_code, message, data)`
2. AuthChallenge - `unauthorized(message, scheme, attributes)` when the first
                   argument is falsy or a scheme is given
3. Structured    - a mapping (or InvocationOptions) carrying `err`
4. Positional    - `(message, data)`
"""
from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Mapping, Optional, Sequence, Tuple, Union
from jsonapi_errors.schemas.errors import InvocationOptions


class Shape(str, Enum):
    """Argument shape a kind accepts."""
    GENERIC = "generic"
    CHALLENGE = "challenge"
    STANDARD = "standard"


@dataclass(frozen=True)
class Generic:
    args: Tuple[Any, ...] = ()
    kwargs: Dict[str, Any] = field(default_factory=dict)

    name = "generic"


@dataclass(frozen=True)
class AuthChallenge:
    message: Optional[str] = None
    scheme: Union[str, Sequence[str], None] = None
    attributes: Optional[Mapping[str, Any]] = None

    name = "auth_challenge"


@dataclass(frozen=True)
class Structured:
    options: InvocationOptions
    message: Optional[str] = None
    error: Any = None

    name = "structured"


@dataclass(frozen=True)
class Positional:
    message: Optional[str] = None
    data: Any = None

    name = "positional"


CallingConvention = Union[Generic, AuthChallenge, Structured, Positional]


def _bind(names: Sequence[str], args: Tuple[Any, ...], kwargs: Mapping[str, Any]) -> Dict[str, Any]:
    """Bind positional and keyword arguments to `names`, like a def would."""
    if len(args) > len(names):
        raise TypeError(f"expected at most {len(names)} positional arguments, got {len(args)}")
    bound: Dict[str, Any] = dict(zip(names, args))
    for key, value in kwargs.items():
        if key not in names:
            raise TypeError(f"unexpected keyword argument '{key}'")
        if key in bound:
            raise TypeError(f"got multiple values for argument '{key}'")
        bound[key] = value
    return bound


def _has_error(candidate: Any) -> bool:
    if isinstance(candidate, InvocationOptions):
        return bool(candidate.err)
    return isinstance(candidate, Mapping) and bool(candidate.get("err"))


def _error_message(error: Any) -> str:
    return getattr(error, "message", None) or str(error)


def structured(candidate: Any) -> Structured:
    """Validate an options record and resolve the factory message."""
    options = (
        candidate
        if isinstance(candidate, InvocationOptions)
        else InvocationOptions.model_validate(dict(candidate))
    )
    message = options.message or _error_message(options.err)
    return Structured(options=options, message=message, error=options.err)


def classify(shape: Shape, args: Tuple[Any, ...], kwargs: Mapping[str, Any]) -> CallingConvention:
    """
    Pick the calling convention for one constructor call.

    Args:
        shape: Argument shape of the kind being built
        args: Positional arguments of the call
        kwargs: Keyword arguments of the call

    Returns:
        One of Generic, AuthChallenge, Structured or Positional

    Raises:
        TypeError: if the arguments do not fit the selected convention
        pydantic.ValidationError: if an options record is malformed
    """
    if shape is Shape.GENERIC:
        return Generic(args=tuple(args), kwargs=dict(kwargs))

    if shape is Shape.CHALLENGE:
        first = args[0] if args else kwargs.get("message")
        has_scheme = len(args) > 1 or kwargs.get("scheme") is not None
        if not first or has_scheme:
            bound = _bind(("message", "scheme", "attributes"), args, kwargs)
            return AuthChallenge(**bound)

    # Arguments after an options record are ignored.
    if args and _has_error(args[0]):
        return structured(args[0])
    if not args and kwargs.get("err"):
        return structured(kwargs)

    bound = _bind(("message", "data"), args, kwargs)
    return Positional(**bound)
