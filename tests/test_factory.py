"""
Tests for the HTTP error factory (jsonapi_errors.core.errors).

Covers status code parsing, message composition, wrapping and the
WWW-Authenticate challenge of unauthorized errors.
"""
import math

import pytest

from jsonapi_errors.core import errors as factory
from jsonapi_errors.core.errors import (
    INTERNAL_MESSAGE,
    HTTPError,
    InvalidStatusCodeError,
    escape_header_attribute,
    is_http_error,
    parse_status_code,
)


class TestCreate:
    """Tests for create() and status code parsing."""

    def test_unknown_code_gets_unknown_title(self) -> None:
        """Codes without a reason phrase are accepted as 'Unknown'."""
        err = factory.create(999)
        assert err.output.payload["error"] == "Unknown"
        assert err.output.status_code == 999

    @pytest.mark.parametrize(
        "value,expected",
        [("404", 404), ("404.1", 404), (400, 400), (400.123, 400)],
    )
    def test_numeric_values_are_truncated(self, value, expected) -> None:
        """Numeric strings and floats become integer codes."""
        assert factory.create(value).output.status_code == expected

    def test_non_numeric_code_rejected(self) -> None:
        """A non-numeric code fails with a descriptive message."""
        with pytest.raises(InvalidStatusCodeError, match=r"First argument must be a number \(400\+\): x"):
            factory.create("x")

    @pytest.mark.parametrize("value", [math.inf, -math.inf, math.nan])
    def test_non_finite_code_rejected(self, value) -> None:
        """Infinite and NaN codes are rejected."""
        with pytest.raises(InvalidStatusCodeError):
            factory.create(value)

    @pytest.mark.parametrize("value", [200, 399, None, True, [400]])
    def test_codes_below_400_or_wrong_type_rejected(self, value) -> None:
        """Only codes of 400 and above are errors."""
        with pytest.raises(InvalidStatusCodeError):
            parse_status_code(value)

    def test_invalid_code_is_a_value_error(self) -> None:
        """Callers catching ValueError see invalid codes."""
        with pytest.raises(ValueError):
            factory.create("abc")

    def test_sets_message_and_data(self) -> None:
        """Message goes to the payload, data is kept as-is."""
        err = factory.create(400, "Missing data", {"type": "user"})
        assert err.message == "Missing data"
        assert err.output.payload["message"] == "Missing data"
        assert err.data == {"type": "user"}

    def test_message_defaults_to_reason_phrase(self) -> None:
        """Without a message, the reason phrase is used but not put in the payload."""
        err = factory.create(400)
        assert err.message == "Bad Request"
        assert "message" not in err.output.payload
        assert err.data is None

    def test_internal_server_error_message_is_generic(self) -> None:
        """500 payloads never carry the error message."""
        err = factory.create(500, "connection string leaked")
        assert err.output.payload["message"] == INTERNAL_MESSAGE
        assert err.message == "connection string leaked"

    def test_is_http_exception(self) -> None:
        """Errors are FastAPI HTTPExceptions with matching status and headers."""
        err = factory.create(409, "dup")
        assert err.status_code == 409
        assert err.headers is err.output.headers
        assert is_http_error(err)
        assert not is_http_error(ValueError("x"))


class TestWrap:
    """Tests for wrap()."""

    def test_returns_same_object_when_already_wrapped(self) -> None:
        """Wrapping an HTTPError is a no-op."""
        err = factory.bad_request()
        assert factory.wrap(err) is err

    def test_wraps_plain_exception_as_500(self) -> None:
        """Other exceptions become internal errors keeping their message."""
        original = ValueError("ka-boom")
        err = factory.wrap(original)
        assert isinstance(err, HTTPError)
        assert err.message == "ka-boom"
        assert err.__cause__ is original
        assert err.data is None
        assert err.output.status_code == 500
        assert err.output.headers == {}
        assert err.output.payload == {
            "statusCode": 500,
            "error": "Internal Server Error",
            "message": INTERNAL_MESSAGE,
        }

    def test_keeps_data_of_wrapped_exception(self) -> None:
        """`data` of the wrapped exception is carried over."""
        original = ValueError("ka-boom")
        original.data = {"useful": "data"}
        assert factory.wrap(original).data is original.data

    def test_sets_new_message_when_none_exists(self) -> None:
        """The given message is used when the original has none."""
        err = factory.wrap(Exception(), 400, "something bad")
        assert err.message == "something bad"
        assert err.output.status_code == 400

    def test_prefixes_original_message(self) -> None:
        """Both messages are combined as 'message: original'."""
        err = factory.wrap(KeyError("k"), 404, "lookup failed")
        assert err.message == "lookup failed: 'k'"

    def test_rejects_non_exceptions(self) -> None:
        """Only exceptions can be wrapped."""
        with pytest.raises(TypeError, match="Cannot wrap non-Error object"):
            factory.wrap("not an error")


class TestUnauthorized:
    """Tests for the WWW-Authenticate challenge."""

    def test_without_scheme_has_no_header(self) -> None:
        err = factory.unauthorized()
        assert err.output.status_code == 401
        assert err.output.headers == {}
        assert err.is_missing is False

    def test_scheme_with_message(self) -> None:
        err = factory.unauthorized("boom", "Test")
        assert err.output.headers["WWW-Authenticate"] == 'Test error="boom"'
        assert err.output.payload["attributes"] == {"error": "boom"}

    def test_scheme_list(self) -> None:
        err = factory.unauthorized(None, ["Test", "one", "two"])
        assert err.output.headers["WWW-Authenticate"] == "Test, one, two"

    def test_scheme_list_is_joined_verbatim(self) -> None:
        err = factory.unauthorized("message", ["Basic", 'Example e="1"', 'Another x="3", y="4"'])
        assert err.output.headers["WWW-Authenticate"] == 'Basic, Example e="1", Another x="3", y="4"'

    def test_scheme_with_attributes_and_message(self) -> None:
        """Attributes render in order; None becomes an empty string; error comes last."""
        err = factory.unauthorized("boom", "Test", {"a": 1, "b": "something", "c": None, "d": 0})
        assert err.output.headers["WWW-Authenticate"] == 'Test a="1", b="something", c="", d="0", error="boom"'
        assert err.output.payload["attributes"] == {
            "a": 1,
            "b": "something",
            "c": "",
            "d": 0,
            "error": "boom",
        }

    def test_attributes_without_message_flag_missing(self) -> None:
        err = factory.unauthorized(None, "Test", {"a": 1, "b": "something", "c": None, "d": 0})
        assert err.output.headers["WWW-Authenticate"] == 'Test a="1", b="something", c="", d="0"'
        assert err.is_missing is True

    def test_empty_message_flags_missing(self) -> None:
        assert factory.unauthorized("", "Basic").is_missing is True

    def test_message_does_not_flag_missing(self) -> None:
        assert factory.unauthorized("message", "Basic").is_missing is False

    def test_boolean_attributes_render_lowercase(self) -> None:
        err = factory.unauthorized(None, "Test", {"stale": True})
        assert err.output.headers["WWW-Authenticate"] == 'Test stale="true"'

    def test_escapes_attribute_values(self) -> None:
        assert escape_header_attribute('a"b\\c') == 'a\\"b\\\\c'

    def test_rejects_bad_attribute_values(self) -> None:
        with pytest.raises(ValueError, match="Bad attribute value"):
            factory.unauthorized(None, "Test", {"a": "line\nbreak"})


class TestServerErrors:
    """Tests for the 5xx factories."""

    def test_internal_keeps_message_but_not_in_payload(self) -> None:
        err = factory.internal("my message")
        assert err.message == "my message"
        assert err.is_server is True
        assert err.output.payload["message"] == INTERNAL_MESSAGE

    def test_internal_passes_data(self) -> None:
        assert factory.internal("my message", {"my": "data"}).data["my"] == "data"

    def test_internal_wraps_exception_data(self) -> None:
        """An exception given as data is wrapped with a composite message."""
        try:
            raise NameError("name 'x' is not defined")
        except NameError as exc:
            err = factory.internal("Something bad", exc)
        assert err.message == "Something bad: name 'x' is not defined"
        assert err.is_server is True
        assert isinstance(err.__cause__, NameError)

    def test_internal_accepts_status_code(self) -> None:
        assert factory.internal("down", None, 503).output.status_code == 503

    def test_bad_implementation_is_developer_error(self) -> None:
        err = factory.bad_implementation()
        assert err.output.status_code == 500
        assert err.is_developer_error is True
        assert err.is_server is True

    def test_http_error_data_is_kept_as_data(self) -> None:
        """An HTTPError given as data is carried, not returned in place of the 500."""
        inner = factory.not_found("missing")
        outer = factory.internal("failed", inner)
        assert outer is not inner
        assert outer.output.status_code == 500
        assert outer.message == "failed"
        assert outer.data is inner
        assert inner.output.status_code == 404

    @pytest.mark.parametrize(
        "build,code",
        [
            (factory.not_implemented, 501),
            (factory.bad_gateway, 502),
            (factory.server_unavailable, 503),
            (factory.gateway_timeout, 504),
            (factory.bad_implementation, 500),
        ],
    )
    def test_every_server_factory_keeps_http_error_data(self, build, code) -> None:
        inner = factory.conflict("taken")
        outer = build("upstream", inner)
        assert outer.output.status_code == code
        assert outer.data is inner

    def test_client_errors_are_not_server_errors(self) -> None:
        assert factory.unauthorized(None).is_server is False
        assert factory.bad_request().is_server is False
