"""
JSON:API error document serialization.

Takes an error whose fields were already derived and returns the
single-element `errors` document. Nothing is defaulted here.
"""
from __future__ import annotations
from typing import Any, Dict
from jsonapi_errors.core.errors import HTTPError
from jsonapi_errors.schemas.errors import ErrorDocument

ERROR_FIELDS = ("status", "code", "title", "detail", "id", "source", "links", "meta")


def serialize(error: HTTPError) -> Dict[str, Any]:
    """
    Map an error to `{"errors": [{status, code, title, detail, id, source, links, meta}]}`.

    Other payload keys (statusCode, error, message, attributes...) are left
    out. Nested mappings are copied so the error is never mutated through the
    returned document.
    """
    payload = error.output.payload
    entry: Dict[str, Any] = {}
    for key in ERROR_FIELDS:
        value = payload[key]
        entry[key] = dict(value) if isinstance(value, dict) else value
    return {"errors": [entry]}


def serialize_document(error: HTTPError) -> ErrorDocument:
    """Same as `serialize`, validated into an ErrorDocument model."""
    return ErrorDocument.model_validate(serialize(error))
