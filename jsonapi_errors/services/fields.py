"""
JSON:API field derivation.

Writes the canonical fields (id, status, title, detail, code, source, links,
meta) into an HTTPError payload. Explicit options win, then values already in
the payload, then computed defaults.
"""
from __future__ import annotations
from typing import Optional
from jsonapi_errors.core.config import DocsConfig, docs as default_docs
from jsonapi_errors.core.errors import HTTPError
from jsonapi_errors.schemas.errors import InvocationOptions


def derive_fields(
    error: HTTPError,
    options: Optional[InvocationOptions] = None,
    docs: Optional[DocsConfig] = None,
) -> HTTPError:
    """
    Add the JSON:API fields to `error.output.payload` in place.

    The options object is owned by this call: its `source` and `links` are
    completed with defaults and the same dicts end up in the payload.

    Server errors (500+) never use the internal message as `detail`; only an
    explicit `options.detail` or the reason phrase is exposed.

    Args:
        error: Error produced by the factory
        options: Structured options of the call (empty when omitted)
        docs: Documentation URL holder, read now for links.about

    Returns:
        The same error instance
    """
    options = options if options is not None else InvocationOptions()
    docs = docs if docs is not None else default_docs
    payload = error.output.payload

    # id: identifier of this occurrence of the problem
    payload["id"] = options.id or payload.get("id") or ""

    # status: the HTTP status code as a string
    payload["status"] = str(payload["statusCode"])

    # title: short summary, stable across occurrences
    payload["title"] = options.title or payload["error"]

    # detail: explanation of this occurrence
    if payload["statusCode"] < 500:
        payload["detail"] = options.detail or payload.get("message") or payload["error"]
    else:
        payload["detail"] = options.detail or payload["error"]

    # code: application-specific error code
    payload["code"] = options.code or "0"

    # source: pointer into the request document / offending query parameter
    source = options.source if options.source is not None else {}
    source["pointer"] = source.get("pointer") or ""
    source["parameter"] = source.get("parameter") or ""
    options.source = source
    payload["source"] = source

    # links.about: where to read more about this code
    links = options.links if options.links is not None else {}
    links["about"] = links.get("about") or f"{docs.url}/{payload['code']}"
    options.links = links
    payload["links"] = links

    payload["meta"] = options.meta or {}
    return error
