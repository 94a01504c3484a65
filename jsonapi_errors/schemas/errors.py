"""
Pydantic schemas for JSON:API error objects.

Follows Layer 3 rules:
- ALWAYS use Pydantic models for request/response shapes
- Error documents carry exactly one error object
"""
from __future__ import annotations
from typing import Any, Dict, List, Optional
from pydantic import BaseModel, ConfigDict, Field


class InvocationOptions(BaseModel):
    """
    Structured options accepted by every error constructor.

    All fields are optional; missing ones fall back to values derived from
    the base error. `source`, `links` and `meta` must be mappings.
    """
    err: Any = Field(default=None, description="Original error being reported")
    message: Optional[str] = Field(default=None, description="Message handed to the error factory")
    id: Optional[str] = Field(default=None, description="Identifier of this occurrence of the problem")
    code: Optional[str] = Field(default=None, description="Application-specific error code")
    title: Optional[str] = Field(default=None, description="Short summary of the problem")
    detail: Optional[str] = Field(default=None, description="Explanation specific to this occurrence")
    source: Optional[Dict[str, Any]] = Field(default=None, description="pointer/parameter of the offending input")
    links: Optional[Dict[str, Any]] = Field(default=None, description="Links, `about` included")
    meta: Optional[Dict[str, Any]] = Field(default=None, description="Non-standard meta-information")

    model_config = ConfigDict(extra="allow", coerce_numbers_to_str=True)


class ErrorSource(BaseModel):
    """References to the source of the error."""
    pointer: str = Field(default="", description="JSON Pointer to the entity in the request document")
    parameter: str = Field(default="", description="URI query parameter that caused the error")

    model_config = ConfigDict(extra="allow")


class ErrorLinks(BaseModel):
    """Links object of an error."""
    about: str = Field(..., description="Link to further details about the problem")

    model_config = ConfigDict(extra="allow")


class ErrorObject(BaseModel):
    """A single JSON:API error object."""
    status: str
    code: str
    title: str
    detail: str
    id: str
    source: ErrorSource
    links: ErrorLinks
    meta: Dict[str, Any] = Field(default_factory=dict)


class ErrorDocument(BaseModel):
    """Top-level error document."""
    errors: List[ErrorObject] = Field(..., min_length=1, max_length=1)
