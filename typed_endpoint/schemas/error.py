"""Error envelope schemas shared across wrapped endpoints."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel
from pydantic import ConfigDict


class ValidationIssue(BaseModel):
    """Single schema issue reported by the validation engine."""

    model_config = ConfigDict(extra="allow")

    type: str
    loc: list[str | int]
    msg: str
    input: Any = None


class ValidationErrorBody(BaseModel):
    """Structured validation error carried in the error envelope."""

    title: str
    issues: list[ValidationIssue]


class ErrorResponse(BaseModel):
    """Top-level API error response envelope."""

    error: str | ValidationErrorBody
