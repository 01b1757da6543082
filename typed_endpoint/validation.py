"""Safe schema validation on top of pydantic type adapters."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

from fastapi.encoders import jsonable_encoder
from pydantic import TypeAdapter
from pydantic import ValidationError

from typed_endpoint.schemas.error import ValidationErrorBody
from typed_endpoint.schemas.error import ValidationIssue


@dataclass(frozen=True)
class ValidationOutcome:
    """Result of a single validation call: a parsed value or a structured error."""

    success: bool
    value: Any = None
    error: ValidationErrorBody | None = None


def schema_adapter(schema: Any) -> TypeAdapter[Any]:
    """Return a type adapter for a model class, a plain type or an existing adapter."""
    if isinstance(schema, TypeAdapter):
        return schema
    return TypeAdapter(schema)


def validation_error_body(title: str, errors: Sequence[Any]) -> ValidationErrorBody:
    """Build the JSON-safe wire structure from raw validation issues."""
    issues = jsonable_encoder(errors)
    return ValidationErrorBody(
        title=title,
        issues=[ValidationIssue.model_validate(issue) for issue in issues],
    )


def format_validation_error(exc: ValidationError) -> ValidationErrorBody:
    """Convert a pydantic validation error into the wire structure."""
    return validation_error_body(exc.title, exc.errors(include_url=False))


def safe_validate(schema: Any, value: Any) -> ValidationOutcome:
    """Validate ``value`` without raising on schema rejection."""
    adapter = schema_adapter(schema)
    try:
        parsed = adapter.validate_python(value)
    except ValidationError as exc:
        return ValidationOutcome(success=False, error=format_validation_error(exc))
    return ValidationOutcome(success=True, value=parsed)
