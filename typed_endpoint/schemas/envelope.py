"""Response envelope types and constructors for wrapped endpoints."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any
from typing import Generic
from typing import TypeVar

from pydantic import BaseModel
from pydantic import StrictInt
from pydantic import TypeAdapter
from typing_extensions import TypedDict

from typed_endpoint.schemas.error import ValidationErrorBody
from typed_endpoint.schemas.error import ValidationIssue
from typed_endpoint.validation import ValidationOutcome
from typed_endpoint.validation import safe_validate
from typed_endpoint.validation import schema_adapter

T = TypeVar("T")

ERROR_FIELD = "error"
RESPONSE_ENVELOPE_TITLE = "ResponseEnvelope"


class ErrorData(TypedDict):
    """Payload of a callback-declared failure."""

    error: str


class SendResponse(TypedDict, Generic[T]):
    """Envelope returned by endpoint callbacks."""

    status: int
    data: T


class ErrorEnvelope(BaseModel):
    """Envelope shape for callback-declared failures."""

    status: StrictInt
    data: ErrorData


class SuccessEnvelope(BaseModel):
    """Envelope shape for successful results; ``data`` is checked by the response schema."""

    status: StrictInt
    data: Any


ERROR_ENVELOPE_ADAPTER: TypeAdapter[ErrorEnvelope] = TypeAdapter(ErrorEnvelope)
SUCCESS_ENVELOPE_ADAPTER: TypeAdapter[SuccessEnvelope] = TypeAdapter(SuccessEnvelope)


def send(status: int, data: Any) -> SendResponse[Any]:
    """Build a response envelope. No validation or I/O happens here."""
    return {"status": status, "data": data}


def send_error(status: int, message: str) -> SendResponse[ErrorData]:
    """Build an envelope that declares a failure with its own status code."""
    return {"status": status, "data": {ERROR_FIELD: message}}


def is_error_payload(data: Any) -> bool:
    """Return True when ``data`` carries the reserved error field."""
    return isinstance(data, Mapping) and ERROR_FIELD in data


def normalize_envelope(result: Any) -> Any:
    """Dump a model ``data`` payload so it takes the same path as the equivalent dict."""
    if isinstance(result, Mapping) and isinstance(result.get("data"), BaseModel):
        return {**result, "data": result["data"].model_dump(by_alias=True)}
    return result


def _prefixed(error: ValidationErrorBody, *prefix: str) -> list[ValidationIssue]:
    return [issue.model_copy(update={"loc": [*prefix, *issue.loc]}) for issue in error.issues]


class EnvelopeValidator:
    """Validate callback results against the error shape, then the success shape.

    The error shape is always tried first: a payload with a string ``error``
    field is read as a failure even when the success schema would accept it.
    When both shapes reject the result, the issues of each are reported with
    the shape name at the front of their ``loc``.
    """

    def __init__(self, response_schema: Any) -> None:
        self._data_adapter: TypeAdapter[Any] = schema_adapter(response_schema)

    def validate(self, result: Any) -> ValidationOutcome:
        error_outcome = safe_validate(ERROR_ENVELOPE_ADAPTER, result)
        if error_outcome.success:
            return error_outcome
        success_outcome = self._validate_success(result)
        if success_outcome.success:
            return success_outcome
        return ValidationOutcome(
            success=False,
            error=ValidationErrorBody(
                title=RESPONSE_ENVELOPE_TITLE,
                issues=[
                    *_prefixed(error_outcome.error, "ErrorEnvelope"),
                    *_prefixed(success_outcome.error, "SuccessEnvelope"),
                ],
            ),
        )

    def _validate_success(self, result: Any) -> ValidationOutcome:
        shape = safe_validate(SUCCESS_ENVELOPE_ADAPTER, result)
        if not isinstance(result, Mapping) or "data" not in result:
            return shape

        data = safe_validate(self._data_adapter, result["data"])
        issues = list(shape.error.issues) if shape.error else []
        if data.error:
            issues.extend(_prefixed(data.error, "data"))
        if issues:
            return ValidationOutcome(
                success=False,
                error=ValidationErrorBody(title="SuccessEnvelope", issues=issues),
            )
        return ValidationOutcome(
            success=True,
            value=SuccessEnvelope(status=shape.value.status, data=data.value),
        )
