"""Endpoint error kinds, JSON error envelope and exception handler registration."""

from __future__ import annotations

from fastapi import FastAPI
from fastapi import Request
from fastapi import Response
from fastapi import status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from typed_endpoint.schemas.error import ErrorResponse
from typed_endpoint.schemas.error import ValidationErrorBody
from typed_endpoint.validation import validation_error_body

_CARRIER_SKIP_HEADERS = frozenset({b"content-length", b"content-type"})


class EndpointError(Exception):
    """Declared operation error surfaced to the caller with its message."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class NotFoundError(EndpointError):
    """Convenience error for missing resources."""

    def __init__(self, message: str = "Resource not found") -> None:
        super().__init__(message)


def build_json_response(
    *,
    status_code: int,
    content: object,
    carrier: Response | None = None,
) -> JSONResponse:
    """Render a JSON response, keeping headers already set on the carrier."""
    response = JSONResponse(status_code=status_code, content=content)
    if carrier is not None:
        response.raw_headers.extend(
            (key, value) for key, value in carrier.raw_headers if key.lower() not in _CARRIER_SKIP_HEADERS
        )
    return response


def build_error_response(
    *,
    status_code: int,
    error: str | ValidationErrorBody,
    carrier: Response | None = None,
) -> JSONResponse:
    """Render ``{"error": ...}`` with the given status."""
    payload = ErrorResponse(error=error)
    return build_json_response(status_code=status_code, content=payload.model_dump(), carrier=carrier)


async def endpoint_error_handler(_: Request, exc: EndpointError) -> JSONResponse:
    """Return declared endpoint errors in the shared envelope."""

    return build_error_response(status_code=status.HTTP_400_BAD_REQUEST, error=exc.message)


async def request_validation_exception_handler(_: Request, exc: RequestValidationError) -> JSONResponse:
    """Normalize FastAPI request validation errors to the structured error envelope."""

    return build_error_response(
        status_code=status.HTTP_400_BAD_REQUEST,
        error=validation_error_body("RequestValidationError", exc.errors()),
    )


async def http_exception_handler(_: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Normalize HTTP exceptions to the shared envelope."""

    message = str(exc.detail) if isinstance(exc.detail, str) and exc.detail else "Request failed"
    response = build_error_response(status_code=exc.status_code, error=message)
    if exc.headers:
        response.headers.update(exc.headers)
    return response


def register_error_handlers(app: FastAPI) -> None:
    """Attach the shared error handlers to a FastAPI app instance."""

    app.add_exception_handler(EndpointError, endpoint_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
