"""Schema-validating wrapper that turns async callbacks into FastAPI handlers."""

from __future__ import annotations

from collections.abc import Awaitable
from collections.abc import Callable
from typing import Any
import json
import logging

from fastapi import Request
from fastapi import Response
from fastapi import status
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from pydantic import TypeAdapter

from typed_endpoint.core.config import DEFAULT_ERROR_MODE
from typed_endpoint.core.config import DEFAULT_UNEXPECTED_ERROR
from typed_endpoint.core.config import EndpointOptions
from typed_endpoint.core.config import get_runtime_environment
from typed_endpoint.core.config import should_emit_validation_errors
from typed_endpoint.core.errors import EndpointError
from typed_endpoint.core.errors import build_error_response
from typed_endpoint.core.errors import build_json_response
from typed_endpoint.schemas.envelope import ERROR_FIELD
from typed_endpoint.schemas.envelope import EnvelopeValidator
from typed_endpoint.schemas.envelope import SendResponse
from typed_endpoint.schemas.envelope import is_error_payload
from typed_endpoint.schemas.envelope import normalize_envelope
from typed_endpoint.schemas.envelope import send
from typed_endpoint.schemas.error import ValidationErrorBody
from typed_endpoint.validation import safe_validate
from typed_endpoint.validation import schema_adapter

logger = logging.getLogger(__name__)

Send = Callable[[int, Any], SendResponse[Any]]
EndpointCallback = Callable[[Request, Response, Send], Awaitable[SendResponse[Any]]]
EndpointHandler = Callable[[Request, Response], Awaitable[JSONResponse]]


def _query_section(request: Request) -> dict[str, Any]:
    section: dict[str, Any] = {}
    for key in request.query_params.keys():
        values = request.query_params.getlist(key)
        section[key] = values[0] if len(values) == 1 else values
    return section


async def _request_section(request: Request, section: str) -> Any:
    if section == "params":
        return dict(request.path_params)
    if section == "query":
        return _query_section(request)
    raw = await request.body()
    if not raw:
        return None
    try:
        return json.loads(raw)
    except ValueError as exc:
        raise EndpointError("Malformed JSON body") from exc


class TypeSafeEndpoint:
    """Build request handlers that validate their inputs and their response envelope.

    Schema failures are either returned to the caller as HTTP 400 or only
    logged, depending on the configured error mode and the runtime environment.
    Declared ``EndpointError``s and unexpected exceptions always end in a 400
    ``{"error": message}`` response; nothing propagates to the router.
    """

    def __init__(
        self,
        options: EndpointOptions,
        *,
        environment_fn: Callable[[], str | None] = get_runtime_environment,
    ) -> None:
        self._error_mode = options.error_mode or DEFAULT_ERROR_MODE
        self._custom_unexpected_error = options.custom_unexpected_error
        self._environment_fn = environment_fn

    @property
    def error_mode(self) -> str:
        return self._error_mode

    def emit_validation_errors(self) -> bool:
        """Evaluate the emission policy against the current runtime environment."""
        return should_emit_validation_errors(self._error_mode, self._environment_fn())

    def create(
        self,
        *,
        response_schema: Any,
        callback: EndpointCallback,
        params_schema: Any | None = None,
        body_schema: Any | None = None,
        query_schema: Any | None = None,
    ) -> EndpointHandler:
        """Wrap ``callback`` into a handler suitable for ``add_api_route``."""
        params_adapter = schema_adapter(params_schema) if params_schema is not None else None
        body_adapter = schema_adapter(body_schema) if body_schema is not None else None
        query_adapter = schema_adapter(query_schema) if query_schema is not None else None
        envelope_validator = EnvelopeValidator(response_schema)

        async def handler(request: Request, response: Response) -> JSONResponse:
            try:
                rejected = await self._validate_request(
                    request,
                    response,
                    params_adapter=params_adapter,
                    body_adapter=body_adapter,
                    query_adapter=query_adapter,
                )
                if rejected is not None:
                    return rejected

                result = normalize_envelope(await callback(request, response, send))

                outcome = envelope_validator.validate(result)
                if not outcome.success:
                    if self.emit_validation_errors():
                        return build_error_response(
                            status_code=status.HTTP_400_BAD_REQUEST,
                            error=outcome.error,
                            carrier=response,
                        )
                    _log_validation_error("Response", outcome.error)

                status_code = int(result["status"])
                data = result["data"]
                if is_error_payload(data):
                    return build_json_response(
                        status_code=status_code,
                        content={ERROR_FIELD: jsonable_encoder(data[ERROR_FIELD])},
                        carrier=response,
                    )
                return build_json_response(
                    status_code=status_code,
                    content=jsonable_encoder(data),
                    carrier=response,
                )
            except EndpointError as exc:
                return build_error_response(
                    status_code=status.HTTP_400_BAD_REQUEST,
                    error=exc.message,
                    carrier=response,
                )
            except Exception:
                logger.exception("Unexpected endpoint error")
                return build_error_response(
                    status_code=status.HTTP_400_BAD_REQUEST,
                    error=self._custom_unexpected_error or DEFAULT_UNEXPECTED_ERROR,
                    carrier=response,
                )

        handler.__name__ = getattr(callback, "__name__", handler.__name__)
        handler.__doc__ = callback.__doc__
        return handler

    async def _validate_request(
        self,
        request: Request,
        response: Response,
        *,
        params_adapter: TypeAdapter[Any] | None,
        body_adapter: TypeAdapter[Any] | None,
        query_adapter: TypeAdapter[Any] | None,
    ) -> JSONResponse | None:
        """Validate params, body and query in order; return a 400 response when one is emitted."""
        sections = (
            ("params", params_adapter),
            ("body", body_adapter),
            ("query", query_adapter),
        )
        for section, adapter in sections:
            if adapter is None:
                continue
            outcome = safe_validate(adapter, await _request_section(request, section))
            if outcome.success:
                continue
            if self.emit_validation_errors():
                return build_error_response(
                    status_code=status.HTTP_400_BAD_REQUEST,
                    error=outcome.error,
                    carrier=response,
                )
            _log_validation_error("Request", outcome.error)
        return None


def _log_validation_error(kind: str, error: ValidationErrorBody) -> None:
    logger.error(
        "%s validation error: %s",
        kind,
        error.model_dump_json(),
        extra={"validation_error": error.model_dump()},
    )
