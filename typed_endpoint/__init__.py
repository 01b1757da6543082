"""Schema-validated FastAPI endpoint wrapper."""

from typed_endpoint.core.config import EndpointOptions
from typed_endpoint.core.config import get_endpoint_options
from typed_endpoint.core.config import should_emit_validation_errors
from typed_endpoint.core.errors import EndpointError
from typed_endpoint.core.errors import NotFoundError
from typed_endpoint.core.errors import register_error_handlers
from typed_endpoint.endpoint import TypeSafeEndpoint
from typed_endpoint.schemas.envelope import SendResponse
from typed_endpoint.schemas.envelope import send
from typed_endpoint.schemas.envelope import send_error
from typed_endpoint.validation import ValidationOutcome
from typed_endpoint.validation import safe_validate

__all__ = [
    "EndpointError",
    "EndpointOptions",
    "NotFoundError",
    "SendResponse",
    "TypeSafeEndpoint",
    "ValidationOutcome",
    "get_endpoint_options",
    "register_error_handlers",
    "safe_validate",
    "send",
    "send_error",
    "should_emit_validation_errors",
]
