"""Wrapper configuration and error-emission policy helpers."""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
from typing import Literal
import os

ErrorEmissionMode = Literal["production", "development", "always"]

DEFAULT_ERROR_MODE: ErrorEmissionMode = "always"
DEFAULT_UNEXPECTED_ERROR = "Unexpected Error"

RUNTIME_ENV_VAR = "APP_ENV"
ERROR_MODE_ENV_VAR = "TYPED_ENDPOINT_ERROR_MODE"
UNEXPECTED_ERROR_ENV_VAR = "TYPED_ENDPOINT_UNEXPECTED_ERROR"


def _get_optional_env(name: str) -> str | None:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return None
    return raw


@dataclass(frozen=True)
class EndpointOptions:
    """Construction-time settings for a type-safe endpoint wrapper."""

    error_mode: ErrorEmissionMode = DEFAULT_ERROR_MODE
    custom_unexpected_error: str | None = None

    def safe_for_logging(self) -> dict[str, str | None]:
        """Return endpoint options safe for logs."""
        return {
            "error_mode": self.error_mode,
            "custom_unexpected_error": self.custom_unexpected_error,
        }


@lru_cache(maxsize=1)
def get_endpoint_options() -> EndpointOptions:
    """Load endpoint options from the environment."""
    return EndpointOptions(
        error_mode=os.getenv(ERROR_MODE_ENV_VAR, DEFAULT_ERROR_MODE),  # type: ignore[arg-type]
        custom_unexpected_error=_get_optional_env(UNEXPECTED_ERROR_ENV_VAR),
    )


def get_runtime_environment() -> str | None:
    """Return the current runtime environment indicator.

    Read on every call so that changes to the process environment are observed.
    """
    return os.getenv(RUNTIME_ENV_VAR)


def should_emit_validation_errors(mode: str, environment: str | None) -> bool:
    """Decide whether schema validation failures are returned to the caller.

    ``always`` emits unconditionally, ``development`` and ``production`` emit
    only when the runtime environment matches. Unknown modes never emit.
    """
    if mode == "always":
        return True
    if mode == "development" and environment == "development":
        return True
    if mode == "production" and environment == "production":
        return True
    return False
