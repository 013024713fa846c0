"""Error-code taxonomy for backend fetch failures."""

from __future__ import annotations

import asyncio
from enum import Enum
from typing import Any

from pydantic import ValidationError


class ErrorCode(str, Enum):
    """Bounded error codes used to classify collaborator failures in logs."""

    CONNECTION_ERROR = "CONNECTION_ERROR"
    TIMEOUT = "TIMEOUT"
    MALFORMED_RESPONSE = "MALFORMED_RESPONSE"
    BACKEND_ERROR = "BACKEND_ERROR"


def classify_fetch_error(exc: BaseException) -> ErrorCode:
    """Map an exception raised by a backend call to an `ErrorCode`."""
    if isinstance(exc, (TimeoutError, asyncio.TimeoutError)):
        return ErrorCode.TIMEOUT
    if isinstance(exc, (ConnectionError, OSError)):
        return ErrorCode.CONNECTION_ERROR
    if isinstance(exc, (ValidationError, TypeError, KeyError)):
        return ErrorCode.MALFORMED_RESPONSE
    return ErrorCode.BACKEND_ERROR


def parse_error_code(
    value: Any,
    *,
    fallback: ErrorCode = ErrorCode.BACKEND_ERROR,
) -> ErrorCode:
    """Parse string-like values to `ErrorCode` with safe fallback."""
    if isinstance(value, ErrorCode):
        return value
    if value is None:
        return fallback
    try:
        return ErrorCode(str(value).strip())
    except ValueError:
        return fallback
