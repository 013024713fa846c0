"""Common error taxonomy helpers."""

from common.errors.error_codes import ErrorCode, classify_fetch_error, parse_error_code
from common.errors.sanitization import (
    fetch_error_message,
    redact_sensitive_info,
    sanitize_error_message,
)

__all__ = [
    "ErrorCode",
    "classify_fetch_error",
    "fetch_error_message",
    "parse_error_code",
    "redact_sensitive_info",
    "sanitize_error_message",
]
