"""Helpers turning backend failures into displayable message strings."""

from __future__ import annotations

import re
from typing import Any

MAX_PUBLIC_ERROR_LENGTH = 2048

_CONNECTION_CREDENTIALS_RE = re.compile(r"([a-zA-Z0-9+.-]+://)([^:/@]+):([^/@]+)@")
_SENSITIVE_PAIR_RE = re.compile(r"(?i)\b(password|token|secret)([ \t]*[=:][ \t]*)[^\s,;]+")


def redact_sensitive_info(text: str) -> str:
    """Redact credentials embedded in connection strings and key/value pairs."""
    if not text:
        return text
    res = _CONNECTION_CREDENTIALS_RE.sub(r"\1<user>:<password>@", text)
    return _SENSITIVE_PAIR_RE.sub(r"\1\2<redacted>", res)


def sanitize_error_message(message: Any, *, fallback: str = "Request failed.") -> str:
    """Return a bounded, credential-free error string."""
    raw_text = "" if message is None else str(message)
    safe_text = redact_sensitive_info(raw_text.strip())
    if not safe_text:
        safe_text = (fallback or "Request failed.").strip()
    return safe_text[:MAX_PUBLIC_ERROR_LENGTH]


def fetch_error_message(exc: BaseException, *, fallback: str = "Request failed.") -> str:
    """Render an exception raised by a backend call as a message string."""
    return sanitize_error_message(str(exc), fallback=fallback)
