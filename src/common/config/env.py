"""Typed accessors for environment-variable configuration."""

from __future__ import annotations

import os
from typing import Optional

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


def get_env_str(name: str, default: Optional[str] = None) -> Optional[str]:
    """Return the raw value of `name`, or `default` when unset or blank."""
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    return value


def get_env_int(name: str, default: Optional[int] = None) -> Optional[int]:
    """Return `name` parsed as an int.

    Raises:
        ValueError: if the variable is set but is not an integer.
    """
    raw = get_env_str(name)
    if raw is None:
        return default
    try:
        return int(raw.strip())
    except ValueError:
        raise ValueError(f"{name} must be an integer, got '{raw}'.") from None


def get_env_float(name: str, default: Optional[float] = None) -> Optional[float]:
    """Return `name` parsed as a float.

    Raises:
        ValueError: if the variable is set but is not a number.
    """
    raw = get_env_str(name)
    if raw is None:
        return default
    try:
        return float(raw.strip())
    except ValueError:
        raise ValueError(f"{name} must be a number, got '{raw}'.") from None


def get_env_bool(name: str, default: Optional[bool] = None) -> Optional[bool]:
    """Return `name` parsed as a boolean flag.

    Raises:
        ValueError: if the variable is set to an unrecognized value.
    """
    raw = get_env_str(name)
    if raw is None:
        return default
    normalized = raw.strip().lower()
    if normalized in _TRUE_VALUES:
        return True
    if normalized in _FALSE_VALUES:
        return False
    raise ValueError(f"{name} must be a boolean flag, got '{raw}'.")


def get_env_list(name: str, default: Optional[list[str]] = None) -> Optional[list[str]]:
    """Return `name` split on commas, dropping empty entries."""
    raw = get_env_str(name)
    if raw is None:
        return default
    return [token.strip() for token in raw.split(",") if token.strip()]
