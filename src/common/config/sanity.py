"""Startup-time configuration sanity checks for the result workbench."""

from __future__ import annotations

from typing import Iterable

from common.config.env import get_env_float, get_env_int, get_env_list, get_env_str

STALE_RESPONSE_POLICIES = ("discard", "overwrite")


def _normalize_mode(
    name: str,
    *,
    allowed: Iterable[str],
    default: str,
    issues: list[str],
) -> str:
    raw_value = get_env_str(name, default) or default
    normalized = raw_value.strip().lower()
    allowed_values = set(allowed)
    if normalized not in allowed_values:
        issues.append(f"{name} must be one of {sorted(allowed_values)}, got '{raw_value}'.")
        return default
    return normalized


def _validate_min_int(name: str, *, minimum: int, issues: list[str]) -> None:
    raw_value = get_env_str(name, None)
    if raw_value is None:
        return
    try:
        parsed = get_env_int(name, None)
    except ValueError as exc:
        issues.append(str(exc))
        return
    if parsed is None:
        return
    if int(parsed) < int(minimum):
        issues.append(f"{name} must be >= {minimum}, got {parsed}.")


def _validate_non_negative_float(name: str, issues: list[str]) -> None:
    try:
        parsed = get_env_float(name, None)
    except ValueError as exc:
        issues.append(str(exc))
        return
    if parsed is not None and parsed < 0:
        issues.append(f"{name} must be >= 0, got {parsed}.")


def _parse_page_size_options(issues: list[str]) -> list[int]:
    options: list[int] = []
    for token in get_env_list("QUERYLENS_PAGE_SIZE_OPTIONS", []) or []:
        try:
            value = int(token)
        except ValueError:
            issues.append(f"QUERYLENS_PAGE_SIZE_OPTIONS entries must be integers, got '{token}'.")
            continue
        if value < 1:
            issues.append(f"QUERYLENS_PAGE_SIZE_OPTIONS entries must be >= 1, got {value}.")
            continue
        options.append(value)
    return options


def validate_runtime_configuration() -> None:
    """Validate workbench configuration for malformed or inconsistent values.

    Raises:
        RuntimeError: when one or more invalid values are detected.
    """
    issues: list[str] = []

    _normalize_mode(
        "QUERYLENS_STALE_RESPONSE_POLICY",
        allowed=STALE_RESPONSE_POLICIES,
        default="discard",
        issues=issues,
    )
    _validate_min_int("QUERYLENS_DEFAULT_PAGE_SIZE", minimum=1, issues=issues)
    _validate_non_negative_float("QUERYLENS_AUTOSAVE_DELAY_SECONDS", issues)
    options = _parse_page_size_options(issues)

    try:
        default_page_size = get_env_int("QUERYLENS_DEFAULT_PAGE_SIZE", None)
    except ValueError:
        default_page_size = None
    if options and default_page_size is not None and default_page_size not in options:
        issues.append(
            "QUERYLENS_DEFAULT_PAGE_SIZE must be one of QUERYLENS_PAGE_SIZE_OPTIONS "
            f"{options}, got {default_page_size}."
        )

    if issues:
        raise RuntimeError("Invalid runtime configuration:\n- " + "\n- ".join(issues))
