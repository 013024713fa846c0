"""Workbench configuration resolved from the environment."""

import logging
from dataclasses import dataclass
from typing import Optional, Tuple

from dotenv import load_dotenv

from common.config.env import get_env_float, get_env_int, get_env_list, get_env_str
from common.config.sanity import STALE_RESPONSE_POLICIES, validate_runtime_configuration

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 50
DEFAULT_PAGE_SIZE_OPTIONS = (25, 50, 100, 250)
DEFAULT_AUTOSAVE_DELAY_SECONDS = 1.0
DEFAULT_STALE_RESPONSE_POLICY = "discard"


@dataclass(frozen=True)
class WorkbenchSettings:
    """Resolved workbench settings."""

    default_page_size: int = DEFAULT_PAGE_SIZE
    page_size_options: Tuple[int, ...] = DEFAULT_PAGE_SIZE_OPTIONS
    autosave_delay_seconds: float = DEFAULT_AUTOSAVE_DELAY_SECONDS
    stale_response_policy: str = DEFAULT_STALE_RESPONSE_POLICY

    @property
    def discard_stale_responses(self) -> bool:
        return self.stale_response_policy == "discard"


def _page_size_options() -> Tuple[int, ...]:
    raw = get_env_list("QUERYLENS_PAGE_SIZE_OPTIONS", None)
    if not raw:
        return DEFAULT_PAGE_SIZE_OPTIONS
    return tuple(sorted({int(token) for token in raw}))


def load_settings(env_file: Optional[str] = None, *, validate: bool = True) -> WorkbenchSettings:
    """Load settings from the environment, reading `env_file` (or `.env`) first.

    Raises:
        RuntimeError: if `validate` is set and the configuration is invalid.
    """
    load_dotenv(env_file, override=False)
    if validate:
        validate_runtime_configuration()

    policy = (get_env_str("QUERYLENS_STALE_RESPONSE_POLICY", DEFAULT_STALE_RESPONSE_POLICY) or "")
    policy = policy.strip().lower()
    if policy not in STALE_RESPONSE_POLICIES:
        logger.warning("Unknown QUERYLENS_STALE_RESPONSE_POLICY %r, using discard", policy)
        policy = DEFAULT_STALE_RESPONSE_POLICY

    settings = WorkbenchSettings(
        default_page_size=get_env_int("QUERYLENS_DEFAULT_PAGE_SIZE", DEFAULT_PAGE_SIZE),
        page_size_options=_page_size_options(),
        autosave_delay_seconds=get_env_float(
            "QUERYLENS_AUTOSAVE_DELAY_SECONDS", DEFAULT_AUTOSAVE_DELAY_SECONDS
        ),
        stale_response_policy=policy,
    )
    logger.debug("Loaded workbench settings: %s", settings)
    return settings
