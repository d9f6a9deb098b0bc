"""
Configuration for the industry hierarchy editor.

Frozen dataclasses hold the REST client settings and the editor's
validation and layout policy. ``IndustryApiConfig.from_env`` reads the
``INDUSTRY_API_*`` environment variables so deployments never hardcode
the backend location.
"""

import os
from dataclasses import dataclass
from typing import Mapping, Optional

DEFAULT_API_BASE_URL = "http://localhost:8000"

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


def _parse_bool(raw: str, name: str) -> bool:
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ValueError(f"{name} must be a boolean flag, got {raw!r}")


@dataclass(frozen=True)
class IndustryApiConfig:
    """Connection and retry settings for the industry REST backend."""

    base_url: str = DEFAULT_API_BASE_URL
    retries: int = 3
    retry_delay_seconds: float = 1.0
    timeout_seconds: float = 15.0
    # PUT /industries/update/{id} is retried once when the canonical
    # endpoint answers 404.
    legacy_rename_fallback: bool = True

    def __post_init__(self) -> None:
        if self.retries < 0:
            raise ValueError("retries must be >= 0")
        if self.retry_delay_seconds < 0:
            raise ValueError("retry_delay_seconds must be >= 0")
        if self.timeout_seconds <= 0:
            raise ValueError("timeout_seconds must be > 0")

    @classmethod
    def from_env(
        cls, environ: Optional[Mapping[str, str]] = None
    ) -> "IndustryApiConfig":
        env = os.environ if environ is None else environ
        defaults = cls()
        retries = env.get("INDUSTRY_API_RETRIES")
        delay = env.get("INDUSTRY_API_RETRY_DELAY")
        timeout = env.get("INDUSTRY_API_TIMEOUT")
        legacy = env.get("INDUSTRY_API_LEGACY_RENAME")
        return cls(
            base_url=env.get("INDUSTRY_API_BASE_URL", defaults.base_url).rstrip("/"),
            retries=int(retries) if retries is not None else defaults.retries,
            retry_delay_seconds=(
                float(delay) if delay is not None else defaults.retry_delay_seconds
            ),
            timeout_seconds=(
                float(timeout) if timeout is not None else defaults.timeout_seconds
            ),
            legacy_rename_fallback=(
                _parse_bool(legacy, "INDUSTRY_API_LEGACY_RENAME")
                if legacy is not None
                else defaults.legacy_rename_fallback
            ),
        )


@dataclass(frozen=True)
class HierarchyEditorConfig:
    """Validation policy and layout settings for the hierarchy editor."""

    min_rename_length: int = 2
    min_child_name_length: int = 1

    # (first attempt, drift correction)
    window_restore_delays_ms: tuple = (50, 200)
    pane_restore_delays_ms: tuple = (100, 300)

    tree_indentation_px: int = 12
    max_pane_columns: int = 3


DEFAULT_EDITOR_CONFIG = HierarchyEditorConfig()
