"""Backend and dialog contracts."""

from .industry_protocol import (
    ConfirmSeverity,
    IndustryBackendABC,
    IndustryRecord,
    PromptServiceABC,
)

__all__ = [
    "ConfirmSeverity",
    "IndustryBackendABC",
    "IndustryRecord",
    "PromptServiceABC",
]
