"""Status presentation strategy abstractions."""
from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional


class StatusTone(Enum):
    """Coarse classification of a status line."""
    NEUTRAL = "neutral"
    BUSY = "busy"
    SUCCESS = "success"
    ERROR = "error"


@dataclass(frozen=True)
class StatusPresentationInput:
    """Typed input for status text presentation."""

    message: str
    tone: StatusTone = StatusTone.NEUTRAL


@dataclass(frozen=True)
class StatusPresentationResult:
    """Rendered output from a status presentation strategy."""

    text: str
    color_hex: Optional[str] = None


class StatusPresentationStrategyABC(ABC):
    """Abstract strategy for editor status text presentation."""

    @abstractmethod
    def present(self, status_input: StatusPresentationInput) -> StatusPresentationResult:
        """Render status presentation output."""


class DefaultStatusPresentationStrategy(StatusPresentationStrategyABC):
    """Passthrough text, colored by tone."""

    TONE_COLORS: Dict[StatusTone, Optional[str]] = {
        StatusTone.NEUTRAL: None,
        StatusTone.BUSY: "#b7791f",
        StatusTone.SUCCESS: "#2f855a",
        StatusTone.ERROR: "#c53030",
    }

    def present(self, status_input: StatusPresentationInput) -> StatusPresentationResult:
        return StatusPresentationResult(
            text=status_input.message,
            color_hex=self.TONE_COLORS.get(status_input.tone),
        )
