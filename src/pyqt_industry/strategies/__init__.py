"""Presentation strategies."""

from .status_presentation import (
    StatusTone,
    StatusPresentationInput,
    StatusPresentationResult,
    StatusPresentationStrategyABC,
    DefaultStatusPresentationStrategy,
)

__all__ = [
    'StatusTone',
    'StatusPresentationInput',
    'StatusPresentationResult',
    'StatusPresentationStrategyABC',
    'DefaultStatusPresentationStrategy',
]
