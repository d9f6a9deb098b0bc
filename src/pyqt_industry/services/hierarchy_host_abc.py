"""Nominal host contract for the hierarchy editor services."""
from __future__ import annotations

from abc import ABC, abstractmethod


class HierarchyHostABC(ABC):
    """Base callback contract for whoever renders the hierarchy session."""

    @abstractmethod
    def render_session(self) -> None:
        """Re-render main categories and panes from the session."""

    @abstractmethod
    def show_error(self, title: str, message: str) -> None:
        """Present a user-visible failure."""

    @abstractmethod
    def emit_status(self, message: str) -> None:
        """Emit status text for UI presentation."""

    def set_busy(self, busy: bool) -> None:
        """Reflect an in-flight backend call; optional."""
