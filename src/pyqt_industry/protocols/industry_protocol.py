"""Industry backend and dialog abstractions for the hierarchy editor.

This module provides the record type exchanged with the backend and the ABCs
the editor consumes: the industry backend itself and the yes/no and text
prompts used before destructive or naming operations.

Design Principles:
- Frozen dataclasses for immutability
- ABCs for extensibility (no protocols)
- Enum-based type safety
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Any, List, Mapping, Optional

from pyqt_industry.errors import PayloadError

NAME_KEY = "industry_name"
CATEGORY_KEY = "category"
PARENT_KEY = "parent_id"


def _optional_int(value: Any, field_name: str) -> Optional[int]:
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, int):
        raise PayloadError(f"{field_name} must be an integer or null, got {value!r}")
    return value


@dataclass(frozen=True)
class IndustryRecord:
    """One backend industry row.

    ``category`` is a descriptive label derived from depth at creation time;
    it is never used to decide structure.
    """
    id: int
    name: str
    category: str = ""
    parent_id: Optional[int] = None

    @property
    def is_root(self) -> bool:
        return self.parent_id is None

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "IndustryRecord":
        if not isinstance(payload, Mapping):
            raise PayloadError(f"Industry payload must be an object, got {type(payload).__name__}")
        node_id = _optional_int(payload.get("id"), "id")
        if node_id is None:
            raise PayloadError("Industry payload is missing 'id'")
        name = payload.get(NAME_KEY)
        if not isinstance(name, str):
            name = "" if name is None else str(name)
        category = payload.get(CATEGORY_KEY) or ""
        return cls(
            id=node_id,
            name=name,
            category=str(category),
            parent_id=_optional_int(payload.get(PARENT_KEY), PARENT_KEY),
        )


class IndustryBackendABC(ABC):
    """Backend operations consumed by the mutation gateway.

    Implementations raise ``BackendError`` (or ``BackendTransportError``) on
    failure; they never return partial results.
    """

    @abstractmethod
    def list_industries(self) -> List[IndustryRecord]:
        """Return every industry record."""

    @abstractmethod
    def create_industry(
        self, name: str, category: str, parent_id: Optional[int]
    ) -> IndustryRecord:
        """Create a record under ``parent_id`` (None creates a root)."""

    @abstractmethod
    def rename_industry(self, node_id: int, name: str) -> IndustryRecord:
        """Change the display name of one record."""

    @abstractmethod
    def delete_industry(self, node_id: int) -> None:
        """Delete a record and, server-side, its entire subtree."""

    @abstractmethod
    def reparent_industry(self, node_id: int, new_parent_id: Optional[int]) -> None:
        """Point ``node_id`` at a new parent (None promotes it to root)."""


class ConfirmSeverity(Enum):
    """Visual weight of a confirmation prompt."""
    DANGER = "danger"
    WARNING = "warning"
    INFO = "info"


class PromptServiceABC(ABC):
    """Dialog collaborators used before mutations."""

    @abstractmethod
    def confirm(self, title: str, message: str, severity: ConfirmSeverity) -> bool:
        """Ask a yes/no question. Return True only on explicit confirmation."""

    @abstractmethod
    def ask_text(self, title: str, placeholder: str) -> Optional[str]:
        """Ask for a string. Return None when the user cancels."""
