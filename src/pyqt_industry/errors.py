"""Exception hierarchy for the industry hierarchy editor."""

from __future__ import annotations

from typing import Optional


class HierarchyError(Exception):
    """Base exception for all hierarchy editor failures."""

    def __init__(self, message: str, *, node_id: Optional[int] = None) -> None:
        super().__init__(message)
        self.message = message
        self.node_id = node_id


class NameValidationError(HierarchyError):
    """Raised when a name fails client-side validation."""


class NodeNotFoundError(HierarchyError):
    """Raised when a referenced industry id is absent from the forest."""

    def __init__(self, node_id: int) -> None:
        super().__init__(f"Industry {node_id} does not exist", node_id=node_id)


class StructuralError(HierarchyError):
    """Raised when an operation would break the forest structure."""


class SelfParentError(StructuralError):
    """Raised when a node would become its own parent."""

    def __init__(self, node_id: int) -> None:
        super().__init__(
            f"Industry {node_id} cannot be moved under itself", node_id=node_id
        )


class CycleError(StructuralError):
    """Raised when a node would be moved beneath its own subtree."""

    def __init__(self, node_id: int, new_parent_id: int) -> None:
        super().__init__(
            f"Moving industry {node_id} under {new_parent_id} would create a cycle",
            node_id=node_id,
        )
        self.new_parent_id = new_parent_id


class PayloadError(HierarchyError):
    """Raised when a backend payload cannot be parsed."""


class BackendError(HierarchyError):
    """Raised when the backend rejects a request."""

    def __init__(
        self,
        message: str,
        *,
        status_code: Optional[int] = None,
        detail: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.detail = detail

    def __str__(self) -> str:
        if self.status_code is None:
            return self.message
        return f"{self.message} ({self.status_code}): {self.detail or 'Unknown server error'}"


class BackendTransportError(BackendError):
    """Raised when the backend cannot be reached at all."""
