"""
Toolkit-agnostic services behind the industry hierarchy editor.
"""

from .drag_controller import (
    DRAG_MIME_TYPE,
    DragController,
    DragKind,
    DragPayload,
    DragState,
    decode_drag_payload,
    encode_drag_payload,
)
from .hierarchy_host_abc import HierarchyHostABC
from .hierarchy_session import HierarchySession
from .industry_api_client import ApiClient, IndustryApiBackend
from .mutation_gateway import MutationGateway, MutationOutcome
from .operation_runner import (
    ImmediateOperationRunner,
    OperationResult,
    OperationRunnerABC,
)
from .pane_state import MainCategoryOrder, PaneSelectionState
from .viewport_continuity import ScrollSurfaceABC, ViewportContinuity

__all__ = [
    "DRAG_MIME_TYPE",
    "DragController",
    "DragKind",
    "DragPayload",
    "DragState",
    "decode_drag_payload",
    "encode_drag_payload",
    "HierarchyHostABC",
    "HierarchySession",
    "ApiClient",
    "IndustryApiBackend",
    "MutationGateway",
    "MutationOutcome",
    "ImmediateOperationRunner",
    "OperationResult",
    "OperationRunnerABC",
    "MainCategoryOrder",
    "PaneSelectionState",
    "ScrollSurfaceABC",
    "ViewportContinuity",
]
