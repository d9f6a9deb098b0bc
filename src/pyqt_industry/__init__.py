"""
Industry hierarchy editor built on PyQt6.

The Qt surface lives in ``pyqt_industry.widgets`` and is imported lazily so
the forest and service layers stay usable without a display.
"""

__version__ = "0.1.0"

from pyqt_industry.errors import (
    BackendError,
    BackendTransportError,
    CycleError,
    HierarchyError,
    NameValidationError,
    NodeNotFoundError,
    PayloadError,
    SelfParentError,
    StructuralError,
)
from pyqt_industry.hierarchy import Forest, IndustryTreeNode, build_forest
from pyqt_industry.protocols import IndustryBackendABC, IndustryRecord

__all__ = [
    "__version__",
    "BackendError",
    "BackendTransportError",
    "CycleError",
    "HierarchyError",
    "NameValidationError",
    "NodeNotFoundError",
    "PayloadError",
    "SelfParentError",
    "StructuralError",
    "Forest",
    "IndustryTreeNode",
    "build_forest",
    "IndustryBackendABC",
    "IndustryRecord",
]
