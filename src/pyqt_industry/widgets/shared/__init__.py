"""
Shared widget utilities and components.
"""

from .tree_sync_adapter import TreeSyncAdapter
from .tree_state_adapter import (
    TreeItemKeyBuilderABC,
    DictPayloadTreeItemKeyBuilder,
    TreeStateAdapter,
    item_node_id,
    iter_tree_items,
)
from .tree_rebuild_coordinator import TreeRebuildCoordinator
from .editor_ui_scaffold import (
    EditorHeaderParts,
    create_editor_header,
    setup_vertical_editor_layout,
)
from .qt_collaborators import QtPromptService, ScrollAreaSurface, qt_timer_scheduler
from .qt_operation_runner import QtThreadOperationRunner

__all__ = [
    "TreeSyncAdapter",
    "TreeItemKeyBuilderABC",
    "DictPayloadTreeItemKeyBuilder",
    "TreeStateAdapter",
    "item_node_id",
    "iter_tree_items",
    "TreeRebuildCoordinator",
    "EditorHeaderParts",
    "create_editor_header",
    "setup_vertical_editor_layout",
    "QtPromptService",
    "ScrollAreaSurface",
    "qt_timer_scheduler",
    "QtThreadOperationRunner",
]
