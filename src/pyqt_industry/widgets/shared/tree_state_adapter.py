"""Tree expansion/selection state synchronization keyed by industry id."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Iterable, Iterator, Optional, Set

from PyQt6.QtCore import Qt
from PyQt6.QtWidgets import QTreeWidget, QTreeWidgetItem


class TreeItemKeyBuilderABC(ABC):
    """Build stable keys for tree items."""

    @abstractmethod
    def item_key(self, item: QTreeWidgetItem) -> str:
        """Return a key that survives the item being rebuilt or moved."""


class DictPayloadTreeItemKeyBuilder(TreeItemKeyBuilderABC):
    """Key builder for items carrying a ``{"type", "node_id"}`` payload.

    Industry ids are unique across the forest, so the key ignores the path
    and still matches after a node was reparented.
    """

    def item_key(self, item: QTreeWidgetItem) -> str:
        data = item.data(0, Qt.ItemDataRole.UserRole)
        if isinstance(data, dict):
            item_type = data.get("type")
            node_id = data.get("node_id")
            if item_type is not None and node_id is not None:
                return f"{item_type}:{node_id}"
        return f"text:{item.text(0)}"


def iter_tree_items(tree: QTreeWidget) -> Iterator[QTreeWidgetItem]:
    """Pre-order walk over every item of ``tree``."""
    stack = [tree.topLevelItem(idx) for idx in range(tree.topLevelItemCount() - 1, -1, -1)]
    while stack:
        item = stack.pop()
        yield item
        for idx in range(item.childCount() - 1, -1, -1):
            stack.append(item.child(idx))


def item_node_id(item: Optional[QTreeWidgetItem]) -> Optional[int]:
    if item is None:
        return None
    data = item.data(0, Qt.ItemDataRole.UserRole)
    if isinstance(data, dict):
        return data.get("node_id")
    return None


class TreeStateAdapter:
    """Capture/restore tree selection and apply expansion by item keys."""

    def __init__(
        self, key_builder: TreeItemKeyBuilderABC | None = None
    ) -> None:
        self._key_builder = (
            key_builder
            if key_builder is not None
            else DictPayloadTreeItemKeyBuilder()
        )

    def item_key(self, item: QTreeWidgetItem) -> str:
        return self._key_builder.item_key(item)

    def find_item(self, tree: QTreeWidget, key: str) -> Optional[QTreeWidgetItem]:
        for item in iter_tree_items(tree):
            if self.item_key(item) == key:
                return item
        return None

    def apply_expanded_ids(self, tree: QTreeWidget, expanded_ids: Iterable[int]) -> None:
        """Expand exactly the items whose node id is in ``expanded_ids``."""
        expanded = set(expanded_ids)
        for item in iter_tree_items(tree):
            item.setExpanded(item_node_id(item) in expanded)

    def capture_selected_keys(self, tree: QTreeWidget) -> Set[str]:
        return {self.item_key(item) for item in tree.selectedItems()}

    def restore_selected_keys(self, tree: QTreeWidget, selected_keys: Set[str]) -> None:
        if not selected_keys:
            return
        for item in iter_tree_items(tree):
            item.setSelected(self.item_key(item) in selected_keys)

    def capture_current_key(self, tree: QTreeWidget) -> Optional[str]:
        current = tree.currentItem()
        return self.item_key(current) if current is not None else None

    def restore_current_key(self, tree: QTreeWidget, key: Optional[str]) -> None:
        if key is None:
            return
        item = self.find_item(tree, key)
        if item is not None:
            tree.setCurrentItem(item)
