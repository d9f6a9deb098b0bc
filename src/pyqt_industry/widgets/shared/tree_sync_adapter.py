"""Recursive sync of industry nodes into QTreeWidgetItem hierarchies."""
from __future__ import annotations

from typing import List, Sequence

from PyQt6.QtCore import Qt
from PyQt6.QtWidgets import QTreeWidgetItem

from pyqt_industry.hierarchy.forest import IndustryTreeNode
from pyqt_industry.hierarchy.path_queries import category_label_for_level


class TreeSyncAdapter:
    """Sync industry node trees to QTreeWidgetItem hierarchies.

    Existing items are reused and moved into source order; items whose node
    disappeared are removed. Each item carries
    ``{"type": "industry", "node_id": id, "level": depth}``.
    """

    NODE_TYPE = "industry"
    _TYPE_KEY = "type"
    _NODE_ID_KEY = "node_id"
    _LEVEL_KEY = "level"

    def sync_children(
        self,
        parent_item: QTreeWidgetItem,
        nodes: Sequence[IndustryTreeNode],
        level: int,
    ) -> None:
        seen: set[int] = set()
        for position, node in enumerate(nodes):
            seen.add(node.id)
            child = self._find_child(parent_item, node.id)
            if child is None:
                child = QTreeWidgetItem([node.name])
                parent_item.insertChild(position, child)
            else:
                current = parent_item.indexOfChild(child)
                if current != position:
                    parent_item.takeChild(current)
                    parent_item.insertChild(position, child)
                child.setText(0, node.name)
            child.setData(
                0,
                Qt.ItemDataRole.UserRole,
                {
                    self._TYPE_KEY: self.NODE_TYPE,
                    self._NODE_ID_KEY: node.id,
                    self._LEVEL_KEY: level,
                },
            )
            child.setToolTip(0, category_label_for_level(level))

            self.sync_children(child, node.children, level + 1)

        for idx in range(parent_item.childCount() - 1, -1, -1):
            existing = parent_item.child(idx)
            payload = existing.data(0, Qt.ItemDataRole.UserRole)
            if not isinstance(payload, dict) or payload.get(self._NODE_ID_KEY) not in seen:
                parent_item.removeChild(existing)

    def item_ids(self, parent_item: QTreeWidgetItem) -> List[int]:
        """Node ids of the direct children of ``parent_item``, in order."""
        ids: List[int] = []
        for idx in range(parent_item.childCount()):
            payload = parent_item.child(idx).data(0, Qt.ItemDataRole.UserRole)
            if isinstance(payload, dict):
                ids.append(payload.get(self._NODE_ID_KEY))
        return ids

    def _find_child(
        self,
        parent_item: QTreeWidgetItem,
        node_id: int,
    ) -> QTreeWidgetItem | None:
        for idx in range(parent_item.childCount()):
            candidate = parent_item.child(idx)
            payload = candidate.data(0, Qt.ItemDataRole.UserRole)
            if not isinstance(payload, dict):
                continue
            if payload.get(self._TYPE_KEY) != self.NODE_TYPE:
                continue
            if payload.get(self._NODE_ID_KEY) != node_id:
                continue
            return candidate
        return None
