"""Editor session: the single owner of forest, ordering, pane and scroll state."""

from __future__ import annotations

import logging
from typing import List, Optional

from pyqt_industry.hierarchy.forest import EMPTY_FOREST, Forest, IndustryTreeNode
from pyqt_industry.hierarchy.path_queries import ancestor_chain, descendant_ids, root_id_of
from pyqt_industry.services.pane_state import MainCategoryOrder, PaneSelectionState
from pyqt_industry.services.viewport_continuity import ViewportContinuity

logger = logging.getLogger(__name__)


class HierarchySession:
    """Mutable UI-thread state of one mounted hierarchy editor.

    Only the mutation gateway replaces the forest (after a successful
    reload); widgets read from the session and route every gesture through
    the gateway or drag controller.
    """

    def __init__(self, viewport: Optional[ViewportContinuity] = None) -> None:
        self.forest: Forest = EMPTY_FOREST
        self.order = MainCategoryOrder()
        self.panes = PaneSelectionState()
        self.viewport = viewport if viewport is not None else ViewportContinuity()
        self.loaded = False

    def apply_forest(self, forest: Forest) -> List[int]:
        """Install a freshly built forest and reconcile dependent state.

        Returns the pane roots closed because they vanished.
        """
        self.forest = forest
        self.loaded = True
        self.order.sync(forest.root_ids)
        closed = self.panes.reconcile(forest)
        for root_id in closed:
            self.viewport.forget_pane(root_id)
        return closed

    def ordered_roots(self) -> List[IndustryTreeNode]:
        return [self.forest.index[root_id] for root_id in self.order.ids if root_id in self.forest.index]

    def root_of(self, node_id: int) -> Optional[int]:
        return root_id_of(self.forest.roots, node_id)

    def toggle_pane(self, root_id: int) -> bool:
        if not self.forest.is_root(root_id):
            return False
        opened = self.panes.toggle_root(root_id)
        if not opened:
            self.viewport.forget_pane(root_id)
        return opened

    def close_pane(self, root_id: int) -> None:
        self.panes.close_pane(root_id)
        self.viewport.forget_pane(root_id)

    def clear_panes(self) -> None:
        self.panes.clear_all()
        self.viewport.forget_all()

    def prune_subtree(self, node_id: int) -> None:
        """Drop selection and expansion entries for ``node_id`` and its descendants."""
        node = self.forest.get(node_id)
        doomed = [node_id] + (descendant_ids(node) if node is not None else [])
        for root_id in doomed:
            if self.panes.is_selected(root_id):
                self.viewport.forget_pane(root_id)
        self.panes.prune_nodes(doomed)

    def reveal(self, node_id: int) -> bool:
        """Open the pane containing ``node_id`` and expand its ancestors."""
        root_id = self.root_of(node_id)
        if root_id is None:
            return False
        self.panes.open_pane(root_id)
        for ancestor in ancestor_chain(self.forest.roots, node_id):
            if ancestor.id != root_id:
                self.panes.set_expanded(root_id, ancestor.id, True)
        return True
