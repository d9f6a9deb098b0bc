"""Comparison pane selection, per-pane expansion and main category ordering."""

from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Optional, Set

from pyqt_industry.hierarchy.forest import Forest
from pyqt_industry.hierarchy.path_queries import descendant_ids

logger = logging.getLogger(__name__)


class MainCategoryOrder:
    """Client-side ordering of root ids; visual only, never persisted."""

    def __init__(self, root_ids: Iterable[int] = ()) -> None:
        self._ids: List[int] = list(dict.fromkeys(root_ids))

    @property
    def ids(self) -> List[int]:
        return list(self._ids)

    def sync(self, current_root_ids: Iterable[int]) -> None:
        """Keep surviving roots in their current order and append new ones."""
        current = list(dict.fromkeys(current_root_ids))
        current_set = set(current)
        kept = [root_id for root_id in self._ids if root_id in current_set]
        kept_set = set(kept)
        self._ids = kept + [root_id for root_id in current if root_id not in kept_set]

    def move(self, root_id: int, index: int) -> bool:
        """Move ``root_id`` to ``index``. Returns False when nothing changed."""
        if root_id not in self._ids:
            return False
        old_index = self._ids.index(root_id)
        self._ids.pop(old_index)
        index = max(0, min(index, len(self._ids)))
        self._ids.insert(index, root_id)
        return index != old_index


class PaneSelectionState:
    """Ordered set of open comparison panes and their expansion sets.

    Expansion sets are keyed by pane root id so expand state never leaks
    between panes.
    """

    def __init__(self) -> None:
        self._selected: List[int] = []
        self._expanded: Dict[int, Set[int]] = {}

    @property
    def selected_roots(self) -> List[int]:
        return list(self._selected)

    def is_selected(self, root_id: int) -> bool:
        return root_id in self._selected

    def position_of(self, root_id: int) -> Optional[int]:
        """1-based pane position, or None when the root has no pane."""
        if root_id not in self._selected:
            return None
        return self._selected.index(root_id) + 1

    def toggle_root(self, root_id: int) -> bool:
        """Open or close the pane for ``root_id``. Returns True when now open."""
        if root_id in self._selected:
            self.close_pane(root_id)
            return False
        self._selected.append(root_id)
        return True

    def open_pane(self, root_id: int) -> None:
        if root_id not in self._selected:
            self._selected.append(root_id)

    def close_pane(self, root_id: int) -> None:
        if root_id in self._selected:
            self._selected.remove(root_id)
        self._expanded.pop(root_id, None)

    def clear_all(self) -> None:
        self._selected = []
        self._expanded = {}

    def expanded_ids(self, root_id: int) -> Set[int]:
        return set(self._expanded.get(root_id, ()))

    def expansion_map(self) -> Dict[int, Set[int]]:
        return {root_id: set(ids) for root_id, ids in self._expanded.items()}

    def is_expanded(self, root_id: int, node_id: int) -> bool:
        return node_id in self._expanded.get(root_id, ())

    def toggle_node(self, root_id: int, node_id: int) -> bool:
        """Flip ``node_id`` in pane ``root_id``. Returns True when now expanded."""
        expanded = self._expanded.setdefault(root_id, set())
        if node_id in expanded:
            expanded.discard(node_id)
            return False
        expanded.add(node_id)
        return True

    def set_expanded(self, root_id: int, node_id: int, expanded: bool) -> None:
        ids = self._expanded.setdefault(root_id, set())
        if expanded:
            ids.add(node_id)
        else:
            ids.discard(node_id)

    def expand_all(self, root_id: int, forest: Forest) -> None:
        root = forest.get(root_id)
        if root is None:
            return
        self._expanded[root_id] = set(descendant_ids(root))

    def collapse_all(self, root_id: int) -> None:
        self._expanded[root_id] = set()

    def any_expanded(self) -> bool:
        return any(ids for ids in self._expanded.values())

    def toggle_global(self, forest: Forest) -> bool:
        """Collapse everything if anything is expanded, else expand every pane.

        Returns True when panes were expanded.
        """
        if self.any_expanded():
            self._expanded = {}
            return False
        expanded: Dict[int, Set[int]] = {}
        for root_id in self._selected:
            root = forest.get(root_id)
            if root is not None:
                expanded[root_id] = set(descendant_ids(root))
        self._expanded = expanded
        return True

    def prune_nodes(self, node_ids: Iterable[int]) -> None:
        """Forget ``node_ids`` everywhere; selected roots among them lose their pane."""
        doomed = set(node_ids)
        if not doomed:
            return
        for root_id in [root_id for root_id in self._selected if root_id in doomed]:
            self.close_pane(root_id)
        for root_id, ids in self._expanded.items():
            ids.difference_update(doomed)

    def reconcile(self, forest: Forest) -> List[int]:
        """Align with a freshly built forest. Returns the pane roots that were closed."""
        closed = [root_id for root_id in self._selected if not forest.is_root(root_id)]
        for root_id in closed:
            logger.debug("Closing pane %s: no longer a main category", root_id)
            self.close_pane(root_id)
        for root_id in list(self._expanded):
            if root_id not in self._selected:
                del self._expanded[root_id]
                continue
            live = set(descendant_ids(forest.index[root_id]))
            self._expanded[root_id] &= live
        return closed
