"""Coordinate safe tree rebuilds while preserving UI state."""

from __future__ import annotations

from typing import Callable, Iterable

from PyQt6.QtWidgets import QTreeWidget

from .tree_state_adapter import TreeStateAdapter


class TreeRebuildCoordinator:
    """Rebuild tree contents while preserving selection.

    Expansion is not captured from the widget: the caller passes the
    authoritative expanded ids, and expand/collapse signals are blocked so
    the rebuild never feeds back into them.
    """

    def __init__(self, state_adapter: TreeStateAdapter | None = None) -> None:
        self._state_adapter = state_adapter if state_adapter is not None else TreeStateAdapter()

    @property
    def state_adapter(self) -> TreeStateAdapter:
        return self._state_adapter

    def rebuild(
        self,
        tree: QTreeWidget,
        rebuild_fn: Callable[[], None],
        expanded_ids: Iterable[int] = (),
    ) -> None:
        selected_keys = self._state_adapter.capture_selected_keys(tree)
        current_key = self._state_adapter.capture_current_key(tree)
        was_blocked = tree.blockSignals(True)
        try:
            rebuild_fn()
            self._state_adapter.apply_expanded_ids(tree, expanded_ids)
            self._state_adapter.restore_current_key(tree, current_key)
            self._state_adapter.restore_selected_keys(tree, selected_keys)
        finally:
            tree.blockSignals(was_blocked)
