"""Tests for pane selection, expansion and main category ordering."""

from conftest import make_records

from pyqt_industry.hierarchy import build_forest
from pyqt_industry.services import MainCategoryOrder, PaneSelectionState


def test_order_sync_keeps_existing_and_appends_new():
    order = MainCategoryOrder([9, 1, 4])

    order.sync([1, 4, 12, 9, 15])
    assert order.ids == [9, 1, 4, 12, 15]

    order.sync([4, 15])
    assert order.ids == [4, 15]


def test_order_move_clamps_index():
    order = MainCategoryOrder([1, 2, 3])

    assert order.move(1, 10)
    assert order.ids == [2, 3, 1]
    assert not order.move(404, 0)
    assert not order.move(2, 0)


def test_toggle_and_positions():
    panes = PaneSelectionState()

    assert panes.toggle_root(9)
    assert panes.toggle_root(1)
    assert panes.position_of(9) == 1
    assert panes.position_of(1) == 2

    assert not panes.toggle_root(9)
    assert panes.selected_roots == [1]
    assert panes.position_of(1) == 1
    assert panes.position_of(9) is None


def test_expansion_is_per_pane():
    panes = PaneSelectionState()
    panes.toggle_root(1)
    panes.toggle_root(9)

    assert panes.toggle_node(1, 3)
    assert panes.is_expanded(1, 3)
    assert not panes.is_expanded(9, 3)
    assert not panes.toggle_node(1, 3)
    assert panes.expanded_ids(1) == set()


def test_close_pane_drops_expansion():
    panes = PaneSelectionState()
    panes.toggle_root(1)
    panes.set_expanded(1, 3, True)

    panes.close_pane(1)

    assert panes.expansion_map() == {}
    assert not panes.is_selected(1)


def test_expand_and_collapse_all(forest):
    panes = PaneSelectionState()
    panes.toggle_root(1)

    panes.expand_all(1, forest)
    assert panes.expanded_ids(1) == {2, 3, 7}

    panes.collapse_all(1)
    assert panes.expanded_ids(1) == set()
    assert not panes.any_expanded()


def test_global_toggle_derives_from_current_state(forest):
    panes = PaneSelectionState()
    panes.toggle_root(1)
    panes.toggle_root(9)

    assert panes.toggle_global(forest)
    assert panes.expansion_map() == {1: {2, 3, 7}, 9: {10}}

    panes.set_expanded(9, 10, False)
    assert not panes.toggle_global(forest)
    assert not panes.any_expanded()


def test_clear_all():
    panes = PaneSelectionState()
    panes.toggle_root(1)
    panes.set_expanded(1, 2, True)

    panes.clear_all()

    assert panes.selected_roots == []
    assert panes.expansion_map() == {}


def test_prune_nodes_closes_selected_roots():
    panes = PaneSelectionState()
    panes.toggle_root(1)
    panes.toggle_root(9)
    panes.set_expanded(1, 3, True)
    panes.set_expanded(1, 7, True)

    panes.prune_nodes([9, 3, 7])

    assert panes.selected_roots == [1]
    assert panes.expanded_ids(1) == set()


def test_reconcile_drops_vanished_roots_and_stale_expansion(forest):
    panes = PaneSelectionState()
    panes.toggle_root(1)
    panes.toggle_root(9)
    panes.expand_all(1, forest)

    # 1 is no longer a root.
    rebuilt = build_forest(make_records([(9, None), (1, 9), (2, 1), (3, 9), (7, 3)]))
    closed = panes.reconcile(rebuilt)

    assert closed == [1]
    assert panes.selected_roots == [9]
    assert panes.expansion_map() == {}


def test_reconcile_keeps_surviving_expansion(forest):
    panes = PaneSelectionState()
    panes.toggle_root(1)
    panes.expand_all(1, forest)

    rebuilt = build_forest(make_records([(1, None), (2, 1), (9, None), (3, 9), (7, 3)]))
    assert panes.reconcile(rebuilt) == []

    assert panes.expanded_ids(1) == {2}
