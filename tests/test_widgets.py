"""Tests for the Qt editor surface."""

import threading

import pytest
from conftest import DeferredRunner, FakeBackend, make_records

from pyqt_industry.hierarchy import build_forest
from pyqt_industry.services import ImmediateOperationRunner, MutationOutcome
from pyqt_industry.services.viewport_continuity import run_now


@pytest.fixture
def errors(monkeypatch):
    from PyQt6.QtWidgets import QMessageBox

    shown = []
    monkeypatch.setattr(
        QMessageBox, "critical", staticmethod(lambda parent, title, message: shown.append((title, message)))
    )
    return shown


@pytest.fixture
def editor(qapp, qtbot, backend, prompts, errors):
    from pyqt_industry.widgets import IndustryTreeEditorWidget

    widget = IndustryTreeEditorWidget(
        backend,
        prompts,
        runner=ImmediateOperationRunner(),
        scheduler=run_now,
    )
    qtbot.addWidget(widget)
    return widget


def _top_level_ids(pane):
    from pyqt_industry.widgets.shared import TreeSyncAdapter

    return TreeSyncAdapter().item_ids(pane.tree.invisibleRootItem())


def test_editor_loads_main_categories(editor):
    """Editor lists every main category after the initial load."""
    assert editor.category_list.count() == 2
    assert editor.category_list.root_ids() == [1, 9]
    assert editor.pane_root_ids() == []
    assert not editor.clear_all_button.isEnabled()


def test_toggle_pane_renders_subtree(editor):
    editor.toggle_pane(9)
    editor.toggle_pane(1)

    pane = editor.find_pane(1)
    assert editor.pane_root_ids() == [9, 1]
    assert pane.position_label.text() == "Position #2"
    assert pane.name_label.text() == "Industry 1"
    assert _top_level_ids(pane) == [2, 3]

    editor.toggle_pane(9)
    assert editor.pane_root_ids() == [1]
    assert pane.position_label.text() == "Position #1"


def test_selected_industry_hint_reveals_node(qapp, qtbot, backend, prompts, errors):
    from pyqt_industry.widgets import IndustryTreeEditorWidget
    from pyqt_industry.widgets.shared import iter_tree_items, item_node_id

    widget = IndustryTreeEditorWidget(
        backend, prompts, 7, runner=ImmediateOperationRunner(), scheduler=run_now
    )
    qtbot.addWidget(widget)

    pane = widget.find_pane(1)
    expanded = {item_node_id(item) for item in iter_tree_items(pane.tree) if item.isExpanded()}
    assert widget.pane_root_ids() == [1]
    assert expanded == {3}


def test_empty_pane_shows_placeholder(editor, backend):
    editor.gateway.add_root("Logistics")

    editor.toggle_pane(11)

    pane = editor.find_pane(11)
    assert pane.tree.isHidden()
    assert not pane.empty_state.isHidden()
    assert pane.add_first_button.text() == "+ Add First Subcategory"


def test_global_expand_and_clear(editor):
    editor.toggle_pane(1)
    editor.toggle_pane(9)

    editor.toggle_global_expansion()
    assert editor.expand_all_button.text() == "Collapse All"
    assert editor.find_pane(1).expand_button.text() == "Collapse All"

    editor.toggle_global_expansion()
    assert editor.expand_all_button.text() == "Expand All"

    editor.clear_panes()
    assert editor.pane_root_ids() == []


def test_cross_pane_drop_rerenders_both_panes(editor, backend):
    from pyqt_industry.services import DragKind, DragPayload, encode_drag_payload

    editor.toggle_pane(1)
    editor.toggle_pane(9)
    raw = encode_drag_payload(DragPayload(3, DragKind.DESCENDANT, 1))

    assert editor.drag_controller.drop_on_pane(raw, 9) is MutationOutcome.SUBMITTED

    assert _top_level_ids(editor.find_pane(1)) == [2]
    assert _top_level_ids(editor.find_pane(9)) == [3, 10]


def test_root_track_reorder_updates_strip(editor):
    from pyqt_industry.services import DragKind, DragPayload, encode_drag_payload

    raw = encode_drag_payload(DragPayload(9, DragKind.ROOT, 0))

    assert editor.drag_controller.drop_on_root_track(raw, 0)
    assert editor.category_list.root_ids() == [9, 1]


def test_errors_are_shown_and_reported_in_status(editor, backend, errors):
    backend.fail_next("create")

    editor.gateway.add_child(1, "Wind")

    assert errors[-1][0] == "Operation Failed"
    assert editor.status_label.text().startswith("Operation Failed: Failed to add child industry")


def test_rejected_inline_rename_is_reported(editor, errors):
    assert editor.rename_from_view(2, "x") is MutationOutcome.REJECTED
    assert errors[-1] == ("Invalid Name", "Industry name must be at least 2 characters long")


def test_failed_inline_rename_restores_saved_name(editor, backend, errors, qtbot):
    from pyqt_industry.widgets.shared import iter_tree_items, item_node_id

    editor.toggle_pane(1)
    pane = editor.find_pane(1)

    def item_for(node_id):
        return next(item for item in iter_tree_items(pane.tree) if item_node_id(item) == node_id)

    backend.fail_next("rename")
    item_for(2).setText(0, "Retail")

    qtbot.waitUntil(lambda: item_for(2).text(0) == "Industry 2")
    assert errors[-1][0] == "Operation Failed"
    assert backend.records[2].name == "Industry 2"


def test_failed_strip_rename_restores_saved_name(editor, backend, errors, qtbot):
    backend.fail_next("rename")

    editor.category_list.item(0).setText("Retail")

    qtbot.waitUntil(lambda: editor.category_list.item(0).text() == "Industry 1")
    assert errors[-1][0] == "Operation Failed"


def test_loading_status_until_first_load(qapp, qtbot, backend, prompts, errors):
    from pyqt_industry.widgets import IndustryTreeEditorWidget

    runner = DeferredRunner()
    widget = IndustryTreeEditorWidget(backend, prompts, runner=runner, scheduler=run_now)
    qtbot.addWidget(widget)

    assert widget.status_label.text() == "Loading industries..."
    assert widget.empty_strip.isHidden()

    runner.run_pending()

    assert widget.status_label.text() == "Loaded 6 industries"
    assert widget.category_list.root_ids() == [1, 9]


def test_empty_backend_offers_first_category(qapp, qtbot, prompts, errors):
    from pyqt_industry.widgets import IndustryTreeEditorWidget

    widget = IndustryTreeEditorWidget(
        FakeBackend([]), prompts, runner=ImmediateOperationRunner(), scheduler=run_now
    )
    qtbot.addWidget(widget)

    assert widget.category_list.isHidden()
    assert not widget.empty_strip.isHidden()

    prompts.text_answers.append("Energy")
    widget.create_first_button.click()

    assert widget.category_list.root_ids() == [1]
    assert not widget.category_list.isHidden()
    assert widget.empty_strip.isHidden()


def test_comparison_title_counts_open_panes(editor):
    assert editor.comparison_title.text() == "Category Comparison (0)"

    editor.toggle_pane(1)
    editor.toggle_pane(9)

    assert editor.comparison_title.text() == "Category Comparison (2)"


def test_double_click_starts_rename(editor):
    from PyQt6.QtWidgets import QAbstractItemView

    editor.toggle_pane(1)

    for view in (editor.category_list, editor.find_pane(1).tree):
        assert view.editTriggers() & QAbstractItemView.EditTrigger.DoubleClicked


def test_drag_pixmap_snapshots_current_row(editor, qtbot):
    from pyqt_industry.widgets.industry_tree_editor import drag_pixmap

    with qtbot.waitExposed(editor):
        editor.show()
    strip = editor.category_list

    strip.setCurrentRow(0)
    pixmap = drag_pixmap(strip)
    assert pixmap is not None
    assert not pixmap.isNull()

    strip.setCurrentRow(-1)
    assert drag_pixmap(strip) is None


def test_tree_sync_reorders_and_removes_items(qapp):
    from PyQt6.QtCore import Qt
    from PyQt6.QtWidgets import QTreeWidget

    from pyqt_industry.widgets.shared import TreeSyncAdapter

    tree = QTreeWidget()
    adapter = TreeSyncAdapter()
    root_item = tree.invisibleRootItem()

    first = build_forest(make_records([(1, None), (2, 1), (3, 1), (4, 1)]))
    adapter.sync_children(root_item, first.get(1).children, 1)
    kept = root_item.child(1)
    kept.setData(0, Qt.ItemDataRole.WhatsThisRole, "reused")

    second = build_forest(make_records([(1, None), (4, 1), (3, 1), (5, 3)]))
    adapter.sync_children(root_item, second.get(1).children, 1)

    assert adapter.item_ids(root_item) == [4, 3]
    moved = root_item.child(1)
    assert moved.data(0, Qt.ItemDataRole.WhatsThisRole) == "reused"
    assert adapter.item_ids(moved) == [5]
    assert moved.toolTip(0) == "sub"


def test_rebuild_coordinator_keeps_selection(qapp):
    from PyQt6.QtWidgets import QTreeWidget

    from pyqt_industry.widgets.shared import TreeRebuildCoordinator, TreeSyncAdapter

    tree = QTreeWidget()
    adapter = TreeSyncAdapter()
    forest = build_forest(make_records([(1, None), (2, 1), (3, 1), (7, 3)]))
    adapter.sync_children(tree.invisibleRootItem(), forest.get(1).children, 1)
    tree.invisibleRootItem().child(1).setSelected(True)

    rebuilt = build_forest(make_records([(1, None), (3, 1), (7, 3), (2, 1)]))
    TreeRebuildCoordinator().rebuild(
        tree,
        lambda: adapter.sync_children(tree.invisibleRootItem(), rebuilt.get(1).children, 1),
        expanded_ids={3},
    )

    selected = tree.selectedItems()
    assert [item.text(0) for item in selected] == ["Industry 3"]
    assert tree.invisibleRootItem().child(0).isExpanded()


def test_qt_thread_runner_delivers_on_ui_thread(qapp, qtbot):
    from pyqt_industry.widgets.shared import QtThreadOperationRunner

    runner = QtThreadOperationRunner()
    worker_threads = []
    delivered = []

    def work():
        worker_threads.append(threading.current_thread())
        return 42

    runner.submit(work, lambda result: delivered.append((result, threading.current_thread())))
    qtbot.waitUntil(lambda: bool(delivered), timeout=3000)

    result, thread = delivered[0]
    assert result.ok and result.value == 42
    assert thread is threading.main_thread()
    assert worker_threads[0] is not threading.main_thread()


def test_qt_thread_runner_captures_errors(qapp, qtbot):
    from pyqt_industry.widgets.shared import QtThreadOperationRunner

    runner = QtThreadOperationRunner()
    delivered = []

    def work():
        raise RuntimeError("backend down")

    runner.submit(work, delivered.append)
    qtbot.waitUntil(lambda: bool(delivered), timeout=3000)

    assert not delivered[0].ok
    assert str(delivered[0].error) == "backend down"
