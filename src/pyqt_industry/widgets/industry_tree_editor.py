"""
Industry hierarchy editor widget for PyQt6.

Main categories are listed in a reorderable strip; clicking one opens a
comparison pane showing its subtree. Panes sit side by side so nodes can be
dragged between main categories. Every edit goes through the mutation
gateway, which reloads the whole forest and asks this widget to re-render.
"""

from __future__ import annotations

import logging
from abc import ABCMeta
from typing import TYPE_CHECKING, Dict, List, Optional

from PyQt6.QtCore import QByteArray, QMimeData, QPoint, Qt, QTimer
from PyQt6.QtGui import QColor, QDrag, QPixmap
from PyQt6.QtWidgets import (
    QAbstractItemView,
    QFrame,
    QGridLayout,
    QHBoxLayout,
    QLabel,
    QListWidget,
    QListWidgetItem,
    QMenu,
    QMessageBox,
    QPushButton,
    QScrollArea,
    QTreeWidget,
    QVBoxLayout,
    QWidget,
)

from pyqt_industry.config import DEFAULT_EDITOR_CONFIG, HierarchyEditorConfig
from pyqt_industry.hierarchy.path_queries import MAIN_CATEGORY_LABEL
from pyqt_industry.protocols.industry_protocol import IndustryBackendABC, PromptServiceABC
from pyqt_industry.services.drag_controller import (
    DRAG_MIME_TYPE,
    DragController,
    encode_drag_payload,
)
from pyqt_industry.services.hierarchy_host_abc import HierarchyHostABC
from pyqt_industry.services.hierarchy_session import HierarchySession
from pyqt_industry.services.mutation_gateway import (
    BUSY_MESSAGE,
    MutationGateway,
    MutationOutcome,
)
from pyqt_industry.services.operation_runner import OperationRunnerABC
from pyqt_industry.services.viewport_continuity import Scheduler, ViewportContinuity
from pyqt_industry.strategies.status_presentation import (
    DefaultStatusPresentationStrategy,
    StatusPresentationInput,
    StatusPresentationStrategyABC,
    StatusTone,
)
from pyqt_industry.widgets.shared.editor_ui_scaffold import (
    create_editor_header,
    setup_vertical_editor_layout,
)
from pyqt_industry.widgets.shared.qt_collaborators import (
    QtPromptService,
    ScrollAreaSurface,
    qt_timer_scheduler,
)
from pyqt_industry.widgets.shared.qt_operation_runner import QtThreadOperationRunner
from pyqt_industry.widgets.shared.tree_rebuild_coordinator import TreeRebuildCoordinator
from pyqt_industry.widgets.shared.tree_state_adapter import item_node_id
from pyqt_industry.widgets.shared.tree_sync_adapter import TreeSyncAdapter

if TYPE_CHECKING:
    from PyQt6.QtGui import QDragEnterEvent, QDragMoveEvent, QDropEvent

logger = logging.getLogger(__name__)

OPEN_PANE_COLOR = "#dbeafe"
EMPTY_TEXT = "No subcategories yet"
NO_CATEGORIES_TEXT = "No main categories available."
LOADING_TEXT = "Loading industries..."
RENAME_TRIGGERS = (
    QAbstractItemView.EditTrigger.DoubleClicked | QAbstractItemView.EditTrigger.EditKeyPressed
)


class _CombinedMeta(ABCMeta, type(QWidget)):
    """Combined metaclass for ABC + PyQt6 QWidget."""


def _mime_bytes(mime: QMimeData) -> Optional[bytes]:
    if not mime.hasFormat(DRAG_MIME_TYPE):
        return None
    return mime.data(DRAG_MIME_TYPE).data()


def _list_item_node_id(item: Optional[QListWidgetItem]) -> Optional[int]:
    if item is None:
        return None
    data = item.data(Qt.ItemDataRole.UserRole)
    return data.get("node_id") if isinstance(data, dict) else None


def drag_pixmap(view: QAbstractItemView) -> Optional[QPixmap]:
    """Snapshot of the current row, used as the drag image."""
    rect = view.visualRect(view.currentIndex())
    if rect.isEmpty():
        return None
    return view.viewport().grab(rect)


def _start_payload_drag(view: QAbstractItemView, controller: DragController, node_id: int) -> None:
    """Run a QDrag for ``node_id`` unless the view is editing a name."""
    editing = view.state() == QAbstractItemView.State.EditingState
    payload = controller.begin_drag(node_id, editing=editing)
    if payload is None:
        return
    mime = QMimeData()
    mime.setData(DRAG_MIME_TYPE, QByteArray(encode_drag_payload(payload)))
    drag = QDrag(view)
    drag.setMimeData(mime)
    pixmap = drag_pixmap(view)
    if pixmap is not None:
        drag.setPixmap(pixmap)
        drag.setHotSpot(QPoint(pixmap.width() // 2, pixmap.height() // 2))
    result = drag.exec(Qt.DropAction.MoveAction)
    controller.end_drag(result == Qt.DropAction.MoveAction)


class MainCategoryList(QListWidget):
    """Horizontal strip of main categories; drag to reorder, click to open a pane."""

    def __init__(self, editor: "IndustryTreeEditorWidget") -> None:
        super().__init__(editor)
        self._editor = editor
        self.setFlow(QListWidget.Flow.LeftToRight)
        self.setWrapping(True)
        self.setSpacing(4)
        self.setDragEnabled(True)
        self.setAcceptDrops(True)
        self.setDropIndicatorShown(True)
        self.setDragDropMode(QAbstractItemView.DragDropMode.DragDrop)
        self.setEditTriggers(RENAME_TRIGGERS)
        self.setContextMenuPolicy(Qt.ContextMenuPolicy.CustomContextMenu)

    def root_ids(self) -> List[int]:
        return [_list_item_node_id(self.item(row)) for row in range(self.count())]

    def startDrag(self, supported_actions) -> None:
        node_id = _list_item_node_id(self.currentItem())
        if node_id is not None:
            _start_payload_drag(self, self._editor.drag_controller, node_id)

    def dragEnterEvent(self, event: "QDragEnterEvent") -> None:
        if self._editor.drag_controller.can_drop_on_root_track(_mime_bytes(event.mimeData())):
            event.acceptProposedAction()
        else:
            event.ignore()

    def dragMoveEvent(self, event: "QDragMoveEvent") -> None:
        self.dragEnterEvent(event)

    def dropEvent(self, event: "QDropEvent") -> None:
        raw = _mime_bytes(event.mimeData())
        if not self._editor.drag_controller.can_drop_on_root_track(raw):
            event.ignore()
            return
        event.setDropAction(Qt.DropAction.MoveAction)
        event.accept()
        index = self.drop_index(event.position().toPoint())
        QTimer.singleShot(0, lambda: self._editor.drag_controller.drop_on_root_track(raw, index))

    def drop_index(self, pos: QPoint) -> int:
        """Final position in the order for a drop at ``pos``."""
        dragged = self._editor.drag_controller.active_payload
        item = self.itemAt(pos)
        row = self.count() if item is None else self.row(item)
        if item is not None and pos.x() > self.visualItemRect(item).center().x():
            row += 1
        if dragged is not None:
            ids = self.root_ids()
            if dragged.node_id in ids and ids.index(dragged.node_id) < row:
                row -= 1
        return row


class PaneTree(QTreeWidget):
    """Subtree of one main category; nodes drag onto nodes or onto other panes."""

    def __init__(self, pane: "ComparisonPane", indentation: int) -> None:
        super().__init__(pane)
        self._pane = pane
        self.setHeaderHidden(True)
        self.setIndentation(indentation)
        self.setDragEnabled(True)
        self.setAcceptDrops(True)
        self.setDropIndicatorShown(True)
        self.setDragDropMode(QAbstractItemView.DragDropMode.DragDrop)
        self.setEditTriggers(RENAME_TRIGGERS)
        self.setContextMenuPolicy(Qt.ContextMenuPolicy.CustomContextMenu)

    def startDrag(self, supported_actions) -> None:
        node_id = item_node_id(self.currentItem())
        if node_id is not None:
            _start_payload_drag(self, self._pane.editor.drag_controller, node_id)

    def dragEnterEvent(self, event: "QDragEnterEvent") -> None:
        if event.mimeData().hasFormat(DRAG_MIME_TYPE):
            event.acceptProposedAction()
        else:
            event.ignore()

    def dragMoveEvent(self, event: "QDragMoveEvent") -> None:
        raw = _mime_bytes(event.mimeData())
        controller = self._pane.editor.drag_controller
        target_id = item_node_id(self.itemAt(event.position().toPoint()))
        if target_id is not None:
            allowed = controller.can_drop_on_node(raw, target_id)
        else:
            allowed = controller.can_drop_on_pane(raw, self._pane.root_id)
        if allowed:
            event.acceptProposedAction()
        else:
            event.ignore()

    def dropEvent(self, event: "QDropEvent") -> None:
        raw = _mime_bytes(event.mimeData())
        if raw is None:
            event.ignore()
            return
        event.setDropAction(Qt.DropAction.MoveAction)
        event.accept()
        target_id = item_node_id(self.itemAt(event.position().toPoint()))
        controller = self._pane.editor.drag_controller
        # Prompts must not open while the drag is still being delivered.
        if target_id is not None:
            QTimer.singleShot(0, lambda: controller.drop_on_node(raw, target_id))
        else:
            QTimer.singleShot(0, lambda: controller.drop_on_pane(raw, self._pane.root_id))


class ComparisonPane(QFrame):
    """One open main category: header, subtree and empty state."""

    def __init__(self, editor: "IndustryTreeEditorWidget", root_id: int) -> None:
        super().__init__(editor)
        self.editor = editor
        self.root_id = root_id
        self.setFrameShape(QFrame.Shape.StyledPanel)
        self.setAcceptDrops(True)
        self.setMinimumWidth(240)

        layout = QVBoxLayout(self)
        layout.setContentsMargins(4, 4, 4, 4)
        layout.setSpacing(4)

        header = QHBoxLayout()
        self.name_label = QLabel()
        self.name_label.setStyleSheet("font-weight: bold;")
        header.addWidget(self.name_label, 1)
        self.position_label = QLabel()
        self.position_label.setStyleSheet("color: #4a5568; font-size: 10px;")
        header.addWidget(self.position_label)
        self.add_button = QPushButton("+ Add")
        self.add_button.setToolTip("Add a subcategory")
        self.add_button.clicked.connect(lambda: self.editor.gateway.add_child(self.root_id))
        header.addWidget(self.add_button)
        self.expand_button = QPushButton("Expand All")
        self.expand_button.clicked.connect(self.toggle_expansion)
        header.addWidget(self.expand_button)
        self.close_button = QPushButton("✕")
        self.close_button.setToolTip("Close pane")
        self.close_button.setMaximumWidth(28)
        self.close_button.clicked.connect(lambda: self.editor.close_pane(self.root_id))
        header.addWidget(self.close_button)
        layout.addLayout(header)

        self.tree = PaneTree(self, editor.config.tree_indentation_px)
        self.tree.itemExpanded.connect(lambda item: self._on_expansion_changed(item, True))
        self.tree.itemCollapsed.connect(lambda item: self._on_expansion_changed(item, False))
        self.tree.itemChanged.connect(self._on_item_renamed)
        self.tree.customContextMenuRequested.connect(self._show_context_menu)
        layout.addWidget(self.tree, 1)

        self.empty_state = QWidget()
        empty_layout = QVBoxLayout(self.empty_state)
        empty_label = QLabel(EMPTY_TEXT)
        empty_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        empty_layout.addWidget(empty_label)
        self.add_first_button = QPushButton("+ Add First Subcategory")
        self.add_first_button.clicked.connect(lambda: self.editor.gateway.add_child(self.root_id))
        empty_layout.addWidget(self.add_first_button)
        layout.addWidget(self.empty_state, 1)

        self._sync_adapter = TreeSyncAdapter()
        self._rebuild_coordinator = TreeRebuildCoordinator()

    def refresh(self) -> None:
        session = self.editor.session
        root = session.forest.get(self.root_id)
        if root is None:
            return
        self.name_label.setText(root.name)
        self.name_label.setToolTip(MAIN_CATEGORY_LABEL)
        self.position_label.setText(f"Position #{session.panes.position_of(self.root_id)}")
        expanded = session.panes.expanded_ids(self.root_id)
        self.expand_button.setText("Collapse All" if expanded else "Expand All")
        self.expand_button.setEnabled(root.has_children)

        self._rebuild_coordinator.rebuild(
            self.tree,
            lambda: self._sync_adapter.sync_children(
                self.tree.invisibleRootItem(), root.children, 1
            ),
            expanded,
        )
        for row in range(self.tree.topLevelItemCount()):
            self._make_editable(self.tree.topLevelItem(row))
        self.tree.setVisible(root.has_children)
        self.empty_state.setVisible(not root.has_children)

    def toggle_expansion(self) -> None:
        panes = self.editor.session.panes
        if panes.expanded_ids(self.root_id):
            panes.collapse_all(self.root_id)
        else:
            panes.expand_all(self.root_id, self.editor.session.forest)
        self.editor.render_session()

    def _make_editable(self, item) -> None:
        was_blocked = self.tree.blockSignals(True)
        item.setFlags(item.flags() | Qt.ItemFlag.ItemIsEditable)
        self.tree.blockSignals(was_blocked)
        for idx in range(item.childCount()):
            self._make_editable(item.child(idx))

    def _on_expansion_changed(self, item, expanded: bool) -> None:
        node_id = item_node_id(item)
        if node_id is None:
            return
        logger.debug("Pane %s: node %s expanded=%s", self.root_id, node_id, expanded)
        self.editor.session.panes.set_expanded(self.root_id, node_id, expanded)
        self.expand_button.setText(
            "Collapse All" if self.editor.session.panes.expanded_ids(self.root_id) else "Expand All"
        )
        self.editor.refresh_global_buttons()

    def _on_item_renamed(self, item, column: int) -> None:
        node_id = item_node_id(item)
        if node_id is not None:
            name = item.text(0)
            # The view may rebuild this item; leave the itemChanged emission first.
            QTimer.singleShot(0, lambda: self.editor.rename_from_view(node_id, name))

    def _show_context_menu(self, pos: QPoint) -> None:
        item = self.tree.itemAt(pos)
        node_id = item_node_id(item)
        if node_id is None:
            return
        menu = QMenu(self)
        menu.addAction("Rename", lambda: self.tree.editItem(item, 0))
        menu.addAction("Add Child", lambda: self.editor.gateway.add_child(node_id))
        menu.addAction("Move to Root", lambda: self.editor.drag_controller.promote_to_root(node_id))
        menu.addSeparator()
        menu.addAction("Delete", lambda: self.editor.gateway.delete_subtree(node_id))
        menu.exec(self.tree.viewport().mapToGlobal(pos))

    def dragEnterEvent(self, event: "QDragEnterEvent") -> None:
        if self.editor.drag_controller.can_drop_on_pane(_mime_bytes(event.mimeData()), self.root_id):
            event.acceptProposedAction()
        else:
            event.ignore()

    def dragMoveEvent(self, event: "QDragMoveEvent") -> None:
        self.dragEnterEvent(event)

    def dropEvent(self, event: "QDropEvent") -> None:
        raw = _mime_bytes(event.mimeData())
        if raw is None:
            event.ignore()
            return
        event.setDropAction(Qt.DropAction.MoveAction)
        event.accept()
        QTimer.singleShot(0, lambda: self.editor.drag_controller.drop_on_pane(raw, self.root_id))


class IndustryTreeEditorWidget(QWidget, HierarchyHostABC, metaclass=_CombinedMeta):
    """Mountable industry hierarchy editor.

    Args:
        backend: Industry backend (REST or in-memory).
        prompts: Confirmation and text prompts; QMessageBox/QInputDialog by default.
        selected_industry_id: Optional id whose pane is opened and ancestors
            expanded after the first load.
        runner: Where backend calls execute; a worker thread by default.
        scheduler: Delayed-callback scheduler for scroll restore; QTimer by default.
        auto_load: Load the forest immediately.
    """

    def __init__(
        self,
        backend: IndustryBackendABC,
        prompts: Optional[PromptServiceABC] = None,
        selected_industry_id: Optional[int] = None,
        *,
        runner: Optional[OperationRunnerABC] = None,
        config: HierarchyEditorConfig = DEFAULT_EDITOR_CONFIG,
        scheduler: Optional[Scheduler] = None,
        status_strategy: Optional[StatusPresentationStrategyABC] = None,
        auto_load: bool = True,
        parent: Optional[QWidget] = None,
    ) -> None:
        super().__init__(parent)
        self.config = config
        self._selected_industry_id = selected_industry_id
        self._hint_applied = selected_industry_id is None
        self._status_strategy = status_strategy or DefaultStatusPresentationStrategy()

        viewport = ViewportContinuity(
            scheduler=scheduler if scheduler is not None else qt_timer_scheduler,
            window_delays_ms=config.window_restore_delays_ms,
            pane_delays_ms=config.pane_restore_delays_ms,
        )
        self.session = HierarchySession(viewport)
        self.prompts = prompts if prompts is not None else QtPromptService(self)
        self.gateway = MutationGateway(
            backend,
            self.session,
            self,
            self.prompts,
            runner=runner if runner is not None else QtThreadOperationRunner(self),
            config=config,
        )
        self.drag_controller = DragController(
            self.session, self.gateway, on_order_changed=self.render_session
        )
        self.panes: Dict[int, ComparisonPane] = {}
        self._loading = False

        self.setup_ui()
        if auto_load:
            self.reload()

    # ========== UI ==========

    def setup_ui(self) -> None:
        header_parts = create_editor_header(title="Industry Management")
        self.status_label = header_parts.status_label

        self.add_button = QPushButton("Add Industry")
        self.add_button.clicked.connect(lambda: self.gateway.add_root())
        header_parts.actions_layout.addWidget(self.add_button)
        self.expand_all_button = QPushButton("Expand All")
        self.expand_all_button.clicked.connect(self.toggle_global_expansion)
        header_parts.actions_layout.addWidget(self.expand_all_button)
        self.clear_all_button = QPushButton("Clear All")
        self.clear_all_button.clicked.connect(self.clear_panes)
        header_parts.actions_layout.addWidget(self.clear_all_button)

        strip = QWidget()
        strip_layout = QVBoxLayout(strip)
        strip_layout.setContentsMargins(0, 0, 0, 0)
        self.category_list = MainCategoryList(self)
        self.category_list.itemClicked.connect(self._on_category_clicked)
        self.category_list.itemChanged.connect(self._on_category_renamed)
        self.category_list.customContextMenuRequested.connect(self._show_category_menu)
        strip_layout.addWidget(self.category_list)

        self.empty_strip = QWidget()
        empty_layout = QVBoxLayout(self.empty_strip)
        empty_label = QLabel(NO_CATEGORIES_TEXT)
        empty_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        empty_layout.addWidget(empty_label)
        self.create_first_button = QPushButton("Create First Category")
        self.create_first_button.clicked.connect(lambda: self.gateway.add_root())
        empty_layout.addWidget(self.create_first_button, 0, Qt.AlignmentFlag.AlignHCenter)
        self.empty_strip.hide()
        strip_layout.addWidget(self.empty_strip)

        comparison = QWidget()
        comparison_section = QVBoxLayout(comparison)
        comparison_section.setContentsMargins(0, 0, 0, 0)
        self.comparison_title = QLabel()
        self.comparison_title.setStyleSheet("font-weight: bold; font-size: 14px;")
        self.comparison_title.setToolTip(
            "Drag items between panes to move, + to add children directly"
        )
        comparison_section.addWidget(self.comparison_title)
        self.comparison_scroll = QScrollArea()
        self.comparison_scroll.setWidgetResizable(True)
        self.comparison_container = QWidget()
        self.comparison_layout = QGridLayout(self.comparison_container)
        self.comparison_layout.setAlignment(Qt.AlignmentFlag.AlignTop)
        self.comparison_scroll.setWidget(self.comparison_container)
        self.session.viewport.set_window_surface(ScrollAreaSurface(self.comparison_scroll))
        comparison_section.addWidget(self.comparison_scroll, 1)

        setup_vertical_editor_layout(
            owner=self,
            header=header_parts.header,
            top_widget=strip,
            bottom_widget=comparison,
        )
        self._update_comparison_title()

    def reload(self) -> None:
        self._loading = True
        self._present_status(LOADING_TEXT, StatusTone.BUSY)
        self.gateway.reload()

    # ========== HOST CONTRACT ==========

    def render_session(self) -> None:
        if not self._hint_applied and self.session.loaded:
            self._hint_applied = True
            if not self.session.reveal(self._selected_industry_id):
                logger.warning("Selected industry %s not found", self._selected_industry_id)
        self._render_main_categories()
        self._render_panes()
        self._update_comparison_title()
        self.refresh_global_buttons()
        if self._loading:
            self._loading = False
            self._present_status(
                f"Loaded {len(self.session.forest)} industries", StatusTone.SUCCESS
            )

    def show_error(self, title: str, message: str) -> None:
        self._loading = False
        self._present_status(f"{title}: {message}", StatusTone.ERROR)
        QMessageBox.critical(self, title, message)

    def emit_status(self, message: str) -> None:
        tone = StatusTone.BUSY if message == BUSY_MESSAGE else StatusTone.SUCCESS
        self._present_status(message, tone)

    def set_busy(self, busy: bool) -> None:
        self.add_button.setEnabled(not busy)
        if busy:
            self._present_status("Saving changes...", StatusTone.BUSY)

    def _present_status(self, message: str, tone: StatusTone) -> None:
        result = self._status_strategy.present(StatusPresentationInput(message, tone))
        self.status_label.setText(result.text)
        if result.color_hex:
            self.status_label.setStyleSheet(f"color: {result.color_hex}; font-weight: bold;")

    # ========== RENDERING ==========

    def _render_main_categories(self) -> None:
        session = self.session
        was_blocked = self.category_list.blockSignals(True)
        try:
            self.category_list.clear()
            for root in session.ordered_roots():
                item = QListWidgetItem(root.name)
                item.setData(
                    Qt.ItemDataRole.UserRole,
                    {"type": "industry", "node_id": root.id, "level": 0},
                )
                item.setFlags(item.flags() | Qt.ItemFlag.ItemIsEditable)
                position = session.panes.position_of(root.id)
                if position is not None:
                    item.setBackground(QColor(OPEN_PANE_COLOR))
                    item.setToolTip(f"{MAIN_CATEGORY_LABEL} - Position #{position}")
                else:
                    item.setToolTip(MAIN_CATEGORY_LABEL)
                self.category_list.addItem(item)
        finally:
            self.category_list.blockSignals(was_blocked)
        has_roots = bool(session.forest.roots)
        self.category_list.setVisible(has_roots or not session.loaded)
        self.empty_strip.setVisible(session.loaded and not has_roots)

    def _render_panes(self) -> None:
        selected = self.session.panes.selected_roots
        for root_id in [root_id for root_id in self.panes if root_id not in selected]:
            pane = self.panes.pop(root_id)
            self.session.viewport.unregister_pane(root_id)
            self.comparison_layout.removeWidget(pane)
            pane.deleteLater()

        columns = max(1, self.config.max_pane_columns)
        for position, root_id in enumerate(selected):
            pane = self.panes.get(root_id)
            if pane is None:
                pane = ComparisonPane(self, root_id)
                self.panes[root_id] = pane
                self.session.viewport.register_pane(root_id, ScrollAreaSurface(pane.tree))
            else:
                self.comparison_layout.removeWidget(pane)
            self.comparison_layout.addWidget(pane, position // columns, position % columns)
            pane.refresh()

    def _update_comparison_title(self) -> None:
        count = len(self.session.panes.selected_roots)
        self.comparison_title.setText(f"Category Comparison ({count})")

    def refresh_global_buttons(self) -> None:
        any_expanded = self.session.panes.any_expanded()
        self.expand_all_button.setText("Collapse All" if any_expanded else "Expand All")
        has_panes = bool(self.session.panes.selected_roots)
        self.expand_all_button.setEnabled(has_panes)
        self.clear_all_button.setEnabled(has_panes)

    # ========== PANE ACTIONS ==========

    def toggle_pane(self, root_id: int) -> None:
        self.session.toggle_pane(root_id)
        self.render_session()

    def close_pane(self, root_id: int) -> None:
        self.session.close_pane(root_id)
        self.render_session()

    def clear_panes(self) -> None:
        self.session.clear_panes()
        self.render_session()

    def toggle_global_expansion(self) -> None:
        expanded = self.session.panes.toggle_global(self.session.forest)
        logger.debug("Global expansion toggled: expanded=%s", expanded)
        self.render_session()

    def rename_from_view(self, node_id: int, name: str) -> MutationOutcome:
        """Submit an inline rename; rejected or unchanged edits snap back."""
        outcome = self.gateway.rename(node_id, name)
        if outcome is not MutationOutcome.SUBMITTED:
            self.render_session()
        return outcome

    def _on_category_clicked(self, item: QListWidgetItem) -> None:
        node_id = _list_item_node_id(item)
        if node_id is not None:
            self.toggle_pane(node_id)

    def _on_category_renamed(self, item: QListWidgetItem) -> None:
        node_id = _list_item_node_id(item)
        if node_id is not None:
            name = item.text()
            QTimer.singleShot(0, lambda: self.rename_from_view(node_id, name))

    def _show_category_menu(self, pos: QPoint) -> None:
        item = self.category_list.itemAt(pos)
        node_id = _list_item_node_id(item)
        if node_id is None:
            return
        menu = QMenu(self)
        menu.addAction("Rename", lambda: self.category_list.editItem(item))
        menu.addAction("Add Child", lambda: self.gateway.add_child(node_id))
        menu.addSeparator()
        menu.addAction("Delete", lambda: self.gateway.delete_subtree(node_id))
        menu.exec(self.category_list.viewport().mapToGlobal(pos))

    def pane_root_ids(self) -> List[int]:
        return list(self.panes)

    def find_pane(self, root_id: int) -> Optional[ComparisonPane]:
        return self.panes.get(root_id)


def create_editor_window(
    backend: IndustryBackendABC,
    *,
    selected_industry_id: Optional[int] = None,
    config: HierarchyEditorConfig = DEFAULT_EDITOR_CONFIG,
) -> IndustryTreeEditorWidget:
    """Create a top-level editor window."""
    editor = IndustryTreeEditorWidget(
        backend, selected_industry_id=selected_industry_id, config=config
    )
    editor.setWindowTitle("Industry Management")
    editor.resize(1100, 720)
    return editor
