"""Qt implementations of the dialog and scroll collaborators."""

from __future__ import annotations

from typing import Callable, Optional

from PyQt6.QtCore import QTimer
from PyQt6.QtWidgets import (
    QAbstractScrollArea,
    QInputDialog,
    QLineEdit,
    QMessageBox,
    QWidget,
)

from pyqt_industry.protocols.industry_protocol import ConfirmSeverity, PromptServiceABC
from pyqt_industry.services.viewport_continuity import ScrollSurfaceABC


class QtPromptService(PromptServiceABC):
    """QMessageBox / QInputDialog backed prompts."""

    _ICONS = {
        ConfirmSeverity.DANGER: QMessageBox.Icon.Critical,
        ConfirmSeverity.WARNING: QMessageBox.Icon.Warning,
        ConfirmSeverity.INFO: QMessageBox.Icon.Question,
    }

    def __init__(self, parent: QWidget | None = None) -> None:
        self._parent = parent

    def confirm(self, title: str, message: str, severity: ConfirmSeverity) -> bool:
        box = QMessageBox(self._parent)
        box.setIcon(self._ICONS[severity])
        box.setWindowTitle(title)
        box.setText(message)
        box.setStandardButtons(
            QMessageBox.StandardButton.Yes | QMessageBox.StandardButton.No
        )
        box.setDefaultButton(QMessageBox.StandardButton.No)
        return box.exec() == QMessageBox.StandardButton.Yes

    def ask_text(self, title: str, placeholder: str) -> Optional[str]:
        text, ok = QInputDialog.getText(
            self._parent, title, placeholder, QLineEdit.EchoMode.Normal, ""
        )
        return text if ok else None


class ScrollAreaSurface(ScrollSurfaceABC):
    """Vertical scroll bar of a QAbstractScrollArea (QScrollArea, QTreeWidget)."""

    def __init__(self, area: QAbstractScrollArea) -> None:
        self._area = area

    def scroll_offset(self) -> int:
        return self._area.verticalScrollBar().value()

    def set_scroll_offset(self, offset: int) -> None:
        bar = self._area.verticalScrollBar()
        bar.setValue(max(bar.minimum(), min(offset, bar.maximum())))


def qt_timer_scheduler(delay_ms: int, callback: Callable[[], None]) -> None:
    """Scheduler for ViewportContinuity backed by the Qt event loop."""
    QTimer.singleShot(delay_ms, callback)
