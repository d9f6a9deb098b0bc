"""Operation runner that executes backend work off the Qt UI thread."""

from __future__ import annotations

import logging
import threading
from abc import ABCMeta
from typing import Callable

from PyQt6.QtCore import QObject, pyqtSignal, pyqtSlot

from pyqt_industry.services.operation_runner import (
    OperationResult,
    OperationRunnerABC,
    TResult,
    run_captured,
)

logger = logging.getLogger(__name__)


class _CombinedMeta(ABCMeta, type(QObject)):
    """Combined metaclass for ABC + PyQt6 QObject."""


class QtThreadOperationRunner(QObject, OperationRunnerABC, metaclass=_CombinedMeta):
    """Runs each operation on a daemon thread and reports back via a queued signal.

    The runner must be created on the UI thread; ``on_done`` callbacks are
    invoked there.
    """

    _operation_finished = pyqtSignal(object, object)

    def __init__(self, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self._operation_finished.connect(self._deliver)

    def submit(
        self,
        work: Callable[[], TResult],
        on_done: Callable[[OperationResult[TResult]], None],
        *,
        name: str = "operation",
    ) -> None:
        logger.debug("Starting background operation %s", name)
        threading.Thread(
            target=self._run,
            args=(work, on_done, name),
            name=f"industry-{name}",
            daemon=True,
        ).start()

    def _run(self, work, on_done, name: str) -> None:
        result = run_captured(work)
        if not result.ok:
            logger.debug("Background operation %s failed: %s", name, result.error)
        self._operation_finished.emit(on_done, result)

    @pyqtSlot(object, object)
    def _deliver(self, on_done, result) -> None:
        on_done(result)
