"""Shared fixtures: in-memory backend, recording collaborators, immediate runner."""

import os

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from typing import Dict, List, Optional

import pytest

from pyqt_industry.errors import BackendError, NodeNotFoundError
from pyqt_industry.hierarchy import build_forest
from pyqt_industry.protocols import (
    ConfirmSeverity,
    IndustryBackendABC,
    IndustryRecord,
    PromptServiceABC,
)
from pyqt_industry.services import (
    DragController,
    HierarchyHostABC,
    HierarchySession,
    ImmediateOperationRunner,
    MutationGateway,
    ViewportContinuity,
)


class FakeBackend(IndustryBackendABC):
    """In-memory backend with a call log and one-shot failure injection."""

    def __init__(self, records: List[IndustryRecord]) -> None:
        self.records: Dict[int, IndustryRecord] = {record.id: record for record in records}
        self.calls: List[tuple] = []
        self.failures: Dict[str, Exception] = {}
        self._next_id = max(self.records, default=0) + 1

    def fail_next(self, operation: str, error: Optional[Exception] = None) -> None:
        self.failures[operation] = error or BackendError(
            "Request failed", status_code=500, detail="boom"
        )

    def _maybe_fail(self, operation: str) -> None:
        error = self.failures.pop(operation, None)
        if error is not None:
            raise error

    def write_calls(self) -> List[tuple]:
        return [call for call in self.calls if call[0] != "list"]

    def list_industries(self) -> List[IndustryRecord]:
        self.calls.append(("list",))
        self._maybe_fail("list")
        return list(self.records.values())

    def create_industry(self, name, category, parent_id):
        self.calls.append(("create", name, category, parent_id))
        self._maybe_fail("create")
        record = IndustryRecord(self._next_id, name, category, parent_id)
        self._next_id += 1
        self.records[record.id] = record
        return record

    def rename_industry(self, node_id, name):
        self.calls.append(("rename", node_id, name))
        self._maybe_fail("rename")
        if node_id not in self.records:
            raise NodeNotFoundError(node_id)
        old = self.records[node_id]
        self.records[node_id] = IndustryRecord(old.id, name, old.category, old.parent_id)
        return self.records[node_id]

    def delete_industry(self, node_id):
        self.calls.append(("delete", node_id))
        self._maybe_fail("delete")
        doomed = {node_id}
        changed = True
        while changed:
            changed = False
            for record in self.records.values():
                if record.parent_id in doomed and record.id not in doomed:
                    doomed.add(record.id)
                    changed = True
        for record_id in doomed:
            self.records.pop(record_id, None)

    def reparent_industry(self, node_id, new_parent_id):
        self.calls.append(("reparent", node_id, new_parent_id))
        self._maybe_fail("reparent")
        old = self.records[node_id]
        self.records[node_id] = IndustryRecord(old.id, old.name, old.category, new_parent_id)


class RecordingPrompts(PromptServiceABC):
    def __init__(self) -> None:
        self.confirm_answer = True
        self.text_answers: List[Optional[str]] = []
        self.confirms: List[tuple] = []
        self.questions: List[tuple] = []

    def confirm(self, title, message, severity: ConfirmSeverity) -> bool:
        self.confirms.append((title, message, severity))
        return self.confirm_answer

    def ask_text(self, title, placeholder):
        self.questions.append((title, placeholder))
        return self.text_answers.pop(0) if self.text_answers else None


class RecordingHost(HierarchyHostABC):
    def __init__(self) -> None:
        self.renders = 0
        self.errors: List[tuple] = []
        self.statuses: List[str] = []
        self.busy: List[bool] = []

    def render_session(self) -> None:
        self.renders += 1

    def show_error(self, title, message) -> None:
        self.errors.append((title, message))

    def emit_status(self, message) -> None:
        self.statuses.append(message)

    def set_busy(self, busy) -> None:
        self.busy.append(busy)


class DeferredRunner(ImmediateOperationRunner):
    """Holds submitted work until ``run_pending`` is called."""

    def __init__(self) -> None:
        self.pending: List[tuple] = []

    def submit(self, work, on_done, *, name="operation"):
        self.pending.append((work, on_done, name))

    def run_pending(self) -> None:
        while self.pending:
            work, on_done, name = self.pending.pop(0)
            super().submit(work, on_done, name=name)


def make_records(pairs):
    """``[(id, parent_id), ...]`` to records named ``Industry <id>``."""
    return [IndustryRecord(node_id, f"Industry {node_id}", "", parent_id) for node_id, parent_id in pairs]


SCENARIO_PAIRS = [(1, None), (2, 1), (3, 1), (7, 3), (9, None), (10, 9)]


@pytest.fixture
def records():
    return make_records(SCENARIO_PAIRS)


@pytest.fixture
def backend(records):
    return FakeBackend(records)


@pytest.fixture
def prompts():
    return RecordingPrompts()


@pytest.fixture
def host():
    return RecordingHost()


@pytest.fixture
def session():
    return HierarchySession(ViewportContinuity())


@pytest.fixture
def gateway(backend, session, host, prompts):
    gateway = MutationGateway(backend, session, host, prompts, runner=ImmediateOperationRunner())
    gateway.reload()
    return gateway


@pytest.fixture
def controller(session, gateway):
    return DragController(session, gateway)


@pytest.fixture
def forest(records):
    return build_forest(records)
