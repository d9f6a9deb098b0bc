"""Translate user intents into backend writes followed by a full reload.

Every write goes through the same cycle: client-side validation, optional
confirmation, viewport capture, backend call, then an unconditional relist and
rebuild of the forest. Failures are reported through the host and leave the
previous forest in place. A single in-flight flag serializes writes.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Callable, Optional

from pyqt_industry.config import DEFAULT_EDITOR_CONFIG, HierarchyEditorConfig
from pyqt_industry.errors import (
    CycleError,
    HierarchyError,
    NameValidationError,
    NodeNotFoundError,
    SelfParentError,
)
from pyqt_industry.hierarchy.forest import build_forest
from pyqt_industry.hierarchy.path_queries import (
    category_label_for_level,
    level_of,
    would_create_cycle,
)
from pyqt_industry.protocols.industry_protocol import (
    ConfirmSeverity,
    IndustryBackendABC,
    PromptServiceABC,
)
from pyqt_industry.services.hierarchy_host_abc import HierarchyHostABC
from pyqt_industry.services.hierarchy_session import HierarchySession
from pyqt_industry.services.operation_runner import (
    ImmediateOperationRunner,
    OperationResult,
    OperationRunnerABC,
)

logger = logging.getLogger(__name__)

ROOT_CATEGORY = "main"
BUSY_MESSAGE = "Operation already in progress, please wait..."


class MutationOutcome(Enum):
    """Result of the synchronous phase of a mutation request."""
    SUBMITTED = "submitted"
    CANCELLED = "cancelled"
    REJECTED = "rejected"
    BUSY = "busy"
    NOOP = "noop"


def describe_error(error: BaseException) -> str:
    text = str(error)
    return text if text else "Unknown error"


class MutationGateway:
    """Owns the write-then-reload cycle for one hierarchy session."""

    def __init__(
        self,
        backend: IndustryBackendABC,
        session: HierarchySession,
        host: HierarchyHostABC,
        prompts: PromptServiceABC,
        *,
        runner: Optional[OperationRunnerABC] = None,
        config: HierarchyEditorConfig = DEFAULT_EDITOR_CONFIG,
    ) -> None:
        self._backend = backend
        self._session = session
        self._host = host
        self._prompts = prompts
        self._runner = runner if runner is not None else ImmediateOperationRunner()
        self._config = config
        self._in_flight = False

    @property
    def session(self) -> HierarchySession:
        return self._session

    @property
    def in_flight(self) -> bool:
        return self._in_flight

    # ========== RELOAD ==========

    def reload(self) -> None:
        """Relist every industry and rebuild the forest."""
        self._start_reload(finish=False)

    def _start_reload(self, *, finish: bool) -> None:
        self._runner.submit(
            self._backend.list_industries,
            lambda result: self._on_reloaded(result, finish=finish),
            name="list_industries",
        )

    def _on_reloaded(self, result: OperationResult, *, finish: bool) -> None:
        try:
            if not result.ok:
                logger.error("Failed to load industries: %s", result.error)
                self._session.viewport.discard()
                self._host.show_error(
                    "Load Failed",
                    f"Failed to load industries: {describe_error(result.error)}\n"
                    "Please refresh and try again.",
                )
                return
            forest = build_forest(result.value)
            closed = self._session.apply_forest(forest)
            logger.debug(
                "Reloaded %d industries in %d main categories (closed panes: %s)",
                len(forest), len(forest.roots), closed,
            )
            self._host.render_session()
            self._session.viewport.restore()
        finally:
            if finish:
                self._finish()

    # ========== VALIDATION ==========

    @staticmethod
    def validate_name(name: Optional[str], min_length: int) -> str:
        """Return the trimmed name or raise NameValidationError."""
        trimmed = (name or "").strip()
        if not trimmed:
            raise NameValidationError("Industry name cannot be empty")
        if len(trimmed) < min_length:
            raise NameValidationError(
                f"Industry name must be at least {min_length} characters long"
            )
        return trimmed

    def validate_reparent(self, child_id: int, new_parent_id: Optional[int]) -> None:
        """Raise a HierarchyError when the move would break the forest."""
        forest = self._session.forest
        if child_id == new_parent_id:
            raise SelfParentError(child_id)
        if child_id not in forest:
            raise NodeNotFoundError(child_id)
        if new_parent_id is not None and new_parent_id not in forest:
            raise NodeNotFoundError(new_parent_id)
        if would_create_cycle(forest.roots, child_id, new_parent_id):
            raise CycleError(child_id, new_parent_id)

    def can_reparent(self, child_id: int, new_parent_id: Optional[int]) -> bool:
        try:
            self.validate_reparent(child_id, new_parent_id)
        except HierarchyError:
            return False
        return True

    # ========== OPERATIONS ==========

    def add_root(self, name: Optional[str] = None) -> MutationOutcome:
        if self._reject_if_busy():
            return MutationOutcome.BUSY
        if name is None:
            name = self._prompts.ask_text("Add New Industry", "Enter industry name...")
            if name is None:
                return MutationOutcome.CANCELLED
        try:
            clean = self.validate_name(name, 1)
        except NameValidationError as exc:
            self._host.show_error("Invalid Name", exc.message)
            return MutationOutcome.REJECTED
        return self._submit(
            "add_root",
            lambda: self._backend.create_industry(clean, ROOT_CATEGORY, None),
            "Failed to add industry",
        )

    def add_child(self, parent_id: int, name: Optional[str] = None) -> MutationOutcome:
        if self._reject_if_busy():
            return MutationOutcome.BUSY
        forest = self._session.forest
        if parent_id not in forest:
            self._host.show_error("Add Child Failed", str(NodeNotFoundError(parent_id)))
            return MutationOutcome.REJECTED
        category = category_label_for_level(level_of(forest.roots, parent_id) + 1)
        if name is None:
            name = self._prompts.ask_text("Add Child Industry", "Enter child industry name...")
            if name is None:
                return MutationOutcome.CANCELLED
        try:
            clean = self.validate_name(name, self._config.min_child_name_length)
        except NameValidationError as exc:
            self._host.show_error("Invalid Name", exc.message)
            return MutationOutcome.REJECTED
        return self._submit(
            "add_child",
            lambda: self._backend.create_industry(clean, category, parent_id),
            "Failed to add child industry",
        )

    def rename(self, node_id: int, name: str) -> MutationOutcome:
        if self._reject_if_busy():
            return MutationOutcome.BUSY
        try:
            clean = self.validate_name(name, self._config.min_rename_length)
        except NameValidationError as exc:
            self._host.show_error("Invalid Name", exc.message)
            return MutationOutcome.REJECTED
        node = self._session.forest.get(node_id)
        if node is None:
            self._host.show_error("Rename Failed", str(NodeNotFoundError(node_id)))
            return MutationOutcome.REJECTED
        if clean == node.name:
            return MutationOutcome.NOOP
        logger.info("Renaming industry %s to %r", node_id, clean)
        return self._submit(
            "rename",
            lambda: self._backend.rename_industry(node_id, clean),
            "Failed to rename industry",
        )

    def delete_subtree(self, node_id: int) -> MutationOutcome:
        if self._reject_if_busy():
            return MutationOutcome.BUSY
        forest = self._session.forest
        if node_id not in forest:
            self._host.show_error("Delete Failed", str(NodeNotFoundError(node_id)))
            return MutationOutcome.REJECTED
        if forest.is_root(node_id):
            title = "Delete Main Category"
            message = (
                "Are you sure you want to delete this main category and all its "
                "subcategories? This action cannot be undone."
            )
        else:
            title = "Delete Industry"
            message = (
                "Are you sure you want to delete this industry and all its "
                "children? This action cannot be undone."
            )
        if not self._prompts.confirm(title, message, ConfirmSeverity.DANGER):
            return MutationOutcome.CANCELLED

        self._session.prune_subtree(node_id)
        return self._submit(
            "delete_subtree",
            lambda: self._backend.delete_industry(node_id),
            "Failed to delete industry",
        )

    def reparent(
        self,
        child_id: int,
        new_parent_id: Optional[int],
        *,
        confirm_cross_category: bool = True,
    ) -> MutationOutcome:
        if self._reject_if_busy():
            return MutationOutcome.BUSY
        try:
            self.validate_reparent(child_id, new_parent_id)
        except HierarchyError as exc:
            logger.info("Rejected move of %s under %s: %s", child_id, new_parent_id, exc)
            self._host.show_error("Invalid Move", exc.message)
            return MutationOutcome.REJECTED

        if self._session.forest.parent_of(child_id) == new_parent_id:
            return MutationOutcome.NOOP

        if new_parent_id is not None and confirm_cross_category:
            source_root = self._session.root_of(child_id)
            target_root = self._session.root_of(new_parent_id)
            if source_root != target_root and not self._prompts.confirm(
                "Move Between Categories",
                "Are you sure you want to move this item to another main category?",
                ConfirmSeverity.INFO,
            ):
                return MutationOutcome.CANCELLED

        return self._submit(
            "reparent",
            lambda: self._backend.reparent_industry(child_id, new_parent_id),
            "Failed to move industry",
        )

    def promote_to_root(self, node_id: int) -> MutationOutcome:
        if self._reject_if_busy():
            return MutationOutcome.BUSY
        forest = self._session.forest
        if node_id not in forest:
            self._host.show_error("Invalid Move", str(NodeNotFoundError(node_id)))
            return MutationOutcome.REJECTED
        if forest.is_root(node_id):
            return MutationOutcome.NOOP
        if not self._prompts.confirm(
            "Move to Root Level",
            "Are you sure you want to move this industry to the root level as a main category?",
            ConfirmSeverity.WARNING,
        ):
            return MutationOutcome.CANCELLED
        return self._submit(
            "promote_to_root",
            lambda: self._backend.reparent_industry(node_id, None),
            "Failed to move industry to root",
        )

    # ========== SUBMISSION ==========

    def _reject_if_busy(self) -> bool:
        if not self._in_flight:
            return False
        logger.info(BUSY_MESSAGE)
        self._host.emit_status(BUSY_MESSAGE)
        return True

    def _submit(
        self,
        operation: str,
        call: Callable[[], object],
        failure_message: str,
    ) -> MutationOutcome:
        if self._reject_if_busy():
            return MutationOutcome.BUSY
        self._in_flight = True
        self._host.set_busy(True)
        self._session.viewport.capture()
        self._runner.submit(
            call,
            lambda result: self._on_mutation_done(operation, failure_message, result),
            name=operation,
        )
        return MutationOutcome.SUBMITTED

    def _on_mutation_done(
        self,
        operation: str,
        failure_message: str,
        result: OperationResult,
    ) -> None:
        if result.ok:
            logger.info("%s succeeded, reloading industries", operation)
            self._host.emit_status(f"{operation.replace('_', ' ').capitalize()} complete")
            self._start_reload(finish=True)
            return
        try:
            logger.error("%s failed: %s", operation, result.error)
            self._session.viewport.discard()
            # Drop unsaved edits still shown by the views.
            self._host.render_session()
            self._host.show_error(
                "Operation Failed", f"{failure_message}: {describe_error(result.error)}"
            )
        finally:
            self._finish()

    def _finish(self) -> None:
        self._in_flight = False
        self._host.set_busy(False)
