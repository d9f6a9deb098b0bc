"""Drag-and-drop gesture handling for main categories and pane trees.

The controller is toolkit-agnostic: widgets hand it the raw MIME bytes and the
drop target, and it decides whether the drop is legal and which gateway call
(or client-side reorder) it turns into.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Optional, Union

from pyqt_industry.hierarchy.path_queries import is_descendant, level_of
from pyqt_industry.services.hierarchy_session import HierarchySession
from pyqt_industry.services.mutation_gateway import MutationGateway, MutationOutcome

logger = logging.getLogger(__name__)

DRAG_MIME_TYPE = "application/x-industry-node"

RawPayload = Union[bytes, bytearray, memoryview, str, None]


class DragKind(Enum):
    """What is being dragged: a main category or a node inside a pane."""
    ROOT = "root"
    DESCENDANT = "descendant"


class DragState(Enum):
    IDLE = "idle"
    DRAGGING = "dragging"
    DROPPED = "dropped"
    CANCELLED = "cancelled"


@dataclass(frozen=True)
class DragPayload:
    node_id: int
    kind: DragKind
    source_level: int


def encode_drag_payload(payload: DragPayload) -> bytes:
    return json.dumps(
        {"id": payload.node_id, "kind": payload.kind.value, "level": payload.source_level}
    ).encode("utf-8")


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def decode_drag_payload(raw: RawPayload) -> Optional[DragPayload]:
    """Parse MIME bytes into a payload; anything malformed yields None."""
    if raw is None:
        return None
    try:
        text = raw if isinstance(raw, str) else bytes(raw).decode("utf-8")
        data = json.loads(text)
    except (TypeError, ValueError):
        return None
    if not isinstance(data, dict):
        return None
    node_id = data.get("id")
    level = data.get("level")
    if not _is_int(node_id) or not _is_int(level) or level < 0:
        return None
    try:
        kind = DragKind(data.get("kind"))
    except ValueError:
        return None
    return DragPayload(node_id=node_id, kind=kind, source_level=level)


class DragController:
    """Turns drag gestures into reparent, promote or reorder requests.

    Hover checks (``can_drop_*``) are silent. Drops re-validate: malformed
    payloads and self-drops are ignored, while structural violations reach
    the gateway, which reports them to the host.
    """

    def __init__(
        self,
        session: HierarchySession,
        gateway: MutationGateway,
        *,
        on_order_changed: Optional[Callable[[], None]] = None,
    ) -> None:
        self._session = session
        self._gateway = gateway
        self._on_order_changed = on_order_changed
        self._state = DragState.IDLE
        self._active: Optional[DragPayload] = None

    @property
    def state(self) -> DragState:
        return self._state

    @property
    def active_payload(self) -> Optional[DragPayload]:
        return self._active

    # ========== DRAG SOURCE ==========

    def begin_drag(self, node_id: int, editing: bool = False) -> Optional[DragPayload]:
        """Start dragging ``node_id``. Refused while a name is being edited."""
        if editing:
            logger.debug("Drag of %s refused while editing", node_id)
            return None
        forest = self._session.forest
        if node_id not in forest:
            return None
        kind = DragKind.ROOT if forest.is_root(node_id) else DragKind.DESCENDANT
        payload = DragPayload(node_id, kind, level_of(forest.roots, node_id))
        self._active = payload
        self._state = DragState.DRAGGING
        logger.debug("Drag started: %s", payload)
        return payload

    def end_drag(self, accepted: bool) -> None:
        self._state = DragState.DROPPED if accepted else DragState.CANCELLED
        logger.debug("Drag %s", self._state.value)
        self._active = None
        self._state = DragState.IDLE

    # ========== NODE TARGETS ==========

    def can_drop_on_node(self, raw: RawPayload, target_id: int) -> bool:
        payload = decode_drag_payload(raw)
        if payload is None or payload.kind is not DragKind.DESCENDANT:
            return False
        if payload.node_id == target_id:
            return False
        forest = self._session.forest
        dragged = forest.get(payload.node_id)
        if dragged is None or target_id not in forest:
            return False
        return not is_descendant(dragged, target_id)

    def drop_on_node(self, raw: RawPayload, target_id: int) -> Optional[MutationOutcome]:
        payload = decode_drag_payload(raw)
        if payload is None or payload.kind is not DragKind.DESCENDANT:
            return None
        if payload.node_id == target_id:
            return None
        self._mark_dropped()
        logger.debug("Drop of %s onto node %s", payload.node_id, target_id)
        return self._gateway.reparent(payload.node_id, target_id)

    # ========== PANE TARGETS ==========

    def can_drop_on_pane(self, raw: RawPayload, pane_root_id: int) -> bool:
        payload = decode_drag_payload(raw)
        if payload is None or payload.kind is not DragKind.DESCENDANT:
            return False
        return (
            self._session.forest.is_root(pane_root_id)
            and payload.node_id in self._session.forest
            and payload.node_id != pane_root_id
        )

    def drop_on_pane(self, raw: RawPayload, pane_root_id: int) -> Optional[MutationOutcome]:
        if not self.can_drop_on_pane(raw, pane_root_id):
            return None
        payload = decode_drag_payload(raw)
        self._mark_dropped()
        logger.debug("Drop of %s onto pane %s", payload.node_id, pane_root_id)
        return self._gateway.reparent(payload.node_id, pane_root_id)

    # ========== MAIN CATEGORY TRACK ==========

    def can_drop_on_root_track(self, raw: RawPayload) -> bool:
        payload = decode_drag_payload(raw)
        return (
            payload is not None
            and payload.kind is DragKind.ROOT
            and self._session.forest.is_root(payload.node_id)
        )

    def drop_on_root_track(self, raw: RawPayload, index: int) -> bool:
        """Reorder main categories client-side. Returns True when the order changed."""
        if not self.can_drop_on_root_track(raw):
            return False
        payload = decode_drag_payload(raw)
        self._mark_dropped()
        moved = self._session.order.move(payload.node_id, index)
        if moved:
            logger.debug("Main category %s moved to index %s", payload.node_id, index)
            if self._on_order_changed is not None:
                self._on_order_changed()
        return moved

    def promote_to_root(self, node_id: int) -> MutationOutcome:
        return self._gateway.promote_to_root(node_id)

    def _mark_dropped(self) -> None:
        if self._state is DragState.DRAGGING:
            self._state = DragState.DROPPED
