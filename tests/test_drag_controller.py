"""Tests for drag payloads and drop routing."""

import pytest

from pyqt_industry.services import (
    DragKind,
    DragPayload,
    DragState,
    MutationOutcome,
    decode_drag_payload,
    encode_drag_payload,
)


def _raw(node_id, kind="descendant", level=1):
    return encode_drag_payload(DragPayload(node_id, DragKind(kind), level))


def test_payload_wire_format():
    raw = encode_drag_payload(DragPayload(3, DragKind.DESCENDANT, 1))

    assert raw == b'{"id": 3, "kind": "descendant", "level": 1}'
    assert decode_drag_payload(raw) == DragPayload(3, DragKind.DESCENDANT, 1)


@pytest.mark.parametrize(
    "raw",
    [
        None,
        b"",
        b"not json",
        b"\xff\xfe",
        b"[1, 2]",
        b'{"kind": "root", "level": 0}',
        b'{"id": "3", "kind": "root", "level": 0}',
        b'{"id": true, "kind": "root", "level": 0}',
        b'{"id": 3, "kind": "sideways", "level": 0}',
        b'{"id": 3, "kind": "descendant", "level": -1}',
        b'{"id": 3, "kind": "descendant"}',
    ],
)
def test_malformed_payloads_decode_to_none(raw):
    assert decode_drag_payload(raw) is None


def test_decode_accepts_text_and_bytearray():
    assert decode_drag_payload('{"id": 9, "kind": "root", "level": 0}').kind is DragKind.ROOT
    assert decode_drag_payload(bytearray(_raw(7, level=2))).source_level == 2


def test_begin_drag_builds_payload_from_forest(controller):
    root_payload = controller.begin_drag(1)
    assert root_payload == DragPayload(1, DragKind.ROOT, 0)
    assert controller.state is DragState.DRAGGING

    controller.end_drag(False)
    assert controller.state is DragState.IDLE
    assert controller.active_payload is None

    assert controller.begin_drag(7) == DragPayload(7, DragKind.DESCENDANT, 2)


def test_begin_drag_refused_while_editing(controller):
    assert controller.begin_drag(3, editing=True) is None
    assert controller.state is DragState.IDLE


def test_begin_drag_unknown_id(controller):
    assert controller.begin_drag(404) is None


def test_hover_rejects_self_descendants_and_roots(controller):
    assert controller.can_drop_on_node(_raw(3), 10)
    assert controller.can_drop_on_node(_raw(7), 2)
    assert not controller.can_drop_on_node(_raw(3), 3)
    assert not controller.can_drop_on_node(_raw(3), 7)
    assert not controller.can_drop_on_node(_raw(1, "root", 0), 10)
    assert not controller.can_drop_on_node(b"garbage", 10)
    assert not controller.can_drop_on_node(_raw(3), 404)


def test_drop_on_node_reparents(controller, backend, session):
    assert controller.drop_on_node(_raw(7, level=2), 2) is MutationOutcome.SUBMITTED

    assert backend.write_calls() == [("reparent", 7, 2)]
    assert [child.id for child in session.forest.get(2).children] == [7]


def test_drop_self_or_malformed_is_silent(controller, backend, host):
    assert controller.drop_on_node(_raw(3), 3) is None
    assert controller.drop_on_node(b"{broken", 3) is None
    assert backend.write_calls() == []
    assert host.errors == []


def test_structural_violation_on_drop_is_reported(controller, backend, host):
    assert controller.drop_on_node(_raw(3), 7) is MutationOutcome.REJECTED

    assert backend.write_calls() == []
    assert host.errors[-1][0] == "Invalid Move"


def test_cross_pane_move_scenario(controller, backend, prompts, session):
    """Dragging 3 onto pane 9 reparents it there, leaving 1's subtree."""
    session.toggle_pane(1)
    session.toggle_pane(9)
    raw = _raw(3)

    assert controller.can_drop_on_pane(raw, 9)
    assert controller.drop_on_pane(raw, 9) is MutationOutcome.SUBMITTED

    assert prompts.confirms[-1][0] == "Move Between Categories"
    assert backend.write_calls() == [("reparent", 3, 9)]
    assert 3 in [child.id for child in session.forest.get(9).children]
    assert 3 not in [child.id for child in session.forest.get(1).children]
    assert session.panes.selected_roots == [1, 9]


def test_pane_drop_rejects_root_payloads(controller, backend):
    raw = _raw(1, "root", 0)

    assert not controller.can_drop_on_pane(raw, 9)
    assert controller.drop_on_pane(raw, 9) is None
    assert backend.write_calls() == []


def test_pane_drop_requires_root_target(controller):
    assert not controller.can_drop_on_pane(_raw(7, level=2), 3)


def test_root_track_reorders_without_backend(controller, backend, session):
    changes = []
    controller._on_order_changed = lambda: changes.append(session.order.ids)
    raw = _raw(9, "root", 0)

    assert controller.can_drop_on_root_track(raw)
    assert controller.drop_on_root_track(raw, 0)

    assert session.order.ids == [9, 1]
    assert changes == [[9, 1]]
    assert backend.write_calls() == []


def test_root_track_rejects_descendants(controller, session):
    raw = _raw(3)

    assert not controller.can_drop_on_root_track(raw)
    assert not controller.drop_on_root_track(raw, 0)
    assert session.order.ids == [1, 9]


def test_root_track_same_position_is_not_a_change(controller):
    assert not controller.drop_on_root_track(_raw(1, "root", 0), 0)


def test_drop_marks_active_drag(controller):
    controller.begin_drag(7)

    controller.drop_on_node(_raw(7, level=2), 2)

    assert controller.state is DragState.DROPPED
    controller.end_drag(True)
    assert controller.state is DragState.IDLE


def test_promote_delegates_to_gateway(controller, backend, prompts):
    assert controller.promote_to_root(3) is MutationOutcome.SUBMITTED
    assert prompts.confirms[-1][0] == "Move to Root Level"
    assert backend.write_calls() == [("reparent", 3, None)]
