"""Build the industry forest from the flat backend record list."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, Iterable, List, Mapping, Optional, Tuple

from pyqt_industry.protocols.industry_protocol import IndustryRecord

logger = logging.getLogger(__name__)


@dataclass
class IndustryTreeNode:
    """In-memory tree node owning its ordered children."""

    record: IndustryRecord
    children: List["IndustryTreeNode"] = field(default_factory=list)

    @property
    def id(self) -> int:
        return self.record.id

    @property
    def name(self) -> str:
        return self.record.name

    @property
    def parent_id(self) -> Optional[int]:
        return self.record.parent_id

    @property
    def has_children(self) -> bool:
        return bool(self.children)


def _empty_index() -> Mapping[int, IndustryTreeNode]:
    return MappingProxyType({})


@dataclass(frozen=True)
class Forest:
    """Roots in source order plus an id index over every node.

    A forest is rebuilt from scratch on every load and never patched.
    """

    roots: Tuple[IndustryTreeNode, ...] = ()
    index: Mapping[int, IndustryTreeNode] = field(default_factory=_empty_index, compare=False)

    def __len__(self) -> int:
        return len(self.index)

    def __contains__(self, node_id: object) -> bool:
        return node_id in self.index

    def get(self, node_id: int) -> Optional[IndustryTreeNode]:
        return self.index.get(node_id)

    @property
    def root_ids(self) -> List[int]:
        return [root.id for root in self.roots]

    def is_root(self, node_id: int) -> bool:
        return any(root.id == node_id for root in self.roots)

    def parent_of(self, node_id: int) -> Optional[int]:
        """Effective parent id in this forest (None for roots and unknown ids)."""
        node = self.index.get(node_id)
        if node is None or self.is_root(node_id):
            return None
        return node.parent_id


EMPTY_FOREST = Forest()


def build_forest(records: Iterable[IndustryRecord]) -> Forest:
    """Turn a flat record list into a forest.

    Records whose parent is null, missing or themselves become roots.
    Children keep source order. Records unreachable from any root either sit
    on a parent cycle or hang off one; the first member of each cycle (in
    source order) is promoted to root so every record appears exactly once.
    """
    ordered: List[IndustryRecord] = []
    nodes: Dict[int, IndustryTreeNode] = {}
    for record in records:
        if record.id in nodes:
            logger.warning("Skipping duplicate industry id %s (%r)", record.id, record.name)
            continue
        nodes[record.id] = IndustryTreeNode(record=record)
        ordered.append(record)

    roots: List[IndustryTreeNode] = []
    for record in ordered:
        node = nodes[record.id]
        parent_id = record.parent_id
        if parent_id is None or parent_id == record.id or parent_id not in nodes:
            if parent_id is not None:
                logger.debug(
                    "Industry %s has unresolvable parent %s; treating as root",
                    record.id,
                    parent_id,
                )
            roots.append(node)
        else:
            nodes[parent_id].children.append(node)

    reachable = _collect_reachable(roots)
    if len(reachable) != len(nodes):
        source_index = {record.id: idx for idx, record in enumerate(ordered)}
        for record in ordered:
            if record.id in reachable:
                continue
            cycle = _parent_cycle(record.id, nodes)
            node = nodes[min(cycle, key=source_index.__getitem__)]
            logger.warning(
                "Industry %s is part of a parent cycle %s; promoting it to root",
                node.id,
                cycle,
            )
            parent = nodes[node.parent_id]
            parent.children = [child for child in parent.children if child is not node]
            roots.append(node)
            reachable.update(_collect_reachable([node]))

    return Forest(roots=tuple(roots), index=MappingProxyType(nodes))


def _collect_reachable(roots: Iterable[IndustryTreeNode]) -> set:
    seen: set = set()
    stack = list(roots)
    while stack:
        node = stack.pop()
        if node.id in seen:
            continue
        seen.add(node.id)
        stack.extend(node.children)
    return seen


def _parent_cycle(start_id: int, nodes: Dict[int, IndustryTreeNode]) -> List[int]:
    """Ids on the parent cycle reached by walking up from ``start_id``.

    Only valid for unreachable records, whose parents always resolve.
    """
    visited: set = set()
    current = start_id
    while current not in visited:
        visited.add(current)
        current = nodes[current].parent_id
    cycle = [current]
    member = nodes[current].parent_id
    while member != current:
        cycle.append(member)
        member = nodes[member].parent_id
    return cycle
