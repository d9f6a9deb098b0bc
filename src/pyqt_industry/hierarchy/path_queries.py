"""Read-only traversal helpers over an industry forest."""

from __future__ import annotations

from typing import Iterable, List, Optional

from pyqt_industry.hierarchy.forest import IndustryTreeNode

NOT_FOUND = -1

MAIN_CATEGORY_LABEL = "Main Industry"


def find_by_id(nodes: Iterable[IndustryTreeNode], target_id: int) -> Optional[IndustryTreeNode]:
    """Depth-first search for ``target_id``."""
    for node in nodes:
        if node.id == target_id:
            return node
        found = find_by_id(node.children, target_id)
        if found is not None:
            return found
    return None


def level_of(nodes: Iterable[IndustryTreeNode], target_id: int, current_level: int = 0) -> int:
    """Depth of ``target_id`` below its root (root = 0), or NOT_FOUND."""
    for node in nodes:
        if node.id == target_id:
            return current_level
        level = level_of(node.children, target_id, current_level + 1)
        if level != NOT_FOUND:
            return level
    return NOT_FOUND


def ancestor_chain(nodes: Iterable[IndustryTreeNode], target_id: int) -> List[IndustryTreeNode]:
    """Ancestors of ``target_id``, root first, excluding the node itself."""

    def walk(current: Iterable[IndustryTreeNode], trail: List[IndustryTreeNode]) -> Optional[List[IndustryTreeNode]]:
        for node in current:
            if node.id == target_id:
                return trail
            found = walk(node.children, trail + [node])
            if found is not None:
                return found
        return None

    return walk(nodes, []) or []


def root_id_of(nodes: Iterable[IndustryTreeNode], target_id: int) -> Optional[int]:
    """Id of the root whose subtree contains ``target_id``."""
    for root in nodes:
        if root.id == target_id or is_descendant(root, target_id):
            return root.id
    return None


def descendant_ids(node: IndustryTreeNode) -> List[int]:
    """Every id below ``node`` in pre-order, excluding ``node``."""
    ids: List[int] = []
    stack = list(reversed(node.children))
    while stack:
        current = stack.pop()
        ids.append(current.id)
        stack.extend(reversed(current.children))
    return ids


def is_descendant(candidate_ancestor: IndustryTreeNode, target_id: int) -> bool:
    """True when ``target_id`` lies strictly inside ``candidate_ancestor``'s subtree."""
    for child in candidate_ancestor.children:
        if child.id == target_id:
            return True
        if is_descendant(child, target_id):
            return True
    return False


def would_create_cycle(
    nodes: Iterable[IndustryTreeNode],
    child_id: int,
    new_parent_id: Optional[int],
) -> bool:
    """True when making ``new_parent_id`` the parent of ``child_id`` breaks the forest."""
    if new_parent_id is None:
        return False
    if child_id == new_parent_id:
        return True
    child = find_by_id(nodes, child_id)
    if child is None:
        return False
    return is_descendant(child, new_parent_id)


def category_label_for_level(level: int) -> str:
    """Display label derived purely from depth: Main Industry, sub, sub-sub, ..."""
    if level < 0:
        raise ValueError(f"level must be >= 0, got {level}")
    if level == 0:
        return MAIN_CATEGORY_LABEL
    return "-".join(["sub"] * level)
