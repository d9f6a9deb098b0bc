"""
Industry forest construction and traversal.
"""

from .forest import EMPTY_FOREST, Forest, IndustryTreeNode, build_forest
from .path_queries import (
    NOT_FOUND,
    ancestor_chain,
    category_label_for_level,
    descendant_ids,
    find_by_id,
    is_descendant,
    level_of,
    root_id_of,
    would_create_cycle,
)

__all__ = [
    "EMPTY_FOREST",
    "Forest",
    "IndustryTreeNode",
    "build_forest",
    "NOT_FOUND",
    "ancestor_chain",
    "category_label_for_level",
    "descendant_ids",
    "find_by_id",
    "is_descendant",
    "level_of",
    "root_id_of",
    "would_create_cycle",
]
