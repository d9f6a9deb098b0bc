"""
Qt surface of the industry hierarchy editor.
"""

from .industry_tree_editor import (
    ComparisonPane,
    IndustryTreeEditorWidget,
    MainCategoryList,
    PaneTree,
    create_editor_window,
)

__all__ = [
    "ComparisonPane",
    "IndustryTreeEditorWidget",
    "MainCategoryList",
    "PaneTree",
    "create_editor_window",
]
