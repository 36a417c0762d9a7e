from __future__ import annotations

"""Engine services: grouping, tree building, selection, search, presentation.

Services are UI-agnostic and hold no session state of their own; the
:class:`~facet_toolkit.core.filter_store.FilterStore` composes them.
"""

from .field_grouping_service import FieldGroupSpec, group_fields  # noqa: F401
from .tree_build_service import HierarchyBuildResult, TreeBuildService  # noqa: F401
from .selection_service import SelectionService  # noqa: F401
from .search_service import SearchService  # noqa: F401
from .presentation_service import build_group_view, build_menu_view  # noqa: F401

__all__: list[str] = [
    "FieldGroupSpec",
    "group_fields",
    "HierarchyBuildResult",
    "TreeBuildService",
    "SelectionService",
    "SearchService",
    "build_group_view",
    "build_menu_view",
]
