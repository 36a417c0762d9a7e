from __future__ import annotations

"""Build the read-only :class:`MenuView` handed to the renderer.

Rendering rules:
- a collapsed group has no visible values;
- hierarchy roots are shown when they match the group's search term
  (themselves or through a descendant);
- children are shown only under an expanded value, again filtered by the
  search term;
- standalone values are filtered on their own key only;
- an expanded group with nothing visible reports ``no_results``.
"""

from typing import TYPE_CHECKING, List, Optional, Tuple

from facet_toolkit.core.models import FilterGroup, FilterValue
from facet_toolkit.core.models.menu_view import GroupView, MenuView, NodeView
from facet_toolkit.core.services.search_service import SearchService
from facet_toolkit.core.session_state import SessionState

if TYPE_CHECKING:
    from facet_toolkit.core.filter_store import FilterStore

__all__ = ["build_menu_view", "build_group_view"]


def build_menu_view(store: "FilterStore") -> MenuView:
    """Return the current view of every group, or the empty state."""
    settings = store.settings
    if store.is_empty:
        return MenuView(
            groups=(),
            empty=True,
            title=settings.empty_title,
            message=settings.empty_message,
            instruction=settings.empty_instruction,
        )
    groups = tuple(
        build_group_view(group, store.session, store.search_term(group.name),
                         store.search_service, settings.no_results_message)
        for group in sorted(store.groups, key=lambda g: g.order)
    )
    return MenuView(groups=groups, empty=False, title=settings.filters_title)


def build_group_view(group: FilterGroup, session: SessionState, term: str = "",
                     search: Optional[SearchService] = None,
                     no_results_message: Optional[str] = None) -> GroupView:
    search = search or SearchService()
    level_names = tuple(level.name for level in group.levels)
    if group.collapsed:
        return GroupView(
            name=group.name, order=group.order, is_hierarchy=group.is_hierarchy,
            collapsed=True, search_term=term, level_names=level_names,
        )

    roots = search.visible_roots(group, term)
    if group.is_hierarchy:
        nodes = tuple(_node_view(group.name, node, session, term, search) for node in roots)
    else:
        nodes = tuple(_leaf_view(group.name, node) for node in roots)

    return GroupView(
        name=group.name,
        order=group.order,
        is_hierarchy=group.is_hierarchy,
        collapsed=False,
        search_term=term,
        nodes=nodes,
        no_results=not nodes,
        no_results_message=no_results_message if not nodes else None,
        level_names=level_names,
    )


def _leaf_view(group_name: str, node: FilterValue) -> NodeView:
    return NodeView(
        key=node.key,
        level=node.level,
        selected=node.selected,
        indeterminate=node.indeterminate,
        has_children=False,
        expanded=False,
        expansion_key=SessionState.expansion_key(group_name, node.level, node.key),
    )


def _node_view(group_name: str, root: FilterValue, session: SessionState,
               term: str, search: SearchService) -> NodeView:
    """Assemble a NodeView subtree bottom-up without recursion."""
    # Pre-order walk over the visible part of the tree
    order: List[Tuple[FilterValue, bool, List[FilterValue]]] = []
    stack = [root]
    while stack:
        node = stack.pop()
        expanded = node.has_children() and session.is_expanded(group_name, node.level, node.key)
        visible = search.visible_children(node, term) if expanded else []
        order.append((node, expanded, visible))
        stack.extend(reversed(visible))

    built = {}
    for node, expanded, visible in reversed(order):
        built[id(node)] = NodeView(
            key=node.key,
            level=node.level,
            selected=node.selected,
            indeterminate=node.indeterminate,
            has_children=node.has_children(),
            expanded=expanded,
            expansion_key=SessionState.expansion_key(group_name, node.level, node.key),
            children=tuple(built[id(child)] for child in visible),
        )
    return built[id(root)]
