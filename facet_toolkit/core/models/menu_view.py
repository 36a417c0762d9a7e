"""Read-only presentation view of the filter menu.

Immutable snapshots handed to the rendering collaborator. They carry
everything needed to draw the menu (order, collapse flags, tri-state flags,
expansion state) without exposing the mutable engine nodes.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple


@dataclass(frozen=True)
class NodeView:
    key: str
    level: int
    selected: bool
    indeterminate: bool
    has_children: bool
    expanded: bool
    expansion_key: str
    children: Tuple["NodeView", ...] = ()

    @property
    def check_state(self) -> str:
        """``"checked"``, ``"partial"`` or ``"unchecked"``."""
        if self.selected:
            return "checked"
        if self.indeterminate:
            return "partial"
        return "unchecked"


@dataclass(frozen=True)
class GroupView:
    name: str
    order: int
    is_hierarchy: bool
    collapsed: bool
    search_term: str = ""
    nodes: Tuple[NodeView, ...] = ()
    no_results: bool = False
    no_results_message: Optional[str] = None
    level_names: Tuple[str, ...] = ()


@dataclass(frozen=True)
class MenuView:
    """Top-level view: either the ordered groups or the empty state."""

    groups: Tuple[GroupView, ...]
    empty: bool
    title: str
    message: str = ""
    instruction: str = ""

    def group(self, name: str) -> Optional[GroupView]:
        for group in self.groups:
            if group.name == name:
                return group
        return None
