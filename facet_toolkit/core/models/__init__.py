from __future__ import annotations

"""Shared data structures used across the Facet Toolkit core.

This package exposes dataclasses and value objects used by services and other
core layers. It is intentionally free of UI / I/O code so that the contained
objects can be reused in any context (unit-tests, host adapters, GUI, etc.).
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Hashable, Iterator, List, Optional, Sequence, Set

from facet_toolkit.core.utils import lineage_from_query_name

__all__ = [
    "SourceField",
    "SelectionId",
    "default_token_minter",
    "FilterValue",
    "HierarchyLevel",
    "FilterGroup",
    "OperationResult",
]


@dataclass
class SourceField:
    """One input column as handed over by the host.

    Attributes
    ----------
    display_name
        Name shown to the user; also the name of a standalone filter.
    values
        Raw cells, aligned by row index with every other field of the input.
    lineage_key
        Fields sharing a lineage key form one hierarchy. ``None`` means the
        field is always a standalone filter.
    query_name
        Host-side qualified name, kept for diagnostics.
    """

    display_name: str
    values: Sequence[Any] = field(default_factory=list)
    lineage_key: Optional[str] = None
    query_name: Optional[str] = None

    @classmethod
    def from_query_name(cls, display_name: str, values: Sequence[Any],
                        query_name: Optional[str], separator: str = ".") -> "SourceField":
        """Build a field whose lineage key is the table prefix of *query_name*."""
        return cls(
            display_name=display_name,
            values=values,
            lineage_key=lineage_from_query_name(query_name, separator),
            query_name=query_name,
        )

    def __len__(self) -> int:
        return len(self.values)

    def cell(self, row: int) -> Any:
        """Return the raw value at *row*, or None past the end of a ragged column."""
        if 0 <= row < len(self.values):
            return self.values[row]
        return None


@dataclass(frozen=True)
class SelectionId:
    """Default opaque identity token: the column and the first row of a value."""

    field_name: str
    row_index: int


def default_token_minter(field: SourceField, row_index: int) -> Hashable:
    return SelectionId(field.display_name, row_index)


@dataclass(eq=False)
class FilterValue:
    """One distinct value at one level of a hierarchy or standalone filter.

    Nodes compare by identity: a tree holds exactly one instance per
    (level, key) and selection state lives on that instance.
    """

    key: str
    identity: Hashable
    level: int = 0
    selected: bool = False
    indeterminate: bool = False
    children: List["FilterValue"] = field(default_factory=list)
    parent_key: Optional[str] = None
    _child_keys: Set[str] = field(default_factory=set, init=False, repr=False)

    def __post_init__(self) -> None:
        self._child_keys.update(child.key for child in self.children)

    def has_children(self) -> bool:
        return len(self.children) > 0

    def has_child(self, key: str) -> bool:
        return key in self._child_keys

    def add_child(self, child: "FilterValue") -> bool:
        """Link *child* under this node; return False if the key is already linked.

        A successful link points ``child.parent_key`` at this node, replacing
        whatever parent was linked before.
        """
        if child.key in self._child_keys:
            return False
        self.children.append(child)
        self._child_keys.add(child.key)
        child.parent_key = self.key
        return True

    def iter_descendants(self) -> Iterator["FilterValue"]:
        """Yield every descendant in pre-order, without recursion."""
        stack = list(reversed(self.children))
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))

    def __repr__(self) -> str:
        state = "x" if self.selected else ("~" if self.indeterminate else " ")
        return f"FilterValue({self.key!r}, level={self.level}, [{state}], children={len(self.children)})"


@dataclass
class HierarchyLevel:
    """The deduplicated values of one column of a hierarchy, in first-seen order."""

    name: str
    level_index: int
    values: List[FilterValue] = field(default_factory=list)

    def find(self, key: str) -> Optional[FilterValue]:
        for value in self.values:
            if value.key == key:
                return value
        return None


@dataclass
class FilterGroup:
    """A hierarchy (ordered levels) or a standalone filter (flat value list).

    Attributes
    ----------
    name
        Stable group name; also the namespace of the session expansion keys.
    order
        Position among all groups, taken from the source field order.
    is_hierarchy
        Selects which of ``levels`` / ``values`` is populated.
    collapsed
        Whether the group's value area is folded away.
    skipped_edges
        Parent/child links the builder could not resolve (diagnostics only).
    """

    name: str
    order: int
    is_hierarchy: bool = False
    levels: List[HierarchyLevel] = field(default_factory=list)
    values: List[FilterValue] = field(default_factory=list)
    collapsed: bool = False
    skipped_edges: int = 0

    @property
    def display_name(self) -> str:
        return self.name

    @property
    def roots(self) -> List[FilterValue]:
        """Top-level nodes: level 0 of a hierarchy or the standalone values."""
        if self.is_hierarchy:
            return self.levels[0].values if self.levels else []
        return self.values

    def iter_values(self) -> Iterator[FilterValue]:
        """Yield every node of the group, level by level."""
        if self.is_hierarchy:
            for level in self.levels:
                yield from level.values
        else:
            yield from self.values

    def find(self, level_index: int, key: str) -> Optional[FilterValue]:
        if not self.is_hierarchy:
            if level_index != 0:
                return None
            for value in self.values:
                if value.key == key:
                    return value
            return None
        if 0 <= level_index < len(self.levels):
            return self.levels[level_index].find(key)
        return None


@dataclass(frozen=True)
class OperationResult:
    """Result of a controller or store operation.

    Attributes
    ----------
    success
        Whether the operation completed successfully.
    message
        Human-readable summary suitable for logs or UI display.
    details
        Optional structured details for diagnostics or caller logic.
    """
    success: bool
    message: str
    details: Optional[Dict[str, Any]] = None
