from __future__ import annotations

"""Session-scoped menu state that survives data rebuilds.

Only two things persist while the host keeps feeding new data: the collapse
flag of each group and the set of expanded nodes. Both are keyed
structurally (group name, level index, value key) rather than by node
instance, so a freshly rebuilt tree picks them up unchanged.

Public API:
- SessionState.expansion_key(group, level, key) -> str
- SessionState.is_expanded / set_expanded / toggle_expanded
- SessionState.is_collapsed / set_collapsed / toggle_collapsed
- SessionState.forget_group(group)
"""

from typing import Dict, FrozenSet, Set

from facet_toolkit.core.utils import expansion_key

__all__ = ["SessionState"]


class SessionState:
    """Expansion keys and collapse flags, per group name."""

    def __init__(self) -> None:
        self._expanded: Dict[str, Set[str]] = {}
        self._collapsed: Dict[str, bool] = {}

    @staticmethod
    def expansion_key(group_name: str, level_index: int, key: str) -> str:
        return expansion_key(group_name, level_index, key)

    # Expansion -----------------------------------------------------------
    def expanded_keys(self, group_name: str) -> FrozenSet[str]:
        return frozenset(self._expanded.get(group_name, ()))

    def is_expanded(self, group_name: str, level_index: int, key: str) -> bool:
        keys = self._expanded.get(group_name)
        return bool(keys) and expansion_key(group_name, level_index, key) in keys

    def set_expanded(self, group_name: str, level_index: int, key: str, expanded: bool) -> None:
        keys = self._expanded.setdefault(group_name, set())
        node_key = expansion_key(group_name, level_index, key)
        if expanded:
            keys.add(node_key)
        else:
            keys.discard(node_key)

    def toggle_expanded(self, group_name: str, level_index: int, key: str) -> bool:
        """Flip one node's expansion; return the new state."""
        new_state = not self.is_expanded(group_name, level_index, key)
        self.set_expanded(group_name, level_index, key, new_state)
        return new_state

    # Collapse ------------------------------------------------------------
    def is_collapsed(self, group_name: str) -> bool:
        return self._collapsed.get(group_name, False)

    def set_collapsed(self, group_name: str, collapsed: bool) -> None:
        self._collapsed[group_name] = bool(collapsed)

    def toggle_collapsed(self, group_name: str) -> bool:
        new_state = not self.is_collapsed(group_name)
        self._collapsed[group_name] = new_state
        return new_state

    # ---------------------------------------------------------------------
    def forget_group(self, group_name: str) -> None:
        """Drop all remembered state of *group_name*."""
        self._expanded.pop(group_name, None)
        self._collapsed.pop(group_name, None)

    def __repr__(self) -> str:
        expanded = sum(len(v) for v in self._expanded.values())
        return f"SessionState(expanded={expanded}, collapsed={sorted(k for k, v in self._collapsed.items() if v)})"
