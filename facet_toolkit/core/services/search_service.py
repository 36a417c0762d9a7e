from __future__ import annotations

"""Search matching over value trees (UI-agnostic).

A value matches a term when its own key contains the term (case-insensitive)
or when any descendant does. Ancestors of a match therefore always match as
well, which is what lets the search auto-expand the path to every hit.
"""

import logging
from typing import List, Optional

from facet_toolkit.core.models import FilterGroup, FilterValue
from facet_toolkit.core.session_state import SessionState

__all__ = ["SearchService", "normalize_term"]

logger = logging.getLogger(__name__)


def normalize_term(term: Optional[str]) -> str:
    """Lower-case *term*; ``None`` becomes the empty (match-all) term."""
    return (term or "").lower()


class SearchService:
    """Stateless search predicates plus search-driven auto-expansion."""

    def matches(self, node: FilterValue, term: Optional[str]) -> bool:
        """Return True if *node* or any descendant contains *term*."""
        needle = normalize_term(term)
        if not needle:
            return True
        stack = [node]
        while stack:
            current = stack.pop()
            if needle in current.key.lower():
                return True
            stack.extend(reversed(current.children))
        return False

    def matches_flat(self, node: FilterValue, term: Optional[str]) -> bool:
        """Own-key containment only, used for standalone value lists."""
        needle = normalize_term(term)
        return not needle or needle in node.key.lower()

    def visible_roots(self, group: FilterGroup, term: Optional[str]) -> List[FilterValue]:
        """Top-level values shown for *term*, in source order."""
        if group.is_hierarchy:
            return [node for node in group.roots if self.matches(node, term)]
        return [node for node in group.values if self.matches_flat(node, term)]

    def visible_children(self, node: FilterValue, term: Optional[str]) -> List[FilterValue]:
        return [child for child in node.children if self.matches(child, term)]

    def auto_expand(self, group: FilterGroup, term: Optional[str], session: SessionState) -> int:
        """Expand every value with children that matches *term*.

        Returns:
            Number of expansion keys newly added to *session*
        """
        if not normalize_term(term) or not group.is_hierarchy:
            return 0
        added = 0
        for level in group.levels:
            for node in level.values:
                if node.has_children() and self.matches(node, term):
                    if not session.is_expanded(group.name, level.level_index, node.key):
                        session.set_expanded(group.name, level.level_index, node.key, True)
                        added += 1
        if added:
            logger.debug("Search %r auto-expanded %d nodes in %r", term, added, group.name)
        return added
