from __future__ import annotations

"""Tri-state selection over filter groups.

Toggling a value flips it, pushes the new state down to every descendant and
then re-derives each ancestor from its immediate children:

- all children selected            -> selected
- no child selected or partial     -> unselected
- anything else                    -> indeterminate (partial)

After every change the full set of selected identities across all groups is
handed to the selection committer; an empty set means "clear".

All traversals are iterative, so deep hierarchies do not hit the recursion
limit.
"""

import logging
from typing import Hashable, Iterable, List, Optional, FrozenSet

from facet_toolkit.core.exceptions import SelectionCommitError
from facet_toolkit.core.interfaces import SelectionCommitter
from facet_toolkit.core.models import FilterGroup, FilterValue

__all__ = ["SelectionService"]

logger = logging.getLogger(__name__)


class SelectionService:
    """Selection state machine.

    Parameters
    ----------
    committer : SelectionCommitter, optional
        Receives the selection after every toggle/clear. When omitted the
        emitted set is only returned to the caller.

    Notes
    -----
    - Toggling the same value twice restores every flag in its subtree and
      ancestor chain when that subtree started out uniform. A partial node
      ends up fully unselected instead.
    - A parent reference that no longer resolves stops the upward pass;
      higher ancestors keep their previous state.
    """

    def __init__(self, committer: Optional[SelectionCommitter] = None) -> None:
        self.committer = committer
        self.last_error: Optional[SelectionCommitError] = None

    # -------------------------------------------------------------------------
    # Public API
    # -------------------------------------------------------------------------

    def toggle(self, node: FilterValue, group: FilterGroup,
               groups: Iterable[FilterGroup] = ()) -> FrozenSet[Hashable]:
        """Flip *node* and propagate; return the emitted identity set.

        ``groups`` is every group of the menu (it may or may not include
        *group*; the latter is always accounted for).
        """
        node.selected = not node.selected
        node.indeterminate = False

        if group.is_hierarchy:
            self.cascade(node, node.selected)
            self.update_ancestors(node, group)

        logger.debug("Toggled %r in %r -> selected=%s", node.key, group.name, node.selected)
        return self.emit(self._with_group(groups, group))

    def clear_group(self, group: FilterGroup, groups: Iterable[FilterGroup] = ()) -> FrozenSet[Hashable]:
        """Unselect every value of *group*; emit the selection of the other groups."""
        for value in group.iter_values():
            value.selected = False
            value.indeterminate = False
        others = [g for g in groups if g is not group]
        logger.debug("Cleared group %r", group.name)
        return self.emit(others)

    def cascade(self, node: FilterValue, selected: bool) -> None:
        """Set every descendant of *node* to *selected* and clear partial flags."""
        for descendant in node.iter_descendants():
            descendant.selected = selected
            descendant.indeterminate = False

    def update_ancestors(self, node: FilterValue, group: FilterGroup) -> None:
        """Recompute the ancestors of *node*, nearest first, up to the root."""
        current = node
        while current.parent_key is not None:
            parent = self._find_parent(current, group)
            if parent is None:
                logger.warning(
                    "Parent %r of %r not found in group %r; stopping recomputation",
                    current.parent_key, current.key, group.name,
                )
                return
            self.recompute_from_children(parent)
            current = parent

    @staticmethod
    def recompute_from_children(parent: FilterValue) -> None:
        """Derive the tri-state of *parent* from its immediate children."""
        if not parent.children:
            return
        all_selected = all(c.selected for c in parent.children)
        any_marked = any(c.selected or c.indeterminate for c in parent.children)
        if all_selected:
            parent.selected, parent.indeterminate = True, False
        elif not any_marked:
            parent.selected, parent.indeterminate = False, False
        else:
            parent.selected, parent.indeterminate = False, True
        logger.debug(
            "Recomputed %r: selected=%s indeterminate=%s",
            parent.key, parent.selected, parent.indeterminate,
        )

    @staticmethod
    def collect_selected(groups: Iterable[FilterGroup],
                         exclude: Optional[FilterGroup] = None) -> FrozenSet[Hashable]:
        """Return the identities of every selected value, hierarchy levels included."""
        identities = set()
        for group in groups:
            if group is exclude:
                continue
            identities.update(v.identity for v in group.iter_values() if v.selected)
        return frozenset(identities)

    def emit(self, groups: Iterable[FilterGroup]) -> FrozenSet[Hashable]:
        """Send the selection of *groups* to the committer and return it."""
        identities = self.collect_selected(groups)
        self.last_error = None
        if self.committer is None:
            return identities
        try:
            # An empty set is the "clear selection" signal
            self.committer.apply_selection(identities)
        except Exception as exc:
            self.last_error = SelectionCommitError(
                f"Selection commit failed: {exc}", identities=identities, cause=exc
            )
            logger.error("Could not apply selection of %d identities: %s", len(identities), exc)
        return identities

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    @staticmethod
    def _find_parent(node: FilterValue, group: FilterGroup) -> Optional[FilterValue]:
        # Parents always sit one level above their children
        level_index = node.level - 1
        if level_index < 0 or level_index >= len(group.levels):
            return None
        return group.levels[level_index].find(node.parent_key)

    @staticmethod
    def _with_group(groups: Iterable[FilterGroup], group: FilterGroup) -> List[FilterGroup]:
        result = list(groups)
        if not any(g is group for g in result):
            result.append(group)
        return result
