from __future__ import annotations

"""Session aggregate of all filter groups.

The store owns the current groups (rebuilt from scratch on every data
arrival) together with the :class:`SessionState` that outlives those
rebuilds. Selection flags are never carried over: a rebuilt tree starts
unselected, while collapse flags and expansion keys are reapplied by name.
"""

import logging
from typing import Dict, List, Optional, Sequence

from facet_toolkit.core.exceptions import UnknownGroupError
from facet_toolkit.core.interfaces import TokenMinter
from facet_toolkit.core.models import FilterGroup, FilterValue, SourceField
from facet_toolkit.core.models.menu_config import DEFAULT_MENU_SETTINGS, MenuSettings
from facet_toolkit.core.services.field_grouping_service import group_fields
from facet_toolkit.core.services.search_service import SearchService
from facet_toolkit.core.services.tree_build_service import TreeBuildService
from facet_toolkit.core.session_state import SessionState

__all__ = ["FilterStore"]

logger = logging.getLogger(__name__)


class FilterStore:
    """Holds the ordered groups and the session bookkeeping.

    Parameters
    ----------
    session : SessionState, optional
        Existing session state to continue; a fresh one is created otherwise.
    settings : MenuSettings, optional
        Engine settings used by rebuilds.
    search_service : SearchService, optional
        Used for search-driven auto-expansion.
    """

    def __init__(self, session: Optional[SessionState] = None,
                 settings: Optional[MenuSettings] = None,
                 search_service: Optional[SearchService] = None) -> None:
        self.session: SessionState = session or SessionState()
        self.settings: MenuSettings = settings or DEFAULT_MENU_SETTINGS
        self.search_service: SearchService = search_service or SearchService()
        self._groups: List[FilterGroup] = []
        self._search_terms: Dict[str, str] = {}

    # ------------------------------------------------------------------
    # Rebuild
    # ------------------------------------------------------------------
    def rebuild(self, fields: Sequence[SourceField],
                token_minter: Optional[TokenMinter] = None) -> List[FilterGroup]:
        """Discard the current groups and build new ones from *fields*."""
        builder = TreeBuildService(token_minter=token_minter, settings=self.settings)
        groups: List[FilterGroup] = []

        for spec in group_fields(fields or (), self.settings):
            group = FilterGroup(
                name=spec.name,
                order=spec.order,
                is_hierarchy=spec.is_hierarchy,
                collapsed=self.session.is_collapsed(spec.name),
            )
            if spec.is_hierarchy:
                result = builder.build_hierarchy(spec.fields)
                group.levels = result.levels
                group.skipped_edges = len(result.skipped_edges)
            else:
                group.values = builder.build_standalone(spec.fields[0])
            groups.append(group)

        self._groups = groups
        self._search_terms = {}
        logger.info(
            "Rebuilt filter menu: %d groups (%d hierarchies)",
            len(groups), sum(1 for g in groups if g.is_hierarchy),
        )
        return list(groups)

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------
    @property
    def groups(self) -> List[FilterGroup]:
        return list(self._groups)

    @property
    def is_empty(self) -> bool:
        return not self._groups

    def has_group(self, name: str) -> bool:
        return any(g.name == name for g in self._groups)

    def get_group(self, name: str) -> FilterGroup:
        for group in self._groups:
            if group.name == name:
                return group
        raise UnknownGroupError(name)

    def find_node(self, group_name: str, level_index: int, key: str) -> Optional[FilterValue]:
        for group in self._groups:
            if group.name == group_name:
                return group.find(level_index, key)
        return None

    # ------------------------------------------------------------------
    # Chrome state
    # ------------------------------------------------------------------
    def toggle_collapsed(self, group_name: str) -> bool:
        """Flip a group's collapse flag; return the new state."""
        group = self.get_group(group_name)
        group.collapsed = self.session.toggle_collapsed(group_name)
        return group.collapsed

    def toggle_expanded(self, group_name: str, level_index: int, key: str) -> bool:
        """Flip one node's expansion flag; return the new state."""
        return self.session.toggle_expanded(group_name, level_index, key)

    def is_expanded(self, group_name: str, level_index: int, key: str) -> bool:
        return self.session.is_expanded(group_name, level_index, key)

    def reset_group_state(self, group_name: str) -> None:
        """Forget the collapse flag, expansions and search term of one group."""
        group = self.get_group(group_name)
        self.session.forget_group(group_name)
        self._search_terms.pop(group_name, None)
        group.collapsed = False
        logger.debug("Reset view state of %r", group_name)

    # ------------------------------------------------------------------
    # Search
    # ------------------------------------------------------------------
    def search_term(self, group_name: str) -> str:
        return self._search_terms.get(group_name, "")

    def set_search_term(self, group_name: str, term: Optional[str]) -> int:
        """Store the group's search term and auto-expand matching branches.

        Returns:
            Number of nodes newly expanded
        """
        group = self.get_group(group_name)
        term = term or ""
        if term:
            self._search_terms[group_name] = term
        else:
            self._search_terms.pop(group_name, None)
        return self.search_service.auto_expand(group, term, self.session)
