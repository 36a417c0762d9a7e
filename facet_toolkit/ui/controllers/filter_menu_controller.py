from typing import Optional, Sequence

import logging

from facet_toolkit.core.exceptions import UnknownGroupError
from facet_toolkit.core.filter_store import FilterStore
from facet_toolkit.core.interfaces import SelectionCommitter, TokenMinter
from facet_toolkit.core.models import OperationResult, SourceField
from facet_toolkit.core.models.menu_config import MenuSettings
from facet_toolkit.core.models.menu_view import MenuView
from facet_toolkit.core.services.presentation_service import build_menu_view
from facet_toolkit.core.services.selection_service import SelectionService

logger = logging.getLogger(__name__)


class FilterMenuController:
    """Controller for coordinating filter-menu interactions with services.

    The host calls one method per external trigger (new data, a click on a
    value, a search keystroke) and re-reads :meth:`get_view` afterwards. The
    controller contains no UI toolkit code.

    Parameters
    ----------
    store : FilterStore, optional
        Session store; a fresh one is created when omitted.
    selection_service : SelectionService, optional
        Selection state machine; built around *committer* when omitted.
    committer : SelectionCommitter, optional
        Receives the selection after every toggle/clear.
    token_minter : callable, optional
        ``(field, row_index) -> token`` used during rebuilds.

    Notes
    -----
    - Methods are non-raising for routine failures (unknown group or value);
      they return ``OperationResult(success=False, ...)`` instead.
    - Every operation runs to completion before returning.
    """

    def __init__(
        self,
        store: Optional[FilterStore] = None,
        selection_service: Optional[SelectionService] = None,
        committer: Optional[SelectionCommitter] = None,
        token_minter: Optional[TokenMinter] = None,
    ) -> None:
        self.store: FilterStore = store or FilterStore()
        self.selection_service: SelectionService = selection_service or SelectionService(committer)
        self.token_minter = token_minter

    @classmethod
    def from_config(
        cls,
        committer: Optional[SelectionCommitter] = None,
        token_minter: Optional[TokenMinter] = None,
    ) -> "FilterMenuController":
        """Create a controller whose store uses the settings of :class:`ConfigManager`."""
        store = FilterStore(settings=MenuSettings.from_config())
        return cls(store=store, committer=committer, token_minter=token_minter)

    # ---------------------------------------------------------------------------------
    # Data
    # ---------------------------------------------------------------------------------

    def update(self, fields: Optional[Sequence[SourceField]]) -> OperationResult:
        """Rebuild every group from freshly delivered fields.

        Absent or empty input is not an error: the store becomes empty and the
        view reports the empty state.
        """
        groups = self.store.rebuild(list(fields or ()), token_minter=self.token_minter)
        if not groups:
            return OperationResult(True, "No data", {"groups": 0})
        skipped = sum(g.skipped_edges for g in groups)
        details = {"groups": len(groups), "skipped_edges": skipped}
        return OperationResult(True, f"Built {len(groups)} filter groups", details)

    def make_field(self, display_name: str, values: Sequence, query_name: Optional[str] = None) -> SourceField:
        """Wrap a host column, deriving its lineage with the configured separator."""
        return self.store.settings.field_from_query_name(display_name, values, query_name)

    def get_view(self) -> MenuView:
        return build_menu_view(self.store)

    # ---------------------------------------------------------------------------------
    # Selection
    # ---------------------------------------------------------------------------------

    def handle_toggle(self, group_name: str, level_index: int, key: str) -> OperationResult:
        """Toggle one value and commit the resulting selection."""
        try:
            group = self.store.get_group(group_name)
        except UnknownGroupError as exc:
            return OperationResult(False, str(exc))

        node = group.find(level_index, key)
        if node is None:
            logger.warning("Toggle ignored: no value %r at level %d of %r", key, level_index, group_name)
            return OperationResult(False, f"No value {key!r} at level {level_index} of '{group_name}'")

        identities = self.selection_service.toggle(node, group, self.store.groups)
        return self._selection_result(
            f"{'Selected' if node.selected else 'Deselected'} {key!r}", identities
        )

    def handle_clear(self, group_name: str) -> OperationResult:
        """Clear one group's selection, keeping the other groups' selections."""
        try:
            group = self.store.get_group(group_name)
        except UnknownGroupError as exc:
            return OperationResult(False, str(exc))

        identities = self.selection_service.clear_group(group, self.store.groups)
        return self._selection_result(f"Cleared '{group_name}'", identities)

    # ---------------------------------------------------------------------------------
    # Chrome state and search
    # ---------------------------------------------------------------------------------

    def handle_toggle_collapsed(self, group_name: str) -> OperationResult:
        try:
            collapsed = self.store.toggle_collapsed(group_name)
        except UnknownGroupError as exc:
            return OperationResult(False, str(exc))
        return OperationResult(True, "Collapsed" if collapsed else "Expanded", {"collapsed": collapsed})

    def handle_toggle_expanded(self, group_name: str, level_index: int, key: str) -> OperationResult:
        node = self.store.find_node(group_name, level_index, key)
        if node is None or not node.has_children():
            return OperationResult(False, f"No expandable value {key!r} in '{group_name}'")
        expanded = self.store.toggle_expanded(group_name, level_index, key)
        return OperationResult(True, "Expanded" if expanded else "Collapsed", {"expanded": expanded})

    def handle_reset_view(self, group_name: str) -> OperationResult:
        """Expand the group again and fold every value; selection is untouched."""
        try:
            self.store.reset_group_state(group_name)
        except UnknownGroupError as exc:
            return OperationResult(False, str(exc))
        return OperationResult(True, f"Reset view of '{group_name}'")

    def handle_search(self, group_name: str, term: Optional[str]) -> OperationResult:
        """Set a group's search term; matching branches are auto-expanded."""
        try:
            added = self.store.set_search_term(group_name, term)
        except UnknownGroupError as exc:
            return OperationResult(False, str(exc))
        view = build_menu_view(self.store).group(group_name)
        visible = len(view.nodes) if view is not None else 0
        return OperationResult(True, f"{visible} matching values", {"expanded": added, "visible": visible})

    # ---------------------------------------------------------------------------------
    # Internal helpers
    # ---------------------------------------------------------------------------------

    def _selection_result(self, message: str, identities) -> OperationResult:
        details = {"identities": identities, "cleared": not identities}
        error = self.selection_service.last_error
        if error is not None:
            details["commit_error"] = error
            message = f"{message} Warning: selection could not be applied."
        return OperationResult(True, message, details)
