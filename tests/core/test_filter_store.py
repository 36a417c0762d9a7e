import logging

import pytest

from facet_toolkit.core.exceptions import UnknownGroupError
from facet_toolkit.core.filter_store import FilterStore
from facet_toolkit.core.models import SelectionId, SourceField
from facet_toolkit.core.models.menu_config import MenuSettings
from facet_toolkit.core.session_state import SessionState


@pytest.fixture
def store(menu_fields):
    store = FilterStore()
    store.rebuild(menu_fields)
    return store


class TestRebuild:

    def test_builds_groups_in_field_order(self, store):
        assert [(g.name, g.is_hierarchy) for g in store.groups] == [("Category", True), ("Region", False)]
        assert store.is_empty is False

    def test_uses_default_identity_tokens(self, store):
        fruit = store.find_node("Category", 0, "Fruit")

        assert fruit.identity == SelectionId("Category", 0)

    def test_custom_minter(self, menu_fields, minter):
        store = FilterStore()
        store.rebuild(menu_fields, token_minter=minter)

        assert ("Region", 1) in minter.requests

    @pytest.mark.parametrize("fields", [None, []])
    def test_no_fields_empties_store(self, store, fields):
        assert store.rebuild(fields) == []
        assert store.is_empty is True
        assert store.groups == []

    def test_selection_does_not_survive(self, store, menu_fields):
        store.find_node("Region", 0, "North").selected = True
        store.rebuild(menu_fields)

        assert store.find_node("Region", 0, "North").selected is False

    def test_collapse_and_expansion_survive(self, store, menu_fields):
        store.toggle_collapsed("Region")
        store.toggle_expanded("Category", 0, "Fruit")

        store.rebuild(menu_fields)

        assert store.get_group("Region").collapsed is True
        assert store.is_expanded("Category", 0, "Fruit") is True

    def test_expansion_reapplies_when_value_returns(self, store, menu_fields):
        store.toggle_expanded("Category", 0, "Veg")
        store.rebuild([
            SourceField("Category", ["Fruit"], lineage_key="Produce"),
            SourceField("Item", ["Apple"], lineage_key="Produce"),
        ])
        assert store.find_node("Category", 0, "Veg") is None

        store.rebuild(menu_fields)
        assert store.is_expanded("Category", 0, "Veg") is True

    def test_search_terms_reset(self, store, menu_fields):
        store.set_search_term("Region", "nor")
        store.rebuild(menu_fields)

        assert store.search_term("Region") == ""

    def test_shared_session(self, menu_fields):
        session = SessionState()
        session.set_collapsed("Category", True)
        store = FilterStore(session=session)
        store.rebuild(menu_fields)

        assert store.get_group("Category").collapsed is True

    def test_skipped_edges_are_counted(self, store):
        assert store.get_group("Category").skipped_edges == 0

    def test_rebuild_logs_summary(self, menu_fields, caplog):
        with caplog.at_level(logging.INFO, logger="facet_toolkit.core.filter_store"):
            FilterStore().rebuild(menu_fields)

        assert "2 groups (1 hierarchies)" in caplog.text

    def test_settings_drive_names(self):
        store = FilterStore(settings=MenuSettings(standalone_name_pattern="Column {index}"))
        store.rebuild([SourceField("", ["x"])])

        assert store.has_group("Column 1")


class TestLookup:

    def test_unknown_group_raises(self, store):
        with pytest.raises(UnknownGroupError) as excinfo:
            store.get_group("Nope")

        assert isinstance(excinfo.value, KeyError)
        assert "Nope" in str(excinfo.value)

    def test_find_node_misses_return_none(self, store):
        assert store.find_node("Nope", 0, "x") is None
        assert store.find_node("Category", 0, "Apple") is None
        assert store.find_node("Region", 1, "North") is None

    def test_groups_is_a_copy(self, store):
        store.groups.clear()

        assert len(store.groups) == 2


class TestChromeAndSearch:

    def test_toggle_collapsed_updates_group_and_session(self, store):
        assert store.toggle_collapsed("Category") is True
        assert store.get_group("Category").collapsed is True
        assert store.session.is_collapsed("Category") is True
        assert store.toggle_collapsed("Category") is False

    def test_toggle_collapsed_unknown_group(self, store):
        with pytest.raises(UnknownGroupError):
            store.toggle_collapsed("Nope")

    def test_set_search_term_auto_expands(self, store):
        added = store.set_search_term("Category", "carr")

        assert added == 1
        assert store.search_term("Category") == "carr"
        assert store.is_expanded("Category", 0, "Veg") is True

    def test_clearing_search_keeps_expansions(self, store):
        store.set_search_term("Category", "carr")

        assert store.set_search_term("Category", "") == 0
        assert store.search_term("Category") == ""
        assert store.is_expanded("Category", 0, "Veg") is True

    def test_search_unknown_group(self, store):
        with pytest.raises(UnknownGroupError):
            store.set_search_term("Nope", "x")


class TestResetGroupState:

    def test_reset_forgets_collapse_expansion_and_search(self, store, menu_fields):
        store.toggle_collapsed("Category")
        store.set_search_term("Category", "app")
        store.toggle_expanded("Category", 0, "Veg")
        store.toggle_collapsed("Region")

        store.reset_group_state("Category")

        assert store.get_group("Category").collapsed is False
        assert store.search_term("Category") == ""
        assert store.session.expanded_keys("Category") == frozenset()
        # other groups keep their state, also across a rebuild
        store.rebuild(menu_fields)
        assert store.get_group("Category").collapsed is False
        assert store.get_group("Region").collapsed is True

    def test_reset_keeps_selection(self, store):
        store.find_node("Region", 0, "North").selected = True
        store.reset_group_state("Region")

        assert store.find_node("Region", 0, "North").selected is True

    def test_reset_unknown_group(self, store):
        with pytest.raises(UnknownGroupError):
            store.reset_group_state("Nope")
