import pytest

from facet_toolkit.core.models import FilterGroup, SourceField
from facet_toolkit.core.services.selection_service import SelectionService
from facet_toolkit.core.services.search_service import SearchService
from facet_toolkit.core.services.tree_build_service import TreeBuildService


@pytest.fixture
def tree_builder(minter):
    return TreeBuildService(token_minter=minter)


@pytest.fixture
def make_hierarchy(tree_builder):
    # Helper to build a hierarchy FilterGroup straight from column lists.
    def factory(*columns, name="H", order=0):
        fields = [SourceField(f"L{i}", list(col), lineage_key=name) for i, col in enumerate(columns)]
        result = tree_builder.build_hierarchy(fields)
        return FilterGroup(name=name, order=order, is_hierarchy=True,
                           levels=result.levels, skipped_edges=len(result.skipped_edges))
    return factory


@pytest.fixture
def make_standalone(tree_builder):
    def factory(values, name="S", order=0):
        return FilterGroup(name=name, order=order, is_hierarchy=False,
                           values=tree_builder.build_standalone(SourceField(name, list(values))))
    return factory


@pytest.fixture
def produce_group(make_hierarchy):
    return make_hierarchy(["Fruit", "Fruit", "Veg"], ["Apple", "Banana", "Carrot"], name="Produce")


@pytest.fixture
def deep_group(make_hierarchy):
    # World > Europe > {France > {Paris, Lyon}, Spain > {Madrid}}, World > Asia > Japan > Tokyo
    return make_hierarchy(
        ["World", "World", "World", "World"],
        ["Europe", "Europe", "Europe", "Asia"],
        ["France", "France", "Spain", "Japan"],
        ["Paris", "Lyon", "Madrid", "Tokyo"],
        name="Geo",
    )


@pytest.fixture
def selection_service(committer):
    return SelectionService(committer)


@pytest.fixture
def search_service():
    return SearchService()


def node(group, level, key):
    found = group.find(level, key)
    assert found is not None, f"{key!r} missing at level {level}"
    return found


def flags(value):
    return value.selected, value.indeterminate


@pytest.fixture
def find():
    return node


@pytest.fixture
def state():
    return flags
