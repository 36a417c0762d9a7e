"""Test configuration and shared fixtures for Facet Toolkit.

Provides the fake host collaborators (token minter, selection committer) and
the small data sets reused across the suite.
"""

import logging
import sys
from pathlib import Path
from typing import List

import pytest

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from facet_toolkit.config import ConfigManager
from facet_toolkit.core.models import SelectionId, SourceField

# Configure test logging
logging.basicConfig(
    level=logging.DEBUG,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)


class RecordingCommitter:
    """SelectionCommitter fake remembering every applied selection."""

    def __init__(self) -> None:
        self.calls: List[frozenset] = []

    def apply_selection(self, identities) -> None:
        self.calls.append(frozenset(identities))

    @property
    def last(self) -> frozenset:
        return self.calls[-1] if self.calls else frozenset()


class FailingCommitter:
    """SelectionCommitter fake whose transport always fails."""

    def __init__(self) -> None:
        self.attempts = 0

    def apply_selection(self, identities) -> None:
        self.attempts += 1
        raise ConnectionError("host unavailable")


class CountingMinter:
    """Token minter recording each (field, row) it was asked for."""

    def __init__(self) -> None:
        self.requests = []

    def __call__(self, field: SourceField, row_index: int):
        self.requests.append((field.display_name, row_index))
        return SelectionId(field.display_name, row_index)


@pytest.fixture
def committer():
    return RecordingCommitter()


@pytest.fixture
def failing_committer():
    return FailingCommitter()


@pytest.fixture
def minter():
    return CountingMinter()


@pytest.fixture
def produce_fields():
    """Two-level hierarchy: Fruit/Apple, Fruit/Banana, Veg/Carrot."""
    return [
        SourceField("Category", ["Fruit", "Fruit", "Veg"], lineage_key="Produce"),
        SourceField("Item", ["Apple", "Banana", "Carrot"], lineage_key="Produce"),
    ]


@pytest.fixture
def menu_fields(produce_fields):
    """Hierarchy plus a standalone Region filter over the same three rows."""
    return produce_fields + [SourceField("Region", ["North", "South", "North"])]


@pytest.fixture
def calendar_fields():
    """Three-level calendar hierarchy with months in chronological order."""
    years = ["2023", "2023", "2023", "2024", "2024"]
    quarters = ["Q1", "Q1", "Q2", "Q1", "Q1"]
    months = ["Jan", "Feb", "Apr", "Jan", "Mar"]
    return [
        SourceField.from_query_name("Year", years, "Calendar.Year"),
        SourceField.from_query_name("Quarter", quarters, "Calendar.Quarter"),
        SourceField.from_query_name("Month", months, "Calendar.Month"),
    ]


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Point user overrides at an empty directory and reset the singleton."""
    monkeypatch.setenv("FACET_CONFIG_DIR", str(tmp_path / "user_config"))
    ConfigManager.reset_instance()
    yield
    ConfigManager.reset_instance()
