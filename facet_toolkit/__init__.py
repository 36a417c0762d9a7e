"""Top-level package for Facet Toolkit.

Facet Toolkit turns parallel data columns into an interactive multi-select
filter menu: deduplicated values per field, parent/child hierarchies inferred
from row co-occurrence, and a tri-state selection that cascades through them.
Hosts should only depend on the public API exposed here rather than importing
internal modules directly.
"""

from .core.filter_store import FilterStore
from .core.models import FilterGroup, FilterValue, SelectionId, SourceField
from .core.session_state import SessionState
from .ui.controllers.filter_menu_controller import FilterMenuController

__version__ = "0.1.0"

__all__: list[str] = [
    "FilterMenuController",
    "FilterStore",
    "FilterGroup",
    "FilterValue",
    "SelectionId",
    "SessionState",
    "SourceField",
]
