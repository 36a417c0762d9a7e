"""Settings model for the filter menu engine.

Plain dataclass view of the ``filter_menu`` configuration section, so
services never read raw YAML mappings themselves.
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Any, Dict, Mapping, Optional, Sequence

from facet_toolkit.core.models import SourceField
from facet_toolkit.core.utils import BLANK_LABEL


@dataclass(frozen=True)
class MenuSettings:
    """Engine settings; every field has a built-in default."""

    blank_label: str = BLANK_LABEL
    lineage_separator: str = "."
    default_level_name: str = "Level"
    standalone_name_pattern: str = "Filter {index}"
    filters_title: str = "Filters"
    no_results_message: str = "No results found"
    empty_title: str = "Filter Menu"
    empty_message: str = "Add fields to create filters"
    empty_instruction: str = "Drag and drop columns into the 'Filters' field well"

    def __post_init__(self):
        if not self.blank_label:
            raise ValueError("blank_label cannot be empty")

    def standalone_name(self, order: int) -> str:
        """Fallback name of the standalone filter at position *order*."""
        try:
            return self.standalone_name_pattern.format(index=order + 1)
        except (KeyError, IndexError, ValueError):
            return f"Filter {order + 1}"

    def field_from_query_name(self, display_name: str, values: Sequence[Any],
                              query_name: Optional[str]) -> SourceField:
        """Build a :class:`SourceField` whose lineage uses the configured separator."""
        return SourceField.from_query_name(display_name, values, query_name,
                                           separator=self.lineage_separator)

    @classmethod
    def from_mapping(cls, data: Optional[Mapping[str, Any]]) -> "MenuSettings":
        """Create settings from a ``filter_menu`` section; unknown keys are ignored.

        Args:
            data: Parsed YAML mapping, possibly empty or None

        Returns:
            MenuSettings instance
        """
        data = dict(data or {})
        empty_state = data.pop("empty_state", None) or {}
        known = {f.name for f in fields(cls)}
        kwargs: Dict[str, Any] = {k: str(v) for k, v in data.items() if k in known and v is not None}
        for src, dest in (("title", "empty_title"), ("message", "empty_message"),
                          ("instruction", "empty_instruction")):
            if empty_state.get(src) is not None:
                kwargs[dest] = str(empty_state[src])
        return cls(**kwargs)

    @classmethod
    def from_config(cls) -> "MenuSettings":
        """Load settings from the process-wide :class:`ConfigManager`."""
        from facet_toolkit.config import ConfigManager

        return cls.from_mapping(ConfigManager().get_filter_menu())


DEFAULT_MENU_SETTINGS = MenuSettings()
