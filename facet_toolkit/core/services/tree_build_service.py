from __future__ import annotations

"""Build deduplicated value trees and lists from raw columns.

Hierarchies are built in two passes over the rows. The first pass creates one
:class:`FilterValue` per distinct canonical key and level, minting its
identity token from the first row where the key occurs. The second pass links
each parent value to the child values it co-occurs with on the same row.
Linking only starts once every level is deduplicated.

Neither values nor children are ever sorted: the first-seen order of the
source is kept, so ordinal columns (months, ranked categories) stay ordinal.

Multi-parent values
-------------------
A key is represented by a single node per level. When it co-occurs with
several parents it is appended to the children of each of them, and its
``parent_key`` follows the last parent it was appended under during the row
scan. Upward recomputation therefore updates that last parent only.

Examples
--------
    service = TreeBuildService()
    result = service.build_hierarchy([category_field, product_field])
    roots = result.levels[0].values
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Tuple

from facet_toolkit.core.models import (
    FilterValue,
    HierarchyLevel,
    SourceField,
    default_token_minter,
)
from facet_toolkit.core.interfaces import TokenMinter
from facet_toolkit.core.models.menu_config import DEFAULT_MENU_SETTINGS, MenuSettings
from facet_toolkit.core.utils import canonical_key

__all__ = ["HierarchyBuildResult", "TreeBuildService"]

logger = logging.getLogger(__name__)

SkippedEdge = Tuple[int, int, str, str]


@dataclass
class HierarchyBuildResult:
    """Levels of one hierarchy plus the edges the link pass had to skip.

    Attributes
    ----------
    levels
        One :class:`HierarchyLevel` per input field, level 0 holding the roots.
    skipped_edges
        ``(row, level_index, parent_key, child_key)`` for each lookup miss.
    """

    levels: List[HierarchyLevel] = field(default_factory=list)
    skipped_edges: List[SkippedEdge] = field(default_factory=list)

    @property
    def roots(self) -> List[FilterValue]:
        return self.levels[0].values if self.levels else []


class TreeBuildService:
    """Turn raw columns into value nodes.

    Parameters
    ----------
    token_minter : TokenMinter, optional
        ``(field, row_index) -> token`` supplied by the host. Called once per
        distinct value, at its first occurrence (possibly past the end of a
        shorter column, see :class:`TokenMinter`).
    settings : MenuSettings, optional
        Supplies the blank label and the default level name.
    """

    def __init__(self, token_minter: Optional[TokenMinter] = None,
                 settings: Optional[MenuSettings] = None) -> None:
        self._mint = token_minter or default_token_minter
        self._settings = settings or DEFAULT_MENU_SETTINGS

    # -------------------------------------------------------------------------
    # Public API
    # -------------------------------------------------------------------------

    def build_hierarchy(self, fields: Sequence[SourceField]) -> HierarchyBuildResult:
        """Build the linked levels of one hierarchy.

        The row count is that of the longest column; cells past the end of a
        shorter column read as blank, so no row is dropped.
        """
        result = HierarchyBuildResult()
        if not fields:
            return result

        blank = self._settings.blank_label
        row_count = max(len(f) for f in fields)

        # Pass 1: dedup every level before any linking happens
        by_level: List[Dict[str, FilterValue]] = []
        for level_idx, source in enumerate(fields):
            unique: Dict[str, FilterValue] = {}
            for row in range(row_count):
                key = canonical_key(source.cell(row), blank)
                if key not in unique:
                    unique[key] = FilterValue(key=key, identity=self._mint(source, row), level=level_idx)
            by_level.append(unique)

        # Pass 2: link adjacent levels row by row
        for row in range(row_count):
            for level_idx in range(len(fields) - 1):
                parent_key = canonical_key(fields[level_idx].cell(row), blank)
                child_key = canonical_key(fields[level_idx + 1].cell(row), blank)
                parent = by_level[level_idx].get(parent_key)
                child = by_level[level_idx + 1].get(child_key)
                if parent is None or child is None:
                    result.skipped_edges.append((row, level_idx, parent_key, child_key))
                    logger.warning(
                        "Could not link %r -> %r at row %d (parent found: %s, child found: %s)",
                        parent_key, child_key, row, parent is not None, child is not None,
                    )
                    continue
                if parent.add_child(child):
                    logger.debug("Linked: %s -> %s", parent.key, child.key)

        for level_idx, source in enumerate(fields):
            result.levels.append(HierarchyLevel(
                name=source.display_name or self._settings.default_level_name,
                level_index=level_idx,
                values=list(by_level[level_idx].values()),
            ))

        logger.info(
            "Built hierarchy over %d rows: %s",
            row_count,
            ", ".join(f"{lvl.name}={len(lvl.values)}" for lvl in result.levels),
        )
        return result

    def build_standalone(self, source: SourceField) -> List[FilterValue]:
        """Return the distinct values of *source* in first-occurrence order."""
        blank = self._settings.blank_label
        first_seen: Dict[str, int] = {}
        for row, raw in enumerate(source.values):
            key = canonical_key(raw, blank)
            if key not in first_seen:
                first_seen[key] = row

        values = [
            FilterValue(key=key, identity=self._mint(source, row), level=0)
            for key, row in first_seen.items()
        ]
        logger.debug("Built standalone filter %r with %d values", source.display_name, len(values))
        return values
