from __future__ import annotations

"""Partition incoming fields into standalone filters and hierarchies.

Fields sharing a lineage key collapse into one hierarchy whose levels follow
the input field order; every other field becomes a standalone filter.
Groups are emitted in the order their first field appears, which makes the
result stable across rebuilds with the same field order.
"""

import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence, Set, Tuple

from facet_toolkit.core.models import SourceField
from facet_toolkit.core.models.menu_config import DEFAULT_MENU_SETTINGS, MenuSettings

__all__ = ["FieldGroupSpec", "group_fields"]

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FieldGroupSpec:
    """Fields that make up one filter group, before any values are built."""

    name: str
    order: int
    fields: Tuple[SourceField, ...]
    is_hierarchy: bool

    @property
    def lineage_key(self) -> Optional[str]:
        return self.fields[0].lineage_key if self.fields else None

def group_fields(fields: Sequence[SourceField],
                 settings: Optional[MenuSettings] = None) -> List[FieldGroupSpec]:
    """Return the ordered group specs for *fields*.

    A field without a lineage key is always standalone, even if another field
    shares its display name. Group names are unique: a repeated name gets an
    ordinal suffix (``"Region"``, ``"Region (2)"``) so every group stays
    addressable by name.
    """
    settings = settings or DEFAULT_MENU_SETTINGS
    specs: List[FieldGroupSpec] = []
    consumed = [False] * len(fields)
    taken: Set[str] = set()

    for idx, current in enumerate(fields):
        if consumed[idx]:
            continue

        members = [idx]
        if current.lineage_key is not None:
            members = [
                other_idx for other_idx in range(idx, len(fields))
                if not consumed[other_idx] and fields[other_idx].lineage_key == current.lineage_key
            ]
        for member in members:
            consumed[member] = True

        order = len(specs)
        collected = tuple(fields[i] for i in members)
        if len(collected) > 1:
            name = _unique_name(current.display_name or current.lineage_key or settings.standalone_name(order), taken)
            specs.append(FieldGroupSpec(name=name, order=order, fields=collected, is_hierarchy=True))
            logger.debug("Found hierarchy %r with %d levels", name, len(collected))
        else:
            name = _unique_name(current.display_name or settings.standalone_name(order), taken)
            specs.append(FieldGroupSpec(name=name, order=order, fields=collected, is_hierarchy=False))
            logger.debug("Single column: %r", name)

    logger.debug("Grouped %d fields into %d groups", len(fields), len(specs))
    return specs


def _unique_name(name: str, taken: Set[str]) -> str:
    candidate = name
    suffix = 2
    while candidate in taken:
        candidate = f"{name} ({suffix})"
        suffix += 1
    if candidate != name:
        logger.debug("Group name %r already used; renamed to %r", name, candidate)
    taken.add(candidate)
    return candidate
