from __future__ import annotations

"""Simple reusable helper functions.

These helpers are side-effect-free and contain no GUI or I/O; they are shared
by every layer of the toolkit.
"""

import math
from typing import Any, Optional

__all__ = [
    "BLANK_LABEL",
    "is_blank",
    "canonical_key",
    "expansion_key",
    "lineage_from_query_name",
]

BLANK_LABEL = "(Blank)"


def is_blank(raw: Any) -> bool:
    """Return True when *raw* represents a null / absent cell.

    ``None`` and float NaN (how pandas-backed hosts report missing cells) are
    blank; empty strings are real values.
    """
    if raw is None:
        return True
    if isinstance(raw, float) and math.isnan(raw):
        return True
    return False


def canonical_key(raw: Any, blank_label: str = BLANK_LABEL) -> str:
    """Map a raw cell to its canonical string key.

    Examples:
        >>> canonical_key("Apple")
        'Apple'
        >>> canonical_key(2024)
        '2024'
        >>> canonical_key(None)
        '(Blank)'
    """
    if is_blank(raw):
        return blank_label
    return str(raw)


def expansion_key(group_name: str, level_index: int, key: str) -> str:
    """Return the structural key ``group|level|key`` of a tree node."""
    return f"{group_name}|{level_index}|{key}"


def lineage_from_query_name(query_name: Optional[str], separator: str = ".") -> Optional[str]:
    """Return the lineage part of a host query name.

    The lineage is everything before the first *separator*; fields sharing it
    belong to the same hierarchy. Missing or empty query names have no lineage.

    Examples:
        >>> lineage_from_query_name("Calendar.Year")
        'Calendar'
        >>> lineage_from_query_name("Region")
        'Region'
        >>> lineage_from_query_name(None) is None
        True
    """
    if not query_name:
        return None
    base = query_name.split(separator, 1)[0] if separator else query_name
    return base or None
