from __future__ import annotations

"""Filter engine exception classes.

Recoverable conditions (ragged rows, lookup misses, stale parent references)
are absorbed where they occur and never surface as exceptions. The classes
below cover API misuse by the host and failures of external collaborators.
"""

from typing import Optional


class FacetError(Exception):
    """Base exception for all filter-engine errors."""

    def __init__(self, message: str, group: Optional[str] = None,
                 cause: Optional[BaseException] = None) -> None:
        super().__init__(message)
        self.group = group
        self.cause = cause

    def __str__(self) -> str:
        if self.group:
            return f"[Group: {self.group}] {self.args[0]}"
        return str(self.args[0])


class UnknownGroupError(FacetError, KeyError):
    """Raised when a group name is not present in the filter store."""

    def __init__(self, group: str) -> None:
        super().__init__(f"No filter group named '{group}'", group=group)


class SelectionCommitError(FacetError):
    """Raised when the selection-commit collaborator rejects a selection.

    Carries the identity set that was being applied so callers can log or
    retry it.
    """

    def __init__(self, message: str, identities: frozenset = frozenset(),
                 cause: Optional[BaseException] = None) -> None:
        super().__init__(message, cause=cause)
        self.identities = identities
