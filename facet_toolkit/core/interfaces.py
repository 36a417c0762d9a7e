from __future__ import annotations

"""Collaborator interface definitions.

The engine talks to its host through two narrow contracts: a token minter
that hands out opaque identity tokens while trees are built, and a selection
committer that receives the resulting selection. Both are synchronous.
"""

from typing import TYPE_CHECKING, AbstractSet, Hashable, Protocol, runtime_checkable

if TYPE_CHECKING:
    from facet_toolkit.core.models import SourceField


@runtime_checkable
class TokenMinter(Protocol):
    """Callable returning the identity token of one cell.

    Called at most once per distinct value, with the row index of the first
    occurrence. The returned token must be hashable and compare by value.

    In a hierarchy whose columns differ in length, the blank value padding a
    shorter column is minted with a row index past that column's end
    (``row_index >= len(field)``). Implementations must not index
    ``field.values`` blindly; :meth:`SourceField.cell` returns None there.
    """

    def __call__(self, field: "SourceField", row_index: int) -> Hashable:
        ...


@runtime_checkable
class SelectionCommitter(Protocol):
    """Receiver of the current selection.

    ``apply_selection`` replaces the external selection with exactly the given
    identities; an empty set means "clear all". Retries and transport errors
    are the implementation's concern; exceptions raised here are logged by the
    engine and do not roll back the in-memory selection state.
    """

    def apply_selection(self, identities: AbstractSet[Hashable]) -> None:
        ...
