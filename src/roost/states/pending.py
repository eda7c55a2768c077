"""Declarations waiting for their parent to be registered."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from roost.states.types import StateDeclaration


class PendingQueue:
    """Declarations keyed by the parent name they are waiting on.

    Each parent's waiters are kept in arrival order; ``pop()`` hands them
    back in that order so the registry can register them once the parent
    exists.
    """

    __slots__ = ("_names", "_waiting")

    def __init__(self) -> None:
        self._waiting: dict[str, list[StateDeclaration]] = {}
        self._names: set[str] = set()

    def add(self, parent: str, declaration: StateDeclaration) -> None:
        self._waiting.setdefault(parent, []).append(declaration)
        self._names.add(declaration.name)

    def pop(self, parent: str) -> list[StateDeclaration]:
        """Remove and return everything waiting on *parent*."""
        declarations = self._waiting.pop(parent, [])
        for declaration in declarations:
            self._names.discard(declaration.name)
        return declarations

    def waiting(self) -> dict[str, tuple[str, ...]]:
        """Missing parent name -> names of the declarations waiting on it."""
        return {
            parent: tuple(d.name for d in declarations)
            for parent, declarations in self._waiting.items()
        }

    def __contains__(self, name: object) -> bool:
        """True if a declaration named *name* is waiting."""
        return name in self._names

    def __len__(self) -> int:
        return len(self._names)
