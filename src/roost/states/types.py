"""Data models for state declarations and resolved states.

``StateDeclaration`` is what callers hand to the registry.  ``State`` is
what the field pipeline produces from it once the parent is known.  Both
are frozen; a ``State`` is built exactly once and never changes.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from roost.urls.protocol import Matcher

# Keys of a declaration mapping that map onto StateDeclaration fields.
# Anything else is kept in ``extras`` (template, controller, resolve, ...).
DECLARATION_FIELDS = frozenset({"name", "parent", "url", "data", "params", "views", "abstract"})


@dataclass(frozen=True, slots=True, eq=False)
class StateDeclaration:
    """A state as declared, before any inheritance is applied.

    Field values are kept exactly as given; the registry and the field
    pipeline validate them (a bad ``name`` is ``InvalidName``, a bad
    ``url`` is ``InvalidUrl``, and so on).  Equality is identity, which
    is what ``Registry.find_state()`` relies on when handed a declaration.

    Attributes:
        name: Absolute dotted name, e.g. ``"contacts.detail"``.
        parent: Explicit parent name (or resolved ``State``).  When unset,
            the part of ``name`` before its last dot is the parent.
        url: ``"^/abs"``, a relative pattern, a compiled matcher, or None.
        data: Own data, overlaid on the parent's.
        params: Explicit parameter names; only for states without a url.
        views: Slot name to view config.  None means "one unnamed view
            configured by this declaration".
        abstract: Marks states that can't be transitioned to directly.
        extras: Any other declared keys, untouched.
    """

    name: Any
    parent: str | State | None = None
    url: Any = None
    data: Any = None
    params: Any = None
    views: Any = None
    abstract: bool = False
    extras: Mapping[str, Any] = field(default_factory=dict)

    @classmethod
    def from_mapping(
        cls,
        definition: Mapping[str, Any],
        *,
        name: Any = None,
    ) -> StateDeclaration:
        """Build a declaration from a plain mapping.

        *name* supplies the name positionally and wins over a ``"name"``
        key in *definition*.
        """
        known = {k: v for k, v in definition.items() if k in DECLARATION_FIELDS}
        extras = {k: v for k, v in definition.items() if k not in DECLARATION_FIELDS}
        if name is not None:
            known["name"] = name
        known.setdefault("name", None)
        return cls(**known, extras=extras)

    def __getitem__(self, key: str) -> Any:
        """Read a declared field or extra by key (``decl["template"]``)."""
        if key in DECLARATION_FIELDS:
            return getattr(self, key)
        return self.extras[key]

    def get(self, key: str, default: Any = None) -> Any:
        try:
            return self[key]
        except KeyError:
            return default

    def __repr__(self) -> str:
        return f"StateDeclaration({self.name!r})"


@dataclass(frozen=True, slots=True, eq=False, repr=False)
class State:
    """A fully resolved state.

    Created by the field pipeline once its parent is resolved; never
    mutated afterwards.

    Attributes:
        name: Absolute dotted name (``""`` for the root).
        parent: The parent state; None only for the root.
        url: Compiled matcher, or None when the state has no URL.
        data: Parent's data overlaid by this state's own (read-only).
        params: Ordered parameter names, a superset of the parent's.
        own_params: ``params`` not already required by the parent.
        views: Absolute slot name (``"view@state"``) to view config.
        includes: Names of every ancestor plus this state's own name.
        abstract: Not a direct transition target.
        declaration: The declaration this state was resolved from.
        navigable: Nearest ancestor-or-self with a URL (None for root).
        path: Ancestors from below the root down to this state, inclusive.
    """

    name: str
    parent: State | None
    url: Matcher | None
    data: Mapping[str, Any]
    params: tuple[str, ...]
    own_params: tuple[str, ...]
    views: Mapping[str, Any]
    includes: frozenset[str]
    abstract: bool
    declaration: StateDeclaration
    navigable: State | None = None
    path: tuple[State, ...] = ()

    @property
    def is_root(self) -> bool:
        return self.parent is None

    @property
    def depth(self) -> int:
        """Number of states on ``path`` (0 for the root)."""
        return len(self.path)

    def includes_state(self, state: str | State) -> bool:
        """True if *state* is this state or one of its ancestors."""
        name = state if isinstance(state, str) else state.name
        return name in self.includes

    def __repr__(self) -> str:
        return f"State({self.name!r})"

    def __str__(self) -> str:
        return self.name
