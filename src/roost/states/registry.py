"""State registry — resolves declarations into a tree of ``State`` records.

Declarations may arrive in any order.  One whose parent isn't registered
yet waits in a ``PendingQueue`` under that parent's name; registering the
parent then registers everything that was waiting on it, recursively and
in arrival order.

The registry is built up during setup and read-only afterwards:
``freeze()`` closes registration and reports declarations still waiting
for a parent that never arrived.
"""

from __future__ import annotations

import dataclasses
import logging
from collections.abc import Iterable, Iterator, Mapping
from typing import Any, TypeAlias

from roost.config import RegistryConfig
from roost.errors import DuplicateState, InvalidName, StateNotFound, UnresolvedStates
from roost.states.names import is_relative, parent_name, resolve_name
from roost.states.pending import PendingQueue
from roost.states.pipeline import FieldPipeline, RuleWrapper
from roost.states.types import State, StateDeclaration
from roost.urls.matcher import UrlMatcherFactory
from roost.urls.protocol import MatcherFactory

logger = logging.getLogger("roost.registry")

Declaration: TypeAlias = StateDeclaration | Mapping[str, Any]
StateRef: TypeAlias = State | StateDeclaration | str


class Registry:
    """Mapping of absolute state name to resolved ``State``.

    Usage::

        registry = Registry()
        registry.state("contacts.detail", url="/{id:int}")  # waits for "contacts"
        registry.state("contacts", url="/contacts")          # registers both
        registry.find_state("contacts.detail").url           # /contacts/{id:int}

    The root state (``""``) is registered on construction.  It is abstract
    and, although it carries the root URL, is never anyone's navigable
    state.
    """

    __slots__ = ("_frozen", "_matchers", "_pending", "_pipeline", "_states", "config", "root")

    def __init__(
        self,
        config: RegistryConfig | None = None,
        *,
        matchers: MatcherFactory | None = None,
        pipeline: FieldPipeline | None = None,
    ) -> None:
        self.config: RegistryConfig = config or RegistryConfig()
        self._matchers: MatcherFactory = matchers or UrlMatcherFactory()
        self._pipeline: FieldPipeline = pipeline or FieldPipeline()
        self._states: dict[str, State] = {}
        self._pending = PendingQueue()
        self._frozen = False

        root = self.register(
            StateDeclaration(name="", url=self.config.root_url, views={}, abstract=True)
        )
        assert root is not None
        object.__setattr__(root, "navigable", None)
        self.root: State = root

    @classmethod
    def from_declarations(
        cls,
        declarations: Iterable[Declaration],
        config: RegistryConfig | None = None,
        *,
        matchers: MatcherFactory | None = None,
    ) -> Registry:
        """Register every declaration, then freeze."""
        registry = cls(config, matchers=matchers)
        for declaration in declarations:
            registry.register(declaration)
        registry.freeze()
        return registry

    # -- Registration --

    def state(
        self,
        name: str | Declaration,
        definition: Declaration | None = None,
        /,
        **fields: Any,
    ) -> Registry:
        """Declare a state. Chainable.

        Accepts a whole declaration, or a name plus a definition mapping
        and/or keyword fields::

            registry.state({"name": "home", "url": "/"})
            registry.state("about", {"url": "/about"})
            registry.state("contacts", url="/contacts", data={"nav": True})
        """
        if isinstance(name, StateDeclaration):
            declaration = dataclasses.replace(name, **fields) if fields else name
        elif isinstance(name, Mapping):
            declaration = StateDeclaration.from_mapping({**name, **fields})
        elif isinstance(definition, StateDeclaration):
            declaration = dataclasses.replace(definition, name=name, **fields)
        else:
            declaration = StateDeclaration.from_mapping({**(definition or {}), **fields}, name=name)

        self.register(declaration)
        return self

    def register(self, declaration: Declaration) -> State | None:
        """Register a declaration.

        Returns the resolved ``State``, or None when the declaration has
        to wait for its parent.

        Raises ``InvalidName`` or ``DuplicateState`` immediately, and any
        ``StateError`` from the field pipeline once the state resolves.
        When states queued on this one are rejected, every other queued
        state is still registered and the first rejection is raised.
        """
        self._check_not_frozen()
        if not isinstance(declaration, StateDeclaration):
            declaration = StateDeclaration.from_mapping(declaration)

        name = declaration.name
        if not isinstance(name, str) or "@" in name:
            raise InvalidName(name)
        if name in self._states or name in self._pending:
            raise DuplicateState(name)

        parent = parent_name(declaration)
        if parent and parent not in self._states:
            logger.debug("State %r waits for parent %r", name, parent)
            self._pending.add(parent, declaration)
            return None

        return self._resolve(declaration)

    def _resolve(self, declaration: StateDeclaration) -> State:
        state = self._pipeline.resolve(
            declaration,
            matchers=self._matchers,
            lookup=self._states.get,
        )
        self._states[state.name] = state
        logger.debug("Registered state %r (url=%s)", state.name, state.url)

        waiting = self._pending.pop(state.name)
        if waiting:
            logger.debug("Registering %d state(s) queued on %r", len(waiting), state.name)

        # A rejected child must not cost its siblings their registration.
        failure: Exception | None = None
        for child in waiting:
            try:
                self.register(child)
            except Exception as exc:
                logger.debug("Queued state %r rejected: %s", child.name, exc)
                if failure is None:
                    failure = exc
        if failure is not None:
            raise failure
        return state

    def decorate(self, field: str, wrapper: RuleWrapper) -> Registry:
        """Wrap the pipeline rule for *field*. Chainable.

        Affects states registered from now on.
        """
        self._check_not_frozen()
        self._pipeline.decorate(field, wrapper)
        return self

    # -- Lookup --

    def find_state(self, reference: StateRef, base: State | str | None = None) -> State | None:
        """Look up a state by name, relative name, state, or declaration.

        Relative names (``"."``, ``"^.sibling"``) are resolved against
        *base*.  A ``State`` or ``StateDeclaration`` reference only
        matches the registered state that is, or was built from, it.

        Returns None if nothing matches.
        Raises ``NoReferencePoint`` / ``InvalidRelativePath`` for
        unresolvable relative names.
        """
        by_name = isinstance(reference, str)
        name = reference if by_name else reference.name

        if isinstance(name, str) and is_relative(name):
            if isinstance(base, str):
                base = self._states.get(base)
            name = resolve_name(name, base)

        state = self._states.get(name)
        if state is None:
            return None
        if by_name or state is reference or state.declaration is reference:
            return state
        return None

    def require(self, reference: StateRef, base: State | str | None = None) -> State:
        """Like ``find_state()`` but raises ``StateNotFound`` instead of returning None."""
        state = self.find_state(reference, base)
        if state is None:
            raise StateNotFound(reference)
        return state

    def get(self, name: str) -> State | None:
        """Look up a state by absolute name. Returns ``None`` if not found."""
        return self._states.get(name)

    @property
    def states(self) -> list[State]:
        """Every registered state, root first, in registration order."""
        return list(self._states.values())

    @property
    def pending(self) -> dict[str, tuple[str, ...]]:
        """Missing parent name -> names of declarations still waiting on it."""
        return self._pending.waiting()

    def __len__(self) -> int:
        return len(self._states)

    def __contains__(self, name: object) -> bool:
        return name in self._states

    def __iter__(self) -> Iterator[State]:
        return iter(self._states.values())

    # -- Lifecycle --

    @property
    def frozen(self) -> bool:
        return self._frozen

    def freeze(self) -> None:
        """Close registration.

        Declarations still waiting for a parent raise ``UnresolvedStates``
        when ``config.strict`` is set; otherwise they are logged and
        left unresolved.
        """
        if self._frozen:
            return

        waiting = self._pending.waiting()
        if waiting:
            if self.config.strict:
                raise UnresolvedStates(waiting)
            for parent, names in waiting.items():
                logger.warning(
                    "Parent %r was never registered; ignoring %s",
                    parent,
                    ", ".join(repr(n) for n in names),
                )
        self._frozen = True

    def _check_not_frozen(self) -> None:
        if self._frozen:
            msg = (
                "Cannot modify the registry after it has been frozen. "
                "Declare every state before calling registry.freeze()."
            )
            raise RuntimeError(msg)
