"""Field resolution pipeline — turns a declaration into a ``State``.

Each resolved field has one rule.  Rules run in a fixed order over a
mutable ``StateBuilder``; a rule may read any field an earlier rule set
on the same builder, and any field of the (already resolved) parent.

Order:

1. ``parent``      the parent ``State``
2. ``data``        parent data overlaid by own data
3. ``url``         compiled matcher (absolute, relative, or as given)
4. ``navigable``   nearest ancestor-or-self with a url
5. ``params``      declared, derived from the url, or inherited
6. ``views``       absolute ``"view@state"`` slot map
7. ``own_params``  params not required by the parent
8. ``path``        ancestors below the root, ending with this state
9. ``includes``    ancestor-or-self names

Rules can be swapped (``replace``) or wrapped (``decorate``), but the
order above is fixed.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, TypeAlias

from roost.errors import (
    ConfigurationError,
    ConflictingParamsAndUrl,
    InvalidData,
    InvalidParams,
    InvalidUrl,
    InvalidViews,
    MissingRequiredParameter,
)
from roost.states.names import parent_name
from roost.states.types import State, StateDeclaration
from roost.urls.protocol import Matcher, MatcherFactory

FIELDS: tuple[str, ...] = (
    "parent",
    "data",
    "url",
    "navigable",
    "params",
    "views",
    "own_params",
    "path",
    "includes",
)


@dataclass(slots=True)
class StateBuilder:
    """Intermediate record filled in by the pipeline. Mutable during resolution only.

    ``navigable`` and ``path`` refer to the builder itself where the
    finished state should refer to itself; ``build()`` swaps those
    references for the new ``State``.
    """

    declaration: StateDeclaration
    matchers: MatcherFactory
    lookup: Callable[[str], State | None]
    parent: State | None = None
    data: Mapping[str, Any] = field(default_factory=dict)
    url: Matcher | None = None
    navigable: State | StateBuilder | None = None
    params: tuple[str, ...] = ()
    views: Mapping[str, Any] = field(default_factory=dict)
    own_params: tuple[str, ...] = ()
    path: tuple[State | StateBuilder, ...] = ()
    includes: frozenset[str] = frozenset()

    @property
    def name(self) -> str:
        return self.declaration.name

    def build(self) -> State:
        state = State(
            name=self.name,
            parent=self.parent,
            url=self.url,
            data=MappingProxyType(dict(self.data)),
            params=self.params,
            own_params=self.own_params,
            views=MappingProxyType(dict(self.views)),
            includes=self.includes,
            abstract=bool(self.declaration.abstract),
            declaration=self.declaration,
        )
        # Self-references can only be filled in once the State exists.
        navigable = state if self.navigable is self else self.navigable
        object.__setattr__(state, "navigable", navigable)
        object.__setattr__(state, "path", tuple(state if s is self else s for s in self.path))
        return state


Rule: TypeAlias = Callable[[StateBuilder], Any]
RuleWrapper: TypeAlias = Callable[[StateBuilder, Rule], Any]


def _root_of(state: State) -> State:
    while state.parent is not None:
        state = state.parent
    return state


def resolve_parent(builder: StateBuilder) -> State | None:
    if builder.name == "":
        return None
    return builder.lookup(parent_name(builder.declaration))


def resolve_data(builder: StateBuilder) -> Mapping[str, Any]:
    own = builder.declaration.data
    if own is None:
        own = {}
    elif not isinstance(own, Mapping):
        raise InvalidData(builder.name, own)
    inherited = builder.parent.data if builder.parent is not None else {}
    return {**inherited, **own}


def resolve_url(builder: StateBuilder) -> Matcher | None:
    url = builder.declaration.url

    if isinstance(url, str):
        if url.startswith("^"):
            return builder.matchers.compile(url[1:])
        if builder.parent is None:
            return builder.matchers.compile(url)
        anchor = builder.parent.navigable or _root_of(builder.parent)
        if anchor.url is None:
            return builder.matchers.compile(url)
        return anchor.url.concat(url)

    if url is None or builder.matchers.is_matcher(url):
        return url
    raise InvalidUrl(builder.name, url)


def resolve_navigable(builder: StateBuilder) -> State | StateBuilder | None:
    if builder.url is not None:
        return builder
    return builder.parent.navigable if builder.parent is not None else None


def resolve_params(builder: StateBuilder) -> tuple[str, ...]:
    declared = builder.declaration.params

    if declared is None:
        if builder.url is not None:
            return tuple(builder.url.parameters())
        return builder.parent.params if builder.parent is not None else ()

    if not isinstance(declared, (list, tuple)) or not all(isinstance(p, str) for p in declared):
        raise InvalidParams(builder.name, declared)
    if builder.url is not None:
        raise ConflictingParamsAndUrl(builder.name)
    return tuple(declared)


def resolve_views(builder: StateBuilder) -> dict[str, Any]:
    # No explicit views: the declaration itself configures the one unnamed view.
    declared = builder.declaration.views
    slots = {"": builder.declaration} if declared is None else declared
    if not isinstance(slots, Mapping):
        raise InvalidViews(builder.name, declared)

    owner = builder.parent.name if builder.parent is not None else ""
    views: dict[str, Any] = {}
    for slot, view in slots.items():
        if not isinstance(slot, str):
            raise InvalidViews(builder.name, declared)
        if "@" not in slot:
            slot = f"{slot}@{owner}"
        views[slot] = view
    return views


def resolve_own_params(builder: StateBuilder) -> tuple[str, ...]:
    if builder.parent is None:
        return builder.params

    required = builder.parent.params
    for param in required:
        if param not in builder.params:
            raise MissingRequiredParameter(builder.name, param)
    return tuple(dict.fromkeys(p for p in builder.params if p not in required))


def resolve_path(builder: StateBuilder) -> tuple[State | StateBuilder, ...]:
    # Root is excluded from every path.
    if builder.parent is None:
        return ()
    return (*builder.parent.path, builder)


def resolve_includes(builder: StateBuilder) -> frozenset[str]:
    inherited = builder.parent.includes if builder.parent is not None else frozenset()
    return inherited | {builder.name}


DEFAULT_RULES: Mapping[str, Rule] = MappingProxyType(
    {
        "parent": resolve_parent,
        "data": resolve_data,
        "url": resolve_url,
        "navigable": resolve_navigable,
        "params": resolve_params,
        "views": resolve_views,
        "own_params": resolve_own_params,
        "path": resolve_path,
        "includes": resolve_includes,
    }
)


class FieldPipeline:
    """Ordered set of field rules.

    Usage::

        pipeline = FieldPipeline()

        def tag_data(builder, inner):
            return {**inner(builder), "section": builder.name.split(".")[0]}

        pipeline.decorate("data", tag_data)
        state = pipeline.resolve(declaration, matchers=factory, lookup=states.get)
    """

    __slots__ = ("_rules",)

    def __init__(self, rules: Mapping[str, Rule] | None = None) -> None:
        self._rules: dict[str, Rule] = dict(DEFAULT_RULES)
        for name, rule in (rules or {}).items():
            self.replace(name, rule)

    def _check_field(self, name: str) -> None:
        if name not in self._rules:
            msg = f"Unknown state field {name!r}. Known fields: {', '.join(FIELDS)}"
            raise ConfigurationError(msg)

    def rule(self, name: str) -> Rule:
        self._check_field(name)
        return self._rules[name]

    def replace(self, name: str, rule: Rule) -> None:
        """Swap the rule for field *name*."""
        self._check_field(name)
        self._rules[name] = rule

    def decorate(self, name: str, wrapper: RuleWrapper) -> None:
        """Wrap the current rule for *name*.

        *wrapper* is called as ``wrapper(builder, inner)`` and may call
        ``inner(builder)`` to get the value the wrapped rule would produce.
        """
        inner = self.rule(name)

        def decorated(builder: StateBuilder) -> Any:
            return wrapper(builder, inner)

        self._rules[name] = decorated

    def run(self, builder: StateBuilder) -> StateBuilder:
        for name in FIELDS:
            setattr(builder, name, self._rules[name](builder))
        return builder

    def resolve(
        self,
        declaration: StateDeclaration,
        *,
        matchers: MatcherFactory,
        lookup: Callable[[str], State | None],
    ) -> State:
        """Run every rule over *declaration* and return the finished ``State``."""
        builder = StateBuilder(declaration, matchers, lookup)
        return self.run(builder).build()
