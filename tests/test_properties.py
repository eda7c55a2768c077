"""Property tests for the resolved state tree.

Random state trees are declared in random order; whatever the order, the
resolved tree must be the same and every inheritance invariant must hold.
"""

from typing import Any

from hypothesis import given, settings
from hypothesis import strategies as st

from roost.states.registry import Registry
from roost.states.types import State

_SEGMENTS = st.sampled_from(["a", "b", "c", "d"])


@st.composite
def state_trees(draw: st.DrawFn) -> list[dict[str, Any]]:
    """Declarations for a random tree, listed parents-first."""
    names: list[str] = []
    count = draw(st.integers(min_value=1, max_value=12))
    for i in range(count):
        parent = draw(st.sampled_from(["", *names])) if names else ""
        segment = f"{draw(_SEGMENTS)}{i}"
        names.append(f"{parent}.{segment}" if parent else segment)

    declarations: list[dict[str, Any]] = []
    for i, name in enumerate(names):
        declaration: dict[str, Any] = {"name": name, "data": {f"k{i % 3}": name}}
        if draw(st.booleans()):
            declaration["url"] = f"/{name.rsplit('.', 1)[-1]}/{{p{i}}}"
        declarations.append(declaration)
    return declarations


def _fingerprint(state: State) -> tuple[Any, ...]:
    return (
        state.name,
        state.parent.name if state.parent is not None else None,
        state.url.pattern if state.url is not None else None,
        state.params,
        state.own_params,
        dict(state.data),
        sorted(state.views),
        tuple(s.name for s in state.path),
        state.includes,
        state.navigable.name if state.navigable is not None else None,
    )


def _tree(registry: Registry) -> dict[str, tuple[Any, ...]]:
    return {state.name: _fingerprint(state) for state in registry}


@given(state_trees(), st.randoms(use_true_random=False))
@settings(max_examples=75)
def test_registration_order_does_not_matter(
    declarations: list[dict[str, Any]], rnd: Any
) -> None:
    in_order = Registry.from_declarations(declarations)

    shuffled = list(declarations)
    rnd.shuffle(shuffled)
    out_of_order = Registry.from_declarations(shuffled)

    assert _tree(out_of_order) == _tree(in_order)


@given(state_trees())
def test_params_are_superset_of_parent(declarations: list[dict[str, Any]]) -> None:
    registry = Registry.from_declarations(declarations)
    for state in registry:
        if state.parent is not None:
            assert set(state.params) >= set(state.parent.params)
            assert set(state.own_params).isdisjoint(state.parent.params)


@given(state_trees())
def test_includes_are_ancestors_or_self(declarations: list[dict[str, Any]]) -> None:
    registry = Registry.from_declarations(declarations)
    for state in registry:
        path_names = {s.name for s in state.path}
        # The root is an ancestor of every state but never on a path.
        assert state.includes == path_names | {state.name, ""}


@given(state_trees())
def test_path_matches_depth(declarations: list[dict[str, Any]]) -> None:
    registry = Registry.from_declarations(declarations)
    for state in registry:
        if state is registry.root:
            assert state.path == ()
            continue
        assert state.depth == state.name.count(".") + 1
        assert state.path[-1] is state
        for parent, child in zip(state.path, state.path[1:], strict=False):
            assert child.parent is parent


@given(state_trees())
def test_data_inherits_and_overrides(declarations: list[dict[str, Any]]) -> None:
    registry = Registry.from_declarations(declarations)
    for state in registry:
        if state.parent is None:
            continue
        own = state.declaration.data or {}
        for key, value in state.parent.data.items():
            assert state.data[key] == own.get(key, value)


@given(state_trees())
def test_navigable_is_nearest_ancestor_with_url(declarations: list[dict[str, Any]]) -> None:
    registry = Registry.from_declarations(declarations)
    for state in registry:
        if state is registry.root:
            continue
        with_url = [s for s in state.path if s.url is not None]
        expected = with_url[-1] if with_url else None
        assert state.navigable is expected
