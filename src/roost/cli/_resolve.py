"""Locate the registry a CLI command should inspect."""

import importlib
from collections.abc import Iterable, Mapping

from roost.states.registry import Registry
from roost.states.types import StateDeclaration


def resolve_registry(import_string: str) -> Registry:
    """Load the registry named by ``"package.module[:name]"``.

    *name* defaults to ``registry``.  It may also name a zero-argument
    function, which is called, or a list of declarations, which is
    registered into a fresh ``Registry`` left unfrozen so ``roost check``
    can report orphans itself.

    Raises ``ModuleNotFoundError`` / ``AttributeError`` when the target
    can't be found and ``TypeError`` when it doesn't produce a registry.
    """
    module_name, _, attr = import_string.partition(":")
    target = getattr(importlib.import_module(module_name), attr or "registry")

    if callable(target) and not isinstance(target, Registry):
        try:
            target = target()
        except Exception as exc:
            msg = f"Calling {import_string!r} failed: {exc}"
            raise TypeError(msg) from exc

    if isinstance(target, Registry):
        return target
    if isinstance(target, Iterable) and not isinstance(target, (str, bytes, Mapping)):
        declarations = list(target)
        if all(isinstance(d, (StateDeclaration, Mapping)) for d in declarations):
            registry = Registry()
            for declaration in declarations:
                registry.register(declaration)
            return registry

    msg = f"{import_string!r} gave {type(target).__name__}, not a roost.Registry instance"
    raise TypeError(msg)
