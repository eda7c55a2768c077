"""Roost — hierarchical state trees for routers.

Declare states by dotted name, in any order; roost resolves each one
against its parent into an immutable record carrying the inherited URL,
data, parameters, view slots and ancestor path.

Basic usage::

    from roost import Registry

    registry = Registry()
    registry.state("contacts.detail", url="/{id:int}")
    registry.state("contacts", url="/contacts", data={"section": "people"})

    detail = registry.find_state("contacts.detail")
    detail.url.format(id=7)        # "/contacts/7"
    detail.data["section"]         # "people"
    registry.find_state("^.list", detail)  # sibling lookup
"""

__version__ = "0.1.0"
__all__ = [
    "ConfigurationError",
    "FieldPipeline",
    "Registry",
    "RegistryConfig",
    "RoostError",
    "State",
    "StateDeclaration",
    "StateError",
    "StateLookupError",
    "UrlMatcher",
    "UrlMatcherFactory",
]

# Public name -> module that defines it
_LAZY_IMPORTS: dict[str, str] = {
    "ConfigurationError": "roost.errors",
    "FieldPipeline": "roost.states.pipeline",
    "Registry": "roost.states.registry",
    "RegistryConfig": "roost.config",
    "RoostError": "roost.errors",
    "State": "roost.states.types",
    "StateDeclaration": "roost.states.types",
    "StateError": "roost.errors",
    "StateLookupError": "roost.errors",
    "UrlMatcher": "roost.urls.matcher",
    "UrlMatcherFactory": "roost.urls.matcher",
}


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import roost`` fast while providing a clean top-level API.
    """
    module_name = _LAZY_IMPORTS.get(name)
    if module_name is None:
        msg = f"module {__name__!r} has no attribute {name!r}"
        raise AttributeError(msg)

    import importlib

    return getattr(importlib.import_module(module_name), name)
