"""States — declarations resolved into an inheritance tree.

Declarations are registered in any order and resolved once their parent
exists.  The resolved tree is immutable.
"""

from roost.states.names import is_relative, parent_name, resolve_name
from roost.states.pipeline import DEFAULT_RULES, FIELDS, FieldPipeline, StateBuilder
from roost.states.registry import Registry
from roost.states.types import State, StateDeclaration

__all__ = [
    "DEFAULT_RULES",
    "FIELDS",
    "FieldPipeline",
    "Registry",
    "State",
    "StateBuilder",
    "StateDeclaration",
    "is_relative",
    "parent_name",
    "resolve_name",
]
