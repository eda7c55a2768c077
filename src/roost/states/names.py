"""State name resolution.

Absolute names are dotted paths from the root (``"contacts.detail"``).
Relative names start with ``.`` or ``^`` and are resolved against a base
state:

    ``"."``            the base itself
    ``".list"``        child ``list`` of the base
    ``"^"``            the base's parent
    ``"^.sibling"``    sibling ``sibling`` of the base
    ``"^.^.other"``    ``other`` under the base's grandparent
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from roost.errors import InvalidRelativePath, NoReferencePoint

if TYPE_CHECKING:
    from roost.states.types import State, StateDeclaration


def is_relative(name: str) -> bool:
    return name.startswith((".", "^"))


def parent_name(declaration: StateDeclaration) -> str:
    """Name of the state *declaration* hangs under.

    An explicit ``parent`` wins; otherwise everything before the last dot
    of the name; otherwise the root (``""``).
    """
    parent = declaration.parent
    if isinstance(parent, str) and parent:
        return parent
    if parent is not None and not isinstance(parent, str):
        return parent.name

    name = declaration.name
    if isinstance(name, str) and "." in name:
        return name.rsplit(".", 1)[0]
    return ""


def resolve_name(name: str, base: State | None) -> str:
    """Turn a possibly-relative state name into an absolute one.

    Raises ``NoReferencePoint`` if *name* is relative and *base* is None.
    Raises ``InvalidRelativePath`` if a ``^`` climbs above the root.
    """
    if not is_relative(name):
        return name
    if base is None:
        raise NoReferencePoint(name)

    segments = name.split(".")
    current = base
    consumed = 0
    for i, segment in enumerate(segments):
        if segment == "" and i == 0:
            current = base
        elif segment == "^":
            if current.parent is None:
                raise InvalidRelativePath(name, base.name)
            current = current.parent
        else:
            break
        consumed = i + 1

    rest = ".".join(segments[consumed:])
    separator = "." if current.name and rest else ""
    return current.name + separator + rest
