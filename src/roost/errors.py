"""Roost exception hierarchy.

Shared across the URL matcher, the field pipeline, the registry and the
CLI so every module raises and catches the same types.  All errors are
raised synchronously from the call that caused them; a failed
registration never leaves a partial record behind.
"""

from collections.abc import Mapping, Sequence


class RoostError(Exception):
    """Base for all roost-specific errors."""


class ConfigurationError(RoostError):
    """Raised when state or pattern configuration is invalid.

    These are programmer errors surfaced at configuration time, expected
    to be fixed in the declarations rather than recovered from.
    """


class PatternError(ConfigurationError):
    """A URL pattern string could not be compiled."""

    def __init__(self, pattern: str, reason: str) -> None:
        self.pattern = pattern
        self.reason = reason
        super().__init__(f"Invalid URL pattern {pattern!r}: {reason}")


class StateError(ConfigurationError):
    """A state declaration was rejected by the registry.

    ``state`` is the offending state's name (or the raw value when the
    name itself is what's wrong).
    """

    def __init__(self, state: object, detail: str) -> None:
        self.state = state
        self.detail = detail
        super().__init__(detail)


class InvalidName(StateError):  # noqa: N818
    """Name missing, not a string, or containing ``@``."""

    def __init__(self, name: object) -> None:
        super().__init__(name, f"State must have a valid name, got {name!r}")


class DuplicateState(StateError):  # noqa: N818
    """A state with this name is already registered or waiting to be."""

    def __init__(self, name: str) -> None:
        super().__init__(name, f"State {name!r} is already defined")


class InvalidUrl(StateError):  # noqa: N818
    """Declared ``url`` is neither a string, a matcher, nor ``None``."""

    def __init__(self, name: str, url: object) -> None:
        self.url = url
        super().__init__(name, f"Invalid url {url!r} in state {name!r}")


class ConflictingParamsAndUrl(StateError):  # noqa: N818
    """A state declared both ``params`` and ``url``."""

    def __init__(self, name: str) -> None:
        super().__init__(name, f"Both params and url specified in state {name!r}")


class InvalidParams(StateError):  # noqa: N818
    """Declared ``params`` is not an ordered sequence of names."""

    def __init__(self, name: str, params: object) -> None:
        self.params = params
        super().__init__(name, f"Invalid params {params!r} in state {name!r}")


class InvalidData(StateError):  # noqa: N818
    """Declared ``data`` is not a mapping."""

    def __init__(self, name: str, data: object) -> None:
        self.data = data
        super().__init__(name, f"Invalid data {data!r} in state {name!r}")


class InvalidViews(StateError):  # noqa: N818
    """Declared ``views`` is not a mapping of slot name to view config."""

    def __init__(self, name: str, views: object) -> None:
        self.views = views
        super().__init__(name, f"Invalid views {views!r} in state {name!r}")


class MissingRequiredParameter(StateError):  # noqa: N818
    """A state's params drop a parameter its parent requires."""

    def __init__(self, name: str, param: str) -> None:
        self.param = param
        super().__init__(name, f"Missing required parameter {param!r} in state {name!r}")


class UnresolvedStates(StateError):  # noqa: N818
    """Declarations still waiting for a parent when the registry froze.

    ``waiting`` maps each missing parent name to the names queued on it.
    """

    def __init__(self, waiting: Mapping[str, Sequence[str]]) -> None:
        self.waiting = {parent: tuple(names) for parent, names in waiting.items()}
        lines = [
            f"  {', '.join(names)} (waiting for {parent!r})"
            for parent, names in sorted(self.waiting.items())
        ]
        names = [name for group in self.waiting.values() for name in group]
        super().__init__(
            names,
            "States declared with a parent that was never registered:\n" + "\n".join(lines),
        )


class StateLookupError(RoostError):
    """A state reference could not be resolved."""


class NoReferencePoint(StateLookupError):  # noqa: N818
    """A relative reference was resolved without a base state."""

    def __init__(self, reference: str) -> None:
        self.reference = reference
        super().__init__(f"No reference point given for path {reference!r}")


class InvalidRelativePath(StateLookupError):  # noqa: N818
    """A ``^`` segment climbed above the root."""

    def __init__(self, reference: str, base: str) -> None:
        self.reference = reference
        self.base = base
        super().__init__(f"Path {reference!r} not valid for state {base!r}")


class StateNotFound(StateLookupError):  # noqa: N818
    """``Registry.require()`` found no matching state."""

    def __init__(self, reference: object) -> None:
        self.reference = reference
        super().__init__(f"No state matches {reference!r}")
