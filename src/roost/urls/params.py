"""URL pattern parameters and their converters.

Built-in converters for pattern placeholders like ``{id:int}``.  The
converter regex decides which values a parameter accepts when a URL is
built from a pattern with ``UrlMatcher.format()``.
"""

import re
from dataclasses import dataclass, field
from typing import Literal, TypeAlias

# (regex_pattern, python_type) for each supported converter
CONVERTERS: dict[str, tuple[str, type]] = {
    "str": (r"[^/]+", str),
    "int": (r"\d+", int),
    "float": (r"\d+(?:\.\d+)?", float),
    "path": (r".+", str),
}

ParamLocation: TypeAlias = Literal["path", "query"]


@dataclass(frozen=True, slots=True)
class UrlParam:
    """A parameter declared by a URL pattern.

    Path:   ``/{id}``      (location="path", param_type="str")
    Typed:  ``/{id:int}``  (location="path", param_type="int")
    Query:  ``?page``      (location="query", param_type="str")
    """

    name: str
    param_type: str = "str"
    location: ParamLocation = "path"
    _regex: re.Pattern[str] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        pattern, _ = CONVERTERS[self.param_type]
        object.__setattr__(self, "_regex", re.compile(pattern))

    def accepts(self, value: object) -> bool:
        """Return True if *value*, rendered as text, fits this parameter's converter."""
        return self._regex.fullmatch(str(value)) is not None

    def convert(self, value: str) -> str | int | float:
        """Convert a captured string to the converter's Python type.

        Raises ``ValueError`` if the string cannot be converted.
        """
        _, target_type = CONVERTERS[self.param_type]
        return target_type(value)
