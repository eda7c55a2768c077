"""Compiled URL patterns for state declarations.

A pattern is a path with ``{param}`` / ``{param:type}`` placeholders and
an optional ``?a&b`` list of query parameters::

    "/contacts"                  -> no parameters
    "/contacts/{id:int}"         -> ("id",)
    "/search/{term}?page&sort"   -> ("term", "page", "sort")

Matchers are immutable.  ``concat()`` returns a new matcher, which is how
a child state's relative URL is appended to its navigable ancestor's.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping
from urllib.parse import quote

from roost.errors import PatternError
from roost.urls.params import CONVERTERS, UrlParam

logger = logging.getLogger("roost.urls")

# {name} or {name:type}
_PLACEHOLDER_RE = re.compile(r"\{(\w+)(?::(\w+))?\}")

# Flask/Werkzeug-style <param> placeholders
_ANGLE_PARAM_RE = re.compile(r"<[^>]+>")

_QUERY_NAME_RE = re.compile(r"^\w+$")


def _split_pattern(pattern: str) -> tuple[str, str]:
    """Split a pattern into its path and query parts (without the ``?``)."""
    path, _, search = pattern.partition("?")
    return path, search


def _parse_path_params(pattern: str, path: str) -> list[UrlParam]:
    if _ANGLE_PARAM_RE.search(path):
        reason = "use {param} placeholders, not <param>"
        raise PatternError(pattern, reason)

    params: list[UrlParam] = []
    for match in _PLACEHOLDER_RE.finditer(path):
        name, param_type = match.group(1), match.group(2) or "str"
        if param_type not in CONVERTERS:
            reason = f"unknown converter {param_type!r} for parameter {name!r}"
            raise PatternError(pattern, reason)
        params.append(UrlParam(name, param_type, "path"))

    leftover = _PLACEHOLDER_RE.sub("", path)
    if "{" in leftover or "}" in leftover:
        raise PatternError(pattern, "unbalanced or malformed placeholder braces")
    return params


def _parse_query_params(pattern: str, search: str) -> list[UrlParam]:
    params: list[UrlParam] = []
    for name in search.split("&"):
        if not name:
            continue
        if not _QUERY_NAME_RE.match(name):
            raise PatternError(pattern, f"invalid query parameter name {name!r}")
        params.append(UrlParam(name, "str", "query"))
    return params


class UrlMatcher:
    """A compiled URL pattern.

    Usage::

        contacts = UrlMatcher("/contacts")
        detail = contacts.concat("/{id:int}")
        detail.parameters()        # ("id",)
        detail.format(id=42)       # "/contacts/42"
    """

    __slots__ = ("_params", "pattern", "source_path", "source_search")

    def __init__(self, pattern: str) -> None:
        if not isinstance(pattern, str):
            raise PatternError(repr(pattern), "pattern must be a string")

        self.pattern = pattern
        self.source_path, self.source_search = _split_pattern(pattern)

        params = _parse_path_params(pattern, self.source_path)
        params.extend(_parse_query_params(pattern, self.source_search))

        seen: set[str] = set()
        for param in params:
            if param.name in seen:
                raise PatternError(pattern, f"duplicate parameter name {param.name!r}")
            seen.add(param.name)

        self._params: tuple[UrlParam, ...] = tuple(params)

    def concat(self, pattern: str) -> UrlMatcher:
        """Return a new matcher with *pattern* appended to this one's path.

        Query parameters of both patterns are kept, this matcher's first.
        """
        path, search = _split_pattern(pattern)
        searches = [s for s in (self.source_search, search) if s]
        combined = self.source_path + path
        if searches:
            combined += "?" + "&".join(searches)
        return UrlMatcher(combined)

    def parameters(self) -> tuple[str, ...]:
        """Parameter names in declaration order, path parameters first."""
        return tuple(p.name for p in self._params)

    @property
    def params(self) -> tuple[UrlParam, ...]:
        return self._params

    def param(self, name: str) -> UrlParam | None:
        for p in self._params:
            if p.name == name:
                return p
        return None

    def format(self, values: Mapping[str, object] | None = None, /, **kwargs: object) -> str:
        """Build a URL from this pattern.

        Every path parameter is required and must satisfy its converter.
        Query parameters are optional; ``None`` values are omitted.

        Raises ``ValueError`` for a missing or non-conforming value.
        """
        merged = {**(values or {}), **kwargs}

        def substitute(match: re.Match[str]) -> str:
            name = match.group(1)
            if merged.get(name) is None:
                msg = f"Missing value for path parameter {name!r} in {self.pattern!r}"
                raise ValueError(msg)
            value = merged[name]
            param = self.param(name)
            if param is not None and not param.accepts(value):
                msg = f"Value {value!r} does not fit {{{name}:{param.param_type}}}"
                raise ValueError(msg)
            safe = "/" if param is not None and param.param_type == "path" else ""
            return quote(str(value), safe=safe)

        url = _PLACEHOLDER_RE.sub(substitute, self.source_path)

        query = [
            f"{quote(p.name)}={quote(str(merged[p.name]), safe='')}"
            for p in self._params
            if p.location == "query" and merged.get(p.name) is not None
        ]
        if query:
            url += "?" + "&".join(query)
        return url

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, UrlMatcher):
            return NotImplemented
        return self.pattern == other.pattern

    def __hash__(self) -> int:
        return hash(self.pattern)

    def __repr__(self) -> str:
        return f"UrlMatcher({self.pattern!r})"

    def __str__(self) -> str:
        return self.pattern


class UrlMatcherFactory:
    """Default matcher collaborator used by the registry."""

    __slots__ = ()

    def compile(self, pattern: str) -> UrlMatcher:
        matcher = UrlMatcher(pattern)
        logger.debug("Compiled %r with parameters %s", pattern, matcher.parameters())
        return matcher

    def is_matcher(self, value: object) -> bool:
        return isinstance(value, UrlMatcher)
