"""Matcher protocols.

The registry never inspects a URL pattern itself.  Anything shaped like
these protocols can replace the built-in ``UrlMatcherFactory``::

    registry = Registry(matchers=MyMatcherFactory())

No base class required; the registry checks the shape, not the lineage.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol


class Matcher(Protocol):
    """A compiled URL pattern."""

    def concat(self, pattern: str) -> Matcher: ...

    def parameters(self) -> Sequence[str]: ...


class MatcherFactory(Protocol):
    """Compiles pattern strings and recognises compiled matchers."""

    def compile(self, pattern: str) -> Matcher: ...

    def is_matcher(self, value: object) -> bool: ...
