"""URL patterns — compiled matchers that states inherit and extend.

Relative state URLs are concatenated onto the nearest navigable
ancestor's matcher; absolute ones (``^``-prefixed) are compiled as is.
"""

from roost.urls.matcher import UrlMatcher, UrlMatcherFactory
from roost.urls.params import CONVERTERS, UrlParam
from roost.urls.protocol import Matcher, MatcherFactory

__all__ = [
    "CONVERTERS",
    "Matcher",
    "MatcherFactory",
    "UrlMatcher",
    "UrlMatcherFactory",
    "UrlParam",
]
