"""
Search filtering for Pen Compatibility Matrix.

A query is split into tokens (double quotes group words into one token). Every
token must be found in a row, and a token is found when any tablet or pen of
the row matches it by id or by display name. Tokens may use the glob wildcards
* and ?.
"""

import re
from typing import Iterable, List, Mapping, Optional, Pattern

from ..models.device import DeviceDef
from ..models.display import DisplayRow

WILDCARDS = frozenset("*?")


def tokenize_query(query: Optional[str]) -> List[str]:
    """
    Split a query on whitespace, keeping double-quoted spans together.

    Quotes are consumed; an unterminated quote runs to the end of the query.
    Empty tokens are dropped.
    """
    tokens: List[str] = []
    current: List[str] = []
    in_quotes = False

    for char in query or "":
        if char == '"':
            in_quotes = not in_quotes
        elif char.isspace() and not in_quotes:
            if current:
                tokens.append("".join(current))
                current = []
        else:
            current.append(char)

    if current:
        tokens.append("".join(current))
    return tokens


def has_wildcards(token: str) -> bool:
    return any(char in WILDCARDS for char in token)


def glob_to_regex(token: str) -> str:
    """Translate * and ? to regex; every other character matches literally."""
    parts = []
    for char in token:
        if char == "*":
            parts.append(".*")
        elif char == "?":
            parts.append(".")
        else:
            parts.append(re.escape(char))
    return "".join(parts)


class TokenMatcher:
    """
    Case-insensitive matcher for one search token.

    Plain tokens match anywhere in the candidate. Tokens with wildcards match
    the whole candidate, so "abc*" matches "ABC123" but not "xabc".
    """

    def __init__(self, token: str):
        self.token = token
        self.is_glob = has_wildcards(token)
        self.pattern: Pattern[str] = re.compile(glob_to_regex(token), re.IGNORECASE | re.DOTALL)

    def __repr__(self) -> str:
        return f"TokenMatcher({self.token!r})"

    def matches(self, candidate: Optional[str]) -> bool:
        if not candidate:
            return False
        if self.is_glob:
            return self.pattern.fullmatch(candidate) is not None
        return self.pattern.search(candidate) is not None


class SearchFilter:
    """A compiled query: AND across tokens, OR across the items of a row."""

    def __init__(self, query: Optional[str] = ""):
        self.query = query or ""
        self.matchers = [TokenMatcher(token) for token in tokenize_query(self.query)]

    @property
    def is_empty(self) -> bool:
        return not self.matchers

    def _item_matches(self, matcher: TokenMatcher, device_id: str,
                      defs: Optional[Mapping[str, DeviceDef]]) -> bool:
        if matcher.matches(device_id):
            return True
        definition = defs.get(device_id) if defs else None
        return definition is not None and matcher.matches(definition.name)

    def matches(self, row: DisplayRow,
                tablet_defs: Optional[Mapping[str, DeviceDef]] = None,
                pen_defs: Optional[Mapping[str, DeviceDef]] = None) -> bool:
        for matcher in self.matchers:
            found = (
                any(self._item_matches(matcher, t, tablet_defs) for t in row.tablets)
                or any(self._item_matches(matcher, p, pen_defs) for p in row.pens)
            )
            if not found:
                return False
        return True


def filter_rows(rows: Iterable[DisplayRow], query: Optional[str],
                tablet_defs: Optional[Mapping[str, DeviceDef]] = None,
                pen_defs: Optional[Mapping[str, DeviceDef]] = None) -> List[DisplayRow]:
    """
    Keep the rows matching a query.

    Args:
        rows: Display rows in display order
        query: Raw search text; empty or blank keeps every row
        tablet_defs: Tablet definitions for name matching
        pen_defs: Pen definitions for name matching

    Returns:
        Matching rows, order preserved
    """
    search = SearchFilter(query)
    if search.is_empty:
        return list(rows)
    return [row for row in rows if search.matches(row, tablet_defs, pen_defs)]
