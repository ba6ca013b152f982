"""Regex-backed matching of message text against a command pattern."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional, Tuple

from ..models import PatternLike


@dataclass(frozen=True)
class MatchResult:
    """Outcome of a match attempt.

    A failed match is falsy; a successful one carries exactly one capture per
    group in the pattern, in group order. Groups that did not take part in
    the match are reported as ``None``.
    """

    matched: bool
    captures: Tuple[Optional[str], ...] = ()

    def __bool__(self) -> bool:
        return self.matched


NO_MATCH = MatchResult(matched=False)


class PatternMatcher:
    """Wraps a compiled regex with a fixed number of capture groups."""

    def __init__(self, pattern: PatternLike) -> None:
        if isinstance(pattern, str):
            pattern = re.compile(pattern)
        self._regex = pattern

    @property
    def regex(self) -> re.Pattern:
        return self._regex

    @property
    def group_count(self) -> int:
        return self._regex.groups

    def try_match(self, text: str) -> MatchResult:
        match = self._regex.search(text)
        if match is None:
            return NO_MATCH
        return MatchResult(matched=True, captures=match.groups())

    def __repr__(self) -> str:
        return f"PatternMatcher({self._regex.pattern!r})"
