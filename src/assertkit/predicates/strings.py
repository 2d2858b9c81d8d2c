"""String predicates: substring, prefix, suffix and regex matching."""

from __future__ import annotations

import re
from abc import abstractmethod
from typing import Any

from assertkit.predicates.base import Predicate, PredicateOptions


class CaseOptions(PredicateOptions):
    case_sensitive: bool = False


class _StringPredicate(Predicate):
    """Checks the ``check_value`` haystack against the ``value`` needle."""

    options_model = CaseOptions

    def _check(self) -> bool:
        haystack, needle = self.check_value, self.value
        if not isinstance(haystack, str) or not isinstance(needle, str):
            return False
        if not self.options.case_sensitive:
            haystack, needle = haystack.casefold(), needle.casefold()
        return self._match(haystack, needle)

    @abstractmethod
    def _match(self, haystack: str, needle: str) -> bool:
        """Compare the prepared haystack and needle."""


class StringContains(_StringPredicate):
    def _match(self, haystack: str, needle: str) -> bool:
        return needle in haystack


class StringStartsWith(_StringPredicate):
    def _match(self, haystack: str, needle: str) -> bool:
        return haystack.startswith(needle)


class StringEndsWith(_StringPredicate):
    def _match(self, haystack: str, needle: str) -> bool:
        return haystack.endswith(needle)


class Regex(Predicate):
    """The ``value`` pattern matches somewhere in ``check_value``.

    Every match found by the last evaluation is kept on ``matches``.
    """

    def __init__(self, check_value: Any = None, value: Any = None, **options: Any) -> None:
        self.matches: list[re.Match[str]] = []
        super().__init__(check_value, value, **options)

    def captured(self, index: int) -> str | None:
        """Full text of the match at *index*, or None."""
        try:
            return self.matches[index].group(0)
        except IndexError:
            return None

    def _invalidate(self) -> None:
        super()._invalidate()
        self.matches = []

    def _check(self) -> bool:
        self.matches = []
        subject, pattern = self.check_value, self.value
        if not isinstance(subject, str) or not isinstance(pattern, (str, re.Pattern)):
            return False
        self.matches = list(re.finditer(pattern, subject))
        return bool(self.matches)
