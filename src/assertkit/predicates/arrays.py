"""Predicates over collections."""

from __future__ import annotations

from collections.abc import Hashable, Iterable, Mapping, Sequence, Sized
from typing import Any, Literal

from assertkit.predicates.base import Predicate, PredicateOptions, loose_equals, strict_equals
from assertkit.predicates.compare import Equals, GreaterThan, InRange, LessThan


class ContainsOptions(PredicateOptions):
    strict: bool = False


class CountOptions(PredicateOptions):
    compare: Literal["equal", "greater_than", "less_than", "in_range"] = "equal"
    inclusive: bool = False
    min: Any = None
    max: Any = None
    inclusive_min: bool = False
    inclusive_max: bool = False


class ArrayContains(Predicate):
    """``value`` is one of the elements of ``check_value`` (values, for a mapping)."""

    options_model = ContainsOptions

    def _check(self) -> bool:
        haystack = self.check_value
        if isinstance(haystack, Mapping):
            haystack = haystack.values()
        elif isinstance(haystack, (str, bytes)) or not isinstance(haystack, Iterable):
            return False
        same = strict_equals if self.options.strict else loose_equals
        return any(same(item, self.value) for item in haystack)


class ArrayHasKey(Predicate):
    """``value`` is a key of the ``check_value`` mapping or an index of the sequence."""

    def _check(self) -> bool:
        container, key = self.check_value, self.value
        if isinstance(container, Mapping):
            return isinstance(key, Hashable) and key in container
        if isinstance(container, Sequence) and not isinstance(container, (str, bytes)):
            if isinstance(key, bool) or not isinstance(key, int):
                return False
            return 0 <= key < len(container)
        return False


class Count(Predicate):
    """Compares ``len(check_value)`` against ``value``, or the range options.

    ``compare`` picks the comparison: ``equal`` (default), ``greater_than``,
    ``less_than`` (both honour ``inclusive``) or ``in_range``.
    """

    options_model = CountOptions

    def _check(self) -> bool:
        if not isinstance(self.check_value, Sized):
            return False
        size = len(self.check_value)
        opts = self.options
        if opts.compare == "greater_than":
            inner: Predicate = GreaterThan(size, self.value, inclusive=opts.inclusive)
        elif opts.compare == "less_than":
            inner = LessThan(size, self.value, inclusive=opts.inclusive)
        elif opts.compare == "in_range":
            inner = InRange(
                size,
                min=opts.min,
                max=opts.max,
                inclusive_min=opts.inclusive_min,
                inclusive_max=opts.inclusive_max,
            )
        else:
            inner = Equals(size, self.value, strict=False)
        return inner.evaluate()
