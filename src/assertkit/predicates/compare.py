"""Equality and ordering predicates."""

from __future__ import annotations

import operator
from typing import Any, Callable

from assertkit.predicates.base import (
    Predicate,
    PredicateOptions,
    loose_equals,
    strict_equals,
)
from assertkit.predicates.logic import AndConjunction


class EqualityOptions(PredicateOptions):
    strict: bool = True
    case_sensitive: bool = True


class OrderingOptions(PredicateOptions):
    inclusive: bool = False


class RangeOptions(PredicateOptions):
    min: Any = None
    max: Any = None
    inclusive_min: bool = False
    inclusive_max: bool = False


def _equal(left: Any, right: Any, options: EqualityOptions) -> bool:
    if not options.case_sensitive and isinstance(left, str) and isinstance(right, str):
        if left.casefold() == right.casefold():
            return True
    if options.strict:
        return strict_equals(left, right)
    return loose_equals(left, right)


def _ordered(left: Any, right: Any, op: Callable[[Any, Any], Any]) -> bool:
    # strings never take part in ordering checks
    if isinstance(left, str) or isinstance(right, str):
        return False
    try:
        return bool(op(left, right))
    except TypeError:
        return False


class Equals(Predicate):
    """``check_value`` equals ``value``.

    In strict mode both operands must share a type; otherwise numbers also
    match numeric strings. With ``case_sensitive`` off two strings are
    compared case-insensitively regardless of ``strict``.
    """

    options_model = EqualityOptions

    def _check(self) -> bool:
        return _equal(self.check_value, self.value, self.options)


class NotEquals(Predicate):
    options_model = EqualityOptions

    def _check(self) -> bool:
        return not _equal(self.check_value, self.value, self.options)


class GreaterThan(Predicate):
    """``check_value > value`` (``>=`` when inclusive)."""

    options_model = OrderingOptions

    def _check(self) -> bool:
        op = operator.ge if self.options.inclusive else operator.gt
        return _ordered(self.check_value, self.value, op)


class LessThan(Predicate):
    """``check_value < value`` (``<=`` when inclusive)."""

    options_model = OrderingOptions

    def _check(self) -> bool:
        op = operator.le if self.options.inclusive else operator.lt
        return _ordered(self.check_value, self.value, op)


class InRange(Predicate):
    """``check_value`` lies between the ``min`` and ``max`` options.

    A bound left as None is open.
    """

    options_model = RangeOptions

    def _check(self) -> bool:
        if isinstance(self.check_value, str):
            return False
        bounds = AndConjunction()
        if self.options.min is not None:
            bounds.add(
                GreaterThan(self.check_value, self.options.min, inclusive=self.options.inclusive_min)
            )
        if self.options.max is not None:
            bounds.add(
                LessThan(self.check_value, self.options.max, inclusive=self.options.inclusive_max)
            )
        if not len(bounds):
            # still reject values that cannot be ordered at all
            return _ordered(self.check_value, self.check_value, operator.le)
        return bounds.evaluate()
