"""Type and emptiness predicates over ``check_value``."""

from __future__ import annotations

import math
import re
from collections.abc import Mapping, Sequence
from typing import Any

from assertkit._imports import import_string
from assertkit.predicates.base import (
    Predicate,
    PredicateOptions,
    as_number,
    is_number,
    is_numeric_string,
)

_INT_RE = re.compile(r"\s*[+-]?\d+\s*")


class StrictCheckOptions(PredicateOptions):
    strict_check: bool = False


class StringOptions(PredicateOptions):
    allow_empty: bool = False


def _is_empty(value: Any) -> bool:
    if isinstance(value, str):
        return value in ("", "0")
    return not value


class IsNull(Predicate):
    def _check(self) -> bool:
        return self.check_value is None


class IsNotNull(Predicate):
    def _check(self) -> bool:
        return self.check_value is not None


class IsEmpty(Predicate):
    """None, False, zero, empty containers, ``""`` and ``"0"`` are empty."""

    def _check(self) -> bool:
        return _is_empty(self.check_value)


class IsNotEmpty(Predicate):
    def _check(self) -> bool:
        return not _is_empty(self.check_value)


class IsNumeric(Predicate):
    """A number, or (unless ``strict_check``) a string that spells one."""

    options_model = StrictCheckOptions

    def _check(self) -> bool:
        if self.options.strict_check:
            return is_number(self.check_value)
        return is_number(self.check_value) or is_numeric_string(self.check_value)


class IsInt(IsNumeric):
    def _check(self) -> bool:
        value = self.check_value
        if isinstance(value, bool):
            return False
        if self.options.strict_check:
            return isinstance(value, int)
        if isinstance(value, int):
            return True
        if isinstance(value, float):
            return value.is_integer()
        return isinstance(value, str) and _INT_RE.fullmatch(value) is not None


class IsFloat(IsNumeric):
    """A float; without ``strict_check``, any number or numeric string with a fractional part."""

    def _check(self) -> bool:
        if self.options.strict_check:
            return isinstance(self.check_value, float)
        number = as_number(self.check_value)
        if number is None or not math.isfinite(number):
            return False
        return float(number) != int(number)


class IsString(Predicate):
    options_model = StringOptions

    def _check(self) -> bool:
        if not isinstance(self.check_value, str):
            return False
        return self.options.allow_empty or self.check_value != ""


class IsArray(Predicate):
    """A mapping or a sequence other than a string."""

    def _check(self) -> bool:
        value = self.check_value
        if isinstance(value, Mapping):
            return True
        return isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray))


class IsInstance(Predicate):
    """``check_value`` is an instance of ``value``.

    ``value`` may be a class, a tuple of classes or a dotted import path.
    """

    def _check(self) -> bool:
        expected = self.value
        if isinstance(expected, str):
            expected = import_string(expected)
        return isinstance(self.check_value, expected)
