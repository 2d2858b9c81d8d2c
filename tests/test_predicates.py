"""Tests for the built-in predicates."""

import pytest
from pydantic import ValidationError

from assertkit.predicates import (
    ArrayContains,
    ArrayHasKey,
    Count,
    Equals,
    GreaterThan,
    InRange,
    IsArray,
    IsEmpty,
    IsFloat,
    IsInstance,
    IsInt,
    IsNotEmpty,
    IsNotNull,
    IsNull,
    IsNumeric,
    IsString,
    LessThan,
    NotEquals,
    Regex,
    StringContains,
    StringEndsWith,
    StringStartsWith,
)
from assertkit.predicates.base import loose_equals
from assertkit.predicates.strings import _StringPredicate


class CountingEquals(Equals):
    def __init__(self, *args, **kwargs):
        self.calls = 0
        super().__init__(*args, **kwargs)

    def _check(self):
        self.calls += 1
        return super()._check()


# --- Equals / NotEquals ---


@pytest.mark.parametrize(
    "first, second, strict, case_sensitive, expected",
    [
        (5, 5, True, True, True),
        (5, "5", True, True, False),
        (5, "5", False, True, True),
        (5, 5.0, True, True, False),
        (5, 5.0, False, True, True),
        ("hello", "hello", True, True, True),
        ("Hello", "hello", True, True, False),
        ("Hello", "hello", True, False, True),
        ("123", 123, False, False, True),
        ("abc", 0, False, True, False),
        ("5", "5.0", False, True, True),
        ("5", "5.0", True, True, False),
        ("5", "5.0", False, False, True),
        ("1e2", "100", False, True, True),
        ("abc", "ABC", False, True, False),
    ],
)
def test_equals(first, second, strict, case_sensitive, expected):
    p = Equals(first, second, strict=strict, case_sensitive=case_sensitive)
    assert p.evaluate() is expected

    n = NotEquals(first, second, strict=strict, case_sensitive=case_sensitive)
    assert n.evaluate() is not expected


def test_equals_defaults_to_strict_and_case_sensitive():
    p = Equals("a", "a")
    assert p.options.strict is True
    assert p.options.case_sensitive is True


def test_options_accept_camel_case_names():
    p = Equals("Hello", "hello", caseSensitive=False)
    assert p.options.case_sensitive is False
    assert p.evaluate() is True


def test_unknown_option_rejected():
    with pytest.raises(ValidationError):
        Equals(1, 1, bogus=True)


def test_configure_rejects_bad_option_value():
    p = Equals(1, 1)
    with pytest.raises(ValidationError):
        p.configure(strict="definitely")


def test_property_names_include_aliases_and_value():
    names = Equals.property_names()
    assert {"strict", "case_sensitive", "caseSensitive", "value"} <= names
    assert "checkValue" not in names


# --- memoization ---


def test_result_is_memoized_until_reconfigured():
    p = CountingEquals(1, 1)
    assert p.result is None

    assert p.evaluate() is True
    assert p.evaluate() is True
    assert p.calls == 1
    assert p.result is True

    p.value = 2
    assert p.result is None
    assert p.evaluate() is False
    assert p.calls == 2


def test_configure_invalidates_result():
    p = Equals(5, "5")
    assert p.evaluate() is False
    p.configure(strict=False)
    assert p.result is None
    assert p.evaluate() is True


def test_check_value_setter_invalidates_result():
    p = Equals(1, 2)
    assert p.evaluate() is False
    p.check_value = 2
    assert p.result is None
    assert p.evaluate() is True


def test_evaluate_with_value_sets_right_hand_operand():
    p = Equals(3)
    assert p.evaluate(3) is True
    assert p.value == 3
    assert p.evaluate(4) is False


def test_apply_properties_skips_node_owned_names():
    p = Equals(1)
    p.apply_properties({"checkValue": 99, "success": {"x": 1}, "fail": {}, "value": 1})
    assert p.check_value == 1
    assert p.value == 1
    assert p.evaluate() is True


# --- ordering ---


@pytest.mark.parametrize(
    "first, second, inclusive, expected",
    [
        (10, 5, False, True),
        (5, 5, False, False),
        (5, 5, True, True),
        (1, 5, True, False),
        ("10", 5, False, False),
        (None, 1, False, False),
    ],
)
def test_greater_than(first, second, inclusive, expected):
    assert GreaterThan(first, second, inclusive=inclusive).evaluate() is expected


@pytest.mark.parametrize(
    "first, second, inclusive, expected",
    [
        (1, 2, False, True),
        (2, 2, False, False),
        (2, 2, True, True),
        (3, "4", False, False),
    ],
)
def test_less_than(first, second, inclusive, expected):
    assert LessThan(first, second, inclusive=inclusive).evaluate() is expected


def test_in_range_bounds():
    assert InRange(5, min=1, max=10).evaluate() is True
    assert InRange(1, min=1, max=10).evaluate() is False
    assert InRange(1, min=1, max=10, inclusive_min=True).evaluate() is True
    assert InRange(10, min=1, max=10, inclusiveMax=True).evaluate() is True
    assert InRange(11, min=1, max=10).evaluate() is False


def test_in_range_open_bounds():
    assert InRange(5, min=1).evaluate() is True
    assert InRange(-100, max=0).evaluate() is True
    assert InRange(5).evaluate() is True
    assert InRange(None).evaluate() is False


def test_in_range_rejects_strings():
    assert InRange("5", min=1, max=10).evaluate() is False


# --- strings ---


def test_string_predicate_base_is_abstract():
    with pytest.raises(TypeError):
        _StringPredicate("haystack", "hay")


def test_string_contains():
    assert StringContains("Hello World", "world").evaluate() is True
    assert StringContains("Hello World", "world", case_sensitive=True).evaluate() is False
    assert StringContains("Hello World", "xyz").evaluate() is False
    assert StringContains(5, "5").evaluate() is False


def test_string_starts_and_ends_with():
    assert StringStartsWith("Hello", "he").evaluate() is True
    assert StringStartsWith("Hello", "he", case_sensitive=True).evaluate() is False
    assert StringEndsWith("Hello", "LO").evaluate() is True
    assert StringEndsWith("Hello", "LO", case_sensitive=True).evaluate() is False
    assert StringEndsWith(None, "x").evaluate() is False


def test_regex_keeps_matches():
    r = Regex("a1b22c333", r"\d+")
    assert r.evaluate() is True
    assert r.captured(0) == "1"
    assert r.captured(2) == "333"
    assert r.captured(5) is None


def test_regex_no_match():
    r = Regex("abc", r"\d")
    assert r.evaluate() is False
    assert r.matches == []


def test_regex_reset_on_new_pattern():
    r = Regex("abc", r"\d")
    r.evaluate()
    r.value = r"[a-z]"
    assert r.matches == []
    assert r.evaluate() is True
    assert len(r.matches) == 3


# --- collections ---


def test_array_contains():
    assert ArrayContains([1, 2, 3], "2").evaluate() is True
    assert ArrayContains([1, 2, 3], "2", strict=True).evaluate() is False
    assert ArrayContains([1, 2, 3], 2, strict=True).evaluate() is True
    assert ArrayContains({"a": 1}, 1).evaluate() is True
    assert ArrayContains("abc", "a").evaluate() is False
    assert ArrayContains(None, 1).evaluate() is False


def test_array_has_key():
    assert ArrayHasKey({"a": 1}, "a").evaluate() is True
    assert ArrayHasKey({"a": 1}, "b").evaluate() is False
    assert ArrayHasKey([10, 20], 1).evaluate() is True
    assert ArrayHasKey([10, 20], 2).evaluate() is False
    assert ArrayHasKey([10], True).evaluate() is False
    assert ArrayHasKey("abc", 0).evaluate() is False
    assert ArrayHasKey({"a": 1}, ["a"]).evaluate() is False


def test_count_comparisons():
    items = [1, 2, 3]
    assert Count(items, 3).evaluate() is True
    assert Count(items, 2).evaluate() is False
    assert Count(items, 2, compare="greater_than").evaluate() is True
    assert Count(items, 3, compare="greater_than").evaluate() is False
    assert Count(items, 3, compare="greater_than", inclusive=True).evaluate() is True
    assert Count(items, 3, compare="less_than", inclusive=True).evaluate() is True
    assert Count(items, compare="in_range", min=1, max=5).evaluate() is True
    assert Count(items, compare="in_range", min=3, max=5).evaluate() is False


def test_count_unsized_is_false():
    assert Count(5, 1).evaluate() is False


def test_count_rejects_unknown_comparison():
    with pytest.raises(ValidationError):
        Count([1], 1, compare="sideways")


# --- type checks ---


@pytest.mark.parametrize("value, expected", [(None, True), (0, False), ("", False)])
def test_is_null(value, expected):
    assert IsNull(value).evaluate() is expected
    assert IsNotNull(value).evaluate() is not expected


@pytest.mark.parametrize(
    "value, expected",
    [
        (None, True),
        ("", True),
        ("0", True),
        ([], True),
        ({}, True),
        (0, True),
        (False, True),
        ("a", False),
        ([0], False),
        (1, False),
    ],
)
def test_is_empty(value, expected):
    assert IsEmpty(value).evaluate() is expected
    assert IsNotEmpty(value).evaluate() is not expected


@pytest.mark.parametrize(
    "value, strict, expected",
    [
        (5, False, True),
        (5.5, False, True),
        ("5", False, True),
        (" 1e3 ", False, True),
        ("-.5", False, True),
        ("abc", False, False),
        (True, False, False),
        (None, False, False),
        ("5", True, False),
        (5, True, True),
    ],
)
def test_is_numeric(value, strict, expected):
    assert IsNumeric(value, strict_check=strict).evaluate() is expected


@pytest.mark.parametrize(
    "value, strict, expected",
    [
        (5, False, True),
        ("5", False, True),
        (5.0, False, True),
        (5.5, False, False),
        ("5.5", False, False),
        (True, False, False),
        ("5", True, False),
        (5.0, True, False),
        (5, True, True),
    ],
)
def test_is_int(value, strict, expected):
    assert IsInt(value, strict_check=strict).evaluate() is expected


@pytest.mark.parametrize(
    "value, strict, expected",
    [
        (1.5, False, True),
        ("1.5", False, True),
        (2.0, False, False),
        (2, False, False),
        ("abc", False, False),
        (float("inf"), False, False),
        (2.0, True, True),
        ("1.5", True, False),
    ],
)
def test_is_float(value, strict, expected):
    assert IsFloat(value, strictCheck=strict).evaluate() is expected


def test_is_string():
    assert IsString("a").evaluate() is True
    assert IsString("").evaluate() is False
    assert IsString("", allow_empty=True).evaluate() is True
    assert IsString(5).evaluate() is False


@pytest.mark.parametrize(
    "value, expected",
    [([], True), ((), True), ({}, True), ("abc", False), (5, False), (None, False)],
)
def test_is_array(value, expected):
    assert IsArray(value).evaluate() is expected


class A:
    pass


class B(A):
    pass


@pytest.mark.parametrize(
    "obj, cls, expected",
    [
        (A(), A, True),
        (A(), B, False),
        (B(), B, True),
        (B(), A, True),
        (5, (str, int), True),
        ("x", "builtins.str", True),
        (5, "builtins.str", False),
    ],
)
def test_is_instance(obj, cls, expected):
    assert IsInstance(obj, cls).evaluate() is expected


@pytest.mark.parametrize(
    "left, right, expected",
    [
        ("5", "5.0", True),
        (" 5", "5", True),
        ("0x1A", "26", False),
        ("abc", "abc", True),
        ("abc", "0", False),
        ("", "0", False),
    ],
)
def test_loose_equals_numeric_strings(left, right, expected):
    assert loose_equals(left, right) is expected
    assert loose_equals(right, left) is expected
