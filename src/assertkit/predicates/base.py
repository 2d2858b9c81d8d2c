"""Base classes shared by every predicate."""

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Any, ClassVar, Protocol, runtime_checkable

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class _Unset:
    def __repr__(self) -> str:
        return "UNSET"


UNSET: Any = _Unset()

# Keys owned by the node itself; never applied as predicate options.
RESERVED_PROPERTIES = frozenset({"check_value", "checkValue", "success", "fail"})

_NUMERIC_RE = re.compile(r"\s*[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?\s*")


@runtime_checkable
class Assertable(Protocol):
    def evaluate(self) -> bool: ...


class PredicateOptions(BaseModel):
    """Named options of a predicate. Accepts snake_case names and camelCase aliases."""

    model_config = ConfigDict(
        extra="forbid",
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )


def is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def is_numeric_string(value: Any) -> bool:
    return isinstance(value, str) and _NUMERIC_RE.fullmatch(value) is not None


def as_number(value: Any) -> int | float | None:
    """Return *value* as a number if it is one or spells one, else None."""
    if is_number(value):
        return value
    if is_numeric_string(value):
        return float(value)
    return None


def strict_equals(left: Any, right: Any) -> bool:
    return type(left) is type(right) and left == right


def loose_equals(left: Any, right: Any) -> bool:
    """Equality that also matches numbers against numeric strings (5 == "5").

    Two strings compare numerically only when both spell numbers ("5" == "5.0").
    """
    if left == right:
        return True
    if isinstance(left, str) and isinstance(right, str):
        if not (is_numeric_string(left) and is_numeric_string(right)):
            return False
    left_num, right_num = as_number(left), as_number(right)
    if left_num is None or right_num is None:
        return False
    return left_num == right_num


class Predicate(ABC):
    """A boolean check of ``check_value`` (the value under test) against ``value``.

    The result of :meth:`evaluate` is memoized until an operand or an option
    changes. Options are declared per subclass in ``options_model`` and are the
    only names a node's ``properties`` may set (besides ``value``).
    """

    options_model: ClassVar[type[PredicateOptions]] = PredicateOptions

    def __init__(self, check_value: Any = None, value: Any = None, **options: Any) -> None:
        self._check_value = check_value
        self._value = value
        self._options = self.options_model(**self.normalize_options(options))
        self._result: bool | None = None

    @classmethod
    def _option_fields(cls) -> dict[str, str]:
        """Map every accepted option spelling to its field name."""
        names: dict[str, str] = {}
        for name, field in cls.options_model.model_fields.items():
            names[name] = name
            if field.alias:
                names[field.alias] = name
        return names

    @classmethod
    def normalize_options(cls, options: Mapping[str, Any]) -> dict[str, Any]:
        fields = cls._option_fields()
        # unknown names are left as-is so the options model rejects them
        return {fields.get(key, key): value for key, value in options.items()}

    @classmethod
    def property_names(cls) -> frozenset[str]:
        return frozenset(cls._option_fields()) | {"value"}

    @property
    def check_value(self) -> Any:
        return self._check_value

    @check_value.setter
    def check_value(self, check_value: Any) -> None:
        self._check_value = check_value
        self._invalidate()

    @property
    def value(self) -> Any:
        return self._value

    @value.setter
    def value(self, value: Any) -> None:
        self._value = value
        self._invalidate()

    @property
    def options(self) -> PredicateOptions:
        return self._options

    @property
    def result(self) -> bool | None:
        """Last computed result, or None if the predicate has not run since its last change."""
        return self._result

    def configure(self, **options: Any) -> "Predicate":
        merged = {**self._options.model_dump(), **self.normalize_options(options)}
        self._options = self.options_model(**merged)
        self._invalidate()
        return self

    def apply_properties(self, properties: Mapping[str, Any]) -> "Predicate":
        """Apply node ``properties``: ``value`` sets the right-hand operand, the rest are options."""
        options = {}
        for name, override in properties.items():
            if name in RESERVED_PROPERTIES:
                continue
            if name == "value":
                self.value = override
            else:
                options[name] = override
        if options:
            self.configure(**options)
        return self

    def evaluate(self, value: Any = UNSET) -> bool:
        if value is not UNSET:
            self.value = value
        if self._result is None:
            self._result = bool(self._check())
        return self._result

    def _invalidate(self) -> None:
        self._result = None

    @abstractmethod
    def _check(self) -> bool:
        """Compute the result from the current operands and options."""
        ...

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(check_value={self._check_value!r}, "
            f"value={self._value!r}, options={self._options.model_dump()!r})"
        )
