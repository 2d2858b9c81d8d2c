"""Registry mapping assertion type selectors to predicate factories.

A node's ``type`` selector takes one of three forms:

- a key registered here (``"equals"``, ``"inRange"``, ...);
- a callable, or the dotted import path of one;
- a :class:`~assertkit.predicates.Predicate` subclass, or its dotted import path.

Registered keys and predicate subclasses are introspectable: their option
names are known up front and checked during validation. Callables are not.
"""

from __future__ import annotations

import inspect
import logging
from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable

from assertkit._imports import import_string
from assertkit.errors import InvalidTypeSelector, UnknownTypeError
from assertkit.predicates import BUILTIN_PREDICATES, UNSET, Assertable, Predicate

logger = logging.getLogger(__name__)

PredicateFactory = Callable[..., Assertable]


class SelectorKind(str, Enum):
    REGISTERED = "registered"
    INVOCABLE = "invocable"
    EXTERNAL = "external"


@dataclass(frozen=True)
class TypeDescriptor:
    name: str
    predicate_class: type[Predicate]
    property_names: frozenset[str]

    @classmethod
    def for_class(cls, predicate_class: type[Predicate], name: str | None = None) -> TypeDescriptor:
        return cls(
            name=name or f"{predicate_class.__module__}.{predicate_class.__qualname__}",
            predicate_class=predicate_class,
            property_names=predicate_class.property_names(),
        )


@dataclass(frozen=True)
class TypeSelector:
    """A ``type`` selector resolved to one of the three accepted forms."""

    kind: SelectorKind
    raw: Any
    target: Any
    descriptor: TypeDescriptor | None = None

    @property
    def introspectable(self) -> bool:
        return self.descriptor is not None

    @property
    def name(self) -> str:
        if self.descriptor is not None:
            return self.descriptor.name
        return getattr(self.target, "__qualname__", repr(self.target))


class CallablePredicate(Predicate):
    """Wraps a plain callable as a predicate.

    The callable receives ``check_value``, plus ``value`` when one was given,
    and its return value's truthiness is the result.
    """

    def __init__(self, func: Callable[..., Any], check_value: Any = None, value: Any = UNSET) -> None:
        self.func = func
        super().__init__(check_value, value)

    def _check(self) -> bool:
        if self.value is UNSET:
            return bool(self.func(self.check_value))
        return bool(self.func(self.check_value, self.value))


def _class_factory(predicate_class: type[Predicate]) -> PredicateFactory:
    def factory(
        check_value: Any,
        properties: Mapping[str, Any] | None = None,
        value: Any = UNSET,
    ) -> Predicate:
        predicate = predicate_class(check_value)
        if value is not UNSET:
            predicate.value = value
        if properties:
            predicate.apply_properties(properties)
        return predicate

    return factory


def _callable_factory(func: Callable[..., Any]) -> PredicateFactory:
    def factory(
        check_value: Any,
        properties: Mapping[str, Any] | None = None,
        value: Any = UNSET,
    ) -> Predicate:
        if properties:
            logger.debug(f"Ignoring properties {sorted(properties)} for callable type {func!r}")
        return CallablePredicate(func, check_value, value)

    return factory


class AssertionTypeRegistry:
    def __init__(self, types: Mapping[str, type[Predicate]] | None = None) -> None:
        self._types: dict[str, TypeDescriptor] = {}
        for key, predicate_class in (types or {}).items():
            self.register(key, predicate_class)

    def register(self, key: str, predicate_class: type[Predicate]) -> None:
        """Register *predicate_class* under *key*. Existing keys cannot be replaced."""
        if not isinstance(key, str) or not key:
            raise ValueError(f"Assertion type key must be a non-empty string, got {key!r}")
        if not (isinstance(predicate_class, type) and issubclass(predicate_class, Predicate)):
            raise TypeError(f"{predicate_class!r} is not a Predicate subclass")
        if key in self._types:
            raise ValueError(f"Assertion type {key!r} is already registered")
        self._types[key] = TypeDescriptor.for_class(predicate_class, name=key)
        logger.debug(f"Registered assertion type {key!r} -> {predicate_class.__name__}")

    def is_known_key(self, key: Any) -> bool:
        return isinstance(key, str) and key in self._types

    def class_for(self, key: str) -> TypeDescriptor:
        if not self.is_known_key(key):
            raise UnknownTypeError(key)
        return self._types[key]

    def keys(self) -> list[str]:
        return list(self._types)

    def __contains__(self, key: object) -> bool:
        return self.is_known_key(key)

    def __iter__(self) -> Iterator[TypeDescriptor]:
        return iter(self._types.values())

    def __len__(self) -> int:
        return len(self._types)

    def classify(self, selector: Any) -> TypeSelector:
        """Work out which of the three selector forms *selector* is.

        Raises InvalidTypeSelector if it is none of them.
        """
        if isinstance(selector, TypeSelector):
            return selector

        target = selector
        if isinstance(selector, str):
            if selector in self._types:
                return TypeSelector(
                    kind=SelectorKind.REGISTERED,
                    raw=selector,
                    target=self._types[selector].predicate_class,
                    descriptor=self._types[selector],
                )
            try:
                target = import_string(selector)
            except ImportError as e:
                raise InvalidTypeSelector(selector, reason=str(e)) from e

        if isinstance(target, type):
            if issubclass(target, Predicate):
                if target is Predicate or inspect.isabstract(target):
                    raise InvalidTypeSelector(selector, reason="Predicate class is abstract")
                return TypeSelector(
                    kind=SelectorKind.EXTERNAL,
                    raw=selector,
                    target=target,
                    descriptor=TypeDescriptor.for_class(target),
                )
            raise InvalidTypeSelector(selector, reason="class does not derive from Predicate")
        if callable(target):
            return TypeSelector(kind=SelectorKind.INVOCABLE, raw=selector, target=target)
        raise InvalidTypeSelector(selector)

    def resolve(self, selector: Any) -> PredicateFactory:
        """Return a factory ``(check_value, properties=None, value=UNSET)`` for *selector*."""
        try:
            resolved = self.classify(selector)
        except InvalidTypeSelector as e:
            raise UnknownTypeError(selector) from e

        if resolved.kind is SelectorKind.INVOCABLE:
            return _callable_factory(resolved.target)
        return _class_factory(resolved.target)


default_registry = AssertionTypeRegistry(BUILTIN_PREDICATES)
