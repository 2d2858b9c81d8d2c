"""Declarative assertion trees: validation and execution.

A tree is a nested mapping::

    {
        "type": "equals",
        "checkValue": 5,
        "properties": {"strict": False},
        "success": {"msg": "ok"},
        "fail": {"msg": "no"},
        "children": {"type": "isInt", "checkValue": 5, "success": {"int": True}},
    }

``type`` and ``checkValue`` are mandatory. ``children`` is itself a node,
evaluated only when its parent succeeds.
"""

from __future__ import annotations

import copy
import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

from pydantic import BaseModel, ValidationError

from assertkit.config import DEFAULT_SETTINGS, ValidatorSettings
from assertkit.errors import (
    AssertkitError,
    ConfigurationError,
    CyclicConfiguration,
    ExecutionError,
    InvalidChildConfiguration,
    InvalidKeyValue,
    InvalidPropertyName,
    InvalidPropertyValue,
    MissingMandatoryKey,
    UnknownKeyError,
)
from assertkit.predicates import UNSET
from assertkit.predicates.base import RESERVED_PROPERTIES
from assertkit.registry import AssertionTypeRegistry, TypeSelector, default_registry

MANDATORY_KEYS = ("type", "checkValue")
OPTIONAL_KEYS = ("properties", "children", "success", "fail")
NODE_KEYS = frozenset(MANDATORY_KEYS + OPTIONAL_KEYS)

_EMPTY: Mapping[str, Any] = MappingProxyType({})


def _copy_config(raw: Mapping[str, Any]) -> dict[str, Any]:
    """Copy a node mapping, deep-copying only its option and payload mappings.

    ``checkValue`` and any other values are kept by reference.
    """
    config = dict(raw)
    for key in ("properties", "success", "fail"):
        if config.get(key) is None:
            continue
        try:
            config[key] = copy.deepcopy(config[key])
        except (TypeError, copy.Error) as e:
            raise InvalidKeyValue(key, "Copyable mapping") from e
    return config


class DeclarativeNode:
    """A validated, read-only assertion node.

    Construction validates *config* eagerly and raises the first
    :class:`~assertkit.errors.ConfigurationError` found, so a node that
    exists is always valid. The accepted mapping is copied: ``properties``,
    ``success`` and ``fail`` are deep-copied while ``checkValue`` is kept by
    reference.
    """

    __slots__ = ("_config", "_selector", "_children")

    def __init__(
        self,
        config: Mapping[str, Any],
        *,
        registry: AssertionTypeRegistry | None = None,
        settings: ValidatorSettings | None = None,
    ) -> None:
        validator = TreeValidator(registry=registry, settings=settings)
        accepted, selector, children = validator._accept(config, depth=1, ancestors=frozenset())
        self._assign(accepted, selector, children)

    @classmethod
    def _assemble(
        cls,
        config: dict[str, Any],
        selector: TypeSelector,
        children: DeclarativeNode | None,
    ) -> DeclarativeNode:
        node = cls.__new__(cls)
        node._assign(config, selector, children)
        return node

    def _assign(self, config: dict[str, Any], selector: TypeSelector, children: DeclarativeNode | None) -> None:
        object.__setattr__(self, "_config", config)
        object.__setattr__(self, "_selector", selector)
        object.__setattr__(self, "_children", children)

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"{type(self).__name__} is read-only")

    def __delattr__(self, name: str) -> None:
        raise AttributeError(f"{type(self).__name__} is read-only")

    @property
    def type(self) -> Any:
        return self._config["type"]

    @property
    def selector(self) -> TypeSelector:
        return self._selector

    @property
    def check_value(self) -> Any:
        return self._config["checkValue"]

    @property
    def properties(self) -> Mapping[str, Any]:
        return self._optional_mapping("properties")

    @property
    def success(self) -> Mapping[str, Any]:
        return self._optional_mapping("success")

    @property
    def fail(self) -> Mapping[str, Any]:
        return self._optional_mapping("fail")

    @property
    def children(self) -> DeclarativeNode | None:
        return self._children

    @property
    def config(self) -> dict[str, Any]:
        config = _copy_config(self._config)
        if self._children is not None:
            config["children"] = self._children.config
        return config

    def to_dict(self) -> dict[str, Any]:
        return self.config

    def _optional_mapping(self, key: str) -> Mapping[str, Any]:
        value = self._config.get(key)
        if value is None:
            return _EMPTY
        return MappingProxyType(value)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DeclarativeNode):
            return NotImplemented
        return self._config == other._config

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"DeclarativeNode(type={self.type!r}, check_value={self.check_value!r})"


@dataclass
class ValidationResult:
    node: DeclarativeNode | None = None
    errors: list[ConfigurationError] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors


class TreeValidator:
    """Validates raw node mappings, recursing into ``children``.

    Checks run in a fixed order at every level: mapping shape, mandatory keys
    (``type`` before ``checkValue``), unknown keys, the type selector,
    ``properties``, ``success``/``fail`` shape and finally ``children``.
    """

    def __init__(
        self,
        registry: AssertionTypeRegistry | None = None,
        settings: ValidatorSettings | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self.registry = registry if registry is not None else default_registry
        self.settings = settings if settings is not None else DEFAULT_SETTINGS
        self.logger = logger if logger is not None else logging.getLogger(__name__)

    def validate(self, raw: Mapping[str, Any]) -> DeclarativeNode:
        accepted, selector, children = self._accept(raw, depth=1, ancestors=frozenset())
        return DeclarativeNode._assemble(accepted, selector, children)

    def check(self, raw: Mapping[str, Any]) -> ValidationResult:
        """Like :meth:`validate`, but reports the violation instead of raising it."""
        try:
            return ValidationResult(node=self.validate(raw))
        except ConfigurationError as e:
            self.logger.debug(f"Rejected node configuration: {e}")
            return ValidationResult(errors=[e])

    def _accept(
        self,
        raw: Any,
        *,
        depth: int,
        ancestors: frozenset[int],
    ) -> tuple[dict[str, Any], TypeSelector, DeclarativeNode | None]:
        if not isinstance(raw, Mapping):
            raise InvalidKeyValue("node", "Mapping")

        self._check_keys(raw)
        selector = self.registry.classify(raw["type"])
        self._check_properties(raw, selector)
        for key in ("success", "fail"):
            if raw.get(key) is not None and not isinstance(raw[key], Mapping):
                raise InvalidKeyValue(key, "Mapping")
        children = self._check_children(raw, depth=depth, ancestors=ancestors | {id(raw)})

        accepted = _copy_config(raw)
        if children is not None:
            accepted["children"] = children._config

        self.logger.debug(f"Validated node type={selector.name!r} ({selector.kind.value}) at depth {depth}")
        return accepted, selector, children

    def _check_keys(self, raw: Mapping[str, Any]) -> None:
        for key in MANDATORY_KEYS:
            if key not in raw:
                raise MissingMandatoryKey(key)
        if not self.settings.reject_unknown_keys:
            return
        for key in raw:
            if key not in NODE_KEYS:
                raise UnknownKeyError(key)

    def _check_properties(self, raw: Mapping[str, Any], selector: TypeSelector) -> None:
        properties = raw.get("properties")
        if properties is None:
            return
        if not isinstance(properties, Mapping):
            raise InvalidKeyValue("properties", "Mapping")

        descriptor = selector.descriptor
        if descriptor is None:
            # callables expose no option metadata
            return

        allowed = descriptor.property_names | RESERVED_PROPERTIES
        for name in properties:
            if name not in allowed:
                raise InvalidPropertyName(name, descriptor.name)

        predicate_class = descriptor.predicate_class
        options = {
            name: value
            for name, value in properties.items()
            if name not in RESERVED_PROPERTIES and name != "value"
        }
        try:
            predicate_class.options_model(**predicate_class.normalize_options(options))
        except ValidationError as e:
            error = e.errors()[0]
            name = str(error["loc"][0]) if error["loc"] else "?"
            raise InvalidPropertyValue(name, descriptor.name, error["msg"]) from e

    def _check_children(
        self,
        raw: Mapping[str, Any],
        *,
        depth: int,
        ancestors: frozenset[int],
    ) -> DeclarativeNode | None:
        children = raw.get("children")
        if children is None:
            return None
        if not isinstance(children, Mapping):
            raise InvalidKeyValue("children", "Mapping")
        if id(children) in ancestors:
            raise CyclicConfiguration(depth + 1)
        max_depth = self.settings.max_depth
        if max_depth is not None and depth + 1 > max_depth:
            raise CyclicConfiguration(depth + 1, reason=f"nesting deeper than max_depth={max_depth}")

        try:
            accepted, selector, grandchildren = self._accept(children, depth=depth + 1, ancestors=ancestors)
        except ConfigurationError as e:
            raise InvalidChildConfiguration(e) from e
        return DeclarativeNode._assemble(accepted, selector, grandchildren)


class ExecutionResult(BaseModel):
    succeeded: bool
    payload: dict[Any, Any] = {}


class TreeExecutor:
    """Runs validated nodes.

    A successful node yields its ``success`` payload merged with the payload
    of its ``children`` (child keys win). A failed node yields ``fail`` and
    its children are never built.
    """

    def __init__(
        self,
        registry: AssertionTypeRegistry | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self.registry = registry if registry is not None else default_registry
        self.logger = logger if logger is not None else logging.getLogger(__name__)

    def run(self, node: DeclarativeNode | Mapping[str, Any], value: Any = UNSET) -> ExecutionResult:
        """Evaluate *node* and its reachable children.

        *value*, when given, is the right-hand operand of every node that does
        not set its own ``value`` property.
        """
        if not isinstance(node, DeclarativeNode):
            node = DeclarativeNode(node, registry=self.registry)
        succeeded, payload = self._run(node, value)
        return ExecutionResult(succeeded=succeeded, payload=payload)

    def _run(self, node: DeclarativeNode, value: Any) -> tuple[bool, dict[str, Any]]:
        factory = self.registry.resolve(node.selector)
        try:
            predicate = factory(node.check_value, node.properties, value)
            succeeded = predicate.evaluate()
        except AssertkitError:
            raise
        except Exception as e:
            raise ExecutionError(e, node_type=node.type) from e

        self.logger.debug(f"Evaluated {node.selector.name!r}: succeeded={succeeded}")
        if not succeeded:
            return False, copy.deepcopy(dict(node.fail))

        payload = copy.deepcopy(dict(node.success))
        if node.children is not None:
            _, child_payload = self._run(node.children, value)
            payload.update(child_payload)
        return True, payload


def run_tree(
    config: DeclarativeNode | Mapping[str, Any],
    value: Any = UNSET,
    *,
    registry: AssertionTypeRegistry | None = None,
    settings: ValidatorSettings | None = None,
    logger: logging.Logger | None = None,
) -> ExecutionResult:
    """Validate *config* (unless already a node) and run it."""
    if not isinstance(config, DeclarativeNode):
        config = TreeValidator(registry=registry, settings=settings, logger=logger).validate(config)
    return TreeExecutor(registry=registry, logger=logger).run(config, value)
