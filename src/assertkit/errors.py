"""Structured errors raised while validating and running assertion trees."""

from __future__ import annotations

from typing import Any


class AssertkitError(Exception):
    """Base class for every error raised by assertkit."""


class ConfigurationError(AssertkitError, ValueError):
    """A node configuration was rejected during validation."""


class MissingMandatoryKey(ConfigurationError):
    def __init__(self, key: str) -> None:
        self.key = key
        super().__init__(f"Missing mandatory key '{key}'")


class UnknownKeyError(ConfigurationError):
    def __init__(self, key: Any) -> None:
        self.key = key
        super().__init__(f"Unknown key '{key}'")


class InvalidKeyValue(ConfigurationError):
    def __init__(self, key: str, expected: str) -> None:
        self.key = key
        self.expected = expected
        super().__init__(f"Invalid value in '{key}' key. {expected} required")


class InvalidTypeSelector(ConfigurationError):
    def __init__(self, value: Any, reason: str | None = None) -> None:
        self.value = value
        message = f"Invalid value in 'type' key: {value!r}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)


class InvalidPropertyName(ConfigurationError):
    def __init__(self, name: Any, for_type: str) -> None:
        self.name = name
        self.for_type = for_type
        super().__init__(f"Invalid property '{name}' in 'properties' key for type '{for_type}'")


class InvalidPropertyValue(ConfigurationError):
    def __init__(self, name: str, for_type: str, detail: str) -> None:
        self.name = name
        self.for_type = for_type
        self.detail = detail
        super().__init__(f"Invalid value for property '{name}' of type '{for_type}': {detail}")


class CyclicConfiguration(ConfigurationError):
    def __init__(self, depth: int, reason: str = "children revisit an ancestor node") -> None:
        self.depth = depth
        super().__init__(f"Invalid 'children' chain at depth {depth}: {reason}")


class InvalidChildConfiguration(ConfigurationError):
    """Wraps the violation found while validating a node's ``children``.

    The nested error stays reachable through ``cause`` (and ``__cause__`` when
    raised with ``from``), and its message is repeated in this one.
    """

    def __init__(self, cause: ConfigurationError) -> None:
        self.cause = cause
        super().__init__(f"Invalid value in 'children' data config. {cause}")

    @property
    def root_cause(self) -> ConfigurationError:
        """Innermost violation, unwrapping every nested child level."""
        error: ConfigurationError = self
        while isinstance(error, InvalidChildConfiguration):
            error = error.cause
        return error


class UnknownTypeError(AssertkitError, LookupError):
    def __init__(self, selector: Any) -> None:
        self.selector = selector
        super().__init__(f"Unknown assertion type: {selector!r}")


class ExecutionError(AssertkitError, RuntimeError):
    def __init__(self, cause: BaseException, node_type: Any = None) -> None:
        self.cause = cause
        self.node_type = node_type
        where = f" for type {node_type!r}" if node_type is not None else ""
        super().__init__(f"Error evaluating assertion{where}: {cause}")
