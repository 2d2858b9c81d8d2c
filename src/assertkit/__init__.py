"""Composable predicates and declarative assertion trees."""

from assertkit.config import ValidatorSettings, load_tree
from assertkit.errors import (
    AssertkitError,
    ConfigurationError,
    CyclicConfiguration,
    ExecutionError,
    InvalidChildConfiguration,
    InvalidKeyValue,
    InvalidPropertyName,
    InvalidPropertyValue,
    InvalidTypeSelector,
    MissingMandatoryKey,
    UnknownKeyError,
    UnknownTypeError,
)
from assertkit.registry import AssertionTypeRegistry, SelectorKind, default_registry
from assertkit.tree import (
    DeclarativeNode,
    ExecutionResult,
    TreeExecutor,
    TreeValidator,
    ValidationResult,
    run_tree,
)

__all__ = [
    "AssertionTypeRegistry",
    "AssertkitError",
    "ConfigurationError",
    "CyclicConfiguration",
    "DeclarativeNode",
    "ExecutionError",
    "ExecutionResult",
    "InvalidChildConfiguration",
    "InvalidKeyValue",
    "InvalidPropertyName",
    "InvalidPropertyValue",
    "InvalidTypeSelector",
    "MissingMandatoryKey",
    "SelectorKind",
    "TreeExecutor",
    "TreeValidator",
    "UnknownKeyError",
    "UnknownTypeError",
    "ValidationResult",
    "ValidatorSettings",
    "default_registry",
    "load_tree",
    "run_tree",
]
