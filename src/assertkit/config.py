from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Any

import yaml
from expandvars import ExpandvarsException, expandvars
from pydantic import BaseModel, ConfigDict, Field

from assertkit.errors import ConfigurationError, InvalidKeyValue

if TYPE_CHECKING:
    from assertkit.registry import AssertionTypeRegistry
    from assertkit.tree import DeclarativeNode


class ValidatorSettings(BaseModel):
    """Options threaded through every tree validation.

    Attributes:
        reject_unknown_keys: Reject node keys outside the fixed key set.
        max_depth: Deepest ``children`` nesting accepted; None disables the limit.
            Nodes sharing a mapping with an ancestor are rejected either way.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    reject_unknown_keys: bool = True
    max_depth: int | None = Field(default=64, ge=1)


DEFAULT_SETTINGS = ValidatorSettings()


def _expand_env(obj: Any, path: str = "$") -> Any:
    if isinstance(obj, str):
        try:
            return expandvars(obj, nounset=True)
        except ExpandvarsException as e:
            raise ConfigurationError(f"Cannot expand environment variables in {path}: {e}") from e
    if isinstance(obj, dict):
        return {key: _expand_env(value, f"{path}.{key}") for key, value in obj.items()}
    if isinstance(obj, list):
        return [_expand_env(value, f"{path}[{i}]") for i, value in enumerate(obj)]
    return obj


def load_document(path: Path, *, expand_env: bool = False) -> dict[str, Any]:
    """Read a node document from a YAML (or JSON) file."""
    with open(path) as f:
        raw = yaml.safe_load(f)

    if not isinstance(raw, dict):
        raise InvalidKeyValue("document", "Mapping")

    if expand_env:
        raw = _expand_env(raw)
    return raw


def load_tree(
    path: Path,
    *,
    settings: ValidatorSettings | None = None,
    registry: AssertionTypeRegistry | None = None,
    expand_env: bool = False,
) -> DeclarativeNode:
    """Load and validate an assertion tree from a YAML file."""
    from assertkit.tree import DeclarativeNode

    raw = load_document(path, expand_env=expand_env)
    return DeclarativeNode(raw, registry=registry, settings=settings)
