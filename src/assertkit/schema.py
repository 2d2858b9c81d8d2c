"""Generate a JSON Schema for assertion tree documents."""

from __future__ import annotations

import json
from pathlib import Path

from assertkit.predicates import Predicate
from assertkit.registry import AssertionTypeRegistry, default_registry

SCHEMA_DIALECT = "https://json-schema.org/draft/2020-12/schema"


def _ensure_parent(path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)


def _properties_schema(predicate_class: type[Predicate]) -> dict:
    """Schema of a node's ``properties`` for one predicate type, by camelCase alias."""
    options = predicate_class.options_model.model_json_schema(by_alias=True)
    props = dict(options.get("properties", {}))
    props["value"] = {"description": "Right-hand operand"}
    return {
        "type": "object",
        "properties": props,
        "additionalProperties": False,
    }


def generate_json_schema(registry: AssertionTypeRegistry | None = None) -> dict:
    registry = registry if registry is not None else default_registry
    keys = registry.keys()

    defs: dict[str, dict] = {}
    conditionals: list[dict] = []
    for descriptor in registry:
        defs[descriptor.name] = _properties_schema(descriptor.predicate_class)
        conditionals.append(
            {
                "if": {
                    "properties": {"type": {"const": descriptor.name}},
                    "required": ["type"],
                },
                "then": {
                    "properties": {"properties": {"$ref": f"#/$defs/{descriptor.name}"}}
                },
            }
        )

    return {
        "$schema": SCHEMA_DIALECT,
        "title": "assertkit assertion tree",
        "type": "object",
        "required": ["type", "checkValue"],
        "properties": {
            "type": {
                "anyOf": [
                    {"enum": keys},
                    {
                        "type": "string",
                        "description": "Dotted import path of a Predicate subclass or callable",
                    },
                ]
            },
            "checkValue": {"description": "Value under test"},
            "properties": {"type": "object"},
            "success": {"type": "object"},
            "fail": {"type": "object"},
            "children": {"$ref": "#"},
        },
        "additionalProperties": False,
        "allOf": conditionals,
        "$defs": defs,
    }


def write_json_schema(path: Path, registry: AssertionTypeRegistry | None = None) -> None:
    _ensure_parent(path)
    schema = generate_json_schema(registry)
    path.write_text(json.dumps(schema, indent=2) + "\n")
