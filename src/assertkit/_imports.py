from __future__ import annotations

import importlib
from typing import Any


def import_string(path: str) -> Any:
    """Import an object from ``pkg.mod:Name`` or ``pkg.mod.Name``.

    Raises ImportError when the module or attribute cannot be found.
    """
    if ":" in path:
        module_name, _, attr_path = path.partition(":")
    else:
        module_name, _, attr_path = path.rpartition(".")
    if not module_name or not attr_path or module_name.startswith("."):
        raise ImportError(f"{path!r} is not an absolute dotted import path")

    try:
        obj: Any = importlib.import_module(module_name)
    except (TypeError, ValueError) as e:
        raise ImportError(f"cannot import {module_name!r}: {e}") from e
    for attr in attr_path.split("."):
        try:
            obj = getattr(obj, attr)
        except AttributeError as e:
            raise ImportError(f"{module_name!r} has no attribute {attr_path!r}") from e
    return obj
