"""
Function defaults merging.

`defaults.function` on an API is merged into every function the API
creates. The merge is field-specific:

    scalar fields (timeout, memory_size, handler, ...)
        the override replaces the default when it sets the field
    environment
        key-wise union, the override wins on collisions
    permissions, layers
        concatenated, defaults first, duplicates kept

Neither input is mutated.
"""

from __future__ import annotations

from typing import Any

from .errors import ConflictingConfiguration
from .providers.base import ComputeFunction
from .schemas import FunctionProps

MAP_FIELDS = ("environment",)
LIST_FIELDS = ("permissions", "layers")


def merge_function_props(
    defaults: FunctionProps | None,
    override: FunctionProps,
) -> FunctionProps:
    """Merge default function props with per-function props."""
    if defaults is None:
        return override

    base = defaults.explicit_fields()
    extra = override.explicit_fields()
    merged: dict[str, Any] = {**base, **extra}

    for name in MAP_FIELDS:
        if name in base or name in extra:
            merged[name] = {**base.get(name, {}), **extra.get(name, {})}

    for name in LIST_FIELDS:
        if name in base or name in extra:
            merged[name] = [*base.get(name, []), *extra.get(name, [])]

    return FunctionProps.model_validate(merged)


def apply_function_defaults(
    defaults: FunctionProps | None,
    definition: FunctionProps | ComputeFunction,
    context: str,
) -> FunctionProps | ComputeFunction:
    """
    Apply defaults to a resolved function definition.

    A built function cannot take defaults after the fact.

    Raises:
        ConflictingConfiguration: If `definition` is a built function
            and defaults are set
    """
    if isinstance(definition, FunctionProps):
        return merge_function_props(defaults, definition)

    if defaults is not None:
        raise ConflictingConfiguration(
            f"Cannot define defaults.function when a Function is passed in to {context}"
        )
    return definition
