"""
Function Definition Schema.

A function definition describes a compute function that backs a
Lambda data source. It can be written three ways:

    "src/notes.main"                          # handler shorthand
    {"handler": "src/notes.main", "timeout": 20}
    <an already-built ComputeFunction handle>

Only the first two can receive `defaults.function`.
"""

from __future__ import annotations

from typing import Any

from pydantic import ConfigDict, Field

from .base import DefinitionModel


class FunctionProps(DefinitionModel):
    """
    Configuration for a single compute function.

    Unknown keys are kept and passed through to the resource provider.

    Merge classes (see graphwire.defaults):
        - environment: key-wise union, override wins
        - permissions, layers: concatenated, defaults first
        - everything else: replaced by the override when set
    """

    model_config = ConfigDict(extra="allow")

    handler: str | None = Field(default=None, description="Handler path, e.g. 'src/notes.main'")
    runtime: str | None = Field(default=None, description="Runtime identifier")
    timeout: int | None = Field(default=None, ge=1, description="Timeout in seconds")
    memory_size: int | None = Field(default=None, ge=1, description="Memory in MB")
    description: str | None = Field(default=None, description="Function description")
    environment: dict[str, Any] = Field(
        default_factory=dict,
        description="Environment variables",
    )
    permissions: list[Any] = Field(
        default_factory=list,
        description="Permission descriptors granted at creation",
    )
    layers: list[Any] = Field(default_factory=list, description="Layer references")

    @classmethod
    def from_handler(cls, handler: str) -> "FunctionProps":
        """Build props from the handler shorthand."""
        return cls(handler=handler)
