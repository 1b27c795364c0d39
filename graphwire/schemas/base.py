"""
Shared base for declaration models.

Declarations are usually written by hand in YAML or JSON using
camelCase keys ("dataSource", "memorySize"). Models accept both the
camelCase alias and the snake_case field name.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class DefinitionModel(BaseModel):
    """Base model for all declaration schemas."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        arbitrary_types_allowed=True,
        extra="forbid",
    )

    def explicit_fields(self) -> dict:
        """
        Return the fields that were explicitly set, by field name.

        Values are returned as-is (no serialization), so opaque handles
        such as tables or functions keep their identity.
        """
        return {name: getattr(self, name) for name in self.model_fields_set}
