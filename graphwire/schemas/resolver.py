"""
Resolver Definition Schemas.

A resolver value is either a string (an existing data source key or a
handler path), a bare function definition, or a ResolverProps mapping:

    resolvers:
      "Query listNotes": notesDS
      "Query getNote": src/get.main
      "Mutation charge":
        function: src/billing.main
        requestMapping:
          file: templates/charge.request.vtl
        responseMapping:
          inline: $util.toJson($ctx.result)
"""

from __future__ import annotations

from typing import Any

from pydantic import Field

from .base import DefinitionModel


class MappingTemplateProps(DefinitionModel):
    """
    A request/response mapping template declaration.

    Exactly one of `file` or `inline` must be set; this is checked by
    graphwire.templates.build_mapping_template, not by the model.
    """

    file: str | None = Field(default=None, description="Path to the template file")
    inline: str | None = Field(default=None, description="Inline template text")


class ResolverCdkProps(DefinitionModel):
    resolver: dict[str, Any] = Field(
        default_factory=dict,
        description="Extra resolver options passed through to the provider",
    )


class ResolverProps(DefinitionModel):
    """Full resolver configuration."""

    data_source: str | None = Field(
        default=None,
        description="Key of an already registered data source",
    )
    function: Any = Field(
        default=None,
        description="Function definition used to create this resolver's data source",
    )
    request_mapping: Any = Field(
        default=None,
        description="Request template, checked when the resolver is built",
    )
    response_mapping: Any = Field(
        default=None,
        description="Response template, checked when the resolver is built",
    )
    cdk: ResolverCdkProps | None = None

    def get_options(self) -> dict[str, Any]:
        if self.cdk is None:
            return {}
        return dict(self.cdk.resolver)
