"""
API Definition Schema.

The top-level declaration of one GraphQL API. Data source and resolver
values stay raw here; each one is classified and validated on its own
when it is added, so one malformed entry does not reject the whole
declaration up front.
"""

from __future__ import annotations

from typing import Any

from pydantic import Field

from .base import DefinitionModel
from .function import FunctionProps


class ApiDefaults(DefinitionModel):
    function: FunctionProps | None = Field(
        default=None,
        description="Defaults merged into every function the API creates",
    )


class ApiCdkProps(DefinitionModel):
    graphql_api: Any = Field(
        default=None,
        description="An existing API handle, or extra options for creating one",
    )


class ApiProps(DefinitionModel):
    """
    Declaration of a GraphQL API.

    Example:
        ApiProps.model_validate({
            "schema": "graphql/schema.graphql",
            "dataSources": {"notesDS": "src/notes.main"},
            "resolvers": {
                "Query    listNotes": "notesDS",
                "Mutation createNote": "notesDS",
            },
            "defaults": {"function": {"timeout": 20}},
        })
    """

    schema_: str | list[str] | None = Field(
        default=None,
        alias="schema",
        description="Schema file path, or a list of files to merge",
    )
    data_sources: dict[str, Any] = Field(default_factory=dict)
    resolvers: dict[str, Any] = Field(default_factory=dict)
    defaults: ApiDefaults | None = None
    cdk: ApiCdkProps | None = None

    @property
    def default_function(self) -> FunctionProps | None:
        if self.defaults is None:
            return None
        return self.defaults.function
