"""
Resource Provider Protocols.

Graphwire never provisions anything itself. Every API, data source,
resolver and function is created through a ResourceProvider, and the
handles it returns are treated as opaque.

Design Principle:
    Protocols define WHAT, providers define HOW.
    The wiring logic only relies on the small surface below, so the
    same declarations can be synthesized against a cloud SDK, a test
    double, or the in-memory provider shipped with graphwire.

Protocols:
    - ResourceProvider: creates resources
    - GraphqlApi: the API handle returned by create_api
    - ComputeFunction: a function handle that accepts permission grants
"""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from graphwire.schemas import FunctionProps
    from graphwire.templates import MappingTemplate


class DataSourceVariant(str, Enum):
    """Kind of backing resource behind a data source."""

    LAMBDA = "function"
    DYNAMODB = "dynamodb"
    RDS = "rds"
    HTTP = "http"


@runtime_checkable
class ComputeFunction(Protocol):
    """
    A built compute function.

    Anything with a `function_name` and an `attach_permissions` method
    is accepted wherever a function definition is expected, and is
    used as-is instead of being created.
    """

    function_name: str

    def attach_permissions(self, permissions: Any) -> None:
        """Grant an opaque permission descriptor to this function."""
        ...


@runtime_checkable
class GraphqlApi(Protocol):
    """A realized GraphQL API."""

    api_id: str
    arn: str
    name: str
    graphql_url: str


class ResourceProvider(Protocol):
    """Creates the resources an API declaration resolves to."""

    def create_api(
        self,
        scope: Any,
        construct_id: str,
        config: dict[str, Any],
    ) -> GraphqlApi:
        """
        Create the GraphQL API.

        Called at most once per AppSyncApi. `config` holds `name`,
        `xray_enabled`, `schema` (a schema file path or None) and any
        extra creation options from the declaration.
        """
        ...

    def create_data_source(
        self,
        api: GraphqlApi,
        key: str,
        variant: DataSourceVariant,
        inputs: dict[str, Any],
        *,
        name: str | None = None,
        description: str | None = None,
    ) -> Any:
        """
        Create a data source on `api`.

        `inputs` by variant:
            LAMBDA: function
            DYNAMODB: table
            RDS: cluster, secret, database_name
            HTTP: endpoint, authorization_config
        """
        ...

    def create_resolver(
        self,
        api: GraphqlApi,
        *,
        type_name: str,
        field_name: str,
        data_source: Any,
        request_template: MappingTemplate | None = None,
        response_template: MappingTemplate | None = None,
        options: dict[str, Any] | None = None,
    ) -> Any:
        """Create the resolver binding one field to one data source."""
        ...

    def create_compute_function(
        self,
        scope: Any,
        id_hint: str,
        props: FunctionProps,
    ) -> ComputeFunction:
        """Create a compute function from fully merged props."""
        ...
