"""
In-Memory Resource Provider.

Records every resource it is asked to create as a plain dataclass.
Nothing is provisioned, which makes it suitable for tests and for
dry-run synthesis of a declaration.

Ids are derived from names, so the same declaration always produces
the same handles.
"""

from __future__ import annotations

import hashlib
import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from .base import DataSourceVariant

if TYPE_CHECKING:
    from graphwire.schemas import FunctionProps
    from graphwire.templates import MappingTemplate

logger = logging.getLogger(__name__)


def _short_hash(value: str) -> str:
    return hashlib.sha1(value.encode("utf-8")).hexdigest()[:12]


@dataclass
class ApiResource:
    """A recorded GraphQL API."""

    name: str
    schema: str | None = None
    xray_enabled: bool = False
    options: dict[str, Any] = field(default_factory=dict)
    region: str = "us-east-1"

    @property
    def api_id(self) -> str:
        return _short_hash(self.name)

    @property
    def arn(self) -> str:
        return f"arn:aws:appsync:{self.region}:000000000000:apis/{self.api_id}"

    @property
    def graphql_url(self) -> str:
        return f"https://{self.api_id}.appsync-api.{self.region}.amazonaws.com/graphql"


@dataclass
class FunctionResource:
    """A recorded compute function and every permission granted to it."""

    function_name: str
    props: Any = None
    permissions: list[Any] = field(default_factory=list)

    def attach_permissions(self, permissions: Any) -> None:
        self.permissions.append(permissions)


@dataclass
class TableResource:
    name: str


@dataclass
class RdsClusterResource:
    name: str
    secret: Any = None
    default_database_name: str | None = None


@dataclass
class DataSourceResource:
    """A recorded data source."""

    api: ApiResource
    key: str
    variant: DataSourceVariant
    inputs: dict[str, Any] = field(default_factory=dict)
    name: str | None = None
    description: str | None = None

    @property
    def function(self) -> FunctionResource | None:
        return self.inputs.get("function")


@dataclass
class ResolverResource:
    """A recorded resolver."""

    api: ApiResource
    type_name: str
    field_name: str
    data_source: DataSourceResource
    request_template: MappingTemplate | None = None
    response_template: MappingTemplate | None = None
    options: dict[str, Any] = field(default_factory=dict)


class InMemoryResourceProvider:
    """
    ResourceProvider that keeps everything in lists.

    Example:
        provider = InMemoryResourceProvider()
        api = AppSyncApi(None, "GraphqlApi", props, provider=provider)

        assert len(provider.functions) == 1
        assert provider.resolvers[0].data_source.key == "notesDS"
    """

    def __init__(self, region: str = "us-east-1") -> None:
        self.region = region
        self.apis: list[ApiResource] = []
        self.data_sources: list[DataSourceResource] = []
        self.resolvers: list[ResolverResource] = []
        self.functions: list[FunctionResource] = []

    def create_api(
        self,
        scope: Any,
        construct_id: str,
        config: dict[str, Any],
    ) -> ApiResource:
        options = dict(config)
        api = ApiResource(
            name=options.pop("name", construct_id),
            schema=options.pop("schema", None),
            xray_enabled=options.pop("xray_enabled", False),
            options=options,
            region=self.region,
        )
        self.apis.append(api)
        logger.info(f"[provider] Created API: {api.name}")
        return api

    def create_data_source(
        self,
        api: ApiResource,
        key: str,
        variant: DataSourceVariant,
        inputs: dict[str, Any],
        *,
        name: str | None = None,
        description: str | None = None,
    ) -> DataSourceResource:
        data_source = DataSourceResource(
            api=api,
            key=key,
            variant=variant,
            inputs=dict(inputs),
            name=name or key,
            description=description,
        )
        self.data_sources.append(data_source)
        logger.info(f"[provider] Created {variant.value} data source: {key}")
        return data_source

    def create_resolver(
        self,
        api: ApiResource,
        *,
        type_name: str,
        field_name: str,
        data_source: DataSourceResource,
        request_template: MappingTemplate | None = None,
        response_template: MappingTemplate | None = None,
        options: dict[str, Any] | None = None,
    ) -> ResolverResource:
        resolver = ResolverResource(
            api=api,
            type_name=type_name,
            field_name=field_name,
            data_source=data_source,
            request_template=request_template,
            response_template=response_template,
            options=dict(options or {}),
        )
        self.resolvers.append(resolver)
        logger.info(f"[provider] Created resolver: {type_name}.{field_name}")
        return resolver

    def create_compute_function(
        self,
        scope: Any,
        id_hint: str,
        props: FunctionProps,
    ) -> FunctionResource:
        function = FunctionResource(function_name=id_hint, props=props)
        # Permissions declared on the function are its first grants
        for permissions in props.permissions:
            function.attach_permissions(permissions)
        self.functions.append(function)
        logger.info(f"[provider] Created function: {id_hint}")
        return function

    def __repr__(self) -> str:
        return (
            f"<InMemoryResourceProvider apis={len(self.apis)} "
            f"data_sources={len(self.data_sources)} "
            f"resolvers={len(self.resolvers)} "
            f"functions={len(self.functions)}>"
        )
