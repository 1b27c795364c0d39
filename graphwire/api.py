"""
AppSync API construct.

Turns an ApiProps declaration into a wired resource graph: every
resolver bound to exactly one data source, every inline function
turned into a named data source, and every blanket permission grant
applied to every function, including functions added later.

Flow:
    1. Create (or adopt) the GraphQL API
    2. Add data sources, in declaration order
    3. Add resolvers, in declaration order
    4. Later add_data_sources / add_resolvers calls follow the same path

Data source and resolver keys are the only way entries refer to each
other, so the result does not depend on the order of sibling entries,
only on a referenced data source being added before its resolvers.

Failure model:
    Errors are raised by the call that hit them and nothing is rolled
    back. If add_resolvers fails on its third entry, the first two stay
    registered. Validate declarations up front if you need all-or-nothing.

Usage:
    api = AppSyncApi(
        stack,
        "GraphqlApi",
        {
            "schema": "graphql/schema.graphql",
            "dataSources": {"notesDS": "src/notes.main"},
            "resolvers": {
                "Query    listNotes": "notesDS",
                "Mutation createNote": "notesDS",
            },
        },
        provider=InMemoryResourceProvider(),
    )

    api.add_resolvers(stack, {"Mutation charge": "src/billing.main"})
    api.attach_permissions(["s3"])
    fn = api.get_function("Mutation charge")
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from .config import GraphwireSettings, get_settings
from .defaults import apply_function_defaults
from .discriminator import (
    VARIANT_BY_KIND,
    Classification,
    DefinitionKind,
    classify_data_source,
    classify_function_definition,
    classify_resolver,
)
from .errors import AmbiguousDefinition
from .keys import (
    build_data_source_key,
    build_function_id,
    normalize_resolver_key,
    split_resolver_key,
)
from .permissions import PermissionPropagator
from .providers.base import ComputeFunction, DataSourceVariant, GraphqlApi, ResourceProvider
from .registry import (
    DataSourceEntry,
    DataSourceRegistry,
    ResolverEntry,
    ResolverRegistry,
    find_data_source,
)
from .schema_loader import GraphQLSchemaLoader
from .schemas import ApiProps, ResolverProps
from .templates import build_mapping_template

logger = logging.getLogger(__name__)


class AppSyncApi:
    """
    A GraphQL API with its data sources and resolvers.

    Attributes:
        graphql_api: The realized API handle
        props: The validated declaration this API was built from
        data_sources: Registered data sources
        resolvers: Registered resolvers
    """

    def __init__(
        self,
        scope: Any,
        construct_id: str,
        props: ApiProps | Mapping[str, Any] | None = None,
        *,
        provider: ResourceProvider,
        schema_loader: GraphQLSchemaLoader | None = None,
        settings: GraphwireSettings | None = None,
    ):
        """
        Create the API and everything it declares.

        Args:
            scope: Opaque scope handed to the provider for new resources
            construct_id: Id of this API within its scope
            props: Declaration, as ApiProps or a raw mapping
            provider: Creates the underlying resources
            schema_loader: Merges multi-file schemas
            settings: Naming and build directory settings
        """
        if props is None:
            props = ApiProps()
        elif not isinstance(props, ApiProps):
            props = ApiProps.model_validate(props)

        self.scope = scope
        self.construct_id = construct_id
        self.props = props
        self._provider = provider
        self._schema_loader = schema_loader or GraphQLSchemaLoader()
        self._settings = settings or get_settings()

        self.data_sources = DataSourceRegistry()
        self.resolvers = ResolverRegistry()
        self.permissions = PermissionPropagator(self.data_sources, self._find_data_source)

        self.graphql_api = self._create_graphql_api()

        for key, value in props.data_sources.items():
            self._add_data_source(scope, key, value)

        for key, value in props.resolvers.items():
            self._add_resolver(scope, key, value)

    # ==================== API ====================

    @property
    def api_id(self) -> str:
        return self.graphql_api.api_id

    @property
    def api_arn(self) -> str:
        return self.graphql_api.arn

    @property
    def api_name(self) -> str:
        return self.graphql_api.name

    @property
    def url(self) -> str:
        return self.graphql_api.graphql_url

    def _create_graphql_api(self) -> GraphqlApi:
        cdk_api = self.props.cdk.graphql_api if self.props.cdk else None

        if isinstance(cdk_api, GraphqlApi):
            logger.info(f"[api] Using existing API: {cdk_api.name}")
            return cdk_api
        if cdk_api is not None and not isinstance(cdk_api, Mapping):
            raise AmbiguousDefinition(
                f"cdk.graphqlApi must be an existing API or a mapping of options, "
                f"got {type(cdk_api).__name__}"
            )

        config: dict[str, Any] = {
            "name": self._settings.logical_prefixed_name(self.construct_id),
            "xray_enabled": True,
            "schema": self._build_schema(),
            **dict(cdk_api or {}),
        }
        logger.info(f"[api] Creating API: {config['name']}")
        return self._provider.create_api(self.scope, self.construct_id, config)

    def _build_schema(self) -> str | None:
        """Return the schema file path to create the API with."""
        schema = self.props.schema_
        if isinstance(schema, str):
            return schema
        if not schema:
            return None

        merged = self._schema_loader.load(schema)
        if merged is None:
            return None

        build_dir = Path(self._settings.build_dir)
        build_dir.mkdir(parents=True, exist_ok=True)
        path = build_dir / f"appsyncapi-{self.construct_id}.graphql"
        path.write_text(merged, encoding="utf-8")
        logger.info(f"[api] Wrote merged schema: {path}")
        return str(path)

    # ==================== Data sources ====================

    def add_data_sources(self, scope: Any, data_sources: Mapping[str, Any]) -> None:
        """
        Add data sources after the API has been created.

        Example:
            api.add_data_sources(stack, {"billingDS": "src/billing.main"})
        """
        for key, value in data_sources.items():
            self._add_data_source(scope, key, value)

    def _add_data_source(self, scope: Any, key: str, value: Any) -> DataSourceEntry:
        self.data_sources.check_available(key)
        classification = classify_data_source(key, value)
        kind = classification.kind
        props = classification.props

        if kind in (DefinitionKind.FUNCTION, DefinitionKind.EXISTING_FUNCTION):
            function = self._build_function(
                scope, build_function_id(key), props, f'the "{key}" data source'
            )
            return self._create_lambda_data_source(key, function)

        if kind is DefinitionKind.LAMBDA_DATA_SOURCE:
            function = self._build_function(
                scope, build_function_id(key), props.function, f'the "{key}" data source'
            )
            return self._create_lambda_data_source(
                key, function, name=props.name, description=props.description
            )

        if kind is DefinitionKind.DYNAMODB_DATA_SOURCE:
            inputs = {"table": props.get_table()}
        elif kind is DefinitionKind.RDS_DATA_SOURCE:
            cluster, secret, database_name = props.get_connection()
            inputs = {"cluster": cluster, "secret": secret, "database_name": database_name}
        else:
            inputs = {
                "endpoint": props.endpoint,
                "authorization_config": props.get_authorization_config(),
            }

        variant = VARIANT_BY_KIND[kind]
        data_source = self._provider.create_data_source(
            self.graphql_api,
            key,
            variant,
            inputs,
            name=props.name,
            description=props.description,
        )
        entry = DataSourceEntry(key=key, variant=variant, data_source=data_source)
        self.data_sources.add(entry)
        return entry

    def _build_function(
        self,
        scope: Any,
        id_hint: str,
        definition: Any,
        context: str,
    ) -> ComputeFunction:
        """Create a function from a definition, or adopt a built one."""
        resolved = apply_function_defaults(
            self.props.default_function,
            classify_function_definition(definition, f"function for {context}"),
            context,
        )
        if isinstance(resolved, ComputeFunction):
            return resolved
        return self._provider.create_compute_function(scope, id_hint, resolved)

    def _create_lambda_data_source(
        self,
        key: str,
        function: ComputeFunction,
        *,
        name: str | None = None,
        description: str | None = None,
    ) -> DataSourceEntry:
        data_source = self._provider.create_data_source(
            self.graphql_api,
            key,
            DataSourceVariant.LAMBDA,
            {"function": function},
            name=name,
            description=description,
        )
        entry = DataSourceEntry(
            key=key,
            variant=DataSourceVariant.LAMBDA,
            data_source=data_source,
            function=function,
        )
        self.data_sources.add(entry)
        self.permissions.replay(function)
        return entry

    # ==================== Resolvers ====================

    def add_resolvers(self, scope: Any, resolvers: Mapping[str, Any]) -> None:
        """
        Add resolvers after the API has been created.

        Example:
            api.add_resolvers(stack, {"Mutation charge": "billingDS"})
        """
        for key, value in resolvers.items():
            self._add_resolver(scope, key, value)

    def _add_resolver(self, scope: Any, key: str, value: Any) -> ResolverEntry:
        type_name, field_name = split_resolver_key(key)
        resolver_key = f"{type_name} {field_name}"
        self.resolvers.check_available(resolver_key)

        classification = classify_resolver(resolver_key, value, self.data_sources)
        entry = self._resolve_data_source(scope, type_name, field_name, classification)

        props = classification.props if isinstance(classification.props, ResolverProps) else None
        request_template = build_mapping_template(props.request_mapping) if props else None
        response_template = build_mapping_template(props.response_mapping) if props else None

        resolver = self._provider.create_resolver(
            self.graphql_api,
            type_name=type_name,
            field_name=field_name,
            data_source=entry.data_source,
            request_template=request_template,
            response_template=response_template,
            options=props.get_options() if props else None,
        )
        resolver_entry = ResolverEntry(
            key=resolver_key,
            type_name=type_name,
            field_name=field_name,
            data_source_key=entry.key,
            resolver=resolver,
            request_template=request_template,
            response_template=response_template,
        )
        self.resolvers.add(resolver_entry)
        return resolver_entry

    def _resolve_data_source(
        self,
        scope: Any,
        type_name: str,
        field_name: str,
        classification: Classification,
    ) -> DataSourceEntry:
        """Find the referenced data source, or create one for an inline function."""
        if classification.kind is DefinitionKind.DATA_SOURCE_REFERENCE:
            return self.data_sources.get(classification.props.data_source)

        if classification.kind is DefinitionKind.LAMBDA_RESOLVER:
            definition = classification.props.function
        else:
            definition = classification.props

        data_source_key = build_data_source_key(type_name, field_name)
        self.data_sources.check_available(data_source_key)
        function = self._build_function(
            scope,
            build_function_id(type_name, field_name),
            definition,
            f'the "{type_name} {field_name}" resolver',
        )
        return self._create_lambda_data_source(data_source_key, function)

    # ==================== Lookups ====================

    def _find_data_source(self, key: str) -> DataSourceEntry | None:
        return find_data_source(self.data_sources, self.resolvers, key)

    def get_function(self, key: str) -> ComputeFunction | None:
        """
        Get the function behind a data source key or a resolver key.

        Example:
            fn = api.get_function("Mutation charge")
        """
        entry = self._find_data_source(key)
        return entry.function if entry else None

    def get_data_source(self, key: str) -> Any | None:
        """Get a data source handle by data source key or resolver key."""
        entry = self._find_data_source(key)
        return entry.data_source if entry else None

    def get_resolver(self, key: str) -> Any | None:
        """Get a resolver handle by resolver key."""
        entry = self.resolvers.get(normalize_resolver_key(key))
        return entry.resolver if entry else None

    # ==================== Permissions ====================

    def attach_permissions(self, permissions: Any) -> None:
        """
        Grant permissions to every function, including ones added later.

        Example:
            api.attach_permissions(["s3"])
        """
        self.permissions.attach_global(permissions)

    def attach_permissions_to_data_source(self, key: str, permissions: Any) -> None:
        """
        Grant permissions to the function behind one data source or resolver key.

        Raises:
            UnknownTarget: If no function exists for `key`
        """
        self.permissions.attach_targeted(key, permissions)

    # ==================== Metadata ====================

    def get_construct_metadata(self) -> dict[str, Any]:
        """Describe the API and its data sources."""
        return {
            "type": "AppSync",
            "data": {
                "url": self.url,
                "appSyncApiId": self.api_id,
                "dataSources": [
                    {
                        "name": entry.key,
                        "fn": entry.function.function_name if entry.function else None,
                    }
                    for entry in self.data_sources
                ],
            },
        }

    def __repr__(self) -> str:
        return (
            f"<AppSyncApi id={self.construct_id!r} "
            f"data_sources={len(self.data_sources)} "
            f"resolvers={len(self.resolvers)}>"
        )
