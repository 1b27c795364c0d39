"""
Declaration classification.

Data source and resolver declarations are loosely shaped: a string, a
mapping, a pydantic model or an already-built function handle. This
module is the single place that decides which kind a raw value is.
Call sites switch on the returned DefinitionKind and never inspect the
raw shape themselves.

Rules, first match wins:
    1. has `function`            -> Lambda data source / Lambda resolver
    2. has `table` (or cdk.dataSource.table)             -> DynamoDB
    3. has `rds` (or cdk.dataSource.serverlessCluster)   -> RDS
    4. has `endpoint`            -> HTTP
    5. resolver string naming a registered data source -> reference
    6. resolver string without "." -> UnknownDataSource
    7. resolver mapping with `dataSource`                -> reference
    8. anything else             -> inline function definition

A marker counts when it is set to a truthy value. Without `type`, the
marker fields of every variant but the winning one are ignored. An
explicit `type` picks among the structural matches of rules 1-4 and
ignores nothing.

Rules 2-4 are not valid for resolvers.
"""

from __future__ import annotations

import logging
from collections.abc import Container, Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any

from pydantic import BaseModel, ValidationError
from pydantic.alias_generators import to_camel

from .errors import AmbiguousDefinition, UnknownDataSource
from .providers.base import ComputeFunction, DataSourceVariant
from .schemas import (
    DynamoDbDataSourceProps,
    FunctionProps,
    HttpDataSourceProps,
    LambdaDataSourceProps,
    RdsDataSourceProps,
    ResolverProps,
)

logger = logging.getLogger(__name__)

# Separates module path from handler name in "src/notes.main"
HANDLER_SEPARATOR = "."


class DefinitionKind(str, Enum):
    FUNCTION = "function"
    EXISTING_FUNCTION = "existing_function"
    LAMBDA_DATA_SOURCE = "lambda_data_source"
    DYNAMODB_DATA_SOURCE = "dynamodb_data_source"
    RDS_DATA_SOURCE = "rds_data_source"
    HTTP_DATA_SOURCE = "http_data_source"
    LAMBDA_RESOLVER = "lambda_resolver"
    DATA_SOURCE_REFERENCE = "data_source_reference"


@dataclass(frozen=True)
class Classification:
    """
    Result of classifying one declaration.

    Attributes:
        kind: Which shape the value has
        props: The validated model for that shape. For FUNCTION this is
            FunctionProps, for EXISTING_FUNCTION the handle itself.
    """

    kind: DefinitionKind
    props: Any


_DATA_SOURCE_MODELS: dict[DefinitionKind, type[BaseModel]] = {
    DefinitionKind.LAMBDA_DATA_SOURCE: LambdaDataSourceProps,
    DefinitionKind.DYNAMODB_DATA_SOURCE: DynamoDbDataSourceProps,
    DefinitionKind.RDS_DATA_SOURCE: RdsDataSourceProps,
    DefinitionKind.HTTP_DATA_SOURCE: HttpDataSourceProps,
}

_KIND_BY_TYPE: dict[str, DefinitionKind] = {
    DataSourceVariant.LAMBDA.value: DefinitionKind.LAMBDA_DATA_SOURCE,
    DataSourceVariant.DYNAMODB.value: DefinitionKind.DYNAMODB_DATA_SOURCE,
    DataSourceVariant.RDS.value: DefinitionKind.RDS_DATA_SOURCE,
    DataSourceVariant.HTTP.value: DefinitionKind.HTTP_DATA_SOURCE,
}

VARIANT_BY_KIND: dict[DefinitionKind, DataSourceVariant] = {
    kind: DataSourceVariant(type_) for type_, kind in _KIND_BY_TYPE.items()
}

# Fields that only mean something for one variant
_MARKER_FIELDS: dict[DefinitionKind, tuple[str, ...]] = {
    DefinitionKind.LAMBDA_DATA_SOURCE: ("function",),
    DefinitionKind.DYNAMODB_DATA_SOURCE: ("table",),
    DefinitionKind.RDS_DATA_SOURCE: ("rds", "database_name"),
    DefinitionKind.HTTP_DATA_SOURCE: ("endpoint",),
}

_CDK_MARKER_FIELDS: dict[DefinitionKind, tuple[str, ...]] = {
    DefinitionKind.DYNAMODB_DATA_SOURCE: ("table",),
    DefinitionKind.RDS_DATA_SOURCE: ("serverless_cluster", "secret_store", "database_name"),
    DefinitionKind.HTTP_DATA_SOURCE: ("authorization_config",),
}


def _get(value: Any, name: str) -> Any:
    """Read a field from a model or a mapping (snake_case or camelCase)."""
    if value is None:
        return None
    if isinstance(value, BaseModel):
        return getattr(value, name, None)
    if isinstance(value, Mapping):
        if name in value:
            return value[name]
        return value.get(to_camel(name))
    return None


def _nested(value: Any, *path: str) -> Any:
    for name in path:
        value = _get(value, name)
    return value


def _structural_kinds(value: Any) -> list[DefinitionKind]:
    """Every data source kind whose marker field is set, in rule order."""
    kinds = []
    if _get(value, "function"):
        kinds.append(DefinitionKind.LAMBDA_DATA_SOURCE)
    if _get(value, "table") or _nested(value, "cdk", "data_source", "table"):
        kinds.append(DefinitionKind.DYNAMODB_DATA_SOURCE)
    if _get(value, "rds") or _nested(value, "cdk", "data_source", "serverless_cluster"):
        kinds.append(DefinitionKind.RDS_DATA_SOURCE)
    if _get(value, "endpoint"):
        kinds.append(DefinitionKind.HTTP_DATA_SOURCE)
    return kinds


def _drop_fields(value: Mapping[str, Any], names: tuple[str, ...]) -> dict[str, Any]:
    dropped = {*names, *(to_camel(name) for name in names)}
    return {k: v for k, v in value.items() if k not in dropped}


def _without_markers(value: Any, kind: DefinitionKind) -> Any:
    """Remove the marker fields of every other data source kind from a mapping."""
    if not isinstance(value, Mapping):
        return value

    losing = [other for other in _MARKER_FIELDS if other is not kind]

    data = dict(value)
    for other in losing:
        data = _drop_fields(data, _MARKER_FIELDS[other])

    cdk = _get(data, "cdk")
    override = _get(cdk, "data_source")
    if isinstance(cdk, Mapping) and isinstance(override, Mapping):
        for other in losing:
            override = _drop_fields(override, _CDK_MARKER_FIELDS.get(other, ()))
        cdk = _drop_fields(cdk, ("data_source",))
        if override:
            cdk["dataSource"] = override
        data = _drop_fields(data, ("cdk",))
        if cdk:
            data["cdk"] = cdk
    return data


def _validate(model: type[BaseModel], value: Any, what: str) -> Any:
    if isinstance(value, model):
        return value
    if isinstance(value, BaseModel):
        value = value.explicit_fields() if hasattr(value, "explicit_fields") else dict(value)
    try:
        return model.model_validate(value)
    except ValidationError as e:
        raise AmbiguousDefinition(f"Invalid {what}: {e}") from e


def classify_function_definition(value: Any, what: str = "function definition") -> Any:
    """
    Resolve a function definition to FunctionProps or a built handle.

    Raises:
        AmbiguousDefinition: If the value is neither a handler string,
            a function props mapping with a handler, nor a handle
    """
    if isinstance(value, ComputeFunction):
        return value
    if isinstance(value, str):
        if not value.strip():
            raise AmbiguousDefinition(f"Invalid {what}: empty handler")
        return FunctionProps.from_handler(value)
    if isinstance(value, (Mapping, BaseModel)):
        props = _validate(FunctionProps, value, what)
        if not props.handler:
            raise AmbiguousDefinition(f"Invalid {what}: no handler defined")
        return props
    raise AmbiguousDefinition(f"Invalid {what}: unsupported value {value!r}")


def _classify_function(value: Any, what: str) -> Classification:
    resolved = classify_function_definition(value, what)
    if isinstance(resolved, FunctionProps):
        return Classification(DefinitionKind.FUNCTION, resolved)
    return Classification(DefinitionKind.EXISTING_FUNCTION, resolved)


def classify_data_source(key: str, value: Any) -> Classification:
    """
    Classify a data source declaration.

    Raises:
        AmbiguousDefinition: If the value matches no supported shape, or
            its `type` names a variant whose fields are missing
    """
    what = f'data source "{key}"'
    kinds = _structural_kinds(value)
    declared = _get(value, "type") if not isinstance(value, ComputeFunction) else None

    if declared is not None:
        kind = _KIND_BY_TYPE.get(declared)
        if kind is None:
            raise AmbiguousDefinition(f'Invalid {what}: unknown type "{declared}"')
        if kind not in kinds:
            raise AmbiguousDefinition(
                f'Invalid {what}: type "{declared}" does not match the fields defined'
            )
    elif kinds:
        kind = kinds[0]
        value = _without_markers(value, kind)
    else:
        logger.debug(f"[discriminator] {key} -> inline function")
        return _classify_function(value, what)

    logger.debug(f"[discriminator] {key} -> {kind.value}")
    return Classification(kind, _validate(_DATA_SOURCE_MODELS[kind], value, what))


def classify_resolver(
    key: str,
    value: Any,
    data_source_keys: Container[str],
) -> Classification:
    """
    Classify a resolver declaration.

    A string is first checked against the registered data source keys;
    only on a miss is it judged to be a malformed reference (no ".") or
    a handler path.

    Raises:
        UnknownDataSource: If the value references an unregistered key
        AmbiguousDefinition: If the value matches no supported shape
    """
    what = f'resolver "{key}"'

    if isinstance(value, str):
        if value in data_source_keys:
            return Classification(
                DefinitionKind.DATA_SOURCE_REFERENCE,
                ResolverProps(data_source=value),
            )
        if HANDLER_SEPARATOR not in value:
            raise UnknownDataSource(
                f'Failed to create resolver "{key}". Data source "{value}" does not exist.'
            )
        return _classify_function(value, what)

    kinds = _structural_kinds(value)
    if kinds and kinds[0] is DefinitionKind.LAMBDA_DATA_SOURCE:
        return Classification(
            DefinitionKind.LAMBDA_RESOLVER,
            _validate(ResolverProps, value, what),
        )
    if kinds:
        raise AmbiguousDefinition(
            f"Invalid {what}: resolvers can only define a function or reference "
            f"an existing data source, not a {VARIANT_BY_KIND[kinds[0]].value} data source"
        )

    data_source = _get(value, "data_source")
    if data_source is not None:
        props = _validate(ResolverProps, value, what)
        if props.data_source not in data_source_keys:
            raise UnknownDataSource(
                f'Failed to create resolver "{key}". '
                f'Data source "{props.data_source}" does not exist.'
            )
        return Classification(DefinitionKind.DATA_SOURCE_REFERENCE, props)

    return _classify_function(value, what)
