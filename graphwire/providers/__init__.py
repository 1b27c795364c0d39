"""
Resource Providers.

The protocols graphwire creates resources through, plus an in-memory
implementation.
"""

from .base import ComputeFunction, DataSourceVariant, GraphqlApi, ResourceProvider
from .memory import (
    ApiResource,
    DataSourceResource,
    FunctionResource,
    InMemoryResourceProvider,
    RdsClusterResource,
    ResolverResource,
    TableResource,
)

__all__ = [
    "ApiResource",
    "ComputeFunction",
    "DataSourceResource",
    "DataSourceVariant",
    "FunctionResource",
    "GraphqlApi",
    "InMemoryResourceProvider",
    "RdsClusterResource",
    "ResolverResource",
    "ResourceProvider",
    "TableResource",
]
