"""
Declaration Schemas.

Pydantic models for API, data source, resolver and function
declarations. They can be built in code or validated from YAML/JSON.
"""

from .api import ApiCdkProps, ApiDefaults, ApiProps
from .data_source import (
    DataSourceProps,
    DynamoDbDataSourceProps,
    HttpDataSourceProps,
    LambdaDataSourceProps,
    RdsDataSourceProps,
)
from .function import FunctionProps
from .resolver import MappingTemplateProps, ResolverProps

__all__ = [
    "ApiCdkProps",
    "ApiDefaults",
    "ApiProps",
    "DataSourceProps",
    "DynamoDbDataSourceProps",
    "FunctionProps",
    "HttpDataSourceProps",
    "LambdaDataSourceProps",
    "MappingTemplateProps",
    "RdsDataSourceProps",
    "ResolverProps",
]
