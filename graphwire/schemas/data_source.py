"""
Data Source Definition Schemas.

One model per data source variant. The variant of a raw declaration
is decided by graphwire.discriminator before one of these models is
validated, so the models themselves only check field shapes.

Example (YAML):
    dataSources:
      notesDS: src/notes.main
      billing:
        function:
          handler: src/billing.main
          timeout: 30
      table:
        type: dynamodb
        table: notes-table
      legacy:
        type: http
        endpoint: https://example.com
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import Field

from .base import DefinitionModel


class DataSourceProps(DefinitionModel):
    """Fields shared by every explicit data source declaration."""

    name: str | None = Field(default=None, description="Name of the data source")
    description: str | None = Field(default=None, description="Description of the data source")


class LambdaDataSourceProps(DataSourceProps):
    """Data source backed by a compute function."""

    type: Literal["function"] | None = None
    function: Any = Field(..., description="Function definition")


class DynamoDbDataSourceOverride(DefinitionModel):
    table: Any = None


class DynamoDbCdkProps(DefinitionModel):
    data_source: DynamoDbDataSourceOverride | None = None


class DynamoDbDataSourceProps(DataSourceProps):
    """Data source backed by a table."""

    type: Literal["dynamodb"] | None = None
    table: Any = Field(default=None, description="Target table")
    cdk: DynamoDbCdkProps | None = None

    def get_table(self) -> Any:
        if self.table is not None:
            return self.table
        return self.cdk.data_source.table


class RdsDataSourceOverride(DefinitionModel):
    serverless_cluster: Any = None
    secret_store: Any = None
    database_name: str | None = None


class RdsCdkProps(DefinitionModel):
    data_source: RdsDataSourceOverride | None = None


class RdsDataSourceProps(DataSourceProps):
    """Data source backed by a relational database cluster."""

    type: Literal["rds"] | None = None
    rds: Any = Field(default=None, description="Target cluster")
    database_name: str | None = Field(default=None, description="Database to connect to")
    cdk: RdsCdkProps | None = None

    def get_connection(self) -> tuple[Any, Any, str | None]:
        """
        Return (cluster, secret, database_name).

        With a cluster handle, the secret is the cluster's secret and the
        database name falls back to the cluster's default database.
        """
        if self.rds is not None:
            database_name = self.database_name or getattr(self.rds, "default_database_name", None)
            return self.rds, getattr(self.rds, "secret", None), database_name

        override = self.cdk.data_source
        return override.serverless_cluster, override.secret_store, override.database_name


class HttpDataSourceOverride(DefinitionModel):
    authorization_config: Any = None


class HttpCdkProps(DefinitionModel):
    data_source: HttpDataSourceOverride | None = None


class HttpDataSourceProps(DataSourceProps):
    """Data source that forwards requests to an HTTP endpoint."""

    type: Literal["http"] | None = None
    endpoint: str = Field(..., description="URL to forward requests to")
    cdk: HttpCdkProps | None = None

    def get_authorization_config(self) -> Any:
        if self.cdk is None or self.cdk.data_source is None:
            return None
        return self.cdk.data_source.authorization_config
