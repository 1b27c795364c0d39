"""
Graphwire - declarative wiring for AppSync-style GraphQL APIs.

Graphwire turns a declaration of data sources and resolvers into a
fully wired resource graph:

- **Resolver binding**: every "<Type> <field>" resolver bound to exactly one data source
- **Inline functions**: functions declared on a resolver become named data sources
- **Defaults**: API-wide function defaults merged into every function
- **Permissions**: blanket grants applied to current and future functions
- **Providers**: resources are created through a pluggable ResourceProvider

Quick Start:
    >>> from graphwire import AppSyncApi, InMemoryResourceProvider
    >>>
    >>> api = AppSyncApi(
    ...     None,
    ...     "GraphqlApi",
    ...     {
    ...         "dataSources": {"notesDS": "src/notes.main"},
    ...         "resolvers": {"Query listNotes": "notesDS"},
    ...     },
    ...     provider=InMemoryResourceProvider(),
    ... )
    >>> api.get_function("Query listNotes") is api.get_function("notesDS")
    True
"""

__version__ = "0.1.0"
__license__ = "MIT"

from graphwire.api import AppSyncApi
from graphwire.config import GraphwireSettings, configure_logging, get_settings
from graphwire.errors import (
    AmbiguousDefinition,
    ConflictingConfiguration,
    DuplicateKey,
    GraphwireError,
    InvalidResolverKey,
    InvalidTemplateSpec,
    SchemaNotFound,
    TemplateNotFound,
    UnknownDataSource,
    UnknownTarget,
    UnsupportedDefinitionFormat,
)
from graphwire.keys import normalize_resolver_key
from graphwire.loaders import load_api_props
from graphwire.providers import InMemoryResourceProvider, ResourceProvider
from graphwire.schemas import ApiProps, FunctionProps, ResolverProps

__all__ = [
    # Version info
    "__version__",
    "__license__",
    # Core
    "AppSyncApi",
    "ApiProps",
    "FunctionProps",
    "ResolverProps",
    "InMemoryResourceProvider",
    "ResourceProvider",
    "load_api_props",
    "normalize_resolver_key",
    # Settings
    "GraphwireSettings",
    "configure_logging",
    "get_settings",
    # Errors
    "AmbiguousDefinition",
    "ConflictingConfiguration",
    "DuplicateKey",
    "GraphwireError",
    "InvalidResolverKey",
    "InvalidTemplateSpec",
    "SchemaNotFound",
    "TemplateNotFound",
    "UnknownDataSource",
    "UnknownTarget",
    "UnsupportedDefinitionFormat",
]
