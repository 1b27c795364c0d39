"""
Graphwire Errors.

Every failure raised while wiring an API derives from GraphwireError,
so callers can catch the whole family at once.

Propagation:
    Errors are raised synchronously by the add_*/attach_* call that
    detected them. Nothing is rolled back: entries registered before
    the failing one stay registered.

Lookups (get_function, get_data_source, get_resolver) never raise;
they return None on a miss.
"""

from __future__ import annotations


class GraphwireError(Exception):
    """Base error for all graphwire failures."""

    pass


class AmbiguousDefinition(GraphwireError):
    """A declaration does not match exactly one supported shape."""

    pass


class DuplicateKey(GraphwireError):
    """A data source or resolver key is already registered."""

    pass


class UnknownDataSource(GraphwireError):
    """A resolver references a data source key that is not registered."""

    pass


class UnknownTarget(GraphwireError):
    """A targeted permission grant found no function behind the key."""

    pass


class ConflictingConfiguration(GraphwireError):
    """Defaults were given for a function that is already built."""

    pass


class InvalidResolverKey(GraphwireError):
    """A resolver key is not exactly "<TypeName> <FieldName>"."""

    pass


class InvalidTemplateSpec(GraphwireError):
    """A mapping template sets both or neither of file/inline."""

    pass


class TemplateNotFound(GraphwireError):
    """A file-backed mapping template could not be read."""

    pass


class SchemaNotFound(GraphwireError):
    """A GraphQL schema source file could not be read."""

    pass


class UnsupportedDefinitionFormat(GraphwireError):
    """An API declaration file has an unsupported extension."""

    pass
