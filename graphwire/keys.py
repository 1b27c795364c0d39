"""
Resolver key helpers.

A resolver key names one GraphQL field as "<TypeName> <FieldName>".
Extra whitespace between (or around) the two tokens is ignored, so
"Query   listNotes" and "Query listNotes" are the same key.
"""

from __future__ import annotations

from .errors import InvalidResolverKey


def normalize_resolver_key(key: str) -> str:
    """Collapse whitespace runs to single spaces and trim the ends."""
    return " ".join(key.split())


def split_resolver_key(key: str) -> tuple[str, str]:
    """
    Normalize a resolver key and split it into (type_name, field_name).

    Raises:
        InvalidResolverKey: If the key does not hold exactly two tokens
    """
    normalized = normalize_resolver_key(key)
    parts = normalized.split(" ")
    if len(parts) != 2:
        raise InvalidResolverKey(f"Invalid resolver {normalized!r}")

    type_name, field_name = parts
    if not type_name or not field_name:
        raise InvalidResolverKey(f'Invalid field defined for "{normalized}"')
    return type_name, field_name


def build_data_source_key(type_name: str, field_name: str) -> str:
    """Key of the data source created for an inline resolver function."""
    return f"LambdaDS_{type_name}_{field_name}"


def build_function_id(*parts: str) -> str:
    """Id hint handed to the provider when creating a function."""
    return "_".join(("Lambda", *parts))
