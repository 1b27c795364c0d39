"""
GraphQL schema loading and merging.

Schema files are parsed with graphql-core and merged into a single
document:

    - types with the same name are merged member-wise (fields, enum
      values, union members, interfaces, directives); the first
      definition of a member wins
    - type extensions are folded into their base type when the base is
      present, and kept as extensions otherwise
    - schema definitions are merged by operation type
    - any other definition is kept once by name

Source paths may be glob patterns ("graphql/**/*.graphql").
"""

from __future__ import annotations

import glob
import logging
from collections.abc import Sequence
from pathlib import Path

from graphql import parse, print_ast
from graphql.language import (
    DirectiveDefinitionNode,
    DocumentNode,
    Node,
    SchemaDefinitionNode,
    SchemaExtensionNode,
    TypeExtensionNode,
)

from .errors import SchemaNotFound

logger = logging.getLogger(__name__)

GLOB_CHARS = "*?["
MEMBER_ATTRS = ("interfaces", "directives", "fields", "values", "types", "operation_types")


def _member_key(member: Node) -> str:
    name = getattr(member, "name", None)
    if name is not None:
        return name.value
    return str(getattr(member, "operation", id(member)))


def _definition_key(node: Node, index: int) -> str:
    if isinstance(node, (SchemaDefinitionNode, SchemaExtensionNode)):
        return "schema"
    if isinstance(node, DirectiveDefinitionNode):
        return f"@{node.name.value}"
    name = getattr(node, "name", None)
    if name is None:
        return f"#{index}"
    return name.value


def _is_extension(node: Node) -> bool:
    return isinstance(node, (TypeExtensionNode, SchemaExtensionNode))


def _merge_nodes(base: Node, extra: Node) -> Node:
    values = {key: getattr(base, key) for key in base.keys}
    for attr in MEMBER_ATTRS:
        if attr not in base.keys or attr not in extra.keys:
            continue
        members = {_member_key(m): m for m in (getattr(base, attr) or ())}
        for member in getattr(extra, attr) or ():
            members.setdefault(_member_key(member), member)
        values[attr] = tuple(members.values())
    return base.__class__(**values)


def merge_documents(documents: Sequence[DocumentNode]) -> DocumentNode:
    """Merge parsed schema documents into one document."""
    merged: dict[str, Node] = {}
    index = 0
    for document in documents:
        for node in document.definitions:
            key = _definition_key(node, index)
            index += 1
            existing = merged.get(key)
            if existing is None:
                merged[key] = node
            elif _is_extension(existing) and not _is_extension(node):
                merged[key] = _merge_nodes(node, existing)
            else:
                merged[key] = _merge_nodes(existing, node)
    return DocumentNode(definitions=tuple(merged.values()))


class GraphQLSchemaLoader:
    """
    Loads one or more schema files into one merged schema document.

    Example:
        loader = GraphQLSchemaLoader()
        text = loader.load(["graphql/base.graphql", "graphql/notes/*.graphql"])
    """

    def expand(self, sources: str | Sequence[str]) -> list[Path]:
        """Expand glob patterns, keeping plain paths in order."""
        if isinstance(sources, str):
            sources = [sources]

        paths: list[Path] = []
        for source in sources:
            if any(char in source for char in GLOB_CHARS):
                matches = sorted(glob.glob(source, recursive=True))
                if not matches:
                    raise SchemaNotFound(f'No schema files match "{source}"')
                paths.extend(Path(match) for match in matches)
            else:
                paths.append(Path(source))
        return paths

    def load(self, sources: str | Sequence[str] | None) -> str | None:
        """
        Load and merge schema sources.

        Returns:
            The merged schema as SDL text, or None when there are no sources

        Raises:
            SchemaNotFound: If a source file cannot be read
            graphql.GraphQLError: If a source file is not valid SDL
        """
        if not sources:
            return None

        documents = []
        for path in self.expand(sources):
            try:
                text = path.read_text(encoding="utf-8")
            except OSError as e:
                raise SchemaNotFound(f'Failed to read schema "{path}": {e}') from e
            documents.append(parse(text))
            logger.debug(f"[schema] Parsed {path}")

        merged = merge_documents(documents)
        logger.info(
            f"[schema] Merged {len(documents)} file(s) into "
            f"{len(merged.definitions)} definition(s)"
        )
        return print_ast(merged)
