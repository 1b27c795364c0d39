"""
Declaration loaders.

Reads an ApiProps declaration from a YAML or JSON file:

    # api.yaml
    schema: graphql/schema.graphql
    defaults:
      function:
        timeout: 20
    dataSources:
      notesDS: src/notes.main
    resolvers:
      "Query    listNotes": notesDS
      "Mutation createNote": notesDS

Usage:
    props = load_api_props("api.yaml")
    api = AppSyncApi(stack, "GraphqlApi", props, provider=provider)
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import yaml

from .errors import UnsupportedDefinitionFormat
from .schemas import ApiProps

logger = logging.getLogger(__name__)

YAML_SUFFIXES = (".yaml", ".yml")
JSON_SUFFIXES = (".json",)


def read_definition_file(path: str | Path) -> dict[str, Any]:
    """
    Read a declaration file into a mapping.

    Raises:
        UnsupportedDefinitionFormat: If the extension is not YAML/JSON,
            or the file does not hold a mapping at its root
        OSError: If the file cannot be read
    """
    path = Path(path)
    suffix = path.suffix.lower()

    if suffix not in YAML_SUFFIXES + JSON_SUFFIXES:
        raise UnsupportedDefinitionFormat(
            f'Unsupported declaration format "{suffix}" for {path}; '
            f"expected one of {YAML_SUFFIXES + JSON_SUFFIXES}"
        )

    with open(path, encoding="utf-8") as f:
        if suffix in YAML_SUFFIXES:
            data = yaml.safe_load(f)
        else:
            data = json.load(f)

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise UnsupportedDefinitionFormat(
            f"Declaration root must be a mapping, got {type(data).__name__} in {path}"
        )

    logger.debug(f"[loader] Read declaration from {path}")
    return data


def load_api_props(path: str | Path) -> ApiProps:
    """Load and validate an ApiProps declaration from a file."""
    return ApiProps.model_validate(read_definition_file(path))
