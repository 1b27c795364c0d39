"""
Mapping template building.

Resolves a request/response mapping template declaration into a
MappingTemplate artifact. File templates are read when the resolver
is built, not when the declaration is validated.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from .errors import InvalidTemplateSpec, TemplateNotFound
from .schemas import MappingTemplateProps

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MappingTemplate:
    """
    A rendered mapping template.

    Attributes:
        content: Template text
        path: Source file, None for inline templates
    """

    content: str
    path: str | None = None

    @classmethod
    def from_string(cls, content: str) -> "MappingTemplate":
        return cls(content=content)

    @classmethod
    def from_file(cls, path: str | Path) -> "MappingTemplate":
        """
        Load a template file.

        Raises:
            TemplateNotFound: If the file cannot be read
        """
        try:
            content = Path(path).read_text(encoding="utf-8")
        except OSError as e:
            raise TemplateNotFound(f'Failed to read mapping template "{path}": {e}') from e
        return cls(content=content, path=str(path))


def build_mapping_template(
    declaration: MappingTemplateProps | Mapping[str, Any] | None,
) -> MappingTemplate | None:
    """
    Build a template artifact from a declaration.

    Returns None when no declaration is given.

    Raises:
        InvalidTemplateSpec: If both or neither of file/inline are set
        TemplateNotFound: If a file template cannot be read
    """
    if declaration is None:
        return None

    if not isinstance(declaration, MappingTemplateProps):
        try:
            declaration = MappingTemplateProps.model_validate(declaration)
        except ValidationError as e:
            raise InvalidTemplateSpec(f"Invalid mapping template: {e}") from e

    if (declaration.file is None) == (declaration.inline is None):
        raise InvalidTemplateSpec("A mapping template must define exactly one of file or inline")

    if declaration.file is not None:
        logger.debug(f"[templates] Loading mapping template: {declaration.file}")
        return MappingTemplate.from_file(declaration.file)

    return MappingTemplate.from_string(declaration.inline)
