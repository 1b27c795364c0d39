"""
Graphwire settings.

Settings are read from GRAPHWIRE_* environment variables once and
cached. Pass an explicit GraphwireSettings to AppSyncApi to override.
"""

from __future__ import annotations

import logging
import os
from functools import lru_cache
from pathlib import Path

from pydantic import BaseModel, Field

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class GraphwireSettings(BaseModel):
    """
    Application settings.

    Attributes:
        app_name: Prefix for logical resource names
        stage: Deployment stage, also part of logical names
        build_dir: Where generated artifacts (merged schemas) are written
        log_level: Root log level used by configure_logging
    """

    app_name: str = Field(default="graphwire", min_length=1)
    stage: str = Field(default="dev", min_length=1)
    build_dir: Path = Field(default=Path(".build"))
    log_level: str = Field(default="INFO")

    def logical_prefixed_name(self, name: str) -> str:
        """Name of a resource within this app and stage."""
        return f"{self.stage}-{self.app_name}-{name}"


@lru_cache()
def get_settings() -> GraphwireSettings:
    """
    Get settings from environment.

    Uses lru_cache for singleton pattern.
    """
    return GraphwireSettings(
        app_name=os.getenv("GRAPHWIRE_APP_NAME", "graphwire"),
        stage=os.getenv("GRAPHWIRE_STAGE", "dev"),
        build_dir=Path(os.getenv("GRAPHWIRE_BUILD_DIR", ".build")),
        log_level=os.getenv("GRAPHWIRE_LOG_LEVEL", "INFO"),
    )


def configure_logging(level: str | int | None = None) -> None:
    """Configure root logging with the graphwire format."""
    if level is None:
        level = get_settings().log_level
    if isinstance(level, str):
        level = level.upper()
    logging.basicConfig(level=level, format=LOG_FORMAT)
