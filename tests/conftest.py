"""
Pytest configuration and fixtures for graphwire tests.
"""

import sys
from pathlib import Path

import pytest

# Add the repository root to path for imports
# This allows `from graphwire import ...` to work without installing
repo_root = Path(__file__).parent.parent
if str(repo_root) not in sys.path:
    sys.path.insert(0, str(repo_root))

from graphwire import AppSyncApi, GraphwireSettings, InMemoryResourceProvider  # noqa: E402


@pytest.fixture
def provider():
    """Fresh in-memory resource provider."""
    return InMemoryResourceProvider()


@pytest.fixture
def settings(tmp_path):
    """Settings writing build artifacts under a temporary directory."""
    return GraphwireSettings(app_name="notes", stage="test", build_dir=tmp_path / "build")


@pytest.fixture
def make_api(provider, settings):
    """Factory building an AppSyncApi against the in-memory provider."""

    def _make(props=None, construct_id="GraphqlApi", scope="stack"):
        return AppSyncApi(scope, construct_id, props, provider=provider, settings=settings)

    return _make


@pytest.fixture
def sample_schema_files(tmp_path):
    """Two schema files that extend each other."""
    base = tmp_path / "base.graphql"
    base.write_text(
        "type Note {\n  id: ID!\n  content: String\n}\n\n"
        "type Query {\n  listNotes: [Note]\n}\n"
    )
    notes = tmp_path / "notes.graphql"
    notes.write_text(
        "extend type Query {\n  getNote(id: ID!): Note\n}\n\n"
        "type Mutation {\n  createNote(content: String!): Note\n}\n"
    )
    return [str(base), str(notes)]
