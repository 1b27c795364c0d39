"""
Tests for GraphQL schema loading and merging.
"""

import pytest
from graphql import GraphQLError, build_schema

from graphwire.errors import SchemaNotFound
from graphwire.schema_loader import GraphQLSchemaLoader


@pytest.fixture
def loader():
    return GraphQLSchemaLoader()


class TestGraphQLSchemaLoader:
    """Tests for GraphQLSchemaLoader."""

    def test_no_sources(self, loader):
        """Nothing in, nothing out."""
        assert loader.load(None) is None
        assert loader.load([]) is None

    def test_single_file(self, loader, sample_schema_files):
        """A single file is parsed and printed back."""
        schema = build_schema(loader.load(sample_schema_files[0]))
        assert set(schema.query_type.fields) == {"listNotes"}

    def test_extension_folded_into_base(self, loader, sample_schema_files):
        """`extend type` fields join their base type."""
        text = loader.load(sample_schema_files)
        schema = build_schema(text)

        assert "extend type" not in text
        assert list(schema.query_type.fields) == ["listNotes", "getNote"]
        assert list(schema.mutation_type.fields) == ["createNote"]

    def test_extension_before_base(self, loader, sample_schema_files):
        """Order of files does not matter for extensions."""
        schema = build_schema(loader.load(list(reversed(sample_schema_files))))
        assert set(schema.query_type.fields) == {"listNotes", "getNote"}

    def test_same_type_in_two_files(self, loader, tmp_path):
        """Types defined twice are merged field-wise, first field wins."""
        first = tmp_path / "a.graphql"
        first.write_text("type Query { a: String }\nenum Color { RED }\n")
        second = tmp_path / "b.graphql"
        second.write_text("type Query { a: Int\n b: Int }\nenum Color { RED BLUE }\n")

        schema = build_schema(loader.load([str(first), str(second)]))

        assert str(schema.query_type.fields["a"].type) == "String"
        assert "b" in schema.query_type.fields
        assert list(schema.get_type("Color").values) == ["RED", "BLUE"]

    def test_glob_sources(self, loader, tmp_path, sample_schema_files):
        """Glob patterns expand to matching files."""
        schema = build_schema(loader.load(str(tmp_path / "*.graphql")))
        assert set(schema.query_type.fields) == {"listNotes", "getNote"}

    def test_glob_without_matches(self, loader, tmp_path):
        """A glob matching nothing is an error."""
        with pytest.raises(SchemaNotFound):
            loader.load(str(tmp_path / "*.graphql"))

    def test_missing_file(self, loader, tmp_path):
        """An unreadable file raises SchemaNotFound."""
        with pytest.raises(SchemaNotFound):
            loader.load([str(tmp_path / "missing.graphql")])

    def test_invalid_sdl(self, loader, tmp_path):
        """Syntax errors propagate from graphql-core."""
        path = tmp_path / "bad.graphql"
        path.write_text("type Query {")

        with pytest.raises(GraphQLError):
            loader.load([str(path)])
