"""
Tests for declaration classification.

Tests for:
- classify_data_source rule order and type discriminant
- classify_resolver string handling (registered key vs handler path)
- classify_function_definition
"""

import pytest

from graphwire.discriminator import (
    DefinitionKind,
    classify_data_source,
    classify_function_definition,
    classify_resolver,
)
from graphwire.errors import AmbiguousDefinition, UnknownDataSource
from graphwire.providers import FunctionResource, RdsClusterResource, TableResource
from graphwire.schemas import (
    DynamoDbDataSourceProps,
    FunctionProps,
    HttpDataSourceProps,
    LambdaDataSourceProps,
    RdsDataSourceProps,
    ResolverProps,
)

# =============================================================================
# Data sources
# =============================================================================


class TestClassifyDataSource:
    """Tests for classify_data_source."""

    def test_handler_string_is_inline_function(self):
        """A handler string is the bare function shorthand."""
        result = classify_data_source("notesDS", "src/notes.main")

        assert result.kind is DefinitionKind.FUNCTION
        assert isinstance(result.props, FunctionProps)
        assert result.props.handler == "src/notes.main"

    def test_function_props_mapping_is_inline_function(self):
        """A mapping with a handler is a function definition."""
        result = classify_data_source("notesDS", {"handler": "src/notes.main", "timeout": 10})

        assert result.kind is DefinitionKind.FUNCTION
        assert result.props.timeout == 10

    def test_built_function_is_existing_function(self):
        """A built function handle is used as-is."""
        fn = FunctionResource(function_name="existing")
        result = classify_data_source("notesDS", fn)

        assert result.kind is DefinitionKind.EXISTING_FUNCTION
        assert result.props is fn

    def test_function_field_is_lambda_data_source(self):
        """Rule 1: a `function` field makes a Lambda data source."""
        result = classify_data_source(
            "notesDS",
            {"function": "src/notes.main", "name": "Notes", "description": "notes"},
        )

        assert result.kind is DefinitionKind.LAMBDA_DATA_SOURCE
        assert isinstance(result.props, LambdaDataSourceProps)
        assert result.props.name == "Notes"

    def test_table_field_is_dynamodb(self):
        """Rule 2: a `table` field makes a DynamoDB data source."""
        table = TableResource(name="notes")
        result = classify_data_source("table", {"type": "dynamodb", "table": table})

        assert result.kind is DefinitionKind.DYNAMODB_DATA_SOURCE
        assert isinstance(result.props, DynamoDbDataSourceProps)
        assert result.props.get_table() is table

    def test_nested_table_override_is_dynamodb(self):
        """Rule 2: cdk.dataSource.table also makes a DynamoDB data source."""
        table = TableResource(name="notes")
        result = classify_data_source(
            "table", {"type": "dynamodb", "cdk": {"dataSource": {"table": table}}}
        )

        assert result.kind is DefinitionKind.DYNAMODB_DATA_SOURCE
        assert result.props.get_table() is table

    def test_rds_field_is_rds(self):
        """Rule 3: an `rds` field makes an RDS data source."""
        cluster = RdsClusterResource(name="db", secret="secret", default_database_name="main")
        result = classify_data_source("rds", {"type": "rds", "rds": cluster})

        assert result.kind is DefinitionKind.RDS_DATA_SOURCE
        assert isinstance(result.props, RdsDataSourceProps)
        assert result.props.get_connection() == (cluster, "secret", "main")

    def test_nested_cluster_override_is_rds(self):
        """Rule 3: cdk.dataSource.serverlessCluster makes an RDS data source."""
        result = classify_data_source(
            "rds",
            {
                "type": "rds",
                "cdk": {
                    "dataSource": {
                        "serverlessCluster": "cluster",
                        "secretStore": "secret",
                        "databaseName": "orders",
                    }
                },
            },
        )

        assert result.kind is DefinitionKind.RDS_DATA_SOURCE
        assert result.props.get_connection() == ("cluster", "secret", "orders")

    def test_endpoint_field_is_http(self):
        """Rule 4: an `endpoint` field makes an HTTP data source."""
        result = classify_data_source("http", {"type": "http", "endpoint": "https://example.com"})

        assert result.kind is DefinitionKind.HTTP_DATA_SOURCE
        assert isinstance(result.props, HttpDataSourceProps)

    def test_structural_match_without_type(self):
        """Without `type`, the first structural match wins."""
        result = classify_data_source("http", {"endpoint": "https://example.com"})
        assert result.kind is DefinitionKind.HTTP_DATA_SOURCE

    def test_model_instances_are_accepted(self):
        """Pydantic models classify the same way as mappings."""
        props = HttpDataSourceProps(type="http", endpoint="https://example.com")
        result = classify_data_source("http", props)

        assert result.kind is DefinitionKind.HTTP_DATA_SOURCE
        assert result.props is props

    def test_type_contradicting_fields_is_ambiguous(self):
        """A `type` whose marker field is missing is rejected."""
        with pytest.raises(AmbiguousDefinition):
            classify_data_source("bad", {"type": "dynamodb", "endpoint": "https://example.com"})

    def test_type_without_fields_is_ambiguous(self):
        """`type: http` without an endpoint is rejected."""
        with pytest.raises(AmbiguousDefinition):
            classify_data_source("bad", {"type": "http"})

    def test_unknown_type_is_ambiguous(self):
        """An unknown `type` is rejected."""
        with pytest.raises(AmbiguousDefinition):
            classify_data_source("bad", {"type": "queue", "endpoint": "x"})

    def test_mapping_without_handler_is_ambiguous(self):
        """A mapping matching nothing and lacking a handler is rejected."""
        with pytest.raises(AmbiguousDefinition):
            classify_data_source("bad", {"timeout": 10})

    @pytest.mark.parametrize("value", [42, None, ["src/a.main"], ""])
    def test_unsupported_values_are_ambiguous(self, value):
        """Values of unsupported types are rejected."""
        with pytest.raises(AmbiguousDefinition):
            classify_data_source("bad", value)

    def test_unknown_fields_are_ambiguous(self):
        """Explicit data source props do not accept unknown fields."""
        with pytest.raises(AmbiguousDefinition):
            classify_data_source("bad", {"endpoint": "https://example.com", "retries": 3})

    def test_function_wins_over_table(self):
        """With several markers, the Lambda rule is checked first."""
        table = TableResource(name="notes")
        result = classify_data_source("ds", {"function": "src/a.main", "table": table})

        assert result.kind is DefinitionKind.LAMBDA_DATA_SOURCE
        assert result.props.function == "src/a.main"

    def test_table_wins_over_endpoint(self):
        """Lower-priority marker fields are ignored."""
        table = TableResource(name="notes")
        result = classify_data_source("ds", {"table": table, "endpoint": "https://example.com"})

        assert result.kind is DefinitionKind.DYNAMODB_DATA_SOURCE
        assert result.props.get_table() is table

    def test_function_wins_over_nested_cluster(self):
        """Overrides of a lower-priority variant are ignored too."""
        cluster = RdsClusterResource(name="db")
        result = classify_data_source(
            "ds",
            {
                "function": "src/a.main",
                "cdk": {"dataSource": {"serverlessCluster": cluster, "secretStore": "s"}},
            },
        )

        assert result.kind is DefinitionKind.LAMBDA_DATA_SOURCE
        assert isinstance(result.props, LambdaDataSourceProps)

    def test_explicit_type_keeps_other_markers(self):
        """With an explicit `type`, extra marker fields are still rejected."""
        with pytest.raises(AmbiguousDefinition):
            classify_data_source(
                "ds",
                {"type": "dynamodb", "table": TableResource("notes"), "endpoint": "https://x.io"},
            )

    def test_empty_marker_is_not_a_match(self):
        """Markers must be truthy; an empty endpoint does not make HTTP."""
        result = classify_data_source("ds", {"function": "src/a.main", "endpoint": ""})
        assert result.kind is DefinitionKind.LAMBDA_DATA_SOURCE

        with pytest.raises(AmbiguousDefinition):
            classify_data_source("bad", {"endpoint": ""})


# =============================================================================
# Resolvers
# =============================================================================


class TestClassifyResolver:
    """Tests for classify_resolver."""

    def test_registered_key_is_reference(self):
        """Rule 5: a string naming a registered data source binds to it."""
        result = classify_resolver("Query listNotes", "notesDS", {"notesDS"})

        assert result.kind is DefinitionKind.DATA_SOURCE_REFERENCE
        assert result.props.data_source == "notesDS"

    def test_unregistered_key_fails(self):
        """Rule 6: a string with no "." that is not registered fails fast."""
        with pytest.raises(UnknownDataSource):
            classify_resolver("Query listNotes", "notesDS", set())

    def test_registered_key_wins_over_handler_path(self):
        """A registered key is checked before the handler interpretation."""
        result = classify_resolver("Query listNotes", "src/notes.main", {"src/notes.main"})
        assert result.kind is DefinitionKind.DATA_SOURCE_REFERENCE

    def test_handler_path_is_inline_function(self):
        """Rule 8: an unregistered string with "." is a handler."""
        result = classify_resolver("Query listNotes", "src/notes.main", {"notesDS"})

        assert result.kind is DefinitionKind.FUNCTION
        assert result.props.handler == "src/notes.main"

    def test_function_field_is_lambda_resolver(self):
        """Rule 1: a `function` field makes a Lambda resolver."""
        result = classify_resolver(
            "Query listNotes",
            {
                "function": "src/notes.main",
                "requestMapping": {"inline": "{}"},
            },
            set(),
        )

        assert result.kind is DefinitionKind.LAMBDA_RESOLVER
        assert isinstance(result.props, ResolverProps)
        assert result.props.request_mapping == {"inline": "{}"}

    def test_function_field_wins_over_data_source(self):
        """Rule 1 is checked before rule 7."""
        result = classify_resolver(
            "Query listNotes",
            {"function": "src/notes.main", "dataSource": "notesDS"},
            {"notesDS"},
        )
        assert result.kind is DefinitionKind.LAMBDA_RESOLVER

    def test_data_source_descriptor_is_reference(self):
        """Rule 7: a `dataSource` field naming a registered key binds to it."""
        result = classify_resolver(
            "Query listNotes",
            {"dataSource": "notesDS", "responseMapping": {"inline": "$ctx.result"}},
            {"notesDS"},
        )

        assert result.kind is DefinitionKind.DATA_SOURCE_REFERENCE
        assert result.props.data_source == "notesDS"

    def test_data_source_descriptor_unknown_fails(self):
        """Rule 7 with an unregistered key fails."""
        with pytest.raises(UnknownDataSource):
            classify_resolver("Query listNotes", {"dataSource": "missing"}, {"notesDS"})

    def test_inline_table_is_ambiguous(self):
        """Resolvers cannot declare a table data source inline."""
        with pytest.raises(AmbiguousDefinition):
            classify_resolver("Query listNotes", {"table": "notes"}, set())

    def test_function_props_mapping_is_inline_function(self):
        """Rule 8: a function props mapping is an inline function."""
        result = classify_resolver(
            "Query listNotes", {"handler": "src/notes.main", "memorySize": 512}, set()
        )

        assert result.kind is DefinitionKind.FUNCTION
        assert result.props.memory_size == 512


# =============================================================================
# Function definitions
# =============================================================================


class TestClassifyFunctionDefinition:
    """Tests for classify_function_definition."""

    def test_handler_string(self):
        """A handler string becomes FunctionProps."""
        props = classify_function_definition("src/a.main")
        assert props == FunctionProps(handler="src/a.main")

    def test_built_function_passes_through(self):
        """A built function is returned unchanged."""
        fn = FunctionResource(function_name="fn")
        assert classify_function_definition(fn) is fn

    def test_extra_fields_are_kept(self):
        """Unknown function fields are passed through."""
        props = classify_function_definition({"handler": "src/a.main", "bundle": False})
        assert props.bundle is False
