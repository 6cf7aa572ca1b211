"""Tests for SDL type definition helpers."""

import pytest

from schema_factory.core.exceptions import InvalidDefinitionError
from schema_factory.graphql.executable import parse_type_defs
from schema_factory.graphql.type_defs import (
    concat_type_defs,
    merge_type_defs,
    remove_placeholder_fields,
)


@pytest.mark.unit
class TestMergeTypeDefs:
    def test_concat_skips_blank_sources(self):
        assert concat_type_defs(["type A { a: Int }", "  ", "type B { b: Int }"]) == (
            "type A { a: Int }\ntype B { b: Int }"
        )
        assert concat_type_defs("type A { a: Int }") == "type A { a: Int }"

    def test_extension_only_root_gets_placeholder(self):
        merged = merge_type_defs(["extend type Query { me: String }"])

        assert merged.startswith("type Query { temp__: Boolean }")
        schema = parse_type_defs(merged)
        assert list(schema.query_type.fields) == ["temp__", "me"]

    def test_defined_root_is_left_alone(self):
        sources = ["type Query { a: Int }", "extend type Query { b: Int }"]
        assert merge_type_defs(sources) == concat_type_defs(sources)

    def test_non_root_extension_is_left_alone(self):
        source = "type Query { a: Int } extend type User { b: Int }"
        assert merge_type_defs(source) == source

    def test_custom_root_names_from_schema_definition(self):
        merged = merge_type_defs(
            "schema { query: RootQuery } extend type RootQuery { a: Int }",
            placeholder_field="_empty",
        )
        assert merged.startswith("type RootQuery { _empty: Boolean }")

    def test_blank_input(self):
        assert merge_type_defs([]) == ""

    def test_syntax_error(self):
        with pytest.raises(InvalidDefinitionError):
            merge_type_defs("extend type Query {")


@pytest.mark.unit
class TestRemovePlaceholderFields:
    def test_placeholder_removed_from_roots(self):
        schema = parse_type_defs(
            merge_type_defs(
                [
                    "extend type Query { me: String }",
                    "extend type Mutation { rename(name: String!): String }",
                ],
            ),
        )

        cleaned = remove_placeholder_fields(schema)

        assert list(cleaned.query_type.fields) == ["me"]
        assert list(cleaned.mutation_type.fields) == ["rename"]
        assert "temp__" in schema.query_type.fields

    def test_schema_without_placeholder_is_returned_as_is(self):
        schema = parse_type_defs("type Query { a: Int }")
        assert remove_placeholder_fields(schema) is schema

    def test_non_root_field_with_placeholder_name_is_kept(self):
        schema = parse_type_defs(
            "type Query { temp__: Boolean, item: Item } type Item { temp__: Boolean }",
        )

        cleaned = remove_placeholder_fields(schema)

        assert "temp__" not in cleaned.query_type.fields
        assert "temp__" in cleaned.type_map["Item"].fields
