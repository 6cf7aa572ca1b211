"""Tests for code-first graph generation with Strawberry."""

from pathlib import Path

import pytest
import strawberry

from schema_factory.graphql.code_first import CodeFirstTypes, StrawberrySchemaBuilder
from schema_factory.graphql.config import CompositionConfig


@strawberry.type
class Query:
    @strawberry.field
    def version(self) -> str:
        return "1.0"

    @strawberry.field
    def build(self) -> int:
        return 42


@pytest.mark.unit
class TestStrawberrySchemaBuilder:
    @pytest.mark.asyncio
    async def test_build_records_artifact(self):
        builder = StrawberrySchemaBuilder()
        config = CompositionConfig(auto_schema_file=Path("schema.graphql"))

        schema = await builder.build("schema.graphql", config, CodeFirstTypes(query=Query))

        assert list(schema.query_type.fields) == ["version", "build"]
        assert builder.artifact.path == Path("schema.graphql")
        assert "version: String!" in builder.artifact.text

    @pytest.mark.asyncio
    async def test_sort_schema(self):
        builder = StrawberrySchemaBuilder()
        config = CompositionConfig(auto_schema_file=Path("schema.graphql"), sort_schema=True)

        schema = await builder.build("schema.graphql", config, CodeFirstTypes(query=Query))

        assert list(schema.query_type.fields) == ["build", "version"]

    @pytest.mark.asyncio
    async def test_query_type_is_required(self):
        builder = StrawberrySchemaBuilder()

        with pytest.raises(ValueError, match="query type"):
            await builder.build(None, CompositionConfig(), CodeFirstTypes())

        assert builder.artifact is None
