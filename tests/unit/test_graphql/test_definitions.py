"""Tests for Python definitions generation."""

from pathlib import Path
import sys
import types

import pytest

from schema_factory.core.exceptions import InvalidDefinitionError
from schema_factory.graphql.definitions import DefinitionsOptions, generate_definitions

SDL = """
scalar Date

enum Role { ADMIN MEMBER }

interface Node { id: ID! }

type User implements Node {
  id: ID!
  name: String
  role: Role
  joined: Date
}

input UserFilter {
  role: Role
  limit: Int!
}

union SearchResult = User

type Query {
  user(id: ID!, verbose: Boolean): User
  users(filter: UserFilter): [User!]!
}

type Mutation {
  rename(id: ID!, name: String!): User
}
"""


def _render(**options) -> str:
    artifact = generate_definitions(SDL, DefinitionsOptions(path=Path("graphql_types.py"), **options))
    assert artifact is not None
    return artifact.text


@pytest.fixture
def load_module(monkeypatch):
    """Execute rendered definitions as a registered module."""

    def load(text: str) -> dict:
        module = types.ModuleType("generated_definitions")
        monkeypatch.setitem(sys.modules, module.__name__, module)
        exec(compile(text, "graphql_types.py", "exec"), module.__dict__)
        return module.__dict__

    return load


@pytest.mark.unit
class TestGenerateDefinitions:
    def test_nothing_to_generate(self):
        options = DefinitionsOptions(path=Path("out.py"))
        assert generate_definitions(None, options) is None
        assert generate_definitions(SDL, None) is None

    def test_artifact_path(self):
        artifact = generate_definitions(SDL, DefinitionsOptions(path=Path("out.py")))
        assert artifact.path == Path("out.py")
        assert artifact.is_stale(None)
        assert not artifact.is_stale(artifact.text)

    def test_class_output(self):
        text = _render()

        assert "type Date = Any" in text
        assert 'class Role(StrEnum):\n    ADMIN = "ADMIN"\n    MEMBER = "MEMBER"' in text
        assert "@dataclass(kw_only=True)\nclass Node:\n    id: str" in text
        assert (
            "@dataclass(kw_only=True)\nclass User(Node):\n"
            "    name: str | None = None\n"
            "    role: Role | None = None\n"
            "    joined: Date | None = None"
        ) in text
        assert "class UserFilter:\n    role: Role | None = None\n    limit: int" in text
        assert "type SearchResult = User" in text
        assert "def user(self, *, id: str, verbose: bool | None = None) -> User | None: ..." in text
        assert "def users(self, *, filter: UserFilter | None = None) -> list[User]: ..." in text
        assert "class IMutation(ABC):" in text

    def test_class_output_is_valid_python(self, load_module):
        namespace = load_module(_render(emit_typename_field=True))

        user = namespace["User"](id="1", name="Ada")
        assert user.typename == "User"
        assert user.role is None
        assert namespace["Role"].ADMIN == "ADMIN"
        assert namespace["IQuery"].__abstractmethods__ == frozenset({"user", "users"})

    def test_interface_output(self, load_module):
        text = _render(output_as="interface")

        assert "class Node(TypedDict):\n    id: str" in text
        assert "class User(Node):\n    name: NotRequired[str | None]" in text
        assert "@dataclass" not in text
        load_module(text)

    def test_typename_field_in_interface_output(self):
        text = _render(output_as="interface", emit_typename_field=True)
        assert 'typename: NotRequired[Literal["User"]]' in text

    def test_skip_resolver_args(self):
        text = _render(skip_resolver_args=True)
        assert "def user(self) -> User | None: ..." in text

    def test_blocks_are_ordered_and_separated(self):
        text = _render()

        assert text.startswith('"""Generated from GraphQL type definitions. Do not edit."""\n\n\n')
        assert text.index("type Date") < text.index("class Role") < text.index("class Node")
        assert text.index("class User(") < text.index("type SearchResult")
        assert text.endswith("\n")

    def test_placeholder_is_not_rendered(self):
        artifact = generate_definitions(
            ["type User { id: ID! }", "extend type Query { me: User }"],
            DefinitionsOptions(path=Path("out.py")),
        )
        assert "temp__" not in artifact.text
        assert "def me(self) -> User | None: ..." in artifact.text

    def test_keywords_are_escaped(self, load_module):
        artifact = generate_definitions(
            "enum Direction { from to } type Query { d: Direction }",
            DefinitionsOptions(path=Path("out.py")),
        )
        assert 'from_ = "from"' in artifact.text
        load_module(artifact.text)

    def test_invalid_sdl(self):
        with pytest.raises(InvalidDefinitionError):
            generate_definitions("type Query { me: Usr }", DefinitionsOptions(path=Path("out.py")))
