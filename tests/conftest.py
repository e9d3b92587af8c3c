"""Shared fixtures for tests."""

from pathlib import Path

import pytest

from trellis.augment.pipeline import augment_type_map
from trellis.schema.loader import parse_type_map


@pytest.fixture
def examples_dir() -> Path:
    """Return the path to the examples directory."""
    return Path(__file__).parent.parent / "examples"


@pytest.fixture
def person_sdl() -> str:
    """Return a single node type with a primary key."""
    return """
type Person {
  id: ID!
  name: String
}
"""


@pytest.fixture
def acted_in_sdl() -> str:
    """Return a relationship type with a property, used by a node field."""
    return """
type Person {
  id: ID!
  name: String
  movies: [ACTED_IN]
}

type Movie {
  id: ID!
  title: String
}

type ACTED_IN @relation(name: "ACTED_IN", from: "Person", to: "Movie") {
  roles: [String]
}
"""


@pytest.fixture
def directive_sdl() -> str:
    """Return the ACTED_IN relationship declared with field directives."""
    return """
type Person {
  id: ID!
  name: String
  movies: [Movie] @relation(name: "ACTED_IN", direction: OUT)
}

type Movie {
  id: ID!
  title: String
  actors: [Person] @relation(name: "ACTED_IN", direction: IN)
}
"""


@pytest.fixture
def reflexive_sdl() -> str:
    """Return a relationship type whose endpoints are the same type."""
    return """
type User {
  userId: ID!
  name: String
  friends(since: Int): [FRIEND_OF]
}

type FRIEND_OF @relation(name: "FRIEND_OF") {
  from: User
  to: User
  since: Int
}
"""


@pytest.fixture
def person_map(person_sdl):
    """Return the parsed Person type map."""
    return parse_type_map(person_sdl)


@pytest.fixture
def acted_in_map(acted_in_sdl):
    """Return the parsed ACTED_IN type map."""
    return parse_type_map(acted_in_sdl)


@pytest.fixture
def augmented_person(person_map):
    """Return the Person type map augmented with the default config."""
    return augment_type_map(person_map)


@pytest.fixture
def augmented_acted_in(acted_in_map):
    """Return the ACTED_IN type map augmented with the default config."""
    return augment_type_map(acted_in_map)
