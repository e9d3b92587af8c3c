"""Tests for generated filter inputs and ordering enums."""

from graphql import print_ast

from trellis.augment.pipeline import augment_type_map
from trellis.schema.config import AugmentationConfig
from trellis.schema.loader import parse_type_map


def _input_fields(type_map, name):
    return {f.name.value: print_ast(f.type) for f in type_map[name].fields}


def _enum_values(type_map, name):
    return [v.name.value for v in type_map[name].values]


MOVIE_SDL = """
enum Genre { ACTION DRAMA }
type Movie {
  id: ID!
  title: String
  year: Int
  rating: Float
  released: Boolean
  genre: Genre
  tags: [String]
  score: Float @cypher(statement: "RETURN 1.0")
  notes: String @neo4j_ignore
  actors: [Person] @relation(name: "ACTED_IN", direction: IN)
  director: Person @relation(name: "DIRECTED", direction: IN)
}
type Person { id: ID! name: String }
"""


class TestFilterInput:
    def test_logical_operators_first(self):
        type_map = augment_type_map(parse_type_map(MOVIE_SDL))

        names = list(_input_fields(type_map, "_MovieFilter"))
        assert names[:2] == ["AND", "OR"]
        fields = _input_fields(type_map, "_MovieFilter")
        assert fields["AND"] == "[_MovieFilter]"
        assert fields["OR"] == "[_MovieFilter]"

    def test_string_operators(self):
        fields = _input_fields(augment_type_map(parse_type_map(MOVIE_SDL)), "_MovieFilter")

        for op in (
            "",
            "_not",
            "_contains",
            "_not_contains",
            "_starts_with",
            "_not_starts_with",
            "_ends_with",
            "_not_ends_with",
        ):
            assert fields[f"title{op}"] == "String"
        assert fields["title_in"] == "[String!]"
        assert fields["id_not_in"] == "[ID!]"

    def test_numeric_operators(self):
        fields = _input_fields(augment_type_map(parse_type_map(MOVIE_SDL)), "_MovieFilter")

        for op in ("", "_not", "_lt", "_lte", "_gt", "_gte"):
            assert fields[f"year{op}"] == "Int"
            assert fields[f"rating{op}"] == "Float"
        assert "year_contains" not in fields

    def test_boolean_and_enum_operators(self):
        fields = _input_fields(augment_type_map(parse_type_map(MOVIE_SDL)), "_MovieFilter")

        assert fields["released"] == "Boolean"
        assert fields["released_not"] == "Boolean"
        assert "released_in" not in fields
        assert fields["genre_in"] == "[Genre!]"
        assert "genre_lt" not in fields

    def test_relation_operators(self):
        fields = _input_fields(augment_type_map(parse_type_map(MOVIE_SDL)), "_MovieFilter")

        assert fields["director"] == "_PersonFilter"
        assert fields["director_in"] == "[_PersonFilter!]"
        assert "director_some" not in fields
        for op in ("_some", "_none", "_single", "_every"):
            assert fields[f"actors{op}"] == "_PersonFilter"

    def test_skipped_fields(self):
        fields = _input_fields(augment_type_map(parse_type_map(MOVIE_SDL)), "_MovieFilter")

        assert not any(name.startswith("score") for name in fields)
        assert not any(name.startswith("notes") for name in fields)
        assert not any(name.startswith("tags") for name in fields)
        assert not any(name.startswith("_id") for name in fields)

    def test_relation_to_excluded_type_skipped(self):
        config = AugmentationConfig.model_validate({"query": {"exclude": ["Person"]}})
        type_map = augment_type_map(parse_type_map(MOVIE_SDL), config)

        fields = _input_fields(type_map, "_MovieFilter")
        assert not any(name.startswith("actors") for name in fields)
        assert "_PersonFilter" not in type_map


class TestOrderingEnum:
    def test_orderable_fields(self):
        values = _enum_values(augment_type_map(parse_type_map(MOVIE_SDL)), "_MovieOrdering")

        for name in ("id", "title", "year", "rating", "released", "genre", "_id"):
            assert f"{name}_asc" in values
            assert f"{name}_desc" in values

    def test_unorderable_fields(self):
        values = _enum_values(augment_type_map(parse_type_map(MOVIE_SDL)), "_MovieOrdering")

        for name in ("tags", "score", "notes", "actors", "director"):
            assert f"{name}_asc" not in values

    def test_temporal_field_orderable(self):
        type_map = augment_type_map(parse_type_map("type Event { id: ID! at: DateTime }"))

        assert "at_asc" in _enum_values(type_map, "_EventOrdering")
