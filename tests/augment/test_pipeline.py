"""Tests for the augmentation pipeline."""

import pytest
from graphql import build_ast_schema, parse, print_ast

from trellis.augment.builders import directive, get_field
from trellis.augment.pipeline import (
    STAGES,
    augment_schema,
    augment_schema_file,
    augment_sdl,
    augment_type_map,
)
from trellis.schema.config import AugmentationConfig
from trellis.schema.loader import load_config, load_type_map, parse_type_map, print_type_map


def _root_fields(type_map, root):
    node = type_map.get(root)
    return [f.name.value for f in node.fields] if node is not None else []


class TestIdempotence:
    @pytest.mark.parametrize(
        "fixture_name",
        ["person_sdl", "acted_in_sdl", "directive_sdl", "reflexive_sdl"],
    )
    def test_second_pass_changes_nothing(self, request, fixture_name):
        sdl = request.getfixturevalue(fixture_name)

        once = augment_type_map(parse_type_map(sdl))
        twice = augment_type_map(once)

        assert print_type_map(twice) == print_type_map(once)

    def test_example_schema(self, examples_dir):
        config = AugmentationConfig.model_validate({"auth": True})
        once = augment_type_map(load_type_map(examples_dir / "movies.graphql"), config)
        twice = augment_type_map(once, config)

        assert print_type_map(twice) == print_type_map(once)

    def test_no_duplicate_fields(self, augmented_acted_in):
        twice = augment_type_map(augmented_acted_in)

        for root in ("Query", "Mutation"):
            names = _root_fields(twice, root)
            assert len(names) == len(set(names))


class TestInputUntouched:
    def test_input_map_not_modified(self, person_map):
        before = print_type_map(person_map)
        augment_type_map(person_map)

        assert print_type_map(person_map) == before
        assert "Query" not in person_map


class TestPolicyRespect:
    def test_query_exclusion(self, acted_in_map):
        config = AugmentationConfig.model_validate({"query": {"exclude": ["Movie"]}})
        type_map = augment_type_map(acted_in_map, config)

        assert "Movie" not in _root_fields(type_map, "Query")
        assert "_MovieFilter" not in type_map
        assert "_MovieOrdering" not in type_map
        assert "Person" in _root_fields(type_map, "Query")
        assert get_field(type_map["Movie"], "_id") is None

    def test_mutation_exclusion(self, acted_in_map):
        config = AugmentationConfig.model_validate({"mutation": {"exclude": ["Person"]}})
        type_map = augment_type_map(acted_in_map, config)
        mutations = _root_fields(type_map, "Mutation")

        for action in ("Create", "Update", "Delete"):
            assert f"{action}Person" not in mutations
            assert f"{action}Movie" in mutations
        assert "_PersonInput" not in type_map

    def test_query_disabled(self, person_map):
        type_map = augment_type_map(person_map, AugmentationConfig(query=False))

        assert "Query" not in type_map
        assert "_PersonFilter" not in type_map
        assert "CreatePerson" in _root_fields(type_map, "Mutation")

    def test_mutation_disabled(self, person_map):
        type_map = augment_type_map(person_map, AugmentationConfig(mutation=False))

        assert "Mutation" not in type_map
        assert "_PersonInput" not in type_map

    def test_ignored_type(self):
        type_map = augment_type_map(
            parse_type_map(
                "type Person { id: ID! }\ntype Secret @neo4j_ignore { id: ID! }"
            )
        )

        assert "Secret" not in _root_fields(type_map, "Query")
        assert "CreateSecret" not in _root_fields(type_map, "Mutation")
        assert "_SecretFilter" not in type_map
        assert "Secret" in type_map


class TestDeclarations:
    def test_core_directives_declared(self, augmented_person):
        for name in ("relation", "MutationMeta", "cypher", "neo4j_ignore"):
            assert name in augmented_person
        assert "_RelationDirections" in augmented_person

    def test_auth_directives_only_when_enabled(self, person_map):
        plain = augment_type_map(person_map)
        secured = augment_type_map(
            person_map, AugmentationConfig.model_validate({"auth": True})
        )

        assert "hasScope" not in plain
        assert {"isAuthenticated", "hasRole", "hasScope", "Role"} <= set(secured)

    def test_user_declaration_kept(self):
        type_map = augment_type_map(
            parse_type_map(
                "directive @cypher(statement: String, params: String) on FIELD_DEFINITION\n"
                "type Person { id: ID! }"
            )
        )

        arg_names = [a.name.value for a in type_map["cypher"].arguments]
        assert arg_names == ["statement", "params"]

    def test_printed_schema_parses(self, augmented_acted_in):
        printed = print_type_map(augmented_acted_in)

        assert set(parse_type_map(printed)) == set(augmented_acted_in)


class TestPrintedSchema:
    @pytest.mark.parametrize(
        "fixture_name",
        ["person_sdl", "acted_in_sdl", "directive_sdl", "reflexive_sdl"],
    )
    def test_augmented_schema_builds(self, request, fixture_name):
        sdl = request.getfixturevalue(fixture_name)

        printed = print_type_map(augment_type_map(parse_type_map(sdl)))
        schema = build_ast_schema(parse(printed))

        assert schema.query_type.name == "Query"
        assert schema.mutation_type.name == "Mutation"

    def test_movies_example_builds(self, examples_dir):
        type_map = augment_type_map(
            load_type_map(examples_dir / "movies.graphql"),
            load_config(examples_dir / "movies.yaml"),
        )

        schema = build_ast_schema(parse(print_type_map(type_map)))

        assert "Movie" in schema.query_type.fields
        assert "AddMovieActors" in schema.mutation_type.fields
        assert "hasScope" in {d.name for d in schema.directives}

    def test_normalized_relation_type_prints(self, reflexive_sdl):
        type_map = augment_type_map(parse_type_map(reflexive_sdl))

        printed = print_type_map(type_map)

        assert (
            'type FRIEND_OF @relation(name: "FRIEND_OF", from: "User", to: "User")'
        ) in printed
        assert "type _UserFriendsDirections" in printed


class TestPolicyHook:
    def test_custom_hook_called_for_every_operation(self, acted_in_map):
        calls = []

        def hook(entity_kind, operation, type_name, related_type_name=None):
            calls.append((entity_kind, operation, type_name, related_type_name))
            return [directive("isAuthenticated")]

        type_map = augment_type_map(acted_in_map, policy_hook=hook)

        assert ("node", "Read", "Person", None) in calls
        assert ("node", "Create", "Movie", None) in calls
        assert ("relation", "Add", "Person", "Movie") in calls
        assert ("relation", "Remove", "Person", "Movie") in calls

        create = get_field(type_map["Mutation"], "CreatePerson")
        assert [print_ast(d) for d in create.directives] == ["@isAuthenticated"]

    def test_relation_hook_receives_field_owner(self, directive_sdl):
        calls = []

        def hook(entity_kind, operation, type_name, related_type_name=None):
            if entity_kind == "relation":
                calls.append((operation, type_name, related_type_name))
            return []

        augment_type_map(parse_type_map(directive_sdl), policy_hook=hook)

        assert sorted(calls) == [
            ("Add", "Movie", "Person"),
            ("Add", "Person", "Movie"),
            ("Remove", "Movie", "Person"),
            ("Remove", "Person", "Movie"),
        ]

    def test_stage_order(self):
        assert [stage.__name__ for stage in STAGES] == [
            "normalize_relationships",
            "initialize_operation_types",
            "substitute_temporal_types",
            "augment_types",
            "augment_query_field_arguments",
            "declare_directives",
        ]


class TestAugmentSchema:
    def test_result_summary(self, person_map):
        result = augment_schema(person_map)

        assert result.queries == ["Person"]
        assert result.mutations == ["CreatePerson", "UpdatePerson", "DeletePerson"]
        assert result.total_operations == 4
        assert "_PersonFilter" in result.added_types
        assert "Person" not in result.added_types
        assert "type Query {" in result.sdl

    def test_resolvers_bound(self, person_map):
        result = augment_schema(person_map)

        assert set(result.resolvers["Query"]) == {"Person"}
        assert set(result.resolvers["Mutation"]) == {
            "CreatePerson",
            "UpdatePerson",
            "DeletePerson",
        }

    def test_augment_sdl(self, person_sdl):
        result = augment_sdl(person_sdl, config=AugmentationConfig(mutation=False))

        assert result.mutations == []
        assert result.queries == ["Person"]

    def test_augment_schema_file(self, examples_dir):
        result = augment_schema_file(examples_dir / "movies.graphql")

        assert "Movie" in result.queries
        assert "AddActorMovies" in result.mutations
        assert "AddMovieActors" in result.mutations
        assert "AddDirectorDirected" in result.mutations
        assert "Studio" not in result.queries
