"""Tests for temporal type substitution."""

from graphql import print_ast

from trellis.augment.builders import get_field
from trellis.augment.temporal import (
    add_temporal_types,
    temporal_input_name,
    to_input_type,
)
from trellis.schema.config import TemporalConfig
from trellis.schema.loader import parse_type_map


class TestTemporalTypes:
    def test_all_kinds_added(self):
        type_map = add_temporal_types({}, TemporalConfig())

        for name in (
            "_Neo4jTime",
            "_Neo4jDate",
            "_Neo4jDateTime",
            "_Neo4jLocalTime",
            "_Neo4jLocalDateTime",
        ):
            assert name in type_map
            assert f"{name}Input" in type_map

    def test_sub_fields(self):
        type_map = add_temporal_types({}, TemporalConfig())

        date_fields = [f.name.value for f in type_map["_Neo4jDate"].fields]
        assert date_fields == ["year", "month", "day", "formatted"]

        datetime_fields = [f.name.value for f in type_map["_Neo4jDateTime"].fields]
        assert datetime_fields[:3] == ["year", "month", "day"]
        assert "timezone" in datetime_fields
        assert datetime_fields[-1] == "formatted"

        local_fields = [f.name.value for f in type_map["_Neo4jLocalTime"].fields]
        assert "timezone" not in local_fields

    def test_input_twin_matches_output(self):
        type_map = add_temporal_types({}, TemporalConfig())

        output_fields = [f.name.value for f in type_map["_Neo4jTime"].fields]
        input_fields = [f.name.value for f in type_map["_Neo4jTimeInput"].fields]
        assert output_fields == input_fields

    def test_disabled_kind_skipped(self):
        type_map = add_temporal_types({}, TemporalConfig(date=False))

        assert "_Neo4jDate" not in type_map
        assert "_Neo4jDateInput" not in type_map
        assert "_Neo4jDateTime" in type_map

    def test_existing_type_kept(self):
        type_map = parse_type_map("type _Neo4jDate { custom: String }")
        add_temporal_types(type_map, TemporalConfig())

        fields = [f.name.value for f in type_map["_Neo4jDate"].fields]
        assert fields == ["custom"]


class TestTemporalFieldRewrite:
    def test_nested_wrappers_preserved(self):
        type_map = parse_type_map("type Event { id: ID! times: [DateTime!]! }")
        add_temporal_types(type_map, TemporalConfig())

        times = get_field(type_map["Event"], "times")
        assert print_ast(times.type) == "[_Neo4jDateTime!]!"

    def test_arguments_use_input_twin(self):
        type_map = parse_type_map(
            "type Query { events(after: DateTime!): [Event] }\ntype Event { at: Date }"
        )
        add_temporal_types(type_map, TemporalConfig())

        events = get_field(type_map["Query"], "events")
        assert print_ast(events.arguments[0].type) == "_Neo4jDateTimeInput!"
        assert print_ast(get_field(type_map["Event"], "at").type) == "_Neo4jDate"

    def test_interface_and_input_fields(self):
        type_map = parse_type_map(
            """
interface Dated { at: LocalDateTime }
input EventInput { at: LocalDateTime }
"""
        )
        add_temporal_types(type_map, TemporalConfig())

        interface_at = type_map["Dated"].fields[0]
        input_at = type_map["EventInput"].fields[0]
        assert print_ast(interface_at.type) == "_Neo4jLocalDateTime"
        assert print_ast(input_at.type) == "_Neo4jLocalDateTimeInput"

    def test_disabled_kind_left_alone(self):
        type_map = parse_type_map("type Event { at: Time }")
        add_temporal_types(type_map, TemporalConfig(time=False))

        assert print_ast(type_map["Event"].fields[0].type) == "Time"


class TestInputTypeMapping:
    def test_temporal_input_name(self):
        assert temporal_input_name("_Neo4jDate") == "_Neo4jDateInput"
        assert temporal_input_name("String") == "String"

    def test_to_input_type(self):
        type_map = parse_type_map("type E { at: [_Neo4jTime!] }")

        converted = to_input_type(type_map["E"].fields[0].type)
        assert print_ast(converted) == "[_Neo4jTimeInput!]"
