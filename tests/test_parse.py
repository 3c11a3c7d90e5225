from types import SimpleNamespace

from graph_fakes import FakeNode, FakeRelationship

from graph_ogm.neo4j.parse import (
    collect_variable,
    entity_id,
    flatten_entity,
    parse_deleted_relation_row,
    parse_relation_row,
)


def test_entity_id_from_element_id():
    assert entity_id(FakeNode(12)) == 12


def test_entity_id_falls_back_to_legacy_id():
    entity = SimpleNamespace(element_id="opaque", id=3)
    assert entity_id(entity) == 3


def test_flatten_node_and_relationship():
    assert flatten_entity(FakeNode(1, name="Test1", value=2)) == {
        "id": 1,
        "name": "Test1",
        "value": 2,
    }
    assert flatten_entity(FakeRelationship(10, "relatedto", property="a")) == {
        "id": 10,
        "type": "relatedto",
        "property": "a",
    }


def test_flatten_passes_scalars_through():
    assert flatten_entity(5) == 5
    assert flatten_entity({"a": 1}) == {"a": 1}


def test_collect_projected_columns():
    row = {"r.property": "a", "r.`odd name`": 1, "n1.name": "Test1"}
    assert collect_variable(row, "r") == {"property": "a", "odd name": 1}
    assert collect_variable(row, "n1") == {"name": "Test1"}
    assert collect_variable(row, "n2") is None


def test_parse_populated_row():
    row = {
        "r": FakeRelationship(10, "relatedto"),
        "n1": FakeNode(1, name="Test1", value=2),
        "n2": FakeNode(2, name="Test2", value=4),
    }
    record = parse_relation_row(row, populated=True)
    assert record["id"] == 10
    assert record["start"] == {"id": 1, "name": "Test1", "value": 2}
    assert record["end"] == {"id": 2, "name": "Test2", "value": 4}


def test_parse_deleted_row():
    row = {"id": 10, "type": "relatedto", "properties": {"property": "a"}}
    assert parse_deleted_relation_row(row) == {"id": 10, "type": "relatedto", "property": "a"}


def test_collect_undoes_doubled_backticks():
    row = {"r.`we``ird`": 1, "r.plain": 2}
    assert collect_variable(row, "r") == {"we`ird": 1, "plain": 2}


def test_endpoint_records_win_over_same_named_relation_properties():
    row = {
        "r": FakeRelationship(10, "relatedto", start="2020-01-01"),
        "n1": FakeNode(1, name="Test1"),
        "n2": FakeNode(2, name="Test2"),
    }
    record = parse_relation_row(row, populated=True)
    assert record["start"] == {"id": 1, "name": "Test1"}
    assert record["end"] == {"id": 2, "name": "Test2"}
