import re

import pytest

from graph_fakes import FakeNode, fake_client

from graph_ogm.neo4j.index import IndexDB
from graph_ogm.neo4j.node import NodeDB


@pytest.mark.asyncio
async def test_create_node():
    client = fake_client([{"n": FakeNode(1, name="Test1", value=2)}])
    record = await NodeDB(client).create({"name": "Test1", "value": 2}, "object")

    assert record == {"id": 1, "name": "Test1", "value": 2}
    cypher, params = client.run.await_args.args
    assert cypher == "CREATE (n:object $properties) RETURN n"
    assert params == {"properties": {"name": "Test1", "value": 2}}


@pytest.mark.asyncio
async def test_create_node_without_label():
    client = fake_client([{"n": FakeNode(3)}])
    await NodeDB(client).create({})
    assert client.run.await_args.args[0] == "CREATE (n $properties) RETURN n"


@pytest.mark.asyncio
async def test_find_and_delete_node():
    client = fake_client([{"n": FakeNode(1, name="Test1")}])
    db = NodeDB(client)
    assert await db.find_by_id(1) == {"id": 1, "name": "Test1"}

    client.run.return_value = [{"id": 1, "properties": {"name": "Test1"}}]
    assert await db.delete(1) == {"id": 1, "name": "Test1"}
    assert "DETACH DELETE n" in client.run.await_args.args[0]

    client.run.return_value = []
    assert await db.find_by_id(99) is None
    assert await db.delete(99) is None


@pytest.mark.asyncio
async def test_node_validation():
    client = fake_client()
    db = NodeDB(client)
    with pytest.raises(ValueError, match="node id must be an integer"):
        await db.find_by_id("1")
    with pytest.raises(ValueError, match="node id must be an integer"):
        await db.delete(None)
    with pytest.raises(ValueError, match="properties must be a mapping"):
        await db.create(["name"])
    client.run.assert_not_awaited()


@pytest.mark.asyncio
async def test_create_and_drop_index():
    client = fake_client()
    db = IndexDB(client)

    name = IndexDB.index_name("object", ["name"])
    await db.create("object", ["name"])
    assert client.run.await_args.args[0] == (
        f"CREATE INDEX {name} IF NOT EXISTS FOR (n:object) ON (n.name)"
    )

    await db.drop("object", ["name"])
    assert client.run.await_args.args[0] == f"DROP INDEX {name} IF EXISTS"


def test_index_name_is_sanitised_and_stable():
    name = IndexDB.index_name("My Label", ["first name", "age"])
    assert re.fullmatch(r"index_My_Label_first_name_age_[0-9a-f]{10}", name)
    assert IndexDB.index_name("My Label", ["first name", "age"]) == name


def test_index_names_differ_for_different_field_lists():
    names = {
        IndexDB.index_name("object", ["a", "b"]),
        IndexDB.index_name("object", ["a_b"]),
        IndexDB.index_name("object", ["a b"]),
        IndexDB.index_name("object_a", ["b"]),
    }
    assert len(names) == 4


@pytest.mark.asyncio
@pytest.mark.parametrize("label, fields", [(None, ["name"]), ("object", []), ("object", "name")])
async def test_index_validation(label, fields):
    client = fake_client()
    with pytest.raises(ValueError, match="a label and at least one field name must be provided"):
        await IndexDB(client).create(label, fields)
    client.run.assert_not_awaited()
