"""Stand-ins for driver graph values and the Neo4j client used across tests."""

from unittest.mock import AsyncMock, MagicMock


class FakeNode(dict):
    def __init__(self, node_id, **properties):
        super().__init__(properties)
        self.element_id = f"4:testdb:{node_id}"
        self.labels = frozenset()


class FakeRelationship(dict):
    def __init__(self, relation_id, type, start_node=None, end_node=None, **properties):
        super().__init__(properties)
        self.element_id = f"5:testdb:{relation_id}"
        self.type = type
        self.start_node = start_node
        self.end_node = end_node


def fake_client(rows=None):
    client = MagicMock()
    client.run = AsyncMock(return_value=rows if rows is not None else [])
    return client
