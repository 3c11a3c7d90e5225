"""Node-level Neo4j helpers.

Just enough node CRUD to set up and tear down relation endpoints.
"""

from typing import Any, Dict, Mapping, Optional

from .client import Neo4jClient
from .parse import collect_variable
from .properties import escape_name

NODE_ID_ERROR = "node id must be an integer"
PROPERTIES_ERROR = "properties must be a mapping"


class NodeDB:
    """Node create / lookup / delete helpers backed by a Neo4jClient."""

    def __init__(self, client: Neo4jClient) -> None:
        self.client = client

    @staticmethod
    def _check_node_id(node_id: Any) -> None:
        if not isinstance(node_id, int) or isinstance(node_id, bool):
            raise ValueError(NODE_ID_ERROR)

    async def create(
        self, properties: Mapping[str, Any], label: Optional[str] = None
    ) -> Optional[Dict[str, Any]]:
        """Create a node with ``properties`` and an optional label."""
        if not isinstance(properties, Mapping):
            raise ValueError(PROPERTIES_ERROR)

        pattern = f"n:{escape_name(label)}" if label else "n"
        cypher = f"CREATE ({pattern} $properties) RETURN n"
        rows = await self.client.run(cypher, {"properties": dict(properties)})
        return collect_variable(rows[0], "n") if rows else None

    async def find_by_id(self, node_id: int) -> Optional[Dict[str, Any]]:
        self._check_node_id(node_id)

        cypher = "MATCH (n) WHERE ID(n) = $node_id RETURN n"
        rows = await self.client.run(cypher, {"node_id": node_id})
        return collect_variable(rows[0], "n") if rows else None

    async def delete(self, node_id: int) -> Optional[Dict[str, Any]]:
        """Detach-delete a node, returning it as it was before deletion."""
        self._check_node_id(node_id)

        cypher = (
            "MATCH (n) WHERE ID(n) = $node_id "
            "WITH n, ID(n) AS id, properties(n) AS properties "
            "DETACH DELETE n RETURN id, properties"
        )
        rows = await self.client.run(cypher, {"node_id": node_id})
        if not rows:
            return None
        record = dict(rows[0]["properties"] or {})
        record["id"] = rows[0]["id"]
        return record
