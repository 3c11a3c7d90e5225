"""Relation-level Neo4j operations.

``RelationDB`` exposes the relation verbs (relate, find, count, update,
delete...) on top of ``RelationQuery``. Every verb checks its arguments
first and raises ``ValueError`` before anything is sent to the database;
driver errors propagate unchanged.

Important: this module assumes the Neo4j client/connection is managed by
the caller. It does NOT create or manage connections, only uses the
provided client to run statements.
"""

from typing import Any, Dict, List, Mapping, Optional

from .client import Neo4jClient
from .parse import collect_variable, parse_deleted_relation_row, parse_relation_row
from .properties import escape_name
from .relation_query import NODES_BOTH, NODES_END, NODES_START, RelationQuery
from .where import Where

NODE_IDS_ERROR = "node ids must be integers"
RELATION_ID_ERROR = "relation id must be an integer"
RELATION_TYPE_REQUIRED_ERROR = "relation type must be specified"
RELATION_TYPE_ERROR = "relation type must be a non-empty string"
FILTER_ERROR = "filter must be an instance of Where"
QUERY_ERROR = "query must be an instance of RelationQuery"
PROPERTIES_ERROR = "properties must be a mapping"

_DELETED_PROJECTION = (
    "WITH r, ID(r) AS id, type(r) AS type, properties(r) AS properties "
    "DELETE r RETURN id, type, properties"
)


def _is_integer(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _check_node_ids(*node_ids: Any) -> None:
    if not all(_is_integer(node_id) for node_id in node_ids):
        raise ValueError(NODE_IDS_ERROR)


def _check_relation_id(relation_id: Any) -> None:
    if not _is_integer(relation_id):
        raise ValueError(RELATION_ID_ERROR)


def _check_properties(properties: Any) -> None:
    if not isinstance(properties, Mapping):
        raise ValueError(PROPERTIES_ERROR)


def _check_query(query: Any) -> None:
    if not isinstance(query, RelationQuery):
        raise ValueError(QUERY_ERROR)


class RelationDB:
    """Relation CRUD and query helpers backed by a Neo4jClient."""

    def __init__(self, client: Neo4jClient) -> None:
        self.client = client

    @staticmethod
    def build_query(
        start_id: Any,
        end_id: Any,
        type: Optional[str] = None,
        where: Optional[Where] = None,
    ) -> RelationQuery:
        """Query for the relations between two nodes, with argument checks.

        ``type=None`` matches relations of any type. ``where`` filters on
        relation properties.
        """
        _check_node_ids(start_id, end_id)
        if type is not None and not (isinstance(type, str) and type):
            raise ValueError(RELATION_TYPE_ERROR)
        if where is not None and not isinstance(where, Where):
            raise ValueError(FILTER_ERROR)

        return (
            RelationQuery.create(type)
            .start_node(start_id)
            .end_node(end_id)
            .relation_where(where)
        )

    async def relate(
        self,
        start_id: int,
        type: str,
        end_id: int,
        properties: Optional[Mapping[str, Any]] = None,
    ) -> Optional[Dict[str, Any]]:
        """Create a ``type`` relation from ``start_id`` to ``end_id``.

        Returns the created relation record, or None when either node does
        not exist.
        """
        _check_node_ids(start_id, end_id)
        if not isinstance(type, str) or not type:
            raise ValueError(RELATION_TYPE_REQUIRED_ERROR)
        if properties is None:
            properties = {}
        _check_properties(properties)

        cypher = (
            "MATCH (n1), (n2) WHERE ID(n1) = $start_id AND ID(n2) = $end_id "
            f"CREATE (n1)-[r:{escape_name(type)} $properties]->(n2) RETURN r"
        )
        params = {"start_id": start_id, "end_id": end_id, "properties": dict(properties)}
        rows = await self.client.run(cypher, params)
        return parse_relation_row(rows[0]) if rows else None

    async def update(
        self, relation_id: int, new_properties: Mapping[str, Any]
    ) -> Optional[Dict[str, Any]]:
        """Merge ``new_properties`` into one relation. Type and endpoints never change."""
        _check_relation_id(relation_id)
        _check_properties(new_properties)

        cypher = (
            "MATCH ()-[r]->() WHERE ID(r) = $relation_id "
            "SET r += $properties RETURN r"
        )
        params = {"relation_id": relation_id, "properties": dict(new_properties)}
        rows = await self.client.run(cypher, params)
        return parse_relation_row(rows[0]) if rows else None

    async def update_many(
        self,
        new_properties: Mapping[str, Any],
        start_id: int,
        end_id: int,
        type: Optional[str] = None,
        where: Optional[Where] = None,
    ) -> List[Dict[str, Any]]:
        """Merge ``new_properties`` into every matching relation.

        An empty ``new_properties`` changes nothing and returns the matched
        relations as they are.
        """
        _check_properties(new_properties)
        query = self.build_query(start_id, end_id, type, where)
        if not new_properties:
            return await self.find_by_query(query)

        cypher = f"{query.match_cypher()} SET r += $properties {query.return_clause()}"
        rows = await self.client.run(cypher, {"properties": dict(new_properties)})
        return [parse_relation_row(row) for row in rows]

    async def find(
        self,
        start_id: int,
        end_id: int,
        type: Optional[str] = None,
        where: Optional[Where] = None,
    ) -> List[Dict[str, Any]]:
        """Relations from ``start_id`` to ``end_id``; empty list when none match."""
        return await self.find_by_query(self.build_query(start_id, end_id, type, where))

    async def find_populated(
        self,
        start_id: int,
        end_id: int,
        type: Optional[str] = None,
        where: Optional[Where] = None,
    ) -> List[Dict[str, Any]]:
        """Like ``find``, with ``start`` and ``end`` node records on each relation."""
        query = self.build_query(start_id, end_id, type, where)
        return await self.find_populated_by_query(query)

    async def count(
        self,
        start_id: int,
        end_id: int,
        type: Optional[str] = None,
        where: Optional[Where] = None,
    ) -> int:
        return await self.count_by_query(self.build_query(start_id, end_id, type, where))

    async def exists(
        self,
        start_id: int,
        end_id: int,
        type: Optional[str] = None,
        where: Optional[Where] = None,
    ) -> bool:
        return await self.exists_by_query(self.build_query(start_id, end_id, type, where))

    async def delete_relation(self, relation_id: int) -> Optional[Dict[str, Any]]:
        """Delete one relation by id and return it as it was before deletion."""
        _check_relation_id(relation_id)

        cypher = f"MATCH ()-[r]->() WHERE ID(r) = $relation_id {_DELETED_PROJECTION}"
        rows = await self.client.run(cypher, {"relation_id": relation_id})
        return parse_deleted_relation_row(rows[0]) if rows else None

    async def delete_many(
        self,
        start_id: int,
        end_id: int,
        type: Optional[str] = None,
        where: Optional[Where] = None,
    ) -> List[Dict[str, Any]]:
        """Delete every matching relation and return the deleted records."""
        query = self.build_query(start_id, end_id, type, where)
        rows = await self.client.run(f"{query.match_cypher()} {_DELETED_PROJECTION}", {})
        return [parse_deleted_relation_row(row) for row in rows]

    # Query object forms

    async def find_by_query(self, query: RelationQuery) -> List[Dict[str, Any]]:
        _check_query(query)
        rows = await self.client.run(query.query_cypher(), {})
        return [parse_relation_row(row) for row in rows]

    async def find_populated_by_query(self, query: RelationQuery) -> List[Dict[str, Any]]:
        _check_query(query)
        rows = await self.client.run(query.query_populated_cypher(), {})
        return [parse_relation_row(row, populated=True) for row in rows]

    async def count_by_query(self, query: RelationQuery) -> int:
        _check_query(query)
        rows = await self.client.run(query.count_cypher(), {})
        return rows[0]["count"] if rows else 0

    async def exists_by_query(self, query: RelationQuery) -> bool:
        return await self.count_by_query(query) > 0

    async def find_nodes(
        self,
        query: RelationQuery,
        nodes: str = NODES_BOTH,
        distinct: bool = False,
    ) -> List[Dict[str, Any]]:
        """Endpoint nodes of the matched relations.

        With ``nodes="start"`` or ``"end"`` each item is a node record; with
        ``"both"`` each item is ``{"start": ..., "end": ...}``.
        """
        _check_query(query)
        rows = await self.client.run(query.query_nodes_cypher(nodes, distinct), {})
        if nodes == NODES_START:
            return [collect_variable(row, "n1") for row in rows]
        if nodes == NODES_END:
            return [collect_variable(row, "n2") for row in rows]
        return [
            {"start": collect_variable(row, "n1"), "end": collect_variable(row, "n2")}
            for row in rows
        ]
