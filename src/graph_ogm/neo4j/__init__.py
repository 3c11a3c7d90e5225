"""
Neo4j database client, query builders and low-level facades.

This package should contain ONLY Neo4j-specific logic:
- Connection/client setup
- Cypher rendering (filters, relation queries)
- Facades running rendered statements through the client

MCP tool wiring on top of these facades belongs in the `tools` package.
"""

from .client import Neo4jClient
from .index import IndexDB
from .node import NodeDB
from .relation import RelationDB
from .relation_query import RelationQuery
from .where import Where

__all__ = [
    "Neo4jClient",
    "IndexDB",
    "NodeDB",
    "RelationDB",
    "RelationQuery",
    "Where",
]
