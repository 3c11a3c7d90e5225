"""Shared MCP server and Neo4j wiring for graph OGM tools.

All MCP tools and the server entrypoint must import and use this module
so that there is exactly one FastMCP and one Neo4j client/RelationDB/NodeDB
per process.
"""

from mcp.server.fastmcp import FastMCP

from .config import Config
from .neo4j import Neo4jClient, NodeDB, RelationDB

config = Config()

# Single shared MCP server instance
mcp = FastMCP(
    "graph-ogm",
    host=config.mcp_host,
    streamable_http_path="/",
    port=config.mcp_port,
)

# Shared Neo4j wiring for all tools
neo4j_client = Neo4jClient(config=config)
relationdb = RelationDB(neo4j_client)
nodedb = NodeDB(neo4j_client)

# Convenience alias for defining tools bound to this server
tool = mcp.tool

__all__ = ["mcp", "tool", "config", "neo4j_client", "relationdb", "nodedb"]
