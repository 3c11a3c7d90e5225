"""MCP tools for node-level Neo4j operations.

This module exposes `NodeDB` methods as MCP tools.
"""

from __future__ import annotations

import time
from typing import Any, Dict, Optional

from ..mcp_instance import nodedb, tool
from .utils import log_mcp_tool


@tool()
async def create_node(
    properties: Dict[str, Any],
    label: Optional[str] = None,
) -> Dict[str, Any]:
    """Create a node.

    Args:
        properties: Node properties.
        label: Optional node label.

    Returns:
        {"result": {"id": <int>, ...properties}}
    """
    start_time = time.time()
    log_mcp_tool("create_node", "called", {"properties": properties, "label": label})

    record = await nodedb.create(properties, label)

    log_mcp_tool("create_node", "completed", {"label": label},
                 duration=time.time() - start_time)
    return {"result": record}


@tool()
async def find_node(node_id: int) -> Dict[str, Any]:
    """Look a node up by its internal id.

    Returns:
        {"result": <node record or null>}
    """
    start_time = time.time()
    log_mcp_tool("find_node", "called", {"node_id": node_id})

    record = await nodedb.find_by_id(node_id)

    log_mcp_tool("find_node", "completed", {"node_id": node_id, "found": record is not None},
                 duration=time.time() - start_time)
    return {"result": record}


@tool()
async def delete_node(node_id: int) -> Dict[str, Any]:
    """Delete a node and every relation attached to it.

    Returns:
        {"result": <deleted node record or null>}
    """
    start_time = time.time()
    log_mcp_tool("delete_node", "called", {"node_id": node_id})

    record = await nodedb.delete(node_id)

    log_mcp_tool("delete_node", "completed", {"node_id": node_id},
                 duration=time.time() - start_time)
    return {"result": record}
