"""MCP tools for relation-level Neo4j operations.

This module exposes `RelationDB` methods as MCP tools.

Filters are passed as plain objects:

    {"field": "since", "filter": {"$gte": 2020}}

optionally with "and" / "or" lists of objects of the same shape.
"""

from __future__ import annotations

import time
from typing import Any, Dict, Optional

from ..mcp_instance import relationdb, tool
from .utils import log_mcp_tool, where_from_dict


@tool()
async def relate(
    start_id: int,
    type: str,
    end_id: int,
    properties: Optional[Dict[str, Any]] = None,
) -> Dict[str, Any]:
    """Create a directed relation between two nodes.

    Args:
        start_id: Internal id of the start node.
        type: Relation type, e.g. "KNOWS".
        end_id: Internal id of the end node.
        properties: Initial relation properties.

    Returns:
        {"result": <relation record or null>} where a relation record is
        {"id": <int>, "type": <str>, ...properties}.
    """
    start_time = time.time()
    args = {"start_id": start_id, "type": type, "end_id": end_id, "properties": properties}
    log_mcp_tool("relate", "called", dict(args))

    record = await relationdb.relate(start_id, type, end_id, properties)

    log_mcp_tool("relate", "completed", dict(args), duration=time.time() - start_time)
    return {"result": record}


@tool()
async def update_relation(relation_id: int, properties: Dict[str, Any]) -> Dict[str, Any]:
    """Merge properties into one relation, identified by its internal id.

    Returns:
        {"result": <updated relation record or null>}
    """
    start_time = time.time()
    args = {"relation_id": relation_id, "properties": properties}
    log_mcp_tool("update_relation", "called", dict(args))

    record = await relationdb.update(relation_id, properties)

    log_mcp_tool("update_relation", "completed", dict(args), duration=time.time() - start_time)
    return {"result": record}


@tool()
async def update_relations(
    properties: Dict[str, Any],
    start_id: int,
    end_id: int,
    type: Optional[str] = None,
    where: Optional[Dict[str, Any]] = None,
) -> Dict[str, Any]:
    """Merge properties into every relation between two nodes matching a filter.

    Returns:
        {"count": <int>, "results": [<relation record>, ...]}
    """
    start_time = time.time()
    args = {
        "properties": properties,
        "start_id": start_id,
        "end_id": end_id,
        "type": type,
        "where": where,
    }
    log_mcp_tool("update_relations", "called", dict(args))

    records = await relationdb.update_many(
        properties, start_id, end_id, type, where_from_dict(where)
    )

    log_mcp_tool("update_relations", "completed", {
        **args,
        "result_count": len(records),
    }, duration=time.time() - start_time)
    return {"count": len(records), "results": records}


@tool()
async def find_relations(
    start_id: int,
    end_id: int,
    type: Optional[str] = None,
    where: Optional[Dict[str, Any]] = None,
) -> Dict[str, Any]:
    """Find relations from one node to another.

    Use this tool when:
        - You need every relation of a type between two known nodes.
        - You want to filter those relations on their properties.

    Args:
        start_id: Internal id of the start node.
        end_id: Internal id of the end node.
        type: Relation type. If omitted, relations of any type match.
        where: Optional relation property filter.

    Returns:
        {"count": <int>, "results": [<relation record>, ...]}

    Example:
        find_relations(start_id=1, end_id=2, type="KNOWS",
                       where={"field": "since", "filter": {"$gte": 2020}})
    """
    start_time = time.time()
    args = {"start_id": start_id, "end_id": end_id, "type": type, "where": where}
    log_mcp_tool("find_relations", "called", dict(args))

    records = await relationdb.find(start_id, end_id, type, where_from_dict(where))

    log_mcp_tool("find_relations", "completed", {
        **args,
        "result_count": len(records),
    }, duration=time.time() - start_time)
    return {"count": len(records), "results": records}


@tool()
async def find_populated_relations(
    start_id: int,
    end_id: int,
    type: Optional[str] = None,
    where: Optional[Dict[str, Any]] = None,
) -> Dict[str, Any]:
    """Like find_relations, with the start and end node records on each result.

    Returns:
        {"count": <int>, "results": [{..relation.., "start": {...}, "end": {...}}, ...]}
    """
    start_time = time.time()
    args = {"start_id": start_id, "end_id": end_id, "type": type, "where": where}
    log_mcp_tool("find_populated_relations", "called", dict(args))

    records = await relationdb.find_populated(start_id, end_id, type, where_from_dict(where))

    log_mcp_tool("find_populated_relations", "completed", {
        **args,
        "result_count": len(records),
    }, duration=time.time() - start_time)
    return {"count": len(records), "results": records}


@tool()
async def count_relations(
    start_id: int,
    end_id: int,
    type: Optional[str] = None,
    where: Optional[Dict[str, Any]] = None,
) -> Dict[str, Any]:
    """Count relations from one node to another.

    Returns:
        {"count": <int>}
    """
    start_time = time.time()
    args = {"start_id": start_id, "end_id": end_id, "type": type, "where": where}
    log_mcp_tool("count_relations", "called", dict(args))

    count = await relationdb.count(start_id, end_id, type, where_from_dict(where))

    log_mcp_tool("count_relations", "completed", {**args, "result_count": count},
                 duration=time.time() - start_time)
    return {"count": count}


@tool()
async def relation_exists(
    start_id: int,
    end_id: int,
    type: Optional[str] = None,
    where: Optional[Dict[str, Any]] = None,
) -> Dict[str, Any]:
    """Check whether any matching relation exists between two nodes.

    Returns:
        {"exists": <bool>}
    """
    start_time = time.time()
    args = {"start_id": start_id, "end_id": end_id, "type": type, "where": where}
    log_mcp_tool("relation_exists", "called", dict(args))

    exists = await relationdb.exists(start_id, end_id, type, where_from_dict(where))

    log_mcp_tool("relation_exists", "completed", {**args, "exists": exists},
                 duration=time.time() - start_time)
    return {"exists": exists}


@tool()
async def delete_relation(relation_id: int) -> Dict[str, Any]:
    """Delete one relation by its internal id.

    Returns:
        {"result": <deleted relation record or null>}
    """
    start_time = time.time()
    log_mcp_tool("delete_relation", "called", {"relation_id": relation_id})

    record = await relationdb.delete_relation(relation_id)

    log_mcp_tool("delete_relation", "completed", {"relation_id": relation_id},
                 duration=time.time() - start_time)
    return {"result": record}


@tool()
async def delete_relations(
    start_id: int,
    end_id: int,
    type: Optional[str] = None,
    where: Optional[Dict[str, Any]] = None,
) -> Dict[str, Any]:
    """Delete every matching relation between two nodes.

    Returns:
        {"count": <int>, "results": [<deleted relation record>, ...]}
    """
    start_time = time.time()
    args = {"start_id": start_id, "end_id": end_id, "type": type, "where": where}
    log_mcp_tool("delete_relations", "called", dict(args))

    records = await relationdb.delete_many(start_id, end_id, type, where_from_dict(where))

    log_mcp_tool("delete_relations", "completed", {
        **args,
        "result_count": len(records),
    }, duration=time.time() - start_time)
    return {"count": len(records), "results": records}
