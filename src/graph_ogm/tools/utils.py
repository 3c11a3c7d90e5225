"""Utility functions for MCP tools."""
from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from ..neo4j import Where

mcp_tools_logger = logging.getLogger('graph_ogm.mcp.tools')


def log_mcp_tool(function_name: str, phase: str, extra: Dict[str, Any], duration: Optional[float] = None) -> None:
    """Helper function to log MCP tool calls and completions.

    Args:
        function_name: Name of the MCP tool function.
        phase: Either "called" or "completed".
        extra: Dictionary of additional data to log.
        duration: Optional duration in seconds (for "completed" phase).
    """
    if duration is not None:
        extra["duration_seconds"] = duration
    mcp_tools_logger.info(
        f"{function_name} {phase}",
        extra=extra
    )


def where_from_dict(where: Optional[Dict[str, Any]]) -> Optional[Where]:
    """Build a Where from ``{"field": ..., "filter": {...}}``.

    Optional ``"and"`` / ``"or"`` keys hold lists of the same shape, chained
    onto the filter in order.
    """
    if where is None:
        return None
    if not isinstance(where, dict):
        raise ValueError('where must be an object like {"field": ..., "filter": {...}}')

    result = Where(where.get("field"), where.get("filter"))
    for child in where.get("and", []):
        result.and_(where_from_dict(child))
    for child in where.get("or", []):
        result.or_(where_from_dict(child))
    return result
