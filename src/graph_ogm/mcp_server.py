"""
MCP server entrypoint for graph OGM.

It imports the shared `mcp` instance and all MCP tools so they are
registered on the same FastMCP server.
"""

from __future__ import annotations

import logging

logging.basicConfig(
    level=logging.INFO,
    handlers=[logging.FileHandler("/tmp/graph_ogm_server.log")]
)

# Import tools so their @tool decorators run and register them on `mcp`.
from .tools import nodes as node_tools  # noqa: F401
from .tools import relations as relation_tools  # noqa: F401
from .mcp_instance import config, mcp  # shared FastMCP instance


logger = logging.getLogger(__name__)


def main() -> None:
    """Main entry point for the MCP server."""
    logging.getLogger().setLevel(config.log_level.upper())
    logger.info("Starting graph OGM MCP server on %s:%s", config.mcp_host, config.mcp_port)
    # Blocks the current process.
    mcp.run(transport="streamable-http")


if __name__ == "__main__":
    main()
