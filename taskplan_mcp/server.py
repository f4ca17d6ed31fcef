"""FastMCP server initialization for Taskplan MCP."""

import logging
import os
import sys

from mcp.server.fastmcp import FastMCP

# Initialize the MCP server
mcp = FastMCP("taskplan_mcp")


def configure_logging() -> None:
    """Log to stderr; stdout carries the stdio transport."""
    logging.basicConfig(
        level=os.getenv("TASKPLAN_LOG_LEVEL", "INFO").upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def run() -> None:
    """Run the MCP server."""
    configure_logging()
    mcp.run()

