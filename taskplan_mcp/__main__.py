"""Entry point for ``python -m taskplan_mcp``."""

from taskplan_mcp.server import run

run()
