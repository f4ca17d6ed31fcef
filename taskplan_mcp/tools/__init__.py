"""MCP tool definitions for Taskplan."""

# Import all tools to register them with the MCP server
from taskplan_mcp.tools.core import (
    taskplan_expand,
    taskplan_list,
    taskplan_set_due_date,
    taskplan_set_hours,
    taskplan_set_priority,
    taskplan_set_status,
    taskplan_show,
)
from taskplan_mcp.tools.planning import (
    taskplan_analyze_complexity,
    taskplan_complexity_report,
    taskplan_dependencies,
    taskplan_next,
    taskplan_ready,
    taskplan_schedule,
)

__all__ = [
    # Core tools
    "taskplan_list",
    "taskplan_show",
    "taskplan_set_status",
    "taskplan_set_priority",
    "taskplan_set_hours",
    "taskplan_set_due_date",
    "taskplan_expand",
    # Planning tools
    "taskplan_next",
    "taskplan_ready",
    "taskplan_schedule",
    "taskplan_analyze_complexity",
    "taskplan_complexity_report",
    "taskplan_dependencies",
]
