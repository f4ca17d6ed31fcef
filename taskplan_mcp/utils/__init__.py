"""Utility functions for Taskplan MCP."""

from taskplan_mcp.utils.formatters import (
    _format_complexity_markdown,
    _format_due_label,
    _format_idle_markdown,
    _format_schedule_concise,
    _format_schedule_markdown,
    _format_task_concise,
    _format_task_markdown,
    _format_tasks_concise,
    _format_tasks_markdown,
)
from taskplan_mcp.utils.loader import _get_config, _load_snapshot, _read_complexity_report

__all__ = [
    "_get_config",
    "_load_snapshot",
    "_read_complexity_report",
    "_format_due_label",
    "_format_task_concise",
    "_format_tasks_concise",
    "_format_task_markdown",
    "_format_tasks_markdown",
    "_format_schedule_markdown",
    "_format_schedule_concise",
    "_format_complexity_markdown",
    "_format_idle_markdown",
]
