"""Enums for Taskplan MCP."""

from enum import Enum


class ResponseFormat(str, Enum):
    """Output format for tool responses."""

    CONCISE = "concise"  # Minimal output for chaining
    MARKDOWN = "markdown"  # Human-readable (default)
    JSON = "json"  # Machine-readable with all fields


class TaskStatus(str, Enum):
    """Task lifecycle states as stored in the task file."""

    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    BLOCKED = "blocked"
    DEFERRED = "deferred"
    DONE = "done"
    COMPLETED = "completed"


class Priority(str, Enum):
    """Task priority levels."""

    CRITICAL = "critical"
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class IdleReason(str, Enum):
    """Why there is no task to surface."""

    NO_TASKS = "no_tasks"
    ALL_DONE = "all_done"
    CYCLIC_DEPENDENCY = "cyclic_dependency"
    BLOCKED = "blocked"


FINISHED_STATUSES = frozenset({TaskStatus.DONE, TaskStatus.COMPLETED})
