"""
MCP Server for task planning.

This server keeps a JSON task list with dependencies, priorities, estimates
and due dates, and answers two questions: which task to work on next, and
how the backlog splits into immediate, this-week, upcoming and backlog
horizons. It also estimates task complexity and recommends subtask
breakdowns.
"""

# Re-export enums
from taskplan_mcp.config import PlannerConfig
from taskplan_mcp.enums import IdleReason, Priority, ResponseFormat, TaskStatus

# Re-export exceptions
from taskplan_mcp.exceptions import (
    CyclicDependencyError,
    StoreConflictError,
    StoreIOError,
    TaskNotFoundError,
    TaskPlanError,
    TaskValidationError,
)

# Re-export models
from taskplan_mcp.models import (
    BlockedTaskInfo,
    BottleneckInfo,
    ComplexityEntry,
    ComplexityInput,
    ComplexityRecommendation,
    ComplexityReport,
    ComplexityReportInput,
    ComplexityStats,
    DependenciesInput,
    ExpandInput,
    IdleDiagnosis,
    ListTasksInput,
    NextInput,
    ReadyInput,
    ResolvedDependency,
    Schedule,
    ScheduleBucket,
    ScheduleEntry,
    ScheduleInput,
    ScoredTask,
    SetDueDateInput,
    SetHoursInput,
    SetPriorityInput,
    SetStatusInput,
    ShowTaskInput,
    Subtask,
    TaskModel,
)

# Re-export MCP server instance
from taskplan_mcp.server import mcp
from taskplan_mcp.store import TaskSnapshot, TaskStore

# Re-export tools
from taskplan_mcp.tools import (
    taskplan_analyze_complexity,
    taskplan_complexity_report,
    taskplan_dependencies,
    taskplan_expand,
    taskplan_list,
    taskplan_next,
    taskplan_ready,
    taskplan_schedule,
    taskplan_set_due_date,
    taskplan_set_hours,
    taskplan_set_priority,
    taskplan_set_status,
    taskplan_show,
)

__all__ = [
    # Enums
    "ResponseFormat",
    "TaskStatus",
    "Priority",
    "IdleReason",
    # Configuration
    "PlannerConfig",
    # Exceptions
    "TaskPlanError",
    "TaskNotFoundError",
    "TaskValidationError",
    "StoreIOError",
    "StoreConflictError",
    "CyclicDependencyError",
    # Task models
    "TaskModel",
    "Subtask",
    "ResolvedDependency",
    # Store
    "TaskStore",
    "TaskSnapshot",
    # Core input models
    "ListTasksInput",
    "ShowTaskInput",
    "SetStatusInput",
    "SetPriorityInput",
    "SetHoursInput",
    "SetDueDateInput",
    "ExpandInput",
    # Planning input models
    "NextInput",
    "ReadyInput",
    "ScheduleInput",
    "ComplexityInput",
    "ComplexityReportInput",
    "DependenciesInput",
    # Planning output models
    "ScoredTask",
    "ScheduleEntry",
    "ScheduleBucket",
    "Schedule",
    "ComplexityRecommendation",
    "ComplexityEntry",
    "ComplexityStats",
    "ComplexityReport",
    "BlockedTaskInfo",
    "BottleneckInfo",
    "IdleDiagnosis",
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
    # MCP server instance
    "mcp",
]
