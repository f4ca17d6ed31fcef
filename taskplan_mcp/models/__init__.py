"""Pydantic models for Taskplan MCP."""

from taskplan_mcp.models.inputs import (
    ComplexityInput,
    ComplexityReportInput,
    DependenciesInput,
    ExpandInput,
    ListTasksInput,
    NextInput,
    ReadyInput,
    ScheduleInput,
    SetDueDateInput,
    SetHoursInput,
    SetPriorityInput,
    SetStatusInput,
    ShowTaskInput,
)
from taskplan_mcp.models.planning import (
    BlockedTaskInfo,
    BottleneckInfo,
    ComplexityEntry,
    ComplexityRecommendation,
    ComplexityReport,
    ComplexityStats,
    IdleDiagnosis,
    Schedule,
    ScheduleBucket,
    ScheduleEntry,
    ScoredTask,
)
from taskplan_mcp.models.task import ResolvedDependency, Subtask, TaskModel

__all__ = [
    # Task models
    "TaskModel",
    "Subtask",
    "ResolvedDependency",
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
]
