"""Derived planning models: scores, schedules and complexity reports.

These never replace the canonical :class:`TaskModel`; they wrap or
denormalize it for presentation and artifact files.
"""

from datetime import date, datetime

from pydantic import BaseModel, Field

from taskplan_mcp.enums import IdleReason, Priority, TaskStatus
from taskplan_mcp.models.task import CamelModel, TaskId, TaskModel


class ScoredTask(BaseModel):
    """A task with its priority score and reasons."""

    task: TaskModel
    score: int = Field(ge=0, le=100)
    reasons: list[str] = Field(default_factory=list)


class ScheduleEntry(CamelModel):
    """Denormalized task row inside a schedule bucket."""

    id: TaskId
    title: str
    priority: Priority
    priority_score: int
    status: TaskStatus
    estimated_hours: float
    due_date: date | None = None
    has_dependencies: bool = False
    dependencies: list[TaskId] = Field(default_factory=list)


class ScheduleBucket(CamelModel):
    """One planning horizon."""

    description: str
    count: int = 0
    estimated_hours: float = 0.0
    tasks: list[ScheduleEntry] = Field(default_factory=list)


class Schedule(CamelModel):
    """Schedule snapshot written to the schedule artifact."""

    timestamp: datetime
    total_tasks: int
    hours_per_day: float
    today: date
    immediate: ScheduleBucket
    this_week: ScheduleBucket
    upcoming: ScheduleBucket
    backlog: ScheduleBucket

    def buckets(self) -> list[tuple[str, ScheduleBucket]]:
        """Buckets in horizon order, keyed by their artifact name."""
        return [
            ("immediate", self.immediate),
            ("thisWeek", self.this_week),
            ("upcoming", self.upcoming),
            ("backlog", self.backlog),
        ]


class ComplexityRecommendation(CamelModel):
    """Expansion advice for a single task."""

    subtask_count: int
    needs_expansion: bool
    expansion_prompt: str
    expansion_command: str


class ComplexityEntry(CamelModel):
    """Complexity analysis result for a single task."""

    task_id: TaskId
    title: str
    status: TaskStatus
    complexity: int = Field(ge=1, le=10)
    has_subtasks: bool = False
    subtask_count: int = 0
    recommended: ComplexityRecommendation


class ComplexityStats(CamelModel):
    """Aggregate complexity distribution across active tasks."""

    total_tasks: int = 0
    active_tasks: int = 0
    low_complexity: int = 0
    medium_complexity: int = 0
    high_complexity: int = 0
    average_complexity: float = 0.0


class ComplexityReport(CamelModel):
    """Complexity report written to the report artifact."""

    timestamp: datetime
    stats: ComplexityStats
    tasks: list[ComplexityEntry] = Field(default_factory=list)


class BlockedTaskInfo(BaseModel):
    """Information about a blocked task and what blocks it."""

    task: TaskModel
    unmet: list[str] = Field(default_factory=list)


class BottleneckInfo(BaseModel):
    """Information about a task and how many active tasks wait on it."""

    task: TaskModel
    blocks_count: int


class IdleDiagnosis(BaseModel):
    """Explanation for an empty ready set."""

    reason: IdleReason
    cycles: list[list[str]] = Field(default_factory=list)
    blocked: list[BlockedTaskInfo] = Field(default_factory=list)
