"""Input models for Taskplan MCP tools."""

import re
from datetime import date

from pydantic import BaseModel, ConfigDict, Field, field_validator

from taskplan_mcp.enums import Priority, ResponseFormat, TaskStatus

DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")

# ============================================================================
# Core Tool Input Models
# ============================================================================


class ListTasksInput(BaseModel):
    """Input model for listing tasks."""

    model_config = ConfigDict(str_strip_whitespace=True)

    status: TaskStatus | None = Field(default=None, description="Only list tasks with this status")
    response_format: ResponseFormat = Field(
        default=ResponseFormat.MARKDOWN,
        description="Output format: 'markdown', 'concise' or 'json'",
    )


class ShowTaskInput(BaseModel):
    """Input model for showing a single task."""

    model_config = ConfigDict(str_strip_whitespace=True)

    task_id: str = Field(..., description="Task ID to show", min_length=1)
    response_format: ResponseFormat = Field(
        default=ResponseFormat.MARKDOWN,
        description="Output format: 'markdown' or 'json'",
    )


class SetStatusInput(BaseModel):
    """Input model for changing a task's status."""

    model_config = ConfigDict(str_strip_whitespace=True)

    task_id: str = Field(..., description="Task ID to update", min_length=1)
    status: TaskStatus = Field(..., description="New status: pending, in_progress, blocked, deferred, done")

    @field_validator("status", mode="before")
    @classmethod
    def normalize_status(cls, v: object) -> object:
        if isinstance(v, str):
            return v.strip().lower().replace("-", "_")
        return v


class SetPriorityInput(BaseModel):
    """Input model for changing a task's priority."""

    model_config = ConfigDict(str_strip_whitespace=True)

    task_id: str = Field(..., description="Task ID to update", min_length=1)
    priority: Priority = Field(..., description="New priority: critical, high, medium or low")
    update_schedule: bool = Field(default=False, description="Recompute and save the schedule afterwards")
    hours_per_day: float | None = Field(
        default=None, description="Hours per day for the refreshed schedule", gt=0, le=24
    )

    @field_validator("priority", mode="before")
    @classmethod
    def validate_priority(cls, v: object) -> object:
        if isinstance(v, str):
            v = v.strip().lower()
            valid = [p.value for p in Priority]
            if v not in valid:
                raise ValueError(f"Invalid priority. Must be one of: {', '.join(valid)}")
        return v


class SetHoursInput(BaseModel):
    """Input model for changing a task's time estimate."""

    model_config = ConfigDict(str_strip_whitespace=True)

    task_id: str = Field(..., description="Task ID to update", min_length=1)
    hours: float = Field(..., description="Estimated hours (positive number)", gt=0)
    update_schedule: bool = Field(default=False, description="Recompute and save the schedule afterwards")
    hours_per_day: float | None = Field(
        default=None, description="Hours per day for the refreshed schedule", gt=0, le=24
    )


class SetDueDateInput(BaseModel):
    """Input model for changing a task's due date."""

    model_config = ConfigDict(str_strip_whitespace=True)

    task_id: str = Field(..., description="Task ID to update", min_length=1)
    due_date: str = Field(..., description="Due date in YYYY-MM-DD format")
    update_schedule: bool = Field(default=False, description="Recompute and save the schedule afterwards")
    hours_per_day: float | None = Field(
        default=None, description="Hours per day for the refreshed schedule", gt=0, le=24
    )

    @field_validator("due_date")
    @classmethod
    def validate_due_date(cls, v: str) -> str:
        if not DATE_PATTERN.match(v):
            raise ValueError("Invalid date format. Use YYYY-MM-DD.")
        try:
            date.fromisoformat(v)
        except ValueError as e:
            raise ValueError(f"Invalid date: {v}") from e
        return v


class ExpandInput(BaseModel):
    """Input model for expanding a task into subtasks."""

    model_config = ConfigDict(str_strip_whitespace=True)

    task_id: str = Field(..., description="Task ID to expand", min_length=1)
    num: int | None = Field(
        default=None, description="Number of subtasks (defaults to the complexity recommendation)", ge=1, le=20
    )
    force: bool = Field(default=False, description="Replace existing subtasks")


# ============================================================================
# Planning Tool Input Models
# ============================================================================


class NextInput(BaseModel):
    """Input model for the next-task selector."""

    model_config = ConfigDict(str_strip_whitespace=True)

    response_format: ResponseFormat = Field(
        default=ResponseFormat.MARKDOWN, description="Output format: 'markdown', 'concise' or 'json'"
    )


class ReadyInput(BaseModel):
    """Input model for listing ready (unblocked) tasks."""

    model_config = ConfigDict(str_strip_whitespace=True)

    limit: int = Field(default=10, description="Maximum number of tasks to return", ge=1, le=100)
    response_format: ResponseFormat = Field(
        default=ResponseFormat.MARKDOWN, description="Output format: 'markdown', 'concise' or 'json'"
    )


class ScheduleInput(BaseModel):
    """Input model for recomputing the schedule."""

    model_config = ConfigDict(str_strip_whitespace=True)

    hours_per_day: float | None = Field(
        default=None, description="Productive hours per day (defaults to configuration)", gt=0, le=24
    )
    output: str | None = Field(default=None, description="Schedule file path (defaults to configuration)")
    response_format: ResponseFormat = Field(
        default=ResponseFormat.MARKDOWN, description="Output format: 'markdown', 'concise' or 'json'"
    )


class ComplexityInput(BaseModel):
    """Input model for complexity analysis."""

    model_config = ConfigDict(str_strip_whitespace=True)

    threshold: int | None = Field(
        default=None, description="Complexity at which expansion is recommended", ge=1, le=10
    )
    output: str | None = Field(default=None, description="Report file path (defaults to configuration)")
    response_format: ResponseFormat = Field(
        default=ResponseFormat.MARKDOWN, description="Output format: 'markdown' or 'json'"
    )


class ComplexityReportInput(BaseModel):
    """Input model for displaying a saved complexity report."""

    model_config = ConfigDict(str_strip_whitespace=True)

    file: str | None = Field(default=None, description="Report file path (defaults to configuration)")


class DependenciesInput(BaseModel):
    """Input model for dependency graph analysis."""

    model_config = ConfigDict(str_strip_whitespace=True)

    limit: int = Field(default=10, description="Maximum items per section", ge=1, le=50)
    response_format: ResponseFormat = Field(
        default=ResponseFormat.MARKDOWN, description="Output format: 'markdown' or 'json'"
    )
