"""Planner configuration.

Defaults are centralized in :class:`PlannerConfig` and passed explicitly into
the planning functions. :meth:`PlannerConfig.from_env` reads overrides from
environment variables (with optional ``.env`` file support via
*python-dotenv*).
"""

import os
from pathlib import Path

from dotenv import find_dotenv, load_dotenv
from pydantic import BaseModel, Field

from taskplan_mcp.enums import Priority

DEFAULT_TASKS_FILE = "tasks/tasks.json"
DEFAULT_SCHEDULE_FILE = "tasks/schedule.json"
DEFAULT_COMPLEXITY_REPORT = "scripts/task-complexity-report.json"

# Environment variable -> PlannerConfig field
ENV_FIELDS = {
    "TASKPLAN_TASKS_FILE": "tasks_file",
    "TASKPLAN_SCHEDULE_FILE": "schedule_file",
    "TASKPLAN_COMPLEXITY_REPORT": "complexity_report_file",
    "DEFAULT_PRIORITY": "default_priority",
    "DEFAULT_SUBTASKS": "default_subtasks",
    "TASKPLAN_DEFAULT_HOURS": "default_hours",
    "TASKPLAN_HOURS_PER_DAY": "hours_per_day",
    "TASKPLAN_COMPLEXITY_THRESHOLD": "complexity_threshold",
}


class PlannerConfig(BaseModel):
    """Defaults shared by the scorer, bucketer and complexity estimator."""

    tasks_file: Path = Field(default=Path(DEFAULT_TASKS_FILE), description="Task store JSON file")
    schedule_file: Path = Field(default=Path(DEFAULT_SCHEDULE_FILE), description="Schedule artifact path")
    complexity_report_file: Path = Field(
        default=Path(DEFAULT_COMPLEXITY_REPORT), description="Complexity report artifact path"
    )
    default_priority: Priority = Field(default=Priority.MEDIUM, description="Priority assumed when a task has none")
    default_subtasks: int = Field(default=3, description="Base subtask count for expansion", ge=1, le=20)
    default_hours: float = Field(default=2.0, description="Estimate assumed when a task has none", gt=0)
    hours_per_day: float = Field(default=6.0, description="Productive hours per day for planning", gt=0, le=24)
    complexity_threshold: int = Field(default=5, description="Complexity at which expansion is advised", ge=1, le=10)

    @classmethod
    def from_env(cls) -> "PlannerConfig":
        """Build a config from environment variables, falling back to defaults."""
        load_dotenv(find_dotenv(usecwd=True))
        values = {field: os.environ[var] for var, field in ENV_FIELDS.items() if os.environ.get(var)}
        return cls.model_validate(values)
