"""Core task models for Taskplan MCP."""

from __future__ import annotations

from datetime import date
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from taskplan_mcp.enums import FINISHED_STATUSES, Priority, TaskStatus

TaskId = int | str


class CamelModel(BaseModel):
    """Base model whose JSON field names are camelCase."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


def _normalize_status(value: Any) -> Any:
    if isinstance(value, str):
        return value.strip().lower().replace("-", "_")
    return value


class Subtask(CamelModel):
    """A lightweight child task, identified as ``<parentId>.<ordinal>``."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="allow")

    id: TaskId
    title: str = ""
    description: str = ""
    status: TaskStatus = TaskStatus.PENDING
    done: bool = False

    @field_validator("status", mode="before")
    @classmethod
    def normalize_status(cls, v: Any) -> Any:
        return _normalize_status(v)


class ResolvedDependency(BaseModel):
    """Lightweight resolved dependency reference.

    A dependency id that does not match any loaded task is reported with
    ``found=False`` and counts as unsatisfied.
    """

    id: TaskId
    title: str = ""
    status: TaskStatus | None = None
    found: bool = True

    @property
    def satisfied(self) -> bool:
        return self.found and self.status in FINISHED_STATUSES


class TaskModel(CamelModel):
    """Model representing a stored task with all its attributes."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="allow")

    id: TaskId
    title: str = ""
    description: str = ""
    details: str | None = None
    status: TaskStatus = TaskStatus.PENDING
    priority: Priority | None = None
    dependencies: list[TaskId] = Field(default_factory=list)
    estimated_hours: float | None = Field(default=None, gt=0)
    due_date: date | None = None
    subtasks: list[Subtask] = Field(default_factory=list)

    @field_validator("status", mode="before")
    @classmethod
    def normalize_status(cls, v: Any) -> Any:
        return _normalize_status(v)

    @field_validator("priority", mode="before")
    @classmethod
    def normalize_priority(cls, v: Any) -> Any:
        if isinstance(v, str):
            v = v.strip().lower()
            return v or None
        return v

    @field_validator("due_date", mode="before")
    @classmethod
    def truncate_timestamp(cls, v: Any) -> Any:
        # Accept full ISO timestamps, keep the calendar date
        if isinstance(v, str) and len(v) > 10:
            return v[:10]
        return v

    @field_validator("dependencies", mode="before")
    @classmethod
    def default_dependencies(cls, v: Any) -> Any:
        return [] if v is None else v

    @property
    def key(self) -> str:
        """Identifier in the form used for dependency matching."""
        return str(self.id)

    @property
    def dependency_keys(self) -> list[str]:
        return [str(dep) for dep in self.dependencies]

    @property
    def is_finished(self) -> bool:
        return self.status in FINISHED_STATUSES

    def to_store_dict(self) -> dict[str, Any]:
        """Serialize with the store's field names, omitting absent optionals."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
