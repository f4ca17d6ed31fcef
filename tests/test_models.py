"""Tests for models, enums, exceptions and configuration."""

import os
from datetime import date
from pathlib import Path

import pytest
from pydantic import ValidationError

from taskplan_mcp import (
    CyclicDependencyError,
    ExpandInput,
    ListTasksInput,
    PlannerConfig,
    Priority,
    ReadyInput,
    ResponseFormat,
    SetDueDateInput,
    SetHoursInput,
    SetPriorityInput,
    SetStatusInput,
    ShowTaskInput,
    StoreConflictError,
    StoreIOError,
    TaskModel,
    TaskNotFoundError,
    TaskPlanError,
    TaskStatus,
)

# ============================================================================
# Task Model Tests
# ============================================================================


class TestTaskModel:
    """Tests for the stored task model."""

    def test_camel_case_fields(self):
        task = TaskModel.model_validate(
            {"id": 1, "title": "T", "estimatedHours": 3, "dueDate": "2024-06-01"}
        )
        assert task.estimated_hours == 3.0
        assert task.due_date == date(2024, 6, 1)

    def test_due_date_timestamp_truncated(self):
        task = TaskModel.model_validate({"id": 1, "dueDate": "2024-06-01T10:00:00.000Z"})
        assert task.due_date == date(2024, 6, 1)

    def test_priority_normalized(self):
        assert TaskModel(id=1, priority="HIGH").priority == Priority.HIGH
        assert TaskModel(id=1, priority="").priority is None

    def test_status_normalized(self):
        assert TaskModel(id=1, status="in-progress").status == TaskStatus.IN_PROGRESS

    def test_invalid_status_rejected(self):
        with pytest.raises(ValidationError):
            TaskModel(id=1, status="started")

    def test_null_dependencies(self):
        assert TaskModel.model_validate({"id": 1, "dependencies": None}).dependencies == []

    def test_hours_must_be_positive(self):
        with pytest.raises(ValidationError):
            TaskModel(id=1, estimated_hours=0)

    def test_to_store_dict_omits_absent_fields(self):
        data = TaskModel(id=1, title="T", estimated_hours=1.5).to_store_dict()
        assert data["estimatedHours"] == 1.5
        assert "priority" not in data
        assert "dueDate" not in data
        assert "details" not in data

    def test_is_finished(self):
        assert TaskModel(id=1, status="done").is_finished
        assert TaskModel(id=1, status="completed").is_finished
        assert not TaskModel(id=1, status="blocked").is_finished


# ============================================================================
# Input Model Tests
# ============================================================================


class TestInputModels:
    """Tests for Pydantic input models."""

    def test_list_tasks_input_defaults(self):
        params = ListTasksInput()
        assert params.status is None
        assert params.response_format == ResponseFormat.MARKDOWN

    def test_show_task_input_strips_whitespace(self):
        assert ShowTaskInput(task_id="  5 ").task_id == "5"

    def test_show_task_input_empty_id_fails(self):
        with pytest.raises(ValidationError):
            ShowTaskInput(task_id="   ")

    def test_set_status_normalizes(self):
        assert SetStatusInput(task_id="1", status="In-Progress").status == TaskStatus.IN_PROGRESS
        assert SetStatusInput(task_id="1", status="DONE").status == TaskStatus.DONE

    def test_set_status_invalid(self):
        with pytest.raises(ValidationError):
            SetStatusInput(task_id="1", status="finished")

    def test_set_priority_case_insensitive(self):
        assert SetPriorityInput(task_id="1", priority="Critical").priority == Priority.CRITICAL

    def test_set_priority_invalid(self):
        with pytest.raises(ValidationError) as exc_info:
            SetPriorityInput(task_id="1", priority="urgent")
        assert "Invalid priority. Must be one of: critical, high, medium, low" in str(exc_info.value)

    @pytest.mark.parametrize("hours", [0, -1.5])
    def test_set_hours_must_be_positive(self, hours):
        with pytest.raises(ValidationError):
            SetHoursInput(task_id="1", hours=hours)

    def test_set_due_date_format(self):
        with pytest.raises(ValidationError) as exc_info:
            SetDueDateInput(task_id="1", due_date="2024/01/01")
        assert "Invalid date format. Use YYYY-MM-DD." in str(exc_info.value)

    def test_set_due_date_impossible_date(self):
        with pytest.raises(ValidationError) as exc_info:
            SetDueDateInput(task_id="1", due_date="2024-02-30")
        assert "Invalid date: 2024-02-30" in str(exc_info.value)

    def test_set_due_date_valid(self):
        assert SetDueDateInput(task_id="1", due_date="2024-02-29").due_date == "2024-02-29"

    @pytest.mark.parametrize("num", [0, 21])
    def test_expand_num_bounds(self, num):
        with pytest.raises(ValidationError):
            ExpandInput(task_id="1", num=num)

    def test_ready_input_defaults(self):
        params = ReadyInput()
        assert params.limit == 10
        with pytest.raises(ValidationError):
            ReadyInput(limit=0)


# ============================================================================
# Enum and Exception Tests
# ============================================================================


class TestEnums:
    """Tests for enum values."""

    def test_response_format_values(self):
        assert ResponseFormat.CONCISE.value == "concise"
        assert ResponseFormat.MARKDOWN.value == "markdown"
        assert ResponseFormat.JSON.value == "json"

    def test_task_status_values(self):
        assert TaskStatus.IN_PROGRESS.value == "in_progress"
        assert TaskStatus.COMPLETED.value == "completed"

    def test_priority_values(self):
        assert [p.value for p in Priority] == ["critical", "high", "medium", "low"]


class TestExceptions:
    """Tests for the exception hierarchy."""

    def test_hierarchy(self):
        assert issubclass(TaskNotFoundError, TaskPlanError)
        assert issubclass(StoreConflictError, StoreIOError)
        assert issubclass(CyclicDependencyError, TaskPlanError)

    def test_messages(self):
        assert str(TaskNotFoundError("7")) == "Task with ID 7 not found."
        error = CyclicDependencyError([["1", "2"], ["3"]])
        assert str(error) == "Cyclic dependencies detected: 1 -> 2 -> 1; 3 -> 3"


# ============================================================================
# Configuration Tests
# ============================================================================


class TestPlannerConfig:
    """Tests for planner configuration."""

    def test_defaults(self):
        config = PlannerConfig()
        assert config.tasks_file == Path("tasks/tasks.json")
        assert config.default_priority == Priority.MEDIUM
        assert config.default_subtasks == 3
        assert config.default_hours == 2.0
        assert config.hours_per_day == 6.0
        assert config.complexity_threshold == 5

    def test_from_env(self, planner_env, monkeypatch):
        monkeypatch.setenv("DEFAULT_PRIORITY", "high")
        monkeypatch.setenv("DEFAULT_SUBTASKS", "4")
        monkeypatch.setenv("TASKPLAN_HOURS_PER_DAY", "7.5")
        config = PlannerConfig.from_env()
        assert config.tasks_file == planner_env["tasks"]
        assert config.default_priority == Priority.HIGH
        assert config.default_subtasks == 4
        assert config.hours_per_day == 7.5

    def test_from_env_reads_dotenv(self, planner_env, tmp_path):
        (tmp_path / ".env").write_text("TASKPLAN_COMPLEXITY_THRESHOLD=7\n")
        try:
            assert PlannerConfig.from_env().complexity_threshold == 7
        finally:
            os.environ.pop("TASKPLAN_COMPLEXITY_THRESHOLD", None)

    def test_from_env_invalid(self, planner_env, monkeypatch):
        monkeypatch.setenv("DEFAULT_SUBTASKS", "0")
        with pytest.raises(ValidationError):
            PlannerConfig.from_env()
