"""Tests for the MCP tool functions."""

import json

import pytest

from taskplan_mcp import (
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


def write_tasks(path, tasks):
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(tasks))


# ============================================================================
# Planning Tool Tests
# ============================================================================


class TestTaskplanNext:
    """Tests for the taskplan_next tool."""

    @pytest.mark.asyncio
    async def test_next_markdown(self, task_file):
        result = await taskplan_next(NextInput())
        assert "# Next Task" in result
        assert "[2] Design data model" in result
        assert "**Dependencies**: 1 (done)" in result
        assert 'taskplan_set_status(task_id="2", status="in_progress")' in result

    @pytest.mark.asyncio
    async def test_next_json(self, task_file):
        result = await taskplan_next(NextInput(response_format="json"))
        data = json.loads(result)
        assert data["task"]["id"] == 2
        assert data["dependencies"][0]["id"] == 1
        assert data["dependencies"][0]["status"] == "done"
        assert data["ready_count"] == 2

    @pytest.mark.asyncio
    async def test_next_concise(self, task_file):
        result = await taskplan_next(NextInput(response_format="concise"))
        assert result == "#2: Design data model (high, 3h)"

    @pytest.mark.asyncio
    async def test_next_no_tasks(self, planner_env):
        result = await taskplan_next(NextInput())
        assert "No tasks found" in result

        data = json.loads(await taskplan_next(NextInput(response_format="json")))
        assert data["task"] is None
        assert data["diagnosis"]["reason"] == "no_tasks"

    @pytest.mark.asyncio
    async def test_next_all_done(self, planner_env):
        write_tasks(planner_env["tasks"], [{"id": 1, "title": "Only", "status": "done"}])
        result = await taskplan_next(NextInput())
        assert "every task is done" in result

    @pytest.mark.asyncio
    async def test_next_cycle(self, planner_env):
        write_tasks(
            planner_env["tasks"],
            [{"id": 1, "title": "A", "dependencies": [2]}, {"id": 2, "title": "B", "dependencies": [1]}],
        )
        assert await taskplan_next(NextInput(response_format="concise")) == "no available tasks (cyclic_dependency)"
        result = await taskplan_next(NextInput())
        assert "dependencies form a cycle" in result
        assert "- Cycle: 1 -> 2 -> 1" in result

    @pytest.mark.asyncio
    async def test_next_waiting(self, planner_env):
        write_tasks(
            planner_env["tasks"],
            [
                {"id": 1, "title": "Running", "status": "in_progress"},
                {"id": 2, "title": "Waiting", "dependencies": [1]},
            ],
        )
        result = await taskplan_next(NextInput())
        assert "remaining tasks are in progress or waiting" in result
        assert "#2 Waiting waits on: 1" in result

    @pytest.mark.asyncio
    async def test_next_malformed_file(self, planner_env):
        planner_env["tasks"].parent.mkdir(parents=True)
        planner_env["tasks"].write_text("not json")
        result = await taskplan_next(NextInput())
        assert result.startswith("Error: Failed to parse task file")

    @pytest.mark.asyncio
    async def test_next_undecodable_file(self, planner_env):
        planner_env["tasks"].parent.mkdir(parents=True)
        planner_env["tasks"].write_bytes(b'[{"id": 1, "title": "\xff\xfe"}]')
        result = await taskplan_next(NextInput())
        assert result.startswith("Error: Failed to parse task file")

    @pytest.mark.asyncio
    async def test_invalid_configuration(self, task_file, monkeypatch):
        monkeypatch.setenv("DEFAULT_PRIORITY", "urgent")
        result = await taskplan_next(NextInput())
        assert result.startswith("Error: Invalid configuration")


class TestTaskplanReady:
    """Tests for the taskplan_ready tool."""

    @pytest.mark.asyncio
    async def test_ready_json(self, task_file):
        data = json.loads(await taskplan_ready(ReadyInput(response_format="json")))
        assert [t["id"] for t in data["tasks"]] == [2, 4]
        assert data["total_ready"] == 2
        assert data["total_tasks"] == 5

    @pytest.mark.asyncio
    async def test_ready_limit(self, task_file):
        data = json.loads(await taskplan_ready(ReadyInput(limit=1, response_format="json")))
        assert data["count"] == 1
        assert data["total_ready"] == 2

    @pytest.mark.asyncio
    async def test_ready_markdown(self, task_file):
        result = await taskplan_ready(ReadyInput())
        assert "# Ready to Work (2 tasks)" in result
        assert "| 4 | Write docs | low | - | 2099-01-01 |" in result

    @pytest.mark.asyncio
    async def test_ready_empty(self, planner_env):
        result = await taskplan_ready(ReadyInput())
        assert "No unblocked tasks found" in result
        assert await taskplan_ready(ReadyInput(response_format="concise")) == "0 tasks"


class TestTaskplanSchedule:
    """Tests for the taskplan_schedule tool."""

    @pytest.mark.asyncio
    async def test_schedule_writes_artifact(self, task_file, planner_env):
        before = task_file.read_text()
        result = await taskplan_schedule(ScheduleInput(response_format="json"))
        data = json.loads(result)

        assert data["totalTasks"] == 4
        assert [t["id"] for t in data["immediate"]["tasks"]] == [2, 5]
        assert data["immediate"]["estimatedHours"] == 5.0
        assert [t["id"] for t in data["thisWeek"]["tasks"]] == [3]
        assert [t["id"] for t in data["upcoming"]["tasks"]] == [4]
        assert data["backlog"]["count"] == 0

        saved = json.loads(planner_env["schedule"].read_text())
        assert saved == data
        assert task_file.read_text() == before

    @pytest.mark.asyncio
    async def test_schedule_markdown(self, task_file):
        result = await taskplan_schedule(ScheduleInput(hours_per_day=8))
        assert "# Task Schedule" in result
        assert "Planning with 8 productive hours per day" in result
        assert "### Critical & Immediate - 2 task(s), 5h" in result
        assert "- [2] Design data model ~3h (score 95, high)" in result
        assert "- [5] Refactor parser ~2h (score 85, medium)" in result

    @pytest.mark.asyncio
    async def test_schedule_custom_output(self, task_file, tmp_path):
        output = tmp_path / "custom" / "plan.json"
        result = await taskplan_schedule(ScheduleInput(output=str(output), response_format="concise"))
        assert result.splitlines()[1] == "immediate: 2 (5h) 2,5"
        assert json.loads(output.read_text())["totalTasks"] == 4

    @pytest.mark.asyncio
    async def test_schedule_empty(self, planner_env):
        result = await taskplan_schedule(ScheduleInput())
        assert "No tasks found to schedule" in result
        assert not planner_env["schedule"].exists()


class TestTaskplanComplexity:
    """Tests for the complexity tools."""

    @pytest.mark.asyncio
    async def test_analyze_writes_report(self, task_file, planner_env):
        result = await taskplan_analyze_complexity(ComplexityInput())
        assert f"Report saved to {planner_env['report']}" in result
        assert "### Tasks Needing Expansion" in result
        assert 'Run: taskplan_expand(task_id="2", num=3)' in result

        saved = json.loads(planner_env["report"].read_text())
        assert saved["stats"]["activeTasks"] == 4
        assert saved["tasks"][0]["taskId"] == 2
        assert saved["tasks"][0]["complexity"] == 6
        assert saved["tasks"][0]["recommended"]["needsExpansion"] is True

    @pytest.mark.asyncio
    async def test_analyze_threshold(self, task_file):
        result = await taskplan_analyze_complexity(ComplexityInput(threshold=7))
        assert "No tasks found that need expansion." in result

    @pytest.mark.asyncio
    async def test_analyze_empty(self, planner_env):
        result = await taskplan_analyze_complexity(ComplexityInput())
        assert "No tasks found to analyze." in result

    @pytest.mark.asyncio
    async def test_report_missing(self, planner_env):
        result = await taskplan_complexity_report(ComplexityReportInput())
        assert "No complexity report found" in result
        assert "taskplan_analyze_complexity" in result

    @pytest.mark.asyncio
    async def test_report_after_analysis(self, task_file):
        await taskplan_analyze_complexity(ComplexityInput())
        result = await taskplan_complexity_report(ComplexityReportInput())
        assert "# Task Complexity Report" in result
        assert "- Task 2: 6/10 - Design data model" in result
        assert "- Medium Complexity (4-7): 4 tasks" in result

    @pytest.mark.asyncio
    async def test_report_invalid(self, planner_env):
        planner_env["report"].parent.mkdir(parents=True)
        planner_env["report"].write_text(json.dumps({"tasks": "nope"}))
        result = await taskplan_complexity_report(ComplexityReportInput())
        assert result.startswith("Error: Invalid complexity report")


class TestTaskplanDependencies:
    """Tests for the taskplan_dependencies tool."""

    @pytest.mark.asyncio
    async def test_dependencies_json(self, task_file):
        data = json.loads(await taskplan_dependencies(DependenciesInput(response_format="json")))
        assert data["cycles"] == []
        assert data["bottlenecks"] == [{"id": 2, "title": "Design data model", "blocks_count": 1}]
        assert data["blocked"] == [{"id": 3, "unmet": ["2"]}]
        assert data["ready"] == [2, 4]
        assert data["stats"]["blocked_count"] == 1

    @pytest.mark.asyncio
    async def test_dependencies_markdown(self, task_file):
        result = await taskplan_dependencies(DependenciesInput())
        assert "(No cycles)" in result
        assert "- #2 blocks 1 downstream task(s)" in result
        assert "- #3: Build login page (waiting on 2)" in result
        assert "#2, #4" in result


# ============================================================================
# Core Tool Tests
# ============================================================================


class TestTaskplanList:
    """Tests for the taskplan_list tool."""

    @pytest.mark.asyncio
    async def test_list_markdown(self, task_file):
        result = await taskplan_list(ListTasksInput())
        assert "# Tasks" in result
        assert "*5 task(s)*" in result
        assert "| 3 | Build login page | pending | medium | - | 2 |" in result

    @pytest.mark.asyncio
    async def test_list_status_filter(self, task_file):
        data = json.loads(await taskplan_list(ListTasksInput(status="pending", response_format="json")))
        assert data["count"] == 3
        data = json.loads(await taskplan_list(ListTasksInput(status="in_progress", response_format="json")))
        assert [t["id"] for t in data["tasks"]] == [5]

    @pytest.mark.asyncio
    async def test_list_concise(self, task_file):
        result = await taskplan_list(ListTasksInput(response_format="concise"))
        assert result.splitlines()[0] == "5 task(s)"
        assert "#1: Set up project (high, 1h, done)" in result


class TestTaskplanShow:
    """Tests for the taskplan_show tool."""

    @pytest.mark.asyncio
    async def test_show_blocked_task(self, task_file):
        result = await taskplan_show(ShowTaskInput(task_id="3"))
        assert "[3] Build login page" in result
        assert "**Dependencies**: 2 (pending)" in result
        assert "**Blocked by**: 2" in result

    @pytest.mark.asyncio
    async def test_show_json(self, task_file):
        data = json.loads(await taskplan_show(ShowTaskInput(task_id="2", response_format="json")))
        assert data["task"]["title"] == "Design data model"
        assert data["ready"] is True

    @pytest.mark.asyncio
    async def test_show_missing(self, task_file):
        result = await taskplan_show(ShowTaskInput(task_id="99"))
        assert result.startswith("Error: Task with ID 99 not found.")
        assert "taskplan_list" in result


class TestTaskplanUpdates:
    """Tests for the update tools."""

    @pytest.mark.asyncio
    async def test_set_status_done_unblocks_dependents(self, task_file, stored_tasks):
        result = await taskplan_set_status(SetStatusInput(task_id="2", status="done"))
        assert result == 'Task #2 status updated from "pending" to "done".'

        stored = stored_tasks()["2"]
        assert stored["status"] == "done"
        assert "completedAt" in stored

        assert await taskplan_next(NextInput(response_format="concise")) == "#3: Build login page (medium)"

    @pytest.mark.asyncio
    async def test_set_status_missing(self, task_file):
        result = await taskplan_set_status(SetStatusInput(task_id="99", status="done"))
        assert result == "Error: Task with ID 99 not found."

    @pytest.mark.asyncio
    async def test_set_status_preserves_other_tasks(self, task_file, stored_tasks):
        await taskplan_set_status(SetStatusInput(task_id="4", status="deferred"))
        stored = stored_tasks()
        assert list(stored) == ["1", "2", "3", "4", "5"]
        assert stored["5"]["status"] == "in_progress"
        assert stored["4"]["dueDate"] == "2099-01-01"

    @pytest.mark.asyncio
    async def test_set_priority(self, task_file, stored_tasks):
        result = await taskplan_set_priority(SetPriorityInput(task_id="5", priority="critical"))
        assert result == "Task 5 priority updated from medium to critical."
        assert stored_tasks()["5"]["priority"] == "critical"

    @pytest.mark.asyncio
    async def test_set_priority_with_schedule(self, task_file, planner_env):
        result = await taskplan_set_priority(
            SetPriorityInput(task_id="4", priority="high", update_schedule=True, hours_per_day=4)
        )
        assert result.startswith("Task 4 priority updated from low to high.")
        assert "# Task Schedule" in result
        assert json.loads(planner_env["schedule"].read_text())["hoursPerDay"] == 4.0

    @pytest.mark.asyncio
    async def test_schedule_failure_keeps_update(self, task_file, stored_tasks, monkeypatch):
        monkeypatch.setenv("TASKPLAN_SCHEDULE_FILE", str(task_file / "schedule.json"))
        result = await taskplan_set_hours(SetHoursInput(task_id="3", hours=4, update_schedule=True))
        assert result.startswith("Task 3 estimated hours updated from unspecified to 4.")
        assert "Error: schedule not updated" in result
        assert stored_tasks()["3"]["estimatedHours"] == 4

    @pytest.mark.asyncio
    async def test_set_hours(self, task_file, stored_tasks):
        result = await taskplan_set_hours(SetHoursInput(task_id="3", hours=4.5))
        assert result == "Task 3 estimated hours updated from unspecified to 4.5."
        result = await taskplan_set_hours(SetHoursInput(task_id="2", hours=1.5))
        assert result == "Task 2 estimated hours updated from 3 to 1.5."
        assert stored_tasks()["3"]["estimatedHours"] == 4.5

    @pytest.mark.asyncio
    async def test_set_due_date(self, task_file, stored_tasks):
        result = await taskplan_set_due_date(SetDueDateInput(task_id="2", due_date="2099-12-31"))
        assert result == "Task 2 due date updated from unspecified to 2099-12-31."
        assert stored_tasks()["2"]["dueDate"] == "2099-12-31"

    @pytest.mark.asyncio
    async def test_update_missing_file(self, planner_env):
        result = await taskplan_set_hours(SetHoursInput(task_id="1", hours=2))
        assert result == "Error: Task with ID 1 not found."
        assert not planner_env["tasks"].exists()


class TestTaskplanExpand:
    """Tests for the taskplan_expand tool."""

    @pytest.mark.asyncio
    async def test_expand_uses_recommendation(self, task_file, stored_tasks):
        result = await taskplan_expand(ExpandInput(task_id="2"))
        assert result.startswith("Generated 3 subtasks for Task #2:")
        assert "[2.1] Schema Design data model" in result

        subtasks = stored_tasks()["2"]["subtasks"]
        assert [s["id"] for s in subtasks] == ["2.1", "2.2", "2.3"]
        assert subtasks[0]["status"] == "pending"

    @pytest.mark.asyncio
    async def test_expand_refuses_without_force(self, task_file, stored_tasks):
        await taskplan_expand(ExpandInput(task_id="2"))
        result = await taskplan_expand(ExpandInput(task_id="2", num=2))
        assert "already has 3 subtasks" in result
        assert len(stored_tasks()["2"]["subtasks"]) == 3

        result = await taskplan_expand(ExpandInput(task_id="2", num=2, force=True))
        assert result.startswith("Generated 2 subtasks")
        assert len(stored_tasks()["2"]["subtasks"]) == 2

    @pytest.mark.asyncio
    async def test_expand_missing(self, task_file):
        result = await taskplan_expand(ExpandInput(task_id="42"))
        assert result == "Error: Task with ID 42 not found."
