"""Pytest configuration and fixtures for taskplan-mcp tests."""

import json

import pytest

from taskplan_mcp.config import ENV_FIELDS


@pytest.fixture
def sample_tasks():
    """Raw task records as they appear in the task file."""
    return [
        {
            "id": 1,
            "title": "Set up project",
            "description": "Initialize the repository and tooling",
            "status": "done",
            "priority": "high",
            "dependencies": [],
            "estimatedHours": 1,
        },
        {
            "id": 2,
            "title": "Design data model",
            "description": "Define the database schema",
            "status": "pending",
            "priority": "high",
            "dependencies": [1],
            "estimatedHours": 3,
        },
        {
            "id": 3,
            "title": "Build login page",
            "description": "Login screen with auth provider",
            "status": "pending",
            "priority": "medium",
            "dependencies": [2],
        },
        {
            "id": 4,
            "title": "Write docs",
            "description": "User guide",
            "status": "pending",
            "priority": "low",
            "dependencies": [],
            "dueDate": "2099-01-01",
        },
        {
            "id": 5,
            "title": "Refactor parser",
            "description": "Clean up the parser",
            "status": "in-progress",
            "dependencies": [],
            "estimatedHours": 2,
        },
    ]


@pytest.fixture
def planner_env(tmp_path, monkeypatch):
    """Point the planner at files under ``tmp_path`` and clear other overrides."""
    for var in ENV_FIELDS:
        monkeypatch.delenv(var, raising=False)
    monkeypatch.chdir(tmp_path)

    paths = {
        "tasks": tmp_path / "tasks" / "tasks.json",
        "schedule": tmp_path / "tasks" / "schedule.json",
        "report": tmp_path / "scripts" / "task-complexity-report.json",
    }
    monkeypatch.setenv("TASKPLAN_TASKS_FILE", str(paths["tasks"]))
    monkeypatch.setenv("TASKPLAN_SCHEDULE_FILE", str(paths["schedule"]))
    monkeypatch.setenv("TASKPLAN_COMPLEXITY_REPORT", str(paths["report"]))
    return paths


@pytest.fixture
def task_file(planner_env, sample_tasks):
    """Task file seeded with ``sample_tasks``."""
    path = planner_env["tasks"]
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(sample_tasks, indent=2))
    return path


@pytest.fixture
def stored_tasks(task_file):
    """Callable returning the stored task records keyed by id."""

    def read():
        return {str(t["id"]): t for t in json.loads(task_file.read_text())}

    return read
