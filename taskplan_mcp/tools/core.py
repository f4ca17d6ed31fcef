"""Core MCP tool definitions: listing, inspecting and updating tasks."""

import json
import logging
from datetime import datetime, timezone
from typing import Any

from mcp.types import ToolAnnotations
from pydantic import ValidationError

from taskplan_mcp.config import PlannerConfig
from taskplan_mcp.enums import FINISHED_STATUSES, ResponseFormat
from taskplan_mcp.exceptions import TaskPlanError, TaskValidationError
from taskplan_mcp.models.inputs import (
    ExpandInput,
    ListTasksInput,
    SetDueDateInput,
    SetHoursInput,
    SetPriorityInput,
    SetStatusInput,
    ShowTaskInput,
)
from taskplan_mcp.models.task import TaskModel
from taskplan_mcp.planning import generate_subtasks
from taskplan_mcp.planning.dependencies import index_tasks, resolve_dependencies
from taskplan_mcp.server import mcp
from taskplan_mcp.store import TaskSnapshot, TaskStore
from taskplan_mcp.tools.planning import _compute_schedule
from taskplan_mcp.utils.formatters import (
    _format_schedule_markdown,
    _format_task_markdown,
    _format_tasks_concise,
    _format_tasks_markdown,
)
from taskplan_mcp.utils.loader import _get_config, _load_snapshot

logger = logging.getLogger(__name__)


def _update_task(
    config: PlannerConfig, task_id: str, changes: dict[str, Any]
) -> tuple[TaskModel, TaskModel, TaskSnapshot]:
    """
    Apply ``changes`` (store field names) to one task and save.

    The updated record is re-validated before anything is written.

    Returns:
        Tuple of (old task, updated task, saved snapshot)

    Raises:
        TaskNotFoundError: if ``task_id`` is not in the store
        StoreIOError: if the store cannot be read or written
    """
    store, snapshot = _load_snapshot(config)
    old, updated = _apply_update(store, snapshot, task_id, changes)
    return old, updated, snapshot


def _apply_update(
    store: TaskStore, snapshot: TaskSnapshot, task_id: str, changes: dict[str, Any]
) -> tuple[TaskModel, TaskModel]:
    old = snapshot.find(task_id)
    try:
        updated = TaskModel.model_validate({**old.to_store_dict(), **changes})
    except ValidationError as e:
        raise TaskValidationError(f"Invalid update for task {task_id} - {e}") from e
    snapshot.replace(updated)
    store.commit(snapshot)
    logger.info(f"Updated task {task_id} fields: {list(changes.keys())}")
    return old, updated


def _with_schedule(message: str, config: PlannerConfig, snapshot: TaskSnapshot, hours_per_day: float | None) -> str:
    """Append a refreshed schedule to ``message``; the task update is already saved."""
    try:
        schedule = _compute_schedule(snapshot.tasks, config, hours_per_day)
    except TaskPlanError as e:
        logger.error(f"Schedule refresh failed after task update: {e}")
        return f"{message}\n\nError: schedule not updated - {e}"
    return f"{message}\n\n{_format_schedule_markdown(schedule)}"


@mcp.tool(
    name="taskplan_list",
    annotations=ToolAnnotations(
        title="List Tasks",
        readOnlyHint=True,
        destructiveHint=False,
        idempotentHint=True,
        openWorldHint=False,
    ),
)
async def taskplan_list(params: ListTasksInput) -> str:
    """
    List tasks in store order, optionally filtered by status.

    Args:
        params: ListTasksInput with optional status and output format

    Returns:
        Task table, concise list or JSON array
    """
    try:
        config = _get_config()
        _, snapshot = _load_snapshot(config)
    except TaskPlanError as e:
        return f"Error: {e}"

    tasks = snapshot.tasks
    if params.status is not None:
        tasks = [t for t in tasks if t.status == params.status]

    if params.response_format == ResponseFormat.JSON:
        return json.dumps({"tasks": [t.to_store_dict() for t in tasks], "count": len(tasks)}, indent=2)

    title = f"status:{params.status.value}" if params.status else None
    if params.response_format == ResponseFormat.CONCISE:
        return _format_tasks_concise(tasks, title)

    return _format_tasks_markdown(tasks, "Tasks" if title is None else f"Tasks ({title})")


@mcp.tool(
    name="taskplan_show",
    annotations=ToolAnnotations(
        title="Show Task",
        readOnlyHint=True,
        destructiveHint=False,
        idempotentHint=True,
        openWorldHint=False,
    ),
)
async def taskplan_show(params: ShowTaskInput) -> str:
    """
    Show one task with the status of each dependency and its subtasks.

    Args:
        params: ShowTaskInput with task_id and output format

    Returns:
        Task details
    """
    try:
        config = _get_config()
        _, snapshot = _load_snapshot(config)
        task = snapshot.find(params.task_id)
    except TaskPlanError as e:
        return f"Error: {e}\nTip: Use taskplan_list to find valid task IDs."

    dependencies = resolve_dependencies(task, index_tasks(snapshot.tasks))

    if params.response_format == ResponseFormat.JSON:
        return json.dumps(
            {
                "task": task.to_store_dict(),
                "dependencies": [d.model_dump(mode="json") for d in dependencies],
                "ready": all(d.satisfied for d in dependencies),
            },
            indent=2,
        )
    return _format_task_markdown(task, dependencies)


@mcp.tool(
    name="taskplan_set_status",
    annotations=ToolAnnotations(
        title="Set Task Status",
        readOnlyHint=False,
        destructiveHint=False,
        idempotentHint=True,
        openWorldHint=False,
    ),
)
async def taskplan_set_status(params: SetStatusInput) -> str:
    """
    Change a task's status.

    Marking a task done or completed records a completedAt timestamp and may
    make dependent tasks ready.

    Args:
        params: SetStatusInput with task_id and status

    Returns:
        Confirmation message with old and new status
    """
    changes: dict[str, Any] = {"status": params.status.value}
    if params.status in FINISHED_STATUSES:
        changes["completedAt"] = datetime.now(timezone.utc).isoformat()

    try:
        config = _get_config()
        old, updated, _ = _update_task(config, params.task_id, changes)
    except TaskPlanError as e:
        return f"Error: {e}"

    return f'Task #{params.task_id} status updated from "{old.status.value}" to "{updated.status.value}".'


@mcp.tool(
    name="taskplan_set_priority",
    annotations=ToolAnnotations(
        title="Set Task Priority",
        readOnlyHint=False,
        destructiveHint=False,
        idempotentHint=True,
        openWorldHint=False,
    ),
)
async def taskplan_set_priority(params: SetPriorityInput) -> str:
    """
    Set a task's priority (critical, high, medium or low).

    Args:
        params: SetPriorityInput with task_id, priority and optional schedule refresh

    Returns:
        Confirmation message, followed by the new schedule when requested

    Examples:
        - Raise priority: params with task_id="5", priority="critical"
        - Raise and reschedule: params with task_id="5", priority="high", update_schedule=True
    """
    try:
        config = _get_config()
        old, updated, snapshot = _update_task(config, params.task_id, {"priority": params.priority.value})
        old_priority = (old.priority or config.default_priority).value
        message = f"Task {params.task_id} priority updated from {old_priority} to {updated.priority.value}."
        if params.update_schedule:
            return _with_schedule(message, config, snapshot, params.hours_per_day)
    except TaskPlanError as e:
        return f"Error: {e}"

    return message


@mcp.tool(
    name="taskplan_set_hours",
    annotations=ToolAnnotations(
        title="Set Estimated Hours",
        readOnlyHint=False,
        destructiveHint=False,
        idempotentHint=True,
        openWorldHint=False,
    ),
)
async def taskplan_set_hours(params: SetHoursInput) -> str:
    """
    Set a task's estimated hours (must be positive).

    Args:
        params: SetHoursInput with task_id, hours and optional schedule refresh

    Returns:
        Confirmation message, followed by the new schedule when requested
    """
    try:
        config = _get_config()
        old, updated, snapshot = _update_task(config, params.task_id, {"estimatedHours": params.hours})
        old_hours = f"{old.estimated_hours:g}" if old.estimated_hours is not None else "unspecified"
        message = f"Task {params.task_id} estimated hours updated from {old_hours} to {updated.estimated_hours:g}."
        if params.update_schedule:
            return _with_schedule(message, config, snapshot, params.hours_per_day)
    except TaskPlanError as e:
        return f"Error: {e}"

    return message


@mcp.tool(
    name="taskplan_set_due_date",
    annotations=ToolAnnotations(
        title="Set Due Date",
        readOnlyHint=False,
        destructiveHint=False,
        idempotentHint=True,
        openWorldHint=False,
    ),
)
async def taskplan_set_due_date(params: SetDueDateInput) -> str:
    """
    Set a task's due date (YYYY-MM-DD).

    Args:
        params: SetDueDateInput with task_id, due_date and optional schedule refresh

    Returns:
        Confirmation message, followed by the new schedule when requested
    """
    try:
        config = _get_config()
        old, updated, snapshot = _update_task(config, params.task_id, {"dueDate": params.due_date})
        old_date = old.due_date.isoformat() if old.due_date else "unspecified"
        message = f"Task {params.task_id} due date updated from {old_date} to {updated.due_date.isoformat()}."
        if params.update_schedule:
            return _with_schedule(message, config, snapshot, params.hours_per_day)
    except TaskPlanError as e:
        return f"Error: {e}"

    return message


@mcp.tool(
    name="taskplan_expand",
    annotations=ToolAnnotations(
        title="Expand Task",
        readOnlyHint=False,
        destructiveHint=True,
        idempotentHint=False,
        openWorldHint=False,
    ),
)
async def taskplan_expand(params: ExpandInput) -> str:
    """
    Break a task into subtasks.

    Subtasks are drawn from templates matched to the task description
    (setup, UI, data, auth, testing, or a general default). Without ``num``
    the count comes from the task's estimated complexity. Existing subtasks
    are only replaced when ``force`` is set.

    Args:
        params: ExpandInput with task_id, optional num and force

    Returns:
        The generated subtasks, or the existing ones when not forced
    """
    try:
        config = _get_config()
        store, snapshot = _load_snapshot(config)
        task = snapshot.find(params.task_id)

        if task.subtasks and not params.force:
            lines = [f"Task #{task.id} already has {len(task.subtasks)} subtasks. Use force=True to regenerate.", ""]
            lines.append("Current subtasks:")
            for sub in task.subtasks:
                lines.append(f"  [{sub.id}] {sub.title} - {sub.status.value}")
            return "\n".join(lines)

        subtasks = generate_subtasks(task, config, params.num)
        _apply_update(
            store,
            snapshot,
            params.task_id,
            {"subtasks": [s.model_dump(mode="json", by_alias=True) for s in subtasks]},
        )
    except TaskPlanError as e:
        return f"Error: {e}"

    lines = [f"Generated {len(subtasks)} subtasks for Task #{task.id}:"]
    for sub in subtasks:
        lines.append(f"  [{sub.id}] {sub.title}")
        lines.append(f"    {sub.description}")
    return "\n".join(lines)
