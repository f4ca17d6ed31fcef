"""Planning MCP tools: next task, ready set, schedule and complexity."""

import json
import logging
from datetime import date
from pathlib import Path

from mcp.types import ToolAnnotations

from taskplan_mcp.config import PlannerConfig
from taskplan_mcp.enums import ResponseFormat
from taskplan_mcp.exceptions import TaskPlanError
from taskplan_mcp.models.inputs import (
    ComplexityInput,
    ComplexityReportInput,
    DependenciesInput,
    NextInput,
    ReadyInput,
    ScheduleInput,
)
from taskplan_mcp.models.planning import Schedule
from taskplan_mcp.models.task import TaskModel
from taskplan_mcp.planning import (
    analyze_complexity,
    blocked_tasks,
    bottlenecks,
    build_schedule,
    diagnose_idle,
    find_dependency_cycles,
    order_ready,
    prioritize,
    ready_set,
    select_next,
)
from taskplan_mcp.planning.dependencies import index_tasks, resolve_dependencies
from taskplan_mcp.server import mcp
from taskplan_mcp.store import write_artifact
from taskplan_mcp.utils.formatters import (
    _format_complexity_markdown,
    _format_idle_markdown,
    _format_schedule_concise,
    _format_schedule_markdown,
    _format_task_concise,
    _format_task_markdown,
    _format_tasks_concise,
)
from taskplan_mcp.utils.loader import _get_config, _load_snapshot, _read_complexity_report

logger = logging.getLogger(__name__)

# ============================================================================
# Planning Helper Functions
# ============================================================================


def _compute_schedule(
    tasks: list[TaskModel],
    config: PlannerConfig,
    hours_per_day: float | None = None,
    output: Path | None = None,
) -> Schedule:
    """Score, bucket and persist a schedule for ``tasks``."""
    today = date.today()
    schedule = build_schedule(prioritize(tasks, config, today), config, hours_per_day=hours_per_day, today=today)
    write_artifact(output or config.schedule_file, schedule)
    return schedule


def _render_schedule(schedule: Schedule, response_format: ResponseFormat) -> str:
    if response_format == ResponseFormat.JSON:
        return json.dumps(schedule.model_dump(mode="json", by_alias=True), indent=2)
    if response_format == ResponseFormat.CONCISE:
        return _format_schedule_concise(schedule)
    return _format_schedule_markdown(schedule)


# ============================================================================
# Planning Tool Definitions
# ============================================================================


@mcp.tool(
    name="taskplan_next",
    annotations=ToolAnnotations(
        title="Next Task",
        readOnlyHint=True,
        destructiveHint=False,
        idempotentHint=True,
        openWorldHint=False,
    ),
)
async def taskplan_next(params: NextInput) -> str:
    """
    Show the single task to work on next.

    USE THIS WHEN:
    - User asks "what should I work on?" or "what's next?"
    - Starting a work session and need one actionable task

    DO NOT USE WHEN:
    - You want all unblocked tasks → use taskplan_ready
    - You want the whole backlog split into horizons → use taskplan_schedule

    Only pending tasks whose dependencies are all done are considered. They
    are ordered by priority (critical, high, medium, low, unspecified) and
    then by task ID. When nothing is ready the response explains whether all
    work is done, tasks are waiting, or dependencies form a cycle.

    Args:
        params: NextInput with output format

    Returns:
        The next task with its dependencies and suggested follow-up tools
    """
    try:
        config = _get_config()
        _, snapshot = _load_snapshot(config)
    except TaskPlanError as e:
        return f"Error: {e}"

    tasks = snapshot.tasks
    task = select_next(tasks)

    if task is None:
        diagnosis = diagnose_idle(tasks)
        logger.info(f"No ready task: {diagnosis.reason.value}")
        if params.response_format == ResponseFormat.JSON:
            return json.dumps({"task": None, "diagnosis": diagnosis.model_dump(mode="json")}, indent=2)
        if params.response_format == ResponseFormat.CONCISE:
            return f"no available tasks ({diagnosis.reason.value})"
        return _format_idle_markdown(diagnosis)

    dependencies = resolve_dependencies(task, index_tasks(tasks))

    if params.response_format == ResponseFormat.JSON:
        return json.dumps(
            {
                "task": task.to_store_dict(),
                "dependencies": [d.model_dump(mode="json") for d in dependencies],
                "ready_count": len(ready_set(tasks)),
            },
            indent=2,
        )

    if params.response_format == ResponseFormat.CONCISE:
        return _format_task_concise(task)

    lines = ["# Next Task", "", _format_task_markdown(task, dependencies), ""]
    lines.append("### Suggested")
    lines.append(f'- Start working: taskplan_set_status(task_id="{task.id}", status="in_progress")')
    lines.append(f'- Mark as completed: taskplan_set_status(task_id="{task.id}", status="done")')
    if not task.subtasks:
        lines.append(f'- Expand into subtasks: taskplan_expand(task_id="{task.id}")')
    return "\n".join(lines)


@mcp.tool(
    name="taskplan_ready",
    annotations=ToolAnnotations(
        title="Ready Tasks",
        readOnlyHint=True,
        destructiveHint=False,
        idempotentHint=True,
        openWorldHint=False,
    ),
)
async def taskplan_ready(params: ReadyInput) -> str:
    """
    List tasks that can be started immediately (all dependencies done).

    USE THIS WHEN:
    - You want to see every unblocked, actionable task
    - Answering "what can I actually work on right now?"

    DO NOT USE WHEN:
    - You only need the single best task → use taskplan_next
    - You want blocked tasks and cycles → use taskplan_dependencies

    Args:
        params: ReadyInput with limit and output format

    Returns:
        Ready tasks in the same order taskplan_next picks from
    """
    try:
        config = _get_config()
        _, snapshot = _load_snapshot(config)
    except TaskPlanError as e:
        return f"Error: {e}"

    ready = order_ready(ready_set(snapshot.tasks))
    total_ready = len(ready)
    ready = ready[: params.limit]

    if params.response_format == ResponseFormat.JSON:
        return json.dumps(
            {
                "tasks": [t.to_store_dict() for t in ready],
                "count": len(ready),
                "total_ready": total_ready,
                "total_tasks": len(snapshot.tasks),
            },
            indent=2,
        )

    if params.response_format == ResponseFormat.CONCISE:
        return _format_tasks_concise(ready, "ready")

    if not ready:
        return "# Ready to Work\n\nNo unblocked tasks found. Use taskplan_next to see why."

    lines = [f"# Ready to Work ({len(ready)} tasks)", ""]
    lines.append("| ID | Task | Priority | Estimate | Due |")
    lines.append("|----|------|----------|----------|-----|")
    for task in ready:
        title = task.title[:40] if task.title else ""
        priority = task.priority.value if task.priority else "-"
        hours = f"{task.estimated_hours:g}h" if task.estimated_hours is not None else "-"
        due = task.due_date.isoformat() if task.due_date else "-"
        lines.append(f"| {task.id} | {title} | {priority} | {hours} | {due} |")
    return "\n".join(lines)


@mcp.tool(
    name="taskplan_schedule",
    annotations=ToolAnnotations(
        title="Schedule Tasks",
        readOnlyHint=False,
        destructiveHint=False,
        idempotentHint=True,
        openWorldHint=False,
    ),
)
async def taskplan_schedule(params: ScheduleInput) -> str:
    """
    Score every open task and split the backlog into planning horizons.

    USE THIS WHEN:
    - Planning the week or reviewing the whole backlog
    - You need hour totals per horizon

    HORIZONS (by priority score 0-100):
    - immediate (>= 80): do these ASAP
    - thisWeek (60-79): complete this week
    - upcoming (40-59): tackle when immediate tasks are done
    - backlog (< 40): consider after higher priorities

    The score combines priority, how many tasks depend on it, due date
    proximity, small estimates and in-progress status. The schedule is saved
    to the schedule file; the task file is not modified.

    Args:
        params: ScheduleInput with hours_per_day, output path and format

    Returns:
        The schedule with per-horizon counts, hours and tasks
    """
    try:
        config = _get_config()
        _, snapshot = _load_snapshot(config)
        if not snapshot.tasks:
            return "# Task Schedule\n\nNo tasks found to schedule. Add tasks to the task file first."
        output = Path(params.output) if params.output else None
        schedule = _compute_schedule(snapshot.tasks, config, params.hours_per_day, output)
    except TaskPlanError as e:
        return f"Error: {e}"

    return _render_schedule(schedule, params.response_format)


@mcp.tool(
    name="taskplan_analyze_complexity",
    annotations=ToolAnnotations(
        title="Analyze Complexity",
        readOnlyHint=False,
        destructiveHint=False,
        idempotentHint=True,
        openWorldHint=False,
    ),
)
async def taskplan_analyze_complexity(params: ComplexityInput) -> str:
    """
    Estimate complexity (1-10) for every open task and save a report.

    USE THIS WHEN:
    - Deciding which tasks should be broken into subtasks
    - Getting a recommended subtask count before taskplan_expand

    DO NOT USE WHEN:
    - A report already exists and you only want to read it → use taskplan_complexity_report

    Args:
        params: ComplexityInput with threshold, output path and format

    Returns:
        Complexity distribution and tasks needing expansion
    """
    try:
        config = _get_config()
        _, snapshot = _load_snapshot(config)
        if not snapshot.tasks:
            return "# Task Complexity Report\n\nNo tasks found to analyze."
        report = analyze_complexity(snapshot.tasks, config, params.threshold)
        output = Path(params.output) if params.output else config.complexity_report_file
        write_artifact(output, report)
    except TaskPlanError as e:
        return f"Error: {e}"

    if params.response_format == ResponseFormat.JSON:
        return json.dumps(report.model_dump(mode="json", by_alias=True), indent=2)

    summary = (
        f"Complexity analysis complete. Report saved to {output}\n"
        f"Found {report.stats.high_complexity} high complexity task(s).\n\n"
    )
    return summary + _format_complexity_markdown(report)


@mcp.tool(
    name="taskplan_complexity_report",
    annotations=ToolAnnotations(
        title="Complexity Report",
        readOnlyHint=True,
        destructiveHint=False,
        idempotentHint=True,
        openWorldHint=False,
    ),
)
async def taskplan_complexity_report(params: ComplexityReportInput) -> str:
    """
    Display a previously saved complexity report.

    Args:
        params: ComplexityReportInput with optional report path

    Returns:
        Formatted report, or guidance to run taskplan_analyze_complexity
    """
    try:
        config = _get_config()
        path = Path(params.file) if params.file else config.complexity_report_file
        report = _read_complexity_report(path)
    except TaskPlanError as e:
        return f"Error: {e}"

    if report is None:
        return (
            f"No complexity report found at {path}.\n"
            f"Tip: Run taskplan_analyze_complexity to generate a report."
        )
    return _format_complexity_markdown(report)


@mcp.tool(
    name="taskplan_dependencies",
    annotations=ToolAnnotations(
        title="Task Dependencies",
        readOnlyHint=True,
        destructiveHint=False,
        idempotentHint=True,
        openWorldHint=False,
    ),
)
async def taskplan_dependencies(params: DependenciesInput) -> str:
    """
    Analyze dependency relationships: cycles, blocked tasks and bottlenecks.

    USE THIS WHEN:
    - taskplan_next reports no available tasks and you need to know why
    - Finding tasks that many others wait on

    Args:
        params: DependenciesInput with per-section limit and format

    Returns:
        Dependency overview
    """
    try:
        config = _get_config()
        _, snapshot = _load_snapshot(config)
    except TaskPlanError as e:
        return f"Error: {e}"

    tasks = snapshot.tasks
    cycles = find_dependency_cycles(tasks)
    blocked = blocked_tasks(tasks)
    hotspots = bottlenecks(tasks)
    ready = order_ready(ready_set(tasks))

    if params.response_format == ResponseFormat.JSON:
        return json.dumps(
            {
                "cycles": cycles,
                "bottlenecks": [
                    {"id": b.task.id, "title": b.task.title, "blocks_count": b.blocks_count}
                    for b in hotspots[: params.limit]
                ],
                "blocked": [{"id": b.task.id, "unmet": b.unmet} for b in blocked[: params.limit]],
                "ready": [t.id for t in ready[: params.limit]],
                "stats": {
                    "total_tasks": len(tasks),
                    "blocked_count": len(blocked),
                    "ready_count": len(ready),
                    "cycle_count": len(cycles),
                },
            },
            indent=2,
        )

    lines = ["# Dependency Overview", ""]

    lines.append("### Cycles")
    if cycles:
        for cycle in cycles:
            lines.append(f"- {' -> '.join(cycle + cycle[:1])}")
    else:
        lines.append("(No cycles)")
    lines.append("")

    lines.append("### Critical Bottlenecks")
    if hotspots:
        for b in hotspots[: params.limit]:
            lines.append(f"- #{b.task.id} blocks {b.blocks_count} downstream task(s)")
    else:
        lines.append("(No bottlenecks)")
    lines.append("")

    lines.append(f"### Blocked Tasks ({len(blocked)} cannot start)")
    if blocked:
        for b in blocked[: params.limit]:
            title = b.task.title[:40] if b.task.title else ""
            lines.append(f"- #{b.task.id}: {title} (waiting on {', '.join(b.unmet)})")
    else:
        lines.append("(None)")
    lines.append("")

    lines.append(f"### Ready to Work ({len(ready)} unblocked)")
    if ready:
        lines.append(", ".join(f"#{t.id}" for t in ready[: params.limit]))
    else:
        lines.append("(None)")

    return "\n".join(lines)
