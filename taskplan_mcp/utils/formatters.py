"""Formatting utilities for task and planning output."""

from datetime import date

from taskplan_mcp.enums import IdleReason
from taskplan_mcp.models.planning import ComplexityReport, IdleDiagnosis, Schedule, ScheduleBucket
from taskplan_mcp.models.task import ResolvedDependency, TaskModel

STATUS_ICONS = {
    "pending": "⏳",
    "in_progress": "🔄",
    "blocked": "⛔",
    "deferred": "💤",
    "done": "✅",
    "completed": "✅",
}

BUCKET_TITLES = {
    "immediate": "Critical & Immediate",
    "thisWeek": "This Week",
    "upcoming": "Upcoming",
    "backlog": "Backlog",
}


def _format_due_label(due: date, today: date) -> str:
    """Relative due-date label, e.g. "OVERDUE by 2 days" or "Due in 4 days"."""
    days = (due - today).days
    if days < 0:
        return f"OVERDUE by {abs(days)} days"
    if days == 0:
        return "DUE TODAY"
    if days == 1:
        return "DUE TOMORROW"
    return f"Due in {days} days"


def _format_hours(hours: float) -> str:
    return f"{hours:g}h"


def _format_task_concise(task: TaskModel) -> str:
    """
    Format a single task in concise format for token efficiency.

    Output: "#5: Title (high, due:2024-12-31, 3h)"
    """
    title = task.title[:50] if task.title else "Untitled"

    meta = []
    if task.priority:
        meta.append(task.priority.value)
    if task.due_date:
        meta.append(f"due:{task.due_date.isoformat()}")
    if task.estimated_hours is not None:
        meta.append(_format_hours(task.estimated_hours))
    if task.status.value != "pending":
        meta.append(task.status.value)

    if meta:
        return f"#{task.id}: {title} ({', '.join(meta)})"
    return f"#{task.id}: {title}"


def _format_tasks_concise(tasks: list[TaskModel], title: str | None = None) -> str:
    """
    Format a list of tasks in concise format.

    Output:
    2 task(s) | ready
    #1: Task one (high)
    #2: Task two
    """
    if not tasks:
        return "0 tasks"

    header = f"{len(tasks)} task(s)"
    if title:
        header = f"{header} | {title}"
    return "\n".join([header] + [_format_task_concise(t) for t in tasks])


def _format_task_markdown(task: TaskModel, dependencies: list[ResolvedDependency] | None = None) -> str:
    """Format a single task as markdown, with resolved dependencies when given."""
    icon = STATUS_ICONS.get(task.status.value, "")
    title = task.title or "Untitled"
    lines = [f"### {icon} [{task.id}] {title}"]

    details = [f"**Status**: {task.status.value}"]
    if task.priority:
        details.append(f"**Priority**: {task.priority.value.capitalize()}")
    if task.estimated_hours is not None:
        details.append(f"**Estimate**: {_format_hours(task.estimated_hours)}")
    if task.due_date:
        details.append(f"**Due**: {task.due_date.isoformat()}")
    lines.append(" | ".join(details))

    if dependencies:
        rendered = []
        for dep in dependencies:
            if not dep.found:
                rendered.append(f"{dep.id} (missing)")
            else:
                rendered.append(f"{dep.id} ({dep.status.value if dep.status else '?'})")
        lines.append(f"**Dependencies**: {', '.join(rendered)}")
        pending = [d for d in dependencies if not d.satisfied]
        if pending:
            lines.append(f"**Blocked by**: {', '.join(str(d.id) for d in pending)}")
    elif task.dependencies:
        lines.append(f"**Dependencies**: {', '.join(str(d) for d in task.dependencies)}")

    if task.description:
        lines.append("")
        lines.append(task.description)

    if task.details:
        lines.append("")
        lines.append("**Details:**")
        lines.append(task.details)

    if task.subtasks:
        lines.append("")
        lines.append("**Subtasks:**")
        for sub in task.subtasks:
            lines.append(f"  - [{sub.id}] {sub.title} - {sub.status.value}")

    return "\n".join(lines)


def _format_tasks_markdown(tasks: list[TaskModel], title: str = "Tasks") -> str:
    """Format a list of tasks as a markdown table."""
    if not tasks:
        return f"# {title}\n\nNo tasks found."

    lines = [f"# {title}", f"*{len(tasks)} task(s)*", ""]
    lines.append("| ID | Task | Status | Priority | Due | Depends on |")
    lines.append("|----|------|--------|----------|-----|------------|")
    for task in tasks:
        name = task.title[:40] if task.title else ""
        priority = task.priority.value if task.priority else "-"
        due = task.due_date.isoformat() if task.due_date else "-"
        deps = ", ".join(str(d) for d in task.dependencies) or "-"
        lines.append(f"| {task.id} | {name} | {task.status.value} | {priority} | {due} | {deps} |")
    return "\n".join(lines)


def _format_bucket_markdown(name: str, bucket: ScheduleBucket, today: date) -> list[str]:
    lines = [f"### {BUCKET_TITLES[name]} - {bucket.count} task(s), {_format_hours(bucket.estimated_hours)}"]
    lines.append(f"*{bucket.description}*")
    if not bucket.tasks:
        lines.append("(No tasks in this category)")
        return lines

    for entry in bucket.tasks:
        parts = [f"- [{entry.id}] {entry.title} ~{_format_hours(entry.estimated_hours)}"]
        parts.append(f"(score {entry.priority_score}, {entry.priority.value})")
        if entry.due_date:
            parts.append(f"[{_format_due_label(entry.due_date, today)}]")
        lines.append(" ".join(parts))
        if entry.has_dependencies:
            lines.append(f"  Depends on: {', '.join(str(d) for d in entry.dependencies)}")
    return lines


def _format_schedule_markdown(schedule: Schedule) -> str:
    """Format a schedule with one section per horizon."""
    lines = ["# Task Schedule", ""]
    lines.append(f"Generated: {schedule.timestamp.isoformat(timespec='seconds')}")
    lines.append(f"Today: {schedule.today.isoformat()}")
    lines.append(f"Tasks: {schedule.total_tasks} total")
    lines.append(f"Planning with {schedule.hours_per_day:g} productive hours per day")
    lines.append("")

    for name, bucket in schedule.buckets():
        if name == "backlog":
            lines.append(f"### {BUCKET_TITLES[name]}")
            lines.append(f"{bucket.count} tasks ({_format_hours(bucket.estimated_hours)})")
        else:
            lines.extend(_format_bucket_markdown(name, bucket, schedule.today))
        lines.append("")

    return "\n".join(lines).rstrip()


def _format_schedule_concise(schedule: Schedule) -> str:
    """One line per horizon: name, count, hours and task ids."""
    lines = [f"schedule | {schedule.total_tasks} task(s) | {schedule.today.isoformat()}"]
    for name, bucket in schedule.buckets():
        ids = ",".join(str(e.id) for e in bucket.tasks)
        lines.append(f"{name}: {bucket.count} ({_format_hours(bucket.estimated_hours)}) {ids}".rstrip())
    return "\n".join(lines)


def _format_complexity_markdown(report: ComplexityReport) -> str:
    """Format a complexity report: distribution, expansion candidates, full ranking."""
    stats = report.stats
    lines = ["# Task Complexity Report", ""]
    lines.append(f"Generated: {report.timestamp.isoformat(timespec='seconds')}")
    lines.append("")
    lines.append("### Complexity Distribution")
    lines.append(f"- Low Complexity (1-3): {stats.low_complexity} tasks")
    lines.append(f"- Medium Complexity (4-7): {stats.medium_complexity} tasks")
    lines.append(f"- High Complexity (8-10): {stats.high_complexity} tasks")
    lines.append(f"- Average Complexity: {stats.average_complexity:.1f}")
    lines.append("")

    lines.append("### Tasks Needing Expansion")
    candidates = [e for e in report.tasks if e.recommended.needs_expansion]
    if not candidates:
        lines.append("No tasks found that need expansion.")
    for entry in candidates:
        lines.append(f"- Task {entry.task_id}: {entry.title}")
        lines.append(f"  Complexity: {entry.complexity}/10")
        lines.append(f"  Recommended Subtasks: {entry.recommended.subtask_count}")
        lines.append(f"  Run: {entry.recommended.expansion_command}")
    lines.append("")

    lines.append("### All Tasks by Complexity")
    if not report.tasks:
        lines.append("(None)")
    for entry in report.tasks:
        lines.append(f"- Task {entry.task_id}: {entry.complexity}/10 - {entry.title}")

    return "\n".join(lines)


def _format_idle_markdown(diagnosis: IdleDiagnosis) -> str:
    """Explain an empty ready set and suggest what to do next."""
    if diagnosis.reason == IdleReason.NO_TASKS:
        return "# Next Task\n\nNo tasks found. Add tasks to the task file to get started."

    if diagnosis.reason == IdleReason.ALL_DONE:
        return "# Next Task\n\nNo available tasks: every task is done. Nothing left to work on!"

    lines = ["# Next Task", ""]
    if diagnosis.reason == IdleReason.CYCLIC_DEPENDENCY:
        lines.append("No available tasks: dependencies form a cycle, so these tasks can never start.")
        for cycle in diagnosis.cycles:
            lines.append(f"- Cycle: {' -> '.join(cycle + cycle[:1])}")
        lines.append("")
        lines.append("Tip: Remove one dependency from each cycle, then run taskplan_next again.")
        return "\n".join(lines)

    lines.append("No available tasks: remaining tasks are in progress or waiting on unfinished dependencies.")
    for info in diagnosis.blocked:
        lines.append(f"- #{info.task.id} {info.task.title} waits on: {', '.join(info.unmet)}")
    lines.append("")
    lines.append("Tip: Finish in-progress work or use taskplan_dependencies to inspect what is blocking.")
    return "\n".join(lines)
