"""Priority scoring for active tasks."""

from datetime import date

from taskplan_mcp.config import PlannerConfig
from taskplan_mcp.enums import Priority, TaskStatus
from taskplan_mcp.models.planning import ScoredTask
from taskplan_mcp.models.task import TaskModel
from taskplan_mcp.planning.dependencies import dependents_count

BASE_SCORE = 50
MAX_SCORE = 100
MIN_SCORE = 0

PRIORITY_BONUS = {
    Priority.CRITICAL: 40,
    Priority.HIGH: 30,
    Priority.MEDIUM: 15,
    Priority.LOW: 5,
}

DEPENDENT_BONUS = 10
PER_DEPENDENT_BONUS = 5
MAX_PER_DEPENDENT_BONUS = 20
QUICK_WIN_HOURS = 2
QUICK_WIN_BONUS = 5
IN_PROGRESS_BONUS = 15


def due_date_bonus(days_until_due: int) -> int:
    """Urgency bonus for a due date ``days_until_due`` days away."""
    if days_until_due < 0:
        return 50
    if days_until_due <= 1:
        return 40
    if days_until_due <= 3:
        return 30
    if days_until_due <= 7:
        return 20
    return 0


def score_task(
    task: TaskModel,
    active_tasks: list[TaskModel],
    config: PlannerConfig,
    today: date,
) -> tuple[int, list[str]]:
    """
    Calculate the priority score for a task and return reasons.

    Args:
        task: Task to score
        active_tasks: All unfinished tasks, used for dependency fan-out
        config: Planner defaults (default priority)
        today: Reference date for due-date urgency

    Returns:
        Tuple of (score clamped to [0, 100], list_of_reasons)
    """
    score = BASE_SCORE
    reasons: list[str] = []

    priority = task.priority or config.default_priority
    score += PRIORITY_BONUS[priority]
    if priority in (Priority.CRITICAL, Priority.HIGH):
        reasons.append(f"{priority.value.capitalize()} priority")

    # Tasks other work waits on
    blocked_count = dependents_count(task, active_tasks)
    if blocked_count > 0:
        score += DEPENDENT_BONUS + min(MAX_PER_DEPENDENT_BONUS, PER_DEPENDENT_BONUS * blocked_count)
        reasons.append(f"Blocks {blocked_count} task(s)")

    if task.estimated_hours is not None and task.estimated_hours <= QUICK_WIN_HOURS:
        score += QUICK_WIN_BONUS
        reasons.append("Quick win")

    if task.due_date is not None:
        days_until_due = (task.due_date - today).days
        score += due_date_bonus(days_until_due)
        if days_until_due < 0:
            reasons.append("Overdue")
        elif days_until_due <= 7:
            reasons.append("Due soon")

    if task.status == TaskStatus.IN_PROGRESS:
        score += IN_PROGRESS_BONUS
        reasons.append("Currently active")

    return max(MIN_SCORE, min(MAX_SCORE, score)), reasons


def priority_score(
    task: TaskModel,
    active_tasks: list[TaskModel],
    config: PlannerConfig,
    today: date,
) -> int:
    """Priority score for ``task`` in [0, 100]."""
    score, _ = score_task(task, active_tasks, config, today)
    return score


def prioritize(tasks: list[TaskModel], config: PlannerConfig, today: date) -> list[ScoredTask]:
    """
    Score every unfinished task and sort by score descending.

    The sort is stable, so equal scores keep the store's order.
    """
    active = [t for t in tasks if not t.is_finished]
    scored: list[ScoredTask] = []
    for task in active:
        score, reasons = score_task(task, active, config, today)
        scored.append(ScoredTask(task=task, score=score, reasons=reasons))
    scored.sort(key=lambda s: s.score, reverse=True)
    return scored
