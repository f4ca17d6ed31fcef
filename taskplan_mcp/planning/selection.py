"""Ready-gated next-task selection."""

from functools import cmp_to_key

from taskplan_mcp.enums import Priority
from taskplan_mcp.models.task import TaskId, TaskModel
from taskplan_mcp.planning.dependencies import ready_set

UNSPECIFIED_RANK = 999

PRIORITY_RANK = {
    Priority.CRITICAL: 0,
    Priority.HIGH: 1,
    Priority.MEDIUM: 2,
    Priority.LOW: 3,
}


def priority_rank(task: TaskModel) -> int:
    """Sort rank of a task's priority label; lower ranks are picked first."""
    if task.priority is None:
        return UNSPECIFIED_RANK
    return PRIORITY_RANK.get(task.priority, UNSPECIFIED_RANK)


def _as_number(task_id: TaskId) -> int | None:
    if isinstance(task_id, int):
        return task_id
    if task_id.isdecimal():
        return int(task_id)
    return None


def compare_ids(a: TaskId, b: TaskId) -> int:
    """Numeric comparison when both ids are integers, otherwise lexical."""
    num_a, num_b = _as_number(a), _as_number(b)
    if num_a is not None and num_b is not None:
        left, right = num_a, num_b
    else:
        left, right = str(a), str(b)
    return (left > right) - (left < right)


def _compare_tasks(a: TaskModel, b: TaskModel) -> int:
    rank_diff = priority_rank(a) - priority_rank(b)
    if rank_diff:
        return rank_diff
    return compare_ids(a.id, b.id)


def order_ready(tasks: list[TaskModel]) -> list[TaskModel]:
    """Sort tasks by priority rank, then identifier."""
    return sorted(tasks, key=cmp_to_key(_compare_tasks))


def select_next(tasks: list[TaskModel]) -> TaskModel | None:
    """
    Pick the task to work on next.

    Only tasks in the ready set are considered. Returns ``None`` when nothing
    is ready; use :func:`~taskplan_mcp.planning.dependencies.diagnose_idle`
    to find out why.
    """
    ready = order_ready(ready_set(tasks))
    return ready[0] if ready else None
