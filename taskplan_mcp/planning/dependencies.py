"""Dependency resolution: ready set, blockers and cycle detection."""

import logging

from taskplan_mcp.enums import IdleReason, TaskStatus
from taskplan_mcp.exceptions import CyclicDependencyError
from taskplan_mcp.models.planning import BlockedTaskInfo, BottleneckInfo, IdleDiagnosis
from taskplan_mcp.models.task import ResolvedDependency, TaskModel

logger = logging.getLogger(__name__)

WHITE, GREY, BLACK = 0, 1, 2


def index_tasks(tasks: list[TaskModel]) -> dict[str, TaskModel]:
    """Map each task's identifier (as a string) to the task."""
    return {t.key: t for t in tasks}


def resolve_dependencies(task: TaskModel, index: dict[str, TaskModel]) -> list[ResolvedDependency]:
    """Resolve a task's dependency ids against the loaded tasks."""
    resolved: list[ResolvedDependency] = []
    for dep_id in task.dependencies:
        dep = index.get(str(dep_id))
        if dep is None:
            resolved.append(ResolvedDependency(id=dep_id, found=False))
        else:
            resolved.append(ResolvedDependency(id=dep_id, title=dep.title, status=dep.status))
    return resolved


def unmet_dependencies(task: TaskModel, index: dict[str, TaskModel]) -> list[str]:
    """Dependency ids that are missing or not yet finished."""
    return [str(d.id) for d in resolve_dependencies(task, index) if not d.satisfied]


def ready_set(tasks: list[TaskModel]) -> list[TaskModel]:
    """
    Get pending tasks whose dependencies are all done.

    A dependency on an id that is not in ``tasks`` is unsatisfied. Input
    order is preserved.
    """
    index = index_tasks(tasks)
    return [t for t in tasks if t.status == TaskStatus.PENDING and not unmet_dependencies(t, index)]


def blocked_tasks(tasks: list[TaskModel]) -> list[BlockedTaskInfo]:
    """Get pending tasks held back by at least one unmet dependency."""
    index = index_tasks(tasks)
    blocked: list[BlockedTaskInfo] = []
    for task in tasks:
        if task.status != TaskStatus.PENDING:
            continue
        unmet = unmet_dependencies(task, index)
        if unmet:
            blocked.append(BlockedTaskInfo(task=task, unmet=unmet))
    return blocked


def dependents_count(task: TaskModel, tasks: list[TaskModel]) -> int:
    """Count tasks in ``tasks`` that list ``task`` as a dependency."""
    return sum(1 for t in tasks if task.key in t.dependency_keys)


def bottlenecks(tasks: list[TaskModel]) -> list[BottleneckInfo]:
    """Unfinished tasks that other unfinished tasks depend on, most depended-on first."""
    active = [t for t in tasks if not t.is_finished]
    found = [BottleneckInfo(task=t, blocks_count=dependents_count(t, active)) for t in active]
    found = [b for b in found if b.blocks_count > 0]
    found.sort(key=lambda b: b.blocks_count, reverse=True)
    return found


def find_dependency_cycles(tasks: list[TaskModel]) -> list[list[str]]:
    """
    Find dependency cycles with a depth-first search.

    Nodes are coloured white (unvisited), grey (on the current path) and
    black (fully explored); reaching a grey node closes a cycle. Edges to
    unknown ids are ignored. Each cycle is returned once, as the list of ids
    along the path in dependency order.

    Args:
        tasks: All loaded tasks

    Returns:
        List of cycles, each a list of task ids
    """
    index = index_tasks(tasks)
    colour = {key: WHITE for key in index}
    cycles: list[list[str]] = []

    for root in index:
        if colour[root] != WHITE:
            continue
        path: list[str] = [root]
        colour[root] = GREY
        stack = [iter(index[root].dependency_keys)]
        while stack:
            dep = next(stack[-1], None)
            if dep is None:
                colour[path.pop()] = BLACK
                stack.pop()
                continue
            if dep not in index:
                logger.debug(f"Ignoring unknown dependency {dep} of task {path[-1]}")
                continue
            if colour[dep] == GREY:
                cycles.append(path[path.index(dep) :])
            elif colour[dep] == WHITE:
                colour[dep] = GREY
                path.append(dep)
                stack.append(iter(index[dep].dependency_keys))

    return cycles


def assert_acyclic(tasks: list[TaskModel]) -> None:
    """Raise :class:`CyclicDependencyError` when any dependency cycle exists."""
    cycles = find_dependency_cycles(tasks)
    if cycles:
        raise CyclicDependencyError(cycles)


def diagnose_idle(tasks: list[TaskModel]) -> IdleDiagnosis:
    """
    Explain why the ready set is empty.

    Distinguishes an empty store, a fully finished backlog, a dependency
    deadlock caused by cycles, and tasks that are merely waiting (on
    missing, in-progress or otherwise unfinished prerequisites).
    """
    if not tasks:
        return IdleDiagnosis(reason=IdleReason.NO_TASKS)

    active = [t for t in tasks if not t.is_finished]
    if not active:
        return IdleDiagnosis(reason=IdleReason.ALL_DONE)

    blocked = blocked_tasks(tasks)
    # Only cycles among unfinished tasks are deadlocks
    try:
        assert_acyclic(active)
    except CyclicDependencyError as e:
        return IdleDiagnosis(reason=IdleReason.CYCLIC_DEPENDENCY, cycles=e.cycles, blocked=blocked)

    return IdleDiagnosis(reason=IdleReason.BLOCKED, blocked=blocked)
