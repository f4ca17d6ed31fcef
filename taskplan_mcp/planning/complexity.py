"""Heuristic task complexity and subtask recommendations."""

from datetime import datetime, timezone

from taskplan_mcp.config import PlannerConfig
from taskplan_mcp.enums import FINISHED_STATUSES, Priority
from taskplan_mcp.models.planning import (
    ComplexityEntry,
    ComplexityRecommendation,
    ComplexityReport,
    ComplexityStats,
)
from taskplan_mcp.models.task import TaskModel

MIN_COMPLEXITY = 1
MAX_COMPLEXITY = 10
BASE_COMPLEXITY = 5

# (length or count above which a point is added) per attribute
DESCRIPTION_STEPS = (500, 1000)
DETAILS_STEPS = (1000, 2000)
DEPENDENCY_STEPS = (2, 5)

LOW_COMPLEXITY_MAX = 3
MEDIUM_COMPLEXITY_MAX = 7

SIMPLE_PROMPT = "Break down this simple task into clear steps, focusing on implementation details."
MODERATE_PROMPT = (
    "Divide this moderately complex task into logical components, considering both implementation and testing."
)
COMPLEX_PROMPT = (
    "Break down this highly complex task into manageable subtasks, addressing technical challenges, "
    "edge cases, and thorough testing."
)


def _steps_exceeded(value: int, steps: tuple[int, ...]) -> int:
    return sum(1 for step in steps if value > step)


def estimate_complexity(task: TaskModel) -> int:
    """Complexity of ``task`` on a 1-10 scale."""
    complexity = BASE_COMPLEXITY
    complexity += _steps_exceeded(len(task.description or ""), DESCRIPTION_STEPS)
    complexity += _steps_exceeded(len(task.details or ""), DETAILS_STEPS)
    complexity += _steps_exceeded(len(task.dependencies), DEPENDENCY_STEPS)
    if task.priority == Priority.HIGH:
        complexity += 1
    return max(MIN_COMPLEXITY, min(MAX_COMPLEXITY, complexity))


def recommended_subtask_count(complexity: int, base: int = 3) -> int:
    """Number of subtasks to split a task of the given complexity into."""
    if complexity <= 3:
        return max(1, base - 1)
    if complexity <= 6:
        return base
    if complexity <= 8:
        return base + 1
    return base + 2


def expansion_prompt(complexity: int) -> str:
    """Guidance for breaking down a task of the given complexity."""
    if complexity <= LOW_COMPLEXITY_MAX:
        return SIMPLE_PROMPT
    if complexity <= MEDIUM_COMPLEXITY_MAX:
        return MODERATE_PROMPT
    return COMPLEX_PROMPT


def needs_expansion(complexity: int, threshold: int) -> bool:
    return complexity >= threshold


def complexity_entry(task: TaskModel, config: PlannerConfig, threshold: int) -> ComplexityEntry:
    """Analyze one task."""
    complexity = estimate_complexity(task)
    count = recommended_subtask_count(complexity, config.default_subtasks)
    return ComplexityEntry(
        task_id=task.id,
        title=task.title,
        status=task.status,
        complexity=complexity,
        has_subtasks=bool(task.subtasks),
        subtask_count=len(task.subtasks),
        recommended=ComplexityRecommendation(
            subtask_count=count,
            needs_expansion=needs_expansion(complexity, threshold),
            expansion_prompt=expansion_prompt(complexity),
            expansion_command=f'taskplan_expand(task_id="{task.id}", num={count})',
        ),
    )


def complexity_stats(entries: list[ComplexityEntry]) -> ComplexityStats:
    """Distribution of complexity across unfinished entries."""
    active = [e for e in entries if e.status not in FINISHED_STATUSES]
    if not active:
        return ComplexityStats(total_tasks=len(entries))

    return ComplexityStats(
        total_tasks=len(entries),
        active_tasks=len(active),
        low_complexity=sum(1 for e in active if e.complexity <= LOW_COMPLEXITY_MAX),
        medium_complexity=sum(1 for e in active if LOW_COMPLEXITY_MAX < e.complexity <= MEDIUM_COMPLEXITY_MAX),
        high_complexity=sum(1 for e in active if e.complexity > MEDIUM_COMPLEXITY_MAX),
        average_complexity=sum(e.complexity for e in active) / len(active),
    )


def analyze_complexity(
    tasks: list[TaskModel],
    config: PlannerConfig,
    threshold: int | None = None,
    now: datetime | None = None,
) -> ComplexityReport:
    """
    Build a complexity report for all unfinished tasks.

    Args:
        tasks: All loaded tasks
        config: Planner defaults (base subtask count, default threshold)
        threshold: Complexity at which expansion is recommended
        now: Report timestamp

    Returns:
        Report with entries sorted by complexity, highest first
    """
    threshold = threshold if threshold is not None else config.complexity_threshold
    entries = [complexity_entry(t, config, threshold) for t in tasks if not t.is_finished]
    entries.sort(key=lambda e: e.complexity, reverse=True)
    return ComplexityReport(
        timestamp=now or datetime.now(timezone.utc),
        stats=complexity_stats(entries),
        tasks=entries,
    )
