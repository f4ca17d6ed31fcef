"""Planning algorithms: readiness, scoring, scheduling and complexity."""

from taskplan_mcp.planning.complexity import (
    analyze_complexity,
    complexity_stats,
    estimate_complexity,
    expansion_prompt,
    needs_expansion,
    recommended_subtask_count,
)
from taskplan_mcp.planning.dependencies import (
    assert_acyclic,
    blocked_tasks,
    bottlenecks,
    dependents_count,
    diagnose_idle,
    find_dependency_cycles,
    ready_set,
)
from taskplan_mcp.planning.expansion import generate_subtasks
from taskplan_mcp.planning.scheduling import bucket_for_score, build_schedule
from taskplan_mcp.planning.scoring import prioritize, priority_score, score_task
from taskplan_mcp.planning.selection import order_ready, priority_rank, select_next

__all__ = [
    "ready_set",
    "blocked_tasks",
    "bottlenecks",
    "dependents_count",
    "find_dependency_cycles",
    "assert_acyclic",
    "diagnose_idle",
    "score_task",
    "priority_score",
    "prioritize",
    "bucket_for_score",
    "build_schedule",
    "estimate_complexity",
    "recommended_subtask_count",
    "expansion_prompt",
    "needs_expansion",
    "complexity_stats",
    "analyze_complexity",
    "priority_rank",
    "order_ready",
    "select_next",
    "generate_subtasks",
]
