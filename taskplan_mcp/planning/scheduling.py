"""Schedule bucketing: partition scored tasks into planning horizons."""

from datetime import date, datetime, timezone

from taskplan_mcp.config import PlannerConfig
from taskplan_mcp.models.planning import Schedule, ScheduleBucket, ScheduleEntry, ScoredTask

IMMEDIATE_MIN_SCORE = 80
THIS_WEEK_MIN_SCORE = 60
UPCOMING_MIN_SCORE = 40

BUCKET_DESCRIPTIONS = {
    "immediate": "Do these ASAP",
    "thisWeek": "Complete this week",
    "upcoming": "Tackle when immediate tasks are done",
    "backlog": "Consider these after higher priorities",
}


def bucket_for_score(score: int) -> str:
    """Name of the horizon a score falls into."""
    if score >= IMMEDIATE_MIN_SCORE:
        return "immediate"
    if score >= THIS_WEEK_MIN_SCORE:
        return "thisWeek"
    if score >= UPCOMING_MIN_SCORE:
        return "upcoming"
    return "backlog"


def _schedule_entry(scored: ScoredTask, config: PlannerConfig) -> ScheduleEntry:
    task = scored.task
    return ScheduleEntry(
        id=task.id,
        title=task.title,
        priority=task.priority or config.default_priority,
        priority_score=scored.score,
        status=task.status,
        estimated_hours=task.estimated_hours if task.estimated_hours is not None else config.default_hours,
        due_date=task.due_date,
        has_dependencies=bool(task.dependencies),
        dependencies=list(task.dependencies),
    )


def _make_bucket(name: str, entries: list[ScheduleEntry]) -> ScheduleBucket:
    return ScheduleBucket(
        description=BUCKET_DESCRIPTIONS[name],
        count=len(entries),
        estimated_hours=sum(e.estimated_hours for e in entries),
        tasks=entries,
    )


def build_schedule(
    scored_tasks: list[ScoredTask],
    config: PlannerConfig,
    hours_per_day: float | None = None,
    today: date | None = None,
    now: datetime | None = None,
) -> Schedule:
    """
    Partition scored tasks into the four horizons.

    Finished tasks are dropped. Within a bucket the incoming order is kept,
    so passing the output of :func:`prioritize` yields score-descending
    buckets with ties in store order. Tasks without an estimate count as
    ``config.default_hours`` in the bucket totals; the task itself is left
    untouched.

    Args:
        scored_tasks: Tasks with priority scores, highest first
        config: Planner defaults
        hours_per_day: Planning constant recorded on the schedule
        today: Date the schedule is built for
        now: Generation timestamp

    Returns:
        Schedule snapshot
    """
    now = now or datetime.now(timezone.utc)
    today = today or now.date()

    grouped: dict[str, list[ScheduleEntry]] = {name: [] for name in BUCKET_DESCRIPTIONS}
    active = [s for s in scored_tasks if not s.task.is_finished]
    for scored in active:
        grouped[bucket_for_score(scored.score)].append(_schedule_entry(scored, config))

    return Schedule(
        timestamp=now,
        total_tasks=len(active),
        hours_per_day=hours_per_day if hours_per_day is not None else config.hours_per_day,
        today=today,
        immediate=_make_bucket("immediate", grouped["immediate"]),
        this_week=_make_bucket("thisWeek", grouped["thisWeek"]),
        upcoming=_make_bucket("upcoming", grouped["upcoming"]),
        backlog=_make_bucket("backlog", grouped["backlog"]),
    )
