"""
Aggregation Engine

Dashboard statistics over an already visibility-filtered task set.
"""
from datetime import date, datetime, time, timedelta
from typing import Dict, Iterable, List, Optional

from worksphere.core.errors import ValidationError
from worksphere.models.task import UNASSIGNED, Priority, Task, TaskStatus
from worksphere.schemas.dashboard import AssigneePerformance, DashboardStats, TrendPoint

WEEK = timedelta(days=7)
MONTH = timedelta(days=30)
TREND_DAYS = 7
MAX_TREND_DAYS = 366


def is_overdue(task: Task, now: datetime) -> bool:
    """Open tasks whose due day started before ``now``."""
    due = task.due
    return (
        due is not None
        and datetime.combine(due, time.min) < now
        and not task.is_complete
    )


def completion_trend(tasks: Iterable[Task], start: date, end: date) -> List[TrendPoint]:
    """
    One point per day in ``[start, end]`` counting tasks created and tasks
    completed on that day.

    Raises:
        ValidationError: if the range is reversed or longer than a year
    """
    if end < start:
        raise ValidationError("Trend end date is before its start date")
    days = (end - start).days + 1
    if days > MAX_TREND_DAYS:
        raise ValidationError(f"Trend range is limited to {MAX_TREND_DAYS} days")

    points = {start + timedelta(days=i): TrendPoint(day=start + timedelta(days=i))
              for i in range(days)}
    for task in tasks:
        created = points.get(task.created_at.date())
        if created is not None:
            created.created += 1
        if task.completed_at is not None:
            completed = points.get(task.completed_at.date())
            if completed is not None:
                completed.completed += 1
    return list(points.values())


def assignee_performance(tasks: Iterable[Task]) -> List[AssigneePerformance]:
    """Assigned and completed counts per assignee, unassigned tasks skipped."""
    rows: Dict[str, AssigneePerformance] = {}
    for task in tasks:
        if task.assigned_to == UNASSIGNED:
            continue
        row = rows.setdefault(task.assigned_to, AssigneePerformance(assignee=task.assigned_to))
        row.assigned += 1
        if task.is_complete:
            row.completed += 1
    for row in rows.values():
        row.completion_rate = row.completed / row.assigned
    return [rows[k] for k in sorted(rows)]


def summarize(
    tasks: Iterable[Task],
    now: datetime,
    trend_start: Optional[date] = None,
    trend_end: Optional[date] = None,
) -> DashboardStats:
    """
    Count ``tasks`` by status and priority, plus overdue and recently completed
    work relative to ``now``. Pure: the same input and ``now`` always give the
    same result.

    The trend covers ``trend_start``..``trend_end``, by default the seven days
    ending today.
    """
    tasks = list(tasks)
    today = now.date()
    week_ago = now - WEEK
    month_ago = now - MONTH
    trend_end = trend_end or today
    trend_start = trend_start or trend_end - timedelta(days=TREND_DAYS - 1)

    by_status = {s.value: 0 for s in TaskStatus}
    by_priority = {p.value: 0 for p in Priority}
    due_today = due_this_week = this_week = this_month = 0
    overdue_days: List[int] = []

    for task in tasks:
        status = task.task_status
        by_status[status.value] += 1
        by_priority[task.task_priority.value] += 1

        if status is TaskStatus.COMPLETE:
            # Tasks completed before completed_at existed fall back to created_at
            finished = task.completed_at or task.created_at
            if finished >= week_ago:
                this_week += 1
            if finished >= month_ago:
                this_month += 1
            continue

        due = task.due
        if due is None:
            continue
        if is_overdue(task, now):
            overdue_days.append((today - due).days)
        if due == today:
            due_today += 1
        elif today < due < today + WEEK:
            due_this_week += 1

    total = len(tasks)
    completed = by_status[TaskStatus.COMPLETE.value]
    todo = by_status[TaskStatus.TODO.value]
    return DashboardStats(
        total=total,
        completed=completed,
        in_progress=by_status[TaskStatus.IN_PROGRESS.value],
        todo=todo,
        pending=todo,
        high_priority=by_priority[Priority.HIGH.value],
        overdue=len(overdue_days),
        due_today=due_today,
        due_this_week=due_this_week,
        average_overdue_days=sum(overdue_days) / len(overdue_days) if overdue_days else 0.0,
        completed_this_week=this_week,
        completed_this_month=this_month,
        completion_rate=completed / total if total else 0.0,
        by_status=by_status,
        by_priority=by_priority,
        by_assignee=assignee_performance(tasks),
        trend=completion_trend(tasks, trend_start, trend_end),
    )
