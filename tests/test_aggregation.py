# tests/test_aggregation.py

from datetime import date, datetime, time, timedelta

import pytest

from worksphere.core.errors import ValidationError
from worksphere.services.aggregation import assignee_performance, completion_trend, summarize

from .factories import NOW, make_task

YESTERDAY = (NOW - timedelta(days=1)).date().isoformat()
TODAY = NOW.date().isoformat()
TOMORROW = (NOW + timedelta(days=1)).date().isoformat()


def test_empty_set() -> None:
    stats = summarize([], NOW)
    assert stats.total == 0
    assert stats.completion_rate == 0.0
    assert stats.by_status == {"To Do": 0, "In Progress": 0, "Complete": 0}
    assert stats.by_priority == {"High": 0, "Medium": 0, "Low": 0}


def test_overdue_counts_open_tasks_due_before_today() -> None:
    task = make_task(due_date=YESTERDAY, status="In Progress")
    assert summarize([task], NOW).overdue == 1

    task.status = "Complete"
    task.completed_at = NOW
    assert summarize([task], NOW).overdue == 0


def test_due_today_is_overdue_once_the_day_has_started() -> None:
    task = make_task(due_date=TODAY, status="In Progress")
    stats = summarize([task, make_task(due_date=TOMORROW)], NOW)
    assert stats.overdue == 1
    assert stats.due_today == 1

    midnight = datetime.combine(NOW.date(), time.min)
    assert summarize([task], midnight).overdue == 0


def test_tasks_without_due_date_are_never_overdue() -> None:
    assert summarize([make_task(created_at=NOW - timedelta(days=90))], NOW).overdue == 0


def test_status_counts_add_up() -> None:
    tasks = [
        make_task(status="To Do"),
        make_task(status="To Do", priority="High"),
        make_task(status="In Progress", priority="High"),
        make_task(status="Complete", completed_at=NOW),
        make_task(status="Pending"),
    ]
    stats = summarize(tasks, NOW)
    assert stats.total == 5
    assert stats.todo == stats.pending == 3
    assert stats.in_progress == 1
    assert stats.completed == 1
    assert stats.completed + stats.in_progress + stats.todo == stats.total
    assert stats.high_priority == 2
    assert stats.by_priority == {"High": 2, "Medium": 3, "Low": 0}
    assert stats.completion_rate == 0.2


def test_completed_windows() -> None:
    tasks = [
        make_task(status="Complete", completed_at=NOW - timedelta(days=2)),
        make_task(status="Complete", completed_at=NOW - timedelta(days=7)),
        make_task(status="Complete", completed_at=NOW - timedelta(days=8)),
        make_task(status="Complete", completed_at=NOW - timedelta(days=31)),
    ]
    stats = summarize(tasks, NOW)
    assert stats.completed_this_week == 2
    assert stats.completed_this_month == 3


def test_completed_without_timestamp_falls_back_to_created_at() -> None:
    recent = make_task(status="Complete", created_at=NOW - timedelta(days=1))
    old = make_task(status="Complete", created_at=NOW - timedelta(days=40))
    stats = summarize([recent, old], NOW)
    assert stats.completed_this_week == 1
    assert stats.completed_this_month == 1


def test_summarize_is_deterministic() -> None:
    tasks = [make_task(due_date=YESTERDAY), make_task(status="Complete", completed_at=NOW)]
    assert summarize(tasks, NOW) == summarize(tasks, NOW)


def test_wire_names_are_camel_case() -> None:
    payload = summarize([make_task()], NOW).model_dump(by_alias=True)
    assert payload["inProgress"] == 0
    assert payload["completedThisWeek"] == 0
    assert payload["highPriority"] == 0
    assert payload["byStatus"]["To Do"] == 1
    assert payload["dueThisWeek"] == 0
    assert payload["averageOverdueDays"] == 0.0
    assert payload["trend"][-1] == {"date": NOW.date(), "created": 1, "completed": 0}


def test_due_this_week_excludes_today_and_day_seven() -> None:
    in_three = (NOW + timedelta(days=3)).date().isoformat()
    in_seven = (NOW + timedelta(days=7)).date().isoformat()
    tasks = [
        make_task(due_date=TODAY),
        make_task(due_date=TOMORROW),
        make_task(due_date=in_three),
        make_task(due_date=in_seven),
        make_task(due_date=in_three, status="Complete", completed_at=NOW),
    ]
    assert summarize(tasks, NOW).due_this_week == 2


def test_average_overdue_days() -> None:
    tasks = [
        make_task(due_date=(NOW - timedelta(days=1)).date().isoformat()),
        make_task(due_date=(NOW - timedelta(days=5)).date().isoformat()),
        make_task(due_date=TOMORROW),
    ]
    stats = summarize(tasks, NOW)
    assert stats.overdue == 2
    assert stats.average_overdue_days == 3.0
    assert summarize([], NOW).average_overdue_days == 0.0


def test_assignee_performance() -> None:
    tasks = [
        make_task(assigned_to="u2", status="Complete", completed_at=NOW),
        make_task(assigned_to="u2"),
        make_task(assigned_to="u1", status="In Progress"),
        make_task(),
    ]
    rows = assignee_performance(tasks)
    assert [(r.assignee, r.assigned, r.completed) for r in rows] == [("u1", 1, 0), ("u2", 2, 1)]
    assert rows[1].completion_rate == 0.5
    assert summarize(tasks, NOW).by_assignee == rows


def test_completion_trend_counts_per_day() -> None:
    day1 = datetime(2026, 10, 17, 9, 0)
    day2 = datetime(2026, 10, 18, 18, 30)
    tasks = [
        make_task(created_at=day1),
        make_task(created_at=day1, status="Complete", completed_at=day2),
        make_task(created_at=datetime(2026, 9, 1), status="Complete", completed_at=day2),
        make_task(created_at=day2),
    ]
    trend = completion_trend(tasks, date(2026, 10, 17), date(2026, 10, 19))
    assert [(p.day, p.created, p.completed) for p in trend] == [
        (date(2026, 10, 17), 2, 0),
        (date(2026, 10, 18), 1, 2),
        (date(2026, 10, 19), 0, 0),
    ]


def test_completion_trend_rejects_bad_ranges() -> None:
    with pytest.raises(ValidationError):
        completion_trend([], date(2026, 10, 2), date(2026, 10, 1))
    with pytest.raises(ValidationError):
        completion_trend([], date(2024, 1, 1), date(2026, 1, 1))


def test_summarize_trend_defaults_to_last_seven_days() -> None:
    trend = summarize([make_task()], NOW).trend
    assert [p.day for p in trend][0] == date(2026, 10, 13)
    assert [p.day for p in trend][-1] == NOW.date()
    assert trend[-1].created == 1

    custom = summarize([], NOW, trend_start=date(2026, 10, 1), trend_end=date(2026, 10, 2)).trend
    assert len(custom) == 2
