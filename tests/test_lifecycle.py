# tests/test_lifecycle.py

from datetime import timedelta

import pytest
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, select

from worksphere.core.errors import NotFoundError, StorageError, ValidationError
from worksphere.db.session import save
from worksphere.models import Task, TaskStatus
from worksphere.schemas.task import TaskCreate, TaskUpdate
from worksphere.services import lifecycle
from worksphere.services.filtering import Requester, list_tasks

from .factories import NOW

LATER = NOW + timedelta(hours=3)


def create(session, now=NOW, creator="u1", **fields) -> Task:
    return lifecycle.create_task(session, TaskCreate(**fields), creator, now=now)


def test_create_applies_defaults(session) -> None:
    task = create(session, title="Write spec")
    assert task.id
    assert task.title == "Write spec"
    assert task.description == ""
    assert task.status == "To Do"
    assert task.priority == "Medium"
    assert task.assigned_to == "Unassigned"
    assert task.due_date == "No Date"
    assert task.creator_id == "u1"
    assert task.created_at == NOW
    assert task.completed_at is None


def test_create_trims_title(session) -> None:
    assert create(session, title="  Plan  ").title == "Plan"


@pytest.mark.parametrize("title", [None, "", "   "])
def test_create_rejects_blank_title(session, title) -> None:
    with pytest.raises(ValidationError):
        create(session, title=title)
    assert session.exec(select(Task)).first() is None


def test_create_directly_complete_stamps_completed_at(session) -> None:
    task = create(session, title="Done already", status="Completed")
    assert task.status == "Complete"
    assert task.completed_at == NOW


def test_create_then_list_round_trip(session) -> None:
    task = create(session, title="Write spec")
    stored = session.exec(select(Task)).all()
    result = list_tasks(stored, Requester(id="u1"))
    assert [t.id for t in result] == [task.id]
    assert result[0].assigned_to == "Unassigned"


def test_complete_then_edit_then_complete_again(session) -> None:
    task = create(session, title="Write spec")

    task = lifecycle.update_task(session, task.id, TaskUpdate(status="Complete"), now=NOW)
    assert task.completed_at == NOW

    # No status in the patch: completion stamp untouched
    task = lifecycle.update_task(session, task.id, TaskUpdate(priority="Low"), now=LATER)
    assert task.priority == "Low"
    assert task.completed_at == NOW

    # Complete again: original stamp kept, not refreshed
    task = lifecycle.update_task(session, task.id, TaskUpdate(status="Complete"), now=LATER)
    assert task.completed_at == NOW


def test_leaving_complete_clears_completed_at(session) -> None:
    task = create(session, title="x", status="Complete")
    task = lifecycle.update_task(session, task.id, TaskUpdate(status="In Progress"), now=LATER)
    assert task.status == "In Progress"
    assert task.completed_at is None


def test_same_status_update_is_idempotent(session) -> None:
    task = create(session, title="x", status="In Progress")
    once = lifecycle.update_task(session, task.id, TaskUpdate(status="In Progress"), now=LATER)
    first = once.completed_at
    twice = lifecycle.update_task(session, task.id, TaskUpdate(status="In Progress"), now=LATER)
    assert first is None
    assert twice.completed_at == first


def test_non_complete_status_normalizes_stray_timestamp(session) -> None:
    task = create(session, title="x")
    task.completed_at = NOW
    session.add(task)
    session.commit()
    task = lifecycle.update_task(session, task.id, TaskUpdate(status="To Do"), now=LATER)
    assert task.completed_at is None


def test_update_merges_only_supplied_fields(session) -> None:
    task = create(session, title="x", description="keep me", assigned_to="u2", due_date="2026-11-01")
    task = lifecycle.update_task(session, task.id, TaskUpdate(title="y"))
    assert task.title == "y"
    assert task.description == "keep me"
    assert task.assigned_to == "u2"
    assert task.due_date == "2026-11-01"


def test_update_clearing_assignee_and_due_date_restores_sentinels(session) -> None:
    task = create(session, title="x", assigned_to="u2", due_date="2026-11-01")
    patch = TaskUpdate.model_validate({"assignedTo": "", "dueDate": None})
    task = lifecycle.update_task(session, task.id, patch)
    assert task.assigned_to == "Unassigned"
    assert task.due_date == "No Date"


def test_update_rejects_blank_title(session) -> None:
    task = create(session, title="x")
    with pytest.raises(ValidationError):
        lifecycle.update_task(session, task.id, TaskUpdate(title=" "))


def test_update_missing_task(session) -> None:
    with pytest.raises(NotFoundError):
        lifecycle.update_task(session, "missing", TaskUpdate(title="y"))


def test_set_status(session) -> None:
    task = create(session, title="x")
    task = lifecycle.set_status(session, task.id, TaskStatus.COMPLETE, now=LATER)
    assert task.status == "Complete"
    assert task.completed_at == LATER


def test_delete(session) -> None:
    keep = create(session, title="keep")
    gone = create(session, title="gone")
    lifecycle.delete_task(session, gone.id)
    assert [t.id for t in session.exec(select(Task)).all()] == [keep.id]
    with pytest.raises(NotFoundError):
        lifecycle.delete_task(session, gone.id)


def test_timestamps_round_trip_through_the_database(engine, session) -> None:
    task = create(session, title="x", status="Complete", now=NOW)

    with Session(engine) as fresh:
        stored = fresh.get(Task, task.id)
        assert stored.created_at == NOW
        assert stored.completed_at == NOW
        assert stored.created_at.tzinfo is None


def test_failed_save_rolls_back_and_raises_storage_error(session) -> None:
    original = create(session, title="original")
    task_id = original.id
    session.expunge_all()

    with pytest.raises(StorageError):
        save(session, Task(id=task_id, title="duplicate", creator_id="u2"))

    # The session is usable again and the stored record is untouched
    assert lifecycle.get_task(session, task_id).title == "original"


def test_commit_failure_surfaces_as_storage_error(session, monkeypatch) -> None:
    task = create(session, title="x")

    def failing_commit():
        raise SQLAlchemyError("disk I/O error")

    monkeypatch.setattr(session, "commit", failing_commit)
    with pytest.raises(StorageError):
        lifecycle.update_task(session, task.id, TaskUpdate(title="y"))
