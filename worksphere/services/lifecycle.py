"""
Task Lifecycle Manager

Validates and applies create/update/delete/status operations to single task
records and maintains the completion-timestamp invariant: ``completed_at`` is
set exactly while the task is Complete.

Callers are trusted: edit permission (``filtering.can_edit``) is checked by
the HTTP layer before any of these functions run.
"""
import logging
from datetime import datetime
from typing import Optional

from sqlmodel import Session

from worksphere.core.clock import utcnow
from worksphere.core.errors import NotFoundError, ValidationError
from worksphere.db.session import remove, save
from worksphere.models.task import (
    NO_DATE,
    UNASSIGNED,
    Priority,
    Task,
    TaskStatus,
)
from worksphere.schemas.task import TaskCreate, TaskUpdate

logger = logging.getLogger(__name__)


def apply_status(task: Task, status: TaskStatus, now: datetime) -> None:
    """
    Move ``task`` to ``status``.

    Entering Complete stamps ``now``; staying Complete keeps the original
    stamp. Any non-Complete status clears ``completed_at``, even when the
    status does not actually change.
    """
    if status is TaskStatus.COMPLETE:
        if not task.is_complete or task.completed_at is None:
            task.completed_at = now
    else:
        task.completed_at = None
    task.status = status.value


def _clean_title(title: Optional[str]) -> str:
    title = (title or "").strip()
    if not title:
        raise ValidationError("Title is required")
    return title


def create_task(
    db: Session,
    task_in: TaskCreate,
    creator_id: str,
    now: Optional[datetime] = None,
) -> Task:
    """
    Create a task, applying defaults for every omitted field.

    Raises:
        ValidationError: if the title is missing or blank
    """
    now = now or utcnow()
    task = Task(
        title=_clean_title(task_in.title),
        description=task_in.description or "",
        assigned_to=task_in.assigned_to or UNASSIGNED,
        due_date=task_in.due_date or NO_DATE,
        priority=(task_in.priority or Priority.MEDIUM).value,
        creator_id=creator_id,
        created_at=now,
    )
    apply_status(task, task_in.status or TaskStatus.TODO, now)
    save(db, task)
    logger.info("Created task id=%s creator=%s status=%s", task.id, creator_id, task.status)
    return task


def get_task(db: Session, task_id: str) -> Task:
    task = db.get(Task, task_id)
    if not task:
        raise NotFoundError("Task not found")
    return task


def update_task(
    db: Session,
    task_id: str,
    task_in: TaskUpdate,
    now: Optional[datetime] = None,
) -> Task:
    """
    Merge the supplied fields of ``task_in`` into the task.

    Fields the client did not send are left alone; ``completed_at`` only moves
    when ``status`` is part of the patch.

    Raises:
        NotFoundError: if no task has ``task_id``
        ValidationError: if a blank title is supplied
    """
    task = get_task(db, task_id)
    update_data = task_in.model_dump(exclude_unset=True)

    status = update_data.pop("status", None)

    if "title" in update_data:
        update_data["title"] = _clean_title(update_data["title"])
    if "description" in update_data:
        update_data["description"] = update_data["description"] or ""
    if "assigned_to" in update_data:
        update_data["assigned_to"] = update_data["assigned_to"] or UNASSIGNED
    if "priority" in update_data:
        priority = update_data["priority"]
        if priority is None:
            del update_data["priority"]
        else:
            update_data["priority"] = priority.value

    for field, value in update_data.items():
        setattr(task, field, value)

    if status is not None:
        apply_status(task, status, now or utcnow())

    save(db, task)
    logger.info("Updated task id=%s fields=%s", task.id, sorted(task_in.model_fields_set))
    return task


def set_status(
    db: Session,
    task_id: str,
    status: TaskStatus,
    now: Optional[datetime] = None,
) -> Task:
    """Direct status transition, as used by the kanban board."""
    return update_task(db, task_id, TaskUpdate(status=status), now=now)


def delete_task(db: Session, task_id: str) -> None:
    """
    Raises:
        NotFoundError: if no task has ``task_id``
    """
    task = get_task(db, task_id)
    remove(db, task)
    logger.info("Deleted task id=%s", task_id)
