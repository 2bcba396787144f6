"""
Task Endpoints Module

This module provides the CRUD endpoints for tasks, plus the status endpoint used
by the kanban board. Listing goes through the visibility & filter engine;
mutations go through the lifecycle manager after an edit-permission check.
"""
from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlmodel import Session, select

from worksphere.api import deps
from worksphere.core.errors import PermissionDeniedError, ValidationError
from worksphere.db.session import get_db
from worksphere.models.task import Priority, Task, TaskStatus
from worksphere.models.user import User
from worksphere.schemas.task import TaskCreate, TaskRead, TaskStatusUpdate, TaskUpdate
from worksphere.services import filtering, lifecycle
from worksphere.services.filtering import Requester, TaskCriteria

router = APIRouter()


def _parse_day(value: Optional[str], name: str) -> Optional[date]:
    if not value:
        return None
    try:
        return date.fromisoformat(value[:10])
    except ValueError:
        raise ValidationError(f"Invalid {name}: {value!r}")


def _parse_enum(enum_cls, value: Optional[str]):
    if not value:
        return None
    try:
        return enum_cls.parse(value)
    except ValueError as exc:
        raise ValidationError(str(exc))


def _check_can_edit(requester: Optional[Requester], task: Task) -> None:
    # Anonymous callers are trusted, as the lifecycle manager is
    if requester is not None and not filtering.can_edit(requester, task):
        raise PermissionDeniedError("Not authorized to modify this task")


@router.get("", response_model=List[TaskRead])
def list_tasks(
    assigned_to: Optional[str] = Query(None, alias="assignedTo"),
    status_: Optional[str] = Query(None, alias="status"),
    priority: Optional[str] = None,
    search: Optional[str] = None,
    start_date: Optional[str] = Query(None, alias="startDate"),
    end_date: Optional[str] = Query(None, alias="endDate"),
    db: Session = Depends(get_db),
    requester: Requester = Depends(deps.get_requester),
):
    """
    Retrieve every task the requester may see that matches all supplied filters.

    Admins see all tasks. Regular users see tasks they created or were
    assigned. Results come back in presentation order: priority first, then
    open work before finished work.
    """
    criteria = TaskCriteria(
        status=_parse_enum(TaskStatus, status_),
        priority=_parse_enum(Priority, priority),
        assigned_to=assigned_to or None,
        search=search or None,
        start_date=_parse_day(start_date, "startDate"),
        end_date=_parse_day(end_date, "endDate"),
    )
    tasks = db.exec(select(Task).order_by(Task.created_at)).all()
    return filtering.sort_tasks(filtering.list_tasks(tasks, requester, criteria))


@router.get("/{task_id}", response_model=TaskRead)
def read_task(
    task_id: str,
    db: Session = Depends(get_db),
    requester: Requester = Depends(deps.get_requester),
):
    """
    Get a specific task by ID.

    Raises:
        NotFoundError: if the task doesn't exist
        PermissionDeniedError: if the requester may not see it
    """
    task = lifecycle.get_task(db, task_id)
    if not filtering.is_visible(task, requester):
        raise PermissionDeniedError("Not authorized to view this task")
    return task


@router.post("", response_model=TaskRead, status_code=status.HTTP_201_CREATED)
def create_task(
    task_in: TaskCreate,
    db: Session = Depends(get_db),
    token_user: Optional[User] = Depends(deps.get_token_user),
):
    """
    Create a new task.

    The creator is the token user when the request is authenticated, else the
    ``userId`` in the body, else "anonymous".
    """
    if token_user is not None:
        creator_id = token_user.id
    else:
        creator_id = task_in.user_id or "anonymous"
    return lifecycle.create_task(db, task_in, creator_id)


@router.put("/{task_id}", response_model=TaskRead)
def update_task(
    task_id: str,
    task_in: TaskUpdate,
    db: Session = Depends(get_db),
    requester: Optional[Requester] = Depends(deps.get_optional_requester),
):
    """
    Update an existing task with the supplied fields only.

    Only the creator or an admin can update a task.
    """
    _check_can_edit(requester, lifecycle.get_task(db, task_id))
    return lifecycle.update_task(db, task_id, task_in)


@router.patch("/{task_id}/status", response_model=TaskRead)
def update_task_status(
    task_id: str,
    status_in: TaskStatusUpdate,
    db: Session = Depends(get_db),
    requester: Optional[Requester] = Depends(deps.get_optional_requester),
):
    """
    Move a task to another status column (kanban drag-and-drop).
    """
    _check_can_edit(requester, lifecycle.get_task(db, task_id))
    return lifecycle.set_status(db, task_id, status_in.status)


@router.delete("/{task_id}")
def delete_task(
    task_id: str,
    db: Session = Depends(get_db),
    requester: Optional[Requester] = Depends(deps.get_optional_requester),
):
    """
    Delete a task. Nothing else is touched.

    Only the creator or an admin can delete a task.
    """
    _check_can_edit(requester, lifecycle.get_task(db, task_id))
    lifecycle.delete_task(db, task_id)
    return {"message": "Task deleted successfully"}
