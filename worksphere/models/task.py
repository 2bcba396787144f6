"""
Task Model Module

This module defines the Task table model together with the canonical status and
priority enumerations. Legacy spellings ("Completed", "Pending", "To-Do", ...)
are mapped onto the canonical values by ``TaskStatus.parse`` so every comparison
site works against one enumeration.
"""
from datetime import date, datetime
from enum import Enum
from typing import Optional, Union
import uuid

from sqlalchemy import Column, DateTime
from sqlmodel import SQLModel, Field

from worksphere.core.clock import utcnow

# Sentinels standing in for an absent assignee / due date
UNASSIGNED = "Unassigned"
NO_DATE = "No Date"


def _key(value: str) -> str:
    return value.strip().lower().replace("-", " ").replace("_", " ")


class TaskStatus(str, Enum):
    """
    Canonical three-state task status.

    The numeric rank is used for the presentation ordering: open work sorts
    before finished work.
    """
    TODO = "To Do"
    IN_PROGRESS = "In Progress"
    COMPLETE = "Complete"

    @property
    def rank(self) -> int:
        return _STATUS_RANK[self]

    @classmethod
    def parse(cls, value: Union[str, "TaskStatus"]) -> "TaskStatus":
        """Map any accepted spelling onto a canonical member. Raises ValueError."""
        if isinstance(value, cls):
            return value
        status = _STATUS_ALIASES.get(_key(str(value)))
        if status is None:
            raise ValueError(f"Unknown task status: {value!r}")
        return status


_STATUS_RANK = {TaskStatus.TODO: 3, TaskStatus.IN_PROGRESS: 2, TaskStatus.COMPLETE: 1}

_STATUS_ALIASES = {
    "to do": TaskStatus.TODO,
    "todo": TaskStatus.TODO,
    "pending": TaskStatus.TODO,
    "in progress": TaskStatus.IN_PROGRESS,
    "inprogress": TaskStatus.IN_PROGRESS,
    "complete": TaskStatus.COMPLETE,
    "completed": TaskStatus.COMPLETE,
    "done": TaskStatus.COMPLETE,
}


class Priority(str, Enum):
    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"

    @property
    def rank(self) -> int:
        return _PRIORITY_RANK[self]

    @classmethod
    def parse(cls, value: Union[str, "Priority"]) -> "Priority":
        if isinstance(value, cls):
            return value
        for priority in cls:
            if priority.value.lower() == str(value).strip().lower():
                return priority
        raise ValueError(f"Unknown task priority: {value!r}")


_PRIORITY_RANK = {Priority.HIGH: 3, Priority.MEDIUM: 2, Priority.LOW: 1}


def normalize_due_date(value: Union[None, str, date, datetime]) -> str:
    """
    Return the stored form of a due date: ``YYYY-MM-DD`` or the NO_DATE sentinel.

    Datetimes (and ISO datetime strings) are truncated to their date part.
    Raises ValueError for anything else.
    """
    if value is None:
        return NO_DATE
    if isinstance(value, datetime):
        return value.date().isoformat()
    if isinstance(value, date):
        return value.isoformat()
    text = str(value).strip()
    if not text or text == NO_DATE:
        return NO_DATE
    return date.fromisoformat(text[:10]).isoformat()


class TaskBase(SQLModel):
    """
    Base Task model containing the user-editable fields.
    """
    # Basic task information
    title: str = Field(nullable=False)
    description: str = Field(default="")

    # User id of the assignee, or the UNASSIGNED sentinel
    assigned_to: str = Field(default=UNASSIGNED, index=True)

    # Due date stored as ISO date string, or the NO_DATE sentinel
    due_date: str = Field(default=NO_DATE)

    # Canonical TaskStatus / Priority values
    status: str = Field(default=TaskStatus.TODO.value, index=True)
    priority: str = Field(default=Priority.MEDIUM.value)


class Task(TaskBase, table=True):
    """
    Task table model.

    ``completed_at`` is set exactly while ``status`` is Complete; see
    ``worksphere.services.lifecycle.apply_status``.
    """
    __tablename__ = "tasks"

    # Primary key - opaque, never reused
    id: str = Field(default_factory=lambda: uuid.uuid4().hex, primary_key=True)

    # Weak reference to the creating user (no foreign key: tasks outlive users)
    creator_id: str = Field(index=True)

    # Audit timestamps (naive UTC)
    created_at: datetime = Field(
        default_factory=utcnow, sa_column=Column(DateTime(timezone=False), nullable=False)
    )
    completed_at: Optional[datetime] = Field(
        default=None, sa_column=Column(DateTime(timezone=False), nullable=True)
    )

    @property
    def task_status(self) -> TaskStatus:
        return TaskStatus.parse(self.status)

    @property
    def task_priority(self) -> Priority:
        return Priority.parse(self.priority)

    @property
    def is_complete(self) -> bool:
        return self.task_status is TaskStatus.COMPLETE

    @property
    def due(self) -> Optional[date]:
        """The due date as a ``date``, or None for the NO_DATE sentinel."""
        if self.due_date == NO_DATE:
            return None
        return date.fromisoformat(self.due_date)

    @property
    def reference_date(self) -> date:
        """Date used for range filtering: the due date, else the creation date."""
        return self.due or self.created_at.date()
