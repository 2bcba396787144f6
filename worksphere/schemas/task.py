from datetime import datetime
from typing import Optional

from pydantic import field_validator

from worksphere.models.task import Priority, TaskStatus, normalize_due_date
from worksphere.schemas.base import CamelModel


class _TaskFields(CamelModel):
    """Fields shared by the create and patch bodies, all optional at the boundary."""
    title: Optional[str] = None
    description: Optional[str] = None
    assigned_to: Optional[str] = None
    due_date: Optional[str] = None
    status: Optional[TaskStatus] = None
    priority: Optional[Priority] = None

    @field_validator("status", mode="before")
    @classmethod
    def parse_status(cls, value):
        if value is None or value == "":
            return None
        return TaskStatus.parse(value)

    @field_validator("priority", mode="before")
    @classmethod
    def parse_priority(cls, value):
        if value is None or value == "":
            return None
        return Priority.parse(value)

    @field_validator("due_date", mode="before")
    @classmethod
    def clean_due_date(cls, value):
        return normalize_due_date(value)


# Properties to receive via API on creation
class TaskCreate(_TaskFields):
    # Creator when the request carries no token
    user_id: Optional[str] = None


# Properties to receive via API on update (only supplied fields change)
class TaskUpdate(_TaskFields):
    pass


class TaskStatusUpdate(CamelModel):
    status: TaskStatus

    @field_validator("status", mode="before")
    @classmethod
    def parse_status(cls, value):
        return TaskStatus.parse(value)


# Properties to return to client
class TaskRead(CamelModel):
    id: str
    title: str
    description: str
    assigned_to: str
    due_date: str
    status: TaskStatus
    priority: Priority
    creator_id: str
    created_at: datetime
    completed_at: Optional[datetime] = None
