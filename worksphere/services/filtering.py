"""
Visibility & Filter Engine

Pure functions deciding which tasks a requester may see and which of those
match a set of optional, conjunctive criteria. Nothing here touches the
database; callers pass in the loaded task collection.
"""
from dataclasses import dataclass
from datetime import date
from typing import Iterable, List, Optional

from worksphere.models.task import Priority, Task, TaskStatus
from worksphere.models.user import User, UserRole


@dataclass(frozen=True)
class Requester:
    """The identity a query or mutation is evaluated for."""
    id: str
    role: UserRole = UserRole.USER

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN

    @classmethod
    def from_user(cls, user: User) -> "Requester":
        return cls(id=user.id, role=UserRole(user.role))


@dataclass
class TaskCriteria:
    """Optional filters; a task must satisfy every one that is set."""
    status: Optional[TaskStatus] = None
    priority: Optional[Priority] = None
    assigned_to: Optional[str] = None
    search: Optional[str] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None


def is_visible(task: Task, requester: Requester) -> bool:
    """Admins see every task; everyone else sees what they created or were assigned."""
    if requester.is_admin:
        return True
    return task.creator_id == requester.id or task.assigned_to == requester.id


def can_edit(principal: Requester, task: Task) -> bool:
    """Only the creator of a task, or an admin, may change or delete it."""
    return principal.is_admin or task.creator_id == principal.id


def _matches_search(task: Task, needle: str) -> bool:
    needle = needle.lower()
    return (
        needle in task.title.lower()
        or needle in (task.description or "").lower()
        or needle in task.assigned_to.lower()
    )


def matches(task: Task, criteria: TaskCriteria) -> bool:
    if criteria.status is not None and task.task_status is not criteria.status:
        return False
    if criteria.priority is not None and task.task_priority is not criteria.priority:
        return False
    if criteria.assigned_to and task.assigned_to != criteria.assigned_to:
        return False
    if criteria.search and not _matches_search(task, criteria.search):
        return False
    if criteria.start_date is not None or criteria.end_date is not None:
        ref = task.reference_date
        if criteria.start_date is not None and ref < criteria.start_date:
            return False
        if criteria.end_date is not None and ref > criteria.end_date:
            return False
    return True


def list_tasks(
    tasks: Iterable[Task],
    requester: Requester,
    criteria: Optional[TaskCriteria] = None,
) -> List[Task]:
    """
    Return the tasks ``requester`` may see that match ``criteria``.

    The full matching set is returned in input order; there is no pagination.
    """
    criteria = criteria or TaskCriteria()
    return [t for t in tasks if is_visible(t, requester) and matches(t, criteria)]


def sort_tasks(tasks: Iterable[Task]) -> List[Task]:
    """
    Presentation order: higher priority first, then open work before finished
    work (To Do, In Progress, Complete). Ties keep their input order.
    """
    return sorted(
        tasks,
        key=lambda t: (t.task_priority.rank, t.task_status.rank),
        reverse=True,
    )
