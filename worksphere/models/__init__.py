from .user import User, UserRole
from .task import Task, TaskStatus, Priority, NO_DATE, UNASSIGNED

__all__ = [
    "User", "UserRole",
    "Task", "TaskStatus", "Priority",
    "NO_DATE", "UNASSIGNED",
]
