from datetime import date
from typing import Dict, List

from pydantic import Field

from worksphere.schemas.base import CamelModel


class TrendPoint(CamelModel):
    """Tasks created and completed on one calendar day."""
    day: date = Field(alias="date")
    created: int = 0
    completed: int = 0


class AssigneePerformance(CamelModel):
    assignee: str
    assigned: int = 0
    completed: int = 0
    completion_rate: float = 0.0


class DashboardStats(CamelModel):
    """Aggregate counts over one requester's visible tasks."""
    total: int = 0
    completed: int = 0
    in_progress: int = 0
    todo: int = 0
    pending: int = 0  # same value as todo, kept for older dashboards
    high_priority: int = 0
    overdue: int = 0
    due_today: int = 0
    due_this_week: int = 0
    average_overdue_days: float = 0.0
    completed_this_week: int = 0
    completed_this_month: int = 0
    completion_rate: float = 0.0
    by_status: Dict[str, int] = {}
    by_priority: Dict[str, int] = {}
    by_assignee: List[AssigneePerformance] = []
    trend: List[TrendPoint] = []
