from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlmodel import Session, select

from worksphere.api import deps
from worksphere.core.clock import utcnow
from worksphere.db.session import get_db
from worksphere.models.task import Task
from worksphere.schemas.dashboard import DashboardStats
from worksphere.services.aggregation import summarize
from worksphere.services.filtering import list_tasks

router = APIRouter()


@router.get("/{user_id}", response_model=DashboardStats)
def read_dashboard(
    user_id: str,
    trend_start: Optional[date] = Query(None, alias="startDate"),
    trend_end: Optional[date] = Query(None, alias="endDate"),
    db: Session = Depends(get_db),
):
    """
    Dashboard statistics over the tasks ``user_id`` may see.

    ``startDate``/``endDate`` choose the window of the created/completed
    trend; it defaults to the last seven days.
    """
    requester = deps.requester_for_id(db, user_id)
    tasks = list_tasks(db.exec(select(Task)).all(), requester)
    return summarize(tasks, utcnow(), trend_start=trend_start, trend_end=trend_end)
