from fastapi import APIRouter, Depends
from fastapi.responses import Response
from sqlmodel import Session, select

from worksphere.api import deps
from worksphere.db.session import get_db
from worksphere.models.task import Task
from worksphere.services.export import tasks_to_csv
from worksphere.services.filtering import Requester, list_tasks

router = APIRouter()


@router.get("/csv")
def export_csv(
    db: Session = Depends(get_db),
    requester: Requester = Depends(deps.get_requester),
):
    """
    Download the requester's visible tasks as ``tasks.csv``.
    """
    tasks = list_tasks(db.exec(select(Task).order_by(Task.created_at)).all(), requester)
    return Response(
        content=tasks_to_csv(tasks),
        media_type="text/csv",
        headers={"Content-Disposition": "attachment; filename=tasks.csv"},
    )
