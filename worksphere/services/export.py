import csv
import io
from typing import Iterable

from worksphere.models.task import Task

CSV_COLUMNS = [
    "Title", "Description", "Assigned To", "Due Date", "Status", "Priority", "Created At",
]


def tasks_to_csv(tasks: Iterable[Task]) -> str:
    """Render tasks as CSV, every field quoted, one row per task in input order."""
    buf = io.StringIO()
    writer = csv.writer(buf, quoting=csv.QUOTE_ALL, lineterminator="\n")
    buf.write(",".join(CSV_COLUMNS) + "\n")
    for task in tasks:
        writer.writerow([
            task.title,
            task.description or "",
            task.assigned_to,
            task.due_date,
            task.status,
            task.priority,
            task.created_at.isoformat(),
        ])
    return buf.getvalue()
