"""
Import the legacy flat-file collections (tasks.json / users.json) into the database.

Statuses and due dates are canonicalised, the legacy ``userId`` field becomes
``creator_id``, and plaintext passwords are hashed. Records whose id already
exists are skipped, so the script can be re-run.

Usage: python scripts/import_json.py tasks.json users.json
"""
import json
import sys
import os
from datetime import datetime

from sqlmodel import Session, SQLModel

# Add current directory to path
sys.path.append(os.getcwd())

from worksphere.core.clock import utcnow
from worksphere.core.security import get_password_hash
from worksphere.db.session import engine
from worksphere.models import Task, TaskStatus, Priority, User, UserRole, UNASSIGNED
from worksphere.models.task import normalize_due_date


def _timestamp(value):
    if not value:
        return None
    # JavaScript toISOString() ends with "Z"
    return datetime.fromisoformat(value.replace("Z", "+00:00")).replace(tzinfo=None)


def task_from_record(record: dict) -> Task:
    status = TaskStatus.parse(record.get("status") or TaskStatus.TODO)
    created_at = _timestamp(record.get("createdAt")) or utcnow()
    completed_at = _timestamp(record.get("completedAt"))
    if status is TaskStatus.COMPLETE:
        completed_at = completed_at or created_at
    else:
        completed_at = None
    return Task(
        id=record["id"],
        title=record["title"],
        description=record.get("description") or "",
        assigned_to=record.get("assignedTo") or UNASSIGNED,
        due_date=normalize_due_date(record.get("dueDate")),
        status=status.value,
        priority=Priority.parse(record.get("priority") or Priority.MEDIUM).value,
        creator_id=record.get("userId") or record.get("creatorId") or "anonymous",
        created_at=created_at,
        completed_at=completed_at,
    )


def user_from_record(record: dict) -> User:
    return User(
        id=record["id"],
        username=record["username"],
        password=get_password_hash(record["password"]),
        name=record.get("name") or record["username"],
        email=record.get("email") or "",
        role=UserRole(record.get("role") or UserRole.USER).value,
        created_at=_timestamp(record.get("createdAt")) or utcnow(),
    )


def import_collections(tasks_path: str, users_path: str):
    print("--- Importing JSON collections ---")
    SQLModel.metadata.create_all(engine)

    with open(users_path, encoding="utf-8") as f:
        user_records = json.load(f)
    with open(tasks_path, encoding="utf-8") as f:
        task_records = json.load(f)

    with Session(engine) as session:
        added_users = 0
        for record in user_records:
            if session.get(User, record["id"]):
                continue
            session.add(user_from_record(record))
            added_users += 1

        added_tasks = 0
        for record in task_records:
            if session.get(Task, record["id"]):
                continue
            session.add(task_from_record(record))
            added_tasks += 1

        session.commit()

    print(f"✓ Imported {added_users} users and {added_tasks} tasks")

if __name__ == "__main__":
    if len(sys.argv) != 3:
        print(__doc__)
        sys.exit(1)
    import_collections(sys.argv[1], sys.argv[2])
