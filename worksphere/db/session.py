import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, SQLModel, create_engine

from worksphere.core.config import settings
from worksphere.core.errors import StorageError

logger = logging.getLogger(__name__)

_engine = None


def get_engine():
    global _engine

    if _engine is not None:
        return _engine

    db_url = settings.DATABASE_URL

    # SQLite fix for multithreading
    connect_args = {"check_same_thread": False} if db_url.startswith("sqlite") else {}

    _engine = create_engine(db_url, connect_args=connect_args, pool_pre_ping=True)
    return _engine

engine = get_engine()

def get_db():
    with Session(engine) as session:
        yield session


def save(db: Session, obj: SQLModel) -> SQLModel:
    """
    Persist a single record in its own transaction and refresh it.

    Any database failure rolls the session back and surfaces as StorageError;
    nothing is retried.
    """
    try:
        db.add(obj)
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("Failed to save %s", type(obj).__name__)
        raise StorageError("Failed to save record") from exc
    db.refresh(obj)
    return obj


def remove(db: Session, obj: SQLModel) -> None:
    """Delete a single record in its own transaction."""
    try:
        db.delete(obj)
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("Failed to delete %s", type(obj).__name__)
        raise StorageError("Failed to delete record") from exc
