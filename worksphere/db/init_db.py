import logging

from sqlmodel import Session, SQLModel

from worksphere.core.config import settings
from worksphere.db.session import engine
from worksphere.services.users import ensure_default_users

# Register the table models on SQLModel.metadata
from worksphere import models  # noqa: F401

logger = logging.getLogger(__name__)


def init_db(bind=None) -> None:
    """Create missing tables and, if configured, seed the default accounts."""
    bind = bind or engine
    SQLModel.metadata.create_all(bind)
    logger.info("Database ready url=%s", bind.url.render_as_string(hide_password=True))

    if settings.SEED_DEFAULT_USERS:
        with Session(bind) as session:
            ensure_default_users(session)
