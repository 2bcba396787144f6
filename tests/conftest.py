# tests/conftest.py


import pytest
from fastapi.testclient import TestClient
from sqlmodel import Session, SQLModel, create_engine
from sqlmodel.pool import StaticPool

from worksphere import models  # noqa: F401
from worksphere.core.security import get_password_hash
from worksphere.db.session import get_db
from worksphere.main import app
from worksphere.models import User, UserRole



@pytest.fixture()
def engine():
    """In-memory SQLite shared across connections for the duration of one test."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    yield engine
    SQLModel.metadata.drop_all(engine)


@pytest.fixture()
def session(engine):
    with Session(engine) as session:
        yield session


@pytest.fixture()
def client(session):
    def get_db_override():
        yield session

    app.dependency_overrides[get_db] = get_db_override
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture()
def users(session):
    """
    admin (admin role), u1 and u2 (user role).

    Only u1 has a real bcrypt hash; the others never log in, which keeps
    the suite fast.
    """
    accounts = {
        "admin": User(id="admin", username="admin", password="x", name="Administrator",
                      role=UserRole.ADMIN.value),
        "u1": User(id="u1", username="u1", password=get_password_hash("secret1"),
                   name="User One", role=UserRole.USER.value),
        "u2": User(id="u2", username="u2", password="x", name="User Two",
                   role=UserRole.USER.value),
    }
    for user in accounts.values():
        session.add(user)
    session.commit()
    return accounts


