"""
User management: account CRUD, credential checks and default-account seeding.

Passwords are only ever stored as bcrypt hashes.
"""
import logging
from typing import List, Optional

from sqlmodel import Session, select

from worksphere.core.errors import ConflictError, NotFoundError, ValidationError
from worksphere.core.security import get_password_hash, verify_password
from worksphere.db.session import remove, save
from worksphere.models.user import User, UserRole
from worksphere.schemas.user import UserCreate, UserUpdate

logger = logging.getLogger(__name__)

DEFAULT_USERS = [
    {
        "id": "admin",
        "username": "admin",
        "password": "admin123",
        "role": UserRole.ADMIN,
        "name": "Administrator",
        "email": "admin@worksphere.local",
    },
    {
        "id": "user1",
        "username": "user1",
        "password": "user123",
        "role": UserRole.USER,
        "name": "Demo User",
        "email": "user1@worksphere.local",
    },
]


def get_user_by_username(db: Session, username: str) -> Optional[User]:
    return db.exec(select(User).where(User.username == username)).first()


def list_users(db: Session) -> List[User]:
    return list(db.exec(select(User).order_by(User.created_at)).all())


def get_user(db: Session, user_id: str) -> User:
    user = db.get(User, user_id)
    if not user:
        raise NotFoundError("User not found")
    return user


def create_user(db: Session, user_in: UserCreate) -> User:
    """
    Raises:
        ValidationError: if username, password, name or role is missing
        ConflictError: if the username is taken
    """
    username = (user_in.username or "").strip()
    name = (user_in.name or "").strip()
    if not username or not user_in.password or not name or user_in.role is None:
        raise ValidationError("Username, password, name, and role are required")

    if get_user_by_username(db, username):
        raise ConflictError("Username already exists")

    db_user = User(
        username=username,
        password=get_password_hash(user_in.password),
        name=name,
        email=user_in.email or "",
        role=user_in.role.value,
    )
    save(db, db_user)
    logger.info("Created user id=%s username=%s role=%s", db_user.id, username, db_user.role)
    return db_user


def update_user(db: Session, user_id: str, user_in: UserUpdate) -> User:
    """
    Apply the non-blank fields of ``user_in``. ``email`` may be cleared.

    Raises:
        NotFoundError: if the user doesn't exist
        ConflictError: if the new username belongs to another user
    """
    db_user = get_user(db, user_id)

    # Get update data, excluding unset fields
    update_data = user_in.model_dump(exclude_unset=True)

    username = (update_data.get("username") or "").strip()
    if username:
        other = get_user_by_username(db, username)
        if other and other.id != user_id:
            raise ConflictError("Username already exists")
        db_user.username = username
    if update_data.get("password"):
        db_user.password = get_password_hash(update_data["password"])
    if (update_data.get("name") or "").strip():
        db_user.name = update_data["name"].strip()
    if "email" in update_data:
        db_user.email = update_data["email"] or ""
    if update_data.get("role") is not None:
        db_user.role = update_data["role"].value

    save(db, db_user)
    logger.info("Updated user id=%s fields=%s", user_id, sorted(update_data))
    return db_user


def delete_user(db: Session, user_id: str) -> None:
    """Tasks referencing the user are left untouched."""
    db_user = get_user(db, user_id)
    remove(db, db_user)
    logger.info("Deleted user id=%s", user_id)


def authenticate(db: Session, username: str, password: str) -> Optional[User]:
    user = get_user_by_username(db, username)
    if not user or not verify_password(password, user.password):
        logger.warning("Failed login for username=%s", username)
        return None
    return user


def ensure_default_users(db: Session) -> int:
    """Seed the demo accounts into an empty users table. Returns how many were added."""
    if db.exec(select(User)).first() is not None:
        return 0
    for data in DEFAULT_USERS:
        data = dict(data)
        db.add(
            User(
                id=data["id"],
                username=data["username"],
                password=get_password_hash(data["password"]),
                name=data["name"],
                email=data["email"],
                role=data["role"].value,
            )
        )
    db.commit()
    logger.info("Seeded %d default users", len(DEFAULT_USERS))
    return len(DEFAULT_USERS)
