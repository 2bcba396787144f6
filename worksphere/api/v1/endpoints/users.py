"""
User Management Endpoints Module

This module provides CRUD endpoints for user accounts. All endpoints require an
administrator requester. Passwords are hashed on the way in and never returned.
"""
from typing import Any, List

from fastapi import APIRouter, Depends, status
from sqlmodel import Session

from worksphere.api import deps
from worksphere.db.session import get_db
from worksphere.schemas.user import UserCreate, UserRead, UserUpdate
from worksphere.services import users
from worksphere.services.filtering import Requester

router = APIRouter()


@router.get("", response_model=List[UserRead])
def read_users(
    db: Session = Depends(get_db),
    current_user: Requester = Depends(deps.get_admin_requester),
) -> Any:
    """
    Retrieve all users (passwords excluded).
    """
    return users.list_users(db)


@router.post("", response_model=UserRead, status_code=status.HTTP_201_CREATED)
def create_user(
    *,
    db: Session = Depends(get_db),
    user_in: UserCreate,
    current_user: Requester = Depends(deps.get_admin_requester),
) -> Any:
    """
    Create a new user.

    Raises:
        ValidationError 400: if username, password, name or role is missing
        ConflictError 409: if a user with this username already exists
    """
    return users.create_user(db, user_in)


@router.get("/{user_id}", response_model=UserRead)
def read_user_by_id(
    user_id: str,
    db: Session = Depends(get_db),
    current_user: Requester = Depends(deps.get_admin_requester),
) -> Any:
    return users.get_user(db, user_id)


@router.put("/{user_id}", response_model=UserRead)
def update_user(
    *,
    db: Session = Depends(get_db),
    user_id: str,
    user_in: UserUpdate,
    current_user: Requester = Depends(deps.get_admin_requester),
) -> Any:
    """
    Update a user's profile. Only provided, non-blank fields change.

    Raises:
        NotFoundError 404: if the user doesn't exist
        ConflictError 409: if the new username is taken
    """
    return users.update_user(db, user_id, user_in)


@router.delete("/{user_id}")
def delete_user(
    *,
    db: Session = Depends(get_db),
    user_id: str,
    current_user: Requester = Depends(deps.get_admin_requester),
) -> Any:
    """
    Delete a user. Tasks created by or assigned to them are kept.
    """
    users.delete_user(db, user_id)
    return {"message": "User deleted successfully"}
