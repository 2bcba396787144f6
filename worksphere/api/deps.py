"""
API Dependencies Module

This module provides FastAPI dependency functions that work out who a request is
evaluated for. A bearer token (Authorization header or the http-only
``access_token`` cookie) takes precedence; otherwise the ``userId`` query
parameter names the requester. The role always comes from the stored user,
never from the client.
"""
from typing import Optional

from fastapi import Depends, Query, Request
from fastapi.security import OAuth2PasswordBearer
from jose import JWTError
from sqlmodel import Session

from worksphere.core.config import settings
from worksphere.core.errors import AuthenticationError, PermissionDeniedError
from worksphere.core.security import decode_access_token
from worksphere.db.session import get_db
from worksphere.models.user import User
from worksphere.services.filtering import Requester

# auto_error=False allows us to check cookies and userId as a fallback
reusable_oauth2 = OAuth2PasswordBearer(
    tokenUrl=f"{settings.API_PREFIX}/login",
    auto_error=False  # Don't raise error immediately if Authorization header is missing
)


def get_token_user(
    request: Request,
    db: Session = Depends(get_db),
    token: Optional[str] = Depends(reusable_oauth2),
) -> Optional[User]:
    """
    Return the user named by a bearer token, or None when no token was sent.

    Raises:
        AuthenticationError: if a token was sent but is invalid, expired, or
            names a user that no longer exists
    """
    # Try Authorization header first, then fall back to cookie
    if not token:
        token = request.cookies.get("access_token")
        # Cookie format is "Bearer <token>", so we need to extract the token
        if token and token.startswith("Bearer "):
            token = token.replace("Bearer ", "", 1)

    if not token:
        return None

    try:
        user_id = decode_access_token(token)
    except JWTError:
        raise AuthenticationError("Could not validate credentials")

    user = db.get(User, user_id) if user_id else None
    if not user:
        raise AuthenticationError("Could not validate credentials")
    return user


def requester_for_id(db: Session, user_id: str) -> Requester:
    """
    Build a Requester for a bare user id.

    Ids that match no stored user are treated as plain users, so they see only
    tasks they created or were assigned.
    """
    user = db.get(User, user_id)
    if user:
        return Requester.from_user(user)
    return Requester(id=user_id)


def get_optional_requester(
    db: Session = Depends(get_db),
    token_user: Optional[User] = Depends(get_token_user),
    requester_id: Optional[str] = Query(None, alias="userId"),
) -> Optional[Requester]:
    if token_user is not None:
        return Requester.from_user(token_user)
    if requester_id:
        return requester_for_id(db, requester_id)
    return None


def get_requester(
    requester: Optional[Requester] = Depends(get_optional_requester),
) -> Requester:
    """
    Dependency that requires an identified requester.

    Raises:
        AuthenticationError: if neither a token nor ``userId`` was supplied
    """
    if requester is None:
        raise AuthenticationError("Not authenticated")
    return requester


def get_admin_requester(
    requester: Requester = Depends(get_requester),
) -> Requester:
    """
    Dependency that requires the requester to be an administrator.
    """
    if not requester.is_admin:
        raise PermissionDeniedError("The user doesn't have enough privileges")
    return requester
