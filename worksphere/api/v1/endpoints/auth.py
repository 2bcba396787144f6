"""
Authentication Endpoints Module

Login issues a JWT access token and sets it as an HTTP-only cookie, so both API
clients (bearer header) and the browser dashboard (cookie) can authenticate.
"""
from datetime import timedelta

from fastapi import APIRouter, Depends, Response
from fastapi.responses import JSONResponse
from sqlmodel import Session

from worksphere.core.config import settings
from worksphere.core.errors import AuthenticationError
from worksphere.core.security import create_access_token
from worksphere.db.session import get_db
from worksphere.schemas.auth import LoginRequest, LoginResponse
from worksphere.schemas.user import UserRead
from worksphere.services.users import authenticate

router = APIRouter()


@router.post("/login", response_model=LoginResponse)
def login(login_in: LoginRequest, response: Response, db: Session = Depends(get_db)):
    """
    Authenticate a user and issue an access token.

    Raises:
        AuthenticationError 401: If credentials are invalid
    """
    user = authenticate(db, login_in.username, login_in.password)
    if not user:
        raise AuthenticationError("Invalid credentials")

    access_token_expires = timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    access_token = create_access_token(subject=user.id, expires_delta=access_token_expires)

    # httponly=True prevents JavaScript access to the cookie
    response.set_cookie(
        key="access_token",
        value=f"Bearer {access_token}",
        httponly=True,
        max_age=settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60,  # Convert minutes to seconds
        samesite="lax"
    )

    return LoginResponse(user=UserRead.model_validate(user), access_token=access_token)


@router.get("/logout")
def logout():
    """
    Log out by clearing the authentication cookie. API clients simply discard
    their token.
    """
    response = JSONResponse({"success": True})
    response.delete_cookie("access_token")
    return response
