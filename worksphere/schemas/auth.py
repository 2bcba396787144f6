from pydantic import BaseModel

from worksphere.schemas.user import UserRead


class LoginRequest(BaseModel):
    username: str
    password: str


class LoginResponse(BaseModel):
    success: bool = True
    user: UserRead
    access_token: str
    token_type: str = "bearer"
