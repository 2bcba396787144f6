from datetime import datetime
from typing import Optional

from worksphere.models.user import UserRole
from worksphere.schemas.base import CamelModel


# Shared properties
class UserBase(CamelModel):
    username: Optional[str] = None
    name: Optional[str] = None
    email: Optional[str] = None
    role: Optional[UserRole] = None


# Properties to receive via API on creation; emptiness is checked by the service
class UserCreate(UserBase):
    password: Optional[str] = None


# Properties to receive via API on update
class UserUpdate(UserBase):
    password: Optional[str] = None


# Properties to return to client
class UserRead(CamelModel):
    id: str
    username: str
    name: str
    email: str
    role: UserRole
    created_at: datetime
