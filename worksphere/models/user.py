"""
User Model Module

This module defines the User model and UserRole enumeration for authentication
and authorization throughout the application.
"""
from enum import Enum
from datetime import datetime
import uuid

from sqlalchemy import Column, DateTime
from sqlmodel import SQLModel, Field

from worksphere.core.clock import utcnow


class UserRole(str, Enum):
    """
    Enumeration of user roles.

    - USER: sees and edits the tasks they created or were assigned
    - ADMIN: sees every task, edits every task, manages user accounts
    """
    USER = "user"
    ADMIN = "admin"


class User(SQLModel, table=True):
    """
    User model representing an account.

    Attributes:
        id: Unique identifier (uuid4 hex) generated for each user
        username: Login name (required, unique, indexed)
        password: bcrypt hash, never returned by the API
        name: Display name
        email: Contact address, may be empty
        role: UserRole value
        created_at: UTC timestamp when the account was created
    """
    __tablename__ = "users"

    # Primary key
    id: str = Field(default_factory=lambda: uuid.uuid4().hex, primary_key=True)

    # Authentication fields
    username: str = Field(unique=True, index=True, nullable=False)
    password: str = Field(nullable=False)  # Hashed password (bcrypt)

    # Profile information
    name: str
    email: str = Field(default="")

    role: str = Field(default=UserRole.USER.value)

    # Audit timestamp
    created_at: datetime = Field(
        default_factory=utcnow, sa_column=Column(DateTime(timezone=False), nullable=False)
    )

    @property
    def is_privileged(self) -> bool:
        """Helper to check if user has the admin role."""
        return self.role == UserRole.ADMIN
