from typing import Optional
from uuid import UUID
from sqlmodel import SQLModel, Field
from ..models.types import UserRole, UserStatus
from .users import UserRead


class TokenClaims(SQLModel):
    id: UUID
    username: str
    role: UserRole


class RegisterRequest(SQLModel):
    email: str = Field(min_length=3)
    full_name: str = Field(min_length=1)
    company_name: str = Field(min_length=1)
    role: UserRole
    phone: Optional[str] = None
    address: Optional[str] = None


class Credentials(SQLModel):
    username: str
    password: str


class RegisterResponse(SQLModel):
    user_id: UUID
    email: str
    username: str
    full_name: str
    role: UserRole
    company_name: str
    status: UserStatus
    message: str
    notification: Optional[str] = None
    # Only populated in development mode
    default_password: Optional[str] = None
    credentials: Optional[Credentials] = None


class LoginRequest(SQLModel):
    username: str = Field(min_length=1)
    password: str = Field(min_length=1)
    role: str = Field(min_length=1)


class TokenResponse(SQLModel):
    token: str
    user: UserRead
