from typing import Optional
from uuid import UUID
from pydantic import field_validator
from sqlmodel import SQLModel, Field
from ..models.types import UserRole, UserStatus


class UserRead(SQLModel):
    id: UUID
    username: str
    email: str
    full_name: str
    role: UserRole
    status: UserStatus
    password_changed: bool


class ProfileRead(UserRead):
    company_name: str
    phone: Optional[str] = None
    address: Optional[str] = None


class ProfileUpdate(SQLModel):
    full_name: Optional[str] = Field(default=None, min_length=1)
    phone: Optional[str] = None
    address: Optional[str] = None

    # Omitting full_name leaves it alone; an explicit null is rejected
    @field_validator('full_name')
    def validate_full_name(cls, v):
        if v is None:
            raise ValueError('Full name cannot be null')
        return v
