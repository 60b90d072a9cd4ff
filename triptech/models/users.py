from typing import Optional
from uuid import UUID, uuid4
from sqlmodel import SQLModel, Field
from .base import TimestampModel
from .types import UserRole, UserStatus


class UserBase(SQLModel):
    email: str = Field(unique=True, index=True)
    username: str = Field(unique=True, index=True)
    full_name: str
    company_name: str
    phone: Optional[str] = None
    address: Optional[str] = None


class User(UserBase, TimestampModel, table=True):
    __tablename__ = "users"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    password_hash: str
    # Assigned at registration; there is no endpoint that changes it
    role: UserRole = Field(index=True)
    status: UserStatus = Field(default=UserStatus.PENDING)
    password_changed: bool = Field(default=False)
