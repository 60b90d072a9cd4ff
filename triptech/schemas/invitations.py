from datetime import datetime
from typing import List, Optional
from uuid import UUID
from pydantic import BaseModel
from sqlmodel import SQLModel, Field
from ..models.types import UserRole, InvitationStatus, InvitationType
from .common import Pagination


class InvitationCreate(SQLModel):
    recipient_email: str = Field(min_length=3)
    send_to: Optional[str] = None
    manual_entry: bool = False
    lc_name: Optional[str] = None
    lc_company: Optional[str] = None


class LogisticsInvitationCreate(SQLModel):
    recipient_email: str = Field(min_length=3)


class InvitationReject(SQLModel):
    rejection_reason: Optional[str] = None


class InvitationSent(SQLModel):
    invitation_id: str
    request_id: str
    from_user_id: UUID
    from_name: Optional[str] = None
    from_email: Optional[str] = None
    recipient_email: str
    lc_name: Optional[str] = None
    lc_company: Optional[str] = None
    send_to: Optional[str] = None
    manual_entry: bool
    status: InvitationStatus


class LogisticsInvitationSent(SQLModel):
    invitation_id: str
    request_id: str
    from_user_id: UUID
    from_role: UserRole
    from_name: str
    recipient_email: str
    recipient_role: UserRole
    status: InvitationStatus


class InvitationRead(SQLModel):
    invitation_id: str
    request_id: str
    invitation_type: InvitationType
    from_user_id: UUID
    from_role: UserRole
    to_email: Optional[str] = None
    to_role: Optional[UserRole] = None
    send_to: Optional[str] = None
    manual_entry: bool
    lc_name: Optional[str] = None
    lc_company_name: Optional[str] = None
    status: InvitationStatus
    response_notes: Optional[str] = None
    response_date: Optional[datetime] = None
    created_at: datetime


class InvitationStatusRead(SQLModel):
    invitation_id: str
    status: InvitationStatus


class InvitationLists(SQLModel):
    sent: List[InvitationRead]
    received: List[InvitationRead]


class InvitationPagination(Pagination):
    sent_total: int
    received_total: int


class InvitationListResponse(BaseModel):
    success: bool = True
    data: InvitationLists
    pagination: InvitationPagination
