from datetime import datetime
from typing import Optional
from uuid import UUID
from sqlmodel import Field
from .base import TimestampModel
from .types import UserRole, InvitationStatus, InvitationType


class Invitation(TimestampModel, table=True):
    __tablename__ = "invitations"

    id: Optional[int] = Field(default=None, primary_key=True)
    invitation_id: str = Field(unique=True, index=True)
    request_id: str
    invitation_type: InvitationType = Field(index=True)

    # Sender snapshot taken at send time
    from_user_id: UUID = Field(foreign_key="users.id", index=True)
    from_role: UserRole

    to_email: Optional[str] = Field(default=None, index=True)
    to_role: Optional[UserRole] = None

    # Only used by invitations sent by a logistics coordinator
    send_to: Optional[str] = None
    manual_entry: bool = Field(default=False)
    lc_name: Optional[str] = None
    lc_company_name: Optional[str] = None

    status: InvitationStatus = Field(default=InvitationStatus.REQUEST_SENT, index=True)
    response_notes: Optional[str] = None
    response_date: Optional[datetime] = None
