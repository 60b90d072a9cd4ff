from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlmodel import Session

from ..core.database import get_session
from ..core.security import get_current_user
from ..models.types import InvitationStatus, InvitationType
from ..schemas.auth import TokenClaims
from ..schemas.common import ApiResponse
from ..schemas.invitations import (
    InvitationCreate,
    InvitationListResponse,
    InvitationRead,
    InvitationReject,
    InvitationSent,
    InvitationStatusRead,
    LogisticsInvitationCreate,
    LogisticsInvitationSent,
)
from ..services import invitation_service


router = APIRouter()


@router.post("/send", response_model=ApiResponse[InvitationSent], status_code=status.HTTP_201_CREATED)
async def send_invite(
    invite_data: InvitationCreate,
    current_user: TokenClaims = Depends(get_current_user),
    session: Session = Depends(get_session),
):
    """Logistics coordinators invite a recipient by email."""
    invitation = invitation_service.send_invite(session, current_user, invite_data)
    return ApiResponse(data=invitation, message="Invite sent successfully")


@router.post("/send-to-lc", response_model=ApiResponse[LogisticsInvitationSent], status_code=status.HTTP_201_CREATED)
async def send_invite_to_logistics(
    invite_data: LogisticsInvitationCreate,
    current_user: TokenClaims = Depends(get_current_user),
    session: Session = Depends(get_session),
):
    """Trip owners and vendors invite a registered logistics coordinator."""
    invitation = invitation_service.send_invite_to_logistics(session, current_user, invite_data)
    return ApiResponse(data=invitation, message="Invite sent to Logistics Coordinator")


@router.get("", response_model=InvitationListResponse)
async def list_invites(
    status: Optional[InvitationStatus] = None,
    invitation_type: Optional[InvitationType] = Query(None, alias="type"),
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    current_user: TokenClaims = Depends(get_current_user),
    session: Session = Depends(get_session),
):
    lists, pagination = invitation_service.list_invites(
        session, current_user, status=status, invitation_type=invitation_type, page=page, limit=limit
    )
    return InvitationListResponse(data=lists, pagination=pagination)


@router.get("/{invitation_id}", response_model=ApiResponse[InvitationRead])
async def get_invite(
    invitation_id: str,
    current_user: TokenClaims = Depends(get_current_user),
    session: Session = Depends(get_session),
):
    invitation = invitation_service.get_invite(session, invitation_id)
    return ApiResponse(data=InvitationRead.model_validate(invitation))


@router.put("/{invitation_id}/accept", response_model=ApiResponse[InvitationStatusRead])
async def accept_invite(
    invitation_id: str,
    current_user: TokenClaims = Depends(get_current_user),
    session: Session = Depends(get_session),
):
    result = invitation_service.respond_to_invite(session, invitation_id, InvitationStatus.ACCEPTED)
    return ApiResponse(data=result, message="Invitation accepted successfully")


@router.put("/{invitation_id}/reject", response_model=ApiResponse[InvitationStatusRead])
async def reject_invite(
    invitation_id: str,
    reject_data: Optional[InvitationReject] = None,
    current_user: TokenClaims = Depends(get_current_user),
    session: Session = Depends(get_session),
):
    reason = reject_data.rejection_reason if reject_data else None
    result = invitation_service.respond_to_invite(
        session, invitation_id, InvitationStatus.REJECTED, rejection_reason=reason
    )
    return ApiResponse(data=result, message="Invitation rejected")


@router.delete("/{invitation_id}", response_model=ApiResponse[None])
async def delete_invite(
    invitation_id: str,
    current_user: TokenClaims = Depends(get_current_user),
    session: Session = Depends(get_session),
):
    invitation_service.delete_invite(session, current_user, invitation_id)
    return ApiResponse(message="Invitation deleted successfully")
