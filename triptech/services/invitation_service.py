import logging
import time
from datetime import datetime, timezone
from typing import Optional, Tuple
from uuid import UUID

from sqlalchemy import update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlmodel import Session, select, func

from ..core.exceptions import Conflict, Forbidden, Internal, NotFound, ValidationError
from ..core.permission import Permission, require_permission
from ..models.invitations import Invitation
from ..models.types import InvitationStatus, InvitationType, UserRole
from ..models.users import User
from ..schemas.auth import TokenClaims
from ..schemas.invitations import (
    InvitationCreate,
    InvitationLists,
    InvitationPagination,
    InvitationRead,
    InvitationSent,
    InvitationStatusRead,
    LogisticsInvitationCreate,
    LogisticsInvitationSent,
)

logger = logging.getLogger(__name__)

TERMINAL_STATUSES = (InvitationStatus.ACCEPTED, InvitationStatus.REJECTED)


def _epoch_millis() -> int:
    return int(time.time() * 1000)


def generate_invitation_ids(sender_id: UUID) -> Tuple[str, str]:
    """Return ``(invitation_id, request_id)`` stamped with the current epoch millis."""
    stamp = _epoch_millis()
    return f"INV-{sender_id}-{stamp}", f"REQ-{stamp}"


def _save(db: Session, invitation: Invitation, action: str) -> None:
    try:
        db.add(invitation)
        db.commit()
        db.refresh(invitation)
    except IntegrityError:
        db.rollback()
        logger.warning("Duplicate invitation %s while trying to %s", invitation.invitation_id, action)
        raise Conflict("Invitation already exists")
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Failed to %s", action)
        raise Internal()


def send_invite(db: Session, caller: TokenClaims, invite_data: InvitationCreate) -> InvitationSent:
    """
    Create an invitation from a logistics coordinator to a recipient email.

    When ``manual_entry`` is off the coordinator name and company shown on the
    invitation are copied from the sender's profile; when it is on, the
    supplied ``lc_name``/``lc_company`` are stored as given.
    """
    require_permission(
        caller.role,
        Permission.SEND_INVITES,
        "Only Logistics Coordinators can send invites this way",
    )

    invitation_id, request_id = generate_invitation_ids(caller.id)
    sender = db.get(User, caller.id)
    from_name = sender.full_name if sender else None
    from_company = sender.company_name if sender else None

    if invite_data.manual_entry:
        lc_name, lc_company = invite_data.lc_name, invite_data.lc_company
    else:
        lc_name, lc_company = from_name, from_company

    invitation = Invitation(
        invitation_id=invitation_id,
        request_id=request_id,
        invitation_type=InvitationType.FROM_LOGISTICS,
        from_user_id=caller.id,
        from_role=caller.role,
        to_email=invite_data.recipient_email,
        send_to=invite_data.send_to,
        manual_entry=invite_data.manual_entry,
        lc_name=lc_name,
        lc_company_name=lc_company,
        status=InvitationStatus.REQUEST_SENT,
    )
    _save(db, invitation, "send invite")
    logger.info("Invitation %s sent by %s to %s", invitation_id, caller.id, invite_data.recipient_email)

    return InvitationSent(
        invitation_id=invitation_id,
        request_id=request_id,
        from_user_id=caller.id,
        from_name=from_name,
        from_email=sender.email if sender else None,
        recipient_email=invite_data.recipient_email,
        lc_name=lc_name,
        lc_company=lc_company,
        send_to=invite_data.send_to,
        manual_entry=invite_data.manual_entry,
        status=invitation.status,
    )


def send_invite_to_logistics(
    db: Session, caller: TokenClaims, invite_data: LogisticsInvitationCreate
) -> LogisticsInvitationSent:
    """Create an invitation from a trip owner or vendor to a registered logistics coordinator."""
    require_permission(
        caller.role,
        Permission.INVITE_LOGISTICS,
        "Only Trip Owners or Vendors can send invites to Logistics Coordinators",
    )

    coordinator = db.exec(
        select(User).where(
            User.email == invite_data.recipient_email,
            User.role == UserRole.LOGISTICS
        )
    ).first()
    if not coordinator:
        raise NotFound("Logistics Coordinator not registered")

    invitation_id, request_id = generate_invitation_ids(caller.id)
    sender = db.get(User, caller.id)
    from_name = sender.full_name if sender else ""

    invitation = Invitation(
        invitation_id=invitation_id,
        request_id=request_id,
        invitation_type=InvitationType.TO_LOGISTICS,
        from_user_id=caller.id,
        from_role=caller.role,
        to_email=invite_data.recipient_email,
        to_role=UserRole.LOGISTICS,
        status=InvitationStatus.REQUEST_SENT,
    )
    _save(db, invitation, "send invite to logistics coordinator")
    logger.info("Invitation %s sent by %s to coordinator %s", invitation_id, caller.id, coordinator.id)

    return LogisticsInvitationSent(
        invitation_id=invitation_id,
        request_id=request_id,
        from_user_id=caller.id,
        from_role=caller.role,
        from_name=from_name,
        recipient_email=invite_data.recipient_email,
        recipient_role=UserRole.LOGISTICS,
        status=invitation.status,
    )


def get_invite(db: Session, invitation_id: str) -> Invitation:
    invitation = db.exec(
        select(Invitation).where(Invitation.invitation_id == invitation_id)
    ).first()
    if not invitation:
        raise NotFound("Invitation not found")
    return invitation


def respond_to_invite(
    db: Session,
    invitation_id: str,
    decision: InvitationStatus,
    rejection_reason: Optional[str] = None,
) -> InvitationStatusRead:
    """
    Move an invitation from Request_Sent to Accepted or Rejected.

    Accepted and Rejected are terminal: a second response is refused with
    Conflict instead of overwriting the first one.
    """
    if decision not in TERMINAL_STATUSES:
        raise ValidationError("Decision must be Accepted or Rejected")

    values = {"status": decision, "response_date": datetime.now(timezone.utc)}
    if decision == InvitationStatus.REJECTED:
        values["response_notes"] = rejection_reason

    # Status check and write in one statement
    statement = (
        update(Invitation)
        .where(
            Invitation.invitation_id == invitation_id,
            Invitation.status == InvitationStatus.REQUEST_SENT
        )
        .values(**values)
    )
    try:
        result = db.connection().execute(statement)
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Failed to mark invitation %s %s", invitation_id, decision.value)
        raise Internal()

    if result.rowcount == 0:
        current = db.exec(
            select(Invitation.status).where(Invitation.invitation_id == invitation_id)
        ).first()
        if current is None:
            raise NotFound("Invitation not found")
        raise Conflict(f"Invitation already {current.value}")

    logger.info("Invitation %s %s", invitation_id, decision.value)

    return InvitationStatusRead(invitation_id=invitation_id, status=decision)


def delete_invite(db: Session, caller: TokenClaims, invitation_id: str) -> None:
    # Unknown id and foreign sender are reported the same way
    invitation = db.exec(
        select(Invitation).where(
            Invitation.invitation_id == invitation_id,
            Invitation.from_user_id == caller.id
        )
    ).first()
    if not invitation:
        raise Forbidden("Only the sender can delete this invitation or invitation not found")

    try:
        db.delete(invitation)
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Failed to delete invitation %s", invitation_id)
        raise Internal()
    logger.info("Invitation %s deleted by %s", invitation_id, caller.id)


def _partition(db: Session, condition, status, invitation_type, offset: int, limit: int):
    conditions = [condition]
    if status:
        conditions.append(Invitation.status == status)
    if invitation_type:
        conditions.append(Invitation.invitation_type == invitation_type)

    total = db.exec(
        select(func.count()).select_from(Invitation).where(*conditions)
    ).one()
    rows = db.exec(
        select(Invitation)
        .where(*conditions)
        .order_by(Invitation.id.desc())
        .offset(offset)
        .limit(limit)
    ).all()
    return [InvitationRead.model_validate(row) for row in rows], total


def list_invites(
    db: Session,
    caller: TokenClaims,
    status: Optional[InvitationStatus] = None,
    invitation_type: Optional[InvitationType] = None,
    page: int = 1,
    limit: int = 10,
) -> Tuple[InvitationLists, InvitationPagination]:
    """
    List the invitations the caller sent and the ones addressed to the caller's email.

    ``page``/``limit`` slice each partition independently; ``total`` counts every
    match in both partitions. An invitation a user sent to themselves shows up
    in both lists.
    """
    offset = (page - 1) * limit

    sent, sent_total = _partition(
        db, Invitation.from_user_id == caller.id, status, invitation_type, offset, limit
    )

    caller_user = db.get(User, caller.id)
    if caller_user:
        received, received_total = _partition(
            db, Invitation.to_email == caller_user.email, status, invitation_type, offset, limit
        )
    else:
        received, received_total = [], 0

    return (
        InvitationLists(sent=sent, received=received),
        InvitationPagination(
            total=sent_total + received_total,
            sent_total=sent_total,
            received_total=received_total,
            page=page,
            limit=limit,
        ),
    )
