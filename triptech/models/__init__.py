from .base import TimestampModel
from .types import (
    UserRole,
    UserStatus,
    InvitationStatus,
    InvitationType,
    VendorStatus,
    VehicleStatus,
)
from .users import User
from .invitations import Invitation
from .vendors import Vendor, Vehicle

__all__ = [
    "TimestampModel",
    "UserRole",
    "UserStatus",
    "InvitationStatus",
    "InvitationType",
    "VendorStatus",
    "VehicleStatus",
    "User",
    "Invitation",
    "Vendor",
    "Vehicle",
]
