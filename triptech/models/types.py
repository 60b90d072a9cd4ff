from enum import Enum


class UserRole(str, Enum):
    OWNER = "owner"
    VENDOR = "vendor"
    LOGISTICS = "logistics"
    ADMIN = "admin"
    DRIVER = "driver"
    OPERATIONS = "operations"


class UserStatus(str, Enum):
    PENDING = "Pending"
    ACTIVE = "Active"
    INACTIVE = "Inactive"


class InvitationStatus(str, Enum):
    REQUEST_SENT = "Request_Sent"
    ACCEPTED = "Accepted"
    REJECTED = "Rejected"


class InvitationType(str, Enum):
    FROM_LOGISTICS = "from_logistics"  # logistics coordinator -> recipient
    TO_LOGISTICS = "to_logistics"  # owner or vendor -> logistics coordinator


class VendorStatus(str, Enum):
    ACTIVE = "Active"
    INACTIVE = "Inactive"


class VehicleStatus(str, Enum):
    AVAILABLE = "Available"
    IN_USE = "In_Use"
    MAINTENANCE = "Maintenance"
