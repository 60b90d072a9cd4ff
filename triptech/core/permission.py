from enum import Flag, auto

from .exceptions import Forbidden
from ..models.types import UserRole


class Permission(Flag):
    NONE = 0
    SEND_INVITES = auto()
    INVITE_LOGISTICS = auto()


ROLE_PERMISSIONS = {

    UserRole.LOGISTICS: (
        Permission.SEND_INVITES
    ),
    UserRole.OWNER: (
        Permission.INVITE_LOGISTICS
    ),
    UserRole.VENDOR: (
        Permission.INVITE_LOGISTICS
    ),
    UserRole.ADMIN: Permission.NONE,
    UserRole.OPERATIONS: Permission.NONE,
    UserRole.DRIVER: Permission.NONE,
}


def has_permission(role: UserRole, permission: Permission) -> bool:
    return bool(ROLE_PERMISSIONS.get(role, Permission.NONE) & permission)


def require_permission(role: UserRole, permission: Permission, detail: str):
    """Raise Forbidden unless ``role`` grants ``permission``."""
    if not has_permission(role, permission):
        raise Forbidden(detail)
