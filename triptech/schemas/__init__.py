from .common import ApiResponse, Pagination
from .users import UserRead, ProfileRead, ProfileUpdate
from .auth import TokenClaims, RegisterRequest, RegisterResponse, LoginRequest, TokenResponse

__all__ = [
    "ApiResponse", "Pagination",
    "UserRead", "ProfileRead", "ProfileUpdate",
    "TokenClaims", "RegisterRequest", "RegisterResponse", "LoginRequest", "TokenResponse",
]
