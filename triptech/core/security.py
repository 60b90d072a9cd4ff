"""
Password hashing, session tokens and the bearer-token auth gate.

Session tokens are stateless: the claims (id, username, role) are a snapshot
taken at login and are trusted until the token expires. A role or status
change made after login is not seen by ``get_current_user`` until the client
logs in again. Logout is client-side only; nothing is revoked here.
"""
import logging
from datetime import datetime, timezone, timedelta
from typing import Optional
from uuid import UUID

from jose import jwt, JWTError, ExpiredSignatureError
from passlib.context import CryptContext
from fastapi import Request, Security
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from pydantic import ValidationError as PydanticValidationError

from .config import get_settings
from .exceptions import (
    Unauthenticated,
    TokenError,
    MalformedTokenError,
    InvalidTokenError,
    ExpiredTokenError,
)
from ..models.types import UserRole
from ..schemas.auth import TokenClaims

logger = logging.getLogger(__name__)

pwd_context = CryptContext(schemes=["argon2"], deprecated="auto")
security = HTTPBearer(auto_error=False)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)


def create_access_token(
    user_id: UUID,
    username: str,
    role: UserRole,
    expires_delta: Optional[timedelta] = None,
) -> str:
    settings = get_settings()
    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    to_encode = {
        "sub": str(user_id),
        "username": username,
        "role": UserRole(role).value,
        "exp": datetime.now(timezone.utc) + expires_delta,
        "type": "access",
    }
    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def verify_access_token(token: str) -> TokenClaims:
    """
    Verify a session token and return its claims.

    Raises:
        MalformedTokenError: the token is not a JWT or lacks the claim set (exp and sub included)
        ExpiredTokenError: the signature is valid but the token has expired
        InvalidTokenError: the signature or algorithm does not match
    """
    settings = get_settings()
    try:
        jwt.get_unverified_header(token)
        unverified = jwt.get_unverified_claims(token)
    except JWTError as e:
        raise MalformedTokenError(str(e))
    missing = [claim for claim in ("sub", "exp") if claim not in unverified]
    if missing:
        raise MalformedTokenError(f"Missing claims: {', '.join(missing)}")

    try:
        payload = jwt.decode(
            token,
            settings.SECRET_KEY,
            algorithms=[settings.ALGORITHM],
            options={"require_exp": True, "require_sub": True},
        )
    except ExpiredSignatureError as e:
        raise ExpiredTokenError(str(e))
    except JWTError as e:
        raise InvalidTokenError(str(e))

    if payload.get("type") != "access":
        raise InvalidTokenError("Not an access token")
    try:
        return TokenClaims(
            id=payload.get("sub"),
            username=payload.get("username"),
            role=payload.get("role"),
        )
    except PydanticValidationError as e:
        raise MalformedTokenError(str(e))


async def get_current_user(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Security(security),
) -> TokenClaims:
    if credentials is None or not credentials.credentials:
        raise Unauthenticated("No token, authorization denied")

    try:
        claims = verify_access_token(credentials.credentials)
    except TokenError as e:
        logger.info("Rejected token (%s): %s", type(e).__name__, e)
        raise Unauthenticated("Token is not valid")

    request.state.user = claims
    return claims
