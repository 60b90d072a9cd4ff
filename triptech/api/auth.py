import logging
import secrets

from fastapi import APIRouter, Depends, BackgroundTasks, status
from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select

from ..models.types import UserRole, UserStatus
from ..models.users import User

from ..schemas.auth import (
    Credentials,
    LoginRequest,
    RegisterRequest,
    RegisterResponse,
    TokenClaims,
    TokenResponse,
)
from ..schemas.common import ApiResponse
from ..schemas.users import ProfileRead, ProfileUpdate, UserRead

from ..core.config import Settings, get_settings
from ..core.database import get_session
from ..core.exceptions import Conflict, Internal, NotFound, NotImplementedYet, Unauthenticated
from ..core.security import (
    create_access_token,
    get_current_user,
    get_password_hash,
    verify_password,
)

from ..services.email_services import EmailService, get_email_service


logger = logging.getLogger(__name__)
router = APIRouter()

INVALID_LOGIN = "Invalid username or password"


def generate_random_password(length: int = 8) -> str:
    return secrets.token_hex(length)[:length]


def generate_username(session: Session, email: str) -> str:
    """Derive a username from the email local part, adding a numeric suffix on collision."""
    base = email.split("@")[0]
    candidate, suffix = base, 0
    while session.exec(select(User).where(User.username == candidate)).first():
        suffix += 1
        candidate = f"{base}{suffix}"
    return candidate


@router.post("/register", response_model=ApiResponse[RegisterResponse], status_code=status.HTTP_201_CREATED)
async def register(
    background_tasks: BackgroundTasks,
    user_data: RegisterRequest,
    session: Session = Depends(get_session),
    settings: Settings = Depends(get_settings),
    email_service: EmailService = Depends(get_email_service),
):
    if session.exec(select(User).where(User.email == user_data.email)).first():
        raise Conflict("Email already registered")

    username = generate_username(session, user_data.email)
    password = generate_random_password()
    user = User(
        email=user_data.email,
        username=username,
        password_hash=get_password_hash(password),
        full_name=user_data.full_name,
        company_name=user_data.company_name,
        role=user_data.role,
        phone=user_data.phone,
        address=user_data.address,
        status=UserStatus.PENDING,
    )

    try:
        session.add(user)
        session.commit()
        session.refresh(user)
    except IntegrityError:
        session.rollback()
        raise Conflict("Email already registered")
    except Exception:
        session.rollback()
        logger.exception("Failed to register %s", user_data.email)
        raise Internal()

    logger.info("Registered user %s (%s) as %s", user.id, username, user.role.value)

    response = RegisterResponse(
        user_id=user.id,
        email=user.email,
        username=username,
        full_name=user.full_name,
        role=user.role,
        company_name=user.company_name,
        status=user.status,
        message="Account created successfully",
    )
    if settings.DEV_MODE:
        response.default_password = password
        response.credentials = Credentials(username=username, password=password)
        response.notification = f"Development mode: no email sent to {user.email}, credentials are in this response"
    else:
        background_tasks.add_task(
            email_service.send_credentials_email, user.email, user.full_name, username, password
        )
        response.notification = f"Credentials email sent to {user.email}"

    return ApiResponse(data=response, message="Account created successfully")


@router.post("/login", response_model=ApiResponse[TokenResponse])
async def login(login_data: LoginRequest, session: Session = Depends(get_session)):
    try:
        role = UserRole(login_data.role)
    except ValueError:
        raise Unauthenticated(INVALID_LOGIN)

    user = session.exec(
        select(User).where(User.username == login_data.username, User.role == role)
    ).first()

    if not user or not verify_password(login_data.password, user.password_hash):
        raise Unauthenticated(INVALID_LOGIN)

    token = create_access_token(user.id, user.username, user.role)

    return ApiResponse(
        data=TokenResponse(token=token, user=UserRead.model_validate(user)),
        message="Login successful",
    )


@router.post("/logout", response_model=ApiResponse[None])
async def logout():
    # Tokens are stateless; the client drops its copy
    return ApiResponse(message="Logged out successfully")


@router.get("/profile", response_model=ApiResponse[ProfileRead])
async def get_profile(
    current_user: TokenClaims = Depends(get_current_user),
    session: Session = Depends(get_session),
):
    user = session.get(User, current_user.id)
    if not user:
        raise NotFound("User not found")
    return ApiResponse(data=ProfileRead.model_validate(user))


@router.put("/profile", response_model=ApiResponse[ProfileRead])
async def update_profile(
    profile_data: ProfileUpdate,
    current_user: TokenClaims = Depends(get_current_user),
    session: Session = Depends(get_session),
):
    user = session.get(User, current_user.id)
    if not user:
        raise NotFound("User not found")

    # Role, email and username are not editable here
    for field, value in profile_data.model_dump(exclude_unset=True).items():
        setattr(user, field, value)

    try:
        session.add(user)
        session.commit()
        session.refresh(user)
    except Exception:
        session.rollback()
        logger.exception("Failed to update profile of %s", current_user.id)
        raise Internal()

    return ApiResponse(data=ProfileRead.model_validate(user), message="Profile updated successfully")


@router.post("/verify-email")
async def verify_email():
    raise NotImplementedYet()


@router.post("/change-password")
async def change_password(current_user: TokenClaims = Depends(get_current_user)):
    raise NotImplementedYet()
