from fastapi import APIRouter, Depends, HTTPException, Request, status
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from datetime import datetime

from syllabus_hub.core.database import get_db
from syllabus_hub.core.exceptions import DuplicateRecordError
from syllabus_hub.core.logging_config import logger, set_user_id
from syllabus_hub.core.rate_limiter import auth_rate_limit
from syllabus_hub.core.security import (
    REFRESH_TOKEN_TYPE,
    create_token_pair,
    decode_token,
    get_password_hash,
    verify_password,
)
from syllabus_hub.core.types import is_valid_uuid
from syllabus_hub.models.user import User, UserRole
from syllabus_hub.modules.auth.dependencies import get_current_user
from syllabus_hub.schemas.auth import (
    AuthResponse,
    RefreshTokenRequest,
    Token,
    UserLogin,
    UserRegister,
    UserResponse,
)
from syllabus_hub.schemas.common import MessageResponse

router = APIRouter()


def _client_ip(request: Request) -> str:
    return request.client.host if request.client else "unknown"


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
@auth_rate_limit()
async def register(
    request: Request,
    user_data: UserRegister,
    db: AsyncSession = Depends(get_db)
):
    """Register a new student account"""
    existing = await db.scalar(select(User.id).where(User.email == user_data.email))
    if existing:
        logger.log_auth_event(
            event="register",
            success=False,
            user_email=user_data.email,
            reason="Email already registered",
            client_ip=_client_ip(request)
        )
        raise DuplicateRecordError("User already exists", field="email")

    user = User(
        name=user_data.name,
        email=user_data.email,
        hashed_password=get_password_hash(user_data.password),
        role=UserRole.STUDENT,
        is_active=True,
    )
    db.add(user)
    await db.commit()

    set_user_id(str(user.id))
    logger.log_auth_event(
        event="register",
        success=True,
        user_email=user.email,
        client_ip=_client_ip(request)
    )

    return {"user": UserResponse.model_validate(user), **create_token_pair(user)}


@router.post("/login", response_model=AuthResponse)
@auth_rate_limit()
async def login(
    request: Request,
    credentials: UserLogin,
    db: AsyncSession = Depends(get_db)
):
    """Login with email and password"""
    result = await db.execute(select(User).where(User.email == credentials.email))
    user = result.scalar_one_or_none()

    if not user or not user.is_active or not verify_password(credentials.password, user.hashed_password):
        logger.log_auth_event(
            event="login",
            success=False,
            user_email=credentials.email,
            reason="Invalid credentials" if not user or user.is_active else "Account inactive",
            client_ip=_client_ip(request)
        )
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid credentials"
        )

    user.last_login = datetime.utcnow()
    await db.commit()

    set_user_id(str(user.id))
    logger.log_auth_event(
        event="login",
        success=True,
        user_email=user.email,
        client_ip=_client_ip(request),
        user_role=user.role.value
    )

    return {"user": UserResponse.model_validate(user), **create_token_pair(user)}


@router.post("/refresh", response_model=Token)
@auth_rate_limit()
async def refresh_token(
    request: Request,
    body: RefreshTokenRequest,
    db: AsyncSession = Depends(get_db)
):
    """Exchange a refresh token for a new token pair"""
    payload = decode_token(body.refresh_token)

    if payload.get("type") != REFRESH_TOKEN_TYPE:
        logger.log_auth_event(event="refresh", success=False, reason="Wrong token type")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token type"
        )

    user_id = payload.get("sub")
    user = None
    if user_id and is_valid_uuid(user_id):
        user = await db.scalar(select(User).where(User.id == user_id))

    if not user or not user.is_active:
        logger.log_auth_event(event="refresh", success=False, reason="Unknown or inactive user")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid refresh token"
        )

    logger.log_auth_event(event="refresh", success=True, user_email=user.email)
    return create_token_pair(user)


@router.post("/logout", response_model=MessageResponse)
async def logout(current_user: User = Depends(get_current_user)):
    """Tokens are stateless; clients drop them"""
    logger.log_auth_event(event="logout", success=True, user_email=current_user.email)
    return {"message": "Logged out successfully"}


@router.get("/me", response_model=UserResponse)
async def get_me(current_user: User = Depends(get_current_user)):
    """Get current user"""
    return current_user
