from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from typing import Optional

from syllabus_hub.core.database import get_db
from syllabus_hub.core.logging_config import set_user_id
from syllabus_hub.core.permissions import Capability, has_capability
from syllabus_hub.core.security import decode_token, ACCESS_TOKEN_TYPE
from syllabus_hub.core.types import is_valid_uuid
from syllabus_hub.models.user import User

security = HTTPBearer(auto_error=False)


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


async def _user_from_token(token: str, db: AsyncSession) -> User:
    payload = decode_token(token)

    if payload.get("type") != ACCESS_TOKEN_TYPE:
        raise _unauthorized("Invalid token type")

    user_id = payload.get("sub")
    if not user_id or not is_valid_uuid(user_id):
        raise _unauthorized("Invalid token payload")

    result = await db.execute(select(User).where(User.id == user_id))
    user = result.scalar_one_or_none()

    if not user:
        raise _unauthorized("User not found")

    if not user.is_active:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="User account is inactive"
        )

    set_user_id(str(user.id))
    return user


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: AsyncSession = Depends(get_db)
) -> User:
    """Get current authenticated user"""
    if credentials is None:
        raise _unauthorized("Not authenticated")
    return await _user_from_token(credentials.credentials, db)


async def get_optional_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: AsyncSession = Depends(get_db)
) -> Optional[User]:
    """Current user when a bearer token is sent, otherwise None"""
    if credentials is None:
        return None
    return await _user_from_token(credentials.credentials, db)


def require_capability(capability: Capability):
    """
    Dependency factory: authenticated user whose role grants `capability`.

    Usage:
        @router.post("")
        async def create(user: User = Depends(require_capability(Capability.AUTHOR_ROADMAPS))):
            ...
    """

    async def dependency(current_user: User = Depends(get_current_user)) -> User:
        if not has_capability(current_user.role, capability):
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Insufficient permissions"
            )
        return current_user

    dependency.__name__ = f"require_{capability.value}"
    return dependency


async def get_current_admin(
    current_user: User = Depends(get_current_user)
) -> User:
    """Get current admin user"""
    if not has_capability(current_user.role, Capability.ADMINISTER):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admin access required"
        )
    return current_user
