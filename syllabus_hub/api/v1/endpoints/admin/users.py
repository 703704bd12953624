"""
Admin User Management endpoints.
"""
from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, func
from sqlalchemy.orm import selectinload
from typing import Optional

from syllabus_hub.core.database import get_db
from syllabus_hub.core.exceptions import ResourceNotFoundError, ValidationError
from syllabus_hub.core.logging_config import logger
from syllabus_hub.models import Resource, User, UserRole
from syllabus_hub.modules.auth.dependencies import get_current_admin
from syllabus_hub.schemas.admin import AdminRoleUpdate
from syllabus_hub.schemas.auth import UserResponse
from syllabus_hub.schemas.common import MessageResponse
from syllabus_hub.schemas.user import UserListResponse
from syllabus_hub.services.rating_service import recompute_resource_rating
from syllabus_hub.utils.pagination import PaginationParams, get_pagination, paginate, create_paginated_response
from syllabus_hub.utils.query_filters import UserQuery, build_user_conditions, build_user_ordering

router = APIRouter()


async def _get_user(db: AsyncSession, user_id: str, *load_options) -> User:
    result = await db.execute(
        select(User)
        .options(*load_options)
        .where(User.id == user_id)
        .execution_options(populate_existing=True)
    )
    user = result.scalar_one_or_none()
    if not user:
        raise ResourceNotFoundError("User", user_id)
    return user


@router.get("", response_model=UserListResponse)
async def list_users(
    q: Optional[str] = Query(None, description="Matches name or email"),
    role: Optional[UserRole] = None,
    pagination: PaginationParams = Depends(get_pagination),
    db: AsyncSession = Depends(get_db),
    current_admin: User = Depends(get_current_admin)
):
    """List users, newest first"""
    query = UserQuery(q=q, role=role)
    conditions = build_user_conditions(query)
    stmt = select(User).where(*conditions).order_by(*build_user_ordering(query))
    count_stmt = select(func.count(User.id)).where(*conditions)

    page = await paginate(db, stmt, pagination, count_query=count_stmt)
    return create_paginated_response("users", page["items"], page["pagination"])


@router.patch("/{user_id}/role", response_model=UserResponse)
async def update_user_role(
    user_id: str,
    data: AdminRoleUpdate,
    db: AsyncSession = Depends(get_db),
    current_admin: User = Depends(get_current_admin)
):
    user = await _get_user(db, user_id)
    previous = user.role
    user.role = data.role
    await db.commit()

    logger.log_moderation(f"role:{previous.value}->{data.role.value}", "user", user_id, str(current_admin.id))
    return user


@router.delete("/{user_id}", response_model=MessageResponse)
async def delete_user(
    user_id: str,
    db: AsyncSession = Depends(get_db),
    current_admin: User = Depends(get_current_admin)
):
    """
    Delete a user account.

    Their resources and roadmaps stay with the author cleared; their
    ratings go, and the affected resources' aggregates are rebuilt.
    """
    if str(user_id) == str(current_admin.id):
        raise ValidationError("Cannot delete your own account")

    user = await _get_user(
        db,
        user_id,
        selectinload(User.resources),
        selectinload(User.roadmaps),
        selectinload(User.ratings),
    )
    rated_resource_ids = {rating.resource_id for rating in user.ratings}

    await db.delete(user)
    await db.flush()

    if rated_resource_ids:
        result = await db.execute(select(Resource).where(Resource.id.in_(rated_resource_ids)))
        for resource in result.scalars().all():
            await recompute_resource_rating(db, resource)

    await db.commit()
    logger.log_moderation("delete", "user", user_id, str(current_admin.id))
    return {"message": "User deleted successfully"}
