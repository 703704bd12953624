"""
Self-service user endpoints: profile, own contributions, contribution stats.
"""
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from syllabus_hub.core.database import get_db
from syllabus_hub.models.user import User
from syllabus_hub.modules.auth.dependencies import get_current_user
from syllabus_hub.schemas.auth import UserResponse
from syllabus_hub.schemas.resource import ResourceListResponse
from syllabus_hub.schemas.user import UserProfileUpdate, UserStatsResponse
from syllabus_hub.services import resource_service
from syllabus_hub.utils.pagination import PaginationParams, get_pagination
from syllabus_hub.utils.query_filters import ResourceQuery

router = APIRouter()


@router.get("/me", response_model=UserResponse)
async def get_profile(current_user: User = Depends(get_current_user)):
    return current_user


@router.patch("/me", response_model=UserResponse)
async def update_profile(
    data: UserProfileUpdate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    current_user.name = data.name
    await db.commit()
    return current_user


@router.get("/me/resources", response_model=ResourceListResponse)
async def my_resources(
    pagination: PaginationParams = Depends(get_pagination),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Everything the caller submitted, pending or approved"""
    query = ResourceQuery(approved=None, added_by_id=current_user.id)
    return await resource_service.list_resources(db, query, pagination)


@router.get("/me/stats", response_model=UserStatsResponse)
async def my_stats(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    return await resource_service.get_user_resource_stats(db, current_user)
