from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Optional

from syllabus_hub.core.database import get_db
from syllabus_hub.core.permissions import Capability
from syllabus_hub.models.resource import ResourceType
from syllabus_hub.models.user import User
from syllabus_hub.modules.auth.dependencies import get_current_user, get_optional_user, require_capability
from syllabus_hub.schemas.common import MessageResponse
from syllabus_hub.schemas.resource import (
    ApprovalUpdate,
    ResourceCreate,
    ResourceListResponse,
    ResourceResponse,
    ResourceUpdate,
)
from syllabus_hub.services import resource_service
from syllabus_hub.utils.pagination import PaginationParams, get_pagination
from syllabus_hub.utils.query_filters import ResourceQuery, ResourceSort

router = APIRouter()


@router.get("", response_model=ResourceListResponse)
async def list_resources(
    q: Optional[str] = Query(None, description="Free-text search over title, description and tags"),
    type: Optional[ResourceType] = None,
    subject: Optional[str] = Query(None, description="Subject id"),
    branch: Optional[str] = Query(None, description="Branch code"),
    semester: Optional[int] = Query(None, ge=1, description="Semester number"),
    sort: ResourceSort = ResourceSort.CREATED_AT,
    pagination: PaginationParams = Depends(get_pagination),
    db: AsyncSession = Depends(get_db)
):
    """List approved resources"""
    query = ResourceQuery(
        q=q,
        type=type,
        subject_id=subject,
        branch_code=branch,
        semester_number=semester,
        sort=sort,
    )
    return await resource_service.list_resources(db, query, pagination)


@router.get("/{resource_id}", response_model=ResourceResponse)
async def get_resource(
    resource_id: str,
    current_user: Optional[User] = Depends(get_optional_user),
    db: AsyncSession = Depends(get_db)
):
    return await resource_service.get_visible_resource(db, resource_id, current_user)


@router.post("", response_model=ResourceResponse, status_code=status.HTTP_201_CREATED)
async def create_resource(
    data: ResourceCreate,
    current_user: User = Depends(require_capability(Capability.SUBMIT_RESOURCE)),
    db: AsyncSession = Depends(get_db)
):
    """Submit a resource; it stays pending until a moderator approves it"""
    return await resource_service.create_resource(db, data, current_user)


@router.put("/{resource_id}", response_model=ResourceResponse)
async def update_resource(
    resource_id: str,
    data: ResourceUpdate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    return await resource_service.update_resource(db, resource_id, data, current_user)


@router.delete("/{resource_id}", response_model=MessageResponse)
async def delete_resource(
    resource_id: str,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    await resource_service.delete_resource(db, resource_id, current_user)
    return {"message": "Resource deleted successfully"}


@router.patch("/{resource_id}/approve", response_model=ResourceResponse)
async def approve_resource(
    resource_id: str,
    data: Optional[ApprovalUpdate] = None,
    current_user: User = Depends(require_capability(Capability.MODERATE_RESOURCES)),
    db: AsyncSession = Depends(get_db)
):
    approved = data.approved if data is not None else True
    return await resource_service.set_resource_approval(db, resource_id, approved, current_user)
