"""
Admin resource moderation endpoints. Unlike the public listing these see
pending rows too.
"""
from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Optional

from syllabus_hub.core.database import get_db
from syllabus_hub.models import User
from syllabus_hub.models.resource import ResourceType
from syllabus_hub.modules.auth.dependencies import get_current_admin
from syllabus_hub.schemas.common import MessageResponse
from syllabus_hub.schemas.resource import ApprovalUpdate, ResourceApprovalResponse, ResourceListResponse
from syllabus_hub.services import resource_service
from syllabus_hub.utils.pagination import PaginationParams, get_pagination
from syllabus_hub.utils.query_filters import ResourceQuery

router = APIRouter()


@router.get("", response_model=ResourceListResponse)
async def list_resources(
    q: Optional[str] = None,
    type: Optional[ResourceType] = None,
    approved: Optional[bool] = Query(None, description="Omit to list every approval state"),
    pagination: PaginationParams = Depends(get_pagination),
    db: AsyncSession = Depends(get_db),
    current_admin: User = Depends(get_current_admin)
):
    query = ResourceQuery(q=q, type=type, approved=approved)
    return await resource_service.list_resources(db, query, pagination)


@router.patch("/{resource_id}/approve", response_model=ResourceApprovalResponse)
async def approve_resource(
    resource_id: str,
    data: ApprovalUpdate,
    db: AsyncSession = Depends(get_db),
    current_admin: User = Depends(get_current_admin)
):
    resource = await resource_service.set_resource_approval(db, resource_id, data.approved, current_admin)
    message = "Resource approved successfully" if data.approved else "Resource unapproved successfully"
    return {"message": message, "resource": resource}


@router.delete("/{resource_id}", response_model=MessageResponse)
async def delete_resource(
    resource_id: str,
    db: AsyncSession = Depends(get_db),
    current_admin: User = Depends(get_current_admin)
):
    await resource_service.delete_resource(db, resource_id, current_admin)
    return {"message": "Resource deleted successfully"}
