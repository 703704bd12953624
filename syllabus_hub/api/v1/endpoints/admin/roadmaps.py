from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Optional

from syllabus_hub.core.database import get_db
from syllabus_hub.models import User
from syllabus_hub.models.roadmap import RoadmapDifficulty, RoadmapType
from syllabus_hub.modules.auth.dependencies import get_current_admin
from syllabus_hub.schemas.common import MessageResponse
from syllabus_hub.schemas.resource import ApprovalUpdate
from syllabus_hub.schemas.roadmap import RoadmapListResponse, RoadmapResponse, RoadmapUpdate
from syllabus_hub.services import roadmap_service
from syllabus_hub.utils.pagination import PaginationParams, get_pagination
from syllabus_hub.utils.query_filters import RoadmapQuery

router = APIRouter()


@router.get("", response_model=RoadmapListResponse)
async def list_roadmaps(
    q: Optional[str] = None,
    type: Optional[RoadmapType] = None,
    difficulty: Optional[RoadmapDifficulty] = None,
    approved: Optional[bool] = Query(None, description="Omit to list every approval state"),
    pagination: PaginationParams = Depends(get_pagination),
    db: AsyncSession = Depends(get_db),
    current_admin: User = Depends(get_current_admin)
):
    """Every roadmap, private and pending ones included"""
    query = RoadmapQuery(q=q, type=type, difficulty=difficulty, public_only=False, approved=approved)
    return await roadmap_service.list_roadmaps(db, query, pagination)


@router.put("/{roadmap_id}", response_model=RoadmapResponse)
async def update_roadmap(
    roadmap_id: str,
    data: RoadmapUpdate,
    db: AsyncSession = Depends(get_db),
    current_admin: User = Depends(get_current_admin)
):
    return await roadmap_service.update_roadmap(db, roadmap_id, data, current_admin)


@router.patch("/{roadmap_id}/approve", response_model=RoadmapResponse)
async def approve_roadmap(
    roadmap_id: str,
    data: ApprovalUpdate,
    db: AsyncSession = Depends(get_db),
    current_admin: User = Depends(get_current_admin)
):
    return await roadmap_service.set_roadmap_approval(db, roadmap_id, data.approved, current_admin)


@router.delete("/{roadmap_id}", response_model=MessageResponse)
async def delete_roadmap(
    roadmap_id: str,
    db: AsyncSession = Depends(get_db),
    current_admin: User = Depends(get_current_admin)
):
    await roadmap_service.delete_roadmap(db, roadmap_id, current_admin)
    return {"message": "Roadmap deleted successfully"}
