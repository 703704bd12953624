from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Optional

from syllabus_hub.core.database import get_db
from syllabus_hub.core.permissions import Capability
from syllabus_hub.models.roadmap import RoadmapDifficulty, RoadmapType
from syllabus_hub.models.user import User
from syllabus_hub.modules.auth.dependencies import get_current_user, get_optional_user, require_capability
from syllabus_hub.schemas.common import MessageResponse
from syllabus_hub.schemas.roadmap import RoadmapCreate, RoadmapListResponse, RoadmapResponse, RoadmapUpdate
from syllabus_hub.services import catalog_service, roadmap_service
from syllabus_hub.utils.pagination import PaginationParams, get_pagination
from syllabus_hub.utils.query_filters import RoadmapQuery

router = APIRouter()


@router.get("", response_model=RoadmapListResponse)
async def list_roadmaps(
    q: Optional[str] = Query(None, description="Free-text search over title, description and tags"),
    type: Optional[RoadmapType] = None,
    difficulty: Optional[RoadmapDifficulty] = None,
    branch: Optional[str] = Query(None, description="Branch code"),
    subject: Optional[str] = Query(None, description="Subject id"),
    pagination: PaginationParams = Depends(get_pagination),
    db: AsyncSession = Depends(get_db)
):
    """Public, approved roadmaps"""
    query = RoadmapQuery(q=q, type=type, difficulty=difficulty, branch_code=branch, subject_id=subject)
    return await roadmap_service.list_roadmaps(db, query, pagination)


@router.get("/subject/{subject_code}", response_model=RoadmapListResponse)
async def list_subject_roadmaps(
    subject_code: str,
    type: Optional[RoadmapType] = None,
    pagination: PaginationParams = Depends(get_pagination),
    db: AsyncSession = Depends(get_db)
):
    subject = await catalog_service.get_subject_by_code(db, subject_code)
    query = RoadmapQuery(subject_id=subject.id, type=type)
    return await roadmap_service.list_roadmaps(db, query, pagination)


@router.get("/{roadmap_id}", response_model=RoadmapResponse)
async def get_roadmap(
    roadmap_id: str,
    current_user: Optional[User] = Depends(get_optional_user),
    db: AsyncSession = Depends(get_db)
):
    return await roadmap_service.get_visible_roadmap(db, roadmap_id, current_user)


@router.post("", response_model=RoadmapResponse, status_code=status.HTTP_201_CREATED)
async def create_roadmap(
    data: RoadmapCreate,
    current_user: User = Depends(require_capability(Capability.AUTHOR_ROADMAPS)),
    db: AsyncSession = Depends(get_db)
):
    return await roadmap_service.create_roadmap(db, data, current_user)


@router.put("/{roadmap_id}", response_model=RoadmapResponse)
async def update_roadmap(
    roadmap_id: str,
    data: RoadmapUpdate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Creator or admin; sending steps replaces them and recomputes total hours"""
    return await roadmap_service.update_roadmap(db, roadmap_id, data, current_user)


@router.delete("/{roadmap_id}", response_model=MessageResponse)
async def delete_roadmap(
    roadmap_id: str,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    await roadmap_service.delete_roadmap(db, roadmap_id, current_user)
    return {"message": "Roadmap deleted successfully"}
