from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Optional

from syllabus_hub.core.database import get_db
from syllabus_hub.models import User
from syllabus_hub.modules.auth.dependencies import get_current_admin
from syllabus_hub.schemas.catalog import SubjectCreate, SubjectListResponse, SubjectResponse, SubjectUpdate
from syllabus_hub.schemas.common import MessageResponse
from syllabus_hub.services import catalog_service
from syllabus_hub.utils.pagination import PaginationParams, get_pagination
from syllabus_hub.utils.query_filters import SubjectQuery

router = APIRouter()


@router.get("", response_model=SubjectListResponse)
async def list_subjects(
    q: Optional[str] = None,
    branch: Optional[str] = Query(None, description="Branch code"),
    semester: Optional[int] = Query(None, ge=1, description="Semester number"),
    pagination: PaginationParams = Depends(get_pagination),
    db: AsyncSession = Depends(get_db),
    current_admin: User = Depends(get_current_admin)
):
    query = SubjectQuery(q=q, branch_code=branch, semester_number=semester)
    return await catalog_service.list_subjects(db, query, pagination)


@router.post("", response_model=SubjectResponse, status_code=status.HTTP_201_CREATED)
async def create_subject(
    data: SubjectCreate,
    db: AsyncSession = Depends(get_db),
    current_admin: User = Depends(get_current_admin)
):
    return await catalog_service.create_subject(db, data)


@router.put("/{subject_id}", response_model=SubjectResponse)
async def update_subject(
    subject_id: str,
    data: SubjectUpdate,
    db: AsyncSession = Depends(get_db),
    current_admin: User = Depends(get_current_admin)
):
    return await catalog_service.update_subject(db, subject_id, data)


@router.delete("/{subject_id}", response_model=MessageResponse)
async def delete_subject(
    subject_id: str,
    db: AsyncSession = Depends(get_db),
    current_admin: User = Depends(get_current_admin)
):
    """Refused with 400 while resources or roadmaps reference the subject"""
    await catalog_service.delete_subject(db, subject_id)
    return {"message": "Subject deleted successfully"}
