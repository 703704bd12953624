from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Optional

from syllabus_hub.core.database import get_db
from syllabus_hub.models.resource import ResourceType
from syllabus_hub.schemas.catalog import SubjectListResponse, SubjectResponse
from syllabus_hub.schemas.resource import ResourceListResponse
from syllabus_hub.services import catalog_service, resource_service
from syllabus_hub.utils.pagination import PaginationParams, get_pagination
from syllabus_hub.utils.query_filters import ResourceQuery, ResourceSort, SubjectQuery

router = APIRouter()


@router.get("", response_model=SubjectListResponse)
async def list_subjects(
    q: Optional[str] = Query(None, description="Free-text search over code, name and topics"),
    branch: Optional[str] = Query(None, description="Branch code"),
    semester: Optional[int] = Query(None, ge=1, description="Semester number"),
    pagination: PaginationParams = Depends(get_pagination),
    db: AsyncSession = Depends(get_db)
):
    query = SubjectQuery(q=q, branch_code=branch, semester_number=semester)
    return await catalog_service.list_subjects(db, query, pagination)


@router.get("/{code}", response_model=SubjectResponse)
async def get_subject(code: str, db: AsyncSession = Depends(get_db)):
    return await catalog_service.get_subject_by_code(db, code)


@router.get("/{code}/resources", response_model=ResourceListResponse)
async def get_subject_resources(
    code: str,
    type: Optional[ResourceType] = None,
    sort: ResourceSort = ResourceSort.CREATED_AT,
    pagination: PaginationParams = Depends(get_pagination),
    db: AsyncSession = Depends(get_db)
):
    """Approved resources for one subject"""
    subject = await catalog_service.get_subject_by_code(db, code)
    query = ResourceQuery(subject_id=subject.id, type=type, sort=sort)
    return await resource_service.list_resources(db, query, pagination)
