"""
Search endpoints. Every route here requires q.
"""
from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Optional

from syllabus_hub.core.database import get_db
from syllabus_hub.core.exceptions import SearchQueryRequiredError
from syllabus_hub.core.rate_limiter import search_rate_limit
from syllabus_hub.models.resource import ResourceType
from syllabus_hub.schemas.catalog import SubjectSearchResponse
from syllabus_hub.schemas.resource import ResourceSearchResponse
from syllabus_hub.schemas.search import GlobalSearchResponse
from syllabus_hub.services import catalog_service, resource_service, roadmap_service
from syllabus_hub.utils.pagination import PaginationParams, get_pagination
from syllabus_hub.utils.query_filters import ResourceQuery, RoadmapQuery, SubjectQuery, has_text

router = APIRouter()

GLOBAL_SEARCH_LIMIT = 10


def require_query(q: Optional[str]) -> str:
    if not has_text(q):
        raise SearchQueryRequiredError()
    return q.strip()


@router.get("/resources", response_model=ResourceSearchResponse)
@search_rate_limit()
async def search_resources(
    request: Request,
    q: Optional[str] = Query(None, description="Search text"),
    type: Optional[ResourceType] = None,
    subject: Optional[str] = Query(None, description="Subject id"),
    pagination: PaginationParams = Depends(get_pagination),
    db: AsyncSession = Depends(get_db)
):
    """Approved resources ranked by relevance, then quality score"""
    text = require_query(q)
    query = ResourceQuery(q=text, type=type, subject_id=subject)
    page = await resource_service.list_resources(db, query, pagination)
    return {**page, "query": text}


@router.get("/subjects", response_model=SubjectSearchResponse)
@search_rate_limit()
async def search_subjects(
    request: Request,
    q: Optional[str] = Query(None, description="Search text"),
    branch: Optional[str] = Query(None, description="Branch code"),
    semester: Optional[int] = Query(None, ge=1, description="Semester number"),
    pagination: PaginationParams = Depends(get_pagination),
    db: AsyncSession = Depends(get_db)
):
    text = require_query(q)
    query = SubjectQuery(q=text, branch_code=branch, semester_number=semester)
    page = await catalog_service.list_subjects(db, query, pagination)
    return {**page, "query": text}


@router.get("", response_model=GlobalSearchResponse)
@router.get("/global", response_model=GlobalSearchResponse)
@search_rate_limit()
async def global_search(
    request: Request,
    q: Optional[str] = Query(None, description="Search text"),
    db: AsyncSession = Depends(get_db)
):
    """Top matches across resources, subjects and public roadmaps"""
    text = require_query(q)
    first_page = PaginationParams(page=1, limit=GLOBAL_SEARCH_LIMIT)

    resources = await resource_service.list_resources(db, ResourceQuery(q=text), first_page)
    subjects = await catalog_service.list_subjects(db, SubjectQuery(q=text), first_page)
    roadmaps = await roadmap_service.list_roadmaps(db, RoadmapQuery(q=text), first_page)

    return {
        "query": text,
        "results": {
            "resources": resources["resources"],
            "subjects": subjects["subjects"],
            "roadmaps": roadmaps["roadmaps"],
        },
    }
