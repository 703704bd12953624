from fastapi import APIRouter, Depends, Response, status
from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from syllabus_hub.core.database import get_db
from syllabus_hub.core.permissions import Capability
from syllabus_hub.models import ResourceRating, User
from syllabus_hub.modules.auth.dependencies import get_current_user, require_capability
from syllabus_hub.schemas.rating import (
    RatingAggregate,
    RatingCreate,
    RatingListResponse,
    RatingResponse,
    RatingWriteResponse,
)
from syllabus_hub.services import rating_service, resource_service
from syllabus_hub.utils.pagination import PaginationParams, get_ratings_pagination, paginate

router = APIRouter()


def _aggregate(resource) -> RatingAggregate:
    return RatingAggregate(
        average_rating=resource.average_rating,
        total_ratings=resource.total_ratings,
        rating_distribution=resource.rating_distribution,
    )


async def _rating_page(db: AsyncSession, conditions: list, ordering: list, params: PaginationParams) -> dict:
    query = (
        select(ResourceRating)
        .options(selectinload(ResourceRating.user))
        .where(*conditions)
        .order_by(*ordering)
    )
    count_query = select(func.count(ResourceRating.id)).where(*conditions)
    page = await paginate(db, query, params, count_query=count_query)
    return {
        "ratings": [RatingResponse.model_validate(r) for r in page["items"]],
        "pagination": page["pagination"],
    }


@router.get("", response_model=RatingListResponse)
async def list_ratings(
    pagination: PaginationParams = Depends(get_ratings_pagination),
    db: AsyncSession = Depends(get_db)
):
    return await _rating_page(
        db, [], [ResourceRating.created_at.desc(), ResourceRating.id], pagination
    )


@router.get("/resource/{resource_id}", response_model=RatingListResponse)
async def list_resource_ratings(
    resource_id: str,
    pagination: PaginationParams = Depends(get_ratings_pagination),
    db: AsyncSession = Depends(get_db)
):
    """Most helpful reviews first"""
    await resource_service.get_visible_resource(db, resource_id, None)
    return await _rating_page(
        db,
        [ResourceRating.resource_id == resource_id],
        [ResourceRating.helpful_votes.desc(), ResourceRating.created_at.desc(), ResourceRating.id],
        pagination,
    )


@router.post("/resource/{resource_id}", response_model=RatingWriteResponse)
async def rate_resource(
    resource_id: str,
    data: RatingCreate,
    response: Response,
    current_user: User = Depends(require_capability(Capability.RATE_RESOURCE)),
    db: AsyncSession = Depends(get_db)
):
    """Create or replace the caller's rating of a resource"""
    resource = await resource_service.get_visible_resource(db, resource_id, current_user)
    rating, created = await rating_service.upsert_rating(db, resource, current_user, data)
    response.status_code = status.HTTP_201_CREATED if created else status.HTTP_200_OK
    return {"rating": rating, "resource": _aggregate(resource)}


@router.delete("/{rating_id}", response_model=RatingAggregate)
async def delete_rating(
    rating_id: str,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Owner or admin; returns the resource's refreshed aggregate"""
    resource = await rating_service.delete_rating(db, rating_id, current_user)
    return _aggregate(resource)


@router.delete("/resource/{resource_id}/{rating_id}", response_model=RatingAggregate)
async def delete_resource_rating(
    resource_id: str,
    rating_id: str,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    resource = await rating_service.delete_rating(db, rating_id, current_user, resource_id=resource_id)
    return _aggregate(resource)


@router.post("/{rating_id}/helpful", response_model=RatingResponse)
async def mark_rating_helpful(
    rating_id: str,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    return await rating_service.mark_helpful(db, rating_id)
