"""
Rating Service

Ratings are unique per (user, resource). Every write or delete recomputes
the resource's average/total/distribution from the live rating rows in the
same transaction, so the cached aggregate never drifts.
"""
from dataclasses import dataclass, field
from typing import Dict, Iterable, Optional, Tuple

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from syllabus_hub.core.exceptions import ResourceNotFoundError
from syllabus_hub.core.logging_config import logger
from syllabus_hub.core.permissions import Capability, ensure_can_modify
from syllabus_hub.models import Resource, ResourceRating, User, empty_rating_distribution
from syllabus_hub.schemas.rating import RatingCreate


@dataclass
class RatingSummary:
    average: float = 0.0
    total: int = 0
    distribution: Dict[str, int] = field(default_factory=empty_rating_distribution)


def summarize_ratings(values: Iterable[int]) -> RatingSummary:
    """Average (1 decimal), count and per-star histogram of rating values"""
    summary = RatingSummary()
    score_sum = 0
    for value in values:
        summary.distribution[str(value)] += 1
        summary.total += 1
        score_sum += value
    if summary.total:
        summary.average = round(score_sum / summary.total, 1)
    return summary


def apply_summary(resource: Resource, summary: RatingSummary) -> None:
    resource.average_rating = summary.average
    resource.total_ratings = summary.total
    resource.rating_distribution = summary.distribution


async def recompute_resource_rating(db: AsyncSession, resource: Resource) -> RatingSummary:
    """Refresh one resource's aggregate from its ratings (caller commits)"""
    await db.flush()
    result = await db.execute(
        select(ResourceRating.rating).where(ResourceRating.resource_id == resource.id)
    )
    summary = summarize_ratings(result.scalars().all())
    apply_summary(resource, summary)
    return summary


async def recompute_all_ratings(db: AsyncSession) -> int:
    """Idempotently rebuild every resource's aggregate; returns resources touched"""
    await db.flush()
    rows = await db.execute(select(ResourceRating.resource_id, ResourceRating.rating))
    values_by_resource: Dict[str, list] = {}
    for resource_id, rating in rows.all():
        values_by_resource.setdefault(resource_id, []).append(rating)

    resources = (await db.execute(select(Resource))).scalars().all()
    for resource in resources:
        apply_summary(resource, summarize_ratings(values_by_resource.get(resource.id, [])))

    await db.commit()
    logger.info(f"[Ratings] Recomputed aggregates for {len(resources)} resources")
    return len(resources)


async def get_rating(db: AsyncSession, rating_id: str) -> ResourceRating:
    result = await db.execute(
        select(ResourceRating)
        .options(selectinload(ResourceRating.user))
        .where(ResourceRating.id == rating_id)
        .execution_options(populate_existing=True)
    )
    rating = result.scalar_one_or_none()
    if not rating:
        raise ResourceNotFoundError("Rating", rating_id)
    return rating


async def upsert_rating(
    db: AsyncSession,
    resource: Resource,
    user: User,
    data: RatingCreate,
) -> Tuple[ResourceRating, bool]:
    """Create the caller's rating or update the existing one; returns (rating, created)"""
    existing = await db.scalar(
        select(ResourceRating).where(
            ResourceRating.resource_id == resource.id,
            ResourceRating.user_id == user.id,
        )
    )

    created = existing is None
    if created:
        rating = ResourceRating(
            resource_id=resource.id,
            user_id=user.id,
            rating=data.rating,
            review=data.review,
        )
        db.add(rating)
    else:
        rating = existing
        rating.rating = data.rating
        rating.review = data.review

    await recompute_resource_rating(db, resource)
    await db.commit()

    logger.info(
        f"[Ratings] {'Created' if created else 'Updated'} rating on {resource.id} "
        f"(avg {resource.average_rating}, n={resource.total_ratings})"
    )
    return await get_rating(db, rating.id), created


async def delete_rating(db: AsyncSession, rating_id: str, user: User,
                        resource_id: Optional[str] = None) -> Resource:
    """Owner or a ratings manager may delete; returns the refreshed resource"""
    rating = await get_rating(db, rating_id)
    if resource_id is not None and rating.resource_id != resource_id:
        raise ResourceNotFoundError("Rating", rating_id)

    ensure_can_modify(user, rating.user_id, Capability.MANAGE_RATINGS,
                      "Not authorized to delete this rating")

    resource = await db.get(Resource, rating.resource_id)
    await db.delete(rating)
    await recompute_resource_rating(db, resource)
    await db.commit()
    return resource


async def mark_helpful(db: AsyncSession, rating_id: str) -> ResourceRating:
    rating = await get_rating(db, rating_id)
    rating.helpful_votes += 1
    await db.commit()
    return rating
