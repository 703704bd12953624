"""
Resource Service

Listing/search over resources plus the owner-or-moderator write paths.
Public reads only ever see approved rows; callers that may see pending
rows (owner, moderators, admin listings) say so explicitly.
"""
from typing import Optional

from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from syllabus_hub.core.exceptions import ResourceNotFoundError
from syllabus_hub.core.logging_config import logger
from syllabus_hub.core.permissions import Capability, can_modify, ensure_can_modify, has_capability
from syllabus_hub.models import Resource, User, empty_rating_distribution
from syllabus_hub.schemas.resource import ResourceCreate, ResourceResponse, ResourceUpdate
from syllabus_hub.services.catalog_service import ensure_subject_exists
from syllabus_hub.utils.pagination import PaginationParams, paginate
from syllabus_hub.utils.query_filters import (
    ResourceQuery,
    build_resource_conditions,
    build_resource_ordering,
)


RESOURCE_LOAD_OPTIONS = (
    selectinload(Resource.subject),
    selectinload(Resource.added_by),
)


async def list_resources(db: AsyncSession, query: ResourceQuery, params: PaginationParams) -> dict:
    conditions = build_resource_conditions(query)
    stmt = (
        select(Resource)
        .options(*RESOURCE_LOAD_OPTIONS)
        .where(*conditions)
        .order_by(*build_resource_ordering(query))
    )
    count_stmt = select(func.count(Resource.id)).where(*conditions)
    page = await paginate(db, stmt, params, count_query=count_stmt)
    return {
        "resources": [ResourceResponse.model_validate(r) for r in page["items"]],
        "pagination": page["pagination"],
    }


async def get_resource(db: AsyncSession, resource_id: str) -> Resource:
    result = await db.execute(
        select(Resource)
        .options(*RESOURCE_LOAD_OPTIONS)
        .where(Resource.id == resource_id)
        .execution_options(populate_existing=True)
    )
    resource = result.scalar_one_or_none()
    if not resource:
        raise ResourceNotFoundError("Resource", resource_id)
    return resource


async def get_visible_resource(db: AsyncSession, resource_id: str, user: Optional[User]) -> Resource:
    """Approved resources for everyone; pending ones only for the owner or a moderator"""
    resource = await get_resource(db, resource_id)
    if resource.is_approved:
        return resource
    if user is not None and can_modify(user, resource.added_by_id, Capability.MODERATE_RESOURCES):
        return resource
    raise ResourceNotFoundError("Resource", resource_id)


def _prerequisites(items) -> list:
    return [item.model_dump() for item in items]


async def create_resource(db: AsyncSession, data: ResourceCreate, user: User) -> Resource:
    await ensure_subject_exists(db, data.subject_id)

    resource = Resource(
        type=data.type,
        title=data.title.strip(),
        url=str(data.url),
        description=data.description,
        provider=data.provider,
        subject_id=data.subject_id,
        topics=data.topics,
        tags=data.tags,
        prerequisites=_prerequisites(data.prerequisites),
        added_by_id=user.id,
        is_approved=data.is_approved and has_capability(user.role, Capability.MODERATE_RESOURCES),
        quality_score=data.quality_score,
        rating_distribution=empty_rating_distribution(),
    )
    db.add(resource)
    await db.commit()

    logger.info(f"[Resources] {user.email} added resource {resource.id} (approved={resource.is_approved})")
    return await get_resource(db, resource.id)


async def update_resource(db: AsyncSession, resource_id: str, data: ResourceUpdate, user: User) -> Resource:
    resource = await get_resource(db, resource_id)
    ensure_can_modify(user, resource.added_by_id, Capability.MODERATE_RESOURCES,
                      "Not authorized to update this resource")

    changes = data.model_dump(exclude_unset=True, exclude={"is_approved", "prerequisites", "url"})
    if changes.get("subject_id"):
        await ensure_subject_exists(db, changes["subject_id"])

    for field, value in changes.items():
        if value is None:
            continue
        setattr(resource, field, value.strip() if field == "title" else value)

    if data.url is not None:
        resource.url = str(data.url)
    if data.prerequisites is not None:
        resource.prerequisites = _prerequisites(data.prerequisites)
    if data.is_approved is not None and has_capability(user.role, Capability.MODERATE_RESOURCES):
        resource.is_approved = data.is_approved

    await db.commit()
    return await get_resource(db, resource.id)


async def delete_resource(db: AsyncSession, resource_id: str, user: User) -> None:
    resource = await get_resource(db, resource_id)
    ensure_can_modify(user, resource.added_by_id, Capability.MODERATE_RESOURCES,
                      "Not authorized to delete this resource")
    await db.delete(resource)
    await db.commit()
    logger.log_moderation("delete", "resource", resource_id, str(user.id))


async def set_resource_approval(db: AsyncSession, resource_id: str, approved: bool, user: User) -> Resource:
    resource = await get_resource(db, resource_id)
    resource.is_approved = approved
    await db.commit()
    logger.log_moderation("approve" if approved else "unapprove", "resource", resource_id, str(user.id))
    return await get_resource(db, resource_id)


async def get_user_resource_stats(db: AsyncSession, user: User) -> dict:
    total = await db.scalar(
        select(func.count(Resource.id)).where(Resource.added_by_id == user.id)
    ) or 0
    approved = await db.scalar(
        select(func.count(Resource.id)).where(
            Resource.added_by_id == user.id,
            Resource.is_approved == True,  # noqa: E712
        )
    ) or 0
    return {
        "total_resources": total,
        "approved_resources": approved,
        "pending_resources": total - approved,
        "approval_rate": round(approved / total * 100) if total else 0,
    }
