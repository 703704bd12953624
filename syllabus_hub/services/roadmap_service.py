"""
Roadmap Service

Roadmap steps are always replaced as a whole. Whenever steps are written,
their order is reassigned 1..n from list position and the roadmap's
total_estimated_hours is recomputed from them.
"""
from typing import Iterable, List, Optional, Sequence

from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from syllabus_hub.core.exceptions import ResourceNotFoundError, ValidationError
from syllabus_hub.core.logging_config import logger
from syllabus_hub.core.permissions import Capability, ensure_can_modify, can_modify, has_capability
from syllabus_hub.models import Resource, Roadmap, RoadmapStep, User
from syllabus_hub.schemas.roadmap import RoadmapCreate, RoadmapStepCreate, RoadmapSummary, RoadmapUpdate
from syllabus_hub.services.catalog_service import ensure_subject_exists
from syllabus_hub.utils.pagination import PaginationParams, paginate
from syllabus_hub.utils.query_filters import (
    RoadmapQuery,
    build_roadmap_conditions,
    build_roadmap_ordering,
)


SUMMARY_LOAD_OPTIONS = (
    selectinload(Roadmap.subject),
    selectinload(Roadmap.created_by),
)

DETAIL_LOAD_OPTIONS = SUMMARY_LOAD_OPTIONS + (
    selectinload(Roadmap.steps).selectinload(RoadmapStep.resources),
)


def total_estimated_hours(steps: Iterable) -> float:
    """Sum of step hours; accepts request payloads or RoadmapStep rows"""
    return float(sum(step.estimated_hours for step in steps))


async def _load_step_resources(db: AsyncSession, steps: Sequence[RoadmapStepCreate]) -> dict:
    wanted = {resource_id for step in steps for resource_id in step.resources}
    if not wanted:
        return {}

    result = await db.execute(select(Resource).where(Resource.id.in_(wanted)))
    found = {resource.id: resource for resource in result.scalars().all()}

    missing = sorted(wanted - set(found))
    if missing:
        raise ValidationError(f"Unknown resource id(s): {', '.join(missing)}", field="steps.resources")
    return found


async def build_steps(db: AsyncSession, steps: Sequence[RoadmapStepCreate]) -> List[RoadmapStep]:
    """RoadmapStep rows for a payload, ordered densely by position"""
    resources_by_id = await _load_step_resources(db, steps)
    return [
        RoadmapStep(
            title=step.title,
            description=step.description,
            order=position,
            estimated_hours=step.estimated_hours,
            prerequisites=list(step.prerequisites),
            resources=[resources_by_id[resource_id] for resource_id in step.resources],
        )
        for position, step in enumerate(steps, start=1)
    ]


async def replace_steps(db: AsyncSession, roadmap: Roadmap, steps: Sequence[RoadmapStepCreate]) -> None:
    roadmap.steps = await build_steps(db, steps)
    roadmap.total_estimated_hours = total_estimated_hours(steps)


# ==================== Reads ====================

async def list_roadmaps(db: AsyncSession, query: RoadmapQuery, params: PaginationParams) -> dict:
    conditions = build_roadmap_conditions(query)
    stmt = (
        select(Roadmap)
        .options(*SUMMARY_LOAD_OPTIONS)
        .where(*conditions)
        .order_by(*build_roadmap_ordering(query))
    )
    count_stmt = select(func.count(Roadmap.id)).where(*conditions)
    page = await paginate(db, stmt, params, count_query=count_stmt)
    return {
        "roadmaps": [RoadmapSummary.model_validate(r) for r in page["items"]],
        "pagination": page["pagination"],
    }


async def get_roadmap(db: AsyncSession, roadmap_id: str) -> Roadmap:
    result = await db.execute(
        select(Roadmap)
        .options(*DETAIL_LOAD_OPTIONS)
        .where(Roadmap.id == roadmap_id)
        .execution_options(populate_existing=True)
    )
    roadmap = result.scalar_one_or_none()
    if not roadmap:
        raise ResourceNotFoundError("Roadmap", roadmap_id)
    return roadmap


def is_publicly_visible(roadmap: Roadmap) -> bool:
    return bool(roadmap.is_public and roadmap.is_approved)


async def get_visible_roadmap(db: AsyncSession, roadmap_id: str, user: Optional[User]) -> Roadmap:
    """Public+approved roadmaps for everyone; others only for the creator or a roadmap manager"""
    roadmap = await get_roadmap(db, roadmap_id)
    if is_publicly_visible(roadmap):
        return roadmap
    if user is not None and can_modify(user, roadmap.created_by_id, Capability.MANAGE_ROADMAPS):
        return roadmap
    raise ResourceNotFoundError("Roadmap", roadmap_id)


# ==================== Writes ====================

async def create_roadmap(db: AsyncSession, data: RoadmapCreate, user: User) -> Roadmap:
    await ensure_subject_exists(db, data.subject_id)

    roadmap = Roadmap(
        subject_id=data.subject_id,
        type=data.type,
        title=data.title.strip(),
        description=data.description.strip(),
        difficulty=data.difficulty,
        created_by_id=user.id,
        is_public=data.is_public,
        is_approved=data.is_approved and has_capability(user.role, Capability.MANAGE_ROADMAPS),
        tags=data.tags,
    )
    await replace_steps(db, roadmap, data.steps)
    db.add(roadmap)
    await db.commit()

    logger.info(
        f"[Roadmaps] Created roadmap {roadmap.id} with {len(data.steps)} steps "
        f"({roadmap.total_estimated_hours}h)"
    )
    return await get_roadmap(db, roadmap.id)


async def update_roadmap(db: AsyncSession, roadmap_id: str, data: RoadmapUpdate, user: User) -> Roadmap:
    """Creator or roadmap manager; a rejected caller leaves the row untouched"""
    roadmap = await get_roadmap(db, roadmap_id)
    ensure_can_modify(user, roadmap.created_by_id, Capability.MANAGE_ROADMAPS,
                      "Not authorized to update this roadmap")

    changes = data.model_dump(exclude_unset=True, exclude={"steps", "is_approved"})
    if changes.get("subject_id"):
        await ensure_subject_exists(db, changes["subject_id"])
    new_steps = await build_steps(db, data.steps) if data.steps is not None else None

    for field, value in changes.items():
        if value is None:
            continue
        setattr(roadmap, field, value.strip() if field in ("title", "description") else value)

    if data.is_approved is not None and has_capability(user.role, Capability.MANAGE_ROADMAPS):
        roadmap.is_approved = data.is_approved

    if new_steps is not None:
        roadmap.steps = new_steps
        roadmap.total_estimated_hours = total_estimated_hours(data.steps)

    await db.commit()
    return await get_roadmap(db, roadmap.id)


async def delete_roadmap(db: AsyncSession, roadmap_id: str, user: User) -> None:
    roadmap = await get_roadmap(db, roadmap_id)
    ensure_can_modify(user, roadmap.created_by_id, Capability.MANAGE_ROADMAPS,
                      "Not authorized to delete this roadmap")
    await db.delete(roadmap)
    await db.commit()
    logger.info(f"[Roadmaps] Deleted roadmap {roadmap_id}")


async def set_roadmap_approval(db: AsyncSession, roadmap_id: str, approved: bool, user: User) -> Roadmap:
    roadmap = await get_roadmap(db, roadmap_id)
    roadmap.is_approved = approved
    await db.commit()
    logger.log_moderation("approve" if approved else "unapprove", "roadmap", roadmap_id, str(user.id))
    return await get_roadmap(db, roadmap_id)
