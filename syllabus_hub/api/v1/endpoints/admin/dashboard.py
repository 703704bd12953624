"""
Admin Dashboard endpoint - counts and recent activity.
"""
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, func
from sqlalchemy.orm import selectinload
from datetime import datetime, timedelta

from syllabus_hub.core.database import get_db
from syllabus_hub.models import User, Resource, Subject, Roadmap
from syllabus_hub.modules.auth.dependencies import get_current_admin
from syllabus_hub.schemas.admin import DashboardResponse

router = APIRouter()

RECENT_ITEMS = 5
ACTIVE_USER_WINDOW_DAYS = 30


@router.get("", response_model=DashboardResponse)
async def get_dashboard(
    db: AsyncSession = Depends(get_db),
    current_admin: User = Depends(get_current_admin)
):
    """Headline counts plus the newest users and resources"""
    joined_since = datetime.utcnow() - timedelta(days=ACTIVE_USER_WINDOW_DAYS)

    stats = {
        "total_users": await db.scalar(select(func.count(User.id))),
        "total_resources": await db.scalar(select(func.count(Resource.id))),
        "total_subjects": await db.scalar(select(func.count(Subject.id))),
        "total_roadmaps": await db.scalar(select(func.count(Roadmap.id))),
        "pending_resources": await db.scalar(
            select(func.count(Resource.id)).where(Resource.is_approved == False)  # noqa: E712
        ),
        "pending_roadmaps": await db.scalar(
            select(func.count(Roadmap.id)).where(Roadmap.is_approved == False)  # noqa: E712
        ),
        "active_users": await db.scalar(
            select(func.count(User.id)).where(User.created_at >= joined_since)
        ),
    }

    recent_users = await db.execute(
        select(User).order_by(User.created_at.desc(), User.id).limit(RECENT_ITEMS)
    )
    recent_resources = await db.execute(
        select(Resource)
        .options(selectinload(Resource.subject), selectinload(Resource.added_by))
        .order_by(Resource.created_at.desc(), Resource.id)
        .limit(RECENT_ITEMS)
    )

    return {
        "stats": {key: value or 0 for key, value in stats.items()},
        "recent_users": recent_users.scalars().all(),
        "recent_resources": recent_resources.scalars().all(),
    }
