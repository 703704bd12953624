from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from syllabus_hub.core.database import get_db
from syllabus_hub.models import User
from syllabus_hub.modules.auth.dependencies import get_current_admin
from syllabus_hub.schemas.rating import RecomputeResponse
from syllabus_hub.services import rating_service

router = APIRouter()


@router.post("/recompute", response_model=RecomputeResponse)
async def recompute_ratings(
    db: AsyncSession = Depends(get_db),
    current_admin: User = Depends(get_current_admin)
):
    """Rebuild every resource's rating aggregate from its rating rows"""
    updated = await rating_service.recompute_all_ratings(db)
    return {"message": "Rating aggregates recomputed", "resources_updated": updated}
