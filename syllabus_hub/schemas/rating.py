from pydantic import BaseModel, Field, ConfigDict
from typing import Optional, List, Dict
from datetime import datetime

from syllabus_hub.schemas.common import UserRef, PaginationMeta


class RatingCreate(BaseModel):
    rating: int = Field(..., ge=1, le=5)
    review: Optional[str] = Field(None, max_length=1000)


class RatingResponse(BaseModel):
    id: str
    resource_id: str
    user: Optional[UserRef] = None
    rating: int
    review: Optional[str] = None
    helpful_votes: int
    is_verified: bool
    created_at: datetime
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class RatingAggregate(BaseModel):
    average_rating: float
    total_ratings: int
    rating_distribution: Dict[str, int]


class RatingWriteResponse(BaseModel):
    rating: RatingResponse
    resource: RatingAggregate


class RatingListResponse(BaseModel):
    ratings: List[RatingResponse]
    pagination: PaginationMeta


class RecomputeResponse(BaseModel):
    message: str
    resources_updated: int
