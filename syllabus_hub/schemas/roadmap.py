from pydantic import BaseModel, Field, ConfigDict, field_validator
from typing import Optional, List
from datetime import datetime

from syllabus_hub.models.roadmap import RoadmapType, RoadmapDifficulty
from syllabus_hub.schemas.common import SubjectRef, UserRef, ResourceRef, PaginationMeta, clean_string_list

MAX_TAGS = 10
MAX_TAG_LENGTH = 30


def _validate_tags(v: List[str]) -> List[str]:
    tags = clean_string_list(v)
    if len(tags) > MAX_TAGS:
        raise ValueError(f"At most {MAX_TAGS} tags are allowed")
    for tag in tags:
        if len(tag) > MAX_TAG_LENGTH:
            raise ValueError(f"Tags must be at most {MAX_TAG_LENGTH} characters")
    return tags


class RoadmapStepCreate(BaseModel):
    """A step as submitted; its order comes from its position in the list"""
    title: str = Field(..., min_length=1, max_length=100)
    description: str = Field(..., min_length=1, max_length=500)
    estimated_hours: float = Field(..., ge=0.5, le=100)
    prerequisites: List[str] = []
    resources: List[str] = []

    @field_validator('prerequisites')
    @classmethod
    def clean_prerequisites(cls, v: List[str]) -> List[str]:
        return clean_string_list(v)

    @field_validator('resources')
    @classmethod
    def unique_resources(cls, v: List[str]) -> List[str]:
        return clean_string_list(v)


class RoadmapCreate(BaseModel):
    subject_id: str
    type: RoadmapType
    title: str = Field(..., min_length=1, max_length=100)
    description: str = Field(..., min_length=1, max_length=1000)
    difficulty: RoadmapDifficulty = RoadmapDifficulty.BEGINNER
    steps: List[RoadmapStepCreate] = Field(..., min_length=1)
    is_public: bool = True
    # Only honoured for callers allowed to manage roadmaps
    is_approved: bool = False
    tags: List[str] = []

    @field_validator('tags')
    @classmethod
    def validate_tags(cls, v: List[str]) -> List[str]:
        return _validate_tags(v)


class RoadmapUpdate(BaseModel):
    subject_id: Optional[str] = None
    type: Optional[RoadmapType] = None
    title: Optional[str] = Field(None, min_length=1, max_length=100)
    description: Optional[str] = Field(None, min_length=1, max_length=1000)
    difficulty: Optional[RoadmapDifficulty] = None
    steps: Optional[List[RoadmapStepCreate]] = Field(None, min_length=1)
    is_public: Optional[bool] = None
    is_approved: Optional[bool] = None
    tags: Optional[List[str]] = None

    @field_validator('tags')
    @classmethod
    def validate_tags(cls, v: Optional[List[str]]) -> Optional[List[str]]:
        return _validate_tags(v) if v is not None else v


class RoadmapStepResponse(BaseModel):
    id: str
    title: str
    description: str
    order: int
    estimated_hours: float
    prerequisites: List[str] = []
    resources: List[ResourceRef] = []

    model_config = ConfigDict(from_attributes=True)


class RoadmapResponse(BaseModel):
    id: str
    subject: Optional[SubjectRef] = None
    type: RoadmapType
    title: str
    description: str
    difficulty: RoadmapDifficulty
    total_estimated_hours: float
    steps: List[RoadmapStepResponse] = []
    created_by: Optional[UserRef] = None
    is_public: bool
    is_approved: bool
    tags: List[str] = []
    created_at: datetime
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class RoadmapSummary(BaseModel):
    """List view without the step bodies"""
    id: str
    subject: Optional[SubjectRef] = None
    type: RoadmapType
    title: str
    description: str
    difficulty: RoadmapDifficulty
    total_estimated_hours: float
    created_by: Optional[UserRef] = None
    is_public: bool
    is_approved: bool
    tags: List[str] = []
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class RoadmapListResponse(BaseModel):
    roadmaps: List[RoadmapSummary]
    pagination: PaginationMeta
