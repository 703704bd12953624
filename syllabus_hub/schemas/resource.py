from pydantic import BaseModel, Field, ConfigDict, HttpUrl, field_validator
from typing import Optional, List, Dict
from datetime import datetime

from syllabus_hub.models.resource import ResourceType
from syllabus_hub.schemas.common import SubjectRef, UserRef, PaginationMeta, clean_string_list


class ResourcePrerequisite(BaseModel):
    title: str = Field(..., min_length=1, max_length=200)
    description: Optional[str] = Field(None, max_length=500)
    resource_link: Optional[str] = None


class ResourceBase(BaseModel):
    type: ResourceType
    title: str = Field(..., min_length=2, max_length=200)
    url: HttpUrl
    description: Optional[str] = Field(None, max_length=2000)
    provider: Optional[str] = Field(None, max_length=100)
    subject_id: str
    topics: List[str] = []
    tags: List[str] = []
    prerequisites: List[ResourcePrerequisite] = []
    quality_score: int = Field(0, ge=0, le=100)

    @field_validator('topics', 'tags')
    @classmethod
    def clean_lists(cls, v: List[str]) -> List[str]:
        return clean_string_list(v)


class ResourceCreate(ResourceBase):
    # Only honoured for callers allowed to moderate resources
    is_approved: bool = False


class ResourceUpdate(BaseModel):
    type: Optional[ResourceType] = None
    title: Optional[str] = Field(None, min_length=2, max_length=200)
    url: Optional[HttpUrl] = None
    description: Optional[str] = Field(None, max_length=2000)
    provider: Optional[str] = Field(None, max_length=100)
    subject_id: Optional[str] = None
    topics: Optional[List[str]] = None
    tags: Optional[List[str]] = None
    prerequisites: Optional[List[ResourcePrerequisite]] = None
    quality_score: Optional[int] = Field(None, ge=0, le=100)
    is_approved: Optional[bool] = None

    @field_validator('topics', 'tags')
    @classmethod
    def clean_lists(cls, v: Optional[List[str]]) -> Optional[List[str]]:
        return clean_string_list(v) if v is not None else v


class ApprovalUpdate(BaseModel):
    approved: bool = True


class ResourceResponse(BaseModel):
    id: str
    type: ResourceType
    title: str
    url: str
    description: Optional[str] = None
    provider: Optional[str] = None
    subject: Optional[SubjectRef] = None
    topics: List[str] = []
    tags: List[str] = []
    prerequisites: List[ResourcePrerequisite] = []
    added_by: Optional[UserRef] = None
    is_approved: bool
    quality_score: int
    average_rating: float
    total_ratings: int
    rating_distribution: Dict[str, int] = {}
    created_at: datetime
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class ResourceListResponse(BaseModel):
    resources: List[ResourceResponse]
    pagination: PaginationMeta


class ResourceSearchResponse(ResourceListResponse):
    query: str


class ResourceApprovalResponse(BaseModel):
    message: str
    resource: ResourceResponse
