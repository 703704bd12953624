from pydantic import BaseModel, Field, field_validator
from typing import List

from syllabus_hub.schemas.auth import UserResponse
from syllabus_hub.schemas.common import PaginationMeta


class UserProfileUpdate(BaseModel):
    name: str = Field(..., min_length=2, max_length=100)

    @field_validator('name')
    @classmethod
    def strip_name(cls, v: str) -> str:
        v = v.strip()
        if len(v) < 2:
            raise ValueError("Name must be at least 2 characters")
        return v


class UserStatsResponse(BaseModel):
    total_resources: int
    approved_resources: int
    pending_resources: int
    approval_rate: int


class UserListResponse(BaseModel):
    users: List[UserResponse]
    pagination: PaginationMeta
