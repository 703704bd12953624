"""
Admin Dashboard Schemas
"""
from pydantic import BaseModel
from typing import List

from syllabus_hub.models.user import UserRole
from syllabus_hub.schemas.auth import UserResponse
from syllabus_hub.schemas.resource import ResourceResponse


class DashboardStats(BaseModel):
    total_users: int
    total_resources: int
    total_subjects: int
    total_roadmaps: int
    pending_resources: int
    pending_roadmaps: int
    active_users: int


class DashboardResponse(BaseModel):
    stats: DashboardStats
    recent_users: List[UserResponse]
    recent_resources: List[ResourceResponse]


class AdminRoleUpdate(BaseModel):
    role: UserRole
