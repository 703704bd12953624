"""
Admin back-office endpoints.
All endpoints require the administer capability.
"""
from fastapi import APIRouter

from syllabus_hub.api.v1.endpoints.admin import dashboard, users, resources, subjects, branches, roadmaps, ratings

admin_router = APIRouter(prefix="/admin")

admin_router.include_router(dashboard.router, prefix="/dashboard", tags=["Admin Dashboard"])
admin_router.include_router(users.router, prefix="/users", tags=["Admin Users"])
admin_router.include_router(resources.router, prefix="/resources", tags=["Admin Resources"])
admin_router.include_router(subjects.router, prefix="/subjects", tags=["Admin Subjects"])
admin_router.include_router(branches.router, prefix="/branches", tags=["Admin Branches"])
admin_router.include_router(roadmaps.router, prefix="/roadmaps", tags=["Admin Roadmaps"])
admin_router.include_router(ratings.router, prefix="/ratings", tags=["Admin Ratings"])
