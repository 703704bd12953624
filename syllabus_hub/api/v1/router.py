from fastapi import APIRouter
from syllabus_hub.api.v1.endpoints import auth, users, catalog, subjects, resources, search, roadmaps, ratings
from syllabus_hub.api.v1.endpoints.admin import admin_router

api_router = APIRouter()

api_router.include_router(auth.router, prefix="/auth", tags=["Authentication"])
api_router.include_router(users.router, prefix="/users", tags=["Users"])
api_router.include_router(catalog.router, prefix="/catalog", tags=["Catalog"])
api_router.include_router(subjects.router, prefix="/subjects", tags=["Subjects"])
api_router.include_router(resources.router, prefix="/resources", tags=["Resources"])
api_router.include_router(search.router, prefix="/search", tags=["Search"])
api_router.include_router(roadmaps.router, prefix="/roadmaps", tags=["Roadmaps"])
api_router.include_router(ratings.router, prefix="/ratings", tags=["Ratings"])

# Admin back-office
api_router.include_router(admin_router)
