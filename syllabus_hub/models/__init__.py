from syllabus_hub.models.user import User, UserRole
from syllabus_hub.models.catalog import Branch, Program, Year, Semester, Subject
from syllabus_hub.models.resource import Resource, ResourceRating, ResourceType, empty_rating_distribution
from syllabus_hub.models.roadmap import (
    Roadmap,
    RoadmapStep,
    RoadmapType,
    RoadmapDifficulty,
    roadmap_step_resources,
)

__all__ = [
    "User",
    "UserRole",
    "Branch",
    "Program",
    "Year",
    "Semester",
    "Subject",
    "Resource",
    "ResourceRating",
    "ResourceType",
    "empty_rating_distribution",
    "Roadmap",
    "RoadmapStep",
    "RoadmapType",
    "RoadmapDifficulty",
    "roadmap_step_resources",
]
