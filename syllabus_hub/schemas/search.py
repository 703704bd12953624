from pydantic import BaseModel
from typing import List

from syllabus_hub.schemas.catalog import SubjectResponse
from syllabus_hub.schemas.resource import ResourceResponse
from syllabus_hub.schemas.roadmap import RoadmapSummary


class GlobalSearchResults(BaseModel):
    resources: List[ResourceResponse]
    subjects: List[SubjectResponse]
    roadmaps: List[RoadmapSummary]


class GlobalSearchResponse(BaseModel):
    query: str
    results: GlobalSearchResults
