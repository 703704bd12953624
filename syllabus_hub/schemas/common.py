from pydantic import BaseModel, ConfigDict
from typing import Optional

from syllabus_hub.models.resource import ResourceType


class PaginationMeta(BaseModel):
    page: int
    limit: int
    total: int
    pages: int


class MessageResponse(BaseModel):
    message: str


# Small projections embedded in list/detail responses

class UserRef(BaseModel):
    id: str
    name: str

    model_config = ConfigDict(from_attributes=True)


class BranchRef(BaseModel):
    id: str
    code: str
    name: str

    model_config = ConfigDict(from_attributes=True)


class SemesterRef(BaseModel):
    id: str
    number: int

    model_config = ConfigDict(from_attributes=True)


class SubjectRef(BaseModel):
    id: str
    code: str
    name: str

    model_config = ConfigDict(from_attributes=True)


class ResourceRef(BaseModel):
    id: str
    title: str
    type: ResourceType
    url: str

    model_config = ConfigDict(from_attributes=True)


def clean_string_list(values: Optional[list]) -> list:
    """Strip entries and drop blanks/duplicates, keeping first-seen order"""
    if not values:
        return []
    seen = []
    for value in values:
        value = str(value).strip()
        if value and value not in seen:
            seen.append(value)
    return seen
