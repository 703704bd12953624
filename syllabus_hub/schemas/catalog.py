from pydantic import BaseModel, Field, ConfigDict, field_validator
from typing import Optional, List
from datetime import datetime

from syllabus_hub.schemas.common import BranchRef, SemesterRef, PaginationMeta, clean_string_list


# ==================== Branch ====================

class BranchCreate(BaseModel):
    code: str = Field(..., min_length=2, max_length=10)
    name: str = Field(..., min_length=2, max_length=100)

    @field_validator('code')
    @classmethod
    def normalize_code(cls, v: str) -> str:
        return v.strip().upper()


class BranchUpdate(BaseModel):
    code: Optional[str] = Field(None, min_length=2, max_length=10)
    name: Optional[str] = Field(None, min_length=2, max_length=100)

    @field_validator('code')
    @classmethod
    def normalize_code(cls, v: Optional[str]) -> Optional[str]:
        return v.strip().upper() if v else v


class BranchResponse(BaseModel):
    id: str
    code: str
    name: str
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class BranchListResponse(BaseModel):
    branches: List[BranchResponse]
    pagination: PaginationMeta


# ==================== Program / Year / Semester ====================

class ProgramResponse(BaseModel):
    id: str
    code: str
    name: str
    branch_id: str
    duration_years: int

    model_config = ConfigDict(from_attributes=True)


class YearResponse(BaseModel):
    id: str
    year: int
    program_id: str

    model_config = ConfigDict(from_attributes=True)


class SemesterResponse(BaseModel):
    id: str
    number: int
    year_id: str

    model_config = ConfigDict(from_attributes=True)


# Nested catalog tree

class SemesterNode(BaseModel):
    id: str
    number: int


class YearNode(BaseModel):
    id: str
    year: int
    semesters: List[SemesterNode] = []


class ProgramNode(BaseModel):
    id: str
    code: str
    name: str
    duration_years: int
    years: List[YearNode] = []


class BranchNode(BaseModel):
    id: str
    code: str
    name: str
    programs: List[ProgramNode] = []


class CatalogStructureResponse(BaseModel):
    branches: List[BranchNode]


# ==================== Subject ====================

class SubjectCreate(BaseModel):
    code: str = Field(..., min_length=2, max_length=10)
    name: str = Field(..., min_length=2, max_length=100)
    branch_id: str
    semester_id: str
    credits: int = Field(3, ge=1, le=10)
    topics: List[str] = []

    @field_validator('code')
    @classmethod
    def normalize_code(cls, v: str) -> str:
        return v.strip().upper()

    @field_validator('topics')
    @classmethod
    def clean_topics(cls, v: List[str]) -> List[str]:
        return clean_string_list(v)


class SubjectUpdate(BaseModel):
    code: Optional[str] = Field(None, min_length=2, max_length=10)
    name: Optional[str] = Field(None, min_length=2, max_length=100)
    branch_id: Optional[str] = None
    semester_id: Optional[str] = None
    credits: Optional[int] = Field(None, ge=1, le=10)
    topics: Optional[List[str]] = None

    @field_validator('code')
    @classmethod
    def normalize_code(cls, v: Optional[str]) -> Optional[str]:
        return v.strip().upper() if v else v

    @field_validator('topics')
    @classmethod
    def clean_topics(cls, v: Optional[List[str]]) -> Optional[List[str]]:
        return clean_string_list(v) if v is not None else v


class SubjectResponse(BaseModel):
    id: str
    code: str
    name: str
    credits: int
    topics: List[str] = []
    branch: Optional[BranchRef] = None
    semester: Optional[SemesterRef] = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class SubjectListResponse(BaseModel):
    subjects: List[SubjectResponse]
    pagination: PaginationMeta


class SubjectSearchResponse(SubjectListResponse):
    query: str
