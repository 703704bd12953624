"""
Query specs for list and search endpoints.

Each entity gets a small dataclass describing the filters a request asked
for, and pure functions that turn it into SQLAlchemy where-clauses and an
ORDER BY list. Nothing here touches a session, so the mapping can be tested
by compiling the expressions.

Free text:
    q is split into lowercase word terms (stop words dropped). A row matches
    when any term occurs, case-insensitively, in one of the entity's text
    columns. Rows are ranked by a weighted count of (term, column) hits.
"""
import enum
import operator
import re
from dataclasses import dataclass
from functools import reduce
from typing import List, Optional, Sequence, Tuple

from sqlalchemy import String, and_, case, cast, false, literal, or_, select
from sqlalchemy.sql.elements import ColumnElement

from syllabus_hub.models import (
    Branch,
    Resource,
    ResourceType,
    Roadmap,
    RoadmapDifficulty,
    RoadmapType,
    Semester,
    Subject,
    User,
    UserRole,
)

STOP_WORDS = frozenset({
    "a", "an", "and", "are", "as", "at", "be", "by", "for", "from", "how",
    "in", "is", "it", "of", "on", "or", "that", "the", "to", "what", "with",
})

TITLE_WEIGHT = 3
TAG_WEIGHT = 2
BODY_WEIGHT = 1

WeightedColumns = Sequence[Tuple[ColumnElement, int]]


def tokenize_query(q: Optional[str]) -> List[str]:
    """Lowercase word terms of q, stop words and repeats removed"""
    if not q:
        return []
    terms: List[str] = []
    for word in re.findall(r"\w+", q.lower()):
        if word not in STOP_WORDS and word not in terms:
            terms.append(word)
    return terms


def has_text(q: Optional[str]) -> bool:
    return bool(q and q.strip())


def text_match(columns: WeightedColumns, terms: Sequence[str]) -> ColumnElement:
    """OR of every (column contains term); matches nothing without terms"""
    if not terms:
        return false()
    return or_(*[
        column.icontains(term, autoescape=True)
        for column, _ in columns
        for term in terms
    ])


def relevance_score(columns: WeightedColumns, terms: Sequence[str]) -> ColumnElement:
    """Weighted number of (term, column) hits"""
    parts = [
        case((column.icontains(term, autoescape=True), weight), else_=0)
        for column, weight in columns
        for term in terms
    ]
    if not parts:
        return literal(0)
    return reduce(operator.add, parts)


def _subject_ids_for(branch_code: Optional[str], semester_number: Optional[int]):
    """Subquery of subject ids within a branch (by code) and/or semester number"""
    subject_ids = select(Subject.id)
    if branch_code:
        subject_ids = subject_ids.join(Branch, Subject.branch_id == Branch.id).where(
            Branch.code == branch_code.strip().upper()
        )
    if semester_number is not None:
        subject_ids = subject_ids.join(Semester, Subject.semester_id == Semester.id).where(
            Semester.number == semester_number
        )
    return subject_ids


# ==================== Resources ====================

RESOURCE_TEXT_COLUMNS: WeightedColumns = (
    (Resource.title, TITLE_WEIGHT),
    (cast(Resource.tags, String), TAG_WEIGHT),
    (Resource.description, BODY_WEIGHT),
)


class ResourceSort(str, enum.Enum):
    CREATED_AT = "created_at"
    QUALITY_SCORE = "quality_score"
    TITLE = "title"


@dataclass
class ResourceQuery:
    q: Optional[str] = None
    type: Optional[ResourceType] = None
    subject_id: Optional[str] = None
    branch_code: Optional[str] = None
    semester_number: Optional[int] = None
    # True for every public query; None means "any approval state"
    approved: Optional[bool] = True
    added_by_id: Optional[str] = None
    sort: ResourceSort = ResourceSort.CREATED_AT

    @property
    def terms(self) -> List[str]:
        return tokenize_query(self.q)


def build_resource_conditions(query: ResourceQuery) -> List[ColumnElement]:
    conditions: List[ColumnElement] = []

    if query.approved is not None:
        conditions.append(Resource.is_approved == query.approved)
    if query.type is not None:
        conditions.append(Resource.type == query.type)
    if query.subject_id:
        conditions.append(Resource.subject_id == query.subject_id)
    if query.branch_code or query.semester_number is not None:
        conditions.append(
            Resource.subject_id.in_(_subject_ids_for(query.branch_code, query.semester_number))
        )
    if query.added_by_id:
        conditions.append(Resource.added_by_id == query.added_by_id)
    if has_text(query.q):
        conditions.append(text_match(RESOURCE_TEXT_COLUMNS, query.terms))

    return conditions


def build_resource_ordering(query: ResourceQuery) -> List[ColumnElement]:
    if has_text(query.q):
        return [
            relevance_score(RESOURCE_TEXT_COLUMNS, query.terms).desc(),
            Resource.quality_score.desc(),
            Resource.created_at.desc(),
            Resource.id,
        ]
    if query.sort == ResourceSort.QUALITY_SCORE:
        return [Resource.quality_score.desc(), Resource.created_at.desc(), Resource.id]
    if query.sort == ResourceSort.TITLE:
        return [Resource.title.asc(), Resource.id]
    return [Resource.created_at.desc(), Resource.id]


# ==================== Subjects ====================

SUBJECT_TEXT_COLUMNS: WeightedColumns = (
    (Subject.code, TITLE_WEIGHT),
    (Subject.name, TITLE_WEIGHT),
    (cast(Subject.topics, String), TAG_WEIGHT),
)


@dataclass
class SubjectQuery:
    q: Optional[str] = None
    branch_code: Optional[str] = None
    semester_number: Optional[int] = None

    @property
    def terms(self) -> List[str]:
        return tokenize_query(self.q)


def build_subject_conditions(query: SubjectQuery) -> List[ColumnElement]:
    conditions: List[ColumnElement] = []

    if query.branch_code:
        conditions.append(Subject.branch_id.in_(
            select(Branch.id).where(Branch.code == query.branch_code.strip().upper())
        ))
    if query.semester_number is not None:
        conditions.append(Subject.semester_id.in_(
            select(Semester.id).where(Semester.number == query.semester_number)
        ))
    if has_text(query.q):
        conditions.append(text_match(SUBJECT_TEXT_COLUMNS, query.terms))

    return conditions


def build_subject_ordering(query: SubjectQuery) -> List[ColumnElement]:
    if has_text(query.q):
        return [relevance_score(SUBJECT_TEXT_COLUMNS, query.terms).desc(), Subject.code.asc()]
    return [Subject.code.asc()]


# ==================== Roadmaps ====================

ROADMAP_TEXT_COLUMNS: WeightedColumns = (
    (Roadmap.title, TITLE_WEIGHT),
    (cast(Roadmap.tags, String), TAG_WEIGHT),
    (Roadmap.description, BODY_WEIGHT),
)


@dataclass
class RoadmapQuery:
    q: Optional[str] = None
    type: Optional[RoadmapType] = None
    difficulty: Optional[RoadmapDifficulty] = None
    subject_id: Optional[str] = None
    branch_code: Optional[str] = None
    # Public queries only see roadmaps that are both public and approved
    public_only: bool = True
    approved: Optional[bool] = None
    created_by_id: Optional[str] = None

    @property
    def terms(self) -> List[str]:
        return tokenize_query(self.q)


def build_roadmap_conditions(query: RoadmapQuery) -> List[ColumnElement]:
    conditions: List[ColumnElement] = []

    if query.public_only:
        conditions.append(and_(Roadmap.is_public == True, Roadmap.is_approved == True))  # noqa: E712
    elif query.approved is not None:
        conditions.append(Roadmap.is_approved == query.approved)
    if query.type is not None:
        conditions.append(Roadmap.type == query.type)
    if query.difficulty is not None:
        conditions.append(Roadmap.difficulty == query.difficulty)
    if query.subject_id:
        conditions.append(Roadmap.subject_id == query.subject_id)
    if query.branch_code:
        conditions.append(Roadmap.subject_id.in_(_subject_ids_for(query.branch_code, None)))
    if query.created_by_id:
        conditions.append(Roadmap.created_by_id == query.created_by_id)
    if has_text(query.q):
        conditions.append(text_match(ROADMAP_TEXT_COLUMNS, query.terms))

    return conditions


def build_roadmap_ordering(query: RoadmapQuery) -> List[ColumnElement]:
    if has_text(query.q):
        return [
            relevance_score(ROADMAP_TEXT_COLUMNS, query.terms).desc(),
            Roadmap.created_at.desc(),
            Roadmap.id,
        ]
    return [Roadmap.type.asc(), Roadmap.difficulty.asc(), Roadmap.created_at.desc(), Roadmap.id]


# ==================== Users (admin) ====================

@dataclass
class UserQuery:
    q: Optional[str] = None
    role: Optional[UserRole] = None


def build_user_conditions(query: UserQuery) -> List[ColumnElement]:
    conditions: List[ColumnElement] = []

    if has_text(query.q):
        needle = query.q.strip()
        conditions.append(or_(
            User.name.icontains(needle, autoescape=True),
            User.email.icontains(needle, autoescape=True),
        ))
    if query.role is not None:
        conditions.append(User.role == query.role)

    return conditions


def build_user_ordering(query: UserQuery) -> List[ColumnElement]:
    return [User.created_at.desc(), User.id]
