"""
Catalog Service

Lookups over the Branch -> Program -> Year -> Semester -> Subject chain,
the nested structure view, admin writes, and the delete guards that keep
branches and subjects from being removed while something still points
at them.
"""
from typing import List, Optional, Sequence, Tuple

from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from syllabus_hub.core.exceptions import (
    DependentRecordsError,
    DuplicateRecordError,
    ResourceNotFoundError,
    ValidationError,
)
from syllabus_hub.core.logging_config import logger
from syllabus_hub.models import Branch, Program, Year, Semester, Subject, Resource, Roadmap
from syllabus_hub.schemas.catalog import (
    BranchCreate,
    BranchUpdate,
    SubjectCreate,
    SubjectUpdate,
    SubjectResponse,
)
from syllabus_hub.utils.pagination import PaginationParams, paginate
from syllabus_hub.utils.query_filters import (
    SubjectQuery,
    build_subject_conditions,
    build_subject_ordering,
)


SUBJECT_LOAD_OPTIONS = (
    selectinload(Subject.branch),
    selectinload(Subject.semester),
)


# ==================== Delete guards ====================

async def count_rows(db: AsyncSession, column, value) -> int:
    return await db.scalar(select(func.count()).where(column == value)) or 0


async def ensure_deletable(
    db: AsyncSession,
    entity: str,
    checks: Sequence[Tuple[str, object, str]],
) -> None:
    """
    Raise DependentRecordsError for the first dependent kind with rows.

    checks: (dependents label, foreign-key column, parent id)
    """
    for label, column, parent_id in checks:
        count = await count_rows(db, column, parent_id)
        if count > 0:
            raise DependentRecordsError(entity, label, count)


async def ensure_branch_deletable(db: AsyncSession, branch_id: str) -> None:
    await ensure_deletable(db, "Branch", (
        ("subjects", Subject.branch_id, branch_id),
        ("programs", Program.branch_id, branch_id),
    ))


async def ensure_subject_deletable(db: AsyncSession, subject_id: str) -> None:
    await ensure_deletable(db, "Subject", (
        ("resources", Resource.subject_id, subject_id),
        ("roadmaps", Roadmap.subject_id, subject_id),
    ))


# ==================== Branches ====================

async def list_branches(db: AsyncSession) -> List[Branch]:
    result = await db.execute(select(Branch).order_by(Branch.code.asc()))
    return list(result.scalars().all())


async def get_branch(db: AsyncSession, branch_id: str) -> Branch:
    branch = await db.get(Branch, branch_id)
    if not branch:
        raise ResourceNotFoundError("Branch", branch_id)
    return branch


async def _ensure_branch_code_free(db: AsyncSession, code: str, exclude_id: Optional[str] = None) -> None:
    query = select(Branch.id).where(Branch.code == code)
    if exclude_id:
        query = query.where(Branch.id != exclude_id)
    if await db.scalar(query):
        raise DuplicateRecordError(f"Branch with code '{code}' already exists", field="code")


async def create_branch(db: AsyncSession, data: BranchCreate) -> Branch:
    await _ensure_branch_code_free(db, data.code)
    branch = Branch(code=data.code, name=data.name.strip())
    db.add(branch)
    await db.commit()
    logger.info(f"[Catalog] Created branch {branch.code}")
    return branch


async def update_branch(db: AsyncSession, branch_id: str, data: BranchUpdate) -> Branch:
    branch = await get_branch(db, branch_id)
    if data.code and data.code != branch.code:
        await _ensure_branch_code_free(db, data.code, exclude_id=branch.id)
        branch.code = data.code
    if data.name:
        branch.name = data.name.strip()
    await db.commit()
    return branch


async def delete_branch(db: AsyncSession, branch_id: str) -> None:
    branch = await get_branch(db, branch_id)
    await ensure_branch_deletable(db, branch.id)
    await db.delete(branch)
    await db.commit()
    logger.info(f"[Catalog] Deleted branch {branch.code}")


# ==================== Program / Year / Semester ====================

async def list_programs(db: AsyncSession, branch_id: Optional[str] = None) -> List[Program]:
    query = select(Program).order_by(Program.code.asc())
    if branch_id is not None:
        await get_branch(db, branch_id)
        query = query.where(Program.branch_id == branch_id)
    result = await db.execute(query)
    return list(result.scalars().all())


async def list_years(db: AsyncSession, program_id: str) -> List[Year]:
    if not await db.get(Program, program_id):
        raise ResourceNotFoundError("Program", program_id)
    result = await db.execute(
        select(Year).where(Year.program_id == program_id).order_by(Year.year.asc())
    )
    return list(result.scalars().all())


async def list_semesters(db: AsyncSession, year_id: str) -> List[Semester]:
    if not await db.get(Year, year_id):
        raise ResourceNotFoundError("Year", year_id)
    result = await db.execute(
        select(Semester).where(Semester.year_id == year_id).order_by(Semester.number.asc())
    )
    return list(result.scalars().all())


async def list_semester_subjects(db: AsyncSession, semester_id: str) -> List[Subject]:
    if not await db.get(Semester, semester_id):
        raise ResourceNotFoundError("Semester", semester_id)
    result = await db.execute(
        select(Subject)
        .options(*SUBJECT_LOAD_OPTIONS)
        .where(Subject.semester_id == semester_id)
        .order_by(Subject.code.asc())
    )
    return list(result.scalars().all())


async def get_catalog_structure(db: AsyncSession) -> List[dict]:
    """Branches with their programs, years and semesters as plain nested dicts"""
    result = await db.execute(
        select(Branch)
        .options(
            selectinload(Branch.programs)
            .selectinload(Program.years)
            .selectinload(Year.semesters)
        )
        .order_by(Branch.code.asc())
        .execution_options(populate_existing=True)
    )
    branches = result.scalars().all()

    return [
        {
            "id": branch.id,
            "code": branch.code,
            "name": branch.name,
            "programs": [
                {
                    "id": program.id,
                    "code": program.code,
                    "name": program.name,
                    "duration_years": program.duration_years,
                    "years": [
                        {
                            "id": year.id,
                            "year": year.year,
                            "semesters": [
                                {"id": semester.id, "number": semester.number}
                                for semester in year.semesters
                            ],
                        }
                        for year in program.years
                    ],
                }
                for program in branch.programs
            ],
        }
        for branch in branches
    ]


# ==================== Subjects ====================

async def list_subjects(db: AsyncSession, query: SubjectQuery, params: PaginationParams) -> dict:
    conditions = build_subject_conditions(query)
    stmt = (
        select(Subject)
        .options(*SUBJECT_LOAD_OPTIONS)
        .where(*conditions)
        .order_by(*build_subject_ordering(query))
    )
    count_stmt = select(func.count(Subject.id)).where(*conditions)
    page = await paginate(db, stmt, params, count_query=count_stmt)
    return {
        "subjects": [SubjectResponse.model_validate(s) for s in page["items"]],
        "pagination": page["pagination"],
    }


async def get_subject(db: AsyncSession, subject_id: str) -> Subject:
    result = await db.execute(
        select(Subject)
        .options(*SUBJECT_LOAD_OPTIONS)
        .where(Subject.id == subject_id)
        .execution_options(populate_existing=True)
    )
    subject = result.scalar_one_or_none()
    if not subject:
        raise ResourceNotFoundError("Subject", subject_id)
    return subject


async def get_subject_by_code(db: AsyncSession, code: str) -> Subject:
    result = await db.execute(
        select(Subject)
        .options(*SUBJECT_LOAD_OPTIONS)
        .where(Subject.code == code.strip().upper())
    )
    subject = result.scalar_one_or_none()
    if not subject:
        raise ResourceNotFoundError("Subject", code)
    return subject


async def ensure_subject_exists(db: AsyncSession, subject_id: str) -> None:
    """400 rather than 404: the id came from a request body"""
    if not await db.get(Subject, subject_id):
        raise ValidationError(f"Subject '{subject_id}' does not exist", field="subject_id")


async def _ensure_subject_code_free(db: AsyncSession, code: str, exclude_id: Optional[str] = None) -> None:
    query = select(Subject.id).where(Subject.code == code)
    if exclude_id:
        query = query.where(Subject.id != exclude_id)
    if await db.scalar(query):
        raise DuplicateRecordError(f"Subject with code '{code}' already exists", field="code")


async def _ensure_parents_exist(db: AsyncSession, branch_id: Optional[str], semester_id: Optional[str]) -> None:
    if branch_id is not None and not await db.get(Branch, branch_id):
        raise ValidationError(f"Branch '{branch_id}' does not exist", field="branch_id")
    if semester_id is not None and not await db.get(Semester, semester_id):
        raise ValidationError(f"Semester '{semester_id}' does not exist", field="semester_id")


async def create_subject(db: AsyncSession, data: SubjectCreate) -> Subject:
    await _ensure_subject_code_free(db, data.code)
    await _ensure_parents_exist(db, data.branch_id, data.semester_id)

    subject = Subject(
        code=data.code,
        name=data.name.strip(),
        branch_id=data.branch_id,
        semester_id=data.semester_id,
        credits=data.credits,
        topics=data.topics,
    )
    db.add(subject)
    await db.commit()
    logger.info(f"[Catalog] Created subject {subject.code}")
    return await get_subject(db, subject.id)


async def update_subject(db: AsyncSession, subject_id: str, data: SubjectUpdate) -> Subject:
    subject = await get_subject(db, subject_id)
    changes = data.model_dump(exclude_unset=True)

    if changes.get("code") and changes["code"] != subject.code:
        await _ensure_subject_code_free(db, changes["code"], exclude_id=subject.id)
    await _ensure_parents_exist(db, changes.get("branch_id"), changes.get("semester_id"))

    for field, value in changes.items():
        if value is None:
            continue
        setattr(subject, field, value.strip() if field == "name" else value)

    await db.commit()
    return await get_subject(db, subject.id)


async def delete_subject(db: AsyncSession, subject_id: str) -> None:
    subject = await get_subject(db, subject_id)
    await ensure_subject_deletable(db, subject.id)
    await db.delete(subject)
    await db.commit()
    logger.info(f"[Catalog] Deleted subject {subject.code}")
