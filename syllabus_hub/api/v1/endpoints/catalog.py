"""
Catalog browsing: branches, programs, years, semesters and their subjects.
"""
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List

from syllabus_hub.core.database import get_db
from syllabus_hub.schemas.catalog import (
    BranchResponse,
    CatalogStructureResponse,
    ProgramResponse,
    SemesterResponse,
    SubjectResponse,
    YearResponse,
)
from syllabus_hub.services import catalog_service

router = APIRouter()


@router.get("/branches", response_model=List[BranchResponse])
async def list_branches(db: AsyncSession = Depends(get_db)):
    return await catalog_service.list_branches(db)


@router.get("/programs", response_model=List[ProgramResponse])
async def list_programs(db: AsyncSession = Depends(get_db)):
    return await catalog_service.list_programs(db)


@router.get("/branches/{branch_id}/programs", response_model=List[ProgramResponse])
async def list_branch_programs(branch_id: str, db: AsyncSession = Depends(get_db)):
    return await catalog_service.list_programs(db, branch_id=branch_id)


@router.get("/programs/{program_id}/years", response_model=List[YearResponse])
async def list_program_years(program_id: str, db: AsyncSession = Depends(get_db)):
    return await catalog_service.list_years(db, program_id)


@router.get("/years/{year_id}/semesters", response_model=List[SemesterResponse])
async def list_year_semesters(year_id: str, db: AsyncSession = Depends(get_db)):
    return await catalog_service.list_semesters(db, year_id)


@router.get("/semesters/{semester_id}/subjects", response_model=List[SubjectResponse])
async def list_semester_subjects(semester_id: str, db: AsyncSession = Depends(get_db)):
    return await catalog_service.list_semester_subjects(db, semester_id)


@router.get("/structure", response_model=CatalogStructureResponse)
async def catalog_structure(db: AsyncSession = Depends(get_db)):
    """Whole hierarchy in one call, for navigation menus"""
    return {"branches": await catalog_service.get_catalog_structure(db)}
