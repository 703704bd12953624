from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select

from syllabus_hub.core.database import get_db
from syllabus_hub.models import Branch, User
from syllabus_hub.modules.auth.dependencies import get_current_admin
from syllabus_hub.schemas.catalog import BranchCreate, BranchListResponse, BranchResponse, BranchUpdate
from syllabus_hub.schemas.common import MessageResponse
from syllabus_hub.services import catalog_service
from syllabus_hub.utils.pagination import PaginationParams, get_pagination, paginate, create_paginated_response

router = APIRouter()


@router.get("", response_model=BranchListResponse)
async def list_branches(
    pagination: PaginationParams = Depends(get_pagination),
    db: AsyncSession = Depends(get_db),
    current_admin: User = Depends(get_current_admin)
):
    page = await paginate(db, select(Branch).order_by(Branch.code.asc()), pagination)
    return create_paginated_response("branches", page["items"], page["pagination"])


@router.post("", response_model=BranchResponse, status_code=status.HTTP_201_CREATED)
async def create_branch(
    data: BranchCreate,
    db: AsyncSession = Depends(get_db),
    current_admin: User = Depends(get_current_admin)
):
    return await catalog_service.create_branch(db, data)


@router.put("/{branch_id}", response_model=BranchResponse)
async def update_branch(
    branch_id: str,
    data: BranchUpdate,
    db: AsyncSession = Depends(get_db),
    current_admin: User = Depends(get_current_admin)
):
    return await catalog_service.update_branch(db, branch_id, data)


@router.delete("/{branch_id}", response_model=MessageResponse)
async def delete_branch(
    branch_id: str,
    db: AsyncSession = Depends(get_db),
    current_admin: User = Depends(get_current_admin)
):
    """Refused with 400 while subjects or programs reference the branch"""
    await catalog_service.delete_branch(db, branch_id)
    return {"message": "Branch deleted successfully"}
