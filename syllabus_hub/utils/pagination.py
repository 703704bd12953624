"""
Pagination Utility Module

Provides standardized pagination helpers for all list endpoints.
Every paginated response uses the same envelope:

    {<plural>: [...], "pagination": {"page", "limit", "total", "pages"}}
"""
from typing import List, Any, Optional
from pydantic import BaseModel
from fastapi import Query
from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql import Select

from syllabus_hub.core.config import settings


class PaginationParams(BaseModel):
    """Validated page/limit pair"""
    page: int = 1
    limit: int = 20

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


def compute_pages(total: int, limit: int) -> int:
    """ceil(total / limit); zero when there is nothing to page through"""
    if total <= 0:
        return 0
    return (total + limit - 1) // limit


def build_pagination(page: int, limit: Optional[int], default_limit: int) -> PaginationParams:
    if limit is None:
        limit = default_limit
    return PaginationParams(page=page, limit=min(limit, settings.MAX_PAGE_LIMIT))


def get_pagination(
    page: int = Query(1, ge=1, description="Page number (1-indexed)"),
    limit: Optional[int] = Query(None, ge=1, description="Items per page"),
) -> PaginationParams:
    """
    FastAPI dependency for page/limit.

    Non-integer or non-positive values fail request validation (HTTP 400)
    before the endpoint body, and so before any query, runs.
    """
    return build_pagination(page, limit, settings.DEFAULT_PAGE_LIMIT)


def get_ratings_pagination(
    page: int = Query(1, ge=1, description="Page number (1-indexed)"),
    limit: Optional[int] = Query(None, ge=1, description="Items per page"),
) -> PaginationParams:
    """Same as get_pagination, with the smaller default used for ratings"""
    return build_pagination(page, limit, settings.RATINGS_PAGE_LIMIT)


def pagination_meta(params: PaginationParams, total: int) -> dict:
    return {
        "page": params.page,
        "limit": params.limit,
        "total": total,
        "pages": compute_pages(total, params.limit),
    }


async def paginate(
    db: AsyncSession,
    query: Select,
    params: PaginationParams,
    count_query: Optional[Select] = None
) -> dict:
    """
    Apply pagination to a SQLAlchemy query.

    Args:
        db: Database session
        query: Filtered and ordered select
        params: Validated page/limit
        count_query: Count over the same where-clauses; derived from
            `query` when omitted

    Returns:
        Dictionary with items and pagination metadata
    """
    if count_query is None:
        count_query = select(func.count()).select_from(query.order_by(None).subquery())

    total = await db.scalar(count_query) or 0

    result = await db.execute(query.offset(params.offset).limit(params.limit))
    items = result.scalars().all()

    return {
        "items": items,
        "pagination": pagination_meta(params, total),
    }


def create_paginated_response(key: str, items: List[Any], pagination: dict, **extra: Any) -> dict:
    """Wrap a page of items in the standard envelope under `key`"""
    response = {key: items, "pagination": pagination}
    response.update(extra)
    return response
