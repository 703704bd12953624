"""
Unit Tests for the pagination helpers
"""
import pytest

from syllabus_hub.core.config import settings
from syllabus_hub.utils.pagination import (
    PaginationParams,
    build_pagination,
    compute_pages,
    create_paginated_response,
    pagination_meta,
)


class TestComputePages:

    @pytest.mark.parametrize("total, limit, expected", [
        (0, 20, 0),
        (1, 20, 1),
        (20, 20, 1),
        (21, 20, 2),
        (2, 2, 1),
        (5, 2, 3),
    ])
    def test_ceiling(self, total, limit, expected):
        assert compute_pages(total, limit) == expected


class TestBuildPagination:

    def test_default_limit(self):
        params = build_pagination(1, None, settings.DEFAULT_PAGE_LIMIT)

        assert params.limit == settings.DEFAULT_PAGE_LIMIT

    def test_ratings_default_limit(self):
        assert build_pagination(1, None, settings.RATINGS_PAGE_LIMIT).limit == 10

    def test_limit_is_clamped(self):
        params = build_pagination(1, 10_000, settings.DEFAULT_PAGE_LIMIT)

        assert params.limit == settings.MAX_PAGE_LIMIT

    def test_offset(self):
        assert PaginationParams(page=3, limit=20).offset == 40
        assert PaginationParams(page=1, limit=5).offset == 0


class TestEnvelope:

    def test_meta(self):
        assert pagination_meta(PaginationParams(page=2, limit=2), 5) == {
            "page": 2, "limit": 2, "total": 5, "pages": 3,
        }

    def test_empty_meta(self):
        assert pagination_meta(PaginationParams(page=1, limit=20), 0)["pages"] == 0

    def test_paginated_response(self):
        meta = pagination_meta(PaginationParams(), 1)

        body = create_paginated_response("branches", [{"code": "CSE"}], meta, query="cse")

        assert body == {"branches": [{"code": "CSE"}], "pagination": meta, "query": "cse"}
