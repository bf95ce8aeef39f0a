"""FastAPI 의존성 모듈 — 공통 쿼리 파라미터.

FastAPI dependency module — Shared query parameters for list endpoints.

Usage:
    @router.get("")
    async def list_books(paging: Annotated[Pagination, Depends(get_pagination)]): ...
"""

from dataclasses import dataclass
from typing import Annotated, Literal

from fastapi import Query

from bookstore.config import settings

Direction = Literal["asc", "desc"]


@dataclass(frozen=True)
class Pagination:
    """페이지 요청 — 1부터 시작하는 페이지 번호와 페이지 크기.

    Page request: 1-based page number and page size.
    """

    page: int
    per_page: int


def get_pagination(
    page: Annotated[int, Query(ge=1, description="페이지 번호 (1부터)")] = 1,
    per_page: Annotated[
        int, Query(ge=1, le=settings.MAX_PAGE_SIZE, description="페이지당 항목 수")
    ] = settings.DEFAULT_PAGE_SIZE,
) -> Pagination:
    """페이지 파라미터 검증 — Validate page/per_page query parameters."""
    return Pagination(page=page, per_page=per_page)
