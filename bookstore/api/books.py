"""도서 라우터 — 도서 CRUD, 검색, 소프트 삭제/복구 엔드포인트.

Book Router — CRUD, search, soft delete/restore and statistics endpoints.
Static paths (``/statistics``, ``/search/...``, ``/isbn/...``) are declared
before ``/{book_id}`` so they are not captured as ids.
"""

from decimal import Decimal
from typing import Annotated, Literal
from uuid import UUID

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from bookstore.api.deps import Direction, Pagination, get_pagination
from bookstore.database import get_db
from bookstore.schemas.book import (
    BookCreate,
    BookResponse,
    BookSearchParams,
    BookStatistics,
    BookUpdate,
)
from bookstore.services.book_service import book_service
from bookstore.utils.pagination import Page

router: APIRouter = APIRouter()

BookSort = Literal["created_at", "title", "author", "price"]


@router.post("", response_model=BookResponse, status_code=201)
async def create_book(
    data: BookCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> BookResponse:
    """새 도서를 등록합니다. ISBN 중복 시 409.

    Register a new book. Duplicate ISBN returns 409.
    """
    result: BookResponse = await book_service.create_book(db, data)
    await db.commit()
    return result


@router.get("", response_model=Page[BookResponse])
async def list_books(
    db: Annotated[AsyncSession, Depends(get_db)],
    paging: Annotated[Pagination, Depends(get_pagination)],
    sort: BookSort = "created_at",
    direction: Direction = "desc",
) -> Page[BookResponse]:
    """활성 도서 목록 (페이지네이션) — Paginated active books."""
    return await book_service.list_books(db, paging.page, paging.per_page, sort, direction)


@router.get("/statistics", response_model=BookStatistics)
async def get_book_statistics(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> BookStatistics:
    """도서 통계 (전체/활성/삭제) — Book counts."""
    return await book_service.get_statistics(db)


@router.get("/search", response_model=Page[BookResponse])
async def search_books(
    db: Annotated[AsyncSession, Depends(get_db)],
    paging: Annotated[Pagination, Depends(get_pagination)],
    title: Annotated[str | None, Query(description="제목 부분 일치")] = None,
    author: Annotated[str | None, Query(description="저자 부분 일치")] = None,
    keyword: Annotated[str | None, Query(description="제목 또는 저자")] = None,
    min_price: Annotated[Decimal | None, Query(ge=0)] = None,
    max_price: Annotated[Decimal | None, Query(ge=0)] = None,
    available: bool | None = None,
    sort: BookSort = "created_at",
    direction: Direction = "desc",
) -> Page[BookResponse]:
    """복합 조건 도서 검색 — Combined filters, paginated. Missing filters are ignored."""
    params = BookSearchParams(
        title=title,
        author=author,
        keyword=keyword,
        min_price=min_price,
        max_price=max_price,
        available=available,
    )
    return await book_service.search_books(db, params, paging.page, paging.per_page, sort, direction)


@router.get("/search/title", response_model=list[BookResponse])
async def search_by_title(
    db: Annotated[AsyncSession, Depends(get_db)],
    title: str = "",
) -> list[BookResponse]:
    return await book_service.search_by_title(db, title)


@router.get("/search/author", response_model=list[BookResponse])
async def search_by_author(
    db: Annotated[AsyncSession, Depends(get_db)],
    author: str = "",
) -> list[BookResponse]:
    return await book_service.search_by_author(db, author)


@router.get("/search/keyword", response_model=list[BookResponse])
async def search_by_keyword(
    db: Annotated[AsyncSession, Depends(get_db)],
    keyword: str = "",
) -> list[BookResponse]:
    """키워드 검색 (제목 또는 저자) — 빈 키워드는 빈 목록.

    Keyword search over title and author; a blank keyword returns [].
    """
    return await book_service.search_by_keyword(db, keyword)


@router.get("/search/price", response_model=list[BookResponse])
async def search_by_price(
    db: Annotated[AsyncSession, Depends(get_db)],
    min_price: Annotated[Decimal | None, Query(ge=0)] = None,
    max_price: Annotated[Decimal | None, Query(ge=0)] = None,
) -> list[BookResponse]:
    """가격 범위 검색. min > max이면 400.

    Price range search; min_price greater than max_price returns 400.
    """
    return await book_service.search_by_price_range(db, min_price, max_price)


@router.get("/isbn/{isbn}", response_model=BookResponse)
async def get_book_by_isbn(
    isbn: str,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> BookResponse:
    return await book_service.get_book_by_isbn(db, isbn)


@router.get("/validate/isbn", response_model=bool)
async def validate_isbn(
    isbn: str,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> bool:
    """ISBN 등록 여부 확인 — True when the ISBN is already registered."""
    return await book_service.isbn_exists(db, isbn)


@router.get("/availability/{available}", response_model=list[BookResponse])
async def list_by_availability(
    available: bool,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> list[BookResponse]:
    return await book_service.find_by_availability(db, available)


@router.get("/{book_id}", response_model=BookResponse)
async def get_book(
    book_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> BookResponse:
    """도서 상세 조회. 없거나 삭제된 도서는 404.

    Retrieve a book; missing or soft-deleted books return 404.
    """
    return await book_service.get_book(db, book_id)


@router.put("/{book_id}", response_model=BookResponse)
async def update_book(
    book_id: UUID,
    data: BookUpdate,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> BookResponse:
    """도서 정보를 수정합니다 (부분 업데이트).

    Update a book with the fields sent. Deleted books return 400.
    """
    result: BookResponse = await book_service.update_book(db, book_id, data)
    await db.commit()
    return result


@router.delete("/{book_id}", status_code=204)
async def delete_book(
    book_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> None:
    """도서 소프트 삭제 — Soft-delete a book."""
    await book_service.delete_book(db, book_id)
    await db.commit()


@router.patch("/{book_id}/restore", response_model=BookResponse)
async def restore_book(
    book_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> BookResponse:
    """삭제된 도서 복구 — Restore a soft-deleted book."""
    result: BookResponse = await book_service.restore_book(db, book_id)
    await db.commit()
    return result


@router.patch("/{book_id}/availability", response_model=BookResponse)
async def update_availability(
    book_id: UUID,
    available: bool,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> BookResponse:
    result: BookResponse = await book_service.update_availability(db, book_id, available)
    await db.commit()
    return result
