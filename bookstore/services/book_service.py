"""도서 서비스 — 도서 CRUD, 소프트 삭제 및 검색 비즈니스 로직.

Book Service — Business logic for the book catalogue: CRUD with soft
delete/restore, text and price searches, availability and statistics.
"""

from decimal import Decimal
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from bookstore.models.book import Book
from bookstore.repositories.book_repository import book_repository
from bookstore.schemas.book import (
    BookCreate,
    BookResponse,
    BookSearchParams,
    BookStatistics,
    BookUpdate,
    normalize_isbn,
)
from bookstore.utils.dates import as_utc
from bookstore.utils.exceptions import (
    DeletedBookAccessError,
    DuplicateIsbnError,
    InvalidBookStateError,
    InvalidPriceRangeError,
    NotFoundError,
)
from bookstore.utils.logger import log_calls
from bookstore.utils.pagination import Page

# 가격 범위 한쪽만 주어졌을 때의 기본 경계 — Default bounds for a half-open range
MIN_PRICE = Decimal("0")
MAX_PRICE = Decimal("999999.99")


@log_calls("SERVICE")
class BookService:
    """도서 관련 비즈니스 로직을 처리하는 서비스.

    Service handling book business logic.
    Soft-deleted books behave as missing for reads and cannot be modified
    until restored.
    """

    def _to_response(self, book: Book) -> BookResponse:
        """도서 모델을 응답 스키마로 변환합니다.

        Convert a Book model instance to a BookResponse schema.
        """
        return BookResponse(
            id=str(book.id),
            title=book.title,
            author=book.author,
            isbn=book.isbn,
            price=book.price,
            available=book.available,
            created_at=as_utc(book.created_at),
            updated_at=as_utc(book.updated_at) if book.updated_at else None,
            deleted_at=as_utc(book.deleted_at) if book.deleted_at else None,
        )

    async def _get_or_404(self, db: AsyncSession, book_id: UUID) -> Book:
        book: Book | None = await book_repository.get_by_id(db, book_id)
        if book is None:
            raise NotFoundError("Book", book_id)
        return book

    async def _get_active_or_404(self, db: AsyncSession, book_id: UUID) -> Book:
        book = await self._get_or_404(db, book_id)
        if book.is_deleted:
            raise NotFoundError("Book", book_id)
        return book

    async def create_book(self, db: AsyncSession, data: BookCreate) -> BookResponse:
        """새 도서를 등록합니다.

        Register a new book.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            data: 도서 생성 데이터 (Book creation data)

        Returns:
            BookResponse: 생성된 도서 응답 (Created book response)

        Raises:
            DuplicateIsbnError: ISBN이 이미 존재할 때 (ISBN already registered,
                                including soft-deleted books)
        """
        if await book_repository.isbn_exists(db, data.isbn):
            raise DuplicateIsbnError(data.isbn)

        book: Book = await book_repository.create(db, data.model_dump())
        return self._to_response(book)

    async def get_book(self, db: AsyncSession, book_id: UUID) -> BookResponse:
        """활성 도서 단건 조회 — 삭제된 도서는 404.

        Retrieve an active book; soft-deleted books raise NotFoundError.
        """
        return self._to_response(await self._get_active_or_404(db, book_id))

    async def get_book_by_isbn(self, db: AsyncSession, isbn: str) -> BookResponse:
        book: Book | None = await book_repository.get_by_isbn(db, normalize_isbn(isbn))
        if book is None or book.is_deleted:
            raise NotFoundError("Book with ISBN", isbn)
        return self._to_response(book)

    async def list_books(
        self,
        db: AsyncSession,
        page: int = 1,
        per_page: int = 10,
        sort: str = "created_at",
        direction: str = "desc",
    ) -> Page[BookResponse]:
        """활성 도서 목록을 페이지네이션하여 조회합니다.

        List active books, paginated and sorted.
        """
        query = book_repository.active_query(sort, direction)
        books, total = await book_repository.get_paginated(db, query, page, per_page)
        return Page[BookResponse].build(books, total, page, per_page, self._to_response)

    async def list_all_active(self, db: AsyncSession) -> list[BookResponse]:
        return [self._to_response(b) for b in await book_repository.get_active(db)]

    async def update_book(
        self,
        db: AsyncSession,
        book_id: UUID,
        data: BookUpdate,
    ) -> BookResponse:
        """도서 정보를 수정합니다 (부분 업데이트).

        Update an existing book with the fields that were sent.

        Raises:
            NotFoundError: 도서를 찾을 수 없을 때 (Book not found)
            DeletedBookAccessError: 삭제된 도서일 때 (Book is soft-deleted)
            DuplicateIsbnError: 다른 도서가 같은 ISBN을 사용 중일 때
                                (Another book already uses the new ISBN)
        """
        book = await self._get_or_404(db, book_id)
        if book.is_deleted:
            raise DeletedBookAccessError(book_id)

        update_data: dict = data.model_dump(exclude_unset=True, exclude_none=True)
        new_isbn: str | None = update_data.get("isbn")
        # ISBN 변경 시 중복 확인 — Check uniqueness only when the ISBN changes
        if new_isbn is not None and new_isbn != book.isbn:
            if await book_repository.isbn_exists(db, new_isbn):
                raise DuplicateIsbnError(new_isbn)

        book = await book_repository.apply(db, book, update_data)
        return self._to_response(book)

    async def delete_book(self, db: AsyncSession, book_id: UUID) -> None:
        """도서 소프트 삭제 — Soft-delete a book by stamping deleted_at.

        Raises:
            NotFoundError: 도서를 찾을 수 없을 때 (Book not found)
            DeletedBookAccessError: 이미 삭제된 도서일 때 (Already deleted)
        """
        book = await self._get_or_404(db, book_id)
        if book.is_deleted:
            raise DeletedBookAccessError(book_id)
        book.mark_deleted()
        await db.flush()

    async def restore_book(self, db: AsyncSession, book_id: UUID) -> BookResponse:
        """삭제된 도서 복구 — Restore a soft-deleted book.

        Raises:
            InvalidBookStateError: 삭제되지 않은 도서일 때 (Book is not deleted)
        """
        book = await self._get_or_404(db, book_id)
        if not book.is_deleted:
            raise InvalidBookStateError(f"Book is not deleted: {book_id}")
        book.restore()
        await db.flush()
        await db.refresh(book)
        return self._to_response(book)

    async def search_by_title(self, db: AsyncSession, title: str | None) -> list[BookResponse]:
        if not title or not title.strip():
            return []
        return [self._to_response(b) for b in await book_repository.search_by_title(db, title.strip())]

    async def search_by_author(self, db: AsyncSession, author: str | None) -> list[BookResponse]:
        if not author or not author.strip():
            return []
        return [self._to_response(b) for b in await book_repository.search_by_author(db, author.strip())]

    async def search_by_keyword(self, db: AsyncSession, keyword: str | None) -> list[BookResponse]:
        """제목 또는 저자 키워드 검색 — 빈 키워드는 빈 목록.

        Keyword search over title and author; a blank keyword yields [].
        """
        if not keyword or not keyword.strip():
            return []
        return [self._to_response(b) for b in await book_repository.search_by_keyword(db, keyword.strip())]

    async def search_by_price_range(
        self,
        db: AsyncSession,
        min_price: Decimal | None,
        max_price: Decimal | None,
    ) -> list[BookResponse]:
        """가격 범위 검색.

        Price range search. Both bounds missing returns every active book;
        a missing bound falls back to 0 / 999999.99.

        Raises:
            InvalidPriceRangeError: 최소 가격이 최대 가격보다 클 때 (min > max)
        """
        if min_price is None and max_price is None:
            return await self.list_all_active(db)

        low = min_price if min_price is not None else MIN_PRICE
        high = max_price if max_price is not None else MAX_PRICE
        if low > high:
            raise InvalidPriceRangeError(
                f"Minimum price ({low}) cannot be greater than maximum price ({high})"
            )
        return [self._to_response(b) for b in await book_repository.find_by_price_between(db, low, high)]

    async def search_books(
        self,
        db: AsyncSession,
        params: BookSearchParams,
        page: int = 1,
        per_page: int = 10,
        sort: str = "created_at",
        direction: str = "desc",
    ) -> Page[BookResponse]:
        """복합 조건 검색 (페이지네이션) — Combined search, paginated."""
        if (
            params.min_price is not None
            and params.max_price is not None
            and params.min_price > params.max_price
        ):
            raise InvalidPriceRangeError(
                f"Minimum price ({params.min_price}) cannot be greater than maximum price ({params.max_price})"
            )
        query = book_repository.filtered_query(
            title=params.title.strip() if params.title else None,
            author=params.author.strip() if params.author else None,
            keyword=params.keyword.strip() if params.keyword else None,
            min_price=params.min_price,
            max_price=params.max_price,
            available=params.available,
            sort=sort,
            direction=direction,
        )
        books, total = await book_repository.get_paginated(db, query, page, per_page)
        return Page[BookResponse].build(books, total, page, per_page, self._to_response)

    async def find_by_availability(self, db: AsyncSession, available: bool) -> list[BookResponse]:
        return [self._to_response(b) for b in await book_repository.find_by_available(db, available)]

    async def update_availability(
        self,
        db: AsyncSession,
        book_id: UUID,
        available: bool,
    ) -> BookResponse:
        """재고 상태 변경 — Toggle the availability flag of an active book."""
        book = await self._get_or_404(db, book_id)
        if book.is_deleted:
            raise DeletedBookAccessError(book_id)
        book = await book_repository.apply(db, book, {"available": available})
        return self._to_response(book)

    async def isbn_exists(self, db: AsyncSession, isbn: str) -> bool:
        """ISBN 등록 여부 — True when any book (deleted included) uses the ISBN."""
        return await book_repository.isbn_exists(db, normalize_isbn(isbn))

    async def get_statistics(self, db: AsyncSession) -> BookStatistics:
        total: int = await book_repository.count(db)
        active: int = await book_repository.count_active(db)
        return BookStatistics(total_books=total, active_books=active, deleted_books=total - active)


# 싱글턴 인스턴스 — Singleton instance
book_service: BookService = BookService()
