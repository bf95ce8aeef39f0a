"""도서 레포지토리 — 도서 CRUD 및 검색 쿼리.

Book Repository — CRUD and search queries for books.
Soft-deleted books (``deleted_at`` set) are excluded from every search
and listing; only direct lookups by id/ISBN and the raw count see them.
"""

from decimal import Decimal
from typing import Sequence

from sqlalchemy import Select, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from bookstore.models.book import Book
from bookstore.repositories.base import BaseRepository

# 정렬 허용 컬럼 — Sortable columns exposed to the API
SORTABLE_COLUMNS = {
    "created_at": Book.created_at,
    "title": Book.title,
    "author": Book.author,
    "price": Book.price,
}


def _ordered(query: Select, sort: str, direction: str) -> Select:
    column = SORTABLE_COLUMNS.get(sort, Book.created_at)
    ordering = column.asc() if direction.lower() == "asc" else column.desc()
    # 동일 값 정렬 안정화 — tie-break on id for stable pages
    return query.order_by(ordering, Book.id)


class BookRepository(BaseRepository[Book]):
    """도서 테이블에 대한 데이터베이스 쿼리를 담당하는 레포지토리.

    Repository handling database queries for the books table.
    """

    def __init__(self) -> None:
        super().__init__(Book)

    def _active(self) -> Select:
        return select(Book).where(Book.deleted_at.is_(None))

    async def get_by_isbn(self, db: AsyncSession, isbn: str) -> Book | None:
        """ISBN으로 도서 조회 (삭제 도서 포함) — Lookup by ISBN, deleted rows included."""
        result = await db.execute(select(Book).where(Book.isbn == isbn))
        return result.scalar_one_or_none()

    async def isbn_exists(self, db: AsyncSession, isbn: str) -> bool:
        return await self.exists(db, {"isbn": isbn})

    async def get_active(self, db: AsyncSession) -> list[Book]:
        """모든 활성 도서 조회 — All non-deleted books."""
        result = await db.execute(self._active().order_by(Book.created_at))
        return list(result.scalars().all())

    def active_query(self, sort: str = "created_at", direction: str = "desc") -> Select:
        """활성 도서 페이지 조회용 쿼리 — Query for paginated active listing."""
        return _ordered(self._active(), sort, direction)

    async def search_by_title(self, db: AsyncSession, title: str) -> list[Book]:
        query = self._active().where(Book.title.icontains(title, autoescape=True)).order_by(Book.title)
        return list((await db.execute(query)).scalars().all())

    async def search_by_author(self, db: AsyncSession, author: str) -> list[Book]:
        query = self._active().where(Book.author.icontains(author, autoescape=True)).order_by(Book.title)
        return list((await db.execute(query)).scalars().all())

    async def search_by_keyword(self, db: AsyncSession, keyword: str) -> list[Book]:
        """제목 또는 저자에 키워드 포함 — Title OR author contains keyword."""
        query = self._active().where(
            or_(
                Book.title.icontains(keyword, autoescape=True),
                Book.author.icontains(keyword, autoescape=True),
            )
        ).order_by(Book.title)
        return list((await db.execute(query)).scalars().all())

    async def find_by_price_between(
        self,
        db: AsyncSession,
        min_price: Decimal,
        max_price: Decimal,
    ) -> list[Book]:
        query = self._active().where(Book.price.between(min_price, max_price)).order_by(Book.price)
        return list((await db.execute(query)).scalars().all())

    async def find_by_available(self, db: AsyncSession, available: bool) -> list[Book]:
        query = self._active().where(Book.available.is_(available)).order_by(Book.title)
        return list((await db.execute(query)).scalars().all())

    def filtered_query(
        self,
        title: str | None = None,
        author: str | None = None,
        keyword: str | None = None,
        min_price: Decimal | None = None,
        max_price: Decimal | None = None,
        available: bool | None = None,
        sort: str = "created_at",
        direction: str = "desc",
    ) -> Select:
        """복합 조건 검색 쿼리 — None인 조건은 무시.

        Build the combined search query; ``None`` filters are skipped.
        """
        query: Select = self._active()
        if title:
            query = query.where(Book.title.icontains(title, autoescape=True))
        if author:
            query = query.where(Book.author.icontains(author, autoescape=True))
        if keyword:
            query = query.where(
                or_(
                    Book.title.icontains(keyword, autoescape=True),
                    Book.author.icontains(keyword, autoescape=True),
                )
            )
        if min_price is not None:
            query = query.where(Book.price >= min_price)
        if max_price is not None:
            query = query.where(Book.price <= max_price)
        if available is not None:
            query = query.where(Book.available.is_(available))
        return _ordered(query, sort, direction)

    async def get_active_by_ids(self, db: AsyncSession, book_ids: Sequence) -> dict:
        """ID 목록으로 활성 도서 일괄 조회 — Map of id → active book."""
        if not book_ids:
            return {}
        result = await db.execute(self._active().where(Book.id.in_(set(book_ids))))
        return {book.id: book for book in result.scalars().all()}

    async def count_active(self, db: AsyncSession) -> int:
        query: Select = select(func.count()).select_from(Book).where(Book.deleted_at.is_(None))
        return (await db.execute(query)).scalar() or 0


# 싱글턴 인스턴스 — Singleton instance
book_repository: BookRepository = BookRepository()
