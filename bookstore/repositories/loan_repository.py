"""대여 레포지토리 — 대여 기록 조회 및 집계 쿼리.

Loan Repository — Queries over loan records.
A loan is active while ``return_date`` is NULL. Every query that feeds a
response eager-loads ``member`` and ``book`` because lazy loading is not
available on async sessions.
"""

from datetime import datetime
from uuid import UUID

from sqlalchemy import Select, func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from bookstore.models.loan import Loan
from bookstore.repositories.base import BaseRepository


class LoanRepository(BaseRepository[Loan]):
    """대여 테이블에 대한 데이터베이스 쿼리를 담당하는 레포지토리.

    Repository handling database queries for the loans table.
    """

    def __init__(self) -> None:
        super().__init__(Loan)

    def _with_relations(self) -> Select:
        return select(Loan).options(selectinload(Loan.member), selectinload(Loan.book))

    async def get_detail(self, db: AsyncSession, loan_id: UUID) -> Loan | None:
        """대여 상세 조회 (회원/도서 포함) — Loan with member and book loaded.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            loan_id: 대여 ID (Loan UUID)

        Returns:
            Loan | None: 회원/도서가 로드된 대여 또는 None
                         (Loan with member/book loaded, or None)
        """
        query: Select = (
            self._with_relations()
            .where(Loan.id == loan_id)
            .execution_options(populate_existing=True)
        )
        return (await db.execute(query)).scalar_one_or_none()

    async def count_active_by_member(self, db: AsyncSession, member_id: UUID) -> int:
        """회원의 미반납 대여 수 — Number of unreturned loans for a member."""
        query: Select = (
            select(func.count())
            .select_from(Loan)
            .where(Loan.member_id == member_id, Loan.return_date.is_(None))
        )
        return (await db.execute(query)).scalar() or 0

    async def has_active_loan_for_book(self, db: AsyncSession, book_id: UUID) -> bool:
        query: Select = (
            select(func.count())
            .select_from(Loan)
            .where(Loan.book_id == book_id, Loan.return_date.is_(None))
        )
        return ((await db.execute(query)).scalar() or 0) > 0

    async def find_by_member(self, db: AsyncSession, member_id: UUID) -> list[Loan]:
        query: Select = (
            self._with_relations()
            .where(Loan.member_id == member_id)
            .order_by(Loan.loan_date.desc())
        )
        return list((await db.execute(query)).scalars().all())

    async def find_overdue(self, db: AsyncSession, now: datetime) -> list[Loan]:
        """연체 대여 조회 — Unreturned loans whose due date has passed.

        Args:
            now: 기준 시각 (Reference time, timezone-aware UTC)
        """
        query: Select = (
            self._with_relations()
            .where(Loan.return_date.is_(None), Loan.due_date < now)
            .order_by(Loan.due_date)
        )
        return list((await db.execute(query)).scalars().all())

    def filtered_query(
        self,
        member_id: UUID | None = None,
        book_id: UUID | None = None,
        active: bool | None = None,
    ) -> Select:
        """대여 목록 필터 쿼리 — None인 조건은 무시.

        Build the paginated loan listing query; ``None`` filters are skipped.
        ``active=True`` keeps unreturned loans, ``active=False`` returned ones.
        """
        query: Select = self._with_relations()
        if member_id is not None:
            query = query.where(Loan.member_id == member_id)
        if book_id is not None:
            query = query.where(Loan.book_id == book_id)
        if active is True:
            query = query.where(Loan.return_date.is_(None))
        elif active is False:
            query = query.where(Loan.return_date.is_not(None))
        return query.order_by(Loan.loan_date.desc(), Loan.id)


# 싱글턴 인스턴스 — Singleton instance
loan_repository: LoanRepository = LoanRepository()
