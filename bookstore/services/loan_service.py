"""대여 서비스 — 도서 대여/반납 및 연체 조회 비즈니스 로직.

Loan Service — Business logic for lending books to members.
The membership tier caps how many unreturned loans a member may hold;
a book can be on loan to only one member at a time.
"""

from datetime import datetime, timedelta, timezone
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from bookstore.config import settings
from bookstore.models.book import Book
from bookstore.models.loan import Loan
from bookstore.models.member import Member, MembershipType
from bookstore.repositories.book_repository import book_repository
from bookstore.repositories.loan_repository import loan_repository
from bookstore.repositories.member_repository import member_repository
from bookstore.schemas.loan import LoanCreate, LoanResponse
from bookstore.utils.exceptions import (
    BookNotAvailableError,
    LoanAlreadyReturnedError,
    LoanLimitExceededError,
    NotFoundError,
)
from bookstore.utils.dates import as_utc
from bookstore.utils.logger import log_calls
from bookstore.utils.pagination import Page


@log_calls("SERVICE")
class LoanService:
    """대여 관련 비즈니스 로직을 처리하는 서비스.

    Service handling loan business logic.

    Args:
        loan_period_days: 기본 대여 기간(일) (Days until a new loan is due)
    """

    def __init__(self, loan_period_days: int) -> None:
        self._loan_period = timedelta(days=loan_period_days)

    def _to_response(self, loan: Loan, now: datetime | None = None) -> LoanResponse:
        """대여 모델을 응답으로 변환 — overdue는 조회 시점 기준으로 계산.

        Convert a Loan (with member and book loaded) to a LoanResponse.
        ``overdue`` is evaluated against ``now`` at read time.
        """
        now = now or datetime.now(timezone.utc)
        due_date = as_utc(loan.due_date)
        return LoanResponse(
            id=str(loan.id),
            member_id=str(loan.member_id),
            member_name=loan.member.name,
            book_id=str(loan.book_id),
            book_title=loan.book.title,
            loan_date=as_utc(loan.loan_date),
            due_date=due_date,
            return_date=as_utc(loan.return_date) if loan.return_date else None,
            returned=loan.is_returned,
            overdue=not loan.is_returned and due_date < now,
        )

    async def _get_detail_or_404(self, db: AsyncSession, loan_id: UUID) -> Loan:
        loan: Loan | None = await loan_repository.get_detail(db, loan_id)
        if loan is None:
            raise NotFoundError("Loan", loan_id)
        return loan

    async def create_loan(self, db: AsyncSession, data: LoanCreate) -> LoanResponse:
        """도서를 대여합니다.

        Lend a book to a member.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            data: 회원/도서 ID (Member and book ids)

        Returns:
            LoanResponse: 생성된 대여 응답 (Created loan, due after the loan period)

        Raises:
            NotFoundError: 회원 또는 활성 도서가 없을 때 (Member or active book missing)
            BookNotAvailableError: 재고 없음 또는 대여 중 (Unavailable or already on loan)
            LoanLimitExceededError: 등급별 대여 한도 초과, 정지 회원 (Tier limit reached or suspended)
        """
        member: Member | None = await member_repository.get_by_id(db, data.member_id)
        if member is None:
            raise NotFoundError("Member", data.member_id)

        book: Book | None = await book_repository.get_by_id(db, data.book_id)
        if book is None or book.is_deleted:
            raise NotFoundError("Book", data.book_id)
        if not book.available or await loan_repository.has_active_loan_for_book(db, book.id):
            raise BookNotAvailableError(book.id)

        tier: MembershipType = member.tier
        if tier == MembershipType.SUSPENDED:
            raise LoanLimitExceededError(f"Suspended member cannot borrow books: {member.id}")
        active: int = await loan_repository.count_active_by_member(db, member.id)
        if active >= tier.max_loan_count:
            raise LoanLimitExceededError(
                f"Loan limit reached ({active}/{tier.max_loan_count}) for member {member.id}"
            )

        now = datetime.now(timezone.utc)
        loan: Loan = await loan_repository.create(
            db,
            {
                "member_id": member.id,
                "book_id": book.id,
                "loan_date": now,
                "due_date": now + self._loan_period,
            },
        )
        return self._to_response(await self._get_detail_or_404(db, loan.id), now)

    async def get_loan(self, db: AsyncSession, loan_id: UUID) -> LoanResponse:
        return self._to_response(await self._get_detail_or_404(db, loan_id))

    async def list_loans(
        self,
        db: AsyncSession,
        member_id: UUID | None = None,
        book_id: UUID | None = None,
        active: bool | None = None,
        page: int = 1,
        per_page: int = 10,
    ) -> Page[LoanResponse]:
        """대여 목록 조회 (필터 + 페이지네이션) — Filtered, paginated loan listing."""
        query = loan_repository.filtered_query(member_id, book_id, active)
        loans, total = await loan_repository.get_paginated(db, query, page, per_page)
        now = datetime.now(timezone.utc)
        return Page[LoanResponse].build(loans, total, page, per_page, lambda loan: self._to_response(loan, now))

    async def return_loan(self, db: AsyncSession, loan_id: UUID) -> LoanResponse:
        """도서 반납 — Mark a loan as returned.

        Raises:
            LoanAlreadyReturnedError: 이미 반납된 대여일 때 (Loan already returned)
        """
        loan = await self._get_detail_or_404(db, loan_id)
        if loan.is_returned:
            raise LoanAlreadyReturnedError(loan.id)
        loan.return_date = datetime.now(timezone.utc)
        await db.flush()
        return self._to_response(loan)

    async def find_overdue(self, db: AsyncSession) -> list[LoanResponse]:
        now = datetime.now(timezone.utc)
        return [self._to_response(loan, now) for loan in await loan_repository.find_overdue(db, now)]


# 싱글턴 인스턴스 — Singleton instance
loan_service: LoanService = LoanService(settings.LOAN_PERIOD_DAYS)
