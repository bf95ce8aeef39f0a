"""대여 라우터 — 도서 대여/반납 및 연체 조회 엔드포인트.

Loan Router — Lend, return and overdue listing endpoints.
"""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from bookstore.api.deps import Pagination, get_pagination
from bookstore.database import get_db
from bookstore.schemas.loan import LoanCreate, LoanResponse
from bookstore.services.loan_service import loan_service
from bookstore.utils.pagination import Page

router: APIRouter = APIRouter()


@router.post("", response_model=LoanResponse, status_code=201)
async def create_loan(
    data: LoanCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> LoanResponse:
    """도서 대여. 등급별 한도 초과 또는 대여 불가 도서는 400.

    Lend a book to a member. Tier limit or unavailable book returns 400.
    """
    result: LoanResponse = await loan_service.create_loan(db, data)
    await db.commit()
    return result


@router.get("", response_model=Page[LoanResponse])
async def list_loans(
    db: Annotated[AsyncSession, Depends(get_db)],
    paging: Annotated[Pagination, Depends(get_pagination)],
    member_id: Annotated[UUID | None, Query(description="회원 ID 필터")] = None,
    book_id: Annotated[UUID | None, Query(description="도서 ID 필터")] = None,
    active: Annotated[bool | None, Query(description="true=대여 중, false=반납 완료")] = None,
) -> Page[LoanResponse]:
    return await loan_service.list_loans(db, member_id, book_id, active, paging.page, paging.per_page)


@router.get("/overdue", response_model=list[LoanResponse])
async def list_overdue_loans(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> list[LoanResponse]:
    """연체 대여 목록 — Unreturned loans past their due date."""
    return await loan_service.find_overdue(db)


@router.get("/{loan_id}", response_model=LoanResponse)
async def get_loan(
    loan_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> LoanResponse:
    return await loan_service.get_loan(db, loan_id)


@router.post("/{loan_id}/return", response_model=LoanResponse)
async def return_loan(
    loan_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> LoanResponse:
    """도서 반납. 이미 반납된 대여는 400.

    Return a loaned book; an already returned loan returns 400.
    """
    result: LoanResponse = await loan_service.return_loan(db, loan_id)
    await db.commit()
    return result
