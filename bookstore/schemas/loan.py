"""대여 관련 Pydantic 요청/응답 스키마 정의.

Loan Pydantic request/response schema definitions.
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel


class LoanCreate(BaseModel):
    """도서 대여 요청 스키마.

    Loan creation request schema.

    Attributes:
        member_id: 대여 회원 UUID (Borrowing member)
        book_id: 대여 도서 UUID (Book to borrow)
    """

    member_id: UUID
    book_id: UUID


class LoanResponse(BaseModel):
    """대여 응답 스키마.

    Loan response schema. ``overdue`` is computed at read time.
    """

    id: str
    member_id: str
    member_name: str
    book_id: str
    book_title: str
    loan_date: datetime
    due_date: datetime
    return_date: datetime | None  # 반납 일시, 대여 중이면 null
    returned: bool
    overdue: bool  # 미반납 상태로 반납 예정일 경과 (Unreturned and past due)
