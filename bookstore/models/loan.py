"""대여 관련 SQLAlchemy ORM 모델 정의.

Loan SQLAlchemy ORM model definition.
A loan is active while ``return_date`` is NULL.

Tables:
    - loans: 도서 대여 기록 (Book loan records)
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import DateTime, ForeignKey, Index, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from bookstore.database import Base


class Loan(Base):
    """대여 모델 — 회원의 도서 대여 이력.

    Loan model — One member borrowing one book.

    Attributes:
        id: 고유 식별자 UUID (Unique identifier)
        member_id: 대여 회원 FK (Borrowing member)
        book_id: 대여 도서 FK (Borrowed book)
        loan_date: 대여 일시 (Loan timestamp)
        due_date: 반납 예정 일시 (Due timestamp)
        return_date: 반납 일시, None이면 대여 중 (Return timestamp, None = active)
    """

    __tablename__ = "loans"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    # 대여 회원 FK — CASCADE: 회원 삭제 시 대여 이력도 삭제
    member_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("members.id", ondelete="CASCADE"), nullable=False)
    # 대여 도서 FK — 도서는 소프트 삭제만 되므로 RESTRICT
    book_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("books.id", ondelete="RESTRICT"), nullable=False)
    loan_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))
    due_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    return_date: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    __table_args__ = (
        Index("ix_loans_member_return", "member_id", "return_date"),
        Index("ix_loans_book_return", "book_id", "return_date"),
    )

    # 관계 — Relationships
    member = relationship("Member", back_populates="loans")
    book = relationship("Book")

    @property
    def is_returned(self) -> bool:
        return self.return_date is not None
