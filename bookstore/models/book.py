"""도서 관련 SQLAlchemy ORM 모델 정의.

Book SQLAlchemy ORM model definition.
Books are never physically removed through the API; they are soft-deleted
by stamping ``deleted_at`` and can be restored later.

Tables:
    - books: 도서 카탈로그 (Book catalogue)
"""

import uuid
from datetime import datetime, timezone
from decimal import Decimal

from sqlalchemy import Boolean, CheckConstraint, DateTime, Numeric, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from bookstore.database import Base


class Book(Base):
    """도서 모델 — 판매/대여 대상 도서 정보.

    Book model — Catalogue entry that can be ordered or loaned.

    Attributes:
        id: 고유 식별자 UUID (Unique identifier)
        title: 도서 제목 (Title, required)
        author: 저자 (Author, required)
        isbn: ISBN 코드 (ISBN, globally unique)
        price: 판매 가격 (Unit price, non-negative)
        available: 재고 여부 (Availability flag)
        created_at: 생성 일시 UTC (Creation timestamp)
        updated_at: 수정 일시 UTC (Last update timestamp)
        deleted_at: 삭제 일시 UTC, None이면 활성 (Soft-delete timestamp, None = active)
    """

    __tablename__ = "books"

    # 도서 고유 식별자 — Book unique identifier (UUID v4, auto-generated)
    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    # 도서 제목 — Book title
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    # 저자 — Author name
    author: Mapped[str] = mapped_column(String(100), nullable=False)
    # ISBN — 전역 고유 (Globally unique)
    isbn: Mapped[str] = mapped_column(String(20), unique=True, nullable=False, index=True)
    # 가격 — Unit price (소수점 2자리)
    price: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    # 재고 여부 — Whether the book can currently be ordered/loaned
    available: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    # 생성 일시 — Record creation timestamp (UTC)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))
    # 수정 일시 — Last modification timestamp (UTC, auto-updated)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), onupdate=lambda: datetime.now(timezone.utc))
    # 삭제 일시 — Soft-delete marker (NULL = active)
    deleted_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    __table_args__ = (
        CheckConstraint("price >= 0", name="ck_books_price_non_negative"),
    )

    @property
    def is_deleted(self) -> bool:
        """소프트 삭제 여부 — Whether the book is soft-deleted."""
        return self.deleted_at is not None

    def mark_deleted(self) -> None:
        self.deleted_at = datetime.now(timezone.utc)

    def restore(self) -> None:
        self.deleted_at = None
