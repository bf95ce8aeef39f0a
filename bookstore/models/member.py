"""회원 관련 SQLAlchemy ORM 모델 정의.

Member SQLAlchemy ORM model definition and the membership tier enum.

Tables:
    - members: 도서 대여/구매 회원 (Library/bookstore members)
"""

import enum
import uuid
from datetime import datetime, timezone

from sqlalchemy import DateTime, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from bookstore.database import Base


class MembershipType(str, enum.Enum):
    """멤버십 등급 — 등급별 최대 대여 권수를 결정.

    Membership tier. Governs how many books a member may have on loan.
    """

    REGULAR = "REGULAR"
    PREMIUM = "PREMIUM"
    SUSPENDED = "SUSPENDED"

    @property
    def max_loan_count(self) -> int:
        """등급별 최대 대여 권수 — Maximum concurrent loans for this tier."""
        return _MAX_LOAN_COUNT[self]


# 등급별 대여 한도 — Loan limit lookup table
_MAX_LOAN_COUNT: dict[MembershipType, int] = {
    MembershipType.REGULAR: 5,
    MembershipType.PREMIUM: 10,
    MembershipType.SUSPENDED: 0,
}


class Member(Base):
    """회원 모델 — 회원 기본 정보 및 멤버십 등급.

    Member model — Basic member profile with membership tier.

    Attributes:
        id: 고유 식별자 UUID (Unique identifier)
        name: 회원 이름 (Display name)
        email: 이메일, 전역 고유 (Email address, globally unique)
        membership_type: 멤버십 등급 문자열 (MembershipType value)
        join_date: 가입 일시 UTC (Join timestamp)

    Relationships:
        loans: 대여 기록 목록 (Loan history, cascade delete)
    """

    __tablename__ = "members"

    # 회원 고유 식별자 — Member unique identifier (UUID v4, auto-generated)
    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    # 회원 이름 — Member display name
    name: Mapped[str] = mapped_column(String(50), nullable=False)
    # 이메일 — 소문자로 정규화되어 저장 (Stored lower-cased)
    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False, index=True)
    # 멤버십 등급 — "REGULAR" | "PREMIUM" | "SUSPENDED"
    membership_type: Mapped[str] = mapped_column(String(20), default=MembershipType.REGULAR.value, nullable=False)
    # 가입 일시 — Join timestamp (UTC)
    join_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), onupdate=lambda: datetime.now(timezone.utc))

    # 관계 — Relationships
    loans = relationship("Loan", back_populates="member", cascade="all, delete-orphan", passive_deletes=True)

    @property
    def tier(self) -> MembershipType:
        """문자열 컬럼을 Enum으로 변환 — Membership type as enum."""
        return MembershipType(self.membership_type)
