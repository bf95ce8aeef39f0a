"""회원 관련 Pydantic 요청/응답 스키마 정의.

Member Pydantic request/response schema definitions, including the
loan-limit summary derived from the membership tier.
"""

from datetime import datetime

from pydantic import BaseModel, EmailStr, Field, field_validator

from bookstore.models.member import MembershipType


def strip_name(value: str) -> str:
    """앞뒤 공백 제거 후 길이 재검증 — Strip, then enforce the 2-character minimum."""
    value = value.strip()
    if len(value) < 2:
        raise ValueError("name must be at least 2 characters")
    return value


class MemberCreate(BaseModel):
    """회원 가입 요청 스키마.

    Member registration request schema.

    Attributes:
        name: 회원 이름, 2~50자 (Name, 2-50 chars)
        email: 이메일 (Email, unique)
        membership_type: 멤버십 등급, 기본 REGULAR (Tier, default REGULAR)
    """

    name: str = Field(min_length=2, max_length=50)
    email: EmailStr
    membership_type: MembershipType = MembershipType.REGULAR

    @field_validator("name")
    @classmethod
    def _strip_name(cls, value: str) -> str:
        return strip_name(value)


class MemberUpdate(BaseModel):
    """회원 정보 수정 요청 스키마 (부분 업데이트).

    Member update request schema (partial update).
    Membership tier changes go through the upgrade endpoint instead.
    """

    name: str | None = Field(default=None, min_length=2, max_length=50)  # 변경할 이름 (New name, optional)
    email: EmailStr | None = None  # 변경할 이메일 (New email, optional)

    @field_validator("name")
    @classmethod
    def _strip_name(cls, value: str | None) -> str | None:
        if value is None:
            return None
        return strip_name(value)


class MemberResponse(BaseModel):
    """회원 응답 스키마 — Member response schema returned from API."""

    id: str  # 회원 UUID 문자열 (Member UUID as string)
    name: str
    email: str
    membership_type: MembershipType
    join_date: datetime  # 가입 일시 UTC (Join timestamp)


class MemberLoanLimitInfo(BaseModel):
    """회원 대여 제한 정보.

    Member loan-limit summary.

    Attributes:
        max_loan_count: 최대 대여 가능 권수 (Tier limit)
        current_loan_count: 현재 대여 중인 권수 (Active loans)
        remaining_loan_count: 남은 대여 가능 권수 (max(0, max - current))
        can_loan: 대여 가능 여부 (False when suspended or no remaining slots)
    """

    member_id: str
    member_name: str
    membership_type: MembershipType
    max_loan_count: int
    current_loan_count: int
    remaining_loan_count: int
    can_loan: bool

    @classmethod
    def of(
        cls,
        member_id: str,
        member_name: str,
        membership_type: MembershipType,
        current_loan_count: int,
    ) -> "MemberLoanLimitInfo":
        """등급과 현재 대여 수로 제한 정보 계산 — Derive the summary from tier and active loans."""
        max_count = membership_type.max_loan_count
        remaining = max(0, max_count - current_loan_count)
        return cls(
            member_id=member_id,
            member_name=member_name,
            membership_type=membership_type,
            max_loan_count=max_count,
            current_loan_count=current_loan_count,
            remaining_loan_count=remaining,
            can_loan=membership_type != MembershipType.SUSPENDED and remaining > 0,
        )
