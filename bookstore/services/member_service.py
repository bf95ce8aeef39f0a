"""회원 서비스 — 회원 CRUD, 멤버십 등급 및 대여 한도 비즈니스 로직.

Member Service — Business logic for members: registration, profile
updates, membership upgrades and loan-limit lookups. Registration and
upgrades publish domain events.
"""

from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from bookstore.events.events import MemberRegistered, MembershipUpgraded
from bookstore.events.publisher import EventPublisher, publisher
from bookstore.models.member import Member, MembershipType
from bookstore.repositories.loan_repository import loan_repository
from bookstore.repositories.member_repository import member_repository
from bookstore.schemas.member import (
    MemberCreate,
    MemberLoanLimitInfo,
    MemberResponse,
    MemberUpdate,
)
from bookstore.utils.exceptions import (
    DuplicateEmailError,
    MemberHasActiveLoansError,
    MembershipUpgradeError,
    NotFoundError,
)
from bookstore.utils.logger import log_calls
from bookstore.utils.pagination import Page


def normalize_email(email: str) -> str:
    """이메일 정규화 (공백 제거, 소문자) — Trim and lower-case an email."""
    return email.strip().lower()


@log_calls("SERVICE")
class MemberService:
    """회원 관련 비즈니스 로직을 처리하는 서비스.

    Service handling member business logic.

    Args:
        events: 도메인 이벤트 발행기 (Domain event publisher)
    """

    def __init__(self, events: EventPublisher) -> None:
        self._events = events

    def _to_response(self, member: Member) -> MemberResponse:
        return MemberResponse(
            id=str(member.id),
            name=member.name,
            email=member.email,
            membership_type=member.tier,
            join_date=member.join_date,
        )

    async def _get_or_404(self, db: AsyncSession, member_id: UUID) -> Member:
        member: Member | None = await member_repository.get_by_id(db, member_id)
        if member is None:
            raise NotFoundError("Member", member_id)
        return member

    async def register(self, db: AsyncSession, data: MemberCreate) -> MemberResponse:
        """신규 회원을 등록합니다.

        Register a new member and publish ``MemberRegistered``.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            data: 회원 가입 데이터 (Registration data)

        Returns:
            MemberResponse: 생성된 회원 응답 (Created member response)

        Raises:
            DuplicateEmailError: 이메일이 이미 사용 중일 때 (Email already registered)
        """
        email = normalize_email(data.email)
        if await member_repository.email_exists(db, email):
            raise DuplicateEmailError(email)

        member: Member = await member_repository.create(
            db,
            {
                "name": data.name,
                "email": email,
                "membership_type": data.membership_type.value,
            },
        )
        await self._events.publish(
            MemberRegistered(member_id=str(member.id), name=member.name, email=member.email)
        )
        return self._to_response(member)

    async def get_member(self, db: AsyncSession, member_id: UUID) -> MemberResponse:
        return self._to_response(await self._get_or_404(db, member_id))

    async def list_members(
        self,
        db: AsyncSession,
        page: int = 1,
        per_page: int = 10,
    ) -> Page[MemberResponse]:
        members, total = await member_repository.get_paginated(
            db, member_repository.list_query(), page, per_page
        )
        return Page[MemberResponse].build(members, total, page, per_page, self._to_response)

    async def update_member(
        self,
        db: AsyncSession,
        member_id: UUID,
        data: MemberUpdate,
    ) -> MemberResponse:
        """회원 정보를 수정합니다 (부분 업데이트).

        Update a member's name and/or email.

        Raises:
            NotFoundError: 회원을 찾을 수 없을 때 (Member not found)
            DuplicateEmailError: 다른 회원이 같은 이메일을 사용 중일 때
                                 (Another member already uses the email)
        """
        member = await self._get_or_404(db, member_id)
        update_data: dict = data.model_dump(exclude_unset=True, exclude_none=True)

        if "email" in update_data:
            update_data["email"] = normalize_email(update_data["email"])
            # 이메일 변경 시 중복 확인 — Check uniqueness when the email changes
            if update_data["email"] != member.email:
                if await member_repository.email_exists(db, update_data["email"]):
                    raise DuplicateEmailError(update_data["email"])

        member = await member_repository.apply(db, member, update_data)
        return self._to_response(member)

    async def delete_member(self, db: AsyncSession, member_id: UUID) -> None:
        """회원 삭제 — 대여 중인 도서가 있으면 거부.

        Delete a member. Refused while the member still has unreturned loans;
        returned loan history is removed with the member.
        """
        member = await self._get_or_404(db, member_id)
        active: int = await loan_repository.count_active_by_member(db, member.id)
        if active > 0:
            raise MemberHasActiveLoansError(member.id, active)
        await member_repository.delete(db, member.id)

    async def search_by_name(self, db: AsyncSession, name: str | None) -> list[MemberResponse]:
        if not name or not name.strip():
            return []
        return [self._to_response(m) for m in await member_repository.search_by_name(db, name.strip())]

    async def find_by_membership_type(
        self,
        db: AsyncSession,
        membership_type: MembershipType,
    ) -> list[MemberResponse]:
        members = await member_repository.find_by_membership_type(db, membership_type)
        return [self._to_response(m) for m in members]

    async def upgrade_membership(
        self,
        db: AsyncSession,
        member_id: UUID,
        target: MembershipType,
    ) -> MemberResponse:
        """멤버십 업그레이드.

        Upgrade a member's tier. Only REGULAR → PREMIUM is allowed;
        suspended members, same-tier requests and any other transition are
        refused. Publishes ``MembershipUpgraded`` on success.

        Raises:
            MembershipUpgradeError: 허용되지 않는 등급 변경 (Transition not allowed)
        """
        member = await self._get_or_404(db, member_id)
        current: MembershipType = member.tier

        if not (current == MembershipType.REGULAR and target == MembershipType.PREMIUM):
            raise MembershipUpgradeError(current.value, target.value)

        member = await member_repository.apply(db, member, {"membership_type": target.value})
        await self._events.publish(
            MembershipUpgraded(
                member_id=str(member.id),
                previous_type=current.value,
                new_type=target.value,
            )
        )
        return self._to_response(member)

    async def is_email_available(self, db: AsyncSession, email: str) -> bool:
        """이메일 사용 가능 여부 — True when no member uses the email."""
        return not await member_repository.email_exists(db, normalize_email(email))

    async def get_loan_limit_info(self, db: AsyncSession, member_id: UUID) -> MemberLoanLimitInfo:
        member = await self._get_or_404(db, member_id)
        current: int = await loan_repository.count_active_by_member(db, member.id)
        return MemberLoanLimitInfo.of(str(member.id), member.name, member.tier, current)


# 싱글턴 인스턴스 — Singleton instance
member_service: MemberService = MemberService(publisher)
