"""회원 레포지토리 — 회원 CRUD 및 검색 쿼리.

Member Repository — CRUD and search queries for members.
"""

from sqlalchemy import Select, select
from sqlalchemy.ext.asyncio import AsyncSession

from bookstore.models.member import Member, MembershipType
from bookstore.repositories.base import BaseRepository


class MemberRepository(BaseRepository[Member]):
    """회원 테이블에 대한 데이터베이스 쿼리를 담당하는 레포지토리.

    Repository handling database queries for the members table.
    Emails are stored lower-cased, so lookups compare against the
    normalized value.
    """

    def __init__(self) -> None:
        super().__init__(Member)

    async def get_by_email(self, db: AsyncSession, email: str) -> Member | None:
        """이메일로 회원 조회 — Lookup by (normalized) email.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            email: 조회할 이메일 (Email to look up)

        Returns:
            Member | None: 조회된 회원 또는 None (Found member or None)
        """
        result = await db.execute(select(Member).where(Member.email == email.strip().lower()))
        return result.scalar_one_or_none()

    async def email_exists(self, db: AsyncSession, email: str) -> bool:
        return await self.exists(db, {"email": email.strip().lower()})

    async def search_by_name(self, db: AsyncSession, name: str) -> list[Member]:
        """이름 부분 일치 검색 (대소문자 무시) — Case-insensitive name search."""
        query: Select = (
            select(Member)
            .where(Member.name.icontains(name, autoescape=True))
            .order_by(Member.name)
        )
        return list((await db.execute(query)).scalars().all())

    async def find_by_membership_type(
        self,
        db: AsyncSession,
        membership_type: MembershipType,
    ) -> list[Member]:
        query: Select = (
            select(Member)
            .where(Member.membership_type == membership_type.value)
            .order_by(Member.join_date)
        )
        return list((await db.execute(query)).scalars().all())

    def list_query(self) -> Select:
        """회원 목록 페이지 조회용 쿼리 — Newest members first."""
        return select(Member).order_by(Member.join_date.desc(), Member.id)


# 싱글턴 인스턴스 — Singleton instance
member_repository: MemberRepository = MemberRepository()
