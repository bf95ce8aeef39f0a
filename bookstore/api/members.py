"""회원 라우터 — 회원 CRUD, 멤버십 및 대여 한도 엔드포인트.

Member Router — CRUD, membership upgrade and loan-limit endpoints.
"""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from bookstore.api.deps import Pagination, get_pagination
from bookstore.database import get_db
from bookstore.models.member import MembershipType
from bookstore.schemas.member import (
    MemberCreate,
    MemberLoanLimitInfo,
    MemberResponse,
    MemberUpdate,
)
from bookstore.services.member_service import member_service
from bookstore.utils.pagination import Page

router: APIRouter = APIRouter()


@router.post("", response_model=MemberResponse, status_code=201)
async def create_member(
    data: MemberCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> MemberResponse:
    """신규 회원 등록. 이메일 중복 시 409.

    Register a new member. Duplicate email returns 409.
    """
    result: MemberResponse = await member_service.register(db, data)
    await db.commit()
    return result


@router.get("", response_model=Page[MemberResponse])
async def list_members(
    db: Annotated[AsyncSession, Depends(get_db)],
    paging: Annotated[Pagination, Depends(get_pagination)],
) -> Page[MemberResponse]:
    return await member_service.list_members(db, paging.page, paging.per_page)


@router.get("/search", response_model=list[MemberResponse])
async def search_members(
    db: Annotated[AsyncSession, Depends(get_db)],
    name: str = "",
) -> list[MemberResponse]:
    """이름 검색 (대소문자 무시) — Case-insensitive name search."""
    return await member_service.search_by_name(db, name)


@router.get("/membership/{membership_type}", response_model=list[MemberResponse])
async def list_by_membership(
    membership_type: MembershipType,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> list[MemberResponse]:
    return await member_service.find_by_membership_type(db, membership_type)


@router.get("/email/validate", response_model=bool)
async def validate_email(
    email: str,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> bool:
    """이메일 사용 가능 여부 — True when the email is not yet registered."""
    return await member_service.is_email_available(db, email)


@router.get("/{member_id}", response_model=MemberResponse)
async def get_member(
    member_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> MemberResponse:
    return await member_service.get_member(db, member_id)


@router.put("/{member_id}", response_model=MemberResponse)
async def update_member(
    member_id: UUID,
    data: MemberUpdate,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> MemberResponse:
    """회원 정보 수정 (이름/이메일) — Update name and/or email."""
    result: MemberResponse = await member_service.update_member(db, member_id, data)
    await db.commit()
    return result


@router.delete("/{member_id}", status_code=204)
async def delete_member(
    member_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> None:
    """회원 삭제. 대여 중인 도서가 있으면 400.

    Delete a member; refused while the member has unreturned loans.
    """
    await member_service.delete_member(db, member_id)
    await db.commit()


@router.put("/{member_id}/membership", response_model=MemberResponse)
async def upgrade_membership(
    member_id: UUID,
    membership_type: MembershipType,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> MemberResponse:
    """멤버십 업그레이드 (REGULAR → PREMIUM만 허용).

    Upgrade membership. Only REGULAR to PREMIUM is allowed.
    """
    result: MemberResponse = await member_service.upgrade_membership(db, member_id, membership_type)
    await db.commit()
    return result


@router.get("/{member_id}/loan-limit", response_model=MemberLoanLimitInfo)
async def get_loan_limit(
    member_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> MemberLoanLimitInfo:
    return await member_service.get_loan_limit_info(db, member_id)
