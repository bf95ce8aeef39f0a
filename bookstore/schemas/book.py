"""도서 관련 Pydantic 요청/응답 스키마 정의.

Book Pydantic request/response schema definitions.
Covers creation, partial update, search filters and statistics.
"""

import re
from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, Field, field_validator

# ISBN-10 (마지막 자리 X 허용) 또는 ISBN-13 — hyphens/spaces are ignored
_ISBN_10 = re.compile(r"^\d{9}[\dX]$")
_ISBN_13 = re.compile(r"^\d{13}$")


def normalize_isbn(value: str) -> str:
    """하이픈/공백 제거 — Compact form used for storage and lookups."""
    return re.sub(r"[-\s]", "", value).upper()


def validate_isbn(value: str) -> str:
    """ISBN 형식 검증 — Validate ISBN-10/13 format and return the compact form."""
    compact = normalize_isbn(value)
    if not (_ISBN_10.match(compact) or _ISBN_13.match(compact)):
        raise ValueError("ISBN must contain 10 or 13 digits")
    return compact


class BookCreate(BaseModel):
    """도서 등록 요청 스키마.

    Book creation request schema.

    Attributes:
        title: 도서 제목 (Title, required)
        author: 저자 (Author, required)
        isbn: ISBN-10 또는 ISBN-13 (ISBN-10 or ISBN-13)
        price: 가격, 0 이상 (Price, non-negative)
        available: 재고 여부 (Availability flag, default True)
    """

    title: str = Field(min_length=1, max_length=200)
    author: str = Field(min_length=1, max_length=100)
    isbn: str = Field(max_length=20)
    price: Decimal = Field(ge=0, max_digits=10, decimal_places=2)
    available: bool = True

    @field_validator("title", "author")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be blank")
        return value.strip()

    @field_validator("isbn")
    @classmethod
    def _isbn(cls, value: str) -> str:
        return validate_isbn(value)


class BookUpdate(BaseModel):
    """도서 수정 요청 스키마 (부분 업데이트).

    Book update request schema (partial update).
    """

    title: str | None = Field(default=None, min_length=1, max_length=200)  # 변경할 제목 (New title, optional)
    author: str | None = Field(default=None, min_length=1, max_length=100)  # 변경할 저자 (New author, optional)
    isbn: str | None = Field(default=None, max_length=20)  # 변경할 ISBN (New ISBN, optional)
    price: Decimal | None = Field(default=None, ge=0, max_digits=10, decimal_places=2)  # 변경할 가격
    available: bool | None = None  # 재고 상태 변경 (Availability toggle, optional)

    @field_validator("title", "author")
    @classmethod
    def _not_blank(cls, value: str | None) -> str | None:
        if value is None:
            return None
        if not value.strip():
            raise ValueError("must not be blank")
        return value.strip()

    @field_validator("isbn")
    @classmethod
    def _isbn(cls, value: str | None) -> str | None:
        return validate_isbn(value) if value is not None else None


class BookResponse(BaseModel):
    """도서 응답 스키마.

    Book response schema returned from API.
    """

    id: str  # 도서 UUID 문자열 (Book UUID as string)
    title: str
    author: str
    isbn: str
    price: Decimal
    available: bool
    created_at: datetime  # 생성 일시 UTC (Creation timestamp)
    updated_at: datetime | None = None
    deleted_at: datetime | None = None  # 삭제 일시, 활성 도서는 null


class BookSearchParams(BaseModel):
    """도서 복합 검색 조건 — Combined search filters (all optional)."""

    title: str | None = None
    author: str | None = None
    keyword: str | None = None
    min_price: Decimal | None = Field(default=None, ge=0)
    max_price: Decimal | None = Field(default=None, ge=0)
    available: bool | None = None


class BookStatistics(BaseModel):
    """도서 통계 응답 — Book counts."""

    total_books: int  # 전체 도서 수 (including deleted)
    active_books: int  # 활성 도서 수
    deleted_books: int  # 삭제된 도서 수
