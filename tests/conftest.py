"""테스트 인프라 — 인메모리 SQLite DB, 세션, httpx 클라이언트 픽스처.

Test infrastructure — In-memory SQLite database, session and httpx client
fixtures. Each test gets a fresh schema on its own engine, so no cleanup
between tests is needed. Set TEST_DATABASE_URL to run against another
async database.
"""

import os
from collections.abc import AsyncGenerator, Awaitable, Callable
from decimal import Decimal
from typing import Any

import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from bookstore.database import Base, enable_sqlite_foreign_keys, get_db
from bookstore.main import app
from bookstore.models import *  # noqa: F401,F403 — register all models with metadata
from bookstore.models.book import Book
from bookstore.models.member import Member, MembershipType
from bookstore.services.email_service import email_service

# ---------------------------------------------------------------------------
# 테스트 DB 설정
# ---------------------------------------------------------------------------
TEST_DATABASE_URL = os.environ.get("TEST_DATABASE_URL", "sqlite+aiosqlite:///:memory:")


# ---------------------------------------------------------------------------
# Function-scoped: 엔진, 세션, 클라이언트
# ---------------------------------------------------------------------------
@pytest_asyncio.fixture
async def engine() -> AsyncGenerator[AsyncEngine, None]:
    """테스트용 async 엔진. 매 테스트마다 스키마를 새로 생성합니다."""
    if TEST_DATABASE_URL.startswith("sqlite"):
        # 인메모리 DB는 연결 하나를 공유해야 함 — one shared connection keeps the DB alive
        eng = create_async_engine(
            TEST_DATABASE_URL,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
        enable_sqlite_foreign_keys(eng)
    else:
        eng = create_async_engine(TEST_DATABASE_URL)

    async with eng.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield eng

    async with eng.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await eng.dispose()


@pytest_asyncio.fixture
async def db(engine: AsyncEngine) -> AsyncGenerator[AsyncSession, None]:
    """각 테스트에 격리된 DB 세션을 제공합니다."""
    factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with factory() as session:
        yield session
        await session.rollback()


@pytest_asyncio.fixture
async def client(db: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """FastAPI 테스트 클라이언트 — DB 세션을 오버라이드합니다."""
    async def _override_get_db() -> AsyncGenerator[AsyncSession, None]:
        yield db

    app.dependency_overrides[get_db] = _override_get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest_asyncio.fixture(autouse=True)
async def clear_sent_emails() -> AsyncGenerator[None, None]:
    """공용 MockEmailService 발송 기록 초기화."""
    sent = getattr(email_service, "sent", None)
    if sent is not None:
        sent.clear()
    yield


# ---------------------------------------------------------------------------
# 헬퍼: 테스트용 데이터 생성
# ---------------------------------------------------------------------------
async def make_book(
    db: AsyncSession,
    title: str = "Clean Code",
    author: str = "Robert C. Martin",
    isbn: str = "9780132350884",
    price: str = "33.00",
    available: bool = True,
) -> Book:
    """테스트 도서를 생성합니다."""
    book = Book(title=title, author=author, isbn=isbn, price=Decimal(price), available=available)
    db.add(book)
    await db.flush()
    await db.refresh(book)
    return book


async def make_member(
    db: AsyncSession,
    name: str = "Kim Minsu",
    email: str = "minsu@example.com",
    membership_type: MembershipType = MembershipType.REGULAR,
) -> Member:
    """테스트 회원을 생성합니다."""
    member = Member(name=name, email=email, membership_type=membership_type.value)
    db.add(member)
    await db.flush()
    await db.refresh(member)
    return member


@pytest_asyncio.fixture
async def book(db: AsyncSession) -> Book:
    return await make_book(db)


@pytest_asyncio.fixture
async def second_book(db: AsyncSession) -> Book:
    return await make_book(
        db,
        title="Refactoring",
        author="Martin Fowler",
        isbn="9780134757599",
        price="41.50",
    )


@pytest_asyncio.fixture
async def member(db: AsyncSession) -> Member:
    return await make_member(db)


@pytest_asyncio.fixture
async def book_factory(db: AsyncSession) -> Callable[..., Awaitable[Book]]:
    """추가 도서 생성기 — make_book(db, **kwargs) bound to the test session."""
    async def _make(**kwargs: Any) -> Book:
        return await make_book(db, **kwargs)

    return _make


@pytest_asyncio.fixture
async def member_factory(db: AsyncSession) -> Callable[..., Awaitable[Member]]:
    async def _make(**kwargs: Any) -> Member:
        return await make_member(db, **kwargs)

    return _make
