"""대여 API 테스트 — 대여/반납, 등급별 한도, 연체 조회.

Tests for loan endpoints.
"""

from datetime import datetime, timedelta, timezone
from uuid import uuid4

from httpx import AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from bookstore.models.book import Book
from bookstore.models.loan import Loan
from bookstore.models.member import Member, MembershipType

URL = "/api/loans"


def _parse(value: str) -> datetime:
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


async def _lend(client: AsyncClient, member: Member, book: Book):
    return await client.post(URL, json={"member_id": str(member.id), "book_id": str(book.id)})


class TestLoanCreate:
    async def test_create_loan(self, client: AsyncClient, member: Member, book: Book):
        """대여 성공 — 반납 예정일은 대여일 + 14일."""
        res = await _lend(client, member, book)
        assert res.status_code == 201
        data = res.json()
        assert data["member_name"] == member.name
        assert data["book_title"] == book.title
        assert data["returned"] is False
        assert data["overdue"] is False
        assert data["return_date"] is None
        assert _parse(data["due_date"]) - _parse(data["loan_date"]) == timedelta(days=14)

    async def test_book_already_on_loan(self, client: AsyncClient, member: Member, book: Book, member_factory):
        """대여 중인 도서 — 400 BOOK_NOT_AVAILABLE."""
        await _lend(client, member, book)
        other = await member_factory(name="Second Reader", email="reader2@example.com")
        res = await _lend(client, other, book)
        assert res.status_code == 400
        assert res.json()["code"] == "BOOK_NOT_AVAILABLE"

    async def test_unavailable_book(self, client: AsyncClient, member: Member, book_factory):
        out_of_stock = await book_factory(isbn="9781491950357", available=False)
        res = await _lend(client, member, out_of_stock)
        assert res.status_code == 400
        assert res.json()["code"] == "BOOK_NOT_AVAILABLE"

    async def test_deleted_book(self, client: AsyncClient, member: Member, book: Book):
        await client.delete(f"/api/books/{book.id}")
        res = await _lend(client, member, book)
        assert res.status_code == 404

    async def test_missing_member(self, client: AsyncClient, book: Book):
        res = await client.post(URL, json={"member_id": str(uuid4()), "book_id": str(book.id)})
        assert res.status_code == 404
        assert "Member" in res.json()["message"]

    async def test_suspended_member(self, client: AsyncClient, book: Book, member_factory):
        """정지 회원 — 400 LOAN_LIMIT_EXCEEDED."""
        suspended = await member_factory(email="banned@example.com", membership_type=MembershipType.SUSPENDED)
        res = await _lend(client, suspended, book)
        assert res.status_code == 400
        assert res.json()["code"] == "LOAN_LIMIT_EXCEEDED"

    async def test_regular_limit(self, client: AsyncClient, member: Member, book_factory):
        """REGULAR 회원 6번째 대여 — 한도 초과."""
        books = [await book_factory(title=f"Volume {i}", isbn=f"979000000000{i}") for i in range(6)]
        for b in books[:5]:
            assert (await _lend(client, member, b)).status_code == 201
        res = await _lend(client, member, books[5])
        assert res.status_code == 400
        assert res.json()["code"] == "LOAN_LIMIT_EXCEEDED"

    async def test_premium_beyond_regular_limit(self, client: AsyncClient, book_factory, member_factory):
        premium = await member_factory(email="vip@example.com", membership_type=MembershipType.PREMIUM)
        books = [await book_factory(title=f"Volume {i}", isbn=f"979000000000{i}") for i in range(6)]
        for b in books:
            assert (await _lend(client, premium, b)).status_code == 201


class TestLoanReturn:
    async def test_return(self, client: AsyncClient, member: Member, book: Book):
        """반납 — returned True, 반납 일시 기록."""
        loan = (await _lend(client, member, book)).json()
        res = await client.post(f"{URL}/{loan['id']}/return")
        assert res.status_code == 200
        data = res.json()
        assert data["returned"] is True
        assert data["return_date"] is not None

    async def test_return_twice(self, client: AsyncClient, member: Member, book: Book):
        loan = (await _lend(client, member, book)).json()
        await client.post(f"{URL}/{loan['id']}/return")
        res = await client.post(f"{URL}/{loan['id']}/return")
        assert res.status_code == 400
        assert res.json()["code"] == "LOAN_ALREADY_RETURNED"

    async def test_book_lendable_after_return(self, client: AsyncClient, member: Member, book: Book, member_factory):
        """반납된 도서는 다시 대여 가능."""
        loan = (await _lend(client, member, book)).json()
        await client.post(f"{URL}/{loan['id']}/return")
        other = await member_factory(name="Next Reader", email="next@example.com")
        assert (await _lend(client, other, book)).status_code == 201

    async def test_return_missing_loan(self, client: AsyncClient):
        res = await client.post(f"{URL}/{uuid4()}/return")
        assert res.status_code == 404


class TestLoanList:
    async def test_filter_by_active(self, client: AsyncClient, member: Member, book: Book, second_book: Book):
        """대여 중/반납 완료 필터."""
        first = (await _lend(client, member, book)).json()
        await _lend(client, member, second_book)
        await client.post(f"{URL}/{first['id']}/return")

        active = (await client.get(URL, params={"active": "true"})).json()
        assert [loan["book_id"] for loan in active["items"]] == [str(second_book.id)]

        returned = (await client.get(URL, params={"active": "false"})).json()
        assert [loan["id"] for loan in returned["items"]] == [first["id"]]

    async def test_filter_by_member(self, client: AsyncClient, member: Member, book: Book, second_book: Book, member_factory):
        other = await member_factory(name="Other Reader", email="other@example.com")
        await _lend(client, member, book)
        await _lend(client, other, second_book)

        data = (await client.get(URL, params={"member_id": str(other.id)})).json()
        assert data["total"] == 1
        assert data["items"][0]["member_name"] == "Other Reader"

    async def test_overdue(self, client: AsyncClient, db: AsyncSession, member: Member, book: Book, second_book: Book):
        """연체 조회 — 미반납 + 반납 예정일 경과."""
        now = datetime.now(timezone.utc)
        late = Loan(
            member_id=member.id,
            book_id=book.id,
            loan_date=now - timedelta(days=20),
            due_date=now - timedelta(days=6),
        )
        db.add(late)
        await db.flush()
        await _lend(client, member, second_book)

        res = await client.get(f"{URL}/overdue")
        data = res.json()
        assert [loan["id"] for loan in data] == [str(late.id)]
        assert data[0]["overdue"] is True

        detail = (await client.get(f"{URL}/{late.id}")).json()
        assert detail["overdue"] is True

    async def test_get_missing_loan(self, client: AsyncClient):
        res = await client.get(f"{URL}/{uuid4()}")
        assert res.status_code == 404
