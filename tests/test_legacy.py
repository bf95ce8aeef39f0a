"""레거시 주문 라우터 테스트 — 실패 시 빈 본문 응답.

Tests for the deprecated legacy order router.
"""

from decimal import Decimal
from uuid import uuid4

from httpx import AsyncClient

from bookstore.models.book import Book
from bookstore.services.order_service import order_service

URL = "/api/legacy/orders"


class BrokenMailer:
    async def send_order_confirmation(self, order) -> None:
        raise ConnectionError("smtp down")


class TestLegacyOrders:
    async def test_create_returns_200(self, client: AsyncClient, book: Book):
        """레거시 생성 — 201이 아닌 200."""
        res = await client.post(URL, json={"book_ids": [str(book.id)]})
        assert res.status_code == 200
        assert Decimal(res.json()["total_amount"]) == Decimal("33.00")

    async def test_create_failure_empty_400(self, client: AsyncClient):
        """없는 도서 — 본문 없는 400."""
        res = await client.post(URL, json={"book_ids": [str(uuid4())]})
        assert res.status_code == 400
        assert res.content == b""

    async def test_failed_create_leaves_nothing(self, client: AsyncClient, book: Book):
        await client.post(URL, json={"book_ids": [str(book.id), str(uuid4())]})
        res = await client.get(URL)
        assert res.json()["total"] == 0

    async def test_malformed_id_empty_400(self, client: AsyncClient):
        """잘못된 UUID — 검증 실패도 본문 없는 400."""
        res = await client.post(URL, json={"book_ids": ["not-a-uuid"]})
        assert res.status_code == 400
        assert res.content == b""

    async def test_unreadable_body_empty_400(self, client: AsyncClient):
        res = await client.post(URL, content=b"{not json", headers={"Content-Type": "application/json"})
        assert res.status_code == 400
        assert res.content == b""

    async def test_email_failure_empty_400(self, client: AsyncClient, book: Book, monkeypatch):
        """메일 발송 실패 — 500 대신 본문 없는 400, 주문 롤백."""
        monkeypatch.setattr(order_service, "_emails", BrokenMailer())
        res = await client.post(URL, json={"book_ids": [str(book.id)]})
        assert res.status_code == 400
        assert res.content == b""

        res = await client.get(URL)
        assert res.json()["total"] == 0

    async def test_list_and_get(self, client: AsyncClient, book: Book):
        order = (await client.post(URL, json={"book_ids": [str(book.id)]})).json()

        listed = (await client.get(URL)).json()
        assert [o["id"] for o in listed["items"]] == [order["id"]]

        res = await client.get(f"{URL}/{order['id']}")
        assert res.status_code == 200
        assert res.json()["id"] == order["id"]

    async def test_get_missing_empty_404(self, client: AsyncClient):
        res = await client.get(f"{URL}/{uuid4()}")
        assert res.status_code == 404
        assert res.content == b""

    async def test_marked_deprecated(self, client: AsyncClient):
        """OpenAPI 문서에 deprecated 표시."""
        schema = (await client.get("/openapi.json")).json()
        assert schema["paths"][URL]["post"]["deprecated"] is True
